from __future__ import annotations
import pytest
from pathlib import Path
from crawler_to_rdf.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    ConfigError,
    load_config,
    resolve_config_path,
)
from crawler_to_rdf.models.config_models import DEFAULT_ONTOLOGY_NS, CrawlerConfig


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.default_format == "NTRIPLES"
    assert cfg.instance_namespace == "http://example.org/lab#"
    assert cfg.ontology_namespace == DEFAULT_ONTOLOGY_NS  # default
    assert cfg.weight_unit == "kg"
    assert cfg.progress is False


def test_load_config_missing_required_file(temp_workdir: Path):
    missing = temp_workdir / "config" / "not_exists.yml"
    with pytest.raises(ConfigError):
        load_config(missing)


def test_load_config_missing_default_file(temp_workdir: Path):
    assert load_config(DEFAULT_CONFIG_PATH, required=False) == CrawlerConfig()


def test_load_config_empty_file(write_config: Path):
    write_config.write_text("", encoding="utf-8")
    assert load_config(write_config) == CrawlerConfig()


def test_load_config_extra_field(write_config: Path):
    # additionalProperties: false
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_wrong_type(write_config: Path):
    write_config.write_text("progress: maybe\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_unsupported_default_format(write_config: Path):
    write_config.write_text("default_format: csv\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "default_format" in str(e.value)


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("default_format: [TTL\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_load_config_root_not_mapping(write_config: Path):
    write_config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_resolve_config_path(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert resolve_config_path(None) == (DEFAULT_CONFIG_PATH, False)
    assert resolve_config_path("x.yml") == (Path("x.yml"), True)
    monkeypatch.setenv(CONFIG_ENV_VAR, "env.yml")
    assert resolve_config_path(None) == (Path("env.yml"), True)
    # --config が環境変数より優先
    assert resolve_config_path("x.yml") == (Path("x.yml"), True)
