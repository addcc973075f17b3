from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import CrawlerConfig
from ..rdf.service import UnsupportedFormatError, normalize_format

"""Config loader.

Responsibilities:
- Resolve the config path: explicit --config > $CRAWLER_CONFIG > config/crawler.yml
- Load YAML, validate against config_schema.json (unknown keys rejected)
- Apply defaults for missing keys
- A missing *default* file is fine (built-in defaults); a missing file that
  was asked for explicitly is a ConfigError
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "resolve_config_path",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/crawler.yml")
CONFIG_ENV_VAR = "CRAWLER_CONFIG"
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing/invalid or data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(explicit: str | None) -> tuple[Path, bool]:
    """Return (path, required). required=False only for the default path."""
    if explicit:
        return Path(explicit), True
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Path | None = None, *, required: bool = True) -> CrawlerConfig:
    if path is None:
        return CrawlerConfig()
    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return CrawlerConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = CrawlerConfig()
    try:
        default_format = normalize_format(data.get("default_format", defaults.default_format))
    except UnsupportedFormatError as e:
        raise ConfigError(f"default_format: {e}") from e
    return CrawlerConfig(
        default_format=default_format,
        instance_namespace=data.get("instance_namespace", defaults.instance_namespace),
        ontology_namespace=data.get("ontology_namespace", defaults.ontology_namespace),
        weight_unit=data.get("weight_unit", defaults.weight_unit),
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
        progress=data.get("progress", defaults.progress),
    )
