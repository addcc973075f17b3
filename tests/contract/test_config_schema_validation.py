from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

from crawler_to_rdf.config.loader import SCHEMA_PATH

"""Config schema contract test."""

EXAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "crawler.example.yml"


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_config_schema_valid_example():
    config = {
        "default_format": "TTL",
        "instance_namespace": "https://orcid.org/0000-0003-4857-1083#",
        "ontology_namespace": "https://github.com/G-Node/neuro-ontology/",
        "weight_unit": "g",
        "error_log_dir": "./logs",
        "progress": True,
    }
    jsonschema.validate(config, _schema())


def test_config_schema_empty_is_valid():
    jsonschema.validate({}, _schema())


def test_shipped_example_config_validates():
    jsonschema.validate(yaml.safe_load(EXAMPLE_CONFIG.read_text(encoding="utf-8")), _schema())


@pytest.mark.parametrize(
    "config",
    [
        {"database": {"host": "localhost"}},
        {"weight_unit": ""},
        {"progress": "yes"},
        {"instance_namespace": 42},
    ],
)
def test_config_schema_rejects(config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, _schema())


def test_sample_config_fixture_validates(sample_config_yaml: str):
    """Test that the sample config from conftest.py validates against schema."""
    jsonschema.validate(yaml.safe_load(sample_config_yaml), _schema())
