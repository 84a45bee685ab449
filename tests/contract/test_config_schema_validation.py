from __future__ import annotations

import json

import jsonschema
import pytest
from jsonschema.exceptions import ValidationError

from krishi_context.config.loader import SCHEMA_PATH

"""Config schema contract test (config/krishi.yml)."""


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_config_schema_valid_example(schema):
    config = {
        "data_directory": "./public/data",
        "ranking_dataset": "top10_crops_kerala",
        "region": "Kerala",
        "language": "ml",
        "database": {
            "host": "localhost",
            "port": 5432,
            "user": "farmer",
            "password": None,
            "database": "krishi",
        },
    }
    jsonschema.validate(config, schema)


def test_config_schema_minimal_example(schema):
    jsonschema.validate({"data_directory": "./data"}, schema)


@pytest.mark.parametrize("config", [
    {},
    {"data_directory": ""},
    {"data_directory": "./data", "language": "ta"},
    {"data_directory": "./data", "database": {"schema": "public"}},
    {"data_directory": "./data", "sheet_mappings": {}},
])
def test_config_schema_rejects(schema, config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, schema)


def test_repository_example_config_is_valid(schema):
    import pathlib

    import yaml

    example = pathlib.Path(__file__).resolve().parents[2] / "config" / "krishi.yml"
    jsonschema.validate(yaml.safe_load(example.read_text(encoding="utf-8")), schema)
