from __future__ import annotations

import json

import jsonschema
import pytest
from jsonschema.exceptions import ValidationError

from sheetplot.config.loader import SCHEMA_PATH

"""Config schema contract test."""


@pytest.fixture(scope="module")
def schema():
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_config_schema_valid_example(schema):
    config = {
        "highlight_field": "latento",
        "palette": ["#ef4444", "#3b82f6"],
        "default_color": "#4f46e5",
        "theme": "light",
        "output_dir": "./out",
        "null_sentinels": ["N/A"],
        "inference": {"endpoint": "https://infer.example", "api_key": None, "timeout_seconds": 10},
    }
    jsonschema.validate(config, schema)


def test_config_schema_empty_document_is_valid(schema):
    jsonschema.validate({}, schema)


@pytest.mark.parametrize(
    "config",
    [
        {"theme": "sepia"},
        {"palette": []},
        {"palette": ["red"]},
        {"highlight_field": ""},
        {"inference": {"timeout_seconds": 0}},
        {"inference": {"model": "x"}},
        {"unknown": 1},
    ],
)
def test_config_schema_rejects(schema, config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, schema)
