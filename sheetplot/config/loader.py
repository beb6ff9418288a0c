from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..cluster.aggregate import DEFAULT_HIGHLIGHT_FIELD
from ..style.assigner import DEFAULT_COLOR, DEFAULT_PALETTE

"""Config loader.

Responsibilities:
- Load the YAML config (optional: a missing file means all defaults)
- Validate against config_schema.json
- Apply defaults and environment overrides for the inference section

The resulting PlotConfig is passed explicitly into the services; nothing in the
package reads configuration from module-level globals.
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "InferenceConfig",
    "PlotConfig",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/sheetplot.yml")

ENV_API_KEY = "SHEETPLOT_API_KEY"
ENV_ENDPOINT = "SHEETPLOT_INFERENCE_ENDPOINT"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class InferenceConfig:
    """External column-inference service settings (disabled when endpoint or key is missing)."""
    endpoint: str | None = None
    api_key: str | None = None
    timeout_seconds: float = 15.0

    @property
    def enabled(self) -> bool:
        return bool(self.endpoint) and bool(self.api_key)


@dataclass(frozen=True)
class PlotConfig:
    highlight_field: str = DEFAULT_HIGHLIGHT_FIELD
    palette: tuple[str, ...] = DEFAULT_PALETTE
    default_color: str = DEFAULT_COLOR
    theme: str = "light"
    output_dir: str = "./out"
    null_sentinels: frozenset[str] = frozenset()  # upper-cased
    inference: InferenceConfig = field(default_factory=InferenceConfig)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the data
            violates the schema (unknown keys, wrong types, bad colors).
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


def _inference_from(raw: dict[str, Any]) -> InferenceConfig:
    # Environment wins over the file so keys can stay out of version control
    endpoint = os.getenv(ENV_ENDPOINT) or raw.get("endpoint")
    api_key = os.getenv(ENV_API_KEY) or raw.get("api_key")
    timeout = raw.get("timeout_seconds", InferenceConfig.timeout_seconds)
    return InferenceConfig(endpoint=endpoint, api_key=api_key, timeout_seconds=float(timeout))


def load_config(path: Path | None = None) -> PlotConfig:
    """Load and validate the configuration.

    With ``path=None`` the default location is used and may be absent. An
    explicitly given path must exist.
    """
    explicit = path is not None
    cfg_path = path if path is not None else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if explicit:
            raise ConfigError(f"config file not found: {cfg_path}")
        data: dict[str, Any] = {}
    else:
        try:
            data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid yaml: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"config root must be a mapping: {cfg_path}")

    _validate_config_schema(data)

    return PlotConfig(
        highlight_field=data.get("highlight_field", DEFAULT_HIGHLIGHT_FIELD),
        palette=tuple(data.get("palette", DEFAULT_PALETTE)),
        default_color=data.get("default_color", DEFAULT_COLOR),
        theme=data.get("theme", "light"),
        output_dir=data.get("output_dir", "./out"),
        null_sentinels=frozenset(s.strip().upper() for s in data.get("null_sentinels", [])),
        inference=_inference_from(data.get("inference") or {}),
    )
