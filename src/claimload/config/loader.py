"""
Configuration loading utilities.

Supports environment variable interpolation, config inheritance from a
sibling base.yaml, and command-line overrides.
Minimal configs only need: discovery.directory and schema.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from claimload.config.settings import (
    DiscoveryConfig,
    LoaderConfig,
    LoggingConfig,
    OutputConfig,
    ParseConfig,
    SchemaConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _drop_none(obj: dict[str, Any]) -> dict[str, Any]:
    """Remove None values recursively so unset CLI options do not override."""
    result: dict[str, Any] = {}
    for key, value in obj.items():
        if isinstance(value, dict):
            nested = _drop_none(value)
            if nested:
                result[key] = nested
        elif value is not None:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def build_config(data: dict[str, Any]) -> LoaderConfig:
    """
    Build a validated LoaderConfig from a plain mapping.

    Args:
        data: Merged configuration mapping (YAML layout).

    Returns:
        Fully validated LoaderConfig instance.

    Raises:
        ValueError: If required keys are missing or invalid.
    """
    discovery_data = data.get("discovery", {})
    directory = discovery_data.get("directory")
    if not directory:
        msg = "Config must specify 'discovery.directory'"
        raise ValueError(msg)
    discovery = DiscoveryConfig(
        directory=Path(directory),
        suffix=discovery_data.get("suffix", ".csv"),
    )

    parse_data = data.get("parse", {})
    parse = ParseConfig(**parse_data)

    schema_data = data.get("schema")
    if not schema_data:
        msg = "Config must specify 'schema' (a registered 'name' or inline 'columns')"
        raise ValueError(msg)
    table_schema = SchemaConfig(**schema_data)

    output_data = data.get("output", {})
    output = OutputConfig(
        path=Path(output_data["path"]) if output_data.get("path") else None,
    )

    logging_data = data.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        json_output=logging_data.get("json", False),
    )

    return LoaderConfig(
        discovery=discovery,
        parse=parse,
        table_schema=table_schema,
        derive=list(data.get("derive", [])),
        max_workers=data.get("max_workers", 1),
        validate_contract=data.get("validate_contract", True),
        output=output,
        logging=logging_config,
    )


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    base_path: Path | None = None,
) -> LoaderConfig:
    """
    Load loader configuration from YAML file(s) and overrides.

    Minimal config requires only:
        - discovery.directory: path
        - schema.name or schema.columns

    Args:
        config_path: Path to the main configuration file (optional).
        overrides: Values taking precedence over the file, in YAML layout.
            None values are ignored.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated LoaderConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    elif config_path is not None:
        potential_base = config_path.parent / "base.yaml"
        base_data = (
            load_yaml(potential_base)
            if potential_base.exists() and potential_base != config_path
            else {}
        )
    else:
        base_data = {}

    main_data = load_yaml(config_path) if config_path is not None else {}

    merged = _deep_merge(base_data, main_data)
    overrides = _drop_none(overrides or {})
    if "schema" in overrides:
        # A schema override replaces the file's schema block as a whole
        merged.pop("schema", None)
    merged = _deep_merge(merged, overrides)

    return build_config(merged)
