#
# config/loader.py
#
"""
Loads xcstream configuration from a TOML file and the environment.
"""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import attrs
import structlog

from xcstream.config.models import GlobalConfig, ParserConfig, XcstreamConfig
from xcstream.exceptions import ConfigurationError
from xcstream.telemetry import StructLogger

log: StructLogger = structlog.get_logger("config.loader")

# Environment variables overriding [parser] settings from the file.
ENV_OVERRIDES = {
    "XCSTREAM_DIALECT": "dialect",
    "XCSTREAM_TOOLCHAIN_VERSION": "toolchain_version",
}


def _build_section(model: type, data: Any, section: str, path: Path) -> Any:
    """Instantiates an attrs model from one TOML table, rejecting unknown keys."""
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Section [{section}] must be a table", path=str(path))

    known = {a.name for a in attrs.fields(model)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) in [{section}]: {unknown}. Valid keys: {sorted(known)}",
            path=str(path),
        )
    try:
        return model(**data)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid value in [{section}]: {e}", path=str(path), details=e) from e


def _apply_env_overrides(parser_data: dict[str, Any]) -> dict[str, Any]:
    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            log.debug("Applying environment override", env_var=env_var, key=key, value=value)
            parser_data[key] = value
    return parser_data


def load_config(config_path: Path | None = None) -> XcstreamConfig:
    """
    Loads and validates the configuration.

    Args:
        config_path: TOML file to read. When None, defaults are used and only
            environment overrides apply.

    Returns:
        The validated configuration.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid TOML, or
            contains unknown keys or invalid values.
    """
    raw: dict[str, Any] = {}
    if config_path is not None:
        log.debug("Loading configuration", path=str(config_path), emoji_key="config")
        try:
            with config_path.open("rb") as f:
                raw = tomllib.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError("Configuration file not found", path=str(config_path), details=e) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML: {e}", path=str(config_path), details=e) from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration: {e}", path=str(config_path), details=e) from e

    path = config_path or Path("<defaults>")
    unknown_sections = sorted(set(raw) - {"global", "parser"})
    if unknown_sections:
        raise ConfigurationError(f"Unknown section(s): {unknown_sections}", path=str(path))

    global_config = _build_section(GlobalConfig, raw.get("global", {}), "global", path)
    parser_section = raw.get("parser", {})
    if not isinstance(parser_section, Mapping):
        raise ConfigurationError("Section [parser] must be a table", path=str(path))
    parser_data = _apply_env_overrides(dict(parser_section))
    parser_config = _build_section(ParserConfig, parser_data, "parser", path)

    config = XcstreamConfig(global_config=global_config, parser=parser_config)
    log.debug(
        "Configuration loaded",
        path=str(path),
        dialect=parser_config.dialect,
        parallel=parser_config.parallel,
    )
    return config

# 🔼⚙️
