#
# config/models.py
#
"""
Attrs-based data models for xcstream configuration structure.
"""

import logging
from typing import Any

from attrs import define, field, validators


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging._nameToLevel.keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_positive_int(inst: Any, attr: Any, value: int) -> None:
    """Validator ensures integer is positive."""
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ValueError(f"Field '{attr.name}' must be positive integer, got {value}")


DIALECT_CHOICES = ("auto", "darwin", "linux", "non-darwin")


def _validate_dialect(inst: Any, attr: Any, value: str) -> None:
    """Validator for output dialect names."""
    if value.lower() not in DIALECT_CHOICES:
        raise ValueError(f"Invalid dialect '{value}'. Must be one of {list(DIALECT_CHOICES)}.")


# --- Parser and Global Config Models ---
@define(frozen=True, slots=True)
class ParserConfig:
    """Settings controlling how test output is parsed."""
    dialect: str = field(default="auto", validator=[validators.instance_of(str), _validate_dialect])
    # Output comes from `swift test --parallel`; results arrive via the xUnit report.
    parallel: bool = field(default=False, validator=validators.instance_of(bool))
    # e.g. "5.10.1". Decides whether parallel output is line-delimited.
    toolchain_version: str | None = field(default=None, validator=validators.optional(validators.instance_of(str)))
    # Bytes read per chunk when feeding a log file to the parser.
    chunk_size: int = field(default=4096, validator=_validate_positive_int)


@define(frozen=True, slots=True)
class GlobalConfig:
    """Global default settings for xcstream."""
    log_level: str = field(default="WARNING", validator=[validators.instance_of(str), _validate_log_level])

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


@define(frozen=True, slots=True)
class XcstreamConfig:
    """Root configuration object for the xcstream application."""
    global_config: GlobalConfig = field(factory=GlobalConfig, metadata={"toml_name": "global"})
    parser: ParserConfig = field(factory=ParserConfig)


# 🔼⚙️
