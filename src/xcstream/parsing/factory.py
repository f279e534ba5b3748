#
# src/xcstream/parsing/factory.py
#
"""
Factory for creating OutputParser instances.
"""
import structlog

from xcstream.config.models import ParserConfig
from xcstream.exceptions import ConfigurationError
from xcstream.parsing.dialects import get_dialect
from xcstream.parsing.parallel import ParallelXCTestOutputParser, ToolchainVersion
from xcstream.parsing.protocols import OutputParser
from xcstream.parsing.xctest_parser import XCTestOutputParser
from xcstream.telemetry import StructLogger

log: StructLogger = structlog.get_logger("parsing.factory")


def get_output_parser(config: ParserConfig) -> OutputParser:
    """
    Factory function to get an OutputParser configured for the run.

    Raises:
        ConfigurationError: If the dialect or toolchain version is invalid.
    """
    dialect = get_dialect(config.dialect)

    if not config.parallel:
        log.debug("Instantiating output parser", dialect=dialect.name)
        return XCTestOutputParser(dialect)

    try:
        version = ToolchainVersion.parse(config.toolchain_version) if config.toolchain_version else None
    except ConfigurationError:
        log.error("Invalid toolchain version", toolchain_version=config.toolchain_version)
        raise

    log.debug(
        "Instantiating parallel output parser",
        dialect=dialect.name,
        toolchain_version=str(version) if version else None,
    )
    return ParallelXCTestOutputParser(version, dialect)

# 🔼⚙️
