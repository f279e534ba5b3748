# src/xcstream/cli/main.py

"""
Main CLI entry point for xcstream using Click.
Handles global options like logging level.
"""

from importlib.metadata import PackageNotFoundError, version

import click
import structlog

from xcstream.cli.config_cmds import config_cli
from xcstream.cli.parse_cmds import parse_cli
from xcstream.cli.utils import logging_options, setup_logging_from_context
from xcstream.telemetry import StructLogger

try:
    __version__ = version("xcstream")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

log: StructLogger = structlog.get_logger("cli.main")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", package_name="xcstream")
@logging_options
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: str | None,
    log_file: str | None,
    json_logs: bool | None,
):
    """
    Xcstream: Structured results from streamed XCTest output.

    Parses the console output of `swift test` or an `.xctest` bundle into
    tests, suites, failure issues with source locations and diffs, and
    per-test output. Output can be piped in while the run is still going.

    \b
    Examples:
      swift test 2>&1 | xcstream parse --dialect linux
      xcstream parse test.log --format json
      xcstream parse --parallel --toolchain-version 6.0 test.log
      xcstream config show -c xcstream.toml

    `parse` exits with status 1 when any test failed, so it can gate CI steps.
    Configuration precedence: CLI options > Environment Variables > Config File > Defaults.
    """
    ctx.ensure_object(dict)

    ctx.obj["LOG_LEVEL"] = log_level
    ctx.obj["LOG_FILE"] = log_file
    ctx.obj["JSON_LOGS"] = json_logs if json_logs is not None else False

    setup_logging_from_context(
        ctx, default_log_level="WARNING"
    )
    log.debug(
        "Main CLI group initialized",
        log_level=log_level,
        log_file=log_file,
        json_logs=json_logs,
    )


cli.add_command(config_cli)
cli.add_command(parse_cli)

if __name__ == "__main__":
    cli()

# 🖥️⚙️
