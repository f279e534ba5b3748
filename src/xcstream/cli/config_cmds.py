# src/xcstream/cli/config_cmds.py

from pathlib import Path

import click
import structlog
from rich.pretty import pretty_repr

from xcstream.cli.utils import logging_options, setup_logging_from_context
from xcstream.config import load_config
from xcstream.exceptions import ConfigurationError
from xcstream.parsing import get_output_parser
from xcstream.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.config")

CONFIG_PATH_OPTION = click.option(
    "-c",
    "--config-path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
    default=None,
    envvar="XCSTREAM_CONF",
    help="Path to the xcstream TOML configuration file (env var XCSTREAM_CONF).",
    show_envvar=True,
)


# Create a command group for config-related commands
@click.group(name="config")
def config_cli():
    """Commands for inspecting and validating configuration."""
    pass


@config_cli.command(name="show")
@CONFIG_PATH_OPTION
@logging_options
@click.pass_context
def show_config(ctx: click.Context, config_path: Path | None, **kwargs):
    """Load, validate, and display the configuration."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
        default_log_level="WARNING",
    )
    log.info("Executing 'config show' command", config_path=str(config_path))

    try:
        config = load_config(config_path)
        # Building the parser validates the dialect and toolchain version too.
        parser = get_output_parser(config.parser)
        log.debug("Configuration loaded successfully by 'show' command.")

        click.echo(pretty_repr(config, expand_all=True))
        click.echo(f"Parser: {type(parser).__name__} ({parser.dialect.name} dialect)")

    except ConfigurationError as e:
        log.error("Failed to load or validate configuration", error=str(e))
        click.echo(f"Error: Configuration problem in '{config_path or 'defaults'}':\n{e}", err=True)
        ctx.exit(1)

# 🔼⚙️
