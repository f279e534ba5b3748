# src/xcstream/cli/parse_cmds.py

import json
from pathlib import Path
from typing import IO, Any

import attrs
import click
import structlog
from rich.console import Console
from rich.table import Table

from xcstream.cli.config_cmds import CONFIG_PATH_OPTION
from xcstream.cli.utils import apply_config_log_level, logging_options, setup_logging_from_context
from xcstream.config import load_config
from xcstream.config.models import DIALECT_CHOICES
from xcstream.exceptions import ConfigurationError
from xcstream.parsing import DARWIN_DIALECT, Duration, OutputParser, ParseSession, get_output_parser
from xcstream.results import TestRunResults, TestStatus
from xcstream.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.parse")


def feed_parser(
    stream: IO[str],
    parser: OutputParser,
    run_state: TestRunResults,
    chunk_size: int,
    session: ParseSession | None = None,
) -> None:
    """
    Feeds a text stream to the parser chunk by chunk, as a live process would deliver it.

    The session is reset once the stream ends, so it can be reused for the next run.
    """
    session = session if session is not None else ParseSession()
    chunks = 0
    while chunk := stream.read(chunk_size):
        parser.parse_result(chunk, session, run_state)
        chunks += 1
    if session.excess:
        # Output ended without a final newline; let the last line through.
        parser.parse_result("\n", session, run_state)
    log.debug("Finished feeding output", chunks=chunks, items=len(run_state.items))
    session.reset()


def _item_to_dict(item: Any) -> dict[str, Any]:
    def _serialize(inst: Any, field: Any, value: Any) -> Any:
        if isinstance(value, TestStatus):
            return value.value
        return value

    data = attrs.asdict(item, value_serializer=_serialize)
    data.pop("output", None)
    return data


def _render_table(results: TestRunResults, console: Console) -> None:
    table = Table(title="Test Results")
    table.add_column("", no_wrap=True)
    table.add_column("Test")
    table.add_column("Status")
    table.add_column("Duration (s)", justify="right")

    for item in results.items:
        duration = f"{item.timing.seconds:.3f}" if isinstance(item.timing, Duration) else ""
        table.add_row(item.status_emoji, item.name, item.status.value, duration)
    console.print(table)

    for item in results.items:
        for issue in item.issues:
            where = f"{issue.location.file}:{issue.location.line}" if issue.location else "unknown location"
            console.print(f"[bold red]{item.name}[/] ({where})", highlight=False)
            console.print(issue.message, markup=False, highlight=False)
            if issue.diff:
                console.print(f"  actual:   {issue.diff.actual}", markup=False, highlight=False)
                console.print(f"  expected: {issue.diff.expected}", markup=False, highlight=False)

    counts = ", ".join(f"{count} {status.value}" for status, count in results.summary().items() if count)
    console.print(f"Summary: {counts or 'no tests found'}")


@click.command(name="parse")
@click.argument(
    "test_output",
    metavar="LOG_FILE",
    type=click.File("r", encoding="utf-8", errors="replace"),
    default="-",
)
@CONFIG_PATH_OPTION
@click.option(
    "--dialect",
    type=click.Choice(DIALECT_CHOICES, case_sensitive=False),
    default=None,
    help="Output dialect (default from config, else 'auto' for this host).",
)
@click.option(
    "--parallel/--no-parallel",
    default=None,
    help="Output is from `swift test --parallel`; only failure details are recorded.",
)
@click.option("--toolchain-version", default=None, help="Swift toolchain version, e.g. 5.10.1.")
@click.option("--chunk-size", type=click.IntRange(min=1), default=None, help="Characters read per chunk.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="How to print the results.",
)
@logging_options
@click.pass_context
def parse_cli(
    ctx: click.Context,
    test_output: IO[str],
    config_path: Path | None,
    dialect: str | None,
    parallel: bool | None,
    toolchain_version: str | None,
    chunk_size: int | None,
    output_format: str,
    **kwargs,
):
    """Parse XCTest output from LOG_FILE (or stdin) and report test results."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
        default_log_level="WARNING",
    )

    try:
        config = load_config(config_path)
        overrides = {
            key: value
            for key, value in {
                "dialect": dialect,
                "parallel": parallel,
                "toolchain_version": toolchain_version,
                "chunk_size": chunk_size,
            }.items()
            if value is not None
        }
        parser_config = attrs.evolve(config.parser, **overrides)
        parser = get_output_parser(parser_config)
    except (ConfigurationError, ValueError) as e:
        log.error("Failed to load or validate configuration", error=str(e))
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    apply_config_log_level(
        ctx,
        config.global_config.log_level,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )

    log.info("Parsing test output", source=test_output.name, dialect=parser.dialect.name, emoji_key="parse")
    results = TestRunResults(match_suffix=parser.dialect is not DARWIN_DIALECT)
    feed_parser(test_output, parser, results, parser_config.chunk_size)

    if output_format == "json":
        click.echo(json.dumps([_item_to_dict(item) for item in results.items], indent=2))
    else:
        _render_table(results, Console())

    if results.has_failures:
        ctx.exit(1)

# 🔼⚙️
