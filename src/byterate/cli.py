"""Command-line utilities for measuring stream throughput.

The ``byterate`` CLI exposes a ``copy`` command that measures a real copy
between files or standard streams, and a ``bench`` command that measures how
fast bytes can be pulled through the wrapper from an endless source. This
module contains the Typer application wiring along with helpers for
formatting output. Each command documents how CLI arguments interact with
environment variables and settings files.
"""

import json
import os
import shutil
import sys
from contextlib import ExitStack
from dataclasses import asdict
from pathlib import Path
from time import monotonic
from typing import Annotated

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from .fixtures.sources import NullWriter, RepeatReader
from .meter import interval_seconds as validate_interval
from .settings import BenchSettings, CopySettings
from .sinks import StreamSink
from .summary import RateSummary, summarize_rates
from .units import BytesPerSecond, format_bytes
from .wrappers import ThroughputReader

STANDARD_STREAM = Path("-")
MIN_DURATION = 1e-6  # avoids dividing by zero for instantaneous runs

app = typer.Typer(add_completion=False, no_args_is_help=True)

IntervalOption = Annotated[
    float | None,
    typer.Option(help="Seconds between rate reports."),
]
ChunkSizeOption = Annotated[
    int | None,
    typer.Option(help="Bytes requested from the source per read."),
]
SummaryOption = Annotated[
    bool | None,
    typer.Option(
        "--summary/--no-summary",
        help="Print a summary table after the run.",
    ),
]
SettingsFileOption = Annotated[
    Path | None,
    typer.Option(
        help=(
            "Path to a TOML or JSON settings file. CLI arguments override"
            " environment variables, which override file values."
        )
    ),
]


class _RecordingSink:
    """Write each report to a text stream and keep it for the final summary."""

    def __init__(self, stream) -> None:
        self._write = StreamSink(stream)
        self.reports: list[BytesPerSecond] = []

    def __call__(self, measurement: BytesPerSecond) -> None:
        self.reports.append(measurement)
        self._write(measurement)


def _summary_table(summary: RateSummary, title: str) -> Table:
    """Render a :class:`RateSummary` as a two-column rich table."""
    table = Table(title=title, show_lines=False)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("reports", f"{summary.report_count}")
    table.add_row("total", format_bytes(summary.total_bytes))
    table.add_row("elapsed", f"{summary.elapsed_seconds:.2f} s")
    table.add_row("average", f"{format_bytes(summary.average_bytes_per_second)}/s")
    if summary.report_count:
        table.add_row("min", f"{format_bytes(summary.min_bytes_per_second)}/s")
        table.add_row("p50", f"{format_bytes(summary.p50_bytes_per_second)}/s")
        table.add_row("p95", f"{format_bytes(summary.p95_bytes_per_second)}/s")
        table.add_row("max", f"{format_bytes(summary.max_bytes_per_second)}/s")
    return table


@app.command()
def copy(
    source: Annotated[
        Path | None,
        typer.Argument(help="File to read. Omit or pass '-' for standard input."),
    ] = None,
    destination: Annotated[
        Path | None,
        typer.Argument(help="File to write. Omit or pass '-' for standard output."),
    ] = None,
    interval_seconds: IntervalOption = None,
    chunk_size: ChunkSizeOption = None,
    print_summary: SummaryOption = None,
    settings_file: SettingsFileOption = None,
):
    """Copy SOURCE to DESTINATION, reporting the read rate on standard error.

    Args:
        source: File to read; ``None`` or ``-`` reads standard input.
        destination: File to write; ``None`` or ``-`` writes standard output.
        interval_seconds: Seconds between reports; ``None`` defers to
            configuration precedence.
        chunk_size: Bytes requested per read.
        print_summary: Whether to print a summary table to standard error.
        settings_file: Explicit TOML or JSON settings file path.

    Raises:
        FileNotFoundError: If the settings file does not exist.
        typer.BadParameter: If the resolved interval is not positive or the
            source file does not exist.
    """
    settings = CopySettings.from_sources(
        cli_overrides={
            "interval_seconds": interval_seconds,
            "chunk_size": chunk_size,
            "print_summary": print_summary,
        },
        env=os.environ,
        settings_file=settings_file,
    )
    # Validate everything before the destination is opened, which truncates it.
    try:
        interval = validate_interval(settings.interval_seconds)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--interval-seconds") from e
    read_stdin = source is None or source == STANDARD_STREAM
    if not read_stdin and not source.is_file():
        raise typer.BadParameter(f"File '{source}' does not exist", param_hint="SOURCE")

    console = Console(stderr=True)
    sink = _RecordingSink(sys.stderr)

    with ExitStack() as stack:
        if read_stdin:
            src = sys.stdin.buffer
        else:
            src = stack.enter_context(open(source, "rb"))
        if destination is None or destination == STANDARD_STREAM:
            dst = sys.stdout.buffer
        else:
            dst = stack.enter_context(open(destination, "wb"))

        reader = ThroughputReader(src, sink, interval=interval, monotonic_fn=monotonic)
        started = monotonic()
        shutil.copyfileobj(reader, dst, settings.chunk_size)
        dst.flush()
        elapsed = monotonic() - started

    summary = summarize_rates(
        sink.reports,
        total_bytes=reader.meter.total_bytes,
        elapsed_seconds=max(elapsed, MIN_DURATION),
    )
    if settings.print_summary:
        console.print(_summary_table(summary, "Copy Summary"))
    console.print(f"[bold green]Done[/] -> {format_bytes(summary.total_bytes)} copied")


@app.command()
def bench(
    duration_seconds: Annotated[
        float | None, typer.Option(help="Seconds to keep reading.")
    ] = None,
    interval_seconds: IntervalOption = None,
    chunk_size: ChunkSizeOption = None,
    print_summary: SummaryOption = None,
    json_summary: Annotated[
        bool | None,
        typer.Option(
            "--json-summary/--no-json-summary",
            help="Print the summary as a compact JSON object to stdout.",
        ),
    ] = None,
    settings_file: SettingsFileOption = None,
):
    """Read an endless stream of zero bytes and report the rate on stdout.

    Args:
        duration_seconds: How long to keep reading.
        interval_seconds: Seconds between reports.
        chunk_size: Bytes requested per read.
        print_summary: Whether to print a summary table.
        json_summary: Whether to print a compact JSON summary.
        settings_file: Explicit TOML or JSON settings file path.

    Raises:
        typer.BadParameter: If the resolved interval is not positive.
    """
    settings = BenchSettings.from_sources(
        cli_overrides={
            "duration_seconds": duration_seconds,
            "interval_seconds": interval_seconds,
            "chunk_size": chunk_size,
            "print_summary": print_summary,
            "json_summary": json_summary,
        },
        env=os.environ,
        settings_file=settings_file,
    )
    try:
        interval = validate_interval(settings.interval_seconds)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--interval-seconds") from e

    sink = _RecordingSink(sys.stdout)
    reader = ThroughputReader(RepeatReader(0), sink, interval=interval, monotonic_fn=monotonic)
    null = NullWriter()

    started = monotonic()
    deadline = started + settings.duration_seconds
    while monotonic() < deadline:
        null.write(reader.read(settings.chunk_size))
    elapsed = monotonic() - started

    summary = summarize_rates(
        sink.reports,
        total_bytes=reader.meter.total_bytes,
        elapsed_seconds=max(elapsed, MIN_DURATION),
    )
    if settings.print_summary:
        print(_summary_table(summary, "Bench Summary"))

    # Optional: print compact JSON summary to stdout for scripting
    if settings.json_summary:
        print(json.dumps(asdict(summary), separators=(",", ":")))


if __name__ == "__main__":
    app()
