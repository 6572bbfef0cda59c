#!/usr/bin/env python3
"""Sliding puzzle scramble sheets.

Usage::

    slide-scramble                          # 5 + 2 scrambles of a 4×4, rich table
    slide-scramble -s 3 -n 10 -e 0 -f text  # ten 3×3 scrambles as plain text
    slide-scramble -f html -o sheet.html    # printable page with SVG boards
    slide-scramble --seed 42 --log-level debug
"""

import logging
import random
import sys
from contextlib import ExitStack
from enum import StrEnum
from pathlib import Path
from typing import Optional, TextIO

import typer
from rich.console import Console

from slidescramble.backend.engine.pipeline import (
    BatchAborted,
    BatchAssembler,
    BatchResult,
    OutputSink,
    ScrambleRowBuilder,
)
from slidescramble.backend.engine.render import Renderer, SvgRenderer
from slidescramble.backend.engine.scrambler import ScramblerKind, make_scrambler
from slidescramble.backend.engine.solver import Solver
from slidescramble.backend.models.errors import SinkError
from slidescramble.config import MAX_SIZE, MIN_SIZE, ScrambleConfig, load_config
from slidescramble.frontend.cli.rich.sink import RichBoardRenderer, RichTableSink
from slidescramble.frontend.cli.vanilla.sink import PlainTextSink
from slidescramble.frontend.html.sink import HtmlTableSink
from slidescramble.logging_config import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ROW_FAILURES = 1
EXIT_ABORTED = 2


# -- output registry ----------------------------------------------------------


class OutputFormat(StrEnum):
    text = "text"
    rich = "rich"
    html = "html"


class LogLevel(StrEnum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


# -- helpers ------------------------------------------------------------------


def _build_renderer(fmt: OutputFormat, config: ScrambleConfig) -> Renderer:
    if fmt is OutputFormat.rich:
        return RichBoardRenderer()
    return SvgRenderer(tile_size=config.tile_size, font_size=config.font_size)


def _build_sink(fmt: OutputFormat, stream: TextIO, console: Console) -> OutputSink:
    if fmt is OutputFormat.rich:
        return RichTableSink(console=console)
    if fmt is OutputFormat.html:
        return HtmlTableSink()
    return PlainTextSink(stream)


def _finish(sink: OutputSink, output: Optional[Path]) -> None:
    if isinstance(sink, RichTableSink):
        sink.show()
    elif isinstance(sink, HtmlTableSink):
        if output is None:
            sys.stdout.write(sink.render())
        else:
            sink.write(output)


def _report(result: BatchResult, err: Console) -> None:
    for failure in result.failures:
        err.print(
            f"[red]Row {failure.label} failed while {failure.stage}:[/red] {failure.cause}"
        )


def run_batch(
    config: ScrambleConfig,
    fmt: OutputFormat,
    output: Optional[Path] = None,
    console: Optional[Console] = None,
) -> int:
    """Generate one batch and return the process exit code."""
    console = console or Console()
    err = Console(stderr=True)

    rng = random.Random(config.seed)
    builder = ScrambleRowBuilder(
        size=config.size,
        scrambler=make_scrambler(config.scrambler, rng),
        solver=Solver(time_limit=config.solve_timeout),
        renderer=_build_renderer(fmt, config),
        chunk_width=config.chunk_width,
    )
    labels = config.labels()
    logger.info(
        "Generating %d scramble(s) for %d×%d", len(labels), config.size, config.size
    )

    aborted: Optional[BatchAborted] = None
    with ExitStack() as stack:
        stream: TextIO = sys.stdout
        if fmt is OutputFormat.text and output is not None:
            stream = stack.enter_context(output.open("w", encoding="utf-8"))
        sink = _build_sink(fmt, stream, console)

        try:
            result = BatchAssembler(builder, sink).run(labels)
        except BatchAborted as exc:
            aborted = exc
            result = exc.result

        # Rows finished before an abort are still written out.
        try:
            _finish(sink, output)
        except SinkError as exc:
            aborted = aborted or BatchAborted(result, exc)

    _report(result, err)
    if aborted is not None:
        err.print(f"[bold red]Aborted:[/bold red] {aborted.cause}")
        return EXIT_ABORTED
    return EXIT_OK if result.ok else EXIT_ROW_FAILURES


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    size: Optional[int] = typer.Option(
        None, "-s", "--size",
        min=MIN_SIZE, max=MAX_SIZE,
        help=f"Grid size ({MIN_SIZE}-{MAX_SIZE}). Default 4.",
    ),
    count: Optional[int] = typer.Option(
        None, "-n", "--count", min=0,
        help="Number of main scrambles. Default 5.",
    ),
    extra: Optional[int] = typer.Option(
        None, "-e", "--extra", min=0,
        help="Number of extra scrambles (E1, E2, ...). Default 2.",
    ),
    width: Optional[int] = typer.Option(
        None, "-w", "--width", min=1,
        help="Moves per line. Default 10.",
    ),
    fmt: OutputFormat = typer.Option(
        OutputFormat.rich, "-f", "--format",
        help="Output format.",
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output",
        help="Write text or html output to this file instead of stdout.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the scrambler for a reproducible batch.",
    ),
    scrambler: Optional[ScramblerKind] = typer.Option(
        None, "--scrambler",
        help="Uniform random state, or a random walk of moves.",
    ),
    solve_timeout: Optional[float] = typer.Option(
        None, "--solve-timeout", min=0.001,
        help="Seconds allowed per solve. Default 5.",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config",
        help="JSON file with default settings.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Logging verbosity (written to stderr).",
    ),
) -> None:
    """Generate verified sliding puzzle scrambles."""
    configure_logging(log_level.value)

    try:
        config = load_config(config_path).merged(
            size=size,
            count=count,
            extra=extra,
            chunk_width=width,
            seed=seed,
            scrambler=scrambler.value if scrambler else None,
            solve_timeout=solve_timeout,
        ).validate()
    except (TypeError, ValueError) as e:
        raise typer.BadParameter(str(e)) from e

    if output is not None and fmt is OutputFormat.rich:
        raise typer.BadParameter("--output is only supported for text and html.")

    raise typer.Exit(run_batch(config, fmt, output))


if __name__ == "__main__":
    app()
