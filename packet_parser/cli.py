"""
CLI Interface
=============
Command-line interface for the packet parser.

Usage:
    python -m packet_parser parse <packet_path> [options]
    python -m packet_parser batch <directory> [options]
    python -m packet_parser classify <text> [options]
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from . import __version__
from .classifier import MODE_SUBCATEGORY, MODES, Classifier
from .diagnostics import PacketParseError
from .engine import SUPPORTED_EXTENSIONS, PacketParser, ParserConfig
from .storage import DEFAULT_OUTPUT_DIR, save_result

console = Console()

_PARSER_OPTIONS = [
    click.option(
        "--no-category-tags",
        is_flag=True,
        default=False,
        help="Questions have no <category> tags",
    ),
    click.option(
        "--no-question-numbers",
        is_flag=True,
        default=False,
        help="Questions are not numbered",
    ),
    click.option(
        "--always-classify",
        is_flag=True,
        default=False,
        help="Classify every question when tags are absent",
    ),
    click.option(
        "--classify-unknown",
        is_flag=True,
        default=False,
        help="Classify questions with a missing or unknown tag instead of failing",
    ),
    click.option(
        "--auto-insert-powermark",
        is_flag=True,
        default=False,
        help="Insert (*) before the last closing bold marker",
    ),
    click.option(
        "--normalize-powermark-spacing",
        is_flag=True,
        default=False,
        help="Force spaces around (*) instead of warning",
    ),
    click.option(
        "--parts",
        "expected_part_count",
        default=3,
        type=int,
        help="Expected number of parts per bonus",
    ),
    click.option(
        "--constant-subcategory",
        default="",
        help="Assign this subcategory to every question",
    ),
    click.option(
        "--constant-alternate-subcategory",
        default="",
        help="Assign this alternate subcategory to every question",
    ),
    click.option(
        "--modaq",
        is_flag=True,
        default=False,
        help="Compact output for MODAQ",
    ),
    click.option(
        "--buzzpoints",
        is_flag=True,
        default=False,
        help="Output for buzzpoint-migrator",
    ),
    click.option(
        "--verbose",
        is_flag=True,
        default=False,
        help="Debug logging and dumps of suspicious text",
    ),
    click.option(
        "--log-file",
        default=None,
        help="Path to log file",
    ),
    click.option(
        "--output", "-o",
        default=DEFAULT_OUTPUT_DIR,
        help="Output directory for parsed JSON",
    ),
]


def parser_options(func):
    """Attach the shared parser options to a command."""
    for option in reversed(_PARSER_OPTIONS):
        func = option(func)
    return func


def _build_config(options: dict) -> ParserConfig:
    return ParserConfig(
        has_category_tags=not options["no_category_tags"],
        has_question_numbers=not options["no_question_numbers"],
        always_classify=options["always_classify"],
        classify_unknown_allowed=options["classify_unknown"],
        auto_insert_powermark=options["auto_insert_powermark"],
        normalize_powermark_spacing=options["normalize_powermark_spacing"],
        expected_part_count=options["expected_part_count"],
        constant_subcategory=options["constant_subcategory"],
        constant_alternate_subcategory=options["constant_alternate_subcategory"],
        compact_output_mode=options["modaq"],
        buzzpoints_mode=options["buzzpoints"],
        verbose_logging=options["verbose"],
        log_file=options["log_file"],
    )


@click.group()
@click.version_option(version=__version__, prog_name="packet-parser")
def cli():
    """Packet Parser: structured extraction of quiz bowl packets."""
    pass


@cli.command()
@click.argument("packet_path", type=click.Path(exists=True, dir_okay=False))
@parser_options
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only JSON result to stdout (for programmatic use)",
)
def parse(packet_path: str, json_output: bool, **options):
    """Parse a single .txt or .docx packet."""

    if not json_output:
        console.print()
        console.print(
            Panel.fit(
                f"[bold cyan]Packet Parser v{__version__}[/]\n"
                f"[dim]Parsing: {os.path.basename(packet_path)}[/]",
                border_style="cyan",
            )
        )
        console.print()

    try:
        parser = PacketParser(_build_config(options))
        if json_output:
            # Suppress log output for JSON mode
            logging.getLogger("packet_parser").setLevel(logging.ERROR)

        result = parser.parse_file(packet_path)
        output_file = save_result(result, options["output"])

        if json_output:
            print(json.dumps(result.to_output(), indent=2, ensure_ascii=False))
        else:
            _display_results(result)
            console.print(f"[dim]Saved: {output_file}[/]")
            console.print()

    except PacketParseError as e:
        console.print(f"[red]Parse error:[/] {escape(str(e))}")
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)


@cli.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@parser_options
def batch(directory: str, **options):
    """Batch parse all .txt and .docx packets in a directory."""

    packet_files = sorted(
        p for p in Path(directory).iterdir()
        if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS
    )

    if not packet_files:
        console.print(f"[yellow]No packet files found in: {directory}[/]")
        return

    try:
        parser = PacketParser(_build_config(options))
    except ValueError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Batch Packet Parser[/]\n"
            f"[dim]Found {len(packet_files)} packets in: {directory}[/]",
            border_style="cyan",
        )
    )
    console.print()

    results = []
    errors = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(
            "Processing packets...", total=len(packet_files)
        )

        for packet_file in packet_files:
            progress.update(
                task,
                description=f"Parsing: {packet_file.name}",
            )

            # One bad packet must not stop the batch
            try:
                result = parser.parse_file(packet_file)
                save_result(result, options["output"])
                results.append((packet_file.name, result))
            except Exception as e:
                errors.append((packet_file.name, str(e)))

            progress.advance(task)

    _display_batch_summary(results, errors)


@cli.command()
@click.argument("text")
@click.option(
    "--mode",
    default=MODE_SUBCATEGORY,
    type=click.Choice(MODES),
    help="Label set to predict",
)
@click.option(
    "--category",
    default="",
    help="Category for alternate-subcategory mode",
)
@click.option(
    "--subcategory",
    default="",
    help="Subcategory for subsubcategory mode",
)
def classify(text: str, mode: str, category: str, subcategory: str):
    """Classify a question text with the bundled model."""

    label = Classifier().classify(
        text, mode, category=category, subcategory=subcategory
    )
    if not label:
        console.print(f"[yellow]No labels for mode '{mode}' with the given binding[/]")
        sys.exit(1)

    console.print(label)


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _display_results(result):
    """Display parse results in formatted tables."""
    console.print()

    report = result.report
    table = Table(title="Packet Report", border_style="green")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Status", justify="center")

    def status_icon(count, threshold=0):
        if count <= threshold:
            return "[green]✓[/]"
        return "[yellow]⚠[/]"

    table.add_row(
        "Tossups",
        str(report.total_short_answer),
        "[green]✓[/]" if report.total_short_answer > 0 else "[red]✗[/]",
    )
    table.add_row(
        "Bonuses",
        str(report.total_multi_part),
        "[green]✓[/]" if report.total_multi_part > 0 else "[red]✗[/]",
    )
    table.add_row(
        "Warnings",
        str(report.warning_count),
        status_icon(report.warning_count),
    )
    table.add_row(
        "Unparsed Directives",
        str(report.unparsed_directives),
        status_icon(report.unparsed_directives),
    )

    console.print(table)
    console.print()

    if report.warning_breakdown:
        warning_table = Table(
            title="Warning Breakdown",
            border_style="yellow",
        )
        warning_table.add_column("Type", style="bold")
        warning_table.add_column("Count", justify="right")

        for wtype, count in sorted(report.warning_breakdown.items()):
            warning_table.add_row(wtype, str(count))

        console.print(warning_table)
        console.print()


def _display_batch_summary(results, errors):
    """Display batch processing summary."""
    console.print()

    table = Table(title="Batch Processing Summary", border_style="cyan")
    table.add_column("Packet", style="bold")
    table.add_column("Tossups", justify="right")
    table.add_column("Bonuses", justify="right")
    table.add_column("Warnings", justify="right")
    table.add_column("Status", justify="center")

    total_questions = 0
    total_warnings = 0

    for name, result in results:
        report = result.report
        total_questions += report.total_short_answer + report.total_multi_part
        total_warnings += report.warning_count

        status = "[green]✓[/]" if report.warning_count == 0 else "[yellow]⚠[/]"
        table.add_row(
            name,
            str(report.total_short_answer),
            str(report.total_multi_part),
            str(report.warning_count),
            status,
        )

    for name, error in errors:
        table.add_row(name, "-", "-", "-", "[red]✗ FAILED[/]")

    console.print(table)
    console.print()

    for name, error in errors:
        console.print(f"[red]{escape(name)}:[/] {escape(error)}")

    console.print(
        f"[bold]Total:[/] {total_questions} questions from "
        f"{len(results)} packets, {total_warnings} warnings, "
        f"{len(errors)} failures"
    )
    console.print()


# ─── Entry point (for python -m packet_parser.cli) ────────────────────────────


if __name__ == "__main__":
    cli()
