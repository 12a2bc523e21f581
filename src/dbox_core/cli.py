"""dbox-core CLI -- turn database shell SELECT output into TSV, CSV or plots."""

import logging
import tempfile
from pathlib import Path

import click

from . import __version__


def _read_input(console, file, text, encoding):
    """Text from --text, a file argument, or stdin (in that order)."""
    from ._io import load_input

    if text is None and not file:
        text = click.get_text_stream("stdin").read()

    if text is not None and not text.strip():
        console.print("[red]No input text provided.[/red]")
        raise SystemExit(1)

    try:
        return load_input(text, file or "", encoding)
    except (UnicodeDecodeError, LookupError) as e:
        console.print(f"[red]Error: cannot read {file} as {encoding}: {e}[/red]")
        raise SystemExit(1)


def _parse(console, source, strategy):
    from .errors import BoxFormatError
    from .parser import parse_dbox, parse_simple

    try:
        return parse_dbox(source) if strategy == "dbox" else parse_simple(source)
    except (BoxFormatError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


def _encoding_option(name, envvar, help_text):
    return click.option(name, default="utf-8", show_default=True, envvar=envvar, help=help_text)


_strategy_option = click.option(
    "--strategy", "-s", default="dbox", type=click.Choice(["dbox", "simple"]),
    help="dbox: ruler-based fixed width (default); simple: split on delimiters.",
)


@click.group()
@click.version_option(version=__version__, prog_name="dbox")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """dbox-core -- parse mysql/psql/sqlite SELECT output ("dbox" text)."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command()
@click.argument("file", required=False, type=click.Path(exists=True))
@click.option("--text", "-t", default=None, help="Parse this text instead of a file.")
@_strategy_option
@_encoding_option("--encoding", "DBOX_INPUT_ENCODING", "Input text encoding.")
@click.option("--limit", "-n", default=10, help="Maximum rows to preview.")
def parse(file, text, strategy, encoding, limit):
    """Parse box-format text from a file, --text, or stdin."""
    from rich.console import Console
    from rich.table import Table

    console = Console()
    source = _read_input(console, file, text, encoding)
    result = _parse(console, source, strategy)

    dialect = result.dialect.value if result.dialect else "n/a"
    console.print(
        f"\n[bold]Parsed {result.row_count} rows[/bold] "
        f"(dialect: {dialect}, strategy: {result.strategy})\n"
    )
    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    table = Table(title="Parsed Table")
    for col in result.header:
        table.add_column(col, style="cyan")

    width = len(result.header)
    for row in result.rows[:limit]:
        cells = list(row[:width]) + [""] * (width - len(row))
        table.add_row(*cells)

    console.print(table)

    if result.row_count > limit:
        console.print(f"[dim]... {result.row_count - limit} more rows[/dim]")


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@_encoding_option("--encoding", "DBOX_INPUT_ENCODING", "Input text encoding.")
def inspect(file, encoding):
    """Show what the ruler line says: dialect, layout and column boundaries."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table

    from .parser import analyze_ruler, split_lines
    from .parser.box import RULER_SCAN
    from .parser.charclass import DEFAULT_PATTERNS

    console = Console()
    source = _read_input(console, file, None, encoding)
    lines = split_lines(source)

    ruler_at = next(
        (i for i in RULER_SCAN if i < len(lines) and DEFAULT_PATTERNS.is_ruler(lines[i])),
        None,
    )
    if ruler_at is None:
        console.print("[red]Error: no horizontal rule line found near the top.[/red]")
        raise SystemExit(1)

    analysis = analyze_ruler(lines[ruler_at], ruler_at)

    console.print(Panel(
        f"[bold]Dialect:[/bold] {analysis.dialect.value}  |  "
        f"Ruler: line {ruler_at + 1}  |  "
        f"Header: line {analysis.header_index + 1}  |  "
        f"Data from: line {analysis.first_data_index + 1}  |  "
        f"Cross: {analysis.cross!r}",
        title=f"Ruler Analysis: {file}",
    ))
    for warning in analysis.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    table = Table(title="Column Boundaries")
    table.add_column("#", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right", style="cyan")
    table.add_column("Width", justify="right")

    beg = 0
    for n, pos in enumerate(analysis.boundaries, start=1):
        table.add_row(str(n), str(beg), str(pos), str(pos - beg))
        beg = pos + 1

    console.print(table)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.argument("output_file", type=click.Path())
@click.option("--format", "-f", "fmt", default="", type=click.Choice(["", "tsv", "csv"]),
              help="Output format (default: from the output suffix, else tsv).")
@_strategy_option
@_encoding_option("--encoding", "DBOX_INPUT_ENCODING", "Input text encoding.")
@_encoding_option("--output-encoding", "DBOX_OUTPUT_ENCODING", "Output file encoding.")
def convert(input_file, output_file, fmt, strategy, encoding, output_encoding):
    """Convert a dbox file to TSV or CSV."""
    from rich.console import Console

    from .errors import BoxFormatError
    from .export import convert_file

    console = Console()

    try:
        result = convert_file(
            input_file, output_file, fmt=fmt, strategy=strategy,
            input_encoding=encoding, output_encoding=output_encoding,
        )
    except (BoxFormatError, ValueError, LookupError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    for warning in result["warnings"]:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    console.print(
        f"\n[bold]Converted[/bold] {result['rows']:,} rows x {len(result['columns'])} columns "
        f"({result['dialect'] or strategy}) -> {result['format'].upper()}"
    )
    console.print(f"Saved to: [bold]{result['saved_to']}[/bold]")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--output", "-o", default="", help="PNG path (default: <working-area>/<name>.png).")
@click.option("--dependents", default="", help="x-axis field, then group-by fields (comma-separated).")
@click.option("--independents", default="", help="y-axis fields (comma-separated).")
@click.option("--indie-count", type=int, default=None,
              help="First N columns are x axis plus group-by; the rest are y fields.")
@click.option("--working-area", default="", help="Directory for the TSV and PNG (default: temp dir).")
@_encoding_option("--encoding", "DBOX_INPUT_ENCODING", "Input text encoding.")
def plot(input_file, output, dependents, independents, indie_count, working_area, encoding):
    """Scatter-plot a dbox file (first column on the x axis by default)."""
    from rich.console import Console

    from .export import write_tsv
    from .plot import render_plot, resolve_axes

    console = Console()
    source = _read_input(console, input_file, None, encoding)
    table = _parse(console, source, "dbox")

    try:
        spec = resolve_axes(table.columns, dependents, independents, indie_count)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    work = Path(working_area or Path(tempfile.gettempdir()) / ".dbox")
    work.mkdir(parents=True, exist_ok=True)
    stem = Path(input_file).stem
    write_tsv(table, work / f"{stem}.tsv")
    png = Path(output) if output else work / f"{stem}.png"

    try:
        with console.status("Plotting..."):
            result = render_plot(table, spec, png)
    except ImportError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    console.print(
        f"\n[bold]x:[/bold] {result['x_axis']}  |  [bold]y:[/bold] {', '.join(result['y_fields'])}"
        + (f"  |  [bold]by:[/bold] {', '.join(result['group_by'])}" if result["group_by"] else "")
    )
    console.print(f"Saved to: [bold]{result['saved_to']}[/bold]")


if __name__ == "__main__":
    cli()
