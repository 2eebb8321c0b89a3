"""Typer CLI application."""

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ansigrid.core.config import Config
from ansigrid.core.document import Document
from ansigrid.core.errors import AnsiGridError

# Bytes handed to the decoder per write call
CHUNK_SIZE = 4096


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _decode(path: Path, config: Config, console: Console) -> Document:
    doc = Document(config)
    try:
        with open(path, 'rb') as f:
            while chunk := f.read(CHUNK_SIZE):
                doc.write(chunk)
    except AnsiGridError as e:
        console.print(f"[red]{escape(path.name)}: {escape(str(e))}[/]")
        raise typer.Exit(1)
    return doc


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="ansigrid",
        help="Decode BBS-era ANSI art into a character grid.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()

    WidthOption = Annotated[int, typer.Option("--width", "-w", help="Wrap column count (0 = never wrap)")]
    LinesOption = Annotated[int, typer.Option("--lines", "-l", help="Advisory screen height")]
    StrictOption = Annotated[bool, typer.Option("--strict", help="Fail on the first unsupported sequence")]
    VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Log every diagnostic")]

    @app.command()
    def view(
        path: Annotated[Path, typer.Argument(help="ANSI file to view", exists=True, dir_okay=False)],
        width: WidthOption = 80,
        lines: LinesOption = 24,
        strict: StrictOption = False,
        verbose: VerboseOption = False,
        text: Annotated[bool, typer.Option("--text", "-t", help="Plain text without colors")] = False,
    ) -> None:
        """Decode a file and print it to the terminal."""
        _configure_logging(verbose)
        doc = _decode(path, Config(screen_width=width, screen_lines=lines, strict=strict), console)
        print(doc.render_to_text() if text else doc.render())

    @app.command()
    def inspect(
        path: Annotated[Path, typer.Argument(help="ANSI file to inspect", exists=True, dir_okay=False)],
        width: WidthOption = 80,
        lines: LinesOption = 24,
        verbose: VerboseOption = False,
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """Show grid dimensions and the diagnostics raised while decoding."""
        _configure_logging(verbose)
        doc = _decode(path, Config(screen_width=width, screen_lines=lines), console)
        kinds = Counter(d.kind.value for d in doc.diagnostics)

        if json_output:
            data = {
                "height": doc.height,
                "width": doc.width,
                "eof": doc.eof,
                "trailer_size": len(doc.trailer),
                "diagnostics": [
                    {
                        "kind": d.kind.value,
                        "offset": d.offset,
                        "sequence": d.sequence.decode('latin-1'),
                        "message": d.message,
                    }
                    for d in doc.diagnostics
                ],
            }
            print(json.dumps(data, indent=2))
            return

        console.print(f"[bold cyan]{escape(path.name)}[/]")
        console.print(f"  [bold]Size:[/]    {doc.width}x{doc.height}")
        console.print(f"  [bold]EOF:[/]     {'yes' if doc.eof else 'no'} ({len(doc.trailer)} trailer bytes)")
        if not doc.diagnostics:
            console.print("  [green]No diagnostics[/]")
            return

        summary = ", ".join(f"{count} {kind}" for kind, count in sorted(kinds.items()))
        console.print(f"  [bold]Issues:[/]  {summary}")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Offset", justify="right")
        table.add_column("Kind")
        table.add_column("Sequence")
        table.add_column("Message")
        for d in doc.diagnostics:
            table.add_row(str(d.offset), d.kind.value, escape(repr(d.sequence)), escape(d.message))
        console.print(table)

    return app
