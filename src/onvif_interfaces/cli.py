"""Command-line interface for onvif-interfaces."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from onvif_interfaces.errors import GenerationResult, SchemaContractError
from onvif_interfaces.generator import InterfaceGenerator

console = Console()
error_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("onvif_interfaces")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=error_console, show_path=False))
    logger.propagate = False


@click.command()
@click.argument(
    "source",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.argument("output", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only output warnings and errors, no progress messages.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log every compiled document and declaration.",
)
def main(source: Path, output: Path, quiet: bool, verbose: bool) -> None:
    """Generate TypeScript interfaces from ONVIF specifications.

    SOURCE is the ONVIF specs directory (e.g. "specs/wsdl/ver20").
    OUTPUT is the directory for the generated interfaces; it is created if
    it does not exist.
    """
    _configure_logging(verbose)

    def on_document(path: Path) -> None:
        if not quiet:
            console.print(f"[green]processing[/green] {path}")

    generator = InterfaceGenerator(on_document=on_document)
    try:
        result = generator.run(source, output)
    except SchemaContractError as exc:
        error_console.print(f"[red]Error:[/red] {exc}")
        if exc.source:
            error_console.print(f"  in {exc.source}")
        sys.exit(1)

    _output_text(result, quiet)
    sys.exit(0)


def _output_text(result: GenerationResult, quiet: bool) -> None:
    """Output written files and a table of diagnostics."""
    if not quiet:
        for path in result.written:
            console.print(f"[green]✓[/green] Saved {path}")

    diagnostics = result.diagnostics
    if diagnostics:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Kind", style="dim", width=22)
        table.add_column("Module", width=20)
        table.add_column("Type", width=30)
        table.add_column("Description")
        for diagnostic in diagnostics:
            table.add_row(
                diagnostic.kind.value,
                diagnostic.module,
                diagnostic.type_name,
                f"[yellow]{diagnostic.message}[/yellow]",
            )
        error_console.print(table)

    if not quiet:
        console.print(
            f"\n[bold]Done![/bold] {len(result.written)} modules written, "
            f"{result.warning_count} warnings"
        )


if __name__ == "__main__":
    main()
