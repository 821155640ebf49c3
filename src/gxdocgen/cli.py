import json
import logging

from dataclasses import asdict
from pathlib import Path
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from typing import Optional

import typer

from gxdocgen import __version__
from gxdocgen.config import GeneratorConfig, load_config
from gxdocgen.errors import XpzError
from gxdocgen.generator import generate_docs
from gxdocgen.models import ExtractResult, ResolvedObject
from gxdocgen.xpz import extract, validate_input

app = typer.Typer(
    help="GXDocGen - GeneXus documentation generator",
    no_args_is_help=True,
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _extract_or_exit(input_path: Path, config: GeneratorConfig | None = None) -> ExtractResult:
    """Validate the input package and extract it, exiting on failure."""
    try:
        validate_input(input_path)
    except ValueError as e:
        typer.echo(f"Error: Invalid input: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        return extract(input_path, config)
    except (FileNotFoundError, XpzError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)


def _find_object(objects: list[ResolvedObject], name: str) -> ResolvedObject | None:
    for obj in objects:
        if obj.path == name:
            return obj
    # Fall back to display names, case-insensitively
    for obj in objects:
        if obj.name.lower() == name.lower():
            return obj
    return None


@app.command()
def generate(
    input_path: Path = typer.Argument(..., help="Path to the GeneXus XPZ file"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory (default: ./docs)"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to configuration file"
    ),
):
    """Generate Markdown documentation from an export package.

    Examples:
        gxdocgen generate ./export.xpz
        gxdocgen generate ./export.xpz --output ./documentation
    """
    config = load_config(config_path)

    console.print("[bold]Step 1/2:[/bold] Extracting XPZ file...")
    result = _extract_or_exit(input_path, config)
    console.print(f"Extracted {len(result.objects)} GeneXus objects")
    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    output_dir = output if output is not None else Path(config.output_dir)

    console.print("[bold]Step 2/2:[/bold] Generating documentation...")
    try:
        summary = generate_docs(result.objects, result.kb_name, output_dir)
    except OSError as e:
        typer.echo(f"Error: Failed to generate documentation: {e}", err=True)
        raise typer.Exit(code=1)

    if summary.procedure_count:
        console.print(f"Generated {summary.procedure_count} Procedure documentation file(s)")
    if summary.undocumented:
        console.print(
            f"[yellow]{len(summary.undocumented)} procedure(s) are missing "
            f"/** */ documentation comments[/yellow]"
        )
    console.print("[green]✓ Documentation generation complete![/green]")
    console.print(f"Output location: {output_dir}")


@app.command("extract")
def extract_command(
    input_path: Path = typer.Argument(..., help="Path to the GeneXus XPZ file"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to configuration file"
    ),
):
    """List the objects of an export package with their signatures.

    Args:
        input_path: Path to the GeneXus XPZ file
    """
    result = _extract_or_exit(input_path, load_config(config_path))

    if json_output:
        output = {
            "kb_name": result.kb_name,
            "objects": [asdict(obj) for obj in result.objects],
        }
        typer.echo(json.dumps(output, indent=2))
        return

    table = Table(title=result.kb_name or None)
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Signature")
    table.add_column("Mode")
    table.add_column("Documented")

    for obj in result.objects:
        sig = obj.signature
        documented = obj.documentation is not None and not obj.documentation.is_auto_generated
        table.add_row(
            obj.path,
            obj.kind,
            sig.raw_signature if sig else "-",
            sig.extraction_mode if sig else "-",
            "yes" if documented else "no",
        )

    console.print(table)


@app.command()
def signature(
    input_path: Path = typer.Argument(..., help="Path to the GeneXus XPZ file"),
    name: str = typer.Argument(..., help="Object name"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to configuration file"
    ),
):
    """Show the resolved signature and documentation of one object.

    Examples:
        gxdocgen signature ./export.xpz GetUser
        gxdocgen signature ./export.xpz Customer --config ./gxdocgen.yml
    """
    result = _extract_or_exit(input_path, load_config(config_path))

    obj = _find_object(result.objects, name)
    if obj is None:
        typer.echo(f"Error: Object '{name}' not found in {input_path}", err=True)
        raise typer.Exit(code=1)

    if json_output:
        output = asdict(obj)
        del output["source_code"]  # Source is not part of the signature view
        typer.echo(json.dumps(output, indent=2))
        return

    sig = obj.signature
    if sig is None:
        console.print(f"{obj.path} ({obj.kind}) has no signature")
        return

    console.print(f"[bold]{sig.raw_signature}[/bold]  [dim]({sig.extraction_mode})[/dim]")

    doc = obj.documentation
    if doc is None or not doc.parameters:
        return

    table = Table()
    table.add_column("Name")
    table.add_column("Direction")
    table.add_column("Type")
    table.add_column("Description")
    for param in doc.parameters:
        table.add_row(param.name, param.direction, param.type or "-", param.description or "-")
    console.print(table)


def _version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"gxdocgen version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    _configure_logging(verbose)
