"""CLI entry point for jastx.

Invoked as::

    jastx [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m jastx.cli.main

Trees are read from JSON or YAML documents in the serializer's dict form.

Commands
--------
render      Render a tree document to source text
validate    Validate a tree document and report diagnostics
kinds       List the node kinds of the taxonomy
version     Show version information
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from jastx.taxonomy import Family

if TYPE_CHECKING:
    from jastx.ast import Node
    from jastx.validator import Diagnostic

console = Console()
err_console = Console(stderr=True)

_FORMATS = ["auto", "json", "yaml"]


def _read_source(path: str) -> str:
    """Read a tree document, exiting on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


def _resolve_format(path: str, input_format: str) -> str:
    if input_format != "auto":
        return input_format
    return "yaml" if Path(path).suffix.lower() in (".yaml", ".yml") else "json"


def _load_tree(source: str, path: str, input_format: str) -> "Node":
    """Deserialize a tree document, exiting on malformed input.

    ``NodeValidationError`` is left to the caller, which decides how to
    report rejected nodes.
    """
    from jastx.ast import NodeSerializer, TreeFormatError

    serializer = NodeSerializer()
    try:
        if _resolve_format(path, input_format) == "yaml":
            return serializer.from_yaml(source)
        return serializer.from_json(source)
    except json.JSONDecodeError as exc:
        err_console.print(f"[red]Invalid JSON[/red] in {path}: {exc}")
        sys.exit(1)
    except yaml.YAMLError as exc:
        err_console.print(f"[red]Invalid YAML[/red] in {path}: {exc}")
        sys.exit(1)
    except TreeFormatError as exc:
        err_console.print(f"[red]Malformed tree[/red] in {path}: {exc}")
        sys.exit(1)


def _severity_color(severity_name: str) -> str:
    """Map a DiagnosticSeverity name to a Rich color string."""
    colors = {
        "ERROR": "red",
        "WARNING": "yellow",
        "INFORMATION": "blue",
        "HINT": "dim",
    }
    return colors.get(severity_name, "white")


def _diagnostics_table(title: str, diagnostics: "list[Diagnostic]") -> Table:
    table = Table(title=title, show_lines=True)
    table.add_column("Severity", style="bold", min_width=10)
    table.add_column("Code", min_width=8)
    table.add_column("Location", min_width=10)
    table.add_column("Message")

    for d in diagnostics:
        color = _severity_color(d.severity.name)
        location = d.path if d.position is None else f"{d.path}.children[{d.position}]"
        table.add_row(
            f"[{color}]{d.severity.name}[/{color}]",
            d.code,
            f"{location}\n[dim]{d.kind}[/dim]",
            d.message + (f"\n[dim]hint: {d.suggestion}[/dim]" if d.suggestion else ""),
        )
    return table


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="jastx")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """JavaScript/TypeScript syntax tree toolkit: taxonomy, validator, renderer."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, markup=False, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from jastx import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]jastx[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# kinds command
# ---------------------------------------------------------------------------


@cli.command(name="kinds")
@click.option(
    "--family",
    "family_name",
    type=click.Choice([f.name.lower() for f in Family]),
    default=None,
    help="Only list kinds of this family",
)
def kinds_command(family_name: str | None) -> None:
    """List the node kinds of the taxonomy with their child slots."""
    from jastx.taxonomy import Kind
    from jastx.validator import shape_of

    kinds = list(Kind)
    if family_name is not None:
        kinds = [k for k in kinds if k.family is Family[family_name.upper()]]

    table = Table(title="Node kinds")
    table.add_column("Kind", style="bold cyan")
    table.add_column("Family")
    table.add_column("Properties")
    table.add_column("Children")

    for kind in kinds:
        shape = shape_of(kind)
        props = ", ".join(
            f"{name}{'' if spec.required else '?'}" for name, spec in shape.props.items()
        )
        slots = ", ".join(
            f"{slot.name}[{slot.min}..{'n' if slot.max is None else slot.max}]"
            for slot in shape.slots
        )
        table.add_row(kind.value, kind.family.name.lower(), props or "-", slots or "-")

    console.print(table)
    console.print(f"\n[bold]{len(kinds)}[/bold] kind(s)")


# ---------------------------------------------------------------------------
# render command
# ---------------------------------------------------------------------------


@cli.command(name="render")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--format",
    "input_format",
    type=click.Choice(_FORMATS, case_sensitive=False),
    default="auto",
    help="Input document format (default: by file extension)",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def render_command(file: str, input_format: str, output: str | None) -> None:
    """Render a tree document to source text.

    FILE is the path to a JSON or YAML tree document.
    """
    from jastx.renderer import render
    from jastx.validator import NodeValidationError

    source = _read_source(file)
    try:
        tree = _load_tree(source, file, input_format.lower())
    except NodeValidationError as exc:
        err_console.print(f"[red]Invalid tree[/red] in {file}:")
        for diagnostic in exc.diagnostics:
            err_console.print(f"  {diagnostic}", markup=False)
        sys.exit(1)

    text = render(tree)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        console.print(f"[green]Rendered to[/green] {output}")
    else:
        click.echo(text)


# ---------------------------------------------------------------------------
# validate command
# ---------------------------------------------------------------------------


@cli.command(name="validate")
@click.argument("file", type=click.Path(exists=False))
@click.option("--strict", is_flag=True, default=False, help="Treat warnings as errors")
@click.option(
    "--format",
    "input_format",
    type=click.Choice(_FORMATS, case_sensitive=False),
    default="auto",
    help="Input document format (default: by file extension)",
)
def validate_command(file: str, strict: bool, input_format: str) -> None:
    """Validate a tree document and report diagnostics.

    FILE is the path to a JSON or YAML tree document.
    """
    from jastx.validator import NodeValidationError, Validator

    source = _read_source(file)
    try:
        tree = _load_tree(source, file, input_format.lower())
    except NodeValidationError as exc:
        diagnostics = list(exc.diagnostics)
    else:
        diagnostics = Validator(strict=strict).validate_tree(tree)

    if not diagnostics:
        console.print(f"[green]OK[/green] {file} — no issues found")
        sys.exit(0)

    errors = [d for d in diagnostics if d.is_error]
    warnings = [d for d in diagnostics if not d.is_error]

    console.print(_diagnostics_table(f"Validation: {file}", diagnostics))
    console.print(
        f"\n[bold]Summary:[/bold] {len(errors)} error(s), {len(warnings)} warning(s)"
    )

    if errors:
        sys.exit(1)


if __name__ == "__main__":
    cli()
