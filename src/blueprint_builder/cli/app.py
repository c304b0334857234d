"""
Blueprint builder CLI: inspect builders and preview the targets they produce.

- ``keys`` lists the registered blueprints of a builder
- ``build`` builds one or more targets and prints them as a table or YAML
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import typer
import yaml
from rich.console import Console

from blueprint_builder.cli.formatters import build_keys_table, build_targets_table, target_rows
from blueprint_builder.cli.load_helpers import load_or_exit
from blueprint_builder.core.errors import BlueprintError
from blueprint_builder.utils.logging import configure_logging

app = typer.Typer(help="Blueprint builder CLI: inspect builders and preview the targets they build.")
console = Console()


def _parse_overrides(items: List[str]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for item in items:
        if "=" not in item:
            console.print(f"[red]Bad --set[/red] (expected name=value): {item}")
            raise typer.Exit(code=2)
        name, value = item.split("=", 1)
        overrides[name.strip()] = value.strip()
    return overrides


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log builder activity at DEBUG level"),
) -> None:
    configure_logging(verbose)


@app.command()
def keys(
    builder_ref: str = typer.Argument(..., help="Builder as 'package.module:BuilderClass'"),
) -> None:
    """List registered blueprint keys in registration order."""
    builder_cls = load_or_exit(builder_ref, console=console)
    try:
        builder = builder_cls.create()
    except BlueprintError as err:
        console.print(f"[red]Failed to create builder:[/red] {err}")
        raise typer.Exit(code=1)

    registered = builder.registered_blueprint_keys
    if not registered:
        console.print(f"[yellow]No blueprints registered[/yellow] for {builder_cls.__qualname__}")
        raise typer.Exit(code=1)
    console.print(build_keys_table(builder_cls.__qualname__, registered))


@app.command()
def build(
    builder_ref: str = typer.Argument(..., help="Builder as 'package.module:BuilderClass'"),
    key: List[str] = typer.Option([], "--key", "-k", help="Blueprint key (repeat to cycle through several)"),
    index: Optional[int] = typer.Option(None, "--index", "-i", help="Blueprint index in registration order"),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Number of targets to build"),
    default_key: Optional[str] = typer.Option(None, "--default-key", help="Default blueprint for the builder"),
    overrides: List[str] = typer.Option([], "--set", "-s", help="name=value blueprint overrides"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: 'table' or 'yaml'"),
) -> None:
    """Build targets and print their members."""
    if output_format not in ("table", "yaml"):
        console.print("[red]Supported formats[/red]: 'table', 'yaml'")
        raise typer.Exit(code=2)
    if index is not None and (count is not None or len(key) > 1):
        console.print("[red]--index cannot be combined with --count or several --key options[/red]")
        raise typer.Exit(code=2)

    builder_cls = load_or_exit(builder_ref, console=console)
    try:
        builder = builder_cls.create(default_key)
        for name, value in _parse_overrides(overrides).items():
            builder.set(name, value)

        targets: List[Any]
        if count is not None:
            targets = list(builder.build_cycle(count, *key))
        elif len(key) > 1:
            targets = list(builder.build_many(*key))
        else:
            targets = [builder.build(key[0] if key else None, index)]
    except BlueprintError as err:
        console.print(f"[red]Build failed:[/red] {err}")
        raise typer.Exit(code=1)

    rows = target_rows(targets)
    if output_format == "yaml":
        console.print(
            yaml.safe_dump(rows, default_flow_style=False, indent=2, sort_keys=False),
            end="",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        return

    title = f"{builder_cls.__qualname__} ({len(rows)} target(s))"
    console.print(build_targets_table(title, rows))


__all__ = ["app"]
