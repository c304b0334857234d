from __future__ import annotations

"""Helpers for locating builder classes given on the command line."""

import importlib
from typing import Any, Type

import typer
from rich.console import Console

from blueprint_builder.core.builder import BlueprintBuilder


def import_builder(ref: str) -> Type[BlueprintBuilder[Any, Any]]:
    """Import ``package.module:BuilderClass``."""
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Expected 'module:BuilderClass', got {ref!r}")
    module = importlib.import_module(module_name)
    builder_cls = module
    for part in attr.split("."):
        builder_cls = getattr(builder_cls, part)
    if not (isinstance(builder_cls, type) and issubclass(builder_cls, BlueprintBuilder)):
        raise TypeError(f"{ref} is not a BlueprintBuilder subclass")
    return builder_cls


def load_or_exit(ref: str, *, console: Console) -> Type[BlueprintBuilder[Any, Any]]:
    try:
        return import_builder(ref)
    except ValueError as err:
        console.print(f"[red]Bad builder reference:[/red] {err}")
        raise typer.Exit(code=2)
    except (ImportError, AttributeError, TypeError) as err:
        console.print(f"[red]Failed to load builder:[/red] {err}")
        raise typer.Exit(code=1)


__all__ = ["import_builder", "load_or_exit"]
