"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Sequence

from rich.table import Table

from blueprint_builder.core.introspection import read_members


def _plain(value: Any) -> Any:
    """Reduce a member value to something YAML can represent."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return _plain(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_plain(v) for v in value]
    return str(value)


def target_rows(targets: Sequence[Any]) -> List[Dict[str, Any]]:
    """Public members of each target as plain dictionaries."""
    rows: List[Dict[str, Any]] = []
    for target in targets:
        members = read_members(target)
        rows.append({name: _plain(value) for name, value in members.items() if not name.startswith("_")})
    return rows


def build_targets_table(title: str, rows: Sequence[Dict[str, Any]]) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    columns: List[str] = []
    for row in rows:
        for name in row:
            if name not in columns:
                columns.append(name)
    for name in columns:
        table.add_column(name)
    for position, row in enumerate(rows):
        table.add_row(str(position), *(str(row.get(name, "")) for name in columns))
    return table


def build_keys_table(title: str, keys: Sequence[str]) -> Table:
    table = Table(title=title)
    table.add_column("Index", justify="right")
    table.add_column("Key")
    for position, key in enumerate(keys):
        table.add_row(str(position), key)
    return table


__all__ = ["build_keys_table", "build_targets_table", "target_rows"]
