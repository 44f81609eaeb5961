"""Helpers that turn reply rows into something ui.table can display."""

from typing import Any

from stratsync.core.normalizer import dumps_compact
from stratsync.models.schemas import Row

ROW_KEY = "__row__"


def table_columns(rows: list[Row]) -> list[str]:
    """Union of row keys, in first-seen order."""
    columns: dict[str, None] = {}
    for row in rows:
        columns.update(dict.fromkeys(row))
    return list(columns)


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict | list):
        return dumps_compact(value)
    return str(value)


def table_view(rows: list[Row]) -> tuple[list[dict[str, str]], list[dict[str, str]]]:
    """Build ui.table column definitions and display rows.

    Missing cells render empty. Each display row gets a positional key since
    backend rows carry no id of their own.
    """
    names = table_columns(rows)
    columns = [
        {"name": name, "label": name, "field": name, "align": "left"} for name in names
    ]
    display_rows = [
        {ROW_KEY: str(index), **{name: format_cell(row.get(name)) for name in names}}
        for index, row in enumerate(rows)
    ]
    return columns, display_rows
