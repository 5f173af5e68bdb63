from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Any

from asset_console.app.ui.columns import ColumnDef, RowT, resolve_value


def clean_filters(filters: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in filters.items() if value not in (None, "")}


def stringify_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify_value(item) for item in value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def filter_rows(rows: Iterable[RowT], columns: Sequence[ColumnDef[RowT]], query: str) -> list[RowT]:
    if not query:
        return list(rows)

    needle = query.lower()

    def _matches(row: RowT) -> bool:
        for column in columns:
            value = resolve_value(row, column.key)
            if value is None:
                continue
            if needle in stringify_value(value).lower():
                return True
        return False

    return [row for row in rows if _matches(row)]
