from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from asset_console.app.ui.columns import ColumnDef
from asset_console.app.ui.data_table import DataTable, TableOptions

Row = dict[str, Any]


@dataclass(frozen=True)
class ListView:
    module: str
    title: str
    resource: str
    order: tuple[str, str] | None
    columns: tuple[ColumnDef[Row], ...]
    options: TableOptions
    filter_keys: tuple[str, ...] = ()
    detail_fields: tuple[str, ...] = ()

    def build_table(self, on_row_click: Callable[[Row, int], None] | None = None) -> DataTable[Row]:
        return DataTable(self.columns, options=self.options, on_row_click=on_row_click)

    def describe_row(self, row: Row) -> list[tuple[str, str]]:
        fields = self.detail_fields or tuple(row.keys())
        return [(name, format_detail(row.get(name))) for name in fields]


def actions_column() -> ColumnDef[Row]:
    return ColumnDef(key="id", title="Actions", align="right", render=lambda _value, _row, _index: "open · delete")


def format_price(value: Any) -> str:
    if value is None or value == "":
        return ""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if number.is_integer():
        return f"${int(number):,}"
    return f"${number:,.2f}".rstrip("0")


def check_mark(value: Any) -> str:
    return "✓" if value else "✗"


def or_placeholder(value: Any, placeholder: str) -> Any:
    return placeholder if value in (None, "") else value


def stacked(primary: Any, secondary: Any) -> str:
    primary_text = "" if primary is None else str(primary)
    if secondary in (None, ""):
        return primary_text
    return f"{primary_text} · {secondary}"


def format_detail(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (list, tuple)):
        return ", ".join(format_detail(item) for item in value) or "-"
    if isinstance(value, dict):
        return ", ".join(f"{key}={format_detail(item)}" for key, item in value.items()) or "-"
    return str(value)
