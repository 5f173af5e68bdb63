from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from asset_console.app.ui.columns import ColumnDef, RowT, resolve_value
from asset_console.app.ui.filters import stringify_value

SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_DIRECTIONS = (SORT_ASC, SORT_DESC)

INDICATOR_ASC = "↑"
INDICATOR_DESC = "↓"
INDICATOR_UNSORTED = "⇅"


@dataclass(frozen=True)
class SortState:
    key: str
    direction: str = SORT_ASC

    def __post_init__(self) -> None:
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"direction must be one of {SORT_DIRECTIONS}, got {self.direction!r}")


def cycle_sort(current: SortState | None, column: ColumnDef[Any]) -> SortState | None:
    """Header activation: none -> asc -> desc -> none; another column restarts at asc."""
    if not column.sortable:
        return current
    if current is None or current.key != column.key:
        return SortState(key=column.key, direction=SORT_ASC)
    if current.direction == SORT_ASC:
        return SortState(key=column.key, direction=SORT_DESC)
    return None


def sort_indicator(sort_state: SortState | None, column: ColumnDef[Any]) -> str | None:
    if not column.sortable:
        return None
    if sort_state is None or sort_state.key != column.key:
        return INDICATOR_UNSORTED
    return INDICATOR_ASC if sort_state.direction == SORT_ASC else INDICATOR_DESC


def sort_rows(rows: Iterable[RowT], sort_state: SortState | None) -> list[RowT]:
    if sort_state is None:
        return list(rows)
    descending = sort_state.direction == SORT_DESC
    key = sort_state.key
    return sorted(rows, key=lambda row: _SortKey(resolve_value(row, key), descending))


def compare_values(left: Any, right: Any) -> int:
    if _is_number(left) and _is_number(right):
        return _sign(left, right)
    if isinstance(left, str) and isinstance(right, str):
        return _sign(collation_key(left), collation_key(right))
    if _comparable_temporals(left, right):
        return _sign(left, right)
    return _sign(collation_key(stringify_value(left)), collation_key(stringify_value(right)))


def collation_key(text: str) -> tuple[str, str]:
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (base.casefold(), text)


class _SortKey:
    __slots__ = ("value", "descending")

    def __init__(self, value: Any, descending: bool) -> None:
        self.value = value
        self.descending = descending

    def __lt__(self, other: "_SortKey") -> bool:
        # missing values sort last in both directions
        if self.value is None:
            return False
        if other.value is None:
            return True
        result = compare_values(self.value, other.value)
        return result > 0 if self.descending else result < 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal))


def _comparable_temporals(left: Any, right: Any) -> bool:
    if isinstance(left, datetime) and isinstance(right, datetime):
        return (left.tzinfo is None) == (right.tzinfo is None)
    return (
        isinstance(left, date)
        and isinstance(right, date)
        and not isinstance(left, datetime)
        and not isinstance(right, datetime)
    )


def _sign(left: Any, right: Any) -> int:
    return (left > right) - (left < right)
