from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

RowT = TypeVar("RowT")

ALIGNMENTS = ("left", "center", "right")
FIXED_SIDES = ("left", "right")
DEFAULT_FIXED_MIN_WIDTH = 16


@dataclass(frozen=True)
class ColumnDef(Generic[RowT]):
    key: str
    title: str
    sortable: bool = False
    render: Callable[[Any, RowT, int], Any] | None = None
    align: str = "left"
    width: int | None = None
    min_width: int | None = None
    max_width: int | None = None
    fixed: str | None = None
    ellipsis: bool = False

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("column key must not be empty")
        if self.align not in ALIGNMENTS:
            raise ValueError(f"align must be one of {ALIGNMENTS}, got {self.align!r}")
        if self.fixed is not None and self.fixed not in FIXED_SIDES:
            raise ValueError(f"fixed must be one of {FIXED_SIDES} or None, got {self.fixed!r}")

    @property
    def effective_min_width(self) -> int | None:
        if self.min_width is not None:
            return self.min_width
        return DEFAULT_FIXED_MIN_WIDTH if self.fixed else None


@dataclass(frozen=True)
class ColumnLayout(Generic[RowT]):
    left: tuple[ColumnDef[RowT], ...]
    scrollable: tuple[ColumnDef[RowT], ...]
    right: tuple[ColumnDef[RowT], ...]

    @property
    def has_fixed(self) -> bool:
        return bool(self.left or self.right)

    @property
    def ordered(self) -> tuple[ColumnDef[RowT], ...]:
        return self.left + self.scrollable + self.right


def resolve_value(row: Any, key: str) -> Any:
    """Read one field from a row; mapping rows and attribute rows are both accepted."""
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def validate_columns(columns: Sequence[ColumnDef[Any]]) -> None:
    seen: set[str] = set()
    for column in columns:
        if column.key in seen:
            raise ValueError(f"duplicate column key: {column.key!r}")
        seen.add(column.key)


def partition_columns(columns: Sequence[ColumnDef[RowT]]) -> ColumnLayout[RowT]:
    return ColumnLayout(
        left=tuple(column for column in columns if column.fixed == "left"),
        scrollable=tuple(column for column in columns if column.fixed is None),
        right=tuple(column for column in columns if column.fixed == "right"),
    )


def find_column(columns: Sequence[ColumnDef[RowT]], key: str) -> ColumnDef[RowT]:
    for column in columns:
        if column.key == key:
            return column
    raise KeyError(key)
