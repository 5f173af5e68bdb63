from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from asset_console.app.ui.columns import RowT

PAGE_WINDOW_SIZE = 5


@dataclass
class PaginationState:
    page: int = 1
    page_size: int = 10

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")


def total_pages(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, total: int) -> int:
    return min(max(1, page), max(1, total))


def paginate(rows: Sequence[RowT], state: PaginationState) -> list[RowT]:
    page = clamp_page(state.page, total_pages(len(rows), state.page_size))
    start = (page - 1) * state.page_size
    return list(rows[start : start + state.page_size])


def next_page(state: PaginationState, total: int) -> PaginationState:
    state.page = clamp_page(state.page + 1, total)
    return state


def prev_page(state: PaginationState) -> PaginationState:
    state.page = max(1, state.page - 1)
    return state


def goto_page(state: PaginationState, page: int, total: int) -> PaginationState:
    state.page = clamp_page(page, total)
    return state


def change_page_size(state: PaginationState, page_size: int) -> PaginationState:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    state.page_size = page_size
    state.page = 1
    return state


def page_window(current: int, total: int, size: int = PAGE_WINDOW_SIZE) -> list[int]:
    """Page numbers to show as buttons: at most `size`, always containing `current`."""
    if total <= size:
        return list(range(1, total + 1))
    half = size // 2
    if current <= half + 1:
        first = 1
    elif current >= total - half:
        first = total - size + 1
    else:
        first = current - half
    return list(range(first, first + size))


def page_range(state: PaginationState, count: int) -> tuple[int, int]:
    """1-based bounds of the visible slice, (0, 0) when there is nothing to show."""
    if count == 0:
        return (0, 0)
    page = clamp_page(state.page, total_pages(count, state.page_size))
    start = (page - 1) * state.page_size + 1
    return (start, min(page * state.page_size, count))
