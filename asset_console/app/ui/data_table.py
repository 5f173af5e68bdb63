from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generic

from asset_console.app.infrastructure.logging.logger import get_logger, log_action
from asset_console.app.ui.columns import ColumnDef, RowT, find_column, partition_columns, validate_columns
from asset_console.app.ui.filters import filter_rows
from asset_console.app.ui.pagination import (
    PaginationState,
    change_page_size,
    clamp_page,
    goto_page,
    next_page,
    page_range,
    page_window,
    paginate,
    prev_page,
    total_pages,
)
from asset_console.app.ui.render_model import TableRenderModel, build_render_model
from asset_console.app.ui.sorting import SortState, cycle_sort, sort_rows

PHASE_IDLE = "idle"
PHASE_SEARCHING = "searching"
PHASE_SORTING = "sorting"
PHASE_PAGINATING = "paginating"

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaginationOptions:
    enabled: bool = True
    page_size: int = 10
    show_size_changer: bool = False
    page_size_options: tuple[int, ...] = (10, 25, 50, 100)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("pagination.page_size must be >= 1")
        if any(size < 1 for size in self.page_size_options):
            raise ValueError("pagination.page_size_options must all be >= 1")


@dataclass(frozen=True)
class TableOptions:
    pagination: PaginationOptions = field(default_factory=PaginationOptions)
    searchable: bool = False
    search_placeholder: str = "Search..."
    striped: bool = False
    hoverable: bool = True
    bordered: bool = False
    compact: bool = False
    max_height: int | None = None
    sticky_header: bool = False
    empty_text: str = "No data available"
    loading_text: str = "Loading..."


class TablePipeline(Generic[RowT]):
    """Filter, sort and paginate stages; override a stage to move it server-side."""

    def filter(self, rows: Sequence[RowT], columns: Sequence[ColumnDef[RowT]], query: str) -> list[RowT]:
        return filter_rows(rows, columns, query)

    def sort(self, rows: Sequence[RowT], sort_state: SortState | None) -> list[RowT]:
        return sort_rows(rows, sort_state)

    def paginate(self, rows: Sequence[RowT], state: PaginationState) -> list[RowT]:
        return paginate(rows, state)


@dataclass(frozen=True)
class DerivedView(Generic[RowT]):
    filtered: list[RowT]
    ordered: list[RowT]
    page_rows: list[RowT]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    window: list[int]
    start: int
    end: int


class DataTable(Generic[RowT]):
    def __init__(
        self,
        columns: Sequence[ColumnDef[RowT]],
        rows: Iterable[RowT] = (),
        options: TableOptions | None = None,
        *,
        loading: bool = False,
        on_row_click: Callable[[RowT, int], None] | None = None,
        on_search: Callable[[str], None] | None = None,
        on_phase_change: Callable[[str], None] | None = None,
        pipeline: TablePipeline[RowT] | None = None,
    ) -> None:
        validate_columns(columns)
        self.columns: tuple[ColumnDef[RowT], ...] = tuple(columns)
        self.layout = partition_columns(self.columns)
        self.options = options or TableOptions()
        self.pipeline: TablePipeline[RowT] = pipeline or TablePipeline()
        self.loading = loading
        self.on_row_click = on_row_click
        self.on_search = on_search
        self.on_phase_change = on_phase_change
        self.search_query = ""
        self.sort_state: SortState | None = None
        self.pagination = PaginationState(page=1, page_size=self.options.pagination.page_size)
        self.phase = PHASE_IDLE
        self._rows: tuple[RowT, ...] = tuple(rows)

    @property
    def rows(self) -> tuple[RowT, ...]:
        return self._rows

    @property
    def effective_query(self) -> str:
        return self.search_query if self.options.searchable else ""

    def set_rows(self, rows: Iterable[RowT]) -> None:
        self._rows = tuple(rows)
        self._reclamp()

    def set_loading(self, loading: bool) -> None:
        self.loading = loading

    def search(self, query: str) -> None:
        with self._phase(PHASE_SEARCHING):
            self.search_query = query
            self.pagination.page = 1
            if self.on_search:
                self.on_search(query)

    def toggle_sort(self, key: str) -> SortState | None:
        column = find_column(self.columns, key)
        with self._phase(PHASE_SORTING):
            self.sort_state = cycle_sort(self.sort_state, column)
        return self.sort_state

    def goto_page(self, page: int) -> int:
        with self._phase(PHASE_PAGINATING):
            goto_page(self.pagination, page, self.total_pages())
        return self.pagination.page

    def next_page(self) -> int:
        with self._phase(PHASE_PAGINATING):
            next_page(self.pagination, self.total_pages())
        return self.pagination.page

    def prev_page(self) -> int:
        with self._phase(PHASE_PAGINATING):
            prev_page(self.pagination)
        return self.pagination.page

    def set_page_size(self, page_size: int) -> None:
        with self._phase(PHASE_PAGINATING):
            change_page_size(self.pagination, page_size)

    def click_row(self, index: int) -> RowT:
        page_rows = self.derive().page_rows
        if not 0 <= index < len(page_rows):
            raise IndexError(f"row index {index} is outside the current page")
        row = page_rows[index]
        if self.on_row_click:
            self.on_row_click(row, index)
        return row

    def total_pages(self) -> int:
        if not self.options.pagination.enabled:
            return 1
        return total_pages(len(self._ordered()), self.pagination.page_size)

    def derive(self) -> DerivedView[RowT]:
        filtered = self.pipeline.filter(self._rows, self.columns, self.effective_query)
        ordered = self.pipeline.sort(filtered, self.sort_state)
        count = len(ordered)

        if not self.options.pagination.enabled:
            start, end = (1, count) if count else (0, 0)
            return DerivedView(
                filtered=filtered,
                ordered=ordered,
                page_rows=list(ordered),
                total_count=count,
                page=1,
                page_size=max(1, count),
                total_pages=1,
                window=[1],
                start=start,
                end=end,
            )

        page_size = self.pagination.page_size
        pages = total_pages(count, page_size)
        view_state = PaginationState(page=clamp_page(self.pagination.page, pages), page_size=page_size)
        start, end = page_range(view_state, count)
        return DerivedView(
            filtered=filtered,
            ordered=ordered,
            page_rows=self.pipeline.paginate(ordered, view_state),
            total_count=count,
            page=view_state.page,
            page_size=page_size,
            total_pages=pages,
            window=page_window(view_state.page, pages),
            start=start,
            end=end,
        )

    def render(self) -> TableRenderModel:
        return build_render_model(self)

    def _ordered(self) -> list[RowT]:
        filtered = self.pipeline.filter(self._rows, self.columns, self.effective_query)
        return self.pipeline.sort(filtered, self.sort_state)

    def _reclamp(self) -> None:
        previous = self.pagination.page
        self.pagination.page = clamp_page(previous, self.total_pages())
        if previous != self.pagination.page:
            log_action(
                logger,
                module="data_table",
                action="reclamp_page",
                outcome="clamped",
                level=logging.DEBUG,
                previous_page=previous,
                page=self.pagination.page,
            )

    @contextmanager
    def _phase(self, phase: str) -> Iterator[None]:
        self._enter(phase)
        try:
            yield
        finally:
            self._enter(PHASE_IDLE)

    def _enter(self, phase: str) -> None:
        self.phase = phase
        log_action(
            logger,
            module="data_table",
            action="phase",
            outcome=phase,
            level=logging.DEBUG,
            query=self.search_query,
            sort=_describe_sort(self.sort_state),
            page=self.pagination.page,
            page_size=self.pagination.page_size,
        )
        if self.on_phase_change:
            self.on_phase_change(phase)


def _describe_sort(sort_state: SortState | None) -> dict[str, Any] | None:
    if sort_state is None:
        return None
    return {"key": sort_state.key, "direction": sort_state.direction}
