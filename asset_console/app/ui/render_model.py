from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from asset_console.app.ui.columns import ColumnDef, resolve_value
from asset_console.app.ui.filters import stringify_value
from asset_console.app.ui.sorting import sort_indicator

if TYPE_CHECKING:
    from asset_console.app.ui.data_table import DataTable


@dataclass(frozen=True)
class HeaderCell:
    key: str
    title: str
    align: str
    sortable: bool
    indicator: str | None
    fixed: str | None
    ellipsis: bool
    width: int | None
    min_width: int | None
    max_width: int | None
    sticky: bool


@dataclass(frozen=True)
class BodyCell:
    key: str
    content: Any
    align: str
    fixed: str | None
    truncate: bool
    tooltip: str | None
    width: int | None
    min_width: int | None
    max_width: int | None


@dataclass(frozen=True)
class BodyRow:
    index: int
    row: Any
    cells: tuple[BodyCell, ...]
    striped: bool
    clickable: bool


@dataclass(frozen=True)
class EmptyRow:
    text: str
    colspan: int


@dataclass(frozen=True)
class SearchBox:
    query: str
    placeholder: str


@dataclass(frozen=True)
class PaginationBar:
    summary: str
    start: int
    end: int
    total: int
    page: int
    total_pages: int
    pages: tuple[int, ...]
    prev_disabled: bool
    next_disabled: bool
    page_size: int
    size_options: tuple[int, ...] | None


@dataclass(frozen=True)
class TableLayout:
    fixed_columns: bool
    sticky_header: bool
    max_height: int | None
    striped: bool
    hoverable: bool
    bordered: bool
    compact: bool


@dataclass(frozen=True)
class TableRenderModel:
    loading: bool
    loading_text: str
    layout: TableLayout
    search: SearchBox | None = None
    header: tuple[HeaderCell, ...] = ()
    rows: tuple[BodyRow, ...] = ()
    empty: EmptyRow | None = None
    pagination: PaginationBar | None = None


def build_render_model(table: "DataTable[Any]") -> TableRenderModel:
    options = table.options
    layout = TableLayout(
        fixed_columns=table.layout.has_fixed,
        sticky_header=options.sticky_header,
        max_height=options.max_height,
        striped=options.striped,
        hoverable=options.hoverable,
        bordered=options.bordered,
        compact=options.compact,
    )
    if table.loading:
        return TableRenderModel(loading=True, loading_text=options.loading_text, layout=layout)

    columns = table.layout.ordered
    derived = table.derive()
    header = tuple(
        HeaderCell(
            key=column.key,
            title=column.title,
            align=column.align,
            sortable=column.sortable,
            indicator=sort_indicator(table.sort_state, column),
            fixed=column.fixed,
            ellipsis=column.ellipsis,
            width=column.width,
            min_width=column.effective_min_width,
            max_width=column.max_width,
            sticky=options.sticky_header,
        )
        for column in columns
    )
    rows = tuple(
        BodyRow(
            index=index,
            row=row,
            cells=tuple(_build_cell(column, row, index) for column in columns),
            striped=options.striped and index % 2 == 1,
            clickable=table.on_row_click is not None,
        )
        for index, row in enumerate(derived.page_rows)
    )

    empty = None if rows else EmptyRow(text=options.empty_text, colspan=len(columns))
    pagination = None
    if options.pagination.enabled and rows:
        pagination = PaginationBar(
            summary=f"Showing {derived.start} to {derived.end} of {derived.total_count} results",
            start=derived.start,
            end=derived.end,
            total=derived.total_count,
            page=derived.page,
            total_pages=derived.total_pages,
            pages=tuple(derived.window),
            prev_disabled=derived.page == 1,
            next_disabled=derived.page == derived.total_pages,
            page_size=derived.page_size,
            size_options=options.pagination.page_size_options if options.pagination.show_size_changer else None,
        )

    search = SearchBox(query=table.search_query, placeholder=options.search_placeholder) if options.searchable else None
    return TableRenderModel(
        loading=False,
        loading_text=options.loading_text,
        layout=layout,
        search=search,
        header=header,
        rows=rows,
        empty=empty,
        pagination=pagination,
    )


def _build_cell(column: ColumnDef[Any], row: Any, index: int) -> BodyCell:
    value = resolve_value(row, column.key)
    content = column.render(value, row, index) if column.render else value
    return BodyCell(
        key=column.key,
        content=content,
        align=column.align,
        fixed=column.fixed,
        truncate=column.ellipsis,
        tooltip=stringify_value(value) if column.ellipsis else None,
        width=column.width,
        min_width=column.effective_min_width,
        max_width=column.max_width,
    )
