from __future__ import annotations

from asset_console.app.ui.columns import ColumnDef
from asset_console.app.ui.data_table import PaginationOptions, TableOptions
from asset_console.app.views.list_view import ListView, Row, actions_column, or_placeholder, stacked

DEFAULT_ICON = "📁"


def count_fields(value: object) -> str:
    count = len(value) if isinstance(value, (list, tuple)) else 0
    return f"{count} custom {'field' if count == 1 else 'fields'}"


def render_title(_value: object, row: Row, _index: int) -> str:
    return f"{row.get('icon') or DEFAULT_ICON} {stacked(row.get('title'), row.get('slug'))}"


def build_categories_view(pagination: PaginationOptions | None = None) -> ListView:
    columns = (
        ColumnDef(key="title", title="Category", sortable=True, render=render_title),
        ColumnDef(
            key="description",
            title="Description",
            ellipsis=True,
            render=lambda value, _row, _index: or_placeholder(value, "No description"),
        ),
        ColumnDef(key="dynamic_fields", title="Dynamic Fields", render=lambda value, _row, _index: count_fields(value)),
        ColumnDef(
            key="is_active",
            title="Status",
            sortable=True,
            render=lambda value, _row, _index: "Active" if value else "Inactive",
        ),
        ColumnDef(key="display_order", title="Order", sortable=True, align="center"),
        actions_column(),
    )
    return ListView(
        module="categories",
        title="Categories",
        resource="categories",
        order=("display_order", "asc"),
        columns=columns,
        options=TableOptions(
            pagination=pagination or PaginationOptions(enabled=True, page_size=10),
            searchable=True,
            search_placeholder="Search categories...",
        ),
        detail_fields=("id", "title", "slug", "icon", "description", "dynamic_fields", "is_active", "display_order"),
    )
