from __future__ import annotations

from asset_console.app.ui.columns import ColumnDef
from asset_console.app.ui.data_table import PaginationOptions, TableOptions
from asset_console.app.views.list_view import ListView, actions_column, or_placeholder, stacked


def build_blogs_view() -> ListView:
    columns = (
        ColumnDef(
            key="title",
            title="Post",
            sortable=True,
            max_width=48,
            ellipsis=True,
            render=lambda _value, row, _index: stacked(row.get("title"), row.get("excerpt")),
        ),
        ColumnDef(key="category", title="Category", sortable=True),
        ColumnDef(key="date", title="Date", sortable=True),
        ColumnDef(key="readTime", title="Read Time", render=lambda value, _row, _index: or_placeholder(value, "N/A")),
        ColumnDef(
            key="published",
            title="Status",
            sortable=True,
            render=lambda value, _row, _index: "Published" if value else "Draft",
        ),
        actions_column(),
    )
    return ListView(
        module="blogs",
        title="Blog Posts",
        resource="blogs",
        order=("created_at", "desc"),
        columns=columns,
        options=TableOptions(
            pagination=PaginationOptions(enabled=True, page_size=10, show_size_changer=True, page_size_options=(10, 25, 50)),
            searchable=True,
            search_placeholder="Search blog posts...",
        ),
        detail_fields=("id", "title", "slug", "category", "date", "readTime", "published", "excerpt"),
    )
