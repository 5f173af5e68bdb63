from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from asset_console.app.domain.models.category import parse_dynamic_fields, validate_dynamic_data
from asset_console.app.ui.columns import ColumnDef
from asset_console.app.ui.data_table import PaginationOptions, TableOptions
from asset_console.app.views.list_view import (
    ListView,
    Row,
    actions_column,
    check_mark,
    format_detail,
    format_price,
    stacked,
)

UNKNOWN_CATEGORY = "Unknown"

CategoriesProvider = Callable[[], Sequence[Row]]


def find_category(categories: Sequence[Row], category_id: Any) -> Row | None:
    return next((item for item in categories if category_id is not None and item.get("id") == category_id), None)


def category_label(category: Row | None) -> str:
    if category is None:
        return UNKNOWN_CATEGORY
    icon = category.get("icon")
    title = category.get("title") or UNKNOWN_CATEGORY
    return f"{icon} {title}" if icon else title


def dynamic_data_normalizer(categories: CategoriesProvider) -> Callable[[Row], Row]:
    """Checks an asset's dynamic_data against the custom fields of its category."""

    def normalize(payload: Row) -> Row:
        category = find_category(categories(), payload.get("category_id"))
        if category is None:
            return payload
        fields = parse_dynamic_fields(category.get("dynamic_fields"))
        return {**payload, "dynamic_data": validate_dynamic_data(fields, payload.get("dynamic_data"))}

    return normalize


def describe_dynamic_data(category: Row | None, data: dict[str, Any] | None) -> list[tuple[str, str]]:
    if category is None:
        return [(name, format_detail(value)) for name, value in (data or {}).items()]
    fields = parse_dynamic_fields(category.get("dynamic_fields"))
    cleaned = validate_dynamic_data(fields, data)
    return [(field.label, format_detail(cleaned.get(field.name))) for field in fields]


def build_assets_view(categories: CategoriesProvider) -> ListView:
    columns = (
        ColumnDef(
            key="title",
            title="Asset",
            sortable=True,
            max_width=40,
            render=lambda _value, row, _index: stacked(row.get("title"), row.get("short_description")),
        ),
        ColumnDef(
            key="category_id",
            title="Category",
            sortable=True,
            render=lambda value, _row, _index: category_label(find_category(categories(), value)),
        ),
        ColumnDef(
            key="price",
            title="Price",
            sortable=True,
            align="right",
            render=lambda value, _row, _index: format_price(value),
        ),
        ColumnDef(key="status", title="Status", sortable=True),
        ColumnDef(
            key="published",
            title="Published",
            sortable=True,
            align="center",
            render=lambda value, _row, _index: check_mark(value),
        ),
        actions_column(),
    )
    options = TableOptions(
        pagination=PaginationOptions(enabled=True, page_size=15, show_size_changer=True, page_size_options=(15, 25, 50, 100)),
        searchable=True,
        search_placeholder="Search assets...",
        hoverable=True,
    )
    return ListView(
        module="assets",
        title="Assets Management",
        resource="assets",
        order=("created_at", "desc"),
        columns=columns,
        options=options,
        filter_keys=("category_id",),
        detail_fields=(
            "id",
            "title",
            "slug",
            "category_id",
            "price",
            "status",
            "published",
            "featured",
            "country",
            "location",
            "created_at",
        ),
    )
