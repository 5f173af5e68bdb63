from __future__ import annotations

from asset_console.app.ui.columns import ColumnDef
from asset_console.app.ui.data_table import PaginationOptions, TableOptions
from asset_console.app.views.list_view import ListView, actions_column, or_placeholder, stacked

NOT_ADDED = "Not added"
# Body lines kept on screen before the listing scrolls vertically.
CONTACTS_MAX_HEIGHT = 20


def build_contacts_view(pagination: PaginationOptions | None = None) -> ListView:
    columns = (
        ColumnDef(
            key="name",
            title="Submitted by",
            sortable=True,
            render=lambda _value, row, _index: stacked(row.get("name"), row.get("email")),
        ),
        ColumnDef(
            key="message",
            title="Message",
            min_width=30,
            max_width=50,
            render=lambda value, _row, _index: or_placeholder(value, "No description"),
        ),
        ColumnDef(key="phone_number", title="Phone Number", render=lambda value, _row, _index: value or NOT_ADDED),
        ColumnDef(
            key="location",
            title="Location",
            align="center",
            render=lambda value, _row, _index: or_placeholder(value, NOT_ADDED),
        ),
        actions_column(),
    )
    return ListView(
        module="contacts",
        title="Contact Submissions",
        resource="contact_submissions",
        order=("created_at", "desc"),
        columns=columns,
        options=TableOptions(
            pagination=pagination or PaginationOptions(enabled=True, page_size=10),
            searchable=True,
            search_placeholder="Search contacts...",
            max_height=CONTACTS_MAX_HEIGHT,
            sticky_header=True,
            hoverable=True,
        ),
        detail_fields=("id", "name", "email", "phone_number", "interest", "message", "created_at"),
    )
