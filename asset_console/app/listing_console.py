from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from clients.asset_backend_sdk.errors import ApiError

from asset_console.app.application.row_store import RowStore
from asset_console.app.domain.models.category import DynamicDataError
from asset_console.app.error_presenter import build_error_payload, print_error_banner
from asset_console.app.infrastructure.logging.logger import get_logger, log_action
from asset_console.app.ui.data_table import DataTable
from asset_console.app.ui.table_printer import print_table, scroll_limit
from asset_console.app.views.list_view import ListView, Row

logger = get_logger(__name__)

DEFAULT_MAX_WIDTH = 120
COMMANDS_HINT = (
    "\nCommands: /=search, s=sort, n=next, p=prev, g=goto, z=page_size, h/l=scroll columns, "
    "j/k=scroll rows, o=open row, d=delete row, {filters}r=refresh, b=back"
)


def _ask_optional(label: str) -> str | None:
    answer = input(f"{label} (blank for any): ").strip()
    return answer if answer else None


@dataclass
class Listing:
    view: ListView
    store: RowStore
    prepare: Callable[[], None] | None = None
    extra_details: Callable[[Row], list[tuple[str, str]]] | None = None
    filter_choices: Callable[[], list[tuple[str, str]]] | None = None
    filters: dict[str, Any] = field(default_factory=dict)


@dataclass
class ScrollState:
    columns: int = 0
    lines: int = 0


class ListingConsole:
    def __init__(self, listings: Sequence[Listing], max_width: int | None = DEFAULT_MAX_WIDTH) -> None:
        self.listings = list(listings)
        self.max_width = max_width

    def run(self) -> None:
        while True:
            print("\nAsset Admin")
            for number, listing in enumerate(self.listings, start=1):
                print(f"{number}. {listing.view.title}")
            print("b. Exit")
            option = input("Select an option: ").strip().lower()
            if option == "b":
                return
            if not option.isdigit() or not 1 <= int(option) <= len(self.listings):
                print("[validation] Unknown option.")
                continue
            listing = self.listings[int(option) - 1]
            try:
                self._run_listing_loop(listing)
            except ApiError as error:
                print_error_banner(build_error_payload(error))

    def _run_listing_loop(self, listing: Listing) -> None:
        view = listing.view
        table = view.build_table(on_row_click=lambda row, _index: self._print_detail(listing, row))
        scroll = ScrollState()
        reload = True

        while True:
            if reload:
                self._load(listing, table)
                reload = False

            print_table(
                view.title,
                table.render(),
                max_width=self.max_width,
                scroll_offset=scroll.columns,
                row_offset=scroll.lines,
                show_index=True,
            )
            filter_label = "c=filters, " if view.filter_keys else ""
            print(COMMANDS_HINT.format(filters=filter_label))
            command = input("cmd: ").strip().lower()

            if command == "/":
                table.search(input("search: ").strip())
                scroll.lines = 0
            elif command == "s":
                self._sort(table)
            elif command == "n":
                table.next_page()
                scroll.lines = 0
            elif command == "p":
                table.prev_page()
                scroll.lines = 0
            elif command == "g":
                requested = input("page: ").strip()
                if requested.isdigit():
                    table.goto_page(int(requested))
                    scroll.lines = 0
            elif command == "z":
                sizes = ", ".join(str(size) for size in view.options.pagination.page_size_options)
                print(f"Page sizes: {sizes}")
                requested_size = input("page_size: ").strip()
                if requested_size.isdigit() and int(requested_size) > 0:
                    table.set_page_size(int(requested_size))
                    scroll.lines = 0
                else:
                    print("[validation] page_size must be a positive number.")
            elif command == "h":
                scroll.columns = max(0, scroll.columns - 1)
            elif command == "l":
                scroll.columns = min(scroll.columns + 1, max(0, len(table.layout.scrollable) - 1))
            elif command == "j":
                limit = scroll_limit(table.render(), max_width=self.max_width, scroll_offset=scroll.columns, show_index=True)
                scroll.lines = min(scroll.lines + (view.options.max_height or 1), limit)
            elif command == "k":
                step = view.options.max_height or 1
                scroll.lines = max(0, scroll.lines - step)
            elif command == "o":
                self._open_row(table)
            elif command == "d":
                self._delete_row(listing, table)
            elif command == "c" and view.filter_keys:
                self._update_filters(listing)
                reload = True
            elif command == "r":
                print(f"[refresh] Reloading {view.module}...")
                reload = True
            elif command == "b":
                return
            else:
                print("[validation] Unknown command.")

    def _load(self, listing: Listing, table: DataTable[Row]) -> None:
        view = listing.view
        table.set_loading(True)
        print_table(view.title, table.render())
        if listing.prepare:
            listing.prepare()
        listing.store.fetch_rows(listing.filters)
        table.set_loading(False)
        if listing.store.error is not None:
            print(f"[error] {view.module.upper()}: the listing could not be loaded.")
            print_error_banner(build_error_payload(listing.store.error))
        table.set_rows(listing.store.rows)
        log_action(logger, module=view.module, action="load_listing", outcome="done", rows=len(listing.store.rows))

    def _sort(self, table: DataTable[Row]) -> None:
        sortable = [column.key for column in table.columns if column.sortable]
        print(f"Sortable columns: {', '.join(sortable) or 'none'}")
        key = input("sort column: ").strip()
        if not key:
            return
        try:
            state = table.toggle_sort(key)
        except KeyError:
            print(f"[validation] Unknown column: {key}")
            return
        label = f"{state.key} {state.direction}" if state else "none"
        print(f"[sort] {label}")

    def _pick_row_index(self, table: DataTable[Row]) -> int | None:
        requested = input("row #: ").strip()
        if not requested.isdigit():
            print("[validation] Row number must be numeric.")
            return None
        index = int(requested)
        if not 0 <= index < len(table.derive().page_rows):
            print("[validation] Row number is not on the current page.")
            return None
        return index

    def _open_row(self, table: DataTable[Row]) -> None:
        index = self._pick_row_index(table)
        if index is not None:
            table.click_row(index)

    def _print_detail(self, listing: Listing, row: Row) -> None:
        print(f"\n{listing.view.title}: {row.get('id') or '-'}")
        for name, value in listing.view.describe_row(row):
            print(f"  {name}: {value}")
        if listing.extra_details is None:
            return
        try:
            extra = listing.extra_details(row)
        except DynamicDataError as error:
            print_error_banner(build_error_payload(error))
            return
        for name, value in extra:
            print(f"  {name}: {value}")

    def _delete_row(self, listing: Listing, table: DataTable[Row]) -> None:
        index = self._pick_row_index(table)
        if index is None:
            return
        row = table.derive().page_rows[index]
        row_id = row.get("id")
        if not row_id:
            print("[validation] Row has no id.")
            return
        confirm = input(f"Delete {listing.view.module} {row_id}? (y/N): ").strip().lower()
        if confirm != "y":
            print("[delete] Cancelled.")
            return
        try:
            listing.store.delete_row(str(row_id))
        except ApiError as error:
            print_error_banner(build_error_payload(error))
            return
        table.set_rows(listing.store.rows)
        print(f"[delete] {row_id} removed.")

    def _update_filters(self, listing: Listing) -> None:
        if listing.filter_choices:
            for value, label in listing.filter_choices():
                print(f"  {value}  {label}")
        for key in listing.view.filter_keys:
            listing.filters[key] = _ask_optional(key)
        active = {key: value for key, value in listing.filters.items() if value}
        print(f"[filters] {listing.view.module}: {active or 'no filters'}")
