from dataclasses import replace

from clients.asset_backend_sdk.errors import ApiError

from asset_console.app.application.row_store import RowStore
from asset_console.app.listing_console import Listing, ListingConsole
from asset_console.app.views.blogs import build_blogs_view
from asset_console.app.views.contacts import build_contacts_view


class _StubSource:
    def __init__(self, rows, fail_with=None):
        self.rows = rows
        self.fail_with = fail_with
        self.fetches: list[dict] = []
        self.deleted: list[str] = []

    def fetch_rows(self, resource, *, filters=None, order=None):
        self.fetches.append(filters or {})
        if self.fail_with is not None:
            raise self.fail_with
        return [dict(row) for row in self.rows]

    def fetch_row(self, resource, key, value):
        return None

    def insert_row(self, resource, values):
        return values

    def update_row(self, resource, row_id, values):
        return values

    def delete_row(self, resource, row_id):
        self.deleted.append(row_id)
        self.rows = [row for row in self.rows if row["id"] != row_id]


def _blog_rows(count: int) -> list[dict]:
    return [
        {"id": f"b{index}", "title": f"Post {index:02d}", "category": "News", "published": index % 2 == 0}
        for index in range(1, count + 1)
    ]


def _answers(monkeypatch, values) -> None:
    answers = iter(values)
    monkeypatch.setattr("builtins.input", lambda _: next(answers))


def _console(source, view=None) -> tuple[ListingConsole, Listing]:
    view = view or build_blogs_view()
    listing = Listing(view=view, store=RowStore(source, view.resource, order=view.order))
    return ListingConsole([listing], max_width=None), listing


def test_menu_opens_listing_and_exits(monkeypatch, capsys) -> None:
    source = _StubSource(_blog_rows(3))
    console, _ = _console(source)
    _answers(monkeypatch, ["9", "1", "b", "b"])

    console.run()

    output = capsys.readouterr().out
    assert "1. Blog Posts" in output
    assert "[validation] Unknown option." in output
    assert "Loading..." in output
    assert "Post 01" in output
    assert "Showing 1 to 3 of 3 results" in output


def test_listing_commands_drive_the_table(monkeypatch, capsys) -> None:
    source = _StubSource(_blog_rows(12))
    console, listing = _console(source)
    _answers(monkeypatch, ["n", "/", "post 1", "s", "title", "s", "title", "z", "25", "b"])

    console._run_listing_loop(listing)

    output = capsys.readouterr().out
    assert "Showing 11 to 12 of 12 results" in output
    assert "Search: post 1" in output
    assert "[sort] title asc" in output
    assert "[sort] title desc" in output
    assert "Show: 10 [25] 50" in output


def test_unknown_sort_column_and_bad_page_size(monkeypatch, capsys) -> None:
    console, listing = _console(_StubSource(_blog_rows(2)))
    _answers(monkeypatch, ["s", "nope", "z", "abc", "x", "b"])

    console._run_listing_loop(listing)

    output = capsys.readouterr().out
    assert "[validation] Unknown column: nope" in output
    assert "[validation] page_size must be a positive number." in output
    assert "[validation] Unknown command." in output


def test_open_row_prints_details(monkeypatch, capsys) -> None:
    console, listing = _console(_StubSource(_blog_rows(3)))
    _answers(monkeypatch, ["o", "1", "o", "7", "b"])

    console._run_listing_loop(listing)

    output = capsys.readouterr().out
    assert "Blog Posts: b2" in output
    assert "  title: Post 02" in output
    assert "[validation] Row number is not on the current page." in output


def test_delete_requires_confirmation(monkeypatch, capsys) -> None:
    source = _StubSource(_blog_rows(3))
    console, listing = _console(source)
    _answers(monkeypatch, ["d", "0", "n", "d", "0", "y", "b"])

    console._run_listing_loop(listing)

    output = capsys.readouterr().out
    assert "[delete] Cancelled." in output
    assert "[delete] b1 removed." in output
    assert source.deleted == ["b1"]
    assert [row["id"] for row in listing.store.rows] == ["b2", "b3"]


def test_load_failure_shows_banner_and_empty_table(monkeypatch, capsys) -> None:
    error = ApiError(code="NETWORK_ERROR", message="down", trace_id="t-9")
    console, listing = _console(_StubSource([], fail_with=error))
    _answers(monkeypatch, ["b"])

    console._run_listing_loop(listing)

    output = capsys.readouterr().out
    assert "[error] BLOGS: the listing could not be loaded." in output
    assert "[ERROR] code=NETWORK_ERROR message=down trace_id=t-9" in output
    assert "No data available" in output


def test_refresh_refetches_and_reclamps(monkeypatch, capsys) -> None:
    source = _StubSource(_blog_rows(25))
    console, listing = _console(source)

    def _shrink_then_refresh():
        source.rows = source.rows[:5]
        return "r"

    answers = iter(["g", "3", None, "b"])

    def _input(_prompt):
        value = next(answers)
        return _shrink_then_refresh() if value is None else value

    monkeypatch.setattr("builtins.input", _input)

    console._run_listing_loop(listing)

    output = capsys.readouterr().out
    assert "Showing 21 to 25 of 25 results" in output
    assert "[refresh] Reloading blogs..." in output
    assert "Showing 1 to 5 of 5 results" in output
    assert len(source.fetches) == 2


def test_filters_are_sent_to_the_store(monkeypatch, capsys) -> None:
    source = _StubSource(_blog_rows(2))
    view = build_contacts_view()
    listing = Listing(
        view=replace(view, filter_keys=("interest",)),
        store=RowStore(source, view.resource),
        filter_choices=lambda: [("buy", "Buying"), ("sell", "Selling")],
    )
    console = ListingConsole([listing], max_width=None)
    _answers(monkeypatch, ["c", "buy", "b"])

    console._run_listing_loop(listing)

    output = capsys.readouterr().out
    assert "  buy  Buying" in output
    assert "[filters] contacts: {'interest': 'buy'}" in output
    assert source.fetches == [{}, {"interest": "buy"}]


def test_row_scroll_reaches_the_last_wrapped_line(monkeypatch, capsys) -> None:
    rows = [
        {"id": f"m{index}", "name": f"Sender {index}", "email": f"s{index}@example.com", "message": "word " * 30}
        for index in range(10)
    ]
    console, listing = _console(_StubSource(rows), build_contacts_view())
    _answers(monkeypatch, ["j", "j", "j", "k", "b"])

    console._run_listing_loop(listing)

    screens = capsys.readouterr().out.split("\nContact Submissions\n")
    at_end = screens[-2]
    assert "↑" in at_end
    assert "more line(s)" in at_end
    assert "↓" not in at_end
    assert "Sender 9" in at_end
    assert "↓" in screens[-1]
