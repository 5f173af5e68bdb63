import pytest

from asset_console.app.ui.columns import ColumnDef
from asset_console.app.ui.data_table import (
    PHASE_IDLE,
    PHASE_PAGINATING,
    PHASE_SEARCHING,
    PHASE_SORTING,
    DataTable,
    PaginationOptions,
    TableOptions,
    TablePipeline,
)

COLUMNS = [
    ColumnDef(key="name", title="Name", sortable=True),
    ColumnDef(key="city", title="City"),
]


def _rows(count: int) -> list[dict]:
    return [{"id": index, "name": f"row {index:02d}", "city": "Perth" if index % 2 else "Sydney"} for index in range(1, count + 1)]


def _table(rows: list[dict], page_size: int = 10, searchable: bool = True, **kwargs) -> DataTable:
    options = TableOptions(pagination=PaginationOptions(page_size=page_size), searchable=searchable)
    return DataTable(COLUMNS, rows, options, **kwargs)


def test_twelve_rows_with_page_size_ten() -> None:
    table = _table(_rows(12))

    first = table.derive()
    assert [row["id"] for row in first.page_rows] == list(range(1, 11))
    assert (first.start, first.end, first.total_count) == (1, 10, 12)
    assert first.total_pages == 2

    table.next_page()
    second = table.derive()
    assert [row["id"] for row in second.page_rows] == [11, 12]
    assert (second.start, second.end) == (11, 12)

    model = table.render()
    assert model.pagination.summary == "Showing 11 to 12 of 12 results"
    assert model.pagination.next_disabled is True
    assert model.pagination.prev_disabled is False


def test_ascending_sort_puts_missing_names_last() -> None:
    table = _table([{"name": "B"}, {"name": "A"}, {"name": None}])

    table.toggle_sort("name")

    assert [row["name"] for row in table.derive().page_rows] == ["A", "B", None]


def test_search_without_matches_shows_the_empty_placeholder() -> None:
    table = _table(_rows(3))

    table.search("zz")
    model = table.render()

    assert model.rows == ()
    assert model.empty is not None
    assert model.empty.text == "No data available"
    assert model.empty.colspan == len(COLUMNS)
    assert model.pagination is None


def test_page_size_change_returns_to_first_page() -> None:
    table = _table(_rows(60))
    table.goto_page(3)
    assert table.pagination.page == 3

    table.set_page_size(25)

    assert table.pagination.page == 1
    assert table.derive().page_size == 25
    assert len(table.derive().page_rows) == 25


def test_three_header_activations_clear_the_sort() -> None:
    rows = [{"name": "b"}, {"name": "c"}, {"name": "a"}]
    table = _table(rows)

    table.toggle_sort("name")
    table.toggle_sort("name")
    assert [row["name"] for row in table.derive().page_rows] == ["c", "b", "a"]

    assert table.toggle_sort("name") is None
    assert [row["name"] for row in table.derive().page_rows] == ["b", "c", "a"]


def test_search_resets_page_and_calls_back() -> None:
    seen: list[str] = []
    table = _table(_rows(30), on_search=seen.append)
    table.goto_page(3)

    table.search("row 2")

    assert table.pagination.page == 1
    assert seen == ["row 2"]
    assert all("row 2" in row["name"] for row in table.derive().page_rows)


def test_query_is_ignored_when_table_is_not_searchable() -> None:
    table = _table(_rows(5), searchable=False)

    table.search("zz")

    assert table.effective_query == ""
    assert len(table.derive().page_rows) == 5
    assert table.render().search is None


def test_unknown_sort_key_raises_and_non_sortable_column_is_ignored() -> None:
    table = _table(_rows(3))

    with pytest.raises(KeyError):
        table.toggle_sort("missing")
    assert table.toggle_sort("city") is None
    assert table.sort_state is None


def test_shrinking_data_reclamps_the_page() -> None:
    table = _table(_rows(35))
    table.goto_page(4)

    table.set_rows(_rows(12))

    assert table.pagination.page == 2
    assert [row["id"] for row in table.derive().page_rows] == [11, 12]


def test_derive_never_shows_an_out_of_range_page() -> None:
    table = _table(_rows(25))
    table.pagination.page = 9

    derived = table.derive()

    assert derived.page == 3
    assert [row["id"] for row in derived.page_rows] == list(range(21, 26))


def test_disabled_pagination_shows_every_row() -> None:
    options = TableOptions(pagination=PaginationOptions(enabled=False))
    table = DataTable(COLUMNS, _rows(40), options)

    derived = table.derive()

    assert len(derived.page_rows) == 40
    assert derived.total_pages == 1
    assert table.render().pagination is None


def test_row_click_reports_row_and_index_on_the_page() -> None:
    clicks: list[tuple[int, int]] = []
    table = _table(_rows(15), on_row_click=lambda row, index: clicks.append((row["id"], index)))
    table.next_page()

    row = table.click_row(2)

    assert row["id"] == 13
    assert clicks == [(13, 2)]
    with pytest.raises(IndexError):
        table.click_row(5)


def test_phase_changes_return_to_idle() -> None:
    phases: list[str] = []
    table = _table(_rows(20), on_phase_change=phases.append)

    table.search("row")
    table.toggle_sort("name")
    table.next_page()

    assert phases == [
        PHASE_SEARCHING,
        PHASE_IDLE,
        PHASE_SORTING,
        PHASE_IDLE,
        PHASE_PAGINATING,
        PHASE_IDLE,
    ]
    assert table.phase == PHASE_IDLE


def test_loading_table_renders_only_the_loading_text() -> None:
    table = _table(_rows(3), loading=True)

    model = table.render()

    assert model.loading is True
    assert model.loading_text == "Loading..."
    assert model.rows == ()
    assert model.pagination is None


def test_invalid_options_are_rejected() -> None:
    with pytest.raises(ValueError):
        PaginationOptions(page_size=0)
    with pytest.raises(ValueError):
        PaginationOptions(page_size_options=(10, 0))
    with pytest.raises(ValueError):
        _table(_rows(3)).set_page_size(0)


def test_pipeline_stage_can_be_replaced() -> None:
    class _PrefixFilter(TablePipeline):
        def filter(self, rows, columns, query):
            return [row for row in rows if str(row["name"]).startswith(query)]

    table = _table([{"name": "alpha"}, {"name": "beta alpha"}], pipeline=_PrefixFilter())
    table.search("alpha")

    assert [row["name"] for row in table.derive().page_rows] == ["alpha"]


def test_input_rows_are_never_mutated() -> None:
    rows = [{"name": "b"}, {"name": "a"}]
    snapshot = [dict(row) for row in rows]
    table = _table(rows)

    table.toggle_sort("name")
    table.search("a")
    table.derive()

    assert rows == snapshot
