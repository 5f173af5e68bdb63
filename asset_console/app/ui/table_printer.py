from __future__ import annotations

import textwrap
import unicodedata
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from asset_console.app.ui.filters import stringify_value
from asset_console.app.ui.render_model import BodyRow, HeaderCell, PaginationBar, TableRenderModel

ELLIPSIS = "…"
DEFAULT_ELLIPSIS_WIDTH = 24
REGION_SEPARATOR = " ‖ "


@dataclass(frozen=True)
class _Grid:
    header_line: str
    rule_line: str
    body_lines: list[str]
    gutter_width: int
    hidden_before: int
    hidden_after: int


def display_width(text: str) -> int:
    """Terminal cells taken by text: wide and fullwidth glyphs count twice, combining marks not at all."""
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def print_table(title: str, model: TableRenderModel, **kwargs: int | bool | None) -> None:
    print(f"\n{title}")
    print(format_table(model, **kwargs))


def scroll_limit(
    model: TableRenderModel,
    *,
    max_width: int | None = None,
    scroll_offset: int = 0,
    show_index: bool = False,
) -> int:
    """Largest useful row_offset for format_table, counted in rendered body lines."""
    max_height = model.layout.max_height
    if model.loading or max_height is None:
        return 0
    grid = _build_grid(model, max_width=max_width, scroll_offset=scroll_offset, show_index=show_index)
    return max(0, len(grid.body_lines) - max_height)


def format_table(
    model: TableRenderModel,
    *,
    max_width: int | None = None,
    scroll_offset: int = 0,
    row_offset: int = 0,
    show_index: bool = False,
) -> str:
    if model.loading:
        return model.loading_text

    layout = model.layout
    lines: list[str] = []
    if model.search is not None:
        query = model.search.query
        lines.append(f"Search: {query}" if query else f"Search: ({model.search.placeholder})")

    grid = _build_grid(model, max_width=max_width, scroll_offset=scroll_offset, show_index=show_index)
    if grid.hidden_before or grid.hidden_after:
        lines.append(f"« {grid.hidden_before} column(s) | {grid.hidden_after} column(s) »")

    body_lines = grid.body_lines
    visible_body = body_lines
    offset = 0
    if layout.max_height is not None and len(body_lines) > layout.max_height:
        offset = min(max(0, row_offset), len(body_lines) - layout.max_height)
        visible_body = body_lines[offset : offset + layout.max_height]

    if offset == 0 or layout.sticky_header:
        lines.append(_header_gutter(show_index, layout.striped) + grid.header_line.rstrip())
        lines.append(" " * grid.gutter_width + grid.rule_line)
    lines.extend(visible_body)

    remaining = len(body_lines) - offset - len(visible_body)
    if offset:
        lines.append(f"↑ {offset} more line(s)")
    if remaining > 0:
        lines.append(f"↓ {remaining} more line(s)")

    if model.pagination is not None:
        lines.extend(_pagination_lines(model.pagination))
    return "\n".join(lines)


def _build_grid(model: TableRenderModel, *, max_width: int | None, scroll_offset: int, show_index: bool) -> _Grid:
    layout = model.layout
    widths = _column_widths(model)
    padding = 0 if layout.compact else 1
    cell_separator = " | " if layout.bordered else "  "
    gutter_width = _gutter_width(show_index, layout.striped)
    groups, hidden_before, hidden_after = _visible_groups(
        model.header,
        widths,
        padding=padding,
        cell_separator=cell_separator,
        gutter_width=gutter_width,
        max_width=max_width,
        scroll_offset=scroll_offset,
    )

    def compose(texts: dict[int, str], cell_sep: str = cell_separator, region_sep: str = REGION_SEPARATOR) -> str:
        pad = " " * padding
        rendered = [cell_sep.join(f"{pad}{texts[index]}{pad}" for index in group) for group in groups]
        return region_sep.join(rendered)

    header_line = compose(
        {index: _align(_header_text(model.header[index]), widths[index], model.header[index].align) for group in groups for index in group}
    )
    rule_line = compose(
        {index: "-" * widths[index] for group in groups for index in group},
        cell_sep="-+-" if layout.bordered else "--",
        region_sep="-‖-",
    ).replace(" ", "-")

    body_lines: list[str] = []
    if model.empty is not None:
        body_lines.append(" " * gutter_width + _align(model.empty.text, display_width(header_line), "center").rstrip())
    else:
        for row in model.rows:
            body_lines.extend(_row_lines(row, groups, widths, compose, show_index, layout.striped))
    return _Grid(header_line, rule_line, body_lines, gutter_width, hidden_before, hidden_after)


def _column_widths(model: TableRenderModel) -> list[int]:
    widths: list[int] = []
    for index, cell in enumerate(model.header):
        header_width = display_width(_header_text(cell))
        natural = max([header_width] + [display_width(_cell_text(row.cells[index].content)) for row in model.rows])
        width = cell.width if cell.width is not None else natural
        if cell.min_width is not None:
            width = max(width, cell.min_width)
        cap = cell.max_width
        if cap is None and cell.ellipsis:
            cap = DEFAULT_ELLIPSIS_WIDTH
        if cap is not None:
            width = min(width, cap)
        widths.append(max(width, header_width))
    return widths


def _visible_groups(
    header: Sequence[HeaderCell],
    widths: list[int],
    *,
    padding: int,
    cell_separator: str,
    gutter_width: int,
    max_width: int | None,
    scroll_offset: int,
) -> tuple[list[list[int]], int, int]:
    left = [index for index, cell in enumerate(header) if cell.fixed == "left"]
    right = [index for index, cell in enumerate(header) if cell.fixed == "right"]
    scroll = [index for index, cell in enumerate(header) if cell.fixed is None]

    def line_width(groups: list[list[int]]) -> int:
        present = [group for group in groups if group]
        total = gutter_width + len(REGION_SEPARATOR) * (len(present) - 1)
        for group in present:
            total += sum(widths[index] + 2 * padding for index in group)
            total += len(cell_separator) * (len(group) - 1)
        return total

    if max_width is None or not scroll:
        return [group for group in (left, scroll, right) if group], 0, 0

    offset = min(max(0, scroll_offset), len(scroll) - 1)
    visible = [scroll[offset]]
    for index in scroll[offset + 1 :]:
        if line_width([left, visible + [index], right]) > max_width:
            break
        visible.append(index)
    hidden_after = len(scroll) - offset - len(visible)
    return [group for group in (left, visible, right) if group], offset, hidden_after


def _row_lines(
    row: BodyRow,
    groups: list[list[int]],
    widths: list[int],
    compose: Callable[[dict[int, str]], str],
    show_index: bool,
    striped: bool,
) -> list[str]:
    cell_lines: dict[int, list[str]] = {}
    for group in groups:
        for index in group:
            cell = row.cells[index]
            cell_lines[index] = _wrap(_cell_text(cell.content), widths[index], cell.truncate)
    height = max((len(item) for item in cell_lines.values()), default=1)

    lines: list[str] = []
    for line_number in range(height):
        texts = {
            index: _align(parts[line_number] if line_number < len(parts) else "", widths[index], row.cells[index].align)
            for index, parts in cell_lines.items()
        }
        gutter = _row_gutter(row, show_index, striped, first_line=line_number == 0)
        lines.append((gutter + compose(texts)).rstrip())
    return lines


def _pagination_lines(bar: PaginationBar) -> list[str]:
    summary = bar.summary
    if bar.size_options:
        sizes = " ".join(f"[{size}]" if size == bar.page_size else str(size) for size in bar.size_options)
        summary = f"{summary}    Show: {sizes}"
    buttons = ["(Previous)" if bar.prev_disabled else "[Previous]"]
    buttons.extend(f"[{page}]" if page == bar.page else f" {page} " for page in bar.pages)
    buttons.append("(Next)" if bar.next_disabled else "[Next]")
    return [summary, " ".join(buttons)]


def _wrap(text: str, width: int, truncate: bool) -> list[str]:
    if display_width(text) <= width:
        return [text]
    if truncate:
        return [_clip(text, max(0, width - 1)) + ELLIPSIS]
    lines: list[str] = []
    for line in textwrap.wrap(text, width) or [""]:
        while display_width(line) > width:
            head = _clip(line, width) or line[0]
            lines.append(head)
            line = line[len(head) :]
        lines.append(line)
    return lines


def _clip(text: str, width: int) -> str:
    used = 0
    for position, char in enumerate(text):
        used += display_width(char)
        if used > width:
            return text[:position]
    return text


def _align(text: str, width: int, align: str) -> str:
    # str.ljust and friends pad by code points; shift the target so wide glyphs still line up.
    target = width - (display_width(text) - len(text))
    if align == "right":
        return text.rjust(target)
    if align == "center":
        return text.center(target)
    return text.ljust(target)


def _header_text(cell: HeaderCell) -> str:
    return f"{cell.title} {cell.indicator}" if cell.indicator else cell.title


def _cell_text(content: object) -> str:
    return " ".join(stringify_value(content).splitlines())


def _gutter_width(show_index: bool, striped: bool) -> int:
    return (4 if show_index else 0) + (2 if striped else 0)


def _header_gutter(show_index: bool, striped: bool) -> str:
    return ("  # " if show_index else "") + ("  " if striped else "")


def _row_gutter(row: BodyRow, show_index: bool, striped: bool, first_line: bool) -> str:
    gutter = ""
    if show_index:
        gutter += f"{row.index:>3} " if first_line else "    "
    if striped:
        gutter += "· " if row.striped else "  "
    return gutter
