"""HTML serializers.

* ``html-table``: a ``<table>`` listing every node in depth-first order,
  with optional headers, row cap and per-cell decoration taken from
  roles.
* ``html-list``: nested ``<ul>`` lists following the tree.
* ``html-set``: an inline run of the top-level rows of one column, e.g.
  a list of tags.

Texts are written as the delegate returns them.  The default delegate
does not escape anything: sources are expected to hold ready-to-use
HTML fragments.  Use :class:`~textview.delegate.HtmlDelegate` to escape.
"""

from __future__ import annotations

from typing import Any, List

from ..model import Axis, TreeDataSource
from ..traversal import RowBudget, RowVisitor, walk
from .base import Serializer, role_value, serializer_registry


def _class_attr(css_class: str) -> str:
    return f' class="{css_class}"' if css_class else ""


def _linked(text: str, href: str, css_class: str) -> str:
    if not href:
        return text
    return f'<a href="{href}"{_class_attr(css_class)}>{text}</a>'


class _DecoratedCells(RowVisitor):
    """Shared role lookups of the HTML writers."""

    def __init__(self, serializer: Serializer, source: TreeDataSource) -> None:
        self.serializer = serializer
        self.config = serializer.config
        self.source = source
        self.parts: List[str] = []

    def role(self, node: Any, role: Any) -> str:
        return role_value(self.source.cell_value, node, role=role)

    def header_role(self, axis: Axis, section: int, role: Any) -> str:
        return role_value(self.source.header_value, axis, section, role=role)

    def decorated_text(self, parent: Any, row: int, column: int) -> str:
        node = self.source.index(row, column, parent)
        text = self.serializer.delegate.text(self.source, parent, row, column)
        link = self.role(node, self.config.link_role)
        link_class = self.role(node, self.config.link_class_role) if link else ""
        return (self.role(node, self.config.html_prefix_role)
                + _linked(text, link, link_class))


class _InlineSetWriter(_DecoratedCells):
    def begin_row(self, parent: Any, row: int, depth: int) -> None:
        column = self.config.displayed_column
        self.parts.append(self.config.constant_prefix
                          + self.decorated_text(parent, row, column))


@serializer_registry.register("html-set")
class HtmlInlineSetSerializer(Serializer):
    """Render one column of the top-level rows as an inline HTML run.

    Each item is the constant prefix, then the HTML prefix role of the
    cell, then the cell text (wrapped in a link when the link role is
    set), items being joined by the separator.
    """

    default_separator = " "

    def render(self, source: TreeDataSource) -> str:
        writer = _InlineSetWriter(self, source)
        walk(source, None, 0, writer, recursive=False,
             max_depth=self.config.max_depth)
        if not writer.parts:
            return self.config.empty_placeholder
        return self.separator.join(writer.parts)


class _ListWriter(RowVisitor):
    def __init__(self, serializer: Serializer, source: TreeDataSource) -> None:
        self.serializer = serializer
        self.source = source
        self.parts: List[str] = []
        self._cells: List[str] = []

    def begin_level(self, parent: Any, depth: int, rows: int) -> None:
        if depth == 0 or rows:
            self.parts.append("<ul>")

    def begin_row(self, parent: Any, row: int, depth: int) -> None:
        self._cells = []

    def cell(self, parent: Any, row: int, column: int, depth: int) -> None:
        self._cells.append(
            self.serializer.delegate.text(self.source, parent, row, column))

    def end_row(self, parent: Any, row: int, depth: int) -> None:
        self.parts.append("<li>" + " ".join(self._cells))

    def close_row(self, parent: Any, row: int, depth: int) -> None:
        self.parts.append("</li>")

    def end_level(self, parent: Any, depth: int, rows: int) -> None:
        if depth == 0 or rows:
            self.parts.append("</ul>")


@serializer_registry.register("html-list")
class HtmlListSerializer(Serializer):
    """Render the tree as nested ``<ul>`` lists.

    Every node is a ``<li>`` holding its cells separated by spaces;
    children form a ``<ul>`` inside their parent's ``<li>``.
    """

    def render(self, source: TreeDataSource) -> str:
        writer = _ListWriter(self, source)
        walk(source, None, 0, writer, max_depth=self.config.max_depth)
        return "".join(writer.parts) + "\n"


class _TableWriter(_DecoratedCells):
    def begin_row(self, parent: Any, row: int, depth: int) -> None:
        config = self.config
        first = self.source.index(row, 0, parent)
        self.parts.append(f"<tr{_class_attr(self.role(first, config.row_class_role))}>")
        if config.row_headers:
            self.parts.append(
                "<th>"
                + self.header_role(Axis.ROW, row, config.html_prefix_role)
                + self.serializer.delegate.header_text(self.source, Axis.ROW, row)
                + "</th>")

    def cell(self, parent: Any, row: int, column: int, depth: int) -> None:
        node = self.source.index(row, column, parent)
        css_class = self.role(node, self.config.cell_class_role)
        indent = "&nbsp;&nbsp;" * depth if column == 0 else ""
        self.parts.append(f"<td{_class_attr(css_class)}>{indent}"
                          f"{self.decorated_text(parent, row, column)}</td>")

    def end_row(self, parent: Any, row: int, depth: int) -> None:
        self.parts.append("</tr>\n")


@serializer_registry.register("html-table")
class HtmlTableSerializer(Serializer):
    """Render every node as a row of an HTML table, parents first.

    The first cell of each row is indented by two non-breaking spaces
    per nesting level.  At most ``max_rows`` rows are written; when more
    rows exist a last row holds the ellipsis placeholder.  A source
    holding exactly ``max_rows`` rows gets no ellipsis row.
    """

    def _full_width_row(self, span: int, text: str) -> str:
        return f"<tr><td colspan={span}>{text}</td></tr>\n"

    def header_row(self, source: TreeDataSource, columns: int) -> str:
        config = self.config
        cells = ["<tr>"]
        if config.row_headers:
            cells.append(f"<th>{config.top_left_header}</th>")
        for column in range(columns):
            prefix = role_value(source.header_value, Axis.COLUMN, column,
                                role=config.html_prefix_role)
            text = self.delegate.header_text(source, Axis.COLUMN, column)
            cells.append(f"<th>{prefix}{text}</th>")
        cells.append("</tr>\n")
        return "".join(cells)

    def render(self, source: TreeDataSource) -> str:
        config = self.config
        columns = max(source.column_count(None), 0)
        span = columns + (1 if config.row_headers else 0)
        parts = [f"<table{_class_attr(config.table_class)}>\n"]
        if config.column_headers:
            parts.append(self.header_row(source, columns))
        if source.row_count(None) == 0:
            if config.empty_placeholder:
                parts.append(self._full_width_row(span, config.empty_placeholder))
        else:
            writer = _TableWriter(self, source)
            budget = RowBudget(config.row_cap())
            truncated = walk(source, None, 0, writer, budget,
                             max_depth=config.max_depth)
            parts.extend(writer.parts)
            if truncated:
                parts.append(self._full_width_row(span, config.ellipsis_placeholder))
        parts.append("</table>\n")
        return "".join(parts)
