"""CSV serializers.

Two flavours are provided:

* ``csv``: one line per top-level row, children are ignored.
* ``csv-tree``: one line per node at any depth, in depth-first order,
  the first column being indented with one space per nesting level.

Example output of ``csv-tree`` with the default ``;`` separator::

    Name;Count
    fruits;2
     apple;1
     pear;1
    vegetables;0

Fields are written verbatim unless a quote, escape or replacement
character is configured, in which case special characters inside the
fields are protected.
"""

from __future__ import annotations

from typing import Any, List, Optional, Set

from ..config import RenderConfig
from ..model import Axis, TreeDataSource
from ..traversal import RowVisitor, walk
from .base import Serializer, serializer_registry


class FieldFormatter:
    """Protect special characters inside CSV fields.

    When a field quote is set, only the quote and the escape character
    are special.  Otherwise every character of the field and record
    separators is special too.  Special characters are prefixed by the
    escape character if any, else each run of them is replaced by the
    replacement character if any, else they are dropped.
    """

    def __init__(self, config: RenderConfig, separator: str) -> None:
        self.quote = config.field_quote or ""
        self.escape = config.escape_char or ""
        self.replacement = config.replacement_char or ""
        self.special: Set[str] = set(self.escape)
        if self.quote:
            self.special.update(self.quote)
        else:
            self.special.update(separator)
            self.special.update(config.record_separator)

    @property
    def active(self) -> bool:
        return bool(self.quote or self.escape or self.replacement)

    def format(self, raw: str) -> str:
        if not self.active:
            return raw
        out: List[str] = []
        if self.escape:
            for c in raw:
                if c in self.special:
                    out.append(self.escape)
                out.append(c)
        elif self.replacement:
            in_run = False
            for c in raw:
                if c in self.special:
                    if not in_run:
                        out.append(self.replacement)
                    in_run = True
                else:
                    out.append(c)
                    in_run = False
        else:
            out.extend(c for c in raw if c not in self.special)
        return self.quote + "".join(out) + self.quote


class _CsvRowWriter(RowVisitor):
    def __init__(self, serializer: "CsvFlatSerializer", source: TreeDataSource,
                 formatter: FieldFormatter, indent: bool) -> None:
        self.serializer = serializer
        self.source = source
        self.formatter = formatter
        self.indent = indent
        self.lines: List[str] = []
        self._fields: List[str] = []

    def begin_row(self, parent: Any, row: int, depth: int) -> None:
        self._fields = []
        if self.serializer.config.row_headers:
            text = self.serializer.delegate.header_text(self.source, Axis.ROW, row)
            self._fields.append(self.formatter.format(text))

    def cell(self, parent: Any, row: int, column: int, depth: int) -> None:
        text = self.serializer.delegate.text(self.source, parent, row, column)
        if column == 0 and self.indent:
            text = " " * depth + text
        self._fields.append(self.formatter.format(text))

    def end_row(self, parent: Any, row: int, depth: int) -> None:
        config = self.serializer.config
        self.lines.append(self.serializer.separator.join(self._fields)
                          + config.record_separator)


@serializer_registry.register("csv")
class CsvFlatSerializer(Serializer):
    """Render the top-level rows of a source as CSV.

    The header line holds the column headers, preceded by the top-left
    header when row headers are enabled.  Nested rows are not rendered.
    """

    recursive = False

    def header_line(self, source: TreeDataSource, formatter: FieldFormatter) -> str:
        config = self.config
        fields: List[str] = []
        if config.row_headers:
            fields.append(formatter.format(config.top_left_header))
        for column in range(max(source.column_count(None), 0)):
            text = self.delegate.header_text(source, Axis.COLUMN, column)
            fields.append(formatter.format(text))
        return self.separator.join(fields) + config.record_separator

    def render(self, source: TreeDataSource) -> str:
        formatter = FieldFormatter(self.config, self.separator)
        header: Optional[str] = None
        if self.config.column_headers:
            header = self.header_line(source, formatter)
        writer = _CsvRowWriter(self, source, formatter, indent=self.recursive)
        walk(source, None, 0, writer, recursive=self.recursive,
             max_depth=self.config.max_depth)
        return (header or "") + "".join(writer.lines)


@serializer_registry.register("csv-tree")
class CsvTreeSerializer(CsvFlatSerializer):
    """Render every node of a source as CSV, parents before children.

    Nesting shows as leading spaces on the first column; row headers,
    when enabled, are the headers of each row within its own level.
    """

    recursive = True
