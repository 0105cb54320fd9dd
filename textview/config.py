"""Render options shared by all serializers.

A :class:`RenderConfig` is a flat bag of named options.  Each serializer
reads the options that make sense for its output and ignores the
others, so a single config can be handed to several serializers.

Options may be changed at any time; serializers read them when they
render, so a change shows up at the next render.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class RenderConfig:
    """Options controlling headers, placeholders, truncation and decoration.

    Attributes:
        column_headers: Emit the column header row.
        row_headers: Emit a leading row header cell on every row.
        top_left_header: Text of the corner cell when both kinds of
            headers are shown.
        empty_placeholder: Text shown when the source has no rows.
        ellipsis_placeholder: Text shown when rows were left out.
        max_rows: Row cap of the HTML table; ``None`` or ``<= 0`` means
            no cap.
        separator: Field separator; ``None`` selects the serializer's own
            default (``";"`` for CSV, ``" "`` for inline sets).
        record_separator: CSV line terminator.
        field_quote: CSV quote character surrounding every field.
        escape_char: CSV character prefixed to special characters.
        replacement_char: CSV character replacing runs of special
            characters when no escape character is set.
        table_class: CSS class of the ``<table>`` element.
        constant_prefix: Raw HTML printed before every inline set item.
        displayed_column: Column shown by inline sets.
        link_role: Role holding a URL; the text is wrapped in ``<a>``.
        link_class_role: Role holding the CSS class of that ``<a>``.
        html_prefix_role: Role holding raw HTML printed before the text.
        row_class_role: Role (read on the first column) holding the CSS
            class of the ``<tr>``.
        cell_class_role: Role holding the CSS class of the ``<td>``.
        max_depth: Nesting depth above which a source is considered
            cyclic.
    """

    column_headers: bool = True
    row_headers: bool = False
    top_left_header: str = ""
    empty_placeholder: str = "(empty)"
    ellipsis_placeholder: str = "..."
    max_rows: Optional[int] = 100
    separator: Optional[str] = None
    record_separator: str = "\n"
    field_quote: Optional[str] = None
    escape_char: Optional[str] = None
    replacement_char: Optional[str] = None
    table_class: str = ""
    constant_prefix: str = ""
    displayed_column: int = 0
    link_role: Optional[str] = None
    link_class_role: Optional[str] = None
    html_prefix_role: Optional[str] = None
    row_class_role: Optional[str] = None
    cell_class_role: Optional[str] = None
    max_depth: int = 256

    def row_cap(self) -> Optional[int]:
        """Return ``max_rows`` as a usable cap, ``None`` when unlimited."""
        if self.max_rows is None or self.max_rows <= 0:
            return None
        return self.max_rows
