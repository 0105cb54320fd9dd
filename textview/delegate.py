"""Item delegates turn a cell or a header into its final text.

Serializers never read display text from a source directly; they ask a
delegate.  :class:`TextDelegate` returns the text verbatim, which is the
default everywhere.  :class:`HtmlDelegate` can clip long texts, escape
HTML special characters, turn URLs into links and wrap texts with raw
HTML affixes.

An affix is registered for a column, a row, every cell (:data:`ALL`) or
the headers (:data:`HEADER`).  Its text may contain a ``{}`` placeholder
filled with the value of another column of the same row, optionally
mapped through a transcoding dictionary::

    delegate = HtmlDelegate()
    delegate.set_prefix_for_column(
        0, '<img src="icons/{}.png"/>', arg_column=2,
        transcode={"ok": "green", "ko": "red"})
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .model import Axis, TreeDataSource

ALL = -1
HEADER = -2

_URL_RE = re.compile(r"\b(?:https?|ftp)://[^\s<>\"']+")


class TextDelegate:
    """Return display texts as the source holds them."""

    def text(self, source: TreeDataSource, parent: Any, row: int, column: int) -> str:
        value = source.cell_value(source.index(row, column, parent))
        return "" if value is None else value

    def header_text(self, source: TreeDataSource, axis: Axis, section: int) -> str:
        value = source.header_value(axis, section)
        return "" if value is None else value


class Conversion(Enum):
    AS_IS = "as-is"
    ESCAPE = "escape"
    ESCAPE_WITH_LINKS = "escape-with-links"


@dataclass
class Affix:
    text: str
    arg_column: Optional[int] = None
    transcode: Dict[str, str] = field(default_factory=dict)

    def render(self, source: TreeDataSource, parent: Any, row: int) -> str:
        if self.arg_column is None:
            return self.text
        arg = source.cell_value(source.index(row, self.arg_column, parent))
        arg = "" if arg is None else arg
        if self.transcode:
            arg = self.transcode.get(arg, "")
        return self.text.replace("{}", arg)


class HtmlDelegate(TextDelegate):
    """Delegate producing HTML fragments.

    Args:
        conversion: How display texts are converted.  Affixes are raw
            HTML and never converted.
        max_length: Texts longer than this are clipped in their middle,
            measured before conversion; ``0`` disables clipping.
    """

    def __init__(
        self,
        conversion: Conversion = Conversion.ESCAPE_WITH_LINKS,
        max_length: int = 200,
    ) -> None:
        self.conversion = conversion
        self.max_length = max_length
        self._column_prefixes: Dict[int, Affix] = {}
        self._column_suffixes: Dict[int, Affix] = {}
        self._row_prefixes: Dict[int, Affix] = {}
        self._row_suffixes: Dict[int, Affix] = {}

    def set_prefix_for_column(self, column: int, html: str,
                              arg_column: Optional[int] = None,
                              transcode: Optional[Dict[str, str]] = None) -> "HtmlDelegate":
        self._column_prefixes[column] = Affix(html, arg_column, dict(transcode or {}))
        return self

    def set_suffix_for_column(self, column: int, html: str,
                              arg_column: Optional[int] = None,
                              transcode: Optional[Dict[str, str]] = None) -> "HtmlDelegate":
        self._column_suffixes[column] = Affix(html, arg_column, dict(transcode or {}))
        return self

    def set_prefix_for_row(self, row: int, html: str,
                           arg_column: Optional[int] = None,
                           transcode: Optional[Dict[str, str]] = None) -> "HtmlDelegate":
        self._row_prefixes[row] = Affix(html, arg_column, dict(transcode or {}))
        return self

    def set_suffix_for_row(self, row: int, html: str,
                           arg_column: Optional[int] = None,
                           transcode: Optional[Dict[str, str]] = None) -> "HtmlDelegate":
        self._row_suffixes[row] = Affix(html, arg_column, dict(transcode or {}))
        return self

    def clear_affixes(self) -> "HtmlDelegate":
        self._column_prefixes.clear()
        self._column_suffixes.clear()
        self._row_prefixes.clear()
        self._row_suffixes.clear()
        return self

    def _escape_html(self, text: str) -> str:
        """Escape HTML special characters."""
        return (text
                .replace("&", "&amp;")
                .replace("<", "&lt;")
                .replace(">", "&gt;")
                .replace('"', "&quot;")
                .replace("'", "&#39;"))

    def _link(self, url: str) -> str:
        html = self._escape_html(url)
        return f'<a href="{html}">{html}</a>'

    def _clip(self, text: str) -> str:
        if self.max_length <= 0 or len(text) <= self.max_length:
            return text
        head = max(self.max_length // 2 - 1, 0)
        tail = max(self.max_length // 2 - 2, 0)
        return text[:head] + "..." + (text[len(text) - tail:] if tail else "")

    def convert(self, text: str) -> str:
        text = self._clip(text)
        if self.conversion is Conversion.AS_IS:
            return text
        if self.conversion is Conversion.ESCAPE:
            return self._escape_html(text)
        # URLs are found in the raw text, each span escaped on its own
        parts = []
        pos = 0
        for match in _URL_RE.finditer(text):
            parts.append(self._escape_html(text[pos:match.start()]))
            parts.append(self._link(match.group(0)))
            pos = match.end()
        parts.append(self._escape_html(text[pos:]))
        return "".join(parts)

    def text(self, source: TreeDataSource, parent: Any, row: int, column: int) -> str:
        data = self.convert(super().text(source, parent, row, column))
        prefixes = [
            self._column_prefixes.get(column),
            self._column_prefixes.get(ALL),
            self._row_prefixes.get(row),
            self._row_prefixes.get(ALL),
        ]
        suffixes = [
            self._row_suffixes.get(ALL),
            self._row_suffixes.get(row),
            self._column_suffixes.get(ALL),
            self._column_suffixes.get(column),
        ]
        head = "".join(a.render(source, parent, row) for a in prefixes if a)
        tail = "".join(a.render(source, parent, row) for a in suffixes if a)
        return head + data + tail

    def header_text(self, source: TreeDataSource, axis: Axis, section: int) -> str:
        data = self.convert(super().header_text(source, axis, section))
        if axis is Axis.ROW:
            prefix = self._row_prefixes.get(HEADER)
            suffix = self._row_suffixes.get(HEADER)
            if prefix:
                data = prefix.render(source, None, section) + data
            if suffix:
                data = data + suffix.render(source, None, section)
        else:
            prefix = self._column_prefixes.get(HEADER)
            suffix = self._column_suffixes.get(HEADER)
            if prefix:
                data = prefix.text + data
            if suffix:
                data = data + suffix.text
        return data
