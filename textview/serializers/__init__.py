"""Serializer implementations for tree-table output.

This package contains the output formats:
- csv: flat CSV of the top-level rows
- csv-tree: CSV of every node, first column indented by depth
- html-table: HTML table of every node with row cap and decorations
- html-list: nested HTML lists
- html-set: inline HTML run of one column

All serializers are automatically registered via decorators.
"""

from .base import Serializer, SerializerRegistry, serializer_registry
from .csv import CsvFlatSerializer, CsvTreeSerializer, FieldFormatter
from .html import HtmlInlineSetSerializer, HtmlListSerializer, HtmlTableSerializer

__all__ = [
    "Serializer",
    "SerializerRegistry",
    "serializer_registry",
    "CsvFlatSerializer",
    "CsvTreeSerializer",
    "FieldFormatter",
    "HtmlInlineSetSerializer",
    "HtmlListSerializer",
    "HtmlTableSerializer",
]
