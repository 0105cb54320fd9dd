"""Text views of tree-tables.

This package renders hierarchical tabular data (rows, columns, and rows
nested under rows) as text for consumers that only display text: web
pages, REST payloads, terminals.

Key concepts:

* **Data sources** implement :class:`TreeDataSource`.  See
  :mod:`textview.model`, which also provides in-memory sources.
* **Serializers** turn a source into CSV or HTML.  See
  :mod:`textview.serializers`.
* **Traversal** is the depth-first walk shared by the serializers.  See
  :mod:`textview.traversal`.
* **Views** cache the output of a serializer and re-render at most once
  per event loop turn.  See :mod:`textview.view`.
* **Pages** compose views with a Jinja2 template.  See
  :mod:`textview.page`.
"""

from .errors import DataSourceError
from .model import (
    Axis,
    TreeDataSource,
    TreeItem,
    TreeSource,
    MatrixSource,
    tree_from_dict,
)
from .config import RenderConfig
from .registry import Registry
from .traversal import RowBudget, RowVisitor, walk
from .delegate import ALL, HEADER, Conversion, HtmlDelegate, TextDelegate
from .serializers import (
    Serializer,
    SerializerRegistry,
    CsvFlatSerializer,
    CsvTreeSerializer,
    HtmlInlineSetSerializer,
    HtmlListSerializer,
    HtmlTableSerializer,
    serializer_registry,
)
from .cache import RenderCache
from .view import TextView
from .page import PageComposer

__all__ = [
    "DataSourceError",
    "Axis",
    "TreeDataSource",
    "TreeItem",
    "TreeSource",
    "MatrixSource",
    "tree_from_dict",
    "RenderConfig",
    "Registry",
    "RowBudget",
    "RowVisitor",
    "walk",
    "ALL",
    "HEADER",
    "Conversion",
    "HtmlDelegate",
    "TextDelegate",
    "Serializer",
    "SerializerRegistry",
    "CsvFlatSerializer",
    "CsvTreeSerializer",
    "HtmlInlineSetSerializer",
    "HtmlListSerializer",
    "HtmlTableSerializer",
    "serializer_registry",
    "RenderCache",
    "TextView",
    "PageComposer",
]
