"""Data source contract and in-memory data sources.

Every serializer in this package reads a *tree-table*: rows and columns
addressed relative to a parent node, where each row may itself be the
parent of further rows.  This is the shape of a spreadsheet whose first
column can be expanded like a file browser.

The contract is expressed by :class:`TreeDataSource`.  Serializers only
ever call its read methods; they never mutate a source.  A source tells
interested parties that its content changed through plain zero-argument
callbacks registered with :meth:`TreeDataSource.on_changed`.

Besides the contract, this module ships two concrete sources that are
handy for tests, command line use and small applications:

* :class:`TreeSource` holds a tree of :class:`TreeItem` objects.
* :class:`MatrixSource` holds a flat table keyed by row and column names,
  growing as cells are assigned.

Roles
-----

Beyond its display text, a cell or header may carry optional named
attributes called *roles* (a link target, a CSS class, an HTML snippet
used as an icon...).  ``role=None`` always means the display text; any
other role is a string key.  A source answers ``None`` for a role it does
not carry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional

ChangeCallback = Callable[[], None]


class Axis(Enum):
    """Orientation of a header."""

    ROW = "row"
    COLUMN = "column"


class TreeDataSource(ABC):
    """Abstract read-only tree-table.

    ``parent`` is ``None`` for the root, otherwise a node reference
    previously returned by :meth:`index`.  The children of a row are the
    rows whose parent is ``index(row, 0, parent)``.

    Subclasses must call ``super().__init__()`` so that change
    notifications work.
    """

    def __init__(self) -> None:
        self._listeners: List[ChangeCallback] = []

    @abstractmethod
    def row_count(self, parent: Any = None) -> int:
        """Return the number of rows under *parent*."""

    @abstractmethod
    def column_count(self, parent: Any = None) -> int:
        """Return the number of columns of the rows under *parent*."""

    @abstractmethod
    def index(self, row: int, column: int, parent: Any = None) -> Any:
        """Return an opaque reference to the cell at *row*, *column*."""

    @abstractmethod
    def cell_value(self, node: Any, role: Optional[str] = None) -> Optional[str]:
        """Return the text of *node* for *role*, ``None`` if absent."""

    @abstractmethod
    def header_value(
        self, axis: Axis, section: int, role: Optional[str] = None
    ) -> Optional[str]:
        """Return the header text of *section* on *axis*, ``None`` if absent."""

    def on_changed(self, callback: ChangeCallback) -> None:
        """Call *callback* after every change of this source."""
        self._listeners.append(callback)

    def off_changed(self, callback: ChangeCallback) -> None:
        """Stop calling *callback*.  Unknown callbacks are ignored."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def notify_changed(self) -> None:
        for callback in list(self._listeners):
            callback()


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class TreeItem:
    """One row of a :class:`TreeSource`.

    ``roles`` maps a role name either to a single value, which applies to
    every cell of the row, or to a list holding one value per column.
    """

    values: List[Any]
    children: List["TreeItem"] = field(default_factory=list)
    roles: Dict[str, Any] = field(default_factory=dict)

    def value(self, column: int) -> Optional[str]:
        if 0 <= column < len(self.values):
            return _text(self.values[column])
        return None

    def role(self, name: str, column: int) -> Optional[str]:
        data = self.roles.get(name)
        if isinstance(data, (list, tuple)):
            if 0 <= column < len(data) and data[column] is not None:
                return str(data[column])
            return None
        return None if data is None else str(data)


@dataclass(frozen=True, eq=False)
class ModelIndex:
    """Reference to a cell of a :class:`TreeSource`."""

    item: TreeItem
    column: int


def _role_entry(data: Any, section: int) -> Optional[str]:
    if isinstance(data, (list, tuple)):
        if 0 <= section < len(data) and data[section] is not None:
            return str(data[section])
        return None
    return None if data is None else str(data)


class TreeSource(TreeDataSource):
    """Mutable in-memory tree-table.

    Column headers define the column count; when no header is given the
    widest row of a level defines it.  Every mutator emits a change
    notification.
    """

    def __init__(
        self,
        headers: Optional[Iterable[Any]] = None,
        items: Optional[Iterable[TreeItem]] = None,
        row_headers: Optional[Iterable[Any]] = None,
        header_roles: Optional[Dict[str, Any]] = None,
        row_header_roles: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__()
        self.headers: List[str] = [_text(h) for h in headers or []]
        self.items: List[TreeItem] = list(items or [])
        self.row_headers: List[str] = [_text(h) for h in row_headers or []]
        self.header_roles: Dict[str, Any] = dict(header_roles or {})
        self.row_header_roles: Dict[str, Any] = dict(row_header_roles or {})

    def _children(self, parent: Optional[ModelIndex]) -> List[TreeItem]:
        if parent is None:
            return self.items
        return parent.item.children

    def row_count(self, parent: Optional[ModelIndex] = None) -> int:
        return len(self._children(parent))

    def column_count(self, parent: Optional[ModelIndex] = None) -> int:
        if self.headers:
            return len(self.headers)
        return max((len(i.values) for i in self._children(parent)), default=0)

    def index(
        self, row: int, column: int, parent: Optional[ModelIndex] = None
    ) -> ModelIndex:
        return ModelIndex(self._children(parent)[row], column)

    def cell_value(self, node: ModelIndex, role: Optional[str] = None) -> Optional[str]:
        if role is None:
            return node.item.value(node.column)
        return node.item.role(role, node.column)

    def header_value(
        self, axis: Axis, section: int, role: Optional[str] = None
    ) -> Optional[str]:
        if axis is Axis.COLUMN:
            names, roles = self.headers, self.header_roles
        else:
            names, roles = self.row_headers, self.row_header_roles
        if role is not None:
            return _role_entry(roles.get(role), section)
        if 0 <= section < len(names):
            return names[section]
        return None

    # Mutators

    def append_row(
        self,
        values: Iterable[Any],
        parent: Optional[TreeItem] = None,
        roles: Optional[Dict[str, Any]] = None,
    ) -> TreeItem:
        """Append a row under *parent* (the root when ``None``) and return it."""
        item = TreeItem(list(values), roles=dict(roles or {}))
        siblings = self.items if parent is None else parent.children
        siblings.append(item)
        self.notify_changed()
        return item

    def remove_row(self, row: int, parent: Optional[TreeItem] = None) -> TreeItem:
        siblings = self.items if parent is None else parent.children
        item = siblings.pop(row)
        self.notify_changed()
        return item

    def set_value(self, item: TreeItem, column: int, value: Any) -> None:
        if column >= len(item.values):
            item.values.extend([""] * (column + 1 - len(item.values)))
        item.values[column] = value
        self.notify_changed()

    def set_headers(self, headers: Iterable[Any]) -> None:
        self.headers = [_text(h) for h in headers]
        self.notify_changed()

    def clear(self) -> None:
        self.items = []
        self.row_headers = []
        self.notify_changed()


class MatrixIndex(NamedTuple):
    row: int
    column: int


class MatrixSource(TreeDataSource):
    """Flat table of text values keyed by row name and column name.

    Rows and columns appear in the order their names were first used.
    Cells never assigned read as ``None``.  Rows have no children.
    """

    def __init__(self) -> None:
        super().__init__()
        self._row_names: List[str] = []
        self._column_names: List[str] = []
        self._values: Dict[str, Dict[str, str]] = {}

    def row_count(self, parent: Optional[MatrixIndex] = None) -> int:
        return 0 if parent is not None else len(self._row_names)

    def column_count(self, parent: Optional[MatrixIndex] = None) -> int:
        return len(self._column_names)

    def index(
        self, row: int, column: int, parent: Optional[MatrixIndex] = None
    ) -> MatrixIndex:
        return MatrixIndex(row, column)

    def cell_value(self, node: MatrixIndex, role: Optional[str] = None) -> Optional[str]:
        if role is not None:
            return None
        if not (0 <= node.row < len(self._row_names)
                and 0 <= node.column < len(self._column_names)):
            return None
        return self.value(self._row_names[node.row],
                          self._column_names[node.column])

    def header_value(
        self, axis: Axis, section: int, role: Optional[str] = None
    ) -> Optional[str]:
        names = self._column_names if axis is Axis.COLUMN else self._row_names
        if role is not None or not 0 <= section < len(names):
            return None
        return names[section]

    def value(self, row: str, column: str) -> Optional[str]:
        return self._values.get(row, {}).get(column)

    def set_cell_value(self, row: str, column: str, value: Any) -> None:
        """Set one cell, adding its row and column if they are new."""
        if row not in self._row_names:
            self._row_names.append(row)
        if column not in self._column_names:
            self._column_names.append(column)
        self._values.setdefault(row, {})[column] = _text(value)
        self.notify_changed()

    def clear(self) -> None:
        self._row_names = []
        self._column_names = []
        self._values = {}
        self.notify_changed()


def _item_from_dict(data: Dict[str, Any]) -> TreeItem:
    return TreeItem(
        values=list(data.get("values", [])),
        children=[_item_from_dict(c) for c in data.get("children", [])],
        roles=dict(data.get("roles", {})),
    )


def tree_from_dict(data: Dict[str, Any]) -> TreeSource:
    """Build a :class:`TreeSource` from plain dictionaries and lists.

    Expected shape (every key is optional)::

        {
            "headers": ["Name", "Count"],
            "row_headers": ["1", "2"],
            "header_roles": {"htmlPrefix": ["<b>", ""]},
            "rows": [
                {"values": ["a", 1], "roles": {"link": "/a"},
                 "children": [{"values": ["a.1", 3]}]},
                {"values": ["b", 2]}
            ]
        }
    """
    return TreeSource(
        headers=data.get("headers", []),
        items=[_item_from_dict(r) for r in data.get("rows", [])],
        row_headers=data.get("row_headers", []),
        header_roles=data.get("header_roles", {}),
        row_header_roles=data.get("row_header_roles", {}),
    )
