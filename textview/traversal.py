"""Depth-first walk over a tree-table.

Serializers do not iterate a data source themselves.  They hand a
:class:`RowVisitor` to :func:`walk`, which visits rows in pre-order: a
row's cells are visited, then the row's whole subtree, then the next
sibling.  A flattened table built this way lists every node right after
its parent.

A :class:`RowBudget` caps the number of rows visited across the whole
walk, not per level, and records whether rows were left out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .errors import DataSourceError
from .model import TreeDataSource

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256


class RowVisitor:
    """Receives the rows of a walk.  Every hook defaults to doing nothing."""

    def begin_level(self, parent: Any, depth: int, rows: int) -> None:
        pass

    def begin_row(self, parent: Any, row: int, depth: int) -> None:
        pass

    def cell(self, parent: Any, row: int, column: int, depth: int) -> None:
        pass

    def end_row(self, parent: Any, row: int, depth: int) -> None:
        pass

    def close_row(self, parent: Any, row: int, depth: int) -> None:
        """Called once the row's subtree has been walked."""

    def end_level(self, parent: Any, depth: int, rows: int) -> None:
        pass


@dataclass
class RowBudget:
    """Row counter shared by every level of one walk.

    ``truncated`` becomes true only when a row beyond ``cap`` exists; a
    source holding exactly ``cap`` rows is not truncated.
    """

    cap: Optional[int] = None
    count: int = 0
    truncated: bool = False

    def exhausted(self) -> bool:
        return self.truncated or (self.cap is not None and self.count >= self.cap)


def _checked_count(value: int, what: str, parent: Any) -> int:
    if value < 0:
        raise DataSourceError(f"negative {what} count {value} under {parent!r}")
    return value


def walk(
    source: TreeDataSource,
    parent: Any,
    depth: int,
    visitor: RowVisitor,
    budget: Optional[RowBudget] = None,
    recursive: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> bool:
    """Visit the rows under *parent* and, if *recursive*, their subtrees.

    Args:
        source: The data source to read.
        parent: Node whose rows are visited, ``None`` for the root.
        depth: Depth reported for the rows under *parent*.
        visitor: Receiver of the row and cell events.
        budget: Optional row cap shared by the whole walk.
        recursive: Visit children rows, not only the rows of *parent*.
        max_depth: Depth above which the source is assumed cyclic.

    Returns:
        ``True`` when the budget stopped the walk before every row was
        visited.

    Raises:
        DataSourceError: On negative counts or when *max_depth* is
            exceeded.
    """
    if depth > max_depth:
        raise DataSourceError("cycle or excessive depth suspected")
    rows = _checked_count(source.row_count(parent), "row", parent)
    columns = _checked_count(source.column_count(parent), "column", parent)
    visitor.begin_level(parent, depth, rows)
    for row in range(rows):
        if budget is not None:
            if budget.exhausted():
                if not budget.truncated:
                    logger.debug("row cap %s reached, truncating", budget.cap)
                budget.truncated = True
                break
            budget.count += 1
        visitor.begin_row(parent, row, depth)
        for column in range(columns):
            visitor.cell(parent, row, column, depth)
        visitor.end_row(parent, row, depth)
        if recursive:
            child = source.index(row, 0, parent)
            walk(source, child, depth + 1, visitor, budget, recursive, max_depth)
        visitor.close_row(parent, row, depth)
    visitor.end_level(parent, depth, rows)
    return budget.truncated if budget is not None else False
