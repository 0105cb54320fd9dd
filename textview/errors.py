"""Exceptions raised while reading a data source."""

from __future__ import annotations


class DataSourceError(Exception):
    """A data source answered something that cannot be rendered.

    Raised for negative row or column counts and when a traversal goes
    deeper than the configured ceiling, which usually means the source
    is cyclic.
    """
