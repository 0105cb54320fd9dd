"""Base serializer class and registry.

A serializer turns a whole :class:`~textview.model.TreeDataSource` into
one string.  Concrete classes register themselves in
``serializer_registry`` under their output format name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import fields, replace
from typing import Any, Callable, Optional

from ..config import RenderConfig
from ..delegate import TextDelegate
from ..model import TreeDataSource
from ..registry import Registry


class SerializerRegistry(Registry):
    """Registry of output formats checking options against :class:`RenderConfig`."""

    def __init__(self) -> None:
        super().__init__("serializer")

    def create(
        self,
        key: str,
        config: Optional[RenderConfig] = None,
        delegate: Optional[TextDelegate] = None,
        **options: Any,
    ) -> "Serializer":
        """Build the serializer registered under *key*.

        Raises:
            KeyError: If *key* is unknown.
            ValueError: If an option is not a :class:`RenderConfig` field.
        """
        cls = self.get(key)
        known = {f.name for f in fields(RenderConfig)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(
                f"{self._name}: unknown option(s) for '{key}': {', '.join(unknown)}"
            )
        return cls(config=config, delegate=delegate, **options)


serializer_registry = SerializerRegistry()


class Serializer(ABC):
    """Abstract base class of every output format.

    Args:
        config: Options to render with; a fresh :class:`RenderConfig`
            when omitted.
        delegate: Provider of cell and header texts.
        **options: Overrides applied to the config, e.g.
            ``CsvFlatSerializer(separator=",")``; the given config is
            copied, not modified.
    """

    default_separator = ";"

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        delegate: Optional[TextDelegate] = None,
        **options: Any,
    ) -> None:
        config = config if config is not None else RenderConfig()
        self.config = replace(config, **options) if options else config
        self.delegate = delegate if delegate is not None else TextDelegate()

    @property
    def separator(self) -> str:
        if self.config.separator is None:
            return self.default_separator
        return self.config.separator

    def serialize(self, source: Optional[TreeDataSource]) -> str:
        """Render *source*; an absent source renders as the empty string."""
        if source is None:
            return ""
        return self.render(source)

    @abstractmethod
    def render(self, source: TreeDataSource) -> str:
        """Render a present *source*.

        Raises:
            DataSourceError: If the source cannot be read consistently.
        """
        raise NotImplementedError


def role_value(getter: Callable[..., Optional[str]], *args: Any, role: Optional[str]) -> str:
    """Read an optional role through *getter*, ``""`` when unset or absent.

    Decoration is best effort: a source that cannot answer a role is
    treated as not carrying it.
    """
    if role is None:
        return ""
    try:
        value = getter(*args, role=role)
    except (LookupError, AttributeError):
        return ""
    return "" if value is None else str(value)
