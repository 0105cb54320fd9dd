"""Decorator-based registry of named implementations.

Serializers register themselves under the format name used on the
command line, so adding an output format only takes a new class::

    serializer_registry = SerializerRegistry()

    @serializer_registry.register("csv")
    class CsvFlatSerializer(Serializer):
        \"\"\"One line per top-level row.\"\"\"

    serializer = serializer_registry.create("csv", separator=",")
    serializer_registry.summaries()  # {"csv": "One line per top-level row."}
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, List, Type, TypeVar

T = TypeVar("T")


class Registry:
    """Maps string keys to classes and builds instances on demand."""

    def __init__(self, name: str = "registry") -> None:
        self._name = name
        self._items: Dict[str, Type[Any]] = {}

    def register(self, key: str) -> Callable[[Type[T]], Type[T]]:
        """Class decorator registering the class under *key*.

        Raises:
            ValueError: If *key* is already taken.
        """
        def decorator(cls: Type[T]) -> Type[T]:
            if key in self._items:
                raise ValueError(
                    f"{self._name}: key '{key}' already registered "
                    f"to {self._items[key].__name__}"
                )
            self._items[key] = cls
            return cls
        return decorator

    def get(self, key: str) -> Type[Any]:
        if key not in self._items:
            available = ", ".join(sorted(self._items))
            raise KeyError(
                f"{self._name}: unknown key '{key}'. Available: {available}"
            )
        return self._items[key]

    def create(self, key: str, **kwargs: Any) -> Any:
        return self.get(key)(**kwargs)

    def keys(self) -> List[str]:
        """Registered keys in registration order, e.g. for argparse choices."""
        return list(self._items)

    def summaries(self) -> Dict[str, str]:
        """First docstring line of each registered class, by key."""
        result = {}
        for key, cls in self._items.items():
            doc = inspect.cleandoc(cls.__doc__ or "")
            result[key] = doc.splitlines()[0] if doc else ""
        return result

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
