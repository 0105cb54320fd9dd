"""Last rendered text of a view."""

from __future__ import annotations


class RenderCache:
    """Holds the most recent complete render.

    A render is built aside and published with a single assignment, so a
    reader sees either the previous text or the new one, never a string
    under construction.
    """

    def __init__(self) -> None:
        self._text = ""
        self.renders = 0

    @property
    def text(self) -> str:
        return self._text

    def publish(self, text: str) -> None:
        """Replace the cached text with *text*."""
        self._text = text
        self.renders += 1
