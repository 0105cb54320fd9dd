"""Text views: cached, lazily refreshed renders of a data source.

A :class:`TextView` binds a serializer to a data source and keeps the
last rendered text.  Change notifications of the source do not render
immediately; they schedule a render on the event loop.  However many
notifications arrive before the loop gets to run it, only one render
happens, much like a widget repaint.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from .cache import RenderCache
from .errors import DataSourceError
from .model import TreeDataSource
from .serializers.base import Serializer

logger = logging.getLogger(__name__)


def _running_loop() -> asyncio.AbstractEventLoop:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        raise RuntimeError(
            "TextView needs an event loop: pass loop= or create the view "
            "from a coroutine"
        ) from None


class TextView:
    """Serializer output of a data source, refreshed once per loop turn.

    Args:
        serializer: Output format used by every render.
        source: Data source to observe; may be attached later.
        loop: Object providing ``call_soon(callback)``, typically an
            asyncio event loop.  Defaults to the running asyncio loop.

    Raises:
        RuntimeError: If no loop is given and none is running.  Nothing
            is subscribed to *source* in that case.
    """

    def __init__(
        self,
        serializer: Serializer,
        source: Optional[TreeDataSource] = None,
        loop: Optional[Any] = None,
    ) -> None:
        self.serializer = serializer
        self._source: Optional[TreeDataSource] = None
        self._loop = loop if loop is not None else _running_loop()
        self._pending = False
        self._cache = RenderCache()
        if source is not None:
            self.attach_source(source)

    @property
    def source(self) -> Optional[TreeDataSource]:
        return self._source

    @property
    def text(self) -> str:
        """Text of the last successful render, ``""`` before any."""
        return self._cache.text

    @property
    def cache(self) -> RenderCache:
        return self._cache

    @property
    def pending(self) -> bool:
        """Whether a render is scheduled and has not run yet."""
        return self._pending

    def attach_source(self, source: Optional[TreeDataSource]) -> None:
        """Observe *source* instead of the current one and schedule a render."""
        previous = self._source
        if previous is not None:
            previous.off_changed(self.request_update)
        self._source = source
        self.request_update()
        if source is not None:
            source.on_changed(self.request_update)
        logger.debug("source attached: %r", source)

    def set_serializer(self, serializer: Serializer) -> None:
        self.serializer = serializer
        self.request_update()

    def request_update(self) -> None:
        """Schedule a render unless one is already scheduled."""
        if self._pending:
            return
        self._loop.call_soon(self.render)
        self._pending = True
        logger.debug("render scheduled for %s", type(self.serializer).__name__)

    def render(self) -> str:
        """Render now and publish the result.

        The pending flag is cleared first so that a change notified while
        rendering schedules another render.  When the source turns out to
        be malformed the previous text is kept and returned.
        """
        self._pending = False
        try:
            text = self.serializer.serialize(self._source)
        except DataSourceError as exc:
            logger.warning("render with %s failed, keeping previous text: %s",
                           type(self.serializer).__name__, exc)
            return self._cache.text
        self._cache.publish(text)
        logger.debug("rendered %d characters with %s",
                     len(text), type(self.serializer).__name__)
        return text
