"""Compose several views into one HTML page.

The page is rendered from a Jinja2 template receiving ``title``, ``css``
and ``views``, the list of the current texts of the registered views.
View texts are raw HTML, so the environment does not autoescape them.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, Template

from .view import TextView

# Template directory
TEMPLATES_DIR = Path(__file__).parent / "templates"


class PageComposer:
    """Render a page template around the texts of a list of views.

    Args:
        template: Jinja2 template source; the packaged ``page.jinja2``
            when omitted.
        title: Page title.
    """

    def __init__(self, template: Optional[str] = None, title: str = "") -> None:
        self._env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=False,
        )
        self._template: Template = (
            self._env.from_string(template) if template is not None
            else self._env.get_template("page.jinja2")
        )
        self.title = title
        self._views: List[TextView] = []
        self._css: Optional[str] = None

    @property
    def css(self) -> str:
        """Load and cache the packaged stylesheet."""
        if self._css is None:
            self._css = (TEMPLATES_DIR / "page.css").read_text()
        return self._css

    @property
    def views(self) -> List[TextView]:
        return list(self._views)

    def add_view(self, view: TextView) -> None:
        self._views.append(view)

    def clear_views(self) -> None:
        self._views.clear()

    def render(self) -> str:
        """Render the page with the views' current texts."""
        return self._template.render(
            title=self.title,
            css=self.css,
            views=[view.text for view in self._views],
        )
