"""markdown-it-py backed renderer.

CommonMark with GFM tables and strikethrough, plus footnotes and task
lists from mdit-py-plugins. Raw HTML is always allowed: that is what lets
the placeholder comments through untouched.

Thread Safety:
A MarkdownIt instance is built once per renderer and only read while
rendering, so one renderer may serve several threads.

"""

from __future__ import annotations

from markdown_it import MarkdownIt
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from texmark.config import RenderConfig, get_render_config

_EMPTY_PARAGRAPHS = ("<p></p>", "<p>\n</p>")


def create_parser(config: RenderConfig) -> MarkdownIt:
    """Create a markdown-it parser configured for ``config``."""
    md = MarkdownIt("commonmark", {"html": True})
    if config.tables_enabled:
        md.enable("table")
    if config.strikethrough_enabled:
        md.enable("strikethrough")
    if config.footnotes_enabled:
        md.use(footnote_plugin)
    if config.task_lists_enabled:
        md.use(tasklists_plugin)
    return md


class MarkdownItRenderer:
    """Render Markdown to an HTML fragment with markdown-it-py.

    Usage:
        >>> MarkdownItRenderer().render("~~gone~~")
        '<p><s>gone</s></p>\\n'

    """

    __slots__ = ("_config", "_md")

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize renderer.

        Args:
            config: Feature switches (defaults to the active context config)
        """
        self._config = config or get_render_config()
        self._md = create_parser(self._config)

    @property
    def config(self) -> RenderConfig:
        return self._config

    def render(self, source: str) -> str:
        html = self._md.render(source)
        for empty in _EMPTY_PARAGRAPHS:
            html = html.replace(empty, "")
        return html


class IdentityRenderer:
    """Renderer that returns its input unchanged."""

    __slots__ = ()

    def render(self, source: str) -> str:
        return source
