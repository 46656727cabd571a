"""
texmark — Markdown with TeX math to HTML, safely

Math is pulled out of the source before the Markdown renderer sees it and
put back afterwards, so emphasis, escapes and HTML escaping never touch
math syntax, and ``$`` signs in ordinary text or code are left alone.

Quick Start:
    >>> from texmark import render
    >>> render("Energy: $E = mc^2$")
    '<p>Energy: <span class="math-inline">$E = mc^2$</span></p>\\n'

    >>> # Or keep a configured processor around
    >>> from texmark import MathMarkdown, RenderConfig
    >>> md = MathMarkdown(config=RenderConfig(tables_enabled=False))
    >>> html = md("$$\\\\int_0^1 x\\\\,dx$$")

Pipeline:
    scan()          source -> (text with placeholders, [MathSpan])
    renderer        text -> HTML fragment, placeholders untouched
    resynthesize()  fragment + spans -> final fragment

Four delimiter forms are accepted (``$$..$$``, ``\\[..\\]``, ``$..$``,
``\\(..\\)``); the output always uses ``$$..$$`` for display math and
``$..$`` for inline math.
"""

from texmark.classifier import classify
from texmark.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from texmark.errors import AssetError, ExportError, TexmarkError
from texmark.nodes import DelimiterForm, MathKind, MathSpan
from texmark.registry import PLACEHOLDER_PATTERN, PlaceholderRegistry, parse_placeholder
from texmark.renderers import IdentityRenderer, MarkdownItRenderer, MarkupRenderer
from texmark.resynthesizer import math_html, resynthesize
from texmark.scanner import ScanResult, scan

__version__ = "0.1.0"


def render(
    source: str,
    *,
    renderer: MarkupRenderer | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Render Markdown with embedded math to an HTML fragment.

    Args:
        source: Markdown source text
        renderer: Markup renderer (a MarkdownItRenderer if None)
        config: Render config (the active context config if None)

    Returns:
        HTML fragment with math wrapped for client-side typesetting
    """
    config = config or get_render_config()
    renderer = renderer or MarkdownItRenderer(config)
    text, spans = scan(source, protect_code=config.protect_code)
    return resynthesize(renderer.render(text), spans, config=config)


class MathMarkdown:
    """Reusable Markdown + math processor.

    Usage:
        >>> md = MathMarkdown()
        >>> md("Inline \\\\(a^2\\\\) math")
        '<p>Inline <span class="math-inline">$a^2$</span> math</p>\\n'

        >>> # Or drive the stages yourself
        >>> text, spans = md.scan("$$x$$")
        >>> md.resynthesize(text, spans)
        '<div class="math-block"><span class="katex-display">$$x$$</span></div>'

    Thread Safety:
        Config is immutable and the markdown-it parser is only read while
        rendering. Safe to share between threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        config: RenderConfig | None = None,
        renderer: MarkupRenderer | None = None,
    ) -> None:
        """Initialize processor.

        Args:
            config: Render config (a default RenderConfig if None)
            renderer: Markup renderer (a MarkdownItRenderer built from
                ``config`` if None)
        """
        self._config = config or RenderConfig()
        self._renderer = renderer or MarkdownItRenderer(self._config)

    @property
    def config(self) -> RenderConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Scan, render and resynthesize ``source``."""
        with render_config_context(self._config):
            text, spans = self.scan(source)
            return self.resynthesize(self._renderer.render(text), spans)

    def scan(self, source: str) -> ScanResult:
        return scan(source, protect_code=self._config.protect_code)

    def resynthesize(self, rendered: str, spans: tuple[MathSpan, ...]) -> str:
        return resynthesize(rendered, spans, config=self._config)


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "render",
    "scan",
    "resynthesize",
    "classify",
    "math_html",
    # High-level
    "MathMarkdown",
    # Values
    "DelimiterForm",
    "MathKind",
    "MathSpan",
    "ScanResult",
    # Placeholders
    "PLACEHOLDER_PATTERN",
    "PlaceholderRegistry",
    "parse_placeholder",
    # Renderers
    "IdentityRenderer",
    "MarkdownItRenderer",
    "MarkupRenderer",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Errors
    "TexmarkError",
    "AssetError",
    "ExportError",
]
