"""Resynthesizer: rendered fragment + ordered spans -> final fragment.

Each span's placeholder is swapped for a container carrying the canonical
delimiters a client-side typesetter expects::

    <div class="math-block"><span class="katex-display">$$x^2$$</span></div>
    <span class="math-inline">$x$</span>

Whatever delimiter style the source used, only ``$$..$$`` and ``$..$``
come out.

Exactly one occurrence is replaced per span. A placeholder the markup
renderer dropped is logged and skipped; the rest of the fragment is still
produced.

"""

from __future__ import annotations

from collections.abc import Iterable
from html import escape as html_escape

from texmark.config import RenderConfig, get_render_config
from texmark.nodes import MathKind, MathSpan
from texmark.utils.logger import get_logger

logger = get_logger(__name__)


def math_html(span: MathSpan, config: RenderConfig | None = None) -> str:
    """Build the wrapper markup for one span.

    Args:
        span: Extracted math span
        config: Render config (defaults to the active context config)

    Returns:
        HTML container holding the canonically delimited content
    """
    config = config or get_render_config()
    content = html_escape(span.content, quote=False) if config.escape_math else span.content
    if span.kind is MathKind.BLOCK:
        return (
            f'<div class="{config.block_class}">'
            f'<span class="{config.display_class}">$${content}$$</span></div>'
        )
    return f'<span class="{config.inline_class}">${content}$</span>'


def resynthesize(
    rendered: str,
    spans: Iterable[MathSpan],
    *,
    config: RenderConfig | None = None,
) -> str:
    """Replace each span's placeholder in ``rendered`` with math markup.

    Args:
        rendered: Output of the markup renderer
        spans: Spans from the scan that produced the renderer's input
        config: Render config (defaults to the active context config)

    Returns:
        Final HTML fragment
    """
    config = config or get_render_config()
    for span in spans:
        if span.placeholder not in rendered:
            logger.warning(
                "Placeholder for math span %d (%s) missing from rendered output; span dropped",
                span.index,
                span.kind.value,
            )
            continue
        rendered = rendered.replace(span.placeholder, math_html(span, config), 1)
    return rendered
