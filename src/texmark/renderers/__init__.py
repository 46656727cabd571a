"""Structural-markup renderers for texmark.

The math pipeline hands placeholder-bearing text to a MarkupRenderer and
expects every placeholder back unchanged. MarkdownItRenderer is the
default; IdentityRenderer skips markup processing entirely.
"""

from texmark.renderers.markdown import IdentityRenderer, MarkdownItRenderer
from texmark.renderers.protocol import MarkupRenderer

__all__ = ["IdentityRenderer", "MarkdownItRenderer", "MarkupRenderer"]
