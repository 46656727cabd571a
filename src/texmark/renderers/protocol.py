"""MarkupRenderer protocol — the contract the math pipeline relies on.

Any object with ``render(source: str) -> str`` conforms. Implementations
must pass HTML comments through byte-for-byte: math placeholders are HTML
comments, and a renderer that strips or escapes them loses those spans.

Example:
    from texmark.renderers.protocol import MarkupRenderer

    def to_fragment(renderer: MarkupRenderer, text: str) -> str:
        return renderer.render(text)

"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MarkupRenderer(Protocol):
    """Protocol for structural-markup renderers."""

    def render(self, source: str) -> str:
        """Render markup source (math already replaced) to an HTML fragment.

        Args:
            source: Text containing placeholder comments

        Returns:
            HTML fragment with the placeholders intact

        """
        ...
