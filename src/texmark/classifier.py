"""Block/inline classification for extracted math.

A span written with a block delimiter (``$$..$$``, ``\\[..\\]``) is always
block math. A span written with an inline delimiter (``$..$``, ``\\(..\\)``)
is inline unless its content spans several lines, in which case it is
promoted to block: multi-line math cannot be laid out inside a text line.

Example:
    >>> classify(DelimiterForm.DOLLAR, "a\\nb")
    <MathKind.BLOCK: 'block'>
"""

from __future__ import annotations

from texmark.nodes import DelimiterForm, MathKind


def classify(form: DelimiterForm, content: str) -> MathKind:
    """Decide the layout of a span.

    Only the trimmed content is inspected, so a newline that merely pads
    the delimiters (``$ x\\n$``) keeps the span inline. Promotion needs a
    line break inside the math itself.

    Args:
        form: Delimiter pair the span was extracted with
        content: Trimmed span content

    Returns:
        MathKind.BLOCK or MathKind.INLINE
    """
    if form.is_block or "\n" in content:
        return MathKind.BLOCK
    return MathKind.INLINE
