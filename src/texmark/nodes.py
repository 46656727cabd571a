"""Typed values for extracted math.

Node Hierarchy:
MathKind        how a span is laid out (display or flowing with text)
DelimiterForm   which of the four source delimiter pairs produced it
MathSpan        one extracted region, created by a scan and consumed once
                by resynthesis

Thread Safety:
All values are frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass
from enum import Enum


class MathKind(Enum):
    """Layout of a math span.

    BLOCK spans render as centered display math, INLINE spans flow with
    the surrounding text.

    """

    BLOCK = "block"
    INLINE = "inline"

    @property
    def tag(self) -> str:
        """Upper-case tag embedded in placeholder tokens."""
        return self.name


class DelimiterForm(Enum):
    """The four recognized delimiter pairs, in precedence order."""

    DOUBLE_DOLLAR = ("$$", "$$", True)
    BRACKET = ("\\[", "\\]", True)
    DOLLAR = ("$", "$", False)
    PAREN = ("\\(", "\\)", False)

    def __init__(self, opener: str, closer: str, is_block: bool) -> None:
        self.opener = opener
        self.closer = closer
        self.is_block = is_block


@dataclass(frozen=True, slots=True)
class MathSpan:
    """One recognized math region.

    Attributes:
        kind: Block or inline layout
        content: Math source with delimiters removed and surrounding
            whitespace trimmed; otherwise untouched
        placeholder: Opaque token standing in for the span in the
            intermediate text
        index: Zero-based position in the ordered span list
        form: Delimiter pair the span was written with
        source: Exact matched text, delimiters included

    """

    kind: MathKind
    content: str
    placeholder: str
    index: int
    form: DelimiterForm
    source: str
