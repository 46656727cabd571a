"""Placeholder registry for one pipeline run.

Each accepted span gets a token of the form::

    <!--MATH_BLOCK_1f3a9c02_0-->
    <!--MATH_INLINE_1f3a9c02_1-->

The token is an HTML comment, which the markup renderer is required to pass
through untouched. It contains no ``$`` and no backslash, so no delimiter
grammar can rediscover math inside it.

A comment at the start of a line opens a raw HTML block in CommonMark, and
the rest of that line would get no Markdown processing. Inline tokens
therefore start with U+2060 WORD JOINER, an invisible character that keeps
the line an ordinary paragraph. Block tokens keep the bare comment so a
display equation on its own line becomes its own block.

The salt is derived from the source text itself: identical input always
yields identical tokens, and the salt is re-derived until it does not occur
anywhere in the source, so user text cannot contain a token by accident.

The trailing number is the span's position in the ordered span list. The
kind tag is there for humans and debugging tools; resynthesis works from
the registry's list and never parses tokens.

Thread Safety:
A registry is owned by a single scan() call. No module-level counters.

"""

from __future__ import annotations

import re
from collections.abc import Iterator

from texmark.classifier import classify
from texmark.nodes import DelimiterForm, MathKind, MathSpan
from texmark.utils.hashing import hash_str

SALT_LENGTH = 8

INLINE_PREFIX = "\u2060"  # WORD JOINER

PLACEHOLDER_PATTERN = re.compile(
    r"\u2060?<!--MATH_(?P<tag>BLOCK|INLINE)_(?P<salt>[0-9a-f]+)_(?P<index>\d+)-->"
)


def derive_salt(source: str) -> str:
    """Return a deterministic salt that does not occur in ``source``."""
    salt = hash_str(source, truncate=SALT_LENGTH)
    attempt = 0
    while salt in source:
        attempt += 1
        salt = hash_str(f"{attempt}:{source}", truncate=SALT_LENGTH)
    return salt


def format_placeholder(kind: MathKind, salt: str, index: int) -> str:
    token = f"<!--MATH_{kind.tag}_{salt}_{index}-->"
    return INLINE_PREFIX + token if kind is MathKind.INLINE else token


def parse_placeholder(token: str) -> tuple[MathKind, str, int] | None:
    """Read a token back into (kind, salt, index).

    Args:
        token: A complete placeholder token

    Returns:
        Decoded fields, or None if ``token`` is not a placeholder
    """
    match = PLACEHOLDER_PATTERN.fullmatch(token)
    if match is None:
        return None
    return MathKind[match["tag"]], match["salt"], int(match["index"])


class PlaceholderRegistry:
    """Ordered, append-only list of the spans extracted from one source.

    Usage:
        >>> registry = PlaceholderRegistry("$$ x $$")
        >>> span = registry.register(DelimiterForm.DOUBLE_DOLLAR, " x ", "$$ x $$")
        >>> span.index, span.content
        (0, 'x')

    """

    __slots__ = ("_salt", "_spans")

    def __init__(self, source: str) -> None:
        """Initialize an empty registry for ``source``.

        Args:
            source: The full text being scanned (used to derive the salt)
        """
        self._salt = derive_salt(source)
        self._spans: list[MathSpan] = []

    @property
    def salt(self) -> str:
        return self._salt

    @property
    def spans(self) -> tuple[MathSpan, ...]:
        return tuple(self._spans)

    def register(self, form: DelimiterForm, raw_content: str, matched: str) -> MathSpan:
        """Classify, trim and append a span, assigning its token.

        Args:
            form: Delimiter pair that matched
            raw_content: Text between the delimiters, untrimmed
            matched: The full matched text, delimiters included

        Returns:
            The new MathSpan
        """
        content = raw_content.strip()
        kind = classify(form, content)
        index = len(self._spans)
        span = MathSpan(
            kind=kind,
            content=content,
            placeholder=format_placeholder(kind, self._salt, index),
            index=index,
            form=form,
            source=matched,
        )
        self._spans.append(span)
        return span

    def __len__(self) -> int:
        return len(self._spans)

    def __iter__(self) -> Iterator[MathSpan]:
        return iter(self._spans)
