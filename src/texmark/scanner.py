"""Delimiter scanner: raw source -> (text with placeholders, ordered spans).

Four delimiter forms are recognized, resolved one at a time in a fixed
precedence because they overlap lexically:

1. ``$$ ... $$``  block, may span lines, first close wins
2. ``\\[ ... \\]``  block, same policy
3. ``$ ... $``    inline, manual scan (see _scan_dollar)
4. ``\\( ... \\)``  inline

The working text is an ordered list of segments. A segment is either raw
text still open to scanning, protected text (code) that no form may look
at, or an extracted MathSpan. Each form only rewrites raw segments, so a
later form can never see, or match across, math that an earlier form
already took. For ``$a $$b$$ c$`` the block wins and both single dollars
stay literal.

Unterminated forms are left as literal text. Nothing in here raises.

Example:
    >>> text, spans = scan("$$ x $$ $y$")
    >>> [(s.kind.name, s.content) for s in spans]
    [('BLOCK', 'x'), ('INLINE', 'y')]

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import NamedTuple

from texmark.nodes import DelimiterForm, MathKind, MathSpan
from texmark.registry import PlaceholderRegistry
from texmark.utils.logger import get_logger

logger = get_logger(__name__)

_PAIRED_PATTERNS: dict[DelimiterForm, re.Pattern[str]] = {
    form: re.compile(f"{re.escape(form.opener)}(.*?){re.escape(form.closer)}", re.DOTALL)
    for form in (DelimiterForm.DOUBLE_DOLLAR, DelimiterForm.BRACKET, DelimiterForm.PAREN)
}

_FENCE_OPEN = re.compile(r" {0,3}(`{3,}|~{3,})")
# Captured so split() keeps the separators.
_BLANK_LINE = re.compile(r"(\n[ \t]*\n)")


class ScanResult(NamedTuple):
    """Output of scan(): intermediate text plus spans in extraction order."""

    text: str
    spans: tuple[MathSpan, ...]


@dataclass(frozen=True, slots=True)
class _Protected:
    """Source text passed through without scanning (code)."""

    text: str


Segment = str | _Protected | MathSpan


def scan(source: str, *, protect_code: bool = True) -> ScanResult:
    """Extract math spans from ``source``.

    Args:
        source: Markdown source with embedded TeX math
        protect_code: Leave fenced code blocks and inline code spans
            untouched so dollar signs inside code stay literal

    Returns:
        ScanResult with every span replaced by its placeholder token
    """
    registry = PlaceholderRegistry(source)
    segments: list[Segment] = _split_code(source) if protect_code else [source]

    segments = _map_raw(segments, lambda text: _split_paired(text, DelimiterForm.DOUBLE_DOLLAR, registry))
    segments = _map_raw(segments, lambda text: _split_paired(text, DelimiterForm.BRACKET, registry))
    segments = _map_raw(segments, lambda text: _scan_dollar(text, registry))
    segments = _map_raw(segments, lambda text: _split_paired(text, DelimiterForm.PAREN, registry))

    spans = registry.spans
    if spans:
        blocks = sum(1 for span in spans if span.kind is MathKind.BLOCK)
        logger.debug("Extracted %d math spans (%d block, %d inline)", len(spans), blocks, len(spans) - blocks)
    return ScanResult(_join(segments), spans)


def _join(segments: Iterable[Segment]) -> str:
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, str):
            parts.append(segment)
        elif isinstance(segment, _Protected):
            parts.append(segment.text)
        else:
            parts.append(segment.placeholder)
    return "".join(parts)


def _map_raw(segments: list[Segment], split: Callable[[str], list[Segment]]) -> list[Segment]:
    """Apply ``split`` to every raw text segment, keeping the others as-is."""
    result: list[Segment] = []
    for segment in segments:
        if isinstance(segment, str):
            result.extend(split(segment))
        else:
            result.append(segment)
    return result


# =============================================================================
# Delimiter forms
# =============================================================================


def _split_paired(text: str, form: DelimiterForm, registry: PlaceholderRegistry) -> list[Segment]:
    """Extract every non-overlapping, leftmost, shortest match of ``form``."""
    result: list[Segment] = []
    last = 0
    for match in _PAIRED_PATTERNS[form].finditer(text):
        if match.start() > last:
            result.append(text[last : match.start()])
        result.append(registry.register(form, match.group(1), match.group(0)))
        last = match.end()
    if last < len(text):
        result.append(text[last:])
    return result


def _scan_dollar(text: str, registry: PlaceholderRegistry) -> list[Segment]:
    """Extract single-dollar inline math with a character-level scan.

    A ``$`` opens a span unless it follows ``$`` or ``\\`` or precedes
    another ``$``. The span closes at the nearest ``$`` that is neither
    escaped nor touching another ``$``. An opener without a closer is kept
    as a literal ``$``.
    """
    result: list[Segment] = []
    length = len(text)
    literal_start = 0
    i = text.find("$")
    while i != -1:
        if _is_opener(text, i, length):
            close = _find_closer(text, i + 1, length)
            if close == -1:
                # Closer validity does not depend on the opener, so no later
                # opener can find one either.
                break
            if i > literal_start:
                result.append(text[literal_start:i])
            result.append(registry.register(DelimiterForm.DOLLAR, text[i + 1 : close], text[i : close + 1]))
            literal_start = close + 1
            i = text.find("$", literal_start)
        else:
            i = text.find("$", i + 1)
    if literal_start < length:
        result.append(text[literal_start:])
    return result


def _is_opener(text: str, i: int, length: int) -> bool:
    if i > 0 and text[i - 1] in ("$", "\\"):
        return False
    return not (i + 1 < length and text[i + 1] == "$")


def _find_closer(text: str, start: int, length: int) -> int:
    j = text.find("$", start)
    while j != -1:
        if text[j - 1] not in ("$", "\\") and not (j + 1 < length and text[j + 1] == "$"):
            return j
        j = text.find("$", j + 1)
    return -1


# =============================================================================
# Code protection
# =============================================================================


def _split_code(source: str) -> list[Segment]:
    """Split ``source`` into raw text and protected code segments.

    Fenced code blocks follow the CommonMark fence rules (an unclosed fence
    runs to the end of input). Inline code spans are recognized in the
    text between fences.
    """
    result: list[Segment] = []
    pending: list[str] = []
    fence: list[str] = []
    fence_char = ""
    fence_len = 0

    for line in _lines(source):
        if fence_char:
            fence.append(line)
            if _closes_fence(line, fence_char, fence_len):
                result.append(_Protected("".join(fence)))
                fence = []
                fence_char = ""
            continue

        match = _FENCE_OPEN.match(line)
        if match is not None:
            marker = match.group(1)
            # Backtick fences may not carry backticks in their info string.
            if not (marker[0] == "`" and "`" in line[match.end() :]):
                if pending:
                    result.extend(_split_code_spans("".join(pending)))
                    pending = []
                fence = [line]
                fence_char = marker[0]
                fence_len = len(marker)
                continue

        pending.append(line)

    if fence:
        result.append(_Protected("".join(fence)))
    if pending:
        result.extend(_split_code_spans("".join(pending)))
    return result


def _split_code_spans(text: str) -> list[Segment]:
    """Protect inline code spans in the text between fences.

    Code spans follow CommonMark: a backtick run opens a span only when it
    is not backslash-escaped, closes at the next run of the same length,
    and cannot cross a blank line. An unmatched run is ordinary text.
    Raw text around the spans stays in one piece, so math may still cross
    blank lines.
    """
    result: list[Segment] = []
    for paragraph in _BLANK_LINE.split(text):
        for segment in _paragraph_code_spans(paragraph):
            if isinstance(segment, str) and result and isinstance(result[-1], str):
                result[-1] += segment
            else:
                result.append(segment)
    return result


def _paragraph_code_spans(text: str) -> list[Segment]:
    result: list[Segment] = []
    last = 0
    i = text.find("`")
    while i != -1:
        if _escaped(text, i, last):
            # Only the first backtick is escaped; the rest of the run may open.
            i = text.find("`", i + 1)
            continue
        run = _run_length(text, i)
        close = _find_backtick_run(text, i + run, run)
        if close == -1:
            i = text.find("`", i + run)
            continue
        if i > last:
            result.append(text[last:i])
        result.append(_Protected(text[i : close + run]))
        last = close + run
        i = text.find("`", last)
    if last < len(text):
        result.append(text[last:])
    return result


def _find_backtick_run(text: str, start: int, length: int) -> int:
    j = text.find("`", start)
    while j != -1:
        run = _run_length(text, j)
        if run == length:
            return j
        j = text.find("`", j + run)
    return -1


def _run_length(text: str, i: int) -> int:
    end = i
    while end < len(text) and text[end] == "`":
        end += 1
    return end - i


def _escaped(text: str, i: int, floor: int) -> bool:
    """True if ``text[i]`` follows an odd number of backslashes."""
    count = 0
    while i - count - 1 >= floor and text[i - count - 1] == "\\":
        count += 1
    return count % 2 == 1


def _closes_fence(line: str, char: str, length: int) -> bool:
    stripped = line.lstrip(" ")
    if len(line) - len(stripped) > 3:
        return False
    run = len(stripped) - len(stripped.lstrip(char))
    return run >= length and not stripped[run:].strip()


def _lines(source: str) -> list[str]:
    """Split into lines, keeping each line's trailing newline."""
    parts = source.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines
