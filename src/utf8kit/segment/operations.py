"""Pure split/join/search/case operations over ``Text`` values.

Containment and search work on bytes. UTF-8 is self-synchronizing, so a
valid needle can only match at scalar-value boundaries of a valid haystack
and every piece produced by cutting at those matches is itself valid. That is
why results are built with ``Text._from_valid`` instead of re-validating.
"""

from __future__ import annotations

from typing import Iterable, List

from utf8kit.errors import InvalidArgument
from utf8kit.runtime.telemetry import record_event
from utf8kit.text import EMPTY, Text, TextBuffer, TextLike, ensure_text

ALL = -1

# Unicode White_Space, without the ASCII separator controls \x1c-\x1f
# that str.isspace also accepts.
WHITESPACE = (
    "\t\n\v\f\r "
    "\u0085\u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def _reject(operation: str, argument: str, message: str) -> InvalidArgument:
    record_event(
        "segment.invalid_argument",
        level="warning",
        data={"operation": operation, "argument": argument},
    )
    return InvalidArgument(message, argument=argument)


def split(text: TextLike, separator: TextLike) -> List[Text]:
    """Split on every non-overlapping occurrence of ``separator``.

    Empty pieces between adjacent separators are kept.
    """

    source = ensure_text(text)
    sep = ensure_text(separator, argument="separator")
    if not sep.data:
        raise _reject("split", "separator", "separator cannot be empty")
    return [Text._from_valid(piece) for piece in source.data.split(sep.data)]


def join(parts: Iterable[TextLike], separator: TextLike) -> Text:
    sep = ensure_text(separator, argument="separator")
    return Text._from_valid(
        sep.data.join(ensure_text(part, argument="parts").data for part in parts)
    )


def contains(text: TextLike, needle: TextLike) -> bool:
    return ensure_text(needle, argument="needle").data in ensure_text(text).data


def has_prefix(text: TextLike, prefix: TextLike) -> bool:
    return ensure_text(text).data.startswith(ensure_text(prefix, argument="prefix").data)


def has_suffix(text: TextLike, suffix: TextLike) -> bool:
    return ensure_text(text).data.endswith(ensure_text(suffix, argument="suffix").data)


def replace(
    text: TextLike,
    needle: TextLike,
    replacement: TextLike,
    max_count: int = ALL,
) -> Text:
    """Replace up to ``max_count`` leftmost non-overlapping occurrences.

    Any negative ``max_count`` (``ALL``) replaces every occurrence. Scanning
    resumes right after each replaced span, so ``replace("aaa", "aa", "b")``
    yields ``"ba"``. An empty needle matches at every scalar-value boundary,
    the same positions ``count_occurrences`` reports for it.
    """

    source = ensure_text(text)
    old = ensure_text(needle, argument="needle")
    new = ensure_text(replacement, argument="replacement")
    if max_count == 0:
        return source
    if not old.data:
        return _insert_at_boundaries(source, new, max_count)
    return Text._from_valid(source.data.replace(old.data, new.data, max_count))


def _insert_at_boundaries(source: Text, insert: Text, max_count: int) -> Text:
    boundaries = [offset for offset, _ in source.codepoints()]
    boundaries.append(source.byte_length)
    if max_count > 0:
        boundaries = boundaries[:max_count]

    buffer = TextBuffer(source.byte_length + insert.byte_length * len(boundaries))
    previous = 0
    for boundary in boundaries:
        buffer.append_text(source.byte_slice(previous, boundary))
        buffer.append_text(insert)
        previous = boundary
    buffer.append_text(source.byte_slice(previous))
    return buffer.snapshot()


def count_occurrences(text: TextLike, needle: TextLike) -> int:
    """Count leftmost non-overlapping occurrences of ``needle``.

    An empty needle matches at every scalar-value boundary, i.e.
    ``scalar_count + 1`` times.
    """

    source = ensure_text(text)
    target = ensure_text(needle, argument="needle")
    if not target.data:
        return source.scalar_count() + 1
    return source.data.count(target.data)


def trim_space(text: TextLike) -> Text:
    """Drop leading and trailing runs of Unicode ``White_Space`` characters."""

    source = ensure_text(text)
    return Text._from_valid(source.decode().strip(WHITESPACE).encode("utf-8"))


def to_lower(text: TextLike) -> Text:
    """Full Unicode lower-casing; a mapping may change the scalar count."""

    return Text._from_valid(ensure_text(text).decode().lower().encode("utf-8"))


def to_upper(text: TextLike) -> Text:
    """Full Unicode upper-casing.

    Special casings apply, so ``"ß"`` becomes ``"SS"`` and the result can hold
    more scalar values than the input. A per-scalar simple mapping would
    leave ``"ß"`` unchanged.
    """

    return Text._from_valid(ensure_text(text).decode().upper().encode("utf-8"))


def repeat(text: TextLike, count: int) -> Text:
    source = ensure_text(text)
    if count < 0:
        raise _reject("repeat", "count", f"repeat count cannot be negative: {count}")
    if count == 0 or not source.data:
        return EMPTY
    return Text._from_valid(source.data * count)


__all__ = [
    "ALL",
    "WHITESPACE",
    "contains",
    "count_occurrences",
    "has_prefix",
    "has_suffix",
    "join",
    "repeat",
    "replace",
    "split",
    "to_lower",
    "to_upper",
    "trim_space",
]
