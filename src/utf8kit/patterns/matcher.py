"""Two-phase pattern matching (``compile`` then ``find_all``) over ``re``."""

from __future__ import annotations

import re
import threading
from collections import OrderedDict
from typing import Iterator, List, Optional

from utf8kit.errors import InvalidArgument, PatternSyntaxError
from utf8kit.runtime.config import get_settings
from utf8kit.runtime.telemetry import span
from utf8kit.text import Text, TextLike, ensure_text

from .models import Match, Pattern

UNBOUNDED = -1


def _utf8_width(value: str) -> int:
    return len(value.encode("utf-8"))


class PatternMatcher:
    """Compiles patterns (with a bounded LRU cache) and scans text with them.

    Matching runs on the decoded string; character offsets reported by ``re``
    are converted back to byte offsets into the source ``Text`` in a single
    left-to-right pass. Empty matches that abut the preceding match are
    dropped, so ``\\d*`` over ``"a12b"`` yields ``"", "12", ""``.
    """

    def __init__(
        self, *, cache_size: Optional[int] = None, logger_name: str | None = None
    ) -> None:
        if cache_size is None:
            cache_size = get_settings().pattern_cache_size
        if cache_size < 0:
            raise InvalidArgument("cache_size cannot be negative", argument="cache_size")
        self._cache: OrderedDict[tuple[str, int], Pattern] = OrderedDict()
        self._cache_size = cache_size
        self._lock = threading.Lock()
        self._logger_name = logger_name

    def compile(self, source: TextLike, *, flags: int = 0) -> Pattern:
        """Compile ``source`` or return the cached ``Pattern`` for it.

        Raises ``PatternSyntaxError`` for malformed sources and
        ``InvalidArgument`` for flags ``re`` refuses on str patterns.
        """

        pattern_source = source if isinstance(source, str) else str(ensure_text(source))
        key = (pattern_source, flags)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                return cached

        with span(
            "patterns::compile",
            logger_name=self._logger_name,
            component="patterns",
            metadata={"source": pattern_source, "flags": flags},
        ) as handle:
            try:
                compiled = re.compile(pattern_source, flags)
            except re.error as exc:
                handle.add_metadata("position", exc.pos)
                raise PatternSyntaxError(
                    f"invalid pattern {pattern_source!r}: {exc.msg}",
                    source=pattern_source,
                    position=exc.pos,
                ) from exc
            except ValueError as exc:
                raise InvalidArgument(str(exc), argument="flags") from exc

        pattern = Pattern(source=pattern_source, regex=compiled, flags=flags)
        self._remember(key, pattern)
        return pattern

    def find_all(
        self,
        pattern: Pattern | str,
        text: TextLike,
        limit: int = UNBOUNDED,
    ) -> List[Match]:
        """Return up to ``limit`` leftmost non-overlapping matches in order.

        A negative ``limit`` (``UNBOUNDED``) returns every match. No match is
        an empty list, never an error.
        """

        compiled = self._coerce(pattern)
        source = ensure_text(text)
        if limit == 0:
            return []

        with span(
            "patterns::find_all",
            logger_name=self._logger_name,
            component="patterns",
            metadata={"pattern": compiled.source, "limit": limit},
        ) as handle:
            matches: List[Match] = []
            for match in _scan(compiled, source):
                matches.append(match)
                if 0 < limit <= len(matches):
                    break
            handle.add_metadata("count", len(matches))
            return matches

    def find_first(self, pattern: Pattern | str, text: TextLike) -> Optional[Match]:
        matches = self.find_all(pattern, text, limit=1)
        return matches[0] if matches else None

    def matches(self, pattern: Pattern | str, text: TextLike) -> bool:
        return self._coerce(pattern).regex.search(ensure_text(text).decode()) is not None

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    @property
    def cached_count(self) -> int:
        return len(self._cache)

    def _coerce(self, pattern: Pattern | str) -> Pattern:
        if isinstance(pattern, Pattern):
            return pattern
        return self.compile(pattern)

    def _remember(self, key: tuple[str, int], pattern: Pattern) -> None:
        if self._cache_size == 0:
            return
        with self._lock:
            self._cache[key] = pattern
            self._cache.move_to_end(key)
            while len(self._cache) > self._cache_size:
                self._cache.popitem(last=False)


def _scan(pattern: Pattern, text: Text) -> Iterator[Match]:
    decoded = text.decode()
    data = text.data
    char_cursor = 0
    byte_cursor = 0
    previous_end: Optional[int] = None
    for found in pattern.regex.finditer(decoded):
        start_char, end_char = found.span()
        # An empty match touching the previous match is not a new match.
        if start_char == end_char == previous_end:
            continue
        previous_end = end_char
        start = byte_cursor + _utf8_width(decoded[char_cursor:start_char])
        end = start + _utf8_width(decoded[start_char:end_char])
        char_cursor, byte_cursor = end_char, end
        yield Match(start=start, end=end, text=Text._from_valid(data[start:end]))


_DEFAULT_MATCHER: Optional[PatternMatcher] = None


def get_default_matcher() -> PatternMatcher:
    global _DEFAULT_MATCHER
    if _DEFAULT_MATCHER is None:
        _DEFAULT_MATCHER = PatternMatcher()
    return _DEFAULT_MATCHER


def compile(source: TextLike, *, flags: int = 0) -> Pattern:
    return get_default_matcher().compile(source, flags=flags)


def find_all(
    pattern: Pattern | str, text: TextLike, limit: int = UNBOUNDED
) -> List[Match]:
    return get_default_matcher().find_all(pattern, text, limit)


__all__ = [
    "UNBOUNDED",
    "PatternMatcher",
    "compile",
    "find_all",
    "get_default_matcher",
]
