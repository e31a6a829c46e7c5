"""Compiled patterns and the matches they produce."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from utf8kit.text import Text


@dataclass(frozen=True, slots=True)
class Pattern:
    """Precompiled matching rule, safe to share across texts and threads."""

    source: str
    regex: re.Pattern[str] = field(repr=False, compare=False)
    flags: int = 0

    @property
    def group_count(self) -> int:
        return self.regex.groups


@dataclass(frozen=True, slots=True)
class Match:
    """One match against a specific ``Text``; offsets are byte offsets."""

    start: int
    end: int
    text: Text

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.end:
            raise ValueError(f"invalid match span [{self.start}:{self.end}]")

    @property
    def byte_span(self) -> tuple[int, int]:
        return (self.start, self.end)

    def __str__(self) -> str:
        return str(self.text)


__all__ = ["Pattern", "Match"]
