"""Segmenting, searching, and case-mapping operations on text."""

from .operations import (
    ALL,
    WHITESPACE,
    contains,
    count_occurrences,
    has_prefix,
    has_suffix,
    join,
    repeat,
    replace,
    split,
    to_lower,
    to_upper,
    trim_space,
)

__all__ = [
    "ALL",
    "WHITESPACE",
    "split",
    "join",
    "contains",
    "has_prefix",
    "has_suffix",
    "replace",
    "count_occurrences",
    "trim_space",
    "to_lower",
    "to_upper",
    "repeat",
]
