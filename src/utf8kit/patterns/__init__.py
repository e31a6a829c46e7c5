"""Pattern compilation and match extraction."""

from utf8kit.errors import PatternSyntaxError

from .matcher import (
    UNBOUNDED,
    PatternMatcher,
    compile,
    find_all,
    get_default_matcher,
)
from .models import Match, Pattern

__all__ = [
    "Pattern",
    "Match",
    "PatternMatcher",
    "PatternSyntaxError",
    "UNBOUNDED",
    "compile",
    "find_all",
    "get_default_matcher",
]
