"""Validation helpers shared across text services."""

from __future__ import annotations

from .value import Text

TextLike = Text | str | bytes | bytearray | memoryview


def ensure_text(value: TextLike, *, argument: str = "text") -> Text:
    if isinstance(value, Text):
        return value
    if isinstance(value, str):
        return Text.from_str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Text.from_bytes(value)
    raise TypeError(
        f"{argument} must be Text, str or bytes, not {type(value).__name__}"
    )
