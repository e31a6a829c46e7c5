"""Error taxonomy shared by every utf8kit service."""

from __future__ import annotations

from typing import Optional


class TextError(RuntimeError):
    """Base class for failures reported by utf8kit operations."""


class EncodingError(TextError, ValueError):
    """Raised when bytes presented as text are not well-formed UTF-8."""

    def __init__(
        self,
        message: str,
        *,
        data: bytes | None = None,
        offset: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.data = data
        self.offset = offset

    @classmethod
    def from_decode_error(
        cls, exc: UnicodeDecodeError, *, data: bytes
    ) -> "EncodingError":
        return cls(
            f"invalid UTF-8 at byte {exc.start}: {exc.reason}",
            data=data,
            offset=exc.start,
        )


class InvalidArgument(TextError, ValueError):
    """Raised for structurally meaningless requests (empty separator, n < 0)."""

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument


class PatternSyntaxError(TextError, ValueError):
    """Raised when a pattern source cannot be compiled."""

    def __init__(
        self,
        message: str,
        *,
        source: str,
        position: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.position = position


__all__ = [
    "TextError",
    "EncodingError",
    "InvalidArgument",
    "PatternSyntaxError",
]
