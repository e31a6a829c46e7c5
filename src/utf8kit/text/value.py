"""Immutable UTF-8 text value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from utf8kit.errors import EncodingError

from .codepoints import CodepointView, count_scalars


def _is_continuation(byte: int) -> bool:
    return 0x80 <= byte <= 0xBF


@dataclass(frozen=True, slots=True, repr=False)
class Text:
    """Byte sequence that always holds well-formed UTF-8.

    Byte access (``byte_length``, ``byte_at``, ``byte_slice``) and scalar
    access (``codepoints``, ``scalar_count``) are deliberately separate; there
    is no ``__len__`` so a byte count cannot pass for a character count.
    """

    data: bytes = b""

    def __post_init__(self) -> None:
        raw = self.data
        if isinstance(raw, (bytearray, memoryview)):
            raw = bytes(raw)
            object.__setattr__(self, "data", raw)
        elif not isinstance(raw, bytes):
            raise TypeError(f"Text data must be bytes, not {type(raw).__name__}")
        try:
            raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError.from_decode_error(exc, data=raw) from exc

    @classmethod
    def _from_valid(cls, data: bytes) -> "Text":
        # Callers guarantee ``data`` is already well-formed.
        text = object.__new__(cls)
        object.__setattr__(text, "data", data)
        return text

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> "Text":
        return cls(bytes(data))

    @classmethod
    def from_str(cls, value: str) -> "Text":
        try:
            encoded = value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodingError(
                f"character {exc.start} cannot be encoded: {exc.reason}"
            ) from exc
        return cls._from_valid(encoded)

    @classmethod
    def from_int(cls, value: int) -> "Text":
        """Decimal representation of ``value``."""

        return cls._from_valid(str(int(value)).encode("ascii"))

    @property
    def byte_length(self) -> int:
        return len(self.data)

    def byte_at(self, index: int) -> int:
        """Raw byte value at ``index``; not a character."""

        if not 0 <= index < len(self.data):
            raise IndexError(f"byte index {index} out of range")
        return self.data[index]

    def byte_slice(self, start: int, end: Optional[int] = None) -> "Text":
        """Sub-text covering bytes ``[start:end]``.

        Raises ``EncodingError`` if either boundary falls inside a multi-byte
        sequence.
        """

        size = len(self.data)
        stop = size if end is None else end
        if not 0 <= start <= stop <= size:
            raise IndexError(f"byte range [{start}:{stop}] out of range for {size}")
        for boundary in (start, stop):
            if boundary < size and _is_continuation(self.data[boundary]):
                raise EncodingError(
                    f"byte {boundary} is inside a multi-byte sequence",
                    data=self.data,
                    offset=boundary,
                )
        return Text._from_valid(self.data[start:stop])

    def codepoints(self) -> CodepointView:
        return CodepointView(self.data)

    def scalar_count(self) -> int:
        return count_scalars(self)

    def is_ascii(self) -> bool:
        return self.data.isascii()

    def decode(self) -> str:
        return self.data.decode("utf-8")

    def __str__(self) -> str:
        return self.decode()

    def __repr__(self) -> str:
        return f"Text({self.decode()!r})"

    def __bool__(self) -> bool:
        return bool(self.data)

    def __add__(self, other: object) -> "Text":
        if isinstance(other, Text):
            return Text._from_valid(self.data + other.data)
        if isinstance(other, str):
            return Text._from_valid(self.data + Text.from_str(other).data)
        return NotImplemented

    def __radd__(self, other: object) -> "Text":
        if isinstance(other, str):
            return Text._from_valid(Text.from_str(other).data + self.data)
        return NotImplemented


EMPTY = Text._from_valid(b"")

__all__ = ["EMPTY", "Text"]
