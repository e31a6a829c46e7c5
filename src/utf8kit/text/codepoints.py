"""Scalar-value decoding over UTF-8 byte storage."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Tuple

from utf8kit.errors import EncodingError, InvalidArgument

if TYPE_CHECKING:
    from .value import Text

MAX_SCALAR = 0x10FFFF
SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF

CodepointPair = Tuple[int, int]  # (byte_offset, scalar_value)


class CodepointView(Iterator[CodepointPair]):
    """Single-pass iterator of ``(byte_offset, scalar_value)`` pairs.

    Offsets are the index of the first byte of each encoded scalar value and
    strictly increase. The view is not restartable; ask the ``Text`` for a
    fresh one via ``Text.codepoints()``.

    The source bytes are assumed well-formed because ``Text`` validates on
    construction, so only the lead byte is inspected to find the width.
    """

    __slots__ = ("_data", "_offset")

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    @property
    def byte_offset(self) -> int:
        """Number of bytes consumed so far."""

        return self._offset

    def __iter__(self) -> "CodepointView":
        return self

    def __next__(self) -> CodepointPair:
        data = self._data
        start = self._offset
        if start >= len(data):
            raise StopIteration

        lead = data[start]
        if lead < 0x80:
            width, value = 1, lead
        elif lead < 0xE0:
            width, value = 2, lead & 0x1F
        elif lead < 0xF0:
            width, value = 3, lead & 0x0F
        else:
            width, value = 4, lead & 0x07

        for follower in data[start + 1 : start + width]:
            value = (value << 6) | (follower & 0x3F)

        self._offset = start + width
        return start, value


def decode(text: "Text") -> CodepointView:
    return CodepointView(text.data)


def count_scalars(text: "Text") -> int:
    """Count scalar values by consuming a full view."""

    count = 0
    for _ in decode(text):
        count += 1
    return count


def ensure_scalar(value: int | str) -> int:
    """Normalize ``value`` to an integer Unicode scalar value.

    Accepts an ``int`` code point or a one-character ``str``. Surrogates are
    rejected with ``EncodingError`` since they have no UTF-8 form.
    """

    if isinstance(value, str):
        if len(value) != 1:
            raise InvalidArgument(
                f"expected a single character, got {len(value)}", argument="value"
            )
        value = ord(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"scalar value must be int or str, not {type(value).__name__}")
    if not 0 <= value <= MAX_SCALAR:
        raise InvalidArgument(
            f"{value:#x} is outside the Unicode range", argument="value"
        )
    if SURROGATE_MIN <= value <= SURROGATE_MAX:
        raise EncodingError(f"U+{value:04X} is a surrogate and cannot be encoded")
    return value


def encode_scalar(value: int | str) -> bytes:
    return chr(ensure_scalar(value)).encode("utf-8")


__all__ = [
    "CodepointPair",
    "CodepointView",
    "MAX_SCALAR",
    "count_scalars",
    "decode",
    "encode_scalar",
    "ensure_scalar",
]
