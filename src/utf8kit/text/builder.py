"""Amortized-growth accumulator for building text incrementally."""

from __future__ import annotations

from typing import Optional

from utf8kit.errors import EncodingError, InvalidArgument
from utf8kit.runtime.config import get_settings
from utf8kit.runtime.telemetry import record_event

from .codepoints import encode_scalar
from .validation import TextLike, ensure_text
from .value import Text


class TextBuffer:
    """Mutable byte store with explicit geometric growth.

    ``byte_length <= capacity`` always holds. When an append does not fit,
    capacity becomes ``max(2 * capacity, required, min_capacity)`` so the
    total copy cost over N appended bytes stays O(N). Capacity never shrinks,
    not even on ``reset``.

    Content appended through ``append_bytes`` is only checked when a snapshot
    is taken; scalar and text appends are valid by construction. The buffer
    does no locking and expects a single writer.
    """

    def __init__(
        self,
        capacity: int = 0,
        *,
        min_capacity: Optional[int] = None,
        logger_name: str | None = None,
    ) -> None:
        if capacity < 0:
            raise InvalidArgument("capacity cannot be negative", argument="capacity")
        if min_capacity is None:
            min_capacity = get_settings().buffer_min_capacity
        if min_capacity < 1:
            raise InvalidArgument(
                "min_capacity must be positive", argument="min_capacity"
            )
        self._store = bytearray(capacity)
        self._length = 0
        self._min_capacity = min_capacity
        self._unchecked = False
        self._reallocations = 0
        self._logger_name = logger_name

    @property
    def byte_length(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return len(self._store)

    @property
    def reallocations(self) -> int:
        """How many times the store has been replaced by a larger one."""

        return self._reallocations

    def grow(self, additional: int) -> None:
        """Reserve room for ``additional`` more bytes without a later resize."""

        if additional < 0:
            raise InvalidArgument(
                "cannot grow by a negative amount", argument="additional"
            )
        self._reserve(self._length + additional)

    def append_bytes(self, fragment: bytes | bytearray | memoryview) -> None:
        # Views over wider items are taken as their raw bytes.
        view = memoryview(fragment).cast("B")
        if not view.nbytes:
            return
        self._write(view)
        self._unchecked = True

    def append_byte(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise InvalidArgument(f"{value} is not a byte value", argument="value")
        self._write(bytes((value,)))
        if value >= 0x80:
            self._unchecked = True

    def append_scalar(self, value: int | str) -> None:
        self._write(encode_scalar(value))

    def append_text(self, value: TextLike) -> None:
        text = ensure_text(value, argument="value")
        if text.data:
            self._write(text.data)

    def snapshot(self) -> Text:
        """Copy the current content into an immutable ``Text``.

        Raises ``EncodingError`` when raw appends left malformed UTF-8; the
        buffer is left untouched either way.
        """

        data = bytes(memoryview(self._store)[: self._length])
        if not self._unchecked:
            return Text._from_valid(data)

        try:
            text = Text(data)
        except EncodingError as exc:
            record_event(
                "buffer.invalid_snapshot",
                level="warning",
                data={"length": self._length, "offset": exc.offset},
                logger_name=self._logger_name,
            )
            raise
        self._unchecked = False
        return text

    def reset(self) -> None:
        self._length = 0
        self._unchecked = False

    def _write(self, fragment: bytes | bytearray | memoryview) -> None:
        size = len(fragment)
        end = self._length + size
        self._reserve(end)
        self._store[self._length : end] = fragment
        self._length = end

    def _reserve(self, required: int) -> None:
        current = len(self._store)
        if required <= current:
            return

        new_capacity = max(current * 2, required, self._min_capacity)
        store = bytearray(new_capacity)
        store[: self._length] = memoryview(self._store)[: self._length]
        self._store = store
        self._reallocations += 1
        record_event(
            "buffer.grow",
            level="debug",
            data={"from": current, "to": new_capacity, "length": self._length},
            logger_name=self._logger_name,
        )

    def __repr__(self) -> str:
        return (
            f"TextBuffer(byte_length={self._length}, capacity={len(self._store)})"
        )


__all__ = ["TextBuffer"]
