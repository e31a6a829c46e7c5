from __future__ import annotations

import pytest

from utf8kit.errors import EncodingError, InvalidArgument
from utf8kit.text import Text, count_scalars, decode, encode_scalar, ensure_scalar

SAMPLES = (
    "",
    "Hello there",
    "apple🍎, orange🍊, bananas🍌",
    "GRU🧠-Vympel⚔️-Alpha🛡️-SSO🥷🏻-Frogmen⚓",
    "তোমরা আমাকে রক্ত দাও",
)


def reencode(text: Text) -> bytes:
    return b"".join(encode_scalar(value) for _, value in decode(text))


@pytest.mark.parametrize("sample", SAMPLES)
def test_decode_then_reencode_reproduces_bytes(sample: str) -> None:
    text = Text.from_str(sample)

    assert reencode(text) == text.data


@pytest.mark.parametrize("sample", SAMPLES)
def test_offsets_strictly_increase_and_cover_all_bytes(sample: str) -> None:
    text = Text.from_str(sample)
    view = text.codepoints()

    offsets = [offset for offset, _ in view]

    assert offsets == sorted(set(offsets))
    assert view.byte_offset == text.byte_length
    assert [ord(ch) for ch in sample] == [value for _, value in decode(text)]


def test_offsets_point_at_lead_bytes() -> None:
    text = Text.from_str("aé€😀")

    assert list(text.codepoints()) == [
        (0, 0x61),
        (1, 0xE9),
        (3, 0x20AC),
        (6, 0x1F600),
    ]


def test_view_is_single_pass() -> None:
    view = Text.from_str("ab").codepoints()

    assert len(list(view)) == 2
    assert list(view) == []


def test_count_scalars_matches_view_length() -> None:
    text = Text.from_str("Wie geht's Brudi?👋🏻")

    assert count_scalars(text) == len(list(text.codepoints())) == 19


def test_ensure_scalar_accepts_int_and_single_char() -> None:
    assert ensure_scalar("é") == 0xE9
    assert ensure_scalar(0x1F600) == 0x1F600


def test_ensure_scalar_rejects_bad_values() -> None:
    with pytest.raises(InvalidArgument):
        ensure_scalar("ab")
    with pytest.raises(InvalidArgument):
        ensure_scalar(0x110000)
    with pytest.raises(InvalidArgument):
        ensure_scalar(-1)
    with pytest.raises(EncodingError):
        ensure_scalar(0xDC00)
    with pytest.raises(TypeError):
        ensure_scalar(1.5)  # type: ignore[arg-type]
