"""Text values, scalar-value decoding, and the incremental buffer."""

from utf8kit.errors import EncodingError, InvalidArgument, TextError

from .builder import TextBuffer
from .codepoints import (
    CodepointView,
    count_scalars,
    decode,
    encode_scalar,
    ensure_scalar,
)
from .validation import TextLike, ensure_text
from .value import EMPTY, Text

__all__ = [
    "Text",
    "EMPTY",
    "TextLike",
    "CodepointView",
    "TextBuffer",
    "TextError",
    "EncodingError",
    "InvalidArgument",
    "count_scalars",
    "decode",
    "encode_scalar",
    "ensure_scalar",
    "ensure_text",
]
