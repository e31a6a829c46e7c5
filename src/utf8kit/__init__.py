"""UTF-8-aware text values, buffers, segmenting, and pattern extraction."""

__all__ = [
    "errors",
    "patterns",
    "runtime",
    "segment",
    "text",
]

__version__ = "0.1.0"
