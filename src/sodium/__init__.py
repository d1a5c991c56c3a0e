"""Sodium: a small terminal text editor built around a grapheme-aware buffer."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "runtime",
    "search",
    "view",
]

__version__ = "0.1.0"
