"""
Exception hierarchy for Pastebin Lite.
"""

__all__ = [
    "PasteError",
    "InvalidPasteError",
    "PasteIdCollisionError",
]


class PasteError(Exception):
    """Root exception for all paste store errors."""


class InvalidPasteError(PasteError, ValueError):
    """Raised when paste input is rejected before any state changes."""


class PasteIdCollisionError(PasteError):
    """Raised when a generated paste id is already taken."""
