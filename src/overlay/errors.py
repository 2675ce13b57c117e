"""Overlay error hierarchy.

Detection and generation report "nothing found" through Optional results;
only problems reading source themes propagate as exceptions.
"""

from __future__ import annotations

__all__ = ["OverlayError", "ThemeSourceError"]


class OverlayError(RuntimeError):
    """Base class for errors raised by the overlay engine."""


class ThemeSourceError(OverlayError):
    """Source theme directory or stylesheet could not be read."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        msg = f"Cannot read theme source {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
