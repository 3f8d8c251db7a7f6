"""Extraction error definitions."""

from __future__ import annotations


class ExtractionError(ValueError):
    """Raised when an input cannot be turned into raw observations."""

    def __init__(self, message: str, *, origin: str) -> None:
        self.origin = origin
        super().__init__(f"{origin}: {message}")
