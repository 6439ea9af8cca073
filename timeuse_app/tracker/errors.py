"""Exceptions raised by the tracker core."""
from __future__ import annotations


class ValidationError(ValueError):
    """Raised when user-entered data cannot be turned into an entry."""
