"""Exceptions raised by the outlived import and query services."""

from __future__ import annotations


class OutlivedError(Exception):
    """Base exception for all import/query failures."""


class InvalidDateError(OutlivedError):
    """Raised when a date is not a valid YYYY-MM-DD calendar date."""


class DatasetError(OutlivedError):
    """Raised when the musicians CSV cannot be opened or parsed."""


class StoreError(OutlivedError):
    """Raised when the Redis connection or transaction fails."""
