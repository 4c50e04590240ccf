"""Data models for error chains."""

from .entry import MISSING_HEADER, ZERO_TIME, ErrorEntry, Header

__all__ = [
    "ErrorEntry",
    "Header",
    "MISSING_HEADER",
    "ZERO_TIME",
]
