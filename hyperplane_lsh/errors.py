"""Exception hierarchy raised by the hyperplane LSH helpers."""

from __future__ import annotations

__all__ = [
    "LSHError",
    "InvalidDimensionError",
    "DimensionMismatchError",
    "DomainError",
]


class LSHError(ValueError):
    """Base class for invalid inputs passed to the LSH helpers."""


class InvalidDimensionError(LSHError):
    """Raised when a non-positive size is requested."""


class DimensionMismatchError(LSHError):
    """Raised when vector or signature lengths do not line up."""


class DomainError(LSHError):
    """Raised when a value lies outside the domain of a similarity measure."""
