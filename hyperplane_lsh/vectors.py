"""Vector coercion, sampling and size validation shared across the package."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .errors import DimensionMismatchError, DomainError, InvalidDimensionError

__all__ = ["as_vector", "sample_uniform_vector", "validate_size"]


def validate_size(value: int, label: str) -> None:
    """Raise :class:`InvalidDimensionError` unless *value* is a positive integer."""

    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimensionError(f"{label} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidDimensionError(f"{label} must be positive, got {value}")


def as_vector(values: Sequence[float] | np.ndarray, *, label: str = "vector") -> np.ndarray:
    """Return *values* as a finite one-dimensional ``float64`` array."""

    vector = np.asarray(values, dtype=np.float64)
    if vector.ndim != 1:
        raise DimensionMismatchError(
            f"{label} must be one-dimensional, got shape {vector.shape}"
        )
    if not np.all(np.isfinite(vector)):
        raise DomainError(f"{label} contains non-finite values")
    return vector


def sample_uniform_vector(dim: int, rng: np.random.Generator) -> np.ndarray:
    """Draw a vector with entries i.i.d. uniform on ``[-1, 1]``."""

    return rng.uniform(-1.0, 1.0, size=dim)
