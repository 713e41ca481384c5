"""Similarity measures: the Hamming estimate and the exact angular reference."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .errors import DimensionMismatchError, DomainError
from .signature import Signature
from .vectors import as_vector

__all__ = ["angular_similarity", "hash_similarity"]


def hash_similarity(lhs: Signature, rhs: Signature) -> float:
    """Return the fraction of matching bits between two signatures.

    ``1.0`` means identical signatures and ``0.0`` means every bit differs.
    For random hyperplane signatures this estimates
    :func:`angular_similarity` of the underlying vectors.
    """

    if len(lhs) != len(rhs):
        raise DimensionMismatchError(
            f"Signature lengths differ: {len(lhs)} != {len(rhs)}"
        )
    bits = len(lhs)
    return (bits - lhs.hamming_distance(rhs)) / bits


def angular_similarity(
    lhs: Sequence[float] | np.ndarray, rhs: Sequence[float] | np.ndarray
) -> float:
    """Compute ``1 - theta / pi`` for the angle ``theta`` between two vectors."""

    lhs_flat = as_vector(lhs, label="lhs")
    rhs_flat = as_vector(rhs, label="rhs")
    if lhs_flat.size != rhs_flat.size:
        raise DimensionMismatchError(
            f"Vector lengths differ: {lhs_flat.size} != {rhs_flat.size}"
        )
    lhs_scale = np.max(np.abs(lhs_flat))
    rhs_scale = np.max(np.abs(rhs_flat))
    if lhs_scale == 0.0 or rhs_scale == 0.0:
        raise DomainError("Angular similarity undefined for zero-norm vectors.")
    # Cosine is scale invariant; rescaling keeps norms and dot product in range.
    lhs_unit = lhs_flat / lhs_scale
    rhs_unit = rhs_flat / rhs_scale
    cosine = float(
        np.dot(lhs_unit, rhs_unit)
        / (np.linalg.norm(lhs_unit) * np.linalg.norm(rhs_unit))
    )
    # Rounding can push |cosine| slightly past 1, outside the domain of acos.
    cosine = max(-1.0, min(1.0, cosine))
    return 1.0 - math.acos(cosine) / math.pi
