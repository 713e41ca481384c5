"""Random hyperplane projection matrices."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import InvalidDimensionError
from .vectors import validate_size

__all__ = ["ProjectionMatrix", "generate_random_projection", "resolve_rng"]

RandomSource = np.random.Generator | int | None


def resolve_rng(rng: RandomSource) -> np.random.Generator:
    """Return a ``numpy`` generator for *rng*.

    Generators are passed through unchanged so callers can share one random
    stream across several calls; integers seed a fresh generator.
    """

    if isinstance(rng, bool):
        raise TypeError("rng must be a numpy Generator, an integer seed, or None")
    return np.random.default_rng(rng)


@dataclass(frozen=True, eq=False)
class ProjectionMatrix:
    """Immutable ``output_size x input_size`` matrix of hyperplane normals.

    Each row is the normal of one random hyperplane; a vector's signature bit
    for that row records which side of the hyperplane it falls on.
    """

    weights: np.ndarray

    def __post_init__(self) -> None:
        weights = np.array(self.weights, dtype=np.float64, copy=True)
        if weights.ndim != 2:
            raise InvalidDimensionError(
                f"Projection weights must be two-dimensional, got shape {weights.shape}"
            )
        rows, cols = weights.shape
        if rows == 0 or cols == 0:
            raise InvalidDimensionError(
                f"Projection weights must be non-empty, got shape {weights.shape}"
            )
        weights.setflags(write=False)
        object.__setattr__(self, "weights", weights)

    @property
    def output_size(self) -> int:
        """Number of signature bits (rows)."""

        return int(self.weights.shape[0])

    @property
    def input_size(self) -> int:
        """Expected vector dimension (columns)."""

        return int(self.weights.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.output_size, self.input_size

    def project(self, vector: np.ndarray) -> np.ndarray:
        """Return the dot product of every row with *vector*."""

        return self.weights @ vector

    def __repr__(self) -> str:
        return f"ProjectionMatrix(output_size={self.output_size}, input_size={self.input_size})"


def generate_random_projection(
    input_size: int, output_size: int, *, rng: RandomSource = None
) -> ProjectionMatrix:
    """Draw a projection with entries i.i.d. uniform on ``[-1, 1]``.

    Parameters
    ----------
    input_size:
        Dimension of the vectors that will be encoded.
    output_size:
        Number of hyperplanes, i.e. the signature length in bits.
    rng:
        Random source. Passing an integer seed makes the matrix reproducible.
    """

    validate_size(input_size, "input_size")
    validate_size(output_size, "output_size")
    generator = resolve_rng(rng)
    weights = generator.uniform(-1.0, 1.0, size=(int(output_size), int(input_size)))
    return ProjectionMatrix(weights)
