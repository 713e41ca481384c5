from __future__ import annotations

import math
import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hyperplane_lsh import (  # noqa: E402  -- imported after sys.path mutation
    DimensionMismatchError,
    DomainError,
    Signature,
    angular_similarity,
    compute_signature,
    generate_random_projection,
    hash_similarity,
)


def _random_vectors(count: int, dim: int, seed: int = 0) -> np.ndarray:
    return np.random.default_rng(seed).uniform(-1.0, 1.0, size=(count, dim))


def test_hash_similarity_of_signature_with_itself_is_one() -> None:
    projection = generate_random_projection(30, 100, rng=1)
    (vector,) = _random_vectors(1, 30)
    signature = compute_signature(projection, vector)

    assert hash_similarity(signature, compute_signature(projection, vector)) == 1.0


@pytest.mark.parametrize("length", [1, 64, 65, 1000])
def test_hash_similarity_of_complement_is_zero(length: int) -> None:
    bits = np.random.default_rng(length).integers(0, 2, size=length).astype(bool)
    signature = Signature.from_bits(bits)

    assert hash_similarity(signature, ~signature) == 0.0


def test_hash_similarity_counts_matching_fraction() -> None:
    first = Signature.from_bits([True, True, False, False])
    second = Signature.from_bits([True, False, False, True])

    assert hash_similarity(first, second) == 0.5


def test_hash_similarity_is_symmetric() -> None:
    projection = generate_random_projection(20, 77, rng=4)
    first, second = _random_vectors(2, 20, seed=4)
    lhs = compute_signature(projection, first)
    rhs = compute_signature(projection, second)

    assert hash_similarity(lhs, rhs) == hash_similarity(rhs, lhs)


def test_hash_similarity_rejects_length_mismatch() -> None:
    with pytest.raises(DimensionMismatchError):
        hash_similarity(Signature.from_bits([True]), Signature.from_bits([True, False]))


def test_angular_similarity_orthogonal_vectors() -> None:
    assert angular_similarity([1.0, 0.0], [0.0, 1.0]) == 0.5


def test_angular_similarity_identical_vectors() -> None:
    assert angular_similarity([1.0, 0.0, 0.0], [1.0, 0.0, 0.0]) == 1.0


def test_angular_similarity_opposite_vectors() -> None:
    assert angular_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(0.0, abs=1e-7)


def test_angular_similarity_with_itself_is_one() -> None:
    for vector in _random_vectors(25, 50, seed=8):
        assert angular_similarity(vector, vector) == pytest.approx(1.0, abs=1e-7)


def test_angular_similarity_is_symmetric_and_bounded() -> None:
    vectors = _random_vectors(20, 12, seed=2)
    for first, second in zip(vectors[::2], vectors[1::2]):
        forward = angular_similarity(first, second)
        assert forward == angular_similarity(second, first)
        assert 0.0 <= forward <= 1.0


def test_angular_similarity_is_scale_invariant() -> None:
    first = np.array([0.3, -0.7, 0.2])
    second = np.array([0.9, 0.1, -0.4])

    assert angular_similarity(first * 1000.0, second) == pytest.approx(
        angular_similarity(first, second)
    )


@pytest.mark.parametrize("scale", [1e-200, 1e-170, 1e200])
def test_angular_similarity_at_extreme_scales(scale: float) -> None:
    assert angular_similarity([scale, 0.0], [0.0, scale]) == 0.5
    assert angular_similarity([scale, scale], [scale, scale]) == pytest.approx(
        1.0, abs=1e-7
    )
    assert angular_similarity([scale, 0.0], [1.0, 1.0]) == pytest.approx(0.75)


def test_angular_similarity_rejects_zero_vector() -> None:
    with pytest.raises(DomainError, match="zero-norm"):
        angular_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0])
    with pytest.raises(DomainError):
        angular_similarity([1.0, 2.0, 3.0], np.zeros(3))


def test_angular_similarity_rejects_invalid_vectors() -> None:
    with pytest.raises(DimensionMismatchError):
        angular_similarity([1.0, 0.0], [1.0, 0.0, 0.0])
    with pytest.raises(DomainError):
        angular_similarity([math.inf, 0.0], [1.0, 0.0])


def test_hash_similarity_tracks_angular_similarity_with_many_bits() -> None:
    projection = generate_random_projection(40, 4096, rng=12)
    first, second = _random_vectors(2, 40, seed=12)

    estimated = hash_similarity(
        compute_signature(projection, first), compute_signature(projection, second)
    )

    assert estimated == pytest.approx(angular_similarity(first, second), abs=0.05)
