"""Random hyperplane locality-sensitive signatures and their accuracy benchmark."""
from __future__ import annotations

from .benchmark import (
    BenchmarkResult,
    TrialRecord,
    render_benchmark_table,
    run_benchmark,
    run_bit_sweep,
)
from .errors import DimensionMismatchError, DomainError, InvalidDimensionError, LSHError
from .projection import ProjectionMatrix, generate_random_projection
from .signature import Signature, compute_signature
from .similarity import angular_similarity, hash_similarity

__all__ = [
    "BenchmarkResult",
    "DimensionMismatchError",
    "DomainError",
    "InvalidDimensionError",
    "LSHError",
    "ProjectionMatrix",
    "Signature",
    "TrialRecord",
    "angular_similarity",
    "compute_signature",
    "generate_random_projection",
    "hash_similarity",
    "render_benchmark_table",
    "run_benchmark",
    "run_bit_sweep",
]
