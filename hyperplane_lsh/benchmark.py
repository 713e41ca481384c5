"""Accuracy benchmark for the random hyperplane similarity estimator.

Each trial samples two vectors uniformly from ``[-1, 1]^dim``, encodes both
against one shared :class:`~hyperplane_lsh.projection.ProjectionMatrix`, and
records how far the Hamming-based estimate lands from the exact angular
similarity. The run reports every trial, the mean absolute difference, and
the wall-clock duration.

Trials only read the shared projection, so they can be spread across a
thread pool. Every trial draws from its own child generator spawned from the
run's random source, which keeps the per-trial values identical regardless
of the number of workers.

Running ``python -m hyperplane_lsh.benchmark`` executes a small bit-width
sweep and prints a summary table.
"""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np
from rich.console import Console
from rich.table import Table

from .projection import (
    ProjectionMatrix,
    RandomSource,
    generate_random_projection,
    resolve_rng,
)
from .signature import compute_signature
from .similarity import angular_similarity, hash_similarity
from .vectors import sample_uniform_vector, validate_size

logger = logging.getLogger(__name__)

DEFAULT_DIM = 200
DEFAULT_BITS = 1024
DEFAULT_TRIALS = 1000
DEFAULT_BIT_WIDTHS: tuple[int, ...] = (16, 64, 256, DEFAULT_BITS)
DEFAULT_SEED = 20240611


@dataclass(frozen=True)
class TrialRecord:
    """Outcome of a single benchmark trial."""

    index: int
    angular_similarity: float
    hash_similarity: float
    difference: float

    def to_json(self) -> dict[str, float | int]:
        return {
            "index": self.index,
            "angular_similarity": round(self.angular_similarity, 6),
            "hash_similarity": round(self.hash_similarity, 6),
            "difference": round(self.difference, 6),
        }


@dataclass(frozen=True)
class BenchmarkResult:
    """Aggregate statistics returned by :func:`run_benchmark`."""

    dim: int
    bits: int
    trials_requested: int
    trials: tuple[TrialRecord, ...]
    average_difference: float
    elapsed_seconds: float
    completed: bool = True

    @property
    def trial_count(self) -> int:
        return len(self.trials)

    def to_json(self) -> dict[str, object]:
        return {
            "dim": self.dim,
            "bits": self.bits,
            "trials_requested": self.trials_requested,
            "trial_count": self.trial_count,
            "average_difference": round(self.average_difference, 6),
            "elapsed_seconds": round(self.elapsed_seconds, 6),
            "completed": self.completed,
        }


def run_trial(
    projection: ProjectionMatrix, index: int, rng: np.random.Generator
) -> TrialRecord:
    """Sample one vector pair and compare estimated against exact similarity."""

    first = sample_uniform_vector(projection.input_size, rng)
    second = sample_uniform_vector(projection.input_size, rng)
    estimated = hash_similarity(
        compute_signature(projection, first), compute_signature(projection, second)
    )
    exact = angular_similarity(first, second)
    difference = abs(exact - estimated)
    logger.debug(
        "trial=%d angular_similarity=%.6f hash_similarity=%.6f difference=%.6f",
        index,
        exact,
        estimated,
        difference,
    )
    return TrialRecord(
        index=index,
        angular_similarity=exact,
        hash_similarity=estimated,
        difference=difference,
    )


def _average_difference(records: Sequence[TrialRecord]) -> float:
    if not records:
        return math.nan
    return math.fsum(record.difference for record in records) / len(records)


def run_benchmark(
    dim: int,
    bits: int,
    trials: int,
    *,
    rng: RandomSource = None,
    workers: int = 1,
    deadline: Optional[float] = None,
) -> BenchmarkResult:
    """Measure how closely Hamming similarity tracks angular similarity.

    Parameters
    ----------
    dim:
        Dimension of the sampled vectors.
    bits:
        Signature length, i.e. the number of random hyperplanes.
    trials:
        Number of vector pairs to sample.
    rng:
        Random source for the projection and every trial. A fixed seed makes
        the whole run reproducible.
    workers:
        Number of threads used to execute trials. ``1`` runs them in order on
        the calling thread.
    deadline:
        Optional budget in seconds. Trials that have not started once the
        budget is spent are skipped and the result is marked incomplete.
    """

    validate_size(trials, "trials")
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ValueError(f"workers must be a positive integer, got {workers!r}")
    if deadline is not None and (not math.isfinite(deadline) or deadline <= 0):
        raise ValueError(
            f"deadline must be a positive finite number of seconds, got {deadline!r}"
        )

    generator = resolve_rng(rng)
    projection = generate_random_projection(dim, bits, rng=generator)
    trial_rngs = generator.spawn(trials)

    start = time.perf_counter()
    expires_at = None if deadline is None else start + deadline

    def _execute(index: int) -> Optional[TrialRecord]:
        if expires_at is not None and time.perf_counter() >= expires_at:
            return None
        return run_trial(projection, index, trial_rngs[index])

    if workers == 1:
        outcomes: List[Optional[TrialRecord]] = []
        for index in range(trials):
            outcome = _execute(index)
            if outcome is None:
                break
            outcomes.append(outcome)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(_execute, range(trials)))

    records = tuple(
        sorted(
            (outcome for outcome in outcomes if outcome is not None),
            key=lambda record: record.index,
        )
    )
    elapsed = time.perf_counter() - start

    completed = len(records) == trials
    if not completed:
        logger.warning(
            "Deadline of %.3fs reached after %d/%d trials", deadline, len(records), trials
        )

    average = _average_difference(records)
    logger.info(
        "bits=%d dim=%d trials=%d average_difference=%.6f elapsed=%.3fs",
        bits,
        dim,
        len(records),
        average,
        elapsed,
    )
    return BenchmarkResult(
        dim=int(dim),
        bits=int(bits),
        trials_requested=int(trials),
        trials=records,
        average_difference=average,
        elapsed_seconds=elapsed,
        completed=completed,
    )


def run_bit_sweep(
    dim: int,
    bit_widths: Iterable[int] = DEFAULT_BIT_WIDTHS,
    trials: int = DEFAULT_TRIALS,
    *,
    rng: RandomSource = None,
    workers: int = 1,
) -> List[BenchmarkResult]:
    """Run :func:`run_benchmark` once per signature width."""

    widths = list(bit_widths)
    if not widths:
        raise ValueError("At least one bit width is required")
    children = resolve_rng(rng).spawn(len(widths))
    return [
        run_benchmark(dim, bits, trials, rng=child, workers=workers)
        for bits, child in zip(widths, children)
    ]


def render_benchmark_table(
    results: Sequence[BenchmarkResult], console: Optional[Console] = None
) -> Table:
    """Print a Rich table summarising benchmark runs."""

    table = Table(title="Hyperplane LSH Accuracy")
    table.add_column("Bits", justify="right")
    table.add_column("Dim", justify="right")
    table.add_column("Trials", justify="right")
    table.add_column("Avg |diff|", justify="right")
    table.add_column("Elapsed (s)", justify="right")
    table.add_column("Notes", justify="left")

    for result in results:
        notes = "" if result.completed else "deadline reached"
        table.add_row(
            str(result.bits),
            str(result.dim),
            f"{result.trial_count}/{result.trials_requested}",
            f"{result.average_difference:.6f}",
            f"{result.elapsed_seconds:.3f}",
            notes,
        )

    (console or Console()).print(table)
    return table


def main() -> int:
    """Run the default sweep and print the summary table."""

    logging.basicConfig(level=logging.INFO)
    results = run_bit_sweep(
        DEFAULT_DIM, DEFAULT_BIT_WIDTHS, DEFAULT_TRIALS, rng=DEFAULT_SEED
    )
    render_benchmark_table(results)
    return 0


__all__ = [
    "BenchmarkResult",
    "DEFAULT_BITS",
    "DEFAULT_BIT_WIDTHS",
    "DEFAULT_DIM",
    "DEFAULT_TRIALS",
    "TrialRecord",
    "main",
    "render_benchmark_table",
    "run_benchmark",
    "run_bit_sweep",
    "run_trial",
]


if __name__ == "__main__":  # pragma: no cover - demo entry point
    raise SystemExit(main())
