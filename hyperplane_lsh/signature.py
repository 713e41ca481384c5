"""Packed bit-set signatures derived from random hyperplane projections.

Bits are stored little-endian inside ``uint64`` words: bit ``i`` of the
signature lives in word ``i // 64`` at position ``i % 64``. Padding bits above
the signature length are always zero so that word-wise XOR followed by a
population count yields the Hamming distance directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .errors import DimensionMismatchError, InvalidDimensionError
from .projection import ProjectionMatrix
from .vectors import as_vector

__all__ = ["Signature", "compute_signature"]

WORD_BITS = 64
_WORD_DTYPE = np.dtype("<u8")
_ALL_ONES = np.uint64(0xFFFF_FFFF_FFFF_FFFF)


def _word_count(length: int) -> int:
    return -(-length // WORD_BITS)


def _padding_mask(length: int) -> np.ndarray:
    mask = np.full(_word_count(length), _ALL_ONES, dtype=_WORD_DTYPE)
    remainder = length % WORD_BITS
    if remainder:
        mask[-1] = np.uint64((1 << remainder) - 1)
    return mask


@dataclass(frozen=True, eq=False)
class Signature:
    """Immutable fixed-width bit-set.

    Signatures are only meaningfully comparable when they were produced by
    the same :class:`ProjectionMatrix`; that pairing is left to the caller.
    """

    words: np.ndarray
    length: int

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or self.length <= 0:
            raise InvalidDimensionError(
                f"Signature length must be positive, got {self.length!r}"
            )
        words = np.array(self.words, dtype=_WORD_DTYPE, copy=True).reshape(-1)
        expected = _word_count(self.length)
        if words.size != expected:
            raise DimensionMismatchError(
                f"Signature of {self.length} bits needs {expected} words, got {words.size}"
            )
        if np.any(words & ~_padding_mask(self.length)):
            raise ValueError("Signature padding bits must be zero")
        words.setflags(write=False)
        object.__setattr__(self, "words", words)
        object.__setattr__(self, "length", int(self.length))

    @classmethod
    def from_bits(cls, bits: Sequence[bool] | np.ndarray) -> "Signature":
        """Pack a one-dimensional boolean sequence into a signature."""

        flags = np.asarray(bits, dtype=bool)
        if flags.ndim != 1:
            raise DimensionMismatchError(
                f"Signature bits must be one-dimensional, got shape {flags.shape}"
            )
        if flags.size == 0:
            raise InvalidDimensionError("Signature must contain at least one bit")
        packed = np.packbits(flags, bitorder="little")
        buffer = np.zeros(_word_count(flags.size) * (WORD_BITS // 8), dtype=np.uint8)
        buffer[: packed.size] = packed
        return cls(words=buffer.view(_WORD_DTYPE), length=int(flags.size))

    def to_bits(self) -> np.ndarray:
        """Return the signature as a boolean array of ``len(self)`` entries."""

        raw = np.unpackbits(self.words.view(np.uint8), bitorder="little")
        return raw[: self.length].astype(bool)

    def hamming_distance(self, other: "Signature") -> int:
        """Count the bit positions where ``self`` and *other* differ."""

        if self.length != other.length:
            raise DimensionMismatchError(
                f"Cannot compare signatures of {self.length} and {other.length} bits"
            )
        return int(np.bitwise_count(self.words ^ other.words).sum())

    def __invert__(self) -> "Signature":
        return Signature(words=~self.words & _padding_mask(self.length), length=self.length)

    def __len__(self) -> int:
        return self.length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return self.length == other.length and bool(np.array_equal(self.words, other.words))

    def __hash__(self) -> int:
        return hash((self.length, self.words.tobytes()))

    def __repr__(self) -> str:
        preview = "".join("1" if bit else "0" for bit in self.to_bits()[:16])
        suffix = "..." if self.length > 16 else ""
        return f"Signature(length={self.length}, bits={preview}{suffix})"


def compute_signature(
    projection: ProjectionMatrix, vector: Sequence[float] | np.ndarray
) -> Signature:
    """Encode *vector* as one bit per hyperplane in *projection*.

    Bit ``i`` is set when the dot product of row ``i`` with *vector* is
    non-negative.
    """

    values = as_vector(vector)
    if values.size != projection.input_size:
        raise DimensionMismatchError(
            f"Vector of length {values.size} does not match projection input size "
            f"{projection.input_size}"
        )
    return Signature.from_bits(projection.project(values) >= 0)
