"""Codelength diagnostics for the rank codec.

Compares the size of the stored representation (rank bits plus the bits
needed for the ``ones`` count) with the empirical Shannon entropy of the
sequence. A perfect coder for a memoryless source would spend
``len(bits) * H`` bits; the rank codec stays within a few bits of
log2 C(n, k), which is itself just under that bound.

Example
-------
>>> from combrank.analysis import compression_report, random_sequence
>>> bits = random_sequence(300, 700, seed=7)
>>> report = compression_report(bits)
>>> report["compressed_bit_count"] <= report["original_bit_count"]
True
"""

from __future__ import annotations

from math import comb, log2
from typing import Any, Iterable

import numpy as np

from combrank.coding.encoder import encode
from combrank.config import Config
from combrank.utils import as_bit, check_composition


def shannon_entropy(bits: Iterable[Any]) -> float:
    """Return the empirical entropy of ``bits`` in bits/symbol (0.0 if empty)."""

    arr = np.fromiter((as_bit(b) for b in bits), dtype=bool)
    if arr.size == 0:
        return 0.0
    p1 = float(np.count_nonzero(arr)) / float(arr.size)
    h = 0.0
    for p in (p1, 1.0 - p1):
        if p > 0.0:
            h -= p * float(np.log2(p))
    return h


def codelength(rank: int, ones: int) -> int:
    """Bits needed to store ``rank`` plus the ``ones`` count."""

    return int(rank).bit_length() + int(ones).bit_length()


def ideal_codelength(ones: int, zeros: int) -> float:
    """Return log2 C(ones + zeros, ones), the information content of the rank."""

    ones, zeros = check_composition(ones, zeros)
    return log2(comb(ones + zeros, ones))


def compression_report(bits: Iterable[Any]) -> dict[str, float | int]:
    """Encode ``bits`` and report how close the result is to the entropy bound.

    Returns a dict with:
    - original_bit_count, ones, zeros, rank
    - original_entropy (bits/symbol)
    - compressed_bit_count (rank bits + ones-count bits)
    - ideal_bit_count (log2 C(n, ones))
    - expected_bit_count (n * entropy)
    - bit_count_difference (compressed - expected)
    - optimal_compression_accuracy (percent; 100 means exactly the entropy)
    """

    seq = [as_bit(b) for b in bits]
    if not seq:
        raise ValueError("bits must be non-empty for a compression report")
    ones = sum(seq)
    zeros = len(seq) - ones
    rank = encode(seq, ones, zeros)
    entropy = shannon_entropy(seq)
    compressed = codelength(rank, ones)
    expected = len(seq) * entropy
    difference = compressed - expected
    if expected > 0.0:
        accuracy = 100.0 - abs(difference / expected) * 100.0
    else:
        accuracy = 100.0 if compressed == 0 else 0.0
    return {
        "original_bit_count": len(seq),
        "ones": ones,
        "zeros": zeros,
        "rank": rank,
        "original_entropy": entropy,
        "compressed_bit_count": compressed,
        "ideal_bit_count": ideal_codelength(ones, zeros),
        "expected_bit_count": expected,
        "bit_count_difference": difference,
        "optimal_compression_accuracy": accuracy,
    }


def random_sequence(ones: int, zeros: int, seed: int | None = None) -> list[bool]:
    """Return a uniformly shuffled sequence with exactly ``ones`` set bits."""

    ones, zeros = check_composition(ones, zeros)
    rng = np.random.default_rng(int(seed if seed is not None else Config.RANDOM_SEED))
    arr = np.zeros(ones + zeros, dtype=bool)
    arr[:ones] = True
    rng.shuffle(arr)
    return [bool(b) for b in arr]


__all__ = [
    "shannon_entropy",
    "codelength",
    "ideal_codelength",
    "compression_report",
    "random_sequence",
]
