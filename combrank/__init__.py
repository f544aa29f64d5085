"""
combrank: enumerative rank/unrank coding of bit sequences.

Maps a bit sequence with a known count of set and unset bits to its
lexicographic rank among all sequences of that composition, and back.
Storing ``(ones, zeros, rank)`` is close to the sequence's entropy.
"""

__all__ = [
    "Config",
    "RANDOM_SEED",
    "__version__",
    # Errors
    "RankCodecError",
    "BinomialDomainError",
    "CompositionError",
    "CapacityError",
    # Binomial provider
    "BinomialProvider",
    "get_provider",
    # Codec
    "encode",
    "decode",
    "rank_stream",
    "iter_unrank",
    "StreamingEncoder",
    "StreamingDecoder",
    # Diagnostics (lazy-imported via __getattr__)
    "shannon_entropy",
    "compression_report",
    "random_sequence",
]

__version__ = "0.1.0"

from typing import Any

from combrank.config import Config, RANDOM_SEED
from combrank.errors import RankCodecError, BinomialDomainError, CompositionError, CapacityError
from combrank.binomial import BinomialProvider, get_provider
from combrank.coding import (
    encode,
    decode,
    rank_stream,
    iter_unrank,
    StreamingEncoder,
    StreamingDecoder,
)


def __getattr__(name: str) -> Any:  # lazy attribute access to keep numpy off the import path
    if name in {"shannon_entropy", "compression_report", "random_sequence"}:
        from combrank import analysis as _analysis

        return getattr(_analysis, name)
    raise AttributeError(f"module 'combrank' has no attribute {name!r}")
