"""Enumerative rank/unrank coding of bit sequences with known composition.

Storing ``(ones, zeros, rank)`` in place of the bits costs about
log2 C(ones + zeros, ones) bits, close to the sequence's empirical entropy.

Public API:
- encode, rank_stream, StreamingEncoder
- decode, iter_unrank, StreamingDecoder
"""

from __future__ import annotations

from combrank.coding.encoder import StreamingEncoder, encode, rank_stream
from combrank.coding.decoder import StreamingDecoder, decode, iter_unrank

__all__ = [
    "StreamingEncoder",
    "encode",
    "rank_stream",
    "StreamingDecoder",
    "decode",
    "iter_unrank",
]
