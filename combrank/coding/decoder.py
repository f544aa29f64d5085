"""Combinatorial rank decoder (unranker).

Inverse of :mod:`combrank.coding.encoder`. At each position, with ``r1``
ones and ``r0`` zeros left, the first C(r1 + r0 - 1, r1) sequences of the
remaining space start with an unset bit. If the remaining rank falls inside
that block the bit is unset; otherwise it is set and the block size is
subtracted.

Example
-------
>>> from combrank.coding import decode, StreamingDecoder
>>> decode(6, ones=3, zeros=2)
[True, False, True, True, False]
>>> dec = StreamingDecoder(6, 3, 2)
>>> dec.next_chunk(3), dec.next_chunk(3), dec.next_chunk(3)
([True, False, True], [True, False], [])
"""

from __future__ import annotations

from typing import Iterator, Optional

from combrank.binomial import BinomialProvider, get_provider
from combrank.config import Config
from combrank.errors import CompositionError
from combrank.utils import check_composition, check_count


def _check_rank(rank: int, ones: int, zeros: int, provider: BinomialProvider) -> int:
    if isinstance(rank, bool) or not hasattr(rank, "__index__"):
        raise TypeError(f"rank must be an integer, got {type(rank).__name__}")
    rank = rank.__index__()
    if rank < 0:
        raise CompositionError("rank must be >= 0")
    space = provider.get(ones + zeros, ones)
    if rank >= space:
        raise CompositionError(
            f"rank ({rank.bit_length()} bits) is out of range for composition ones={ones}, zeros={zeros} "
            f"(must be < C({ones + zeros}, {ones}), a {space.bit_length()}-bit number)"
        )
    return rank


class StreamingDecoder:
    """Incremental decoder that hands out the sequence chunk by chunk.

    Parameters
    ----------
    rank:
        Rank produced by the encoder for this composition.
    ones, zeros:
        Declared composition; must match the one used to encode.
    provider:
        Binomial provider to use. Defaults to the shared one.

    Raises
    ------
    CompositionError
        If ``rank`` is negative or not below C(ones + zeros, ones).

    Notes
    -----
    ``next_chunk`` returns an empty list once all ``ones + zeros`` bits have
    been emitted; this is the exhaustion signal and further calls are
    harmless. Iterating the decoder yields the remaining bits one by one.
    """

    def __init__(
        self,
        rank: int,
        ones: int,
        zeros: int,
        provider: Optional[BinomialProvider] = None,
    ) -> None:
        self.ones, self.zeros = check_composition(ones, zeros)
        self._provider: BinomialProvider = provider if provider is not None else get_provider()
        self.rank: int = _check_rank(rank, self.ones, self.zeros, self._provider)
        self._remaining_index: int = self.rank
        self._remaining_ones: int = self.ones
        self._remaining_zeros: int = self.zeros

    # State --------------------------------------------------------------------
    @property
    def remaining_ones(self) -> int:
        return self._remaining_ones

    @property
    def remaining_zeros(self) -> int:
        return self._remaining_zeros

    @property
    def bits_emitted(self) -> int:
        return (self.ones - self._remaining_ones) + (self.zeros - self._remaining_zeros)

    @property
    def exhausted(self) -> bool:
        return self._remaining_ones == 0 and self._remaining_zeros == 0

    # Decoding -----------------------------------------------------------------
    def _next_bit(self) -> bool:
        r1 = self._remaining_ones
        r0 = self._remaining_zeros
        if r1 == 0:
            if r0 == 0:
                raise CompositionError(
                    f"Read past the end of a sequence of {self.ones + self.zeros} bits"
                )
            self._remaining_zeros = r0 - 1
            return False
        if r0 == 0:
            self._remaining_ones = r1 - 1
            return True
        c = self._provider.get(r1 + r0 - 1, r1)
        if c > self._remaining_index:
            self._remaining_zeros = r0 - 1
            return False
        self._remaining_index -= c
        self._remaining_ones = r1 - 1
        return True

    def next_chunk(self, max_len: int | None = None) -> list[bool]:
        """Return the next ``min(max_len, remaining)`` bits, ``[]`` when done.

        Raises
        ------
        ValueError
            If ``max_len`` is not positive.
        """

        size = Config.DEFAULT_CHUNK_SIZE if max_len is None else check_count("max_len", max_len)
        if size == 0:
            raise ValueError("max_len must be > 0")
        size = min(size, self._remaining_ones + self._remaining_zeros)
        return [self._next_bit() for _ in range(size)]

    def __iter__(self) -> Iterator[bool]:
        while not self.exhausted:
            yield self._next_bit()

    def __repr__(self) -> str:
        return (
            f"StreamingDecoder(ones={self.ones}, zeros={self.zeros}, "
            f"remaining_ones={self._remaining_ones}, remaining_zeros={self._remaining_zeros})"
        )


def decode(
    rank: int,
    ones: int,
    zeros: int,
    provider: Optional[BinomialProvider] = None,
) -> list[bool]:
    """Return the sequence of ``ones + zeros`` bits whose rank is ``rank``.

    Once either remaining count reaches zero the tail is forced and is
    appended in one step instead of bit by bit.
    """

    ones, zeros = check_composition(ones, zeros)
    provider = provider if provider is not None else get_provider()
    index = _check_rank(rank, ones, zeros, provider)

    get = provider.get
    result: list[bool] = []
    r1, r0 = ones, zeros
    while r1 and r0:
        c = get(r1 + r0 - 1, r1)
        if c > index:
            result.append(False)
            r0 -= 1
        else:
            result.append(True)
            index -= c
            r1 -= 1
    if r1:
        result.extend([True] * r1)
    elif r0:
        result.extend([False] * r0)
    return result


def iter_unrank(
    rank: int,
    ones: int,
    zeros: int,
    chunk_size: int | None = None,
    provider: Optional[BinomialProvider] = None,
) -> Iterator[bool]:
    """Lazily yield the decoded sequence, computing ``chunk_size`` bits at a time.

    Arguments are validated before the generator is returned.
    """

    size = int(chunk_size if chunk_size is not None else Config.DEFAULT_CHUNK_SIZE)
    if size <= 0:
        raise ValueError("chunk_size must be > 0")
    decoder = StreamingDecoder(rank, ones, zeros, provider=provider)

    def _gen() -> Iterator[bool]:
        while True:
            chunk = decoder.next_chunk(size)
            if not chunk:
                return
            yield from chunk

    return _gen()


__all__ = ["StreamingDecoder", "decode", "iter_unrank"]
