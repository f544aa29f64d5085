"""Combinatorial rank encoder.

Maps a bit sequence of known composition (``ones`` set bits, ``zeros``
unset bits) to its 0-indexed position among all sequences of that
composition in lexicographic order, with unset < set at every position.

For each bit, with ``r1`` ones and ``r0`` zeros still to place, the
sequences starting with an unset bit come first and there are
C(r1 + r0 - 1, r1) of them. Choosing a set bit therefore skips that block
and adds it to the rank. Once either count reaches zero the remaining bits
are forced and add nothing.

Example
-------
>>> from combrank.coding import encode, StreamingEncoder
>>> encode([1, 0, 1, 1, 0], ones=3, zeros=2)
6
>>> enc = StreamingEncoder(3, 2)
>>> enc.process_chunk([1, 0])
>>> enc.process_chunk([1, 1, 0])
>>> enc.finalize()
6
"""

from __future__ import annotations

from itertools import islice
from typing import Any, Iterable, Optional

from combrank.binomial import BinomialProvider, get_provider
from combrank.config import Config
from combrank.errors import CompositionError
from combrank.utils import as_bit, check_composition


class StreamingEncoder:
    """Incremental encoder fed in chunks.

    Only the remaining counts and the running rank persist between calls,
    so the full sequence never has to be held in memory.

    Parameters
    ----------
    ones, zeros:
        Declared composition of the whole sequence.
    provider:
        Binomial provider to use. Defaults to the shared one from
        :func:`combrank.binomial.get_provider`.

    Notes
    -----
    - Bits beyond the point where the tail is forced are checked against
      the forced value; a contradicting bit, or any bit after the sequence
      is complete, raises :class:`CompositionError`. After an error the
      encoder state is unspecified and it should be discarded.
    - Finalizing early is allowed and returns the rank of the prefix
      followed by its smallest completion.
    """

    def __init__(self, ones: int, zeros: int, provider: Optional[BinomialProvider] = None) -> None:
        self.ones, self.zeros = check_composition(ones, zeros)
        self._provider: BinomialProvider = provider if provider is not None else get_provider()
        self._remaining_ones: int = self.ones
        self._remaining_zeros: int = self.zeros
        self._rank: int = 0
        self._consumed: int = 0
        self._finalized: bool = False

    # State --------------------------------------------------------------------
    @property
    def remaining_ones(self) -> int:
        return self._remaining_ones

    @property
    def remaining_zeros(self) -> int:
        return self._remaining_zeros

    @property
    def bits_consumed(self) -> int:
        return self._consumed

    @property
    def exhausted(self) -> bool:
        """True once every declared bit has been consumed."""

        return self._remaining_ones == 0 and self._remaining_zeros == 0

    # Encoding -----------------------------------------------------------------
    def process_chunk(self, chunk: Iterable[Any]) -> None:
        """Consume ``chunk`` (bits in sequence order) and update the rank."""

        if self._finalized:
            raise RuntimeError("Encoder has been finalized; create a new one.")

        get = self._provider.get
        r1 = self._remaining_ones
        r0 = self._remaining_zeros
        rank = self._rank
        consumed = self._consumed
        try:
            for raw in chunk:
                bit = as_bit(raw)
                if r1 and r0:
                    if bit:
                        rank += get(r1 + r0 - 1, r1)
                        r1 -= 1
                    else:
                        r0 -= 1
                elif bit and r1:
                    r1 -= 1
                elif not bit and r0:
                    r0 -= 1
                else:
                    raise CompositionError(
                        f"Bit {consumed} is {int(bit)} but composition ones={self.ones}, "
                        f"zeros={self.zeros} has no {'ones' if bit else 'zeros'} left"
                    )
                consumed += 1
        finally:
            self._remaining_ones = r1
            self._remaining_zeros = r0
            self._rank = rank
            self._consumed = consumed

    def finalize(self) -> int:
        """Return the rank. The encoder cannot be used afterwards."""

        if self._finalized:
            raise RuntimeError("Encoder has already been finalized.")
        self._finalized = True
        return self._rank

    def __repr__(self) -> str:
        return (
            f"StreamingEncoder(ones={self.ones}, zeros={self.zeros}, "
            f"remaining_ones={self._remaining_ones}, remaining_zeros={self._remaining_zeros})"
        )


def encode(
    bits: Iterable[Any],
    ones: int,
    zeros: int,
    provider: Optional[BinomialProvider] = None,
) -> int:
    """Return the rank of ``bits`` among sequences with ``ones`` set and ``zeros`` unset bits.

    The result lies in ``[0, C(ones + zeros, ones))``.

    Raises
    ------
    CompositionError
        If ``bits`` holds more set or unset bits than declared.
    """

    encoder = StreamingEncoder(ones, zeros, provider=provider)
    encoder.process_chunk(bits)
    return encoder.finalize()


def rank_stream(
    bits: Iterable[Any],
    ones: int,
    zeros: int,
    chunk_size: int | None = None,
    provider: Optional[BinomialProvider] = None,
) -> int:
    """Rank a lazily produced bit stream, pulling ``chunk_size`` bits at a time.

    ``bits`` may be any iterable, including a generator over a sequence too
    large to materialize.
    """

    size = int(chunk_size if chunk_size is not None else Config.DEFAULT_CHUNK_SIZE)
    if size <= 0:
        raise ValueError("chunk_size must be > 0")
    encoder = StreamingEncoder(ones, zeros, provider=provider)
    it = iter(bits)
    while True:
        chunk = list(islice(it, size))
        if not chunk:
            break
        encoder.process_chunk(chunk)
    return encoder.finalize()


__all__ = ["StreamingEncoder", "encode", "rank_stream"]
