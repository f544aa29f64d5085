"""Property checks across encoder and decoder."""

from math import comb
import random

import pytest

from combrank.analysis import random_sequence
from combrank.coding import StreamingDecoder, StreamingEncoder, decode, encode, iter_unrank, rank_stream


def _split(bits: list[bool], sizes: list[int]) -> list[list[bool]]:
    chunks = []
    i = 0
    j = 0
    while i < len(bits):
        size = sizes[j % len(sizes)]
        chunks.append(bits[i : i + size])
        i += size
        j += 1
    return chunks


def test_random_round_trip_length_1000():
    rng = random.Random(1234)
    length = 1000
    splits = [0, length, 1, length - 1] + [rng.randint(0, length) for _ in range(100)]
    for trial, ones in enumerate(splits):
        zeros = length - ones
        bits = random_sequence(ones, zeros, seed=trial)
        rank = encode(bits, ones, zeros)
        assert 0 <= rank < comb(length, ones)
        assert decode(rank, ones, zeros) == bits


@pytest.mark.parametrize("sizes", [[1], [7], [64], [1, 7, 64, 3]])
def test_streaming_equivalence(sizes: list[int]):
    ones, zeros = 420, 580
    bits = random_sequence(ones, zeros, seed=5)
    expected = encode(bits, ones, zeros)

    enc = StreamingEncoder(ones, zeros)
    for chunk in _split(bits, sizes):
        enc.process_chunk(chunk)
    assert enc.finalize() == expected

    dec = StreamingDecoder(expected, ones, zeros)
    out: list[bool] = []
    i = 0
    while True:
        chunk = dec.next_chunk(sizes[i % len(sizes)])
        if not chunk:
            break
        out.extend(chunk)
        i += 1
    assert out == bits == decode(expected, ones, zeros)


def test_lazy_helpers_round_trip():
    ones, zeros = 300, 200
    bits = random_sequence(ones, zeros, seed=9)
    rank = rank_stream(iter(bits), ones, zeros, chunk_size=64)
    assert list(iter_unrank(rank, ones, zeros, chunk_size=64)) == bits


def test_first_difference_orders_ranks():
    rng = random.Random(7)
    for _ in range(50):
        a = random_sequence(10, 10, seed=rng.randint(0, 10**6))
        b = random_sequence(10, 10, seed=rng.randint(0, 10**6))
        if a == b:
            continue
        ra, rb = encode(a, 10, 10), encode(b, 10, 10)
        assert (ra < rb) == (a < b)


def test_rank_bound_is_tight():
    for ones, zeros in [(1, 1), (2, 5), (12, 3), (30, 30)]:
        top = [True] * ones + [False] * zeros
        assert encode(top, ones, zeros) == comb(ones + zeros, ones) - 1
        assert decode(comb(ones + zeros, ones) - 1, ones, zeros) == top
