"""Exact binomial coefficients for the rank/unrank inner loop.

Both directions of the codec evaluate one C(n, k) per processed bit, with
``n`` shrinking by one each step. The provider answers those queries from
two tiers:

1. A triangular table for ``n < PRECOMPUTE_LIMIT`` built once, at
   construction, with Pascal's additive recurrence. It is never mutated
   afterwards and can be read from any thread without locking.
2. A bounded least-recently-used cache for everything above the table.
   Misses are computed exactly with :func:`math.comb` (the multiplicative
   formula in C) outside the lock, then inserted under it with a re-check,
   so concurrent callers never lose or duplicate an entry.

Arguments are symmetric-reduced (``k = min(k, n - k)``) before either tier
is consulted, which halves the key space.

Example
-------
>>> from combrank.binomial import get_provider
>>> get_provider().get(50, 25)
126410606437752
"""

from __future__ import annotations

from collections import OrderedDict
from math import comb
from threading import Lock
from typing import NamedTuple, Optional
import logging

from combrank.config import Config
from combrank.errors import BinomialDomainError
from combrank.utils import check_count


_LOGGER = logging.getLogger(__name__)


class CacheInfo(NamedTuple):
    """Cache statistics, shaped like ``functools.lru_cache``'s."""

    hits: int
    misses: int
    maxsize: int
    currsize: int


def compute_binomial(n: int, k: int) -> int:
    """Return C(n, k) without consulting any cache.

    Raises
    ------
    BinomialDomainError
        If ``k > n``.
    """

    n = check_count("n", n)
    k = check_count("k", k)
    if k > n:
        raise BinomialDomainError(f"C(n, k) requires k <= n, got n={n}, k={k}")
    return comb(n, min(k, n - k))


def _build_table(limit: int) -> list[list[int]]:
    # Row n holds C(n, 0..n)
    table: list[list[int]] = []
    row: list[int] = [1]
    for _ in range(limit):
        table.append(row)
        row = [1] + [row[i] + row[i + 1] for i in range(len(row) - 1)] + [1]
    return table


class BinomialProvider:
    """Precomputed table plus bounded LRU cache of exact binomials.

    Parameters
    ----------
    precompute_limit:
        Rows ``n < precompute_limit`` are tabulated eagerly. Defaults to
        ``Config.PRECOMPUTE_LIMIT``.
    cache_capacity:
        Maximum number of entries kept for ``n >= precompute_limit``.
        Defaults to ``Config.CACHE_CAPACITY``. Must be positive.
    """

    def __init__(self, precompute_limit: int | None = None, cache_capacity: int | None = None) -> None:
        limit = Config.PRECOMPUTE_LIMIT if precompute_limit is None else int(precompute_limit)
        capacity = Config.CACHE_CAPACITY if cache_capacity is None else int(cache_capacity)
        if limit < 0:
            raise ValueError("precompute_limit must be >= 0")
        if capacity <= 0:
            raise ValueError("cache_capacity must be > 0")
        self.precompute_limit: int = limit
        self.cache_capacity: int = capacity
        self._table: list[list[int]] = _build_table(limit)
        self._cache: OrderedDict[tuple[int, int], int] = OrderedDict()
        self._lock = Lock()
        self._hits: int = 0
        self._misses: int = 0
        _LOGGER.debug("Built binomial table for n < %d (cache capacity %d)", limit, capacity)

    def get(self, n: int, k: int) -> int:
        """Return exact C(n, k).

        Raises
        ------
        BinomialDomainError
            If ``k > n``; the provider fails fast rather than returning 0.
        TypeError, ValueError, CapacityError
            If ``n`` or ``k`` is not a valid 64-bit unsigned count.
        """

        n = check_count("n", n)
        k = check_count("k", k)
        if k > n:
            raise BinomialDomainError(f"C(n, k) requires k <= n, got n={n}, k={k}")
        k = min(k, n - k)

        if n < self.precompute_limit:
            return self._table[n][k]

        key = (n, k)
        with self._lock:
            value = self._cache.get(key)
            if value is not None:
                self._cache.move_to_end(key)
                self._hits += 1
                return value
            self._misses += 1

        # comb runs unlocked; another thread may have inserted the key meanwhile
        value = comb(n, k)
        with self._lock:
            existing = self._cache.get(key)
            if existing is not None:
                self._cache.move_to_end(key)
                return existing
            self._cache[key] = value
            if len(self._cache) > self.cache_capacity:
                evicted, _ = self._cache.popitem(last=False)
                _LOGGER.debug("Evicted C%s from binomial cache", evicted)
            return value

    def cache_info(self) -> CacheInfo:
        """Return hit/miss counters and current cache occupancy."""

        with self._lock:
            return CacheInfo(self._hits, self._misses, self.cache_capacity, len(self._cache))

    def cache_clear(self) -> None:
        """Drop every cached entry and reset counters. The table is kept."""

        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def __repr__(self) -> str:
        return (
            f"BinomialProvider(precompute_limit={self.precompute_limit}, "
            f"cache_capacity={self.cache_capacity})"
        )


_PROVIDER_SINGLETON: Optional[BinomialProvider] = None
_PROVIDER_LOCK = Lock()


def get_provider() -> BinomialProvider:
    """Return the process-wide `BinomialProvider`, building it on first use.

    Construction is guarded so only one thread pays for the table.
    """

    global _PROVIDER_SINGLETON
    provider = _PROVIDER_SINGLETON
    if provider is None:
        with _PROVIDER_LOCK:
            provider = _PROVIDER_SINGLETON
            if provider is None:
                provider = BinomialProvider()
                _PROVIDER_SINGLETON = provider
    return provider


__all__ = ["BinomialProvider", "CacheInfo", "compute_binomial", "get_provider"]
