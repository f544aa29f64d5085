from concurrent.futures import ThreadPoolExecutor
from math import comb
import threading

import pytest

from combrank import binomial
from combrank.binomial import BinomialProvider, compute_binomial, get_provider
from combrank.config import Config
from combrank.errors import BinomialDomainError, CapacityError


@pytest.fixture
def provider() -> BinomialProvider:
    return BinomialProvider()


def test_known_value(provider: BinomialProvider):
    assert provider.get(50, 25) == 126410606437752


def test_small_values(provider: BinomialProvider):
    assert provider.get(0, 0) == 1
    assert provider.get(5, 0) == 1
    assert provider.get(5, 5) == 1
    assert provider.get(10, 3) == 120
    assert provider.get(4, 3) == 4


def test_symmetry(provider: BinomialProvider):
    for n in [0, 1, 7, 64, 255, 256, 300, 1000]:
        for k in range(0, n + 1, max(1, n // 13)):
            assert provider.get(n, k) == provider.get(n, n - k)


def test_matches_math_comb_across_table_boundary(provider: BinomialProvider):
    for n in range(Config.PRECOMPUTE_LIMIT - 3, Config.PRECOMPUTE_LIMIT + 3):
        for k in (0, 1, 2, n // 3, n // 2, n - 1, n):
            assert provider.get(n, k) == comb(n, k)


def test_table_hits_do_not_touch_cache(provider: BinomialProvider):
    provider.get(255, 128)
    provider.get(200, 3)
    info = provider.cache_info()
    assert info.hits == 0 and info.misses == 0 and info.currsize == 0


def test_cache_hit_and_miss(provider: BinomialProvider):
    provider.get(256, 3)
    provider.get(256, 3)
    info = provider.cache_info()
    assert info.misses == 1
    assert info.hits == 1
    assert info.currsize == 1
    assert info.maxsize == Config.CACHE_CAPACITY


def test_symmetric_arguments_share_cache_entry(provider: BinomialProvider):
    provider.get(300, 10)
    provider.get(300, 290)
    info = provider.cache_info()
    assert info.currsize == 1
    assert info.hits == 1


def test_lru_eviction():
    p = BinomialProvider(precompute_limit=0, cache_capacity=2)
    p.get(10, 1)
    p.get(11, 1)
    p.get(10, 1)  # refresh (10, 1)
    p.get(12, 1)  # evicts (11, 1)
    assert p.cache_info().currsize == 2
    p.get(10, 1)
    assert p.cache_info().hits == 2
    p.get(11, 1)
    info = p.cache_info()
    assert info.misses == 4
    assert info.currsize == 2


def test_cache_clear(provider: BinomialProvider):
    provider.get(400, 7)
    provider.cache_clear()
    info = provider.cache_info()
    assert info.currsize == 0 and info.hits == 0 and info.misses == 0
    assert provider.get(400, 7) == comb(400, 7)


def test_zero_precompute_limit():
    p = BinomialProvider(precompute_limit=0)
    assert p.get(0, 0) == 1
    assert p.get(6, 2) == 15


def test_invalid_construction():
    with pytest.raises(ValueError):
        BinomialProvider(cache_capacity=0)
    with pytest.raises(ValueError):
        BinomialProvider(precompute_limit=-1)


def test_k_greater_than_n_fails_fast(provider: BinomialProvider):
    with pytest.raises(BinomialDomainError):
        provider.get(3, 4)
    with pytest.raises(ValueError):
        provider.get(300, 301)
    with pytest.raises(BinomialDomainError):
        compute_binomial(0, 1)


def test_argument_types(provider: BinomialProvider):
    with pytest.raises(ValueError):
        provider.get(-1, 0)
    with pytest.raises(TypeError):
        provider.get(5.0, 2)
    with pytest.raises(TypeError):
        provider.get(True, 0)
    with pytest.raises(CapacityError):
        provider.get(Config.MAX_COUNT + 1, 0)
    with pytest.raises(OverflowError):
        provider.get(2**70, 1)


def test_compute_binomial_matches_provider(provider: BinomialProvider):
    assert compute_binomial(1000, 500) == provider.get(1000, 500) == comb(1000, 500)


def test_concurrent_get_is_consistent():
    p = BinomialProvider(precompute_limit=16, cache_capacity=64)
    queries = [(n, k) for n in range(16, 400, 3) for k in (1, 5, n // 2)] * 4

    def work(q: tuple[int, int]) -> bool:
        n, k = q
        return p.get(n, k) == comb(n, k)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(work, queries))
    assert all(results)
    info = p.cache_info()
    assert info.hits + info.misses == len(queries)
    assert info.currsize <= 64


def test_get_provider_singleton():
    assert get_provider() is get_provider()
    assert isinstance(get_provider(), BinomialProvider)


def test_get_provider_constructs_once_under_race(monkeypatch):
    built: list[int] = []

    class CountingProvider(BinomialProvider):
        def __init__(self) -> None:
            built.append(1)
            super().__init__(precompute_limit=8)

    monkeypatch.setattr(binomial, "_PROVIDER_SINGLETON", None)
    monkeypatch.setattr(binomial, "BinomialProvider", CountingProvider)
    with ThreadPoolExecutor(max_workers=8) as pool:
        providers = list(pool.map(lambda _: get_provider(), range(32)))
    assert len(built) == 1
    assert all(p is providers[0] for p in providers)


def test_slow_miss_does_not_block_other_keys(monkeypatch):
    started = threading.Event()
    release = threading.Event()
    real_comb = binomial.comb

    def slow_comb(n: int, k: int) -> int:
        if n == 5000:
            started.set()
            release.wait(5)
        return real_comb(n, k)

    monkeypatch.setattr(binomial, "comb", slow_comb)
    p = BinomialProvider(precompute_limit=0)
    slow = threading.Thread(target=p.get, args=(5000, 3))
    slow.start()
    assert started.wait(5)

    done: list[int] = []
    other = threading.Thread(target=lambda: done.append(p.get(300, 2)))
    other.start()
    other.join(timeout=2)
    finished_while_slow_pending = done == [comb(300, 2)]
    release.set()
    slow.join(5)

    assert finished_while_slow_pending
    assert p.get(5000, 3) == comb(5000, 3)
    assert p.cache_info().currsize == 2


def test_concurrent_misses_on_same_key_store_one_entry():
    p = BinomialProvider(precompute_limit=0, cache_capacity=8)
    with ThreadPoolExecutor(max_workers=8) as pool:
        values = list(pool.map(lambda _: p.get(2000, 1000), range(16)))
    assert all(v == comb(2000, 1000) for v in values)
    info = p.cache_info()
    assert info.currsize == 1
    assert info.hits + info.misses == 16
