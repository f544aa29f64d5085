from combrank.config import Config, MAX_COUNT, RANDOM_SEED, get_config


def test_random_seed_set():
    """RANDOM_SEED convenience constant should match Config defaults."""

    assert RANDOM_SEED == 42


def test_config_singleton():
    """get_config should return the same singleton instance across calls."""

    c1 = get_config()
    c2 = get_config()
    assert c1 is c2
    assert isinstance(c1, Config)


def test_provider_defaults():
    assert Config.PRECOMPUTE_LIMIT == 256
    assert Config.CACHE_CAPACITY == 1024
    assert Config.DEFAULT_CHUNK_SIZE == 64


def test_count_limit_is_64_bit():
    assert MAX_COUNT == Config.MAX_COUNT == 2**64 - 1
