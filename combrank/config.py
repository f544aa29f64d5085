"""Centralized configuration for the rank/unrank codec.

Defines immutable defaults for the binomial provider (precompute bound and
cache capacity), the streaming chunk width, the fixed-width ceiling on
composition counts, and the random seed used by diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Config:
    """Immutable configuration defaults for the project."""

    # Binomial provider
    PRECOMPUTE_LIMIT: int = 256
    CACHE_CAPACITY: int = 1024

    # Streaming
    DEFAULT_CHUNK_SIZE: int = 64

    # Composition counts are unsigned 64-bit
    MAX_COUNT: int = 2**64 - 1

    # Random seeds
    RANDOM_SEED: int = 42


# Convenience re-exports and constants
RANDOM_SEED: int = Config.RANDOM_SEED
MAX_COUNT: int = Config.MAX_COUNT


_CONFIG_SINGLETON: Optional[Config] = None


def get_config() -> Config:
    """Return a singleton `Config` instance."""

    global _CONFIG_SINGLETON
    if _CONFIG_SINGLETON is None:
        _CONFIG_SINGLETON = Config()
    return _CONFIG_SINGLETON
