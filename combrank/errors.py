"""Exception types raised by the codec.

Every error here is a contract violation by the caller; none is transient.
The concrete classes also derive from the matching builtin so callers can
catch ``ValueError`` / ``OverflowError`` without importing this module.
"""

from __future__ import annotations


class RankCodecError(Exception):
    """Base class for all codec errors."""


class BinomialDomainError(RankCodecError, ValueError):
    """Binomial coefficient requested outside ``0 <= k <= n``."""


class CompositionError(RankCodecError, ValueError):
    """Bits or rank disagree with the declared (ones, zeros) composition."""


class CapacityError(RankCodecError, OverflowError):
    """A count does not fit the fixed-width bound ``Config.MAX_COUNT``."""


__all__ = [
    "RankCodecError",
    "BinomialDomainError",
    "CompositionError",
    "CapacityError",
]
