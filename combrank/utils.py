"""Shared argument checks and the textual bit format.

This module centralizes validation used by the provider, the encoder and
the decoder, plus the '0'/'1' string form used on the command line.
"""

from __future__ import annotations

from typing import Any, Iterable

from combrank.config import Config
from combrank.errors import CapacityError

_SEPARATORS = frozenset(" \t\r\n_")


def check_count(name: str, value: Any) -> int:
    """Return ``value`` as an ``int`` count or raise.

    Raises
    ------
    TypeError
        If ``value`` is not an integer (``bool`` is rejected too).
    ValueError
        If ``value`` is negative.
    CapacityError
        If ``value`` exceeds ``Config.MAX_COUNT``.
    """

    if isinstance(value, bool) or not hasattr(value, "__index__"):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    value = value.__index__()
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    if value > Config.MAX_COUNT:
        raise CapacityError(f"{name}={value} exceeds the 64-bit count limit ({Config.MAX_COUNT})")
    return value


def check_composition(ones: Any, zeros: Any) -> tuple[int, int]:
    """Validate a (ones, zeros) composition, including its total length."""

    ones = check_count("ones", ones)
    zeros = check_count("zeros", zeros)
    if ones + zeros > Config.MAX_COUNT:
        raise CapacityError(
            f"sequence length ones+zeros={ones + zeros} exceeds the 64-bit count limit ({Config.MAX_COUNT})"
        )
    return ones, zeros


def as_bit(value: Any) -> bool:
    """Coerce ``True/False/0/1`` to ``bool``; reject anything else."""

    if value is True or value is False:
        return value
    try:
        if value == 1:
            return True
        if value == 0:
            return False
    except (TypeError, ValueError):
        pass
    raise ValueError(f"Bits must be booleans or 0/1, got {value!r}")


def parse_bit_string(text: str) -> list[bool]:
    """Parse a '0'/'1' string, ignoring whitespace and ``_`` separators."""

    bits: list[bool] = []
    for i, ch in enumerate(text):
        if ch == "1":
            bits.append(True)
        elif ch == "0":
            bits.append(False)
        elif ch in _SEPARATORS:
            continue
        else:
            raise ValueError(f"Invalid bit character {ch!r} at position {i}")
    return bits


def format_bits(bits: Iterable[bool]) -> str:
    """Return the '0'/'1' string for ``bits``."""

    return "".join("1" if b else "0" for b in bits)
