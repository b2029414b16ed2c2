"""Helpers imported by generated configuration modules.

Generated constructors call these to rebuild field values; none of them
raise on bad input.
"""

from envied.core.classifier import is_bool
from envied.core.obfuscation import deobfuscate_string, unmask_with_key

_TRUE_LITERALS = frozenset({"1", "t", "true"})

__all__ = [
    "deobfuscate_string",
    "unmask_with_key",
    "parse_int",
    "parse_bool",
    "parse_float",
]


def parse_int(value: str) -> int:
    """Parse a base-10 integer, returning 0 on failure."""
    try:
        return int(value, 10)
    except ValueError:
        return 0


def parse_bool(value: str) -> bool:
    """Parse a boolean literal, returning False on failure."""
    if not is_bool(value):
        return False
    return value.lower() in _TRUE_LITERALS


def parse_float(value: str) -> float:
    """Parse a floating-point literal, returning 0.0 on failure."""
    try:
        return float(value)
    except ValueError:
        return 0.0
