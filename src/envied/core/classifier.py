"""Type inference for raw environment values."""

from __future__ import annotations

import math
import re

from envied.models.field import FieldType

BOOL_LITERALS = frozenset({"1", "0", "t", "f", "true", "false"})

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][+-]?[0-9]+)?")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def is_bool(raw: str) -> bool:
    """Check whether ``raw`` is a recognized boolean literal."""
    return raw.lower() in BOOL_LITERALS


def is_int(raw: str) -> bool:
    """Check whether ``raw`` is a base-10 integer literal that fits in 64 bits."""
    if _INT_RE.fullmatch(raw) is None:
        return False
    # more than 19 significant digits cannot fit
    if len(raw.lstrip("-").lstrip("0")) > 19:
        return False
    return _INT64_MIN <= int(raw) <= _INT64_MAX


def is_float(raw: str) -> bool:
    """Check whether ``raw`` is a decimal or exponent literal within double range."""
    if _FLOAT_RE.fullmatch(raw) is None:
        return False
    return not math.isinf(float(raw))


def classify(raw: str) -> FieldType:
    """
    Infer the type of a raw value.

    Booleans are checked first so that ``"0"`` and ``"1"`` classify as
    BOOL rather than INT. No trimming is applied, so padded numbers fall
    through to STRING.

    Args:
        raw: Value text as read from the definitions file

    Returns:
        The inferred FieldType
    """
    if is_bool(raw):
        return FieldType.BOOL
    if is_int(raw):
        return FieldType.INT
    if is_float(raw):
        return FieldType.FLOAT
    return FieldType.STRING
