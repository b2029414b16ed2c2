"""XOR based value obfuscation.

Two layouts are supported:

- per code point: each character is XORed with its own 32-bit key drawn
  from a seeded generator, producing ``keys``/``cipher`` integer lists;
- packed: the UTF-8 bytes are XORed with a repeating text key and the
  result is base64 encoded.

Neither is encryption; both only keep secrets from being readable in
generated source at a glance.
"""

from __future__ import annotations

import base64
import binascii
import random
import string
import time
from typing import Sequence

from envied.models.field import Field
from envied.models.generation import EmissionFormat, ObfuscatedPayload
from envied.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MASK_KEY = "envied-obfuscation"
MASK_KEY_LENGTH = 16
_MASK_KEY_ALPHABET = string.ascii_letters + string.digits
_SEED_MASK = (1 << 64) - 1


def seeded_random(seed: int) -> random.Random:
    """Create a generator for ``seed``; 0 means a time based seed."""
    if seed == 0:
        return random.Random(time.time_ns())
    return random.Random(seed & _SEED_MASK)


def obfuscate_string(value: str, seed: int) -> tuple[list[int], list[int]]:
    """
    Obfuscate ``value`` one code point at a time.

    Args:
        value: Text to obfuscate
        seed: Generator seed; 0 gives non-reproducible output

    Returns:
        ``(keys, cipher)`` with one entry per code point
    """
    rng = seeded_random(seed)
    keys: list[int] = []
    cipher: list[int] = []
    for char in value:
        key = rng.getrandbits(32)
        keys.append(key)
        cipher.append(ord(char) ^ key)
    return keys, cipher


def deobfuscate_string(keys: Sequence[int], cipher: Sequence[int]) -> str:
    """Reverse :func:`obfuscate_string`; mismatched lengths give ``""``."""
    if len(keys) != len(cipher):
        return ""
    try:
        return "".join(chr(k ^ c) for k, c in zip(keys, cipher))
    except (ValueError, OverflowError):
        logger.warning("Obfuscated data does not decode to text")
        return ""


def _xor_repeating(data: bytes, key: bytes) -> bytes:
    return bytes(b ^ key[i % len(key)] for i, b in enumerate(data))


def mask_with_key(value: str, key: str = DEFAULT_MASK_KEY) -> str:
    """XOR the UTF-8 bytes of ``value`` with ``key`` and base64 encode."""
    if value == "":
        return ""
    if not key:
        raise ValueError("mask key must not be empty")
    masked = _xor_repeating(value.encode("utf-8"), key.encode("utf-8"))
    return base64.b64encode(masked).decode("ascii")


def unmask_with_key(masked: str, key: str = DEFAULT_MASK_KEY) -> str:
    """Reverse :func:`mask_with_key`; empty or undecodable input gives ``""``."""
    if masked == "" or not key:
        return ""
    try:
        data = base64.b64decode(masked, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning("Cannot decode masked value: %s", e)
        return ""
    return _xor_repeating(data, key.encode("utf-8")).decode("utf-8", errors="replace")


def generate_mask_key(rng: random.Random, length: int = MASK_KEY_LENGTH) -> str:
    """Draw an alphanumeric mask key from ``rng``."""
    return "".join(rng.choice(_MASK_KEY_ALPHABET) for _ in range(length))


def constant_names(environment: str, field_name: str) -> tuple[str, str]:
    """Names of the key and data constants for a field in an environment."""
    prefix = f"_{_identifier_part(environment).upper()}"
    suffix = _identifier_part(field_name)
    return f"{prefix}_ENVIEDKEY_{suffix}", f"{prefix}_ENVIEDDATA_{suffix}"


def _identifier_part(text: str) -> str:
    return "".join(ch if ch == "_" or (ch.isascii() and ch.isalnum()) else "_" for ch in text)


def obfuscate_field(
    field: Field,
    environment: str,
    seed: int,
    format: EmissionFormat = EmissionFormat.ARRAYS,
) -> ObfuscatedPayload | None:
    """
    Obfuscate a field value for emission.

    Only non-empty STRING and FLOAT values are obfuscated; INT and BOOL
    values are emitted as plain literals.

    Args:
        field: Field to obfuscate
        environment: Environment the field belongs to (qualifies constant names)
        seed: Generator seed
        format: Payload layout

    Returns:
        ObfuscatedPayload, or None when the field is emitted unobfuscated
    """
    if not field.type.obfuscated or field.value == "":
        return None

    key_name, data_name = constant_names(environment, field.name)
    if format == EmissionFormat.PACKED:
        key = generate_mask_key(seeded_random(seed))
        return ObfuscatedPayload(
            field_name=field.name,
            key_name=key_name,
            data_name=data_name,
            format=format,
            key=key,
            masked=mask_with_key(field.value, key),
        )

    keys, cipher = obfuscate_string(field.value, seed)
    return ObfuscatedPayload(
        field_name=field.name,
        key_name=key_name,
        data_name=data_name,
        format=format,
        keys=keys,
        cipher=cipher,
    )
