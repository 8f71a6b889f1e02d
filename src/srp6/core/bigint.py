# srp6/core/bigint.py
"""Unsigned big integer helpers: byte conversion, padding, hashing and random ranges."""

import secrets
from typing import Optional, Union

from .constants import RANDOM_RANGE_MAX_ATTEMPTS


def to_hex(n: Optional[int]) -> Optional[str]:
    """Lowercase hex without a prefix, or None for None."""
    if n is None:
        return None
    return format(n, 'x')


def from_hex(value: Optional[str]) -> Optional[int]:
    """Parse a hex string, returning None for None or malformed input."""
    if value is None:
        return None
    try:
        return int(value, 16)
    except ValueError:
        return None


def to_unsigned_bytes(n: int) -> bytes:
    """Minimal big-endian unsigned representation of n (no sign byte)."""
    if n < 0:
        raise ValueError("Value must not be negative")
    return n.to_bytes((n.bit_length() + 7) // 8, 'big')


def pad_to_length(n: int, length: int) -> bytes:
    """Left-pad the unsigned bytes of n with zeros to exactly length bytes."""
    raw = to_unsigned_bytes(n)
    if len(raw) > length:
        raise ValueError(f"Value needs {len(raw)} bytes and does not fit in {length}")
    return raw.rjust(length, b'\x00')


def from_unsigned_bytes(data: bytes) -> int:
    return int.from_bytes(data, 'big')


def hash_padded_pair(hash_routine, N: int, n1: int, n2: int) -> int:
    """
    H(PAD(n1) | PAD(n2)) as an unsigned integer, where PAD left-pads to the
    byte length of N. Both peers must pad identically or k and u diverge
    without any error being raised.
    """
    pad_length = (N.bit_length() + 7) // 8
    digest = hash_routine.hash(pad_to_length(n1, pad_length) + pad_to_length(n2, pad_length))
    return from_unsigned_bytes(digest)


def random_in_range(minimum: int, maximum: int, rng=None) -> int:
    """
    Uniform random integer in [minimum, maximum] using rejection sampling.

    After RANDOM_RANGE_MAX_ATTEMPTS rejections a restricted-bit-length draw
    offset by minimum is returned so the call always terminates.
    """
    if rng is None:
        rng = secrets.SystemRandom()
    if minimum > maximum:
        raise ValueError("'minimum' may not be greater than 'maximum'")
    if minimum == maximum:
        return minimum

    if minimum.bit_length() > maximum.bit_length() // 2:
        return random_in_range(0, maximum - minimum, rng) + minimum

    bits = maximum.bit_length()
    for _ in range(RANDOM_RANGE_MAX_ATTEMPTS):
        candidate = rng.getrandbits(bits)
        if minimum <= candidate <= maximum:
            return candidate

    # fall back to a restricted draw that cannot exceed the range
    restricted_bits = (maximum - minimum).bit_length() - 1
    if restricted_bits <= 0:
        return minimum
    return rng.getrandbits(restricted_bits) + minimum


def salt_to_bytes(salt: Union[bytes, int]) -> bytes:
    """Salts travel as raw bytes; integer salts use their unsigned bytes."""
    if isinstance(salt, (bytes, bytearray)):
        return bytes(salt)
    if isinstance(salt, int):
        return to_unsigned_bytes(salt)
    raise TypeError(f"The salt must be bytes or int, not {type(salt).__name__}")
