# srp6/core/protocol.py
"""
SRP-6a arithmetic as pure functions over the crypto parameters.

    k = H(PAD(N) | PAD(g))
    v = g^x % N
    A = g^a % N
    B = (k*v + g^b) % N
    S = (B - k*g^x) ^ (a + u*x) % N      client
    S = (A * v^u) ^ b % N                server

Both forms of S are equal whenever the client knows the password behind v.
"""

import os
import secrets
from datetime import datetime, timedelta
from typing import Optional

from .bigint import hash_padded_pair, random_in_range
from .constants import DEFAULT_SALT_LENGTH, PRIVATE_VALUE_MIN_BITS


def compute_k(hash_routine, N: int, g: int) -> int:
    return hash_padded_pair(hash_routine, N, N, g)


def compute_verifier(N: int, g: int, x: int) -> int:
    return pow(g, x, N)


def generate_private_value(N: int, rng=None) -> int:
    """Random value drawn from [2^(min_bits - 1), N - 1]."""
    if rng is None:
        rng = secrets.SystemRandom()
    min_bits = min(PRIVATE_VALUE_MIN_BITS, N.bit_length() // 2)
    return random_in_range(1 << (min_bits - 1), N - 1, rng)


def compute_public_client_value(N: int, g: int, a: int) -> int:
    return pow(g, a, N)


def compute_public_server_value(N: int, g: int, k: int, v: int, b: int) -> int:
    return (pow(g, b, N) + v * k) % N


def is_valid_public_value(N: int, value: int) -> bool:
    """A public value congruent to 0 mod N would force S to 0."""
    return value % N != 0


def compute_session_key_client(N: int, g: int, k: int, x: int, u: int, a: int, B: int) -> int:
    base = (B - k * pow(g, x, N)) % N
    return pow(base, a + u * x, N)


def compute_session_key_server(N: int, v: int, u: int, A: int, b: int) -> int:
    return pow(pow(v, u, N) * A, b, N)


def generate_random_salt(num_bytes: int = DEFAULT_SALT_LENGTH) -> bytes:
    if num_bytes < 1:
        raise ValueError("The salt length must be at least one byte")
    return os.urandom(num_bytes)


def has_timed_out(last_activity: Optional[datetime], timeout: int) -> bool:
    """True once more than timeout seconds passed since last_activity. 0 disables."""
    if timeout == 0 or last_activity is None:
        return False
    return datetime.now() > last_activity + timedelta(seconds=timeout)


def evidence_matches(expected: int, received: int) -> bool:
    """Constant-time equality of two evidence messages."""
    if received is None or received < 0:
        return False
    length = max(expected.bit_length(), received.bit_length(), 8) // 8 + 1
    return secrets.compare_digest(expected.to_bytes(length, 'big'), received.to_bytes(length, 'big'))
