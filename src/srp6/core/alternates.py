# srp6/core/alternates.py
"""Drop-in alternatives to the default routines."""

from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .bigint import from_unsigned_bytes, to_hex
from .constants import DEFAULT_HASH_ALGORITHM, DEFAULT_PBKDF2_ITERATIONS, MIN_PBKDF2_ITERATIONS
from .exceptions import SRP6ConfigError
from .routines import (ClientEvidenceRoutine, DigestHashRoutine, PasswordKeyRoutine,
                       ServerEvidenceRoutine)


class IdentityBoundPasswordKeyRoutine(PasswordKeyRoutine):
    """x = H(salt | H(identity | ":" | password)) as in RFC 5054."""

    def __init__(self, algorithm: str = DEFAULT_HASH_ALGORITHM):
        self.hash_routine = DigestHashRoutine(algorithm)

    def compute_x(self, salt, identity, password):
        if identity is None:
            raise ValueError("The user identity 'I' is required by this routine")
        inner = self.hash_routine.hash(identity + b':' + password)
        return from_unsigned_bytes(self.hash_routine.hash(salt + inner))

    def __eq__(self, other):
        return type(other) is type(self) and other.hash_routine == self.hash_routine

    def __hash__(self):
        return hash((type(self), self.hash_routine))


class PBKDF2PasswordKeyRoutine(PasswordKeyRoutine):
    """x = PBKDF2-HMAC(password, salt), slowing down brute force on stolen verifiers."""

    def __init__(self, iterations: int = DEFAULT_PBKDF2_ITERATIONS,
                 algorithm: str = DEFAULT_HASH_ALGORITHM):
        if iterations < MIN_PBKDF2_ITERATIONS:
            raise SRP6ConfigError(f"The iteration count must be at least {MIN_PBKDF2_ITERATIONS}")
        self.iterations = iterations
        self.hash_routine = DigestHashRoutine(algorithm)

    def compute_x(self, salt, identity, password):
        kdf = PBKDF2HMAC(
            algorithm=self.hash_routine.new_algorithm(),
            length=self.hash_routine.digest_size,
            salt=salt,
            iterations=self.iterations,
        )
        return from_unsigned_bytes(kdf.derive(password))

    def __eq__(self, other):
        return (type(other) is type(self) and other.iterations == self.iterations
                and other.hash_routine == self.hash_routine)

    def __hash__(self):
        return hash((type(self), self.iterations, self.hash_routine))


def hash_hex_values(hash_routine, *values: int) -> int:
    """H over the concatenated lowercase hex strings of the values."""
    text = "".join(to_hex(value) for value in values)
    return from_unsigned_bytes(hash_routine.hash(text.encode('utf-8')))


class HexHashedClientEvidenceRoutine(ClientEvidenceRoutine):
    """
    M1 = H(hex(A) | hex(B) | hex(S)).

    For peers that can only hash hexadecimal strings, such as browser
    clients. The server must be configured with the same routine.
    """

    def compute_client_evidence(self, params, A, B, S):
        return hash_hex_values(params.hash_routine(), A, B, S)


class HexHashedServerEvidenceRoutine(ServerEvidenceRoutine):
    """M2 = H(hex(A) | hex(M1) | hex(S))"""

    def compute_server_evidence(self, params, A, M1, S):
        return hash_hex_values(params.hash_routine(), A, M1, S)
