# srp6/core/routines.py
"""
Pluggable routines for the hash H, the password key x, the scrambling
parameter u and the evidence messages M1 / M2.

Every routine is a pure function of its explicit inputs. Client and server
must be configured with matching routines or authentication deterministically
fails at the evidence comparison.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes

from .bigint import from_unsigned_bytes, hash_padded_pair, to_unsigned_bytes
from .constants import DEFAULT_HASH_ALGORITHM, SUPPORTED_HASH_ALGORITHMS
from .exceptions import SRP6ConfigError

_HASH_ALGORITHMS = {
    "SHA1": ("SHA-1", hashes.SHA1),
    "SHA224": ("SHA-224", hashes.SHA224),
    "SHA256": ("SHA-256", hashes.SHA256),
    "SHA384": ("SHA-384", hashes.SHA384),
    "SHA512": ("SHA-512", hashes.SHA512),
}


def canonical_hash_name(name: str) -> str:
    """Normalize 'sha256', 'SHA-256', ... to 'SHA-256'."""
    if not name:
        raise SRP6ConfigError("The hash algorithm 'H' must not be empty")
    key = name.upper().replace("-", "").replace("_", "")
    if key not in _HASH_ALGORITHMS:
        raise SRP6ConfigError(
            f"Unsupported hash algorithm 'H': {name} (expected one of {', '.join(SUPPORTED_HASH_ALGORITHMS)})")
    return _HASH_ALGORITHMS[key][0]


def to_bytes(value: Union[str, bytes, None]) -> Optional[bytes]:
    """UTF-8 encode text; pass bytes and None through."""
    if value is None or isinstance(value, bytes):
        return value
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, str):
        return value.encode('utf-8')
    raise TypeError(f"Expected str or bytes, not {type(value).__name__}")


class HashRoutine(ABC):
    """The primitive H: bytes -> bytes."""

    @abstractmethod
    def hash(self, data: bytes) -> bytes:
        pass

    @property
    @abstractmethod
    def digest_size(self) -> int:
        """Output length in bytes."""
        pass


class DigestHashRoutine(HashRoutine):
    """H backed by a message digest from the cryptography package."""

    def __init__(self, algorithm: str = DEFAULT_HASH_ALGORITHM):
        self.algorithm = canonical_hash_name(algorithm)
        self._hash_cls = _HASH_ALGORITHMS[self.algorithm.replace("-", "")][1]

    def new_algorithm(self) -> hashes.HashAlgorithm:
        return self._hash_cls()

    def hash(self, data: bytes) -> bytes:
        digest = hashes.Hash(self.new_algorithm())
        digest.update(data)
        return digest.finalize()

    @property
    def digest_size(self) -> int:
        return self._hash_cls.digest_size

    def __eq__(self, other):
        return isinstance(other, DigestHashRoutine) and other.algorithm == self.algorithm

    def __hash__(self):
        return hash(self.algorithm)

    def __repr__(self):
        return f"DigestHashRoutine({self.algorithm!r})"


class PasswordKeyRoutine(ABC):
    """Computes the password key x from (salt, identity, password)."""

    @abstractmethod
    def compute_x(self, salt: bytes, identity: Optional[bytes], password: bytes) -> int:
        pass


class URoutine(ABC):
    """Computes the scrambling parameter u from the two public values."""

    @abstractmethod
    def compute_u(self, params, A: int, B: int) -> int:
        pass


class ClientEvidenceRoutine(ABC):
    """Computes the client evidence message M1 from (A, B, S)."""

    @abstractmethod
    def compute_client_evidence(self, params, A: int, B: int, S: int) -> int:
        pass


class ServerEvidenceRoutine(ABC):
    """Computes the server evidence message M2 from (A, M1, S)."""

    @abstractmethod
    def compute_server_evidence(self, params, A: int, M1: int, S: int) -> int:
        pass


class DefaultPasswordKeyRoutine(PasswordKeyRoutine):
    """x = H(salt | H(password)). The identity is not bound into x."""

    def __init__(self, algorithm: str = DEFAULT_HASH_ALGORITHM):
        self.hash_routine = DigestHashRoutine(algorithm)

    def compute_x(self, salt, identity, password):
        inner = self.hash_routine.hash(password)
        return from_unsigned_bytes(self.hash_routine.hash(salt + inner))

    def __eq__(self, other):
        return type(other) is type(self) and other.hash_routine == self.hash_routine

    def __hash__(self):
        return hash((type(self), self.hash_routine))


class DefaultURoutine(URoutine):
    """u = H(PAD(A) | PAD(B))"""

    def compute_u(self, params, A, B):
        return hash_padded_pair(params.hash_routine(), params.N, A, B)


class DefaultClientEvidenceRoutine(ClientEvidenceRoutine):
    """
    M1 = H(A | B | S) over the raw unsigned bytes of each value.

    Not byte-compatible with peers that hash signed two's-complement encodings.
    """

    def compute_client_evidence(self, params, A, B, S):
        data = to_unsigned_bytes(A) + to_unsigned_bytes(B) + to_unsigned_bytes(S)
        return from_unsigned_bytes(params.hash_routine().hash(data))


class DefaultServerEvidenceRoutine(ServerEvidenceRoutine):
    """
    M2 = H(A | M1 | S) over the raw unsigned bytes of each value.

    Not byte-compatible with peers that hash signed two's-complement encodings.
    """

    def compute_server_evidence(self, params, A, M1, S):
        data = to_unsigned_bytes(A) + to_unsigned_bytes(M1) + to_unsigned_bytes(S)
        return from_unsigned_bytes(params.hash_routine().hash(data))
