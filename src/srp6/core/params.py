# srp6/core/params.py
import logging
from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_BITSIZE, DEFAULT_HASH_ALGORITHM
from .exceptions import SRP6ConfigError
from .routines import DigestHashRoutine, canonical_hash_name

# Pre-computed safe primes 'N' for a set of bit sizes
N_256 = int("125617018995153554710546479714086468244499594888726646874671447258204721048803")

N_512 = int(
    "11144252439149533417835749556168991736939157778924947037200268358613863350040339017097790259154750906"
    "072491181606044774215413467851989724116331597513345603")

N_768 = int(
    "10871791351054578590720656490590697602805400869758176290664446823668961877935707365745499814888682178"
    "43627094867924800342887096064844227836735667168319981288765377499806385489913341488724152562880918438"
    "701129530606139552645689583147")

N_1024 = int(
    "16760943441033506134513952376435009026013552532981390455742093030980086585947355153155152380001391657"
    "38918647899347470390105463284808489795166376737766056103746694262147761978284926913845194532182537027"
    "88022233205683635831626913357154941914129985489522629902540768368409482248290641036967659389658897350"
    "067939")

# RFC 3526 MODP safe primes
N_1536 = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3DC2007CB8A163BF05"
    "98DA48361C55D39A69163FA8FD24CF5F83655D23DCA3AD961C62F356208552BB"
    "9ED529077096966D670C354E4ABC9804F1746C08CA237327FFFFFFFFFFFFFFFF", 16)

N_2048 = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3DC2007CB8A163BF05"
    "98DA48361C55D39A69163FA8FD24CF5F83655D23DCA3AD961C62F356208552BB"
    "9ED529077096966D670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B"
    "E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9DE2BCBF695581718"
    "3995497CEA956AE515D2261898FA051015728E5A8AACAA68FFFFFFFFFFFFFFFF", 16)

N_3072 = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74"
    "020BBEA63B139B22514A08798E3404DDEF9519B3CD3A431B302B0A6DF25F1437"
    "4FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3DC2007CB8A163BF05"
    "98DA48361C55D39A69163FA8FD24CF5F83655D23DCA3AD961C62F356208552BB"
    "9ED529077096966D670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B"
    "E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9DE2BCBF695581718"
    "3995497CEA956AE515D2261898FA051015728E5A8AAAC42DAD33170D04507A33"
    "A85521ABDF1CBA64ECFB850458DBEF0A8AEA71575D060C7DB3970F85A6E1E4C7"
    "ABF5AE8CDB0933D71E8C94E04A25619DCEE3D2261AD2EE6BF12FFA06D98A0864"
    "D87602733EC86A64521F2B18177B200CBBE117577A615D6C770988C0BAD946E2"
    "08E24FA074E5AB3143DB5BFCE0FD108E4B82D120A93AD2CAFFFFFFFFFFFFFFFF", 16)


def _arctan_inv(x: int, one: int) -> int:
    """arctan(1/x) scaled by one, truncated."""
    power = one // x
    total = power
    x_squared = x * x
    divisor = 1
    sign = 1
    while power:
        power //= x_squared
        divisor += 2
        sign = -sign
        total += sign * (power // divisor)
    return total


def _pi_bits(bits: int) -> int:
    """floor(2^bits * pi) from Machin's formula, with 64 guard bits."""
    guard = 64
    one = 1 << (bits + guard)
    return (4 * (4 * _arctan_inv(5, one) - _arctan_inv(239, one))) >> guard


def rfc3526_prime(bits: int, offset: int) -> int:
    """
    The RFC 3526 MODP prime of the given size:

        2^bits - 2^(bits-64) - 1 + 2^64 * (floor(2^(bits-130) * pi) + offset)
    """
    return (1 << bits) - (1 << (bits - 64)) - 1 + ((_pi_bits(bits - 130) + offset) << 64)


N_4096 = rfc3526_prime(4096, 240904)
N_6144 = rfc3526_prime(6144, 929484)
N_8192 = rfc3526_prime(8192, 4743158)

G_COMMON = 2

PRECOMPUTED_PRIMES = {
    256: N_256,
    512: N_512,
    768: N_768,
    1024: N_1024,
    1536: N_1536,
    2048: N_2048,
    3072: N_3072,
    4096: N_4096,
    6144: N_6144,
    8192: N_8192,
}


@dataclass(frozen=True)
class CryptoParameters:
    """
    The SRP-6a crypto parameters: safe prime N, generator g and hash algorithm H.

    N is trusted to be a safe prime and is not tested for primality. The
    instance is immutable and may be shared by any number of sessions.
    """
    N: int
    g: int
    H: str = DEFAULT_HASH_ALGORITHM

    def __post_init__(self):
        if self.N is None:
            raise SRP6ConfigError("The prime parameter 'N' must not be null")
        if self.g is None:
            raise SRP6ConfigError("The generator parameter 'g' must not be null")
        if self.N <= 3 or self.N % 2 == 0:
            raise SRP6ConfigError("The prime parameter 'N' must be an odd prime")
        if not 1 < self.g < self.N - 1:
            raise SRP6ConfigError("The generator parameter 'g' must be in [2, N-2]")

        object.__setattr__(self, 'H', canonical_hash_name(self.H))

        digest_bits = self.hash_routine().digest_size * 8
        if self.N.bit_length() < digest_bits:
            raise SRP6ConfigError(
                f"The prime parameter 'N' bit length is {self.N.bit_length()} "
                f"but must not be less than the {self.H} output length of {digest_bits} bits")

    def hash_routine(self) -> DigestHashRoutine:
        return DigestHashRoutine(self.H)

    @property
    def byte_length(self) -> int:
        return (self.N.bit_length() + 7) // 8

    @classmethod
    def get_instance(cls, bitsize: int = DEFAULT_BITSIZE,
                     algorithm: str = DEFAULT_HASH_ALGORITHM) -> Optional['CryptoParameters']:
        """Parameters built from a pre-computed prime, or None for an unsupported size."""
        N = PRECOMPUTED_PRIMES.get(bitsize)
        if N is None:
            logging.debug(f"No pre-computed prime for {bitsize} bits")
            return None
        return cls(N, G_COMMON, algorithm)
