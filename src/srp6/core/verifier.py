# srp6/core/verifier.py
import logging
from typing import Optional, Tuple, Union

from .bigint import salt_to_bytes
from .constants import DEFAULT_SALT_LENGTH
from .exceptions import SRP6ConfigError
from .params import CryptoParameters
from .protocol import compute_verifier, generate_random_salt
from .routines import DefaultPasswordKeyRoutine, PasswordKeyRoutine, to_bytes


class SRP6VerifierGenerator:
    """
    Produces password verifiers for provisioning new users.

    The x routine must match the one later configured on the client session
    or authentication fails.
    """

    def __init__(self, params: CryptoParameters,
                 password_key_routine: Optional[PasswordKeyRoutine] = None):
        if params is None:
            raise SRP6ConfigError("The SRP-6a crypto parameters must not be null")
        self.crypto_params = params
        self.password_key_routine = password_key_routine or DefaultPasswordKeyRoutine(params.H)

    @staticmethod
    def generate_random_salt(num_bytes: int = DEFAULT_SALT_LENGTH) -> bytes:
        return generate_random_salt(num_bytes)

    def generate_verifier(self, salt: Union[bytes, int],
                          identity: Union[str, bytes, None],
                          password: Union[str, bytes]) -> int:
        """v = g^x % N where x comes from the configured password key routine."""
        if salt is None:
            raise ValueError("The salt 's' must not be null")
        if password is None:
            raise ValueError("The password 'P' must not be null")

        x = self.password_key_routine.compute_x(
            salt_to_bytes(salt), to_bytes(identity), to_bytes(password))
        return compute_verifier(self.crypto_params.N, self.crypto_params.g, x)

    def make_registration(self, identity: Union[str, bytes, None], password: Union[str, bytes],
                          salt_length: int = DEFAULT_SALT_LENGTH) -> Tuple[bytes, int]:
        """Fresh (salt, verifier) pair for storing alongside the identity."""
        salt = self.generate_random_salt(salt_length)
        verifier = self.generate_verifier(salt, identity, password)
        logging.debug(f"Generated verifier for {identity!r}")
        return salt, verifier
