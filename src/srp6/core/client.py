# srp6/core/client.py
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from .bigint import salt_to_bytes, to_hex, to_unsigned_bytes
from .constants import DEFAULT_SESSION_TIMEOUT
from .exceptions import CauseType, SRP6AuthError, SRP6StateError
from .params import CryptoParameters
from .protocol import (compute_k, compute_public_client_value, compute_session_key_client,
                       evidence_matches, generate_private_value, has_timed_out,
                       is_valid_public_value)
from .routines import (ClientEvidenceRoutine, DefaultClientEvidenceRoutine,
                       DefaultPasswordKeyRoutine, DefaultServerEvidenceRoutine, DefaultURoutine,
                       HashRoutine, PasswordKeyRoutine, ServerEvidenceRoutine, URoutine, to_bytes)


class ClientState(Enum):
    INIT = "init"
    STEP_1 = "step 1"  # identity and password recorded
    STEP_2 = "step 2"  # A and M1 computed
    STEP_3 = "step 3"  # M2 verified


@dataclass(frozen=True)
class ClientCredentials:
    """The values the client sends the server after step 2."""
    A: int
    M1: int


class SRP6ClientSession:
    """
    Client side of one SRP-6a authentication attempt.

    Usage:
        client.step1(identity, password)
        credentials = client.step2(params, salt, B)   # send A, M1
        client.step3(M2)

    A session that raised SRP6AuthError is finished; create a new one to
    retry. Sessions are not thread-safe.
    """

    def __init__(self, timeout: int = DEFAULT_SESSION_TIMEOUT,
                 password_key_routine: Optional[PasswordKeyRoutine] = None,
                 u_routine: Optional[URoutine] = None,
                 client_evidence_routine: Optional[ClientEvidenceRoutine] = None,
                 server_evidence_routine: Optional[ServerEvidenceRoutine] = None,
                 hash_routine: Optional[HashRoutine] = None,
                 rng=None):
        if timeout < 0:
            raise ValueError("The timeout must be zero (no timeout) or greater")
        self.timeout = timeout
        self._password_key_routine = password_key_routine
        self.u_routine = u_routine or DefaultURoutine()
        self.client_evidence_routine = client_evidence_routine or DefaultClientEvidenceRoutine()
        self.server_evidence_routine = server_evidence_routine or DefaultServerEvidenceRoutine()
        self._hash_routine = hash_routine
        self._rng = rng or secrets.SystemRandom()

        self.last_activity: Optional[datetime] = None
        self._state = ClientState.INIT
        self._failed = False

        self._user_id = None
        self._password: Optional[bytes] = None
        self._params: Optional[CryptoParameters] = None
        self._salt: Optional[bytes] = None
        self._A: Optional[int] = None
        self._B: Optional[int] = None
        self._u: Optional[int] = None
        self._k: Optional[int] = None
        self._S: Optional[int] = None
        self._M1: Optional[int] = None
        self._M2: Optional[int] = None

    def step1(self, identity: Union[str, bytes], password: Union[str, bytes]) -> None:
        """Record the user identity and password."""
        self._check_state(ClientState.INIT)
        if not identity:
            raise ValueError("The user identity 'I' must not be empty")
        if password is None:
            raise ValueError("The user password 'P' must not be null")
        if not isinstance(identity, (str, bytes)):
            raise TypeError(f"The user identity 'I' must be str or bytes, not {type(identity).__name__}")
        password = to_bytes(password)

        self._user_id = identity
        self._password = password
        self._state = ClientState.STEP_1
        self._touch()
        logging.debug(f"Client session for {identity!r} entered {self._state.value}")

    def step2(self, params: CryptoParameters, salt: Union[bytes, int], B: int) -> ClientCredentials:
        """
        Answer the server challenge (salt, B).

        Returns the public value A and the evidence message M1 to send to the
        server. Raises SRP6AuthError on timeout or an invalid B.
        """
        self._check_state(ClientState.STEP_1)
        if params is None:
            raise ValueError("The SRP-6a crypto parameters must not be null")
        if salt is None:
            raise ValueError("The salt 's' must not be null")
        if B is None:
            raise ValueError("The public server value 'B' must not be null")

        self._check_timeout()
        if not is_valid_public_value(params.N, B):
            self._fail("Bad server credentials", "server public value 'B' is 0 mod N",
                       CauseType.BAD_CREDENTIALS)

        salt = salt_to_bytes(salt)
        if self._password_key_routine is None:
            self._password_key_routine = DefaultPasswordKeyRoutine(params.H)

        N, g = params.N, params.g
        k = compute_k(params.hash_routine(), N, g)
        x = self._password_key_routine.compute_x(salt, to_bytes(self._user_id), self._password)
        a = generate_private_value(N, self._rng)
        A = compute_public_client_value(N, g, a)
        u = self.u_routine.compute_u(params, A, B)
        S = compute_session_key_client(N, g, k, x, u, a, B)
        M1 = self.client_evidence_routine.compute_client_evidence(params, A, B, S)

        self._params = params
        self._salt = salt
        self._B = B
        self._k = k
        self._A = A
        self._u = u
        self._S = S
        self._M1 = M1
        # the password is not needed past this point
        self._password = None

        self._state = ClientState.STEP_2
        self._touch()
        logging.debug(f"Client session for {self._user_id!r} computed A={to_hex(A)} M1={to_hex(M1)}")
        return ClientCredentials(A, M1)

    def step3(self, M2: int) -> None:
        """Verify the server evidence message M2, completing mutual authentication."""
        self._check_state(ClientState.STEP_2)
        if M2 is None:
            raise ValueError("The server evidence message 'M2' must not be null")

        self._check_timeout()
        expected = self.server_evidence_routine.compute_server_evidence(
            self._params, self._A, self._M1, self._S)
        if not evidence_matches(expected, M2):
            self._fail("Bad server credentials", "server evidence message 'M2' mismatch",
                       CauseType.BAD_CREDENTIALS)

        self._M2 = M2
        self._state = ClientState.STEP_3
        self._touch()
        logging.info(f"Client session for {self._user_id!r} authenticated the server")

    def _check_state(self, required: ClientState) -> None:
        if self._failed:
            raise SRP6StateError("State violation: Session failed and must be discarded")
        if self._state != required:
            raise SRP6StateError(f"State violation: Session must be in {required.name} state")

    def _check_timeout(self) -> None:
        if self.has_timed_out():
            self._fail("Session timeout", "session timed out", CauseType.TIMEOUT)

    def _fail(self, message: str, detail: str, cause: CauseType) -> None:
        logging.warning(f"Client session for {self._user_id!r} failed: {detail}")
        self._failed = True
        self._password = None
        raise SRP6AuthError(message, cause)

    def _touch(self) -> None:
        self.last_activity = datetime.now()

    def has_timed_out(self) -> bool:
        return has_timed_out(self.last_activity, self.timeout)

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def failed(self) -> bool:
        return self._failed

    @property
    def user_id(self):
        return self._user_id

    @property
    def crypto_params(self) -> Optional[CryptoParameters]:
        return self._params

    @property
    def password_key_routine(self) -> Optional[PasswordKeyRoutine]:
        """The configured x routine; before step 2 None means the default for the parameters' H."""
        return self._password_key_routine

    @property
    def hash_routine(self) -> Optional[HashRoutine]:
        if self._hash_routine is not None:
            return self._hash_routine
        if self._params is not None:
            return self._params.hash_routine()
        return None

    @property
    def salt(self) -> Optional[bytes]:
        return self._salt

    @property
    def public_client_value(self) -> Optional[int]:
        return self._A

    @property
    def public_server_value(self) -> Optional[int]:
        return self._B

    @property
    def client_evidence_message(self) -> Optional[int]:
        return self._M1

    @property
    def server_evidence_message(self) -> Optional[int]:
        return self._M2

    @property
    def session_key(self) -> Optional[int]:
        """The shared secret S, once the server has been authenticated."""
        if self._state != ClientState.STEP_3:
            return None
        return self._S

    def get_session_key_hash(self) -> Optional[bytes]:
        S = self.session_key
        if S is None:
            return None
        return self.hash_routine.hash(to_unsigned_bytes(S))
