# srp6/core/server.py
import logging
import secrets
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from .bigint import salt_to_bytes, to_hex, to_unsigned_bytes
from .constants import DEFAULT_SESSION_TIMEOUT
from .exceptions import CauseType, SRP6AuthError, SRP6ConfigError, SRP6StateError
from .params import CryptoParameters
from .protocol import (compute_k, compute_public_server_value, compute_session_key_server,
                       evidence_matches, generate_private_value, has_timed_out,
                       is_valid_public_value)
from .routines import (ClientEvidenceRoutine, DefaultClientEvidenceRoutine,
                       DefaultServerEvidenceRoutine, DefaultURoutine, HashRoutine,
                       ServerEvidenceRoutine, URoutine)


class ServerState(Enum):
    INIT = "init"
    STEP_1 = "step 1"  # challenge (salt, B) issued
    STEP_2 = "step 2"  # M1 verified, M2 issued


class SRP6ServerSession:
    """
    Server side of one SRP-6a authentication attempt.

    Usage:
        B = server.step1(identity, salt, verifier)   # send salt, B
        M2 = server.step2(A, M1)                     # send M2

    step2 is the server's only authentication decision: M2 is computed and
    released only after the client evidence M1 checks out.
    """

    def __init__(self, params: CryptoParameters, timeout: int = DEFAULT_SESSION_TIMEOUT,
                 u_routine: Optional[URoutine] = None,
                 client_evidence_routine: Optional[ClientEvidenceRoutine] = None,
                 server_evidence_routine: Optional[ServerEvidenceRoutine] = None,
                 hash_routine: Optional[HashRoutine] = None,
                 rng=None):
        if params is None:
            raise SRP6ConfigError("The SRP-6a crypto parameters must not be null")
        if timeout < 0:
            raise ValueError("The timeout must be zero (no timeout) or greater")
        self._params = params
        self.timeout = timeout
        self.u_routine = u_routine or DefaultURoutine()
        self.client_evidence_routine = client_evidence_routine or DefaultClientEvidenceRoutine()
        self.server_evidence_routine = server_evidence_routine or DefaultServerEvidenceRoutine()
        self._hash_routine = hash_routine or params.hash_routine()
        self._rng = rng or secrets.SystemRandom()

        self.last_activity: Optional[datetime] = None
        self._state = ServerState.INIT
        self._failed = False

        self._user_id = None
        self._salt: Optional[bytes] = None
        self._v: Optional[int] = None
        self._b: Optional[int] = None
        self._k: Optional[int] = None
        self._A: Optional[int] = None
        self._B: Optional[int] = None
        self._u: Optional[int] = None
        self._S: Optional[int] = None
        self._M1: Optional[int] = None
        self._M2: Optional[int] = None

    def step1(self, identity: Union[str, bytes], salt: Union[bytes, int], verifier: int) -> int:
        """Issue the challenge for a known user. Returns the public server value B."""
        self._check_state(ServerState.INIT)
        if not identity:
            raise ValueError("The user identity 'I' must not be empty")
        if salt is None:
            raise ValueError("The salt 's' must not be null")
        if verifier is None or verifier < 1:
            raise ValueError("The verifier 'v' must be a positive integer")

        params = self._params
        k = compute_k(params.hash_routine(), params.N, params.g)
        b = generate_private_value(params.N, self._rng)
        B = compute_public_server_value(params.N, params.g, k, verifier, b)

        self._user_id = identity
        self._salt = salt_to_bytes(salt)
        self._v = verifier
        self._k = k
        self._b = b
        self._B = B

        self._state = ServerState.STEP_1
        self._touch()
        logging.debug(f"Server session for {identity!r} issued challenge B={to_hex(B)}")
        return B

    def step2(self, A: int, M1: int) -> int:
        """
        Verify the client's public value A and evidence M1.

        Returns the server evidence message M2. Raises SRP6AuthError on
        timeout, an invalid A or a mismatching M1.
        """
        self._check_state(ServerState.STEP_1)
        if A is None:
            raise ValueError("The public client value 'A' must not be null")
        if M1 is None:
            raise ValueError("The client evidence message 'M1' must not be null")

        self._check_timeout()
        params = self._params
        if not is_valid_public_value(params.N, A):
            self._fail("Bad client credentials", "client public value 'A' is 0 mod N")

        u = self.u_routine.compute_u(params, A, self._B)
        S = compute_session_key_server(params.N, self._v, u, A, self._b)
        expected = self.client_evidence_routine.compute_client_evidence(params, A, self._B, S)
        if not evidence_matches(expected, M1):
            self._fail("Bad client credentials", "client evidence message 'M1' mismatch")

        M2 = self.server_evidence_routine.compute_server_evidence(params, A, M1, S)

        self._A = A
        self._u = u
        self._S = S
        self._M1 = M1
        self._M2 = M2
        self._b = None

        self._state = ServerState.STEP_2
        self._touch()
        logging.info(f"Server session for {self._user_id!r} authenticated the client")
        return M2

    def _check_state(self, required: ServerState) -> None:
        if self._failed:
            raise SRP6StateError("State violation: Session failed and must be discarded")
        if self._state != required:
            raise SRP6StateError(f"State violation: Session must be in {required.name} state")

    def _check_timeout(self) -> None:
        if self.has_timed_out():
            self._fail("Session timeout", "session timed out", CauseType.TIMEOUT)

    def _fail(self, message: str, detail: str,
              cause: CauseType = CauseType.BAD_CREDENTIALS) -> None:
        logging.warning(f"Server session for {self._user_id!r} failed: {detail}")
        self._failed = True
        self._b = None
        raise SRP6AuthError(message, cause)

    def _touch(self) -> None:
        self.last_activity = datetime.now()

    def has_timed_out(self) -> bool:
        return has_timed_out(self.last_activity, self.timeout)

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def failed(self) -> bool:
        return self._failed

    @property
    def user_id(self):
        return self._user_id

    @property
    def crypto_params(self) -> CryptoParameters:
        return self._params

    @property
    def hash_routine(self) -> HashRoutine:
        return self._hash_routine

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
        """The shared secret S, once the client has been authenticated."""
        if self._state != ServerState.STEP_2:
            return None
        return self._S

    def get_session_key_hash(self) -> Optional[bytes]:
        S = self.session_key
        if S is None:
            return None
        return self.hash_routine.hash(to_unsigned_bytes(S))
