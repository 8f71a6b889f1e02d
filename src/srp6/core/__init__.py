from .alternates import (HexHashedClientEvidenceRoutine, HexHashedServerEvidenceRoutine,
                         IdentityBoundPasswordKeyRoutine, PBKDF2PasswordKeyRoutine)
from .client import ClientCredentials, ClientState, SRP6ClientSession
from .exceptions import CauseType, SRP6AuthError, SRP6ConfigError, SRP6Error, SRP6StateError
from .params import CryptoParameters
from .routines import (ClientEvidenceRoutine, DefaultClientEvidenceRoutine,
                       DefaultPasswordKeyRoutine, DefaultServerEvidenceRoutine, DefaultURoutine,
                       DigestHashRoutine, HashRoutine, PasswordKeyRoutine, ServerEvidenceRoutine,
                       URoutine)
from .server import SRP6ServerSession, ServerState
from .verifier import SRP6VerifierGenerator
