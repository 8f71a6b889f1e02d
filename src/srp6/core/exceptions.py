# srp6/core/exceptions.py
from enum import Enum


class SRP6Error(Exception):
    """Base class for all errors raised by the SRP-6a engine."""


class SRP6ConfigError(SRP6Error, ValueError):
    """Invalid crypto parameters or routine configuration. Never recoverable by retry."""


class SRP6StateError(SRP6Error, RuntimeError):
    """A session step was invoked out of order or on a session that already failed."""


class CauseType(Enum):
    TIMEOUT = "timeout"
    BAD_CREDENTIALS = "bad credentials"


class SRP6AuthError(SRP6Error):
    """Authentication failure. The session that raised it must be discarded."""

    def __init__(self, message: str, cause: CauseType):
        super().__init__(message)
        self.cause = cause

    def __str__(self):
        return f"{self.args[0]} ({self.cause.value})"
