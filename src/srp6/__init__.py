"""SRP-6a password-authenticated key exchange."""

__version__ = '0.1.0'
