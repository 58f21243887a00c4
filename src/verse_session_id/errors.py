"""Error types for session ID parsing, signing and verification.

All errors derive from ``SessionIdError`` (a ``ValueError``), so callers that
only need "accepted or not" can catch the base class.
"""


class SessionIdError(ValueError):
    """Base class for all session ID errors."""


class DecodeError(SessionIdError):
    """Text is not valid output of the codec (alphabet, padding, canonical form)."""


class ParseError(SessionIdError):
    """Decoded bytes have the wrong length for the target type."""


class CryptoError(SessionIdError):
    """The random source or the signature primitive failed."""


class VerifyError(SessionIdError):
    """A signature set was not accepted for an identity and message set."""


class IdentityMismatch(VerifyError):
    """The signature set names a different signer than the session ID."""


class BadSignature(VerifyError):
    """The signature does not match the framed messages."""
