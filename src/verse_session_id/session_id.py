"""Session ID: a compact identity wrapping an Ed25519 public key.

Any holder of a ``SessionId`` can check that a ``SignatureSet`` was produced
by the matching private key over a given ordered set of messages.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from verse_session_id.codec import TextValue, encode
from verse_session_id.constants import (
    DEBUG_STRING_LENGTH,
    NO_ID_DEBUG_STRING,
    SESSION_ID_SIZE,
)
from verse_session_id.errors import (
    BadSignature,
    IdentityMismatch,
    ParseError,
    VerifyError,
)
from verse_session_id.framing import Message, frame_messages

if TYPE_CHECKING:
    from verse_session_id.signature import SignatureSet

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


def check_size(raw: BytesLike, size: int, what: str) -> bytes:
    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise ParseError(f"{what} must be bytes-like, got {type(raw).__name__}")
    data = bytes(raw)
    if len(data) != size:
        raise ParseError(f"{what} must be {size} bytes, got {len(data)}")
    return data


def _key_bytes(value: Any) -> bytes:
    if isinstance(value, SessionId):
        return value.key
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"Expected SessionId or bytes-like, got {type(value).__name__}")


def _compare(a: bytes, b: bytes) -> int:
    """Three-way compare; different lengths order by length."""
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    if a == b:
        return 0
    return -1 if a < b else 1


@dataclass(frozen=True, order=True, repr=False)
class SessionId(TextValue):
    """Identity of a peer: its 32-byte Ed25519 public key."""

    key: bytes

    def __post_init__(self):
        object.__setattr__(self, "key", check_size(self.key, SESSION_ID_SIZE, "Session ID"))

    @classmethod
    def from_public_key(cls, public_key: BytesLike) -> SessionId:
        """Wrap a public key. Only the length is checked here."""
        return cls(public_key)

    @classmethod
    def from_bytes(cls, raw: BytesLike) -> SessionId:
        return cls(raw)

    @classmethod
    def zero(cls) -> SessionId:
        return cls(b"\x00" * SESSION_ID_SIZE)

    def to_bytes(self) -> bytes:
        return self.key

    def __bytes__(self) -> bytes:
        return self.key

    def __len__(self) -> int:
        return SESSION_ID_SIZE

    def __repr__(self) -> str:
        return f"SessionId({self.to_debug_string()})"

    def to_debug_string(self) -> str:
        """Short, non-unique prefix of the text form for logs."""
        return self.to_text()[:DEBUG_STRING_LENGTH]

    def cmp_bytes(self, other: Union[SessionId, BytesLike]) -> int:
        """Compare with another ID or raw key bytes (-1, 0 or 1)."""
        return _compare(self.key, _key_bytes(other))

    def eq_bytes(self, other: Union[SessionId, BytesLike]) -> bool:
        return self.cmp_bytes(other) == 0

    # --- Verification ---

    def verify(self, messages: Iterable[Message], sigset: SignatureSet) -> None:
        """Check that ``sigset`` signs ``messages`` under this identity.

        Raises IdentityMismatch if the signature set names another signer,
        BadSignature if the primitive rejects the framed messages.
        """
        if sigset.public_key != self.key:
            logger.debug("Signature from %s rejected for %s: identity mismatch",
                         encode(sigset.public_key)[:DEBUG_STRING_LENGTH],
                         self.to_debug_string())
            raise IdentityMismatch(
                f"Signature set signer does not match session ID {self.to_debug_string()}"
            )

        framed = frame_messages(messages)
        try:
            public_key = Ed25519PublicKey.from_public_bytes(sigset.public_key)
            public_key.verify(sigset.signature, framed)
        except (InvalidSignature, ValueError) as e:
            logger.debug("Signature rejected for %s: bad signature", self.to_debug_string())
            raise BadSignature(
                f"Signature does not match messages for {self.to_debug_string()}"
            ) from e

    def is_valid(self, messages: Iterable[Message], sigset: SignatureSet) -> bool:
        """Boolean form of ``verify``."""
        try:
            self.verify(messages, sigset)
        except VerifyError:
            return False
        return True


def debug_string(value: Union[SessionId, BytesLike, None]) -> str:
    """Debug string for an optional ID or raw key bytes."""
    if value is None:
        return NO_ID_DEBUG_STRING
    return encode(_key_bytes(value))[:DEBUG_STRING_LENGTH]


def to_session_id(value: Union[SessionId, BytesLike, str, None]) -> SessionId:
    """Coerce an ID, raw key bytes or text to a SessionId.

    Raises ParseError for None or wrong-length input, DecodeError for bad text.
    """
    if value is None:
        raise ParseError("Session ID is required")
    if isinstance(value, SessionId):
        return value
    if isinstance(value, str):
        return SessionId.parse(value)
    return SessionId.from_bytes(value)
