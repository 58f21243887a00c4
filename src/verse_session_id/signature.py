"""Signature sets: a transportable Ed25519 signature plus the signer's key.

Binary layout is ``signature(64) + public_key(32)``; the text form is the
codec applied to those 96 bytes.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Union

from verse_session_id.codec import TextValue, decode, encode
from verse_session_id.constants import (
    SESSION_ID_SIZE,
    SIGNATURE_SET_SIZE,
    SIGNATURE_SIZE,
)
from verse_session_id.errors import ParseError, SessionIdError
from verse_session_id.session_id import BytesLike, SessionId, check_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True, repr=False)
class SignatureSet(TextValue):
    """Proof that the holder of ``public_key`` signed a framed message set."""

    signature: bytes
    public_key: bytes

    def __post_init__(self):
        object.__setattr__(self, "signature",
                           check_size(self.signature, SIGNATURE_SIZE, "Signature"))
        object.__setattr__(self, "public_key",
                           check_size(self.public_key, SESSION_ID_SIZE, "Public key"))

    @classmethod
    def from_bytes(cls, raw: BytesLike) -> SignatureSet:
        data = check_size(raw, SIGNATURE_SET_SIZE, "Signature set")
        return cls(
            signature=data[:SIGNATURE_SIZE],
            public_key=data[SIGNATURE_SIZE:],
        )

    def to_bytes(self) -> bytes:
        return self.signature + self.public_key

    @property
    def session_id(self) -> SessionId:
        """The claimed signer as a SessionId."""
        return SessionId(self.public_key)

    def __repr__(self) -> str:
        return f"SignatureSet(signer={self.session_id.to_debug_string()})"

    def to_dict(self) -> dict:
        """Structured record form, each field in canonical text."""
        return {
            "signature": encode(self.signature),
            "public_key": encode(self.public_key),
        }

    @classmethod
    def from_dict(cls, data: Any) -> SignatureSet:
        """Inverse of ``to_dict``. Raises DecodeError or ParseError."""
        if not isinstance(data, dict):
            raise ParseError(f"Expected dict, got {type(data).__name__}")
        try:
            signature = data["signature"]
            public_key = data["public_key"]
        except KeyError as e:
            raise ParseError(f"Missing signature set field: {e.args[0]}") from e
        return cls(
            signature=decode(signature, size=SIGNATURE_SIZE),
            public_key=decode(public_key, size=SESSION_ID_SIZE),
        )


def verify_string(session_id: str, signature: str, data: Union[str, bytes]) -> bool:
    """Verify a single-message signature given as wire text.

    Every parse or verification failure collapses to False.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        sid = SessionId.parse(session_id)
        sigset = SignatureSet.parse(signature)
        sid.verify([data], sigset)
    except SessionIdError as e:
        logger.debug("verify_string failed: %s", e)
        return False
    return True
