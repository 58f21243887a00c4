"""Session ID key pairs.

A ``SessionIdPair`` owns an Ed25519 private key and signs message sets on
behalf of its ``SessionId``. The private key is never rendered, logged or
serialized; persisting it is the caller's concern.
"""

from __future__ import annotations
import logging
import os
from typing import Iterable

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from verse_session_id.constants import PRIVATE_KEY_SIZE
from verse_session_id.errors import CryptoError
from verse_session_id.framing import Message, frame_messages
from verse_session_id.session_id import BytesLike, SessionId, check_size
from verse_session_id.signature import SignatureSet

logger = logging.getLogger(__name__)


class SessionIdPair:
    """Ed25519 private key plus its cached public key and SessionId."""

    __slots__ = ("_private_key", "_public_key", "_id")

    def __init__(self, private_key: Ed25519PrivateKey):
        self._private_key = private_key
        self._public_key = private_key.public_key().public_bytes(
            Encoding.Raw, PublicFormat.Raw,
        )
        self._id = SessionId(self._public_key)

    @classmethod
    def generate(cls) -> SessionIdPair:
        """Generate a new pair from the OS random source.

        Raises CryptoError if the random source or primitive is unavailable.
        """
        try:
            seed = os.urandom(PRIVATE_KEY_SIZE)
        except (OSError, NotImplementedError) as e:
            raise CryptoError(f"Random source failed: {e}") from e
        pair = cls.from_private_bytes(seed)
        logger.debug("Generated session ID %s", pair.get_id().to_debug_string())
        return pair

    @classmethod
    def from_private_bytes(cls, seed: BytesLike) -> SessionIdPair:
        """Build a pair from caller-supplied 32-byte key material."""
        seed = check_size(seed, PRIVATE_KEY_SIZE, "Private key")
        try:
            private_key = Ed25519PrivateKey.from_private_bytes(seed)
        except (UnsupportedAlgorithm, ValueError) as e:
            raise CryptoError(f"Ed25519 key construction failed: {e}") from e
        return cls(private_key)

    @property
    def public_key(self) -> bytes:
        return self._public_key

    def get_id(self) -> SessionId:
        return self._id

    def sign(self, messages: Iterable[Message]) -> SignatureSet:
        """Frame ``messages`` and sign them with this pair's private key."""
        framed = frame_messages(messages)
        try:
            signature = self._private_key.sign(framed)
        except (UnsupportedAlgorithm, ValueError) as e:
            raise CryptoError(f"Ed25519 signing failed: {e}") from e
        return SignatureSet(signature=signature, public_key=self._public_key)

    def __repr__(self) -> str:
        return f"SessionIdPair(id={self._id.to_debug_string()})"

    def __reduce__(self):
        raise TypeError("SessionIdPair cannot be serialized")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


def new_session_id_pair() -> SessionIdPair:
    """Generate a new SessionIdPair."""
    return SessionIdPair.generate()
