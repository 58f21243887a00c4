"""Multi-message framing.

An ordered sequence of messages is serialized into the single byte string
that is actually signed and verified. Each message is written as a
big-endian uint64 length followed by its raw bytes, with no separators and
no trailing marker, so ``[b"ab", b"c"]`` and ``[b"a", b"bc"]`` frame
differently. An empty sequence frames to ``b""``.
"""

from __future__ import annotations
import struct
from typing import Iterable, Union

from verse_session_id.constants import FRAME_LENGTH_FORMAT, FRAME_LENGTH_SIZE

Message = Union[bytes, bytearray, memoryview]


def frame_messages(messages: Iterable[Message]) -> bytes:
    """Serialize messages into canonical length-prefixed bytes.

    Raises TypeError for anything that is not bytes-like (including str;
    text must be encoded by the caller).
    """
    if isinstance(messages, (bytes, bytearray, memoryview, str)):
        raise TypeError("messages must be a sequence of byte strings, not a single value")

    parts = []
    for i, msg in enumerate(messages):
        if not isinstance(msg, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Message {i} must be bytes-like, got {type(msg).__name__}"
            )
        data = bytes(msg)
        parts.append(struct.pack(FRAME_LENGTH_FORMAT, len(data)))
        parts.append(data)
    return b"".join(parts)


def unframe_messages(framed: bytes) -> list[bytes]:
    """Split framed bytes back into messages.

    Raises ValueError on a truncated length prefix or message body.
    """
    messages = []
    offset = 0
    while offset < len(framed):
        if len(framed) - offset < FRAME_LENGTH_SIZE:
            raise ValueError(f"Truncated length prefix at offset {offset}")
        length = struct.unpack(FRAME_LENGTH_FORMAT, framed[offset:offset + FRAME_LENGTH_SIZE])[0]
        offset += FRAME_LENGTH_SIZE

        if len(framed) - offset < length:
            raise ValueError(
                f"Message length mismatch: expected {length}, got {len(framed) - offset}"
            )
        messages.append(bytes(framed[offset:offset + length]))
        offset += length
    return messages
