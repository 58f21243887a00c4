"""Shared constants for the session ID format.

Changing any value here changes the identity format and is a breaking change.
"""

# Ed25519 key and signature sizes
SESSION_ID_SIZE = 32  # public key
PRIVATE_KEY_SIZE = 32  # seed
SIGNATURE_SIZE = 64

# Signature set layout: signature(64) + public_key(32)
SIGNATURE_SET_SIZE = SIGNATURE_SIZE + SESSION_ID_SIZE

# Multi-message framing: big-endian uint64 length prefix per message
FRAME_LENGTH_FORMAT = "!Q"
FRAME_LENGTH_SIZE = 8

# Debug rendering
DEBUG_STRING_LENGTH = 7
NO_ID_DEBUG_STRING = "<NOID>"

# Config defaults
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_OUTPUT_FORMAT = "text"
DEFAULT_MESSAGE_ENCODING = "utf-8"
OUTPUT_FORMATS = ("text", "json")
