"""Canonical binary <-> text codec shared by session IDs and signature sets.

Text form is standard base64 (RFC 4648 alphabet with ``=`` padding). Parsing
is exact-match only: input is never trimmed or normalized, and text that does
not re-encode to itself is rejected, so every value has a single text form.
"""

from __future__ import annotations
import base64
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from pydantic_core import core_schema

from verse_session_id.errors import DecodeError, ParseError, SessionIdError


def encode(data: bytes) -> str:
    """Encode raw bytes to their canonical text form."""
    return base64.b64encode(bytes(data)).decode("ascii")


def decode(text: Union[str, bytes], size: Optional[int] = None) -> bytes:
    """Decode canonical text back to raw bytes.

    Raises DecodeError if the text is not exactly what ``encode`` produces,
    and ParseError if ``size`` is given and the decoded length differs.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("ascii")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Non-ASCII input: {e}") from e
    if not isinstance(text, str):
        raise DecodeError(f"Expected str, got {type(text).__name__}")

    try:
        raw = base64.b64decode(text, validate=True)
    except ValueError as e:
        raise DecodeError(f"Invalid base64 string {text!r}: {e}") from e

    # b64decode ignores non-zero pad bits; reject anything non-canonical
    if encode(raw) != text:
        raise DecodeError(f"Non-canonical base64 string: {text!r}")

    if size is not None and len(raw) != size:
        raise ParseError(f"Invalid length: {len(raw)} != {size}")
    return raw


class TextValue(ABC):
    """Mixin for fixed-format values that round-trip through the codec.

    Subclasses implement ``from_bytes`` and ``to_bytes``; the mixin supplies
    text parsing/rendering and pydantic field support.
    """

    @classmethod
    @abstractmethod
    def from_bytes(cls, raw: bytes):
        """Build an instance from its fixed-size binary form."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Return the fixed-size binary form."""

    @classmethod
    def parse(cls, text: Union[str, bytes]):
        """Parse the canonical text form. Raises DecodeError or ParseError."""
        return cls.from_bytes(decode(text))

    @classmethod
    def try_parse(cls, text: Any):
        """Parse the canonical text form, returning None for malformed input."""
        try:
            return cls.parse(text)
        except SessionIdError:
            return None

    def to_text(self) -> str:
        return encode(self.to_bytes())

    def __str__(self) -> str:
        return self.to_text()

    @classmethod
    def _coerce(cls, value: Any):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.from_bytes(value)
        raise ValueError(f"Cannot convert {type(value).__name__} to {cls.__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        """Validate from text (or an instance) and serialize to text in JSON mode."""
        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema([
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(cls.parse),
            ]),
            python_schema=core_schema.no_info_plain_validator_function(cls._coerce),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.to_text(), when_used="json",
                return_schema=core_schema.str_schema(),
            ),
        )
