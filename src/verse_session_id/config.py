"""YAML configuration loading for the verse-session-id CLI."""

from __future__ import annotations
import codecs
import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from verse_session_id.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MESSAGE_ENCODING,
    DEFAULT_OUTPUT_FORMAT,
    OUTPUT_FORMATS,
)

logger = logging.getLogger(__name__)


@dataclass
class OutputConfig:
    format: str = DEFAULT_OUTPUT_FORMAT
    message_encoding: str = DEFAULT_MESSAGE_ENCODING  # text -> bytes for CLI messages


@dataclass
class SessionIdConfig:
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = DEFAULT_LOG_LEVEL


def validate_output(output: OutputConfig) -> None:
    """Raise ValueError for an unknown output format or text encoding."""
    if output.format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Invalid output format '{output.format}': expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    try:
        codecs.lookup(output.message_encoding)
    except LookupError as e:
        raise ValueError(f"Unknown message encoding '{output.message_encoding}'") from e


def load_config(path: Path) -> SessionIdConfig:
    """Load configuration from a YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    config = SessionIdConfig()

    if "output" in raw:
        o = raw["output"] or {}
        config.output = OutputConfig(
            format=o.get("format", DEFAULT_OUTPUT_FORMAT),
            message_encoding=o.get("message_encoding", DEFAULT_MESSAGE_ENCODING),
        )
    validate_output(config.output)

    config.log_level = raw.get("log_level", DEFAULT_LOG_LEVEL)
    logger.debug("Loaded config from %s", path)
    return config
