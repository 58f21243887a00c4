"""Shared pytest fixtures for verse-session-id tests."""

import pytest

from verse_session_id.pair import SessionIdPair

# RFC 8032 section 7.1, TEST 1
RFC8032_SEED = bytes.fromhex(
    "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
)
RFC8032_PUBLIC = bytes.fromhex(
    "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
)


@pytest.fixture
def pair():
    """A freshly generated key pair."""
    return SessionIdPair.generate()


@pytest.fixture
def other_pair():
    """A second, independent key pair."""
    return SessionIdPair.generate()


@pytest.fixture
def fixed_pair():
    """Deterministic key pair from a published test seed."""
    return SessionIdPair.from_private_bytes(RFC8032_SEED)


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config file and return its path."""
    def _write(text):
        path = tmp_path / "config.yaml"
        path.write_text(text)
        return path
    return _write
