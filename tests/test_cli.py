"""Tests for the verse-session-id CLI."""

import json

import pytest
from click.testing import CliRunner

from verse_session_id.cli import cli, encode_messages
from verse_session_id.pair import SessionIdPair


@pytest.fixture
def runner():
    return CliRunner()


def _sign_json(runner, *messages):
    result = runner.invoke(cli, ["--output", "json", "sign", *messages])
    assert result.exit_code == 0, result.output
    return json.loads(result.output.strip().splitlines()[-1])


class TestEncodeMessages:
    def test_utf8(self):
        assert encode_messages(["héllo", ""], "utf-8") == [b"h\xc3\xa9llo", b""]


class TestSignCommand:
    def test_text_output(self, runner):
        result = runner.invoke(cli, ["sign", "hello"])
        assert result.exit_code == 0, result.output
        assert "Session ID:" in result.output
        assert "Signature:" in result.output

    def test_json_output(self, runner):
        data = _sign_json(runner, "hello", "world")
        assert len(data["session_id"]) == 44
        assert len(data["signature"]) == 128


class TestVerifyCommand:
    def test_verified(self, runner):
        data = _sign_json(runner, "hello", "world")
        result = runner.invoke(cli, [
            "verify", "--id", data["session_id"], "--signature", data["signature"],
            "hello", "world",
        ])
        assert result.exit_code == 0, result.output
        assert "verified" in result.output

    def test_tampered_message(self, runner):
        data = _sign_json(runner, "hello", "world")
        result = runner.invoke(cli, [
            "verify", "--id", data["session_id"], "--signature", data["signature"],
            "hello", "worlds",
        ])
        assert result.exit_code == 1
        assert "Not verified" in result.output

    def test_wrong_id(self, runner):
        data = _sign_json(runner, "hello")
        other = SessionIdPair.generate().get_id().to_text()
        result = runner.invoke(cli, [
            "--output", "json",
            "verify", "--id", other, "--signature", data["signature"], "hello",
        ])
        assert result.exit_code == 1
        assert '"reason": "IdentityMismatch"' in result.output

    def test_invalid_session_id(self, runner):
        data = _sign_json(runner, "hello")
        result = runner.invoke(cli, [
            "verify", "--id", "bogus", "--signature", data["signature"], "hello",
        ])
        assert result.exit_code == 1
        assert "Invalid session ID" in result.output

    def test_invalid_signature(self, runner):
        data = _sign_json(runner, "hello")
        result = runner.invoke(cli, [
            "verify", "--id", data["session_id"], "--signature", data["session_id"], "hello",
        ])
        assert result.exit_code == 1
        assert "Invalid signature" in result.output

    def test_json_parse_failure(self, runner):
        data = _sign_json(runner, "hello")
        result = runner.invoke(cli, [
            "-o", "json",
            "verify", "--id", "bogus", "--signature", data["signature"], "hello",
        ])
        assert result.exit_code == 1
        assert '"reason": "DecodeError"' in result.output

    def test_json_wrong_length(self, runner):
        data = _sign_json(runner, "hello")
        result = runner.invoke(cli, [
            "-o", "json",
            "verify", "--id", data["session_id"], "--signature", data["session_id"], "hello",
        ])
        assert result.exit_code == 1
        assert '"reason": "ParseError"' in result.output

    def test_json_verified(self, runner):
        data = _sign_json(runner, "x")
        result = runner.invoke(cli, [
            "-o", "json",
            "verify", "--id", data["session_id"], "--signature", data["signature"], "x",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output.strip()) == {"verified": True}


class TestInspectCommand:
    def test_session_id(self, runner):
        sid = SessionIdPair.generate().get_id()
        result = runner.invoke(cli, ["inspect", sid.to_text()])
        assert result.exit_code == 0, result.output
        assert "session_id" in result.output
        assert sid.to_debug_string() in result.output

    def test_signature_set(self, runner):
        pair = SessionIdPair.generate()
        sigset = pair.sign([b"x"])
        result = runner.invoke(cli, ["-o", "json", "inspect", sigset.to_text()])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output.strip())
        assert data == {
            "kind": "signature_set",
            "bytes": 96,
            "signer": pair.get_id().to_debug_string(),
        }

    def test_unrecognized_length(self, runner):
        result = runner.invoke(cli, ["inspect", "AAAA"])
        assert result.exit_code == 1
        assert "Unrecognized length" in result.output

    def test_malformed(self, runner):
        result = runner.invoke(cli, ["inspect", "not base64!"])
        assert result.exit_code == 1


class TestConfigOption:
    def test_config_json_output(self, runner, config_file):
        path = config_file("output:\n  format: json\n")
        result = runner.invoke(cli, ["--config", str(path), "sign", "hi"])
        assert result.exit_code == 0, result.output
        assert "session_id" in json.loads(result.output.strip().splitlines()[-1])

    def test_invalid_config(self, runner, config_file):
        path = config_file("output:\n  format: xml\n")
        result = runner.invoke(cli, ["--config", str(path), "sign", "hi"])
        assert result.exit_code != 0
        assert "Invalid output format" in result.output

    def test_unencodable_message(self, runner, config_file):
        path = config_file("output:\n  message_encoding: ascii\n")
        result = runner.invoke(cli, ["--config", str(path), "sign", "héllo"])
        assert result.exit_code == 2
        assert "Cannot encode" in result.output
        assert not isinstance(result.exception, UnicodeEncodeError)

    def test_unencodable_verify_message(self, runner, config_file):
        data = _sign_json(runner, "hello")
        path = config_file("output:\n  message_encoding: ascii\n")
        result = runner.invoke(cli, [
            "--config", str(path),
            "verify", "--id", data["session_id"], "--signature", data["signature"], "héllo",
        ])
        assert result.exit_code == 2
        assert "Cannot encode" in result.output
