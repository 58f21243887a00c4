"""Click CLI for verse-session-id."""

import json as json_mod
import logging
import sys
from pathlib import Path

import click

from verse_session_id.codec import decode
from verse_session_id.config import SessionIdConfig, load_config
from verse_session_id.constants import OUTPUT_FORMATS, SESSION_ID_SIZE, SIGNATURE_SET_SIZE
from verse_session_id.errors import SessionIdError, VerifyError
from verse_session_id.pair import SessionIdPair
from verse_session_id.session_id import SessionId
from verse_session_id.signature import SignatureSet

logger = logging.getLogger(__name__)


class _JsonFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record):
        return json_mod.dumps({
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        })


def setup_logging(level: str, json_log: bool = False) -> None:
    if json_log:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        logging.basicConfig(
            level=getattr(logging, level.upper(), logging.INFO),
            handlers=[handler],
        )
    else:
        logging.basicConfig(
            level=getattr(logging, level.upper(), logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def encode_messages(messages, encoding: str) -> list[bytes]:
    """Encode CLI message arguments to bytes."""
    try:
        return [m.encode(encoding) for m in messages]
    except UnicodeEncodeError as e:
        raise click.BadParameter(
            f"Cannot encode {e.object!r} as {encoding}: {e.reason}",
            param_hint="MESSAGES",
        )


@click.group()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True),
              default=None, help="Path to config YAML file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--json-log", is_flag=True, help="Output logs in structured JSON format")
@click.option("--output", "-o", "output_format", type=click.Choice(OUTPUT_FORMATS),
              default=None, help="Output format (overrides config)")
@click.pass_context
def cli(ctx, config_path, verbose, json_log, output_format):
    """verse-session-id: Ed25519 session IDs and multi-message signatures."""
    ctx.ensure_object(dict)

    if config_path:
        try:
            config = load_config(Path(config_path))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--config")
    else:
        config = SessionIdConfig()

    if verbose:
        config.log_level = "DEBUG"
    if output_format:
        config.output.format = output_format

    setup_logging(config.log_level, json_log=json_log)
    ctx.obj["config"] = config


@cli.command()
@click.argument("messages", nargs=-1)
@click.pass_context
def sign(ctx, messages):
    """Sign MESSAGES with a freshly generated, ephemeral session ID.

    The private key is discarded on exit; only the session ID and the
    signature are printed.
    """
    config = ctx.obj["config"]
    data = encode_messages(messages, config.output.message_encoding)

    pair = SessionIdPair.generate()
    sigset = pair.sign(data)
    logger.info("Signed %d message(s) as %s", len(data), pair.get_id().to_debug_string())

    if config.output.format == "json":
        click.echo(json_mod.dumps({
            "session_id": pair.get_id().to_text(),
            "signature": sigset.to_text(),
        }))
    else:
        click.echo(f"Session ID: {pair.get_id()}")
        click.echo(f"Signature:  {sigset}")


def _fail_verify(config, error, message):
    """Report a verify failure and exit 1; JSON output carries the error kind."""
    if config.output.format == "json":
        click.echo(json_mod.dumps({"verified": False, "reason": type(error).__name__}))
    click.echo(message, err=True)
    sys.exit(1)


@cli.command()
@click.option("--id", "session_id", required=True, help="Session ID (base64)")
@click.option("--signature", "-s", required=True, help="Signature set (base64)")
@click.argument("messages", nargs=-1)
@click.pass_context
def verify(ctx, session_id, signature, messages):
    """Verify that SIGNATURE signs MESSAGES under session ID --id."""
    config = ctx.obj["config"]
    data = encode_messages(messages, config.output.message_encoding)

    try:
        sid = SessionId.parse(session_id)
    except SessionIdError as e:
        _fail_verify(config, e, f"Error: Invalid session ID: {e}")
    try:
        sigset = SignatureSet.parse(signature)
    except SessionIdError as e:
        _fail_verify(config, e, f"Error: Invalid signature: {e}")

    try:
        sid.verify(data, sigset)
    except VerifyError as e:
        _fail_verify(config, e, f"Not verified: {e}")

    if config.output.format == "json":
        click.echo(json_mod.dumps({"verified": True}))
    else:
        click.echo("verified")


@cli.command()
@click.argument("value")
@click.pass_context
def inspect(ctx, value):
    """Report whether VALUE is a session ID or a signature set."""
    config = ctx.obj["config"]

    try:
        raw = decode(value)
    except SessionIdError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if len(raw) == SESSION_ID_SIZE:
        kind, signer = "session_id", SessionId.from_bytes(raw)
    elif len(raw) == SIGNATURE_SET_SIZE:
        kind, signer = "signature_set", SignatureSet.from_bytes(raw).session_id
    else:
        click.echo(f"Error: Unrecognized length: {len(raw)} bytes", err=True)
        sys.exit(1)

    if config.output.format == "json":
        click.echo(json_mod.dumps({
            "kind": kind,
            "bytes": len(raw),
            "signer": signer.to_debug_string(),
        }))
    else:
        click.echo(f"Kind:   {kind}")
        click.echo(f"Bytes:  {len(raw)}")
        click.echo(f"Signer: {signer.to_debug_string()}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
