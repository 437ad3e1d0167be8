"""Key commands: ``skillcert pubkey`` and ``skillcert keygen``.

``pubkey`` prints the public half of the signing identity that ``certify``
and ``verify`` use. ``keygen`` prints a fresh seed suitable for
``SKILLCERT_SIGNING_KEY``; it is the only way a private seed leaves this
tool, and only on explicit request.
"""

from __future__ import annotations

import json

import click
from nacl.utils import random as random_bytes

from skillcert.config import SEED_LENGTH, SIGNING_KEY_ENV, encode_seed
from skillcert.core.attestation import default_service


@click.command("pubkey")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def pubkey_command(output_format: str) -> None:
    """Print the public key used to verify attestations."""
    key_pair = default_service().get_or_create_key_pair()
    if output_format == "json":
        click.echo(json.dumps({
            "algorithm": "Ed25519",
            "key_id": key_pair.key_id,
            "public_key": key_pair.public_key_b64,
        }, indent=2))
    else:
        click.echo(f"{key_pair.key_id} {key_pair.public_key_b64}")


@click.command("keygen")
def keygen_command() -> None:
    """Print a new random signing seed for SKILLCERT_SIGNING_KEY."""
    click.echo(f"{SIGNING_KEY_ENV}={encode_seed(random_bytes(SEED_LENGTH))}")
