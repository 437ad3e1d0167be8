"""``skillcert verify <token>`` — Verify an attestation token.

Checks the token's signature against the process signing key (configure
``SKILLCERT_SIGNING_KEY`` to verify tokens issued by another process).
With ``--check-expiry`` a correctly signed but expired certificate is also
rejected.

Exit Codes:
    0 — Signature valid (and not expired, when checked).
    1 — Invalid token, or expired with ``--check-expiry``.
"""

from __future__ import annotations

import json
import sys

import click

from skillcert.core.attestation import default_service


@click.command("verify")
@click.argument("token")
@click.option(
    "--check-expiry",
    is_flag=True,
    default=False,
    help="Also reject certificates whose expires_at has passed.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def verify_command(token: str, check_expiry: bool, output_format: str) -> None:
    """Verify the integrity of an attestation TOKEN.

    Pass "-" to read the token from standard input.
    """
    if token == "-":
        token = click.get_text_stream("stdin").read().strip()

    service = default_service()
    valid = service.verify_attestation(token)
    facts = service.decode_attestation(token) if valid else None
    expired = facts.is_expired() if facts is not None else None

    ok = valid and not (check_expiry and expired)

    if output_format == "json":
        click.echo(json.dumps({
            "valid": ok,
            "signature_valid": valid,
            "expired": expired,
            "facts": facts.to_dict() if facts is not None else None,
        }, indent=2))
    else:
        from skillcert.cli.output import print_verification
        print_verification(valid, facts, expired)

    sys.exit(0 if ok else 1)
