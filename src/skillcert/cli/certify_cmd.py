"""``skillcert certify <scan-file>`` — Issue a signed certificate.

Aggregates the scanner output, hashes the skill content it was computed
from, and signs the resulting certificate facts with the process signing
key. Set ``SKILLCERT_SIGNING_KEY`` to sign with a stable key; otherwise the
key is ephemeral and the token only verifies inside this process.

Exit Codes:
    0 — Certificate issued.
    2 — Scan result or skill content could not be read, or the
        certificate facts are invalid.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn

import click

from skillcert import DEFAULT_ISSUER
from skillcert.cli.score_cmd import load_report
from skillcert.config import ISSUER_ENV
from skillcert.core.attestation import issue_certificate
from skillcert.core.attestation.certify import DEFAULT_VALIDITY_DAYS
from skillcert.exceptions import CertificateValidationError


def _fail(message: str, output_format: str) -> NoReturn:
    if output_format == "json":
        click.echo(json.dumps({"error": message}))
    else:
        click.echo(f"Error: {message}")
    sys.exit(2)


@click.command("certify")
@click.argument("scan_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--content", "content_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="The skill file the scan was run against.",
)
@click.option("--skill-id", default=None, help="Existing skill id (default: new UUID).")
@click.option("--skill-url", default=None, help="Source URL of the skill.")
@click.option(
    "--issuer",
    default=DEFAULT_ISSUER,
    envvar=ISSUER_ENV,
    show_default=True,
    help="Issuer label written into the certificate.",
)
@click.option(
    "--validity-days",
    type=click.IntRange(min=1),
    default=DEFAULT_VALIDITY_DAYS,
    show_default=True,
    help="Days until the certificate expires.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def certify_command(
    scan_file: str,
    content_path: str,
    skill_id: str | None,
    skill_url: str | None,
    issuer: str,
    validity_days: int,
    output_format: str,
) -> None:
    """Issue a signed certificate for a scanned skill.

    SCAN_FILE is the scanner result; --content is the exact skill file
    that was scanned (its SHA-256 is bound into the certificate).
    """
    report = load_report(scan_file, output_format)

    try:
        content = Path(content_path).read_bytes()
    except OSError as exc:
        _fail(f"Cannot read skill content {content_path}: {exc}", output_format)

    try:
        certificate = issue_certificate(
            report,
            content,
            skill_id=skill_id,
            skill_url=skill_url,
            issuer=issuer,
            validity_days=validity_days,
        )
    except CertificateValidationError as exc:
        _fail(str(exc), output_format)

    if output_format == "json":
        data = certificate.to_dict()
        data["report"] = report.to_dict()
        click.echo(json.dumps(data, indent=2))
    else:
        from skillcert.cli.output import print_certificate, print_trust_report
        print_trust_report(report)
        print_certificate(certificate)

    sys.exit(0)
