"""SkillCert CLI — Trust scores and signed certificates for agent skills.

Entry point for the ``skillcert`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    score     — Aggregate scanner output into a trust score and badge.
    certify   — Issue a signed certificate for a scanned skill.
    verify    — Verify an attestation token.
    badge     — Render an SVG badge for a scanned skill.
    badges    — Write a shields.io endpoint bundle for many skills.
    adoption  — Score normalised adoption signals.
    pubkey    — Print the attestation public key.
    keygen    — Generate a signing seed for SKILLCERT_SIGNING_KEY.

Usage::

    skillcert score scan.json
    skillcert certify scan.json --content SKILL.md
    skillcert verify <token> --check-expiry
    skillcert badge scan.json -o badge.svg
    skillcert badges scans/*.json --out-dir public/badges
"""

from __future__ import annotations

import logging

import click

from skillcert import __version__
from skillcert.cli.adoption_cmd import adoption_command
from skillcert.cli.badge_cmd import badge_command, badges_command
from skillcert.cli.certify_cmd import certify_command
from skillcert.cli.keys_cmd import keygen_command, pubkey_command
from skillcert.cli.score_cmd import score_command
from skillcert.cli.verify_cmd import verify_command


@click.group()
@click.version_option(version=__version__)
@click.option(
    "-v", "--verbose",
    count=True,
    help="Increase log verbosity (-v info, -vv debug).",
)
def cli(verbose: int) -> None:
    """SkillCert: Trust scores and signed certificates for agent skills.

    Turn scanner findings into a trust score and badge tier, issue
    tamper-evident certificates, and verify them later without a database.
    """
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register all subcommands
cli.add_command(score_command)
cli.add_command(certify_command)
cli.add_command(verify_command)
cli.add_command(badge_command)
cli.add_command(badges_command)
cli.add_command(adoption_command)
cli.add_command(pubkey_command)
cli.add_command(keygen_command)
