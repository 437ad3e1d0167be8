"""``skillcert score <scan-file>`` — Aggregate scanner output into a report.

Reads a scanner result file (JSON, or YAML by suffix), aggregates the
category scores into an overall score and badge tier, and displays the
trust report.

Exit Codes:
    0 — Badge is CERTIFIED or CONDITIONAL.
    1 — Badge is SUSPICIOUS or REJECTED.
    2 — Scan result could not be read or parsed.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from skillcert.core.scoring import (
    BadgeTier,
    TrustReport,
    aggregate_scores,
    load_scan_result,
)
from skillcert.exceptions import ScanInputError

_PASSING_BADGES = frozenset({BadgeTier.CERTIFIED, BadgeTier.CONDITIONAL})


def load_report(scan_file: str, output_format: str) -> TrustReport:
    """Load and aggregate a scan file, exiting with code 2 on bad input.

    Shared by every command that starts from scanner output.
    """
    try:
        categories, metadata = load_scan_result(Path(scan_file))
    except ScanInputError as exc:
        if output_format == "json":
            click.echo(json.dumps({"error": str(exc)}))
        else:
            click.echo(f"Error: {exc}")
        sys.exit(2)
    return aggregate_scores(categories, metadata)


def exit_code_for(report: TrustReport) -> int:
    return 0 if report.badge in _PASSING_BADGES else 1


@click.command("score")
@click.argument("scan_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def score_command(scan_file: str, output_format: str) -> None:
    """Compute the trust score and badge tier for a scanned skill.

    SCAN_FILE is the scanner's JSON or YAML result document.

    Exit code 0 for CERTIFIED/CONDITIONAL, 1 for SUSPICIOUS/REJECTED,
    2 if the file cannot be parsed.
    """
    report = load_report(scan_file, output_format)

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        from skillcert.cli.output import print_trust_report
        print_trust_report(report)

    sys.exit(exit_code_for(report))
