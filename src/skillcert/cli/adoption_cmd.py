"""``skillcert adoption <signals-file>`` — Score adoption signals.

Reads a normalised signals document (JSON or YAML)::

    installs: 1200
    stars: 85
    forks: 12
    last_updated: "2026-02-01T00:00:00Z"
    created_at: "2025-06-01T00:00:00Z"
    source: github

and prints the popularity, freshness, maturity and combined scores.

Exit Codes:
    0 — Score computed.
    2 — Signals file could not be read or parsed.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from skillcert.core.adoption import AdoptionSignals, calculate_adoption_score
from skillcert.core.scoring.models import parse_timestamp
from skillcert.exceptions import ScanInputError


def _optional_time(data: dict[str, Any], *keys: str):
    for key in keys:
        if data.get(key) is not None:
            return parse_timestamp(data[key])
    return None


def load_signals(path: Path) -> AdoptionSignals:
    """Read an ``AdoptionSignals`` record from JSON or YAML.

    Raises:
        ScanInputError: If the file is unreadable or malformed.
    """
    try:
        raw = path.read_text(encoding="utf-8")
        if path.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ScanInputError(f"Cannot read signals {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ScanInputError("Signals document must be a mapping")
    try:
        return AdoptionSignals(
            installs=int(data.get("installs", 0)),
            stars=int(data.get("stars", 0)),
            forks=int(data.get("forks", 0)),
            last_updated=_optional_time(data, "last_updated", "lastUpdated"),
            created_at=_optional_time(data, "created_at", "createdAt"),
            source=str(data.get("source", "unknown")),
        )
    except (TypeError, ValueError) as exc:
        raise ScanInputError(f"Invalid signals in {path}: {exc}") from exc


@click.command("adoption")
@click.argument("signals_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def adoption_command(signals_file: str, output_format: str) -> None:
    """Compute the adoption score for normalised popularity signals."""
    try:
        signals = load_signals(Path(signals_file))
    except ScanInputError as exc:
        if output_format == "json":
            click.echo(json.dumps({"error": str(exc)}))
        else:
            click.echo(f"Error: {exc}")
        sys.exit(2)

    score = calculate_adoption_score(signals)
    if output_format == "json":
        click.echo(json.dumps(score.to_dict(), indent=2))
    else:
        from skillcert.cli.output import print_adoption_score
        print_adoption_score(score)
    sys.exit(0)
