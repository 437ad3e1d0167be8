"""Badge commands: a single SVG badge, or a shields.io endpoint bundle.

``skillcert badge <scan-file>`` renders one SVG badge for a scanned skill.
``skillcert badges <scan-file>... --out-dir DIR`` scores several skills and
writes the static endpoint bundle (repo badges, per-skill badges, index).

Exit Codes:
    0 — Badge(s) written.
    1 — Bundle written but at least one scan file could not be scored.
    2 — Input unreadable (``badge``) or output not writable.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from skillcert.badges import (
    BADGE_STYLES,
    ScanFailure,
    TargetReport,
    render_svg_badge,
    write_badge_bundle,
)
from skillcert.badges.svg import DEFAULT_LABEL
from skillcert.cli.score_cmd import load_report
from skillcert.core.scoring import aggregate_scores, load_scan_result
from skillcert.exceptions import BadgeWriteError, ScanInputError


@click.command("badge")
@click.argument("scan_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--style",
    type=click.Choice(list(BADGE_STYLES)),
    default="flat",
    help="Badge style (default: flat).",
)
@click.option("--label", default=DEFAULT_LABEL, help="Left-hand badge label.")
@click.option(
    "--output", "-o", "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the SVG to this file instead of stdout.",
)
def badge_command(
    scan_file: str, style: str, label: str, output_path: str | None
) -> None:
    """Render an SVG trust badge for a scanned skill."""
    report = load_report(scan_file, "text")
    svg = render_svg_badge(report.overall, report.badge, style=style, label=label)

    if output_path is None:
        click.echo(svg)
        sys.exit(0)

    try:
        Path(output_path).write_text(svg + "\n", encoding="utf-8")
    except OSError as exc:
        click.echo(f"Error: Cannot write badge to {output_path}: {exc}")
        sys.exit(2)
    click.echo(f"Badge written to {output_path}")
    sys.exit(0)


@click.command("badges")
@click.argument(
    "scan_files", nargs=-1, required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False),
    default="badges",
    show_default=True,
    help="Directory to write the endpoint bundle into.",
)
@click.option("--label", default=DEFAULT_LABEL, help="Badge label.")
def badges_command(scan_files: tuple[str, ...], out_dir: str, label: str) -> None:
    """Score SCAN_FILES and write a shields.io endpoint badge bundle."""
    reports: list[TargetReport] = []
    failures: list[ScanFailure] = []
    for scan_file in scan_files:
        try:
            categories, metadata = load_scan_result(Path(scan_file))
        except ScanInputError as exc:
            failures.append(ScanFailure(target=scan_file, error=str(exc)))
            continue
        reports.append(TargetReport(
            target=scan_file, report=aggregate_scores(categories, metadata),
        ))

    try:
        index = write_badge_bundle(reports, failures, Path(out_dir), label=label)
    except BadgeWriteError as exc:
        click.echo(f"Error: {exc}")
        sys.exit(2)

    click.echo(
        f"Wrote badges for {index['total_skills']} skills to {out_dir} "
        f"({index['percent_certified']}% certified, {len(failures)} failed)"
    )
    sys.exit(1 if failures else 0)
