"""Shields.io endpoint badges for scanned repositories.

Produces the JSON documents consumed by ``https://img.shields.io/endpoint``
for a batch of scanned skills, and writes them out as a static bundle::

    <out>/repo-certified.json       -- CERTIFIED / NOT CERTIFIED
    <out>/repo-certified-pct.json   -- "Certified NN%"
    <out>/skills/<slug>.json        -- per-skill tier and score
    <out>/skills/index.json         -- summary of the whole batch

All JSON is written with sorted keys and a trailing newline, so re-running
over the same results only changes ``generated_at``.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from skillcert.core.scoring.aggregator import round_half_up
from skillcert.core.scoring.models import BadgeTier, TrustReport, format_timestamp
from skillcert.exceptions import BadgeWriteError

from .svg import DEFAULT_LABEL

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SECONDS: int = 3600

_TIER_COLORS: dict[BadgeTier, str] = {
    BadgeTier.CERTIFIED: "brightgreen",
    BadgeTier.CONDITIONAL: "yellow",
    BadgeTier.SUSPICIOUS: "orange",
    BadgeTier.REJECTED: "red",
}

_SEPARATORS_RE = re.compile(r"/+")
_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9._-]")


@dataclass(frozen=True)
class TargetReport:
    """A trust report for one scan target (usually a SKILL.md path)."""

    target: str
    report: TrustReport


@dataclass(frozen=True)
class ScanFailure:
    """A scan target that could not be scored."""

    target: str
    error: str


def slug_for_target(target: str) -> str:
    """Return a filesystem- and URL-safe slug for a target path.

    Path separators (either kind, repeated or not) become ``--``; every
    other character outside ``[a-zA-Z0-9._-]`` becomes ``_``. Keeping the
    two replacements distinct avoids collisions such as
    ``skills/my skill/SKILL.md`` versus ``skills/my/skill/SKILL.md``.
    """
    normalized = target.replace("\\", "/")
    dashed = _SEPARATORS_RE.sub("--", normalized)
    return _UNSAFE_RE.sub("_", dashed)


def color_for_tier(tier: BadgeTier | str) -> str:
    try:
        return _TIER_COLORS[BadgeTier(tier)]
    except ValueError:
        return "lightgrey"


def color_for_certified_percent(percent: float) -> str:
    if not math.isfinite(percent):
        return "lightgrey"
    if percent >= 90:
        return "brightgreen"
    if percent >= 75:
        return "green"
    if percent >= 50:
        return "yellow"
    return "orange"


def _endpoint(
    label: str, message: str, color: str, cache_seconds: int
) -> dict[str, Any]:
    return {
        "schemaVersion": 1,
        "label": label,
        "message": message,
        "color": color,
        "cacheSeconds": cache_seconds,
    }


def build_skill_endpoint(
    item: TargetReport,
    label: str = DEFAULT_LABEL,
    cache_seconds: int = DEFAULT_CACHE_SECONDS,
) -> dict[str, Any]:
    """Endpoint JSON for a single skill: ``CERTIFIED (97/100)``."""
    tier = item.report.badge
    message = f"{tier.value.upper()} ({item.report.overall}/100)"
    return _endpoint(label, message, color_for_tier(tier), cache_seconds)


def build_repo_certified_endpoint(
    reports: Sequence[TargetReport],
    failures: Sequence[ScanFailure],
    label: str = DEFAULT_LABEL,
    cache_seconds: int = DEFAULT_CACHE_SECONDS,
) -> dict[str, Any]:
    """Endpoint JSON that is green only if every skill is certified.

    Any failure, or any non-certified skill, yields ``NOT CERTIFIED``.
    """
    if not reports and not failures:
        return _endpoint(label, "No skills found", "lightgrey", cache_seconds)
    all_certified = (
        len(reports) > 0
        and not failures
        and all(r.report.badge == BadgeTier.CERTIFIED for r in reports)
    )
    if all_certified:
        return _endpoint(label, "CERTIFIED", "brightgreen", cache_seconds)
    return _endpoint(label, "NOT CERTIFIED", "red", cache_seconds)


def certified_percent(reports: Sequence[TargetReport]) -> int:
    if not reports:
        return 0
    certified = sum(1 for r in reports if r.report.badge == BadgeTier.CERTIFIED)
    return round_half_up(certified / len(reports) * 100)


def build_repo_certified_percent_endpoint(
    reports: Sequence[TargetReport],
    failures: Sequence[ScanFailure],
    label: str = DEFAULT_LABEL,
    cache_seconds: int = DEFAULT_CACHE_SECONDS,
) -> dict[str, Any]:
    """Endpoint JSON with the share of certified skills."""
    if failures:
        return _endpoint(label, "Scan failed", "red", cache_seconds)
    if not reports:
        return _endpoint(label, "No skills found", "lightgrey", cache_seconds)
    percent = certified_percent(reports)
    return _endpoint(
        label,
        f"Certified {percent}%",
        color_for_certified_percent(percent),
        cache_seconds,
    )


def _write_json(path: Path, data: Any) -> None:
    path.write_text(
        json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8"
    )


def write_badge_bundle(
    reports: Sequence[TargetReport],
    failures: Sequence[ScanFailure],
    out_dir: Path,
    label: str = DEFAULT_LABEL,
    cache_seconds: int = DEFAULT_CACHE_SECONDS,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Write the full badge bundle and return the index document.

    Args:
        reports: Successfully scored targets.
        failures: Targets that could not be scored.
        out_dir: Output directory; created if missing.
        label: Left-hand badge label.
        cache_seconds: ``cacheSeconds`` for every endpoint.
        now: Timestamp recorded in the index; defaults to current UTC time.

    Raises:
        BadgeWriteError: If a directory or file cannot be written. The
            message names the path that failed.
    """
    skills_dir = out_dir / "skills"
    try:
        skills_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BadgeWriteError(
            f"Failed to create badge output directory '{skills_dir}': {exc}"
        ) from exc

    try:
        _write_json(
            out_dir / "repo-certified.json",
            build_repo_certified_endpoint(reports, failures, label, cache_seconds),
        )
        _write_json(
            out_dir / "repo-certified-pct.json",
            build_repo_certified_percent_endpoint(
                reports, failures, label, cache_seconds
            ),
        )
    except OSError as exc:
        raise BadgeWriteError(
            f"Failed to write repo badge files to '{out_dir}': {exc}"
        ) from exc

    skills: list[dict[str, Any]] = []
    for item in reports:
        slug = slug_for_target(item.target)
        skills.append({
            "target": item.target,
            "slug": slug,
            "overall": item.report.overall,
            "badge": item.report.badge.value,
        })
        try:
            _write_json(
                skills_dir / f"{slug}.json",
                build_skill_endpoint(item, label, cache_seconds),
            )
        except OSError as exc:
            raise BadgeWriteError(
                f"Failed to write skill badge for '{item.target}' "
                f"(slug: {slug}): {exc}"
            ) from exc

    certified = sum(1 for r in reports if r.report.badge == BadgeTier.CERTIFIED)
    index = {
        "generated_at": format_timestamp(now or datetime.now(timezone.utc)),
        "total_skills": len(reports),
        "certified_skills": certified,
        "percent_certified": certified_percent(reports),
        "failures": [{"target": f.target, "error": f.error} for f in failures],
        "skills": skills,
    }
    index_path = skills_dir / "index.json"
    try:
        _write_json(index_path, index)
    except OSError as exc:
        raise BadgeWriteError(
            f"Failed to write badge index to '{index_path}': {exc}"
        ) from exc

    logger.info(
        "Wrote badge bundle for %d skills (%d failures) to %s",
        len(reports), len(failures), out_dir,
    )
    return index
