"""Score aggregation: category scores and findings into a TrustReport.

Overall Score Model:
    overall = round_half_up(clamp(sum(score_c * w_c for c in present), 0, 100))

    with fixed weights permissions=0.25, injection=0.30, dependencies=0.20,
    behavioral=0.15, content=0.10. Categories missing from the input
    contribute zero and the remaining weights are NOT renormalised, so an
    incomplete scan can never reach the full 100.

Badge Rules (first match wins):
    1. Any critical finding            -> REJECTED (regardless of score)
    2. overall < 50                    -> REJECTED
    3. overall < 75                    -> SUSPICIOUS
    4. overall < 90 and high <= 2      -> CONDITIONAL
    5. overall >= 90 and high == 0     -> CERTIFIED
    6. otherwise: high > 2 -> SUSPICIOUS, high > 0 -> CONDITIONAL,
       else CERTIFIED

The aggregator is a pure function: no I/O, no shared state, no error path.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from .models import (
    SEVERITY_ORDER,
    UNKNOWN_SEVERITY_RANK,
    BadgeTier,
    Category,
    CategoryScore,
    Finding,
    ScanMetadata,
    Severity,
    TrustReport,
)

CATEGORY_WEIGHTS: dict[Category, float] = {
    Category.PERMISSIONS: 0.25,
    Category.INJECTION: 0.30,
    Category.DEPENDENCIES: 0.20,
    Category.BEHAVIORAL: 0.15,
    Category.CONTENT: 0.10,
}

SCORE_MIN: int = 0
SCORE_MAX: int = 100

REJECTED_BELOW: int = 50
SUSPICIOUS_BELOW: int = 75
CERTIFIED_FROM: int = 90
MAX_HIGH_FOR_CONDITIONAL: int = 2


def severity_rank(severity: Any) -> int:
    """Return the sort rank of a severity (critical=0 ... info=4).

    Unknown severities rank with ``info`` so they sort last.
    """
    key = severity.value if isinstance(severity, Severity) else str(severity)
    return SEVERITY_ORDER.get(key, UNKNOWN_SEVERITY_RANK)


def category_weight(category: Any) -> float:
    """Return the fixed weight for a category, 0.0 if unrecognised."""
    try:
        return CATEGORY_WEIGHTS[Category(category)]
    except ValueError:
        return 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's built-in ``round`` uses banker's rounding (``round(74.5) == 74``),
    which would move badge boundaries, so it is not used here.
    """
    return int(math.floor(value + 0.5))


def weighted_overall(categories: Mapping[Any, CategoryScore]) -> int:
    """Compute the clamped, rounded weighted overall score."""
    total = 0.0
    for name, result in categories.items():
        total += result.score * category_weight(name)
    total = max(float(SCORE_MIN), min(float(SCORE_MAX), total))
    return round_half_up(total)


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Stable-sort findings by severity, critical first."""
    return sorted(findings, key=lambda f: severity_rank(f.severity))


def determine_badge(score: int, findings: Iterable[Finding]) -> BadgeTier:
    """Determine the badge tier from the overall score and findings.

    The checks run in a fixed precedence order; see the module docstring.
    Only findings whose severity is exactly ``critical`` or ``high`` count
    towards those rules.

    Args:
        score: Overall score in [0, 100].
        findings: All findings of the scan.

    Returns:
        The ``BadgeTier`` for this result.
    """
    items = list(findings)
    has_critical = any(f.severity == Severity.CRITICAL for f in items)
    high_count = sum(1 for f in items if f.severity == Severity.HIGH)

    if has_critical:
        return BadgeTier.REJECTED

    if score < REJECTED_BELOW:
        return BadgeTier.REJECTED
    if score < SUSPICIOUS_BELOW:
        return BadgeTier.SUSPICIOUS
    if score < CERTIFIED_FROM and high_count <= MAX_HIGH_FOR_CONDITIONAL:
        return BadgeTier.CONDITIONAL
    if score >= CERTIFIED_FROM and high_count == 0:
        return BadgeTier.CERTIFIED

    # High score, but too many high findings
    if high_count > MAX_HIGH_FOR_CONDITIONAL:
        return BadgeTier.SUSPICIOUS
    if high_count > 0:
        return BadgeTier.CONDITIONAL
    return BadgeTier.CERTIFIED


def aggregate_scores(
    categories: Mapping[Any, CategoryScore],
    metadata: ScanMetadata | None,
) -> TrustReport:
    """Aggregate category scores into a complete ``TrustReport``.

    Args:
        categories: Category score per category. Keys may be ``Category``
            members or their string values. Missing categories contribute
            zero; unrecognised ones are carried through but weigh nothing.
        metadata: Scan metadata, passed through unchanged.

    Returns:
        The aggregated, immutable report.
    """
    overall = weighted_overall(categories)

    all_findings: list[Finding] = []
    for result in categories.values():
        all_findings.extend(result.findings)
    ordered = tuple(sort_findings(all_findings))

    badge = determine_badge(overall, ordered)

    return TrustReport(
        overall=overall,
        badge=badge,
        categories=categories,
        findings=ordered,
        metadata=metadata,
    )
