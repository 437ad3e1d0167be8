"""Trust scoring for scanned agent skills.

This package turns per-category scanner results into a single overall score
and badge tier.

Submodules:
    models      -- Category, Severity, BadgeTier, Finding, CategoryScore,
                   ScanMetadata, TrustReport
    aggregator  -- aggregate_scores, determine_badge, severity_rank
    loader      -- load_scan_result / parse_scan_result for scanner output

All public names are re-exported here so callers can write
``from skillcert.core.scoring import aggregate_scores``.
"""

from skillcert.core.scoring.models import (
    SEVERITY_ORDER,
    BadgeTier,
    Category,
    CategoryScore,
    Finding,
    ScanMetadata,
    Severity,
    TrustReport,
)
from skillcert.core.scoring.aggregator import (
    CATEGORY_WEIGHTS,
    aggregate_scores,
    determine_badge,
    round_half_up,
    severity_rank,
)
from skillcert.core.scoring.loader import load_scan_result, parse_scan_result

__all__ = [
    "CATEGORY_WEIGHTS",
    "SEVERITY_ORDER",
    "BadgeTier",
    "Category",
    "CategoryScore",
    "Finding",
    "ScanMetadata",
    "Severity",
    "TrustReport",
    "aggregate_scores",
    "determine_badge",
    "load_scan_result",
    "parse_scan_result",
    "round_half_up",
    "severity_rank",
]
