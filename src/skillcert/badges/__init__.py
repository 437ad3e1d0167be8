"""Badge artifacts: SVG badges and shields.io endpoint bundles."""

from skillcert.badges.svg import BADGE_STYLES, render_svg_badge
from skillcert.badges.shields import (
    ScanFailure,
    TargetReport,
    build_repo_certified_endpoint,
    build_repo_certified_percent_endpoint,
    build_skill_endpoint,
    color_for_certified_percent,
    color_for_tier,
    slug_for_target,
    write_badge_bundle,
)

__all__ = [
    "BADGE_STYLES",
    "ScanFailure",
    "TargetReport",
    "build_repo_certified_endpoint",
    "build_repo_certified_percent_endpoint",
    "build_skill_endpoint",
    "color_for_certified_percent",
    "color_for_tier",
    "render_svg_badge",
    "slug_for_target",
    "write_badge_bundle",
]
