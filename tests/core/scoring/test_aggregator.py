"""Tests for aggregate_scores: weighting, rounding, ordering, badge tiers.

Validates:
- Weighted overall score with fixed category weights.
- Missing categories contribute zero (no renormalisation).
- Round-half-up and clamping of the overall score.
- Stable severity ordering of consolidated findings.
- Badge precedence, including the exact tier boundaries.
"""

from __future__ import annotations

import pytest

from skillcert.core.scoring import (
    BadgeTier,
    Category,
    CategoryScore,
    Severity,
    aggregate_scores,
    determine_badge,
    round_half_up,
    severity_rank,
)
from tests.helpers import make_finding


def _highs(count: int) -> list:
    return [
        make_finding(Severity.HIGH, Category.PERMISSIONS, f"HIGH-{i}")
        for i in range(count)
    ]


# ===========================================================================
# Weighted overall score
# ===========================================================================


class TestWeightedOverall:
    """Tests for the weighted, clamped, rounded overall score."""

    def test_all_perfect_scores_give_100(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(uniform_categories(100), metadata)
        assert report.overall == 100
        assert report.badge == BadgeTier.CERTIFIED

    def test_weighted_combination(self, metadata) -> None:
        categories = {
            Category.PERMISSIONS: CategoryScore(Category.PERMISSIONS, 80),
            Category.INJECTION: CategoryScore(Category.INJECTION, 60),
            Category.DEPENDENCIES: CategoryScore(Category.DEPENDENCIES, 100),
            Category.BEHAVIORAL: CategoryScore(Category.BEHAVIORAL, 40),
            Category.CONTENT: CategoryScore(Category.CONTENT, 100),
        }
        # 0.25*80 + 0.30*60 + 0.20*100 + 0.15*40 + 0.10*100 = 20+18+20+6+10
        report = aggregate_scores(categories, metadata)
        assert report.overall == 74

    def test_missing_categories_contribute_zero(self, metadata) -> None:
        """An incomplete scan is not renormalised upwards."""
        categories = {
            Category.PERMISSIONS: CategoryScore(Category.PERMISSIONS, 100),
            Category.INJECTION: CategoryScore(Category.INJECTION, 100),
        }
        report = aggregate_scores(categories, metadata)
        assert report.overall == 55
        assert report.badge == BadgeTier.SUSPICIOUS

    def test_empty_input_scores_zero(self, metadata) -> None:
        report = aggregate_scores({}, metadata)
        assert report.overall == 0
        assert report.badge == BadgeTier.REJECTED
        assert report.findings == ()

    def test_string_keys_are_accepted(self, metadata) -> None:
        categories = {
            c.value: CategoryScore(c.value, 100) for c in Category
        }
        assert aggregate_scores(categories, metadata).overall == 100

    def test_unknown_category_weighs_nothing(self, uniform_categories, metadata) -> None:
        categories = dict(uniform_categories(80))
        categories["telemetry"] = CategoryScore("telemetry", 100)
        report = aggregate_scores(categories, metadata)
        assert report.overall == 80
        assert "telemetry" in report.categories

    def test_scores_above_range_are_clamped(self, uniform_categories, metadata) -> None:
        assert aggregate_scores(uniform_categories(250), metadata).overall == 100

    def test_scores_below_range_are_clamped(self, uniform_categories, metadata) -> None:
        assert aggregate_scores(uniform_categories(-40), metadata).overall == 0

    def test_half_rounds_up(self, metadata) -> None:
        """0.25 * 98 = 24.5 must round to 25, not banker's 24."""
        categories = {
            Category.PERMISSIONS: CategoryScore(Category.PERMISSIONS, 98),
        }
        assert aggregate_scores(categories, metadata).overall == 25

    @pytest.mark.parametrize(
        "value, expected",
        [(0.0, 0), (0.49, 0), (0.5, 1), (74.5, 75), (89.5, 90), (2.5, 3)],
    )
    def test_round_half_up(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


# ===========================================================================
# Finding consolidation
# ===========================================================================


class TestFindingOrdering:
    """Consolidated findings are sorted critical-first, stably."""

    def test_critical_first_then_descending(self, metadata) -> None:
        categories = {
            Category.PERMISSIONS: CategoryScore(
                Category.PERMISSIONS, 80,
                (make_finding(Severity.LOW, Category.PERMISSIONS, "LOW-1"),),
            ),
            Category.INJECTION: CategoryScore(
                Category.INJECTION, 50,
                (make_finding(Severity.CRITICAL, Category.INJECTION, "CRIT-1"),),
            ),
            Category.DEPENDENCIES: CategoryScore(Category.DEPENDENCIES, 90),
            Category.BEHAVIORAL: CategoryScore(
                Category.BEHAVIORAL, 90,
                (make_finding(Severity.MEDIUM, Category.BEHAVIORAL, "MED-1"),),
            ),
            Category.CONTENT: CategoryScore(Category.CONTENT, 80),
        }
        report = aggregate_scores(categories, metadata)
        assert [f.id for f in report.findings] == ["CRIT-1", "MED-1", "LOW-1"]

    def test_equal_severity_keeps_source_order(self, metadata) -> None:
        categories = {
            Category.PERMISSIONS: CategoryScore(
                Category.PERMISSIONS, 90,
                (
                    make_finding(Severity.MEDIUM, Category.PERMISSIONS, "A"),
                    make_finding(Severity.HIGH, Category.PERMISSIONS, "B"),
                ),
            ),
            Category.INJECTION: CategoryScore(
                Category.INJECTION, 90,
                (
                    make_finding(Severity.MEDIUM, Category.INJECTION, "C"),
                    make_finding(Severity.HIGH, Category.INJECTION, "D"),
                ),
            ),
        }
        report = aggregate_scores(categories, metadata)
        assert [f.id for f in report.findings] == ["B", "D", "A", "C"]

    def test_unknown_severity_sorts_last_with_info(self, metadata) -> None:
        categories = {
            Category.CONTENT: CategoryScore(
                Category.CONTENT, 100,
                (
                    make_finding(Severity.INFO, Category.CONTENT, "INFO"),
                    make_finding("urgent", Category.CONTENT, "ODD"),
                    make_finding(Severity.CRITICAL, Category.CONTENT, "CRIT"),
                ),
            ),
        }
        report = aggregate_scores(categories, metadata)
        assert [f.id for f in report.findings] == ["CRIT", "INFO", "ODD"]

    @pytest.mark.parametrize(
        "severity, rank",
        [
            (Severity.CRITICAL, 0),
            (Severity.HIGH, 1),
            ("medium", 2),
            (Severity.LOW, 3),
            (Severity.INFO, 4),
            ("bogus", 4),
        ],
    )
    def test_severity_rank(self, severity, rank: int) -> None:
        assert severity_rank(severity) == rank


# ===========================================================================
# Badge determination
# ===========================================================================


class TestBadgeBoundaries:
    """Exact behaviour at the 50 / 75 / 90 score and 2-high boundaries."""

    def test_49_is_rejected(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(uniform_categories(49), metadata)
        assert report.overall == 49
        assert report.badge == BadgeTier.REJECTED

    def test_50_without_highs_is_suspicious(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(uniform_categories(50), metadata)
        assert report.overall == 50
        assert report.badge == BadgeTier.SUSPICIOUS

    def test_74_is_suspicious(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(uniform_categories(74), metadata)
        assert report.overall == 74
        assert report.badge == BadgeTier.SUSPICIOUS

    def test_75_with_two_highs_is_conditional(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(
            uniform_categories(75, {Category.PERMISSIONS: _highs(2)}), metadata
        )
        assert report.overall == 75
        assert report.badge == BadgeTier.CONDITIONAL

    def test_75_with_three_highs_is_suspicious(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(
            uniform_categories(75, {Category.PERMISSIONS: _highs(3)}), metadata
        )
        assert report.overall == 75
        assert report.badge == BadgeTier.SUSPICIOUS

    def test_75_without_highs_is_conditional(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(uniform_categories(75), metadata)
        assert report.badge == BadgeTier.CONDITIONAL

    def test_89_without_highs_is_conditional(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(uniform_categories(89), metadata)
        assert report.overall == 89
        assert report.badge == BadgeTier.CONDITIONAL

    def test_90_without_highs_is_certified(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(uniform_categories(90), metadata)
        assert report.overall == 90
        assert report.badge == BadgeTier.CERTIFIED

    def test_90_with_one_high_is_conditional(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(
            uniform_categories(90, {Category.PERMISSIONS: _highs(1)}), metadata
        )
        assert report.overall == 90
        assert report.badge == BadgeTier.CONDITIONAL

    def test_95_with_three_highs_is_suspicious(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(
            uniform_categories(95, {Category.PERMISSIONS: _highs(3)}), metadata
        )
        assert report.badge == BadgeTier.SUSPICIOUS

    def test_medium_findings_do_not_block_certification(self) -> None:
        findings = [make_finding(Severity.MEDIUM), make_finding(Severity.LOW)]
        assert determine_badge(92, findings) == BadgeTier.CERTIFIED

    def test_unknown_severity_is_not_counted_as_high(self) -> None:
        findings = [make_finding("severe"), make_finding("HIGH!")]
        assert determine_badge(95, findings) == BadgeTier.CERTIFIED


class TestCriticalDominance:
    """Any critical finding rejects, whatever the score."""

    def test_perfect_score_with_critical_is_rejected(
        self, uniform_categories, metadata
    ) -> None:
        report = aggregate_scores(
            uniform_categories(
                100,
                {Category.BEHAVIORAL: [make_finding(Severity.CRITICAL, Category.BEHAVIORAL)]},
            ),
            metadata,
        )
        assert report.overall == 100
        assert report.badge == BadgeTier.REJECTED

    @pytest.mark.parametrize("score", [0, 49, 50, 75, 90, 100])
    def test_determine_badge_with_critical(self, score: int) -> None:
        assert determine_badge(score, [make_finding(Severity.CRITICAL)]) == BadgeTier.REJECTED


class TestReportPassThrough:
    """Metadata and categories are handed through unchanged."""

    def test_metadata_is_passed_through(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(uniform_categories(90), metadata)
        assert report.metadata is metadata

    def test_categories_are_passed_through(self, uniform_categories, metadata) -> None:
        categories = uniform_categories(90)
        report = aggregate_scores(categories, metadata)
        assert report.categories is categories

    def test_report_is_immutable(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(uniform_categories(90), metadata)
        with pytest.raises(AttributeError):
            report.overall = 10  # type: ignore[misc]

    def test_same_input_same_output(self, uniform_categories, metadata) -> None:
        categories = uniform_categories(
            83, {Category.INJECTION: [make_finding(Severity.HIGH)]}
        )
        first = aggregate_scores(categories, metadata)
        second = aggregate_scores(categories, metadata)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_high_count_and_has_critical(self, uniform_categories, metadata) -> None:
        report = aggregate_scores(
            uniform_categories(80, {Category.PERMISSIONS: _highs(2)}), metadata
        )
        assert report.high_count == 2
        assert report.has_critical is False
