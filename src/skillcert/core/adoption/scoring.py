"""Adoption score computation.

Adoption Score Model:
    combined = round_half_up(clamp(0.40 * P + 0.35 * F + 0.25 * M, 0, 100))

where P (popularity) is a step function of installs, F (freshness) of days
since the last update, and M (maturity) of days since creation. Unknown
dates score zero. Times in the future are treated as "now".
"""

from __future__ import annotations

from datetime import datetime, timezone

from skillcert.core.scoring.aggregator import round_half_up

from .models import AdoptionScore, AdoptionSignals, AdoptionTier

POPULARITY_WEIGHT: float = 0.40
FRESHNESS_WEIGHT: float = 0.35
MATURITY_WEIGHT: float = 0.25

# (minimum installs, score), checked top to bottom
_POPULARITY_STEPS: tuple[tuple[int, int], ...] = (
    (10_000, 100),
    (5_000, 85),
    (2_000, 70),
    (1_000, 55),
    (500, 40),
    (100, 25),
    (10, 10),
)

# (maximum days since update, score); older than the last step scores 5
_FRESHNESS_STEPS: tuple[tuple[int, int], ...] = (
    (7, 100),
    (30, 85),
    (90, 65),
    (180, 40),
    (365, 20),
)
_STALE_SCORE: int = 5

# (age in days strictly below, score); a year or older scores 100
_MATURITY_STEPS: tuple[tuple[int, int], ...] = (
    (7, 5),
    (30, 15),
    (90, 30),
    (180, 50),
    (365, 75),
)
_MATURE_SCORE: int = 100

_SECONDS_PER_DAY: float = 24 * 60 * 60


def _days_between(earlier: datetime, later: datetime) -> float:
    if earlier.tzinfo is None:
        earlier = earlier.replace(tzinfo=timezone.utc)
    if later.tzinfo is None:
        later = later.replace(tzinfo=timezone.utc)
    return max(0.0, (later - earlier).total_seconds()) / _SECONDS_PER_DAY


def adoption_tier_from_combined(combined: int) -> AdoptionTier:
    if combined >= 70:
        return AdoptionTier.WIDELY_USED
    if combined >= 40:
        return AdoptionTier.GAINING_ADOPTION
    if combined >= 10:
        return AdoptionTier.EARLY
    return AdoptionTier.NOT_ADOPTED


def calculate_popularity_score(installs: int) -> int:
    for threshold, score in _POPULARITY_STEPS:
        if installs >= threshold:
            return score
    return 0


def calculate_freshness_score(
    last_updated: datetime | None, now: datetime | None = None
) -> int:
    """Score how recently the skill was updated; None scores 0."""
    if last_updated is None:
        return 0
    days = _days_between(last_updated, now or datetime.now(timezone.utc))
    for limit, score in _FRESHNESS_STEPS:
        if days <= limit:
            return score
    return _STALE_SCORE


def calculate_maturity_score(
    created_at: datetime | None, now: datetime | None = None
) -> int:
    """Score how long the skill has existed; None scores 0."""
    if created_at is None:
        return 0
    days = _days_between(created_at, now or datetime.now(timezone.utc))
    for limit, score in _MATURITY_STEPS:
        if days < limit:
            return score
    return _MATURE_SCORE


def calculate_adoption_score(
    signals: AdoptionSignals, now: datetime | None = None
) -> AdoptionScore:
    """Combine adoption signals into an ``AdoptionScore``.

    Args:
        signals: Normalised adoption signals.
        now: Reference time for freshness and maturity; defaults to the
            current UTC time.
    """
    current = now or datetime.now(timezone.utc)
    popularity = calculate_popularity_score(signals.installs)
    freshness = calculate_freshness_score(signals.last_updated, current)
    maturity = calculate_maturity_score(signals.created_at, current)

    raw = (
        popularity * POPULARITY_WEIGHT
        + freshness * FRESHNESS_WEIGHT
        + maturity * MATURITY_WEIGHT
    )
    combined = round_half_up(max(0.0, min(100.0, raw)))

    return AdoptionScore(
        popularity=popularity,
        freshness=freshness,
        maturity=maturity,
        combined=combined,
        tier=adoption_tier_from_combined(combined),
    )
