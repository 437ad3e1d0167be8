"""Adoption data models: normalised popularity signals and their score.

The signals are gathered elsewhere (repository APIs, install-count
services) and arrive here already normalised; this package only scores them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AdoptionTier(str, Enum):
    """How widely a skill is used, from the combined adoption score."""

    WIDELY_USED = "widely_used"
    GAINING_ADOPTION = "gaining_adoption"
    EARLY = "early"
    NOT_ADOPTED = "not_adopted"


@dataclass(frozen=True)
class AdoptionSignals:
    """Normalised adoption signals for one skill.

    Attributes:
        installs: Reported installation count.
        stars: Repository star count (informational).
        forks: Repository fork count (informational).
        last_updated: Time of the most recent update, if known.
        created_at: Time the skill was first published, if known.
        source: Where the signals came from (e.g., "github", "skills.sh").
    """

    installs: int = 0
    stars: int = 0
    forks: int = 0
    last_updated: datetime | None = None
    created_at: datetime | None = None
    source: str = "unknown"


@dataclass(frozen=True)
class AdoptionScore:
    """Computed adoption score.

    Attributes:
        popularity: Install-count score in [0, 100].
        freshness: Recency-of-update score in [0, 100].
        maturity: Age score in [0, 100].
        combined: Weighted, rounded combination in [0, 100].
        tier: Tier derived from ``combined``.
    """

    popularity: int
    freshness: int
    maturity: int
    combined: int
    tier: AdoptionTier

    def to_dict(self) -> dict[str, int | str]:
        return {
            "popularity": self.popularity,
            "freshness": self.freshness,
            "maturity": self.maturity,
            "combined": self.combined,
            "tier": self.tier.value,
        }
