"""Adoption scoring from normalised popularity signals.

Submodules:
    models   -- AdoptionSignals, AdoptionScore, AdoptionTier
    scoring  -- calculate_adoption_score and its component scores
"""

from skillcert.core.adoption.models import (
    AdoptionScore,
    AdoptionSignals,
    AdoptionTier,
)
from skillcert.core.adoption.scoring import (
    adoption_tier_from_combined,
    calculate_adoption_score,
    calculate_freshness_score,
    calculate_maturity_score,
    calculate_popularity_score,
)

__all__ = [
    "AdoptionScore",
    "AdoptionSignals",
    "AdoptionTier",
    "adoption_tier_from_combined",
    "calculate_adoption_score",
    "calculate_freshness_score",
    "calculate_maturity_score",
    "calculate_popularity_score",
]
