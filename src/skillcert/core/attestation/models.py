"""Certificate facts: the signed content of an attestation.

``CertificateFacts`` is the flat record that gets canonicalised and signed.
Its wire keys are fixed; renaming one would break every token already
issued, so ``FACT_FIELDS`` is the single source of truth for them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from skillcert.core.scoring.models import BadgeTier, parse_timestamp
from skillcert.exceptions import CertificateValidationError, ScanInputError

# Required string fields, in declaration order.
_REQUIRED_TEXT: tuple[str, ...] = (
    "skill_id",
    "content_hash",
    "badge",
    "scan_date",
    "certification_id",
    "expires_at",
    "issuer",
)

FACT_FIELDS: tuple[str, ...] = (
    "skill_id",
    "skill_url",
    "content_hash",
    "trust_score",
    "badge",
    "scan_date",
    "certification_id",
    "expires_at",
    "issuer",
)

_BADGE_VALUES = frozenset(tier.value for tier in BadgeTier)


@dataclass(frozen=True)
class CertificateFacts:
    """The certified facts about one scan of one skill.

    Attributes:
        skill_id: Identity of the certified skill.
        content_hash: Hash of the certified artifact ("sha256:<hex>").
        trust_score: Overall trust score, an integer in [0, 100].
        badge: Badge tier value ("certified", "conditional", ...).
        scan_date: ISO-8601 timestamp of the scan.
        certification_id: Unique id of this certificate.
        expires_at: ISO-8601 timestamp after which callers should treat the
            certificate as stale. Verification itself never checks it.
        issuer: Label of the issuing service.
        skill_url: Where the skill was fetched from, if known.
    """

    skill_id: str
    content_hash: str
    trust_score: int
    badge: str
    scan_date: str
    certification_id: str
    expires_at: str
    issuer: str
    skill_url: str | None = None

    def validate(self) -> None:
        """Raise CertificateValidationError if the facts are malformed.

        Rules:
        1. All required text fields are non-empty strings.
        2. ``trust_score`` is an int (not bool) in [0, 100].
        3. ``badge`` is a known badge tier value.
        4. ``scan_date`` and ``expires_at`` parse as ISO-8601.
        5. ``skill_url`` is None or a non-empty string.
        """
        for name in _REQUIRED_TEXT:
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise CertificateValidationError(
                    f"Field '{name}' must be a non-empty string, got {value!r}"
                )
        score = self.trust_score
        if isinstance(score, bool) or not isinstance(score, int):
            raise CertificateValidationError(
                f"Field 'trust_score' must be an integer, got {score!r}"
            )
        if score < 0 or score > 100:
            raise CertificateValidationError(
                f"Field 'trust_score' must be in [0, 100], got {score}"
            )
        if self.badge not in _BADGE_VALUES:
            raise CertificateValidationError(
                f"Field 'badge' must be one of {sorted(_BADGE_VALUES)}, "
                f"got {self.badge!r}"
            )
        for name in ("scan_date", "expires_at"):
            try:
                parse_timestamp(getattr(self, name))
            except ScanInputError as exc:
                raise CertificateValidationError(
                    f"Field '{name}' must be an ISO-8601 timestamp"
                ) from exc
        if self.skill_url is not None and (
            not isinstance(self.skill_url, str) or not self.skill_url.strip()
        ):
            raise CertificateValidationError(
                "Field 'skill_url' must be a non-empty string when present"
            )

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form. ``skill_url`` is omitted when None."""
        data: dict[str, Any] = {}
        for name in FACT_FIELDS:
            value = getattr(self, name)
            if name == "skill_url" and value is None:
                continue
            data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CertificateFacts:
        """Rebuild facts from their wire form.

        Raises:
            CertificateValidationError: If a required field is missing or
                an unknown field is present.
        """
        unknown = set(data) - set(FACT_FIELDS)
        if unknown:
            raise CertificateValidationError(
                f"Unknown certificate fields: {sorted(unknown)}"
            )
        missing = [
            name for name in FACT_FIELDS
            if name != "skill_url" and name not in data
        ]
        if missing:
            raise CertificateValidationError(
                f"Missing certificate fields: {missing}"
            )
        return cls(**{name: data[name] for name in FACT_FIELDS if name in data})

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True if ``expires_at`` is at or before ``now``.

        Args:
            now: Reference time; defaults to the current UTC time.
        """
        current = now or datetime.now(timezone.utc)
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        return parse_timestamp(self.expires_at) <= current

