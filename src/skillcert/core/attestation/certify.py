"""Certificate issuance: turn a TrustReport into signed certificate facts.

Issuance binds a report to the exact skill content it was computed from
(via a SHA-256 content hash), stamps fresh identifiers and an expiry, and
signs the result. The returned ``Certificate`` is what an API layer hands
back to the submitter; nothing here is persisted.
"""

from __future__ import annotations

import hashlib
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from skillcert import DEFAULT_ISSUER
from skillcert.core.scoring.models import TrustReport, format_timestamp
from skillcert.exceptions import CertificateValidationError

from .models import CertificateFacts
from .service import AttestationService, default_service

DEFAULT_VALIDITY_DAYS: int = 365

BADGE_URL_TEMPLATE: str = "/api/v1/skill/{skill_id}/badge"


@dataclass(frozen=True)
class Certificate:
    """A freshly issued certificate.

    Attributes:
        facts: The signed facts.
        attestation: The opaque attestation token over ``facts``.
        badge_url: Relative URL at which the skill's badge is served.
    """

    facts: CertificateFacts
    attestation: str
    badge_url: str

    def to_dict(self) -> dict:
        return {
            "certification_id": self.facts.certification_id,
            "skill_id": self.facts.skill_id,
            "facts": self.facts.to_dict(),
            "attestation": self.attestation,
            "badge_url": self.badge_url,
        }


def compute_content_hash(content: str | bytes) -> str:
    """Return the ``sha256:<64-hex>`` hash of skill content."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return f"sha256:{hashlib.sha256(content).hexdigest()}"


def build_facts(
    report: TrustReport,
    content: str | bytes,
    *,
    skill_id: str | None = None,
    skill_url: str | None = None,
    issuer: str = DEFAULT_ISSUER,
    validity_days: int = DEFAULT_VALIDITY_DAYS,
    now: datetime | None = None,
) -> CertificateFacts:
    """Assemble certificate facts for a report without signing them.

    Args:
        report: The aggregated trust report.
        content: The exact skill content that was scanned.
        skill_id: Existing skill identity; a UUID4 is minted when None.
        skill_url: Source URL of the skill, if it was fetched.
        issuer: Issuer label.
        validity_days: Days until the certificate expires. Must be positive.
        now: Issuance time; defaults to the current UTC time.

    Raises:
        CertificateValidationError: If ``validity_days`` is not positive or
            the resulting facts are malformed.
    """
    if validity_days <= 0:
        raise CertificateValidationError(
            f"validity_days must be positive, got {validity_days}"
        )
    issued_at = now or datetime.now(timezone.utc)
    scanned_at = report.metadata.scanned_at if report.metadata else issued_at

    facts = CertificateFacts(
        skill_id=skill_id or str(uuid.uuid4()),
        skill_url=skill_url,
        content_hash=compute_content_hash(content),
        trust_score=report.overall,
        badge=report.badge.value,
        scan_date=format_timestamp(scanned_at),
        certification_id=str(uuid.uuid4()),
        expires_at=format_timestamp(issued_at + timedelta(days=validity_days)),
        issuer=issuer,
    )
    facts.validate()
    return facts


def issue_certificate(
    report: TrustReport,
    content: str | bytes,
    *,
    skill_id: str | None = None,
    skill_url: str | None = None,
    issuer: str = DEFAULT_ISSUER,
    validity_days: int = DEFAULT_VALIDITY_DAYS,
    now: datetime | None = None,
    service: AttestationService | None = None,
) -> Certificate:
    """Build and sign a certificate for a trust report.

    See :func:`build_facts` for the arguments. ``service`` defaults to the
    process-wide attestation service.
    """
    facts = build_facts(
        report,
        content,
        skill_id=skill_id,
        skill_url=skill_url,
        issuer=issuer,
        validity_days=validity_days,
        now=now,
    )
    signer = service or default_service()
    token = signer.create_attestation(facts)
    return Certificate(
        facts=facts,
        attestation=token,
        badge_url=BADGE_URL_TEMPLATE.format(skill_id=facts.skill_id),
    )
