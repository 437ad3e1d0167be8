"""Tests for certificate issuance from a trust report."""

from __future__ import annotations

import hashlib
import uuid
from datetime import datetime, timezone

import pytest

from skillcert.core.attestation import (
    build_facts,
    compute_content_hash,
    issue_certificate,
    verify_attestation,
)
from skillcert.core.scoring import Category, Severity, aggregate_scores
from skillcert.exceptions import CertificateValidationError
from tests.helpers import decode_token, make_finding

_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
_CONTENT = "---\nname: weather\n---\n# Weather skill\n"


@pytest.fixture
def report(uniform_categories, metadata):
    return aggregate_scores(uniform_categories(95), metadata)


class TestContentHash:
    def test_prefixed_sha256(self) -> None:
        expected = hashlib.sha256(_CONTENT.encode("utf-8")).hexdigest()
        assert compute_content_hash(_CONTENT) == f"sha256:{expected}"

    def test_str_and_bytes_agree(self) -> None:
        assert compute_content_hash(_CONTENT) == compute_content_hash(
            _CONTENT.encode("utf-8")
        )


class TestBuildFacts:
    def test_facts_mirror_report(self, report) -> None:
        facts = build_facts(report, _CONTENT, now=_NOW)
        assert facts.trust_score == 95
        assert facts.badge == "certified"
        assert facts.scan_date == "2026-02-06T00:00:00Z"
        assert facts.expires_at == "2027-03-01T12:00:00Z"
        assert facts.issuer == "SkillCert"
        assert facts.skill_url is None

    def test_fresh_identifiers(self, report) -> None:
        first = build_facts(report, _CONTENT, now=_NOW)
        second = build_facts(report, _CONTENT, now=_NOW)
        assert first.certification_id != second.certification_id
        assert first.skill_id != second.skill_id
        uuid.UUID(first.certification_id)

    def test_existing_skill_id_kept(self, report) -> None:
        facts = build_facts(report, _CONTENT, skill_id="weather", now=_NOW)
        assert facts.skill_id == "weather"

    def test_custom_validity_and_issuer(self, report) -> None:
        facts = build_facts(
            report, _CONTENT, validity_days=30, issuer="Acme Registry", now=_NOW
        )
        assert facts.expires_at == "2026-03-31T12:00:00Z"
        assert facts.issuer == "Acme Registry"

    @pytest.mark.parametrize("days", [0, -5])
    def test_non_positive_validity_rejected(self, report, days: int) -> None:
        with pytest.raises(CertificateValidationError):
            build_facts(report, _CONTENT, validity_days=days)

    def test_rejected_reports_can_still_be_attested(
        self, uniform_categories, metadata
    ) -> None:
        rejected = aggregate_scores(
            uniform_categories(
                100, {Category.INJECTION: [make_finding(Severity.CRITICAL)]}
            ),
            metadata,
        )
        facts = build_facts(rejected, _CONTENT, now=_NOW)
        assert facts.badge == "rejected"
        assert facts.trust_score == 100


class TestIssueCertificate:
    def test_certificate_verifies(self, report, service) -> None:
        certificate = issue_certificate(
            report, _CONTENT, skill_id="weather", service=service, now=_NOW
        )
        assert service.verify_attestation(certificate.attestation) is True
        assert service.decode_attestation(certificate.attestation) == certificate.facts

    def test_badge_url(self, report, service) -> None:
        certificate = issue_certificate(
            report, _CONTENT, skill_id="weather", service=service
        )
        assert certificate.badge_url == "/api/v1/skill/weather/badge"

    def test_to_dict(self, report, service) -> None:
        certificate = issue_certificate(report, _CONTENT, service=service)
        data = certificate.to_dict()
        assert data["certification_id"] == certificate.facts.certification_id
        assert data["facts"] == certificate.facts.to_dict()
        assert decode_token(data["attestation"])["data"] == data["facts"]

    def test_defaults_to_process_service(
        self, report, reset_default_service
    ) -> None:
        certificate = issue_certificate(report, _CONTENT)
        assert verify_attestation(certificate.attestation) is True
