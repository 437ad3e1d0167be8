"""Shared fixtures for skillcert tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest

from skillcert.core.attestation import AttestationService, KeyStore
from skillcert.core.attestation import service as service_module
from skillcert.core.scoring import (
    Category,
    CategoryScore,
    Finding,
    ScanMetadata,
)
from tests.helpers import TEST_SEED


@pytest.fixture
def metadata() -> ScanMetadata:
    return ScanMetadata(
        scanned_at=datetime(2026, 2, 6, tzinfo=timezone.utc),
        scanner_version="0.1.0",
        duration_ms=100,
        skill_format="openclaw",
    )


@pytest.fixture
def uniform_categories() -> Callable[..., dict[Category, CategoryScore]]:
    """Factory: every category at the same score, optional extra findings.

    ``findings`` maps a category to the findings it should carry.
    """

    def _build(
        score: float,
        findings: dict[Category, list[Finding]] | None = None,
    ) -> dict[Category, CategoryScore]:
        findings = findings or {}
        return {
            category: CategoryScore(
                category=category,
                score=score,
                findings=tuple(findings.get(category, [])),
            )
            for category in Category
        }

    return _build


@pytest.fixture
def service() -> AttestationService:
    """Attestation service with a fixed, seeded key."""
    return AttestationService(KeyStore(seed=TEST_SEED))


@pytest.fixture
def reset_default_service(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop the process-wide service so it is rebuilt from the environment."""
    monkeypatch.setattr(service_module, "_default_service", None)
