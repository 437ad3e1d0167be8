"""Helpers shared across test modules."""

from __future__ import annotations

import base64
import json
from typing import Any

from skillcert.core.scoring import Category, Finding, Severity

# Fixed 32-byte seeds so signing tests are reproducible.
TEST_SEED = bytes(range(32))
OTHER_SEED = bytes(range(32, 64))


def make_finding(
    severity: Severity | str,
    category: Category | str = Category.INJECTION,
    finding_id: str | None = None,
) -> Finding:
    """Build a finding with throwaway descriptive fields."""
    sev = severity.value if isinstance(severity, Severity) else severity
    cat = category.value if isinstance(category, Category) else category
    return Finding(
        id=finding_id or f"{cat.upper()}-{sev.upper()}",
        category=category,
        severity=severity,
        title=f"{sev} test finding",
        description="Test",
        evidence="test",
        deduction=5,
        recommendation="fix",
        owasp_category="ASST-01",
    )


def decode_token(token: str) -> dict[str, Any]:
    """Decode an attestation token's envelope without verifying it."""
    padded = token + "=" * (-len(token) % 4)
    return json.loads(base64.urlsafe_b64decode(padded).decode("utf-8"))


def encode_token(envelope: dict[str, Any]) -> str:
    """Re-encode an envelope the way the service does."""
    raw = json.dumps(envelope, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
