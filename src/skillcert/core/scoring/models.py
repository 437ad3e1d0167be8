"""Scoring data models: categories, severities, findings, and reports.

Defines the core data structures consumed and produced by the aggregator:

- ``Category`` -- the five analysis categories a scan covers.
- ``Severity`` -- five-level finding severity, critical highest.
- ``BadgeTier`` -- the discrete trust tier assigned to a scan.
- ``Finding`` -- one detected issue, immutable once produced.
- ``CategoryScore`` -- per-category score with its findings.
- ``ScanMetadata`` -- descriptive record passed through unchanged.
- ``TrustReport`` -- the aggregated, immutable result of one scan.

The ``from_dict`` constructors accept the JSON shape emitted by the
scanners. They are lenient about descriptive fields and strict about the
fields the aggregator actually reads.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from skillcert.exceptions import ScanInputError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Category(str, Enum):
    """Analysis category a finding or score belongs to."""

    PERMISSIONS = "permissions"
    INJECTION = "injection"
    DEPENDENCIES = "dependencies"
    BEHAVIORAL = "behavioral"
    CONTENT = "content"


class Severity(str, Enum):
    """Finding severity, totally ordered critical > high > medium > low > info.

    The string values match the scanner wire format, so a ``Severity``
    compares equal to its raw string (``Severity.HIGH == "high"``).
    """

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class BadgeTier(str, Enum):
    """Trust tier assigned to a scan result."""

    CERTIFIED = "certified"
    CONDITIONAL = "conditional"
    SUSPICIOUS = "suspicious"
    REJECTED = "rejected"


# Sort rank per severity; lower ranks sort first.
SEVERITY_ORDER: dict[str, int] = {
    Severity.CRITICAL.value: 0,
    Severity.HIGH.value: 1,
    Severity.MEDIUM.value: 2,
    Severity.LOW.value: 3,
    Severity.INFO.value: 4,
}

# Rank given to severities the scanners emit but we do not recognise.
UNKNOWN_SEVERITY_RANK: int = 4


def _coerce_severity(value: Any) -> Severity | str:
    """Return the matching ``Severity``, or the raw string if unrecognised."""
    if isinstance(value, Severity):
        return value
    text = str(value).strip().lower()
    try:
        return Severity(text)
    except ValueError:
        return text


def _coerce_category(value: Any) -> Category | str:
    if isinstance(value, Category):
        return value
    text = str(value).strip().lower()
    try:
        return Category(text)
    except ValueError:
        return text


# ---------------------------------------------------------------------------
# Finding
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Finding:
    """A single security finding produced by a scanner.

    Findings are immutable (frozen). Only ``category`` and ``severity`` are
    interpreted by the aggregator; everything else is descriptive.

    Attributes:
        id: Scanner rule identifier (e.g., "INJ-001").
        category: Category the finding was raised under.
        severity: A ``Severity``, or the raw string when the scanner emitted
            a severity we do not recognise. Unknown severities sort last and
            never count as critical or high.
        title: Short human-readable summary.
        description: Longer explanation of the issue.
        evidence: The text that triggered the finding.
        line_number: 1-based line in the skill file, when known.
        deduction: Points the scanner subtracted from the category score.
        recommendation: Suggested remediation.
        owasp_category: Taxonomy tag (e.g., "ASST-01").
    """

    id: str
    category: Category | str
    severity: Severity | str
    title: str
    description: str = ""
    evidence: str = ""
    line_number: int | None = None
    deduction: float = 0
    recommendation: str = ""
    owasp_category: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Finding:
        """Build a finding from scanner JSON.

        Accepts both snake_case and camelCase keys (``lineNumber``,
        ``owaspCategory``).

        Raises:
            ScanInputError: If ``id``, ``category`` or ``severity`` is missing.
        """
        if not isinstance(data, Mapping):
            raise ScanInputError(
                f"Finding must be an object, got {type(data).__name__}"
            )
        for required in ("id", "category", "severity"):
            if required not in data:
                raise ScanInputError(f"Finding is missing '{required}'")
        line = data.get("line_number", data.get("lineNumber"))
        try:
            line_number = int(line) if line is not None else None
        except (TypeError, ValueError, OverflowError) as exc:
            raise ScanInputError(f"Finding has invalid line number: {line!r}") from exc
        return cls(
            id=str(data["id"]),
            category=_coerce_category(data["category"]),
            severity=_coerce_severity(data["severity"]),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            evidence=str(data.get("evidence", "")),
            line_number=line_number,
            deduction=data.get("deduction", 0),
            recommendation=str(data.get("recommendation", "")),
            owasp_category=str(
                data.get("owasp_category", data.get("owaspCategory", ""))
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict of this finding."""
        entry: dict[str, Any] = {
            "id": self.id,
            "category": _value(self.category),
            "severity": _value(self.severity),
            "title": self.title,
            "description": self.description,
            "evidence": self.evidence,
            "deduction": self.deduction,
            "recommendation": self.recommendation,
            "owasp_category": self.owasp_category,
        }
        if self.line_number is not None:
            entry["line_number"] = self.line_number
        return entry


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


# ---------------------------------------------------------------------------
# CategoryScore
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CategoryScore:
    """Score result for a single analysis category.

    Attributes:
        category: The category this score covers.
        score: Category score in [0, 100].
        findings: Findings raised in this category, in scanner order.
        weight: Weight the scanner reported for this category. Informational
            only; the aggregator always applies its own fixed weights.
        summary: One-line description of the category result.
    """

    category: Category | str
    score: float
    findings: tuple[Finding, ...] = ()
    weight: float = 0.0
    summary: str = ""

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], category: str | None = None
    ) -> CategoryScore:
        """Build a category score from scanner JSON.

        Args:
            data: Object with ``score`` and optional ``findings``, ``weight``,
                ``summary``.
            category: Category name, when the object is keyed by it rather
                than carrying its own ``category`` field.

        Raises:
            ScanInputError: If the score is missing, non-numeric or not finite.
        """
        if not isinstance(data, Mapping):
            raise ScanInputError(
                f"Category score must be an object, got {type(data).__name__}"
            )
        name = category if category is not None else data.get("category")
        if name is None:
            raise ScanInputError("Category score has no category name")
        raw_score = data.get("score")
        if isinstance(raw_score, bool) or not isinstance(raw_score, (int, float)):
            raise ScanInputError(
                f"Category '{name}' score must be numeric, got {raw_score!r}"
            )
        if not math.isfinite(raw_score):
            raise ScanInputError(f"Category '{name}' score must be finite")
        raw_findings = data.get("findings") or []
        if not isinstance(raw_findings, (list, tuple)):
            raise ScanInputError(
                f"Category '{name}' findings must be a list, "
                f"got {type(raw_findings).__name__}"
            )
        findings = tuple(Finding.from_dict(item) for item in raw_findings)
        try:
            weight = float(data.get("weight", 0.0))
        except (TypeError, ValueError) as exc:
            raise ScanInputError(f"Category '{name}' has invalid weight") from exc
        return cls(
            category=_coerce_category(name),
            score=raw_score,
            findings=findings,
            weight=weight,
            summary=str(data.get("summary", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "weight": self.weight,
            "summary": self.summary,
            "findings": [f.to_dict() for f in self.findings],
        }


# ---------------------------------------------------------------------------
# ScanMetadata
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScanMetadata:
    """Metadata about a scan run, passed through the aggregator unchanged.

    Attributes:
        scanned_at: When the scan ran (timezone-aware).
        scanner_version: Version string of the scanner that produced findings.
        duration_ms: Wall-clock scan duration.
        skill_format: Detected skill format ("openclaw", "claude", "generic").
    """

    scanned_at: datetime
    scanner_version: str = "unknown"
    duration_ms: int = 0
    skill_format: str = "generic"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ScanMetadata:
        """Build metadata from scanner JSON; missing fields get defaults.

        ``scanned_at`` (or ``scannedAt``) must be ISO-8601 when present.
        Naive timestamps are taken to be UTC.

        Raises:
            ScanInputError: If the metadata is not an object, the timestamp
                cannot be parsed, or the duration is not an integer.
        """
        data = data or {}
        if not isinstance(data, Mapping):
            raise ScanInputError(
                f"Scan metadata must be an object, got {type(data).__name__}"
            )
        raw = data.get("scanned_at", data.get("scannedAt"))
        if raw is None:
            scanned_at = datetime.now(timezone.utc)
        else:
            scanned_at = parse_timestamp(raw)
        raw_duration = data.get("duration_ms", data.get("durationMs", 0))
        try:
            duration_ms = int(raw_duration)
        except (TypeError, ValueError, OverflowError) as exc:
            raise ScanInputError(
                f"Scan duration must be an integer, got {raw_duration!r}"
            ) from exc
        return cls(
            scanned_at=scanned_at,
            scanner_version=str(
                data.get("scanner_version", data.get("scannerVersion", "unknown"))
            ),
            duration_ms=duration_ms,
            skill_format=str(
                data.get("skill_format", data.get("skillFormat", "generic"))
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "scanned_at": format_timestamp(self.scanned_at),
            "scanner_version": self.scanner_version,
            "duration_ms": self.duration_ms,
            "skill_format": self.skill_format,
        }


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``.

    Raises:
        ScanInputError: If the value is not a valid timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ScanInputError(f"Invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as UTC ISO-8601 with a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat().replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# TrustReport
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TrustReport:
    """Complete, immutable trust report for one scan.

    Attributes:
        overall: Weighted overall score, an integer in [0, 100].
        badge: Badge tier derived from the score and findings.
        categories: The input category mapping, passed through.
        findings: All findings across categories, critical first. Findings of
            equal severity keep their source order.
        metadata: The input scan metadata, passed through.
    """

    overall: int
    badge: BadgeTier
    categories: Mapping[Category | str, CategoryScore]
    findings: tuple[Finding, ...] = field(default_factory=tuple)
    metadata: ScanMetadata | None = None

    @property
    def high_count(self) -> int:
        """Number of findings with severity ``high``."""
        return sum(1 for f in self.findings if f.severity == Severity.HIGH)

    @property
    def has_critical(self) -> bool:
        return any(f.severity == Severity.CRITICAL for f in self.findings)

    def to_dict(self) -> dict[str, Any]:
        """Render the report as a JSON-ready dict.

        The output is deterministic: categories appear in input order and
        findings in report order.
        """
        return {
            "overall": self.overall,
            "badge": self.badge.value,
            "categories": {
                _value(name): score.to_dict()
                for name, score in self.categories.items()
            },
            "findings": [f.to_dict() for f in self.findings],
            "metadata": self.metadata.to_dict() if self.metadata else None,
        }
