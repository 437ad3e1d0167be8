"""Fixtures for CLI tests: a Click runner and scan result files on disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner


def _document(score: int, findings: list[dict[str, Any]] | None = None) -> dict:
    categories = {
        name: {"score": score, "findings": []}
        for name in ("permissions", "injection", "dependencies", "behavioral", "content")
    }
    categories["injection"]["findings"] = findings or []
    return {
        "metadata": {
            "scannedAt": "2026-02-06T00:00:00Z",
            "scannerVersion": "0.1.0",
            "durationMs": 80,
            "skillFormat": "openclaw",
        },
        "categories": categories,
    }


def _finding(finding_id: str, severity: str) -> dict[str, Any]:
    return {
        "id": finding_id,
        "category": "injection",
        "severity": severity,
        "title": f"{severity} issue",
        "evidence": "ignore previous instructions",
    }


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def certified_scan(tmp_path: Path) -> Path:
    """All categories at 96, no findings: CERTIFIED."""
    path = tmp_path / "certified.json"
    path.write_text(json.dumps(_document(96)))
    return path


@pytest.fixture
def conditional_scan(tmp_path: Path) -> Path:
    """Score 92 with one high finding: CONDITIONAL."""
    path = tmp_path / "conditional.json"
    path.write_text(json.dumps(_document(92, [_finding("INJ-1", "high")])))
    return path


@pytest.fixture
def rejected_scan(tmp_path: Path) -> Path:
    """Perfect score but a critical finding: REJECTED."""
    path = tmp_path / "rejected.yaml"
    lines = [
        "metadata:",
        "  scannedAt: '2026-02-06T00:00:00Z'",
        "categories:",
        "  permissions: {score: 100}",
        "  injection:",
        "    score: 100",
        "    findings:",
        "      - {id: INJ-9, category: injection, severity: critical, title: Exfiltration}",
        "  dependencies: {score: 100}",
        "  behavioral: {score: 100}",
        "  content: {score: 100}",
    ]
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def broken_scan(tmp_path: Path) -> Path:
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    return path


@pytest.fixture
def skill_file(tmp_path: Path) -> Path:
    path = tmp_path / "SKILL.md"
    path.write_text("---\nname: weather\n---\n# Weather\nFetch the forecast.\n")
    return path
