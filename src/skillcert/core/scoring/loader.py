"""Load scanner output files into category scores and scan metadata.

Scanners emit one document per skill, in JSON or YAML::

    metadata:
      scannedAt: "2026-02-06T00:00:00Z"
      scannerVersion: "0.1.0"
    categories:
      permissions: {score: 95, findings: []}
      injection:   {score: 80, findings: [{id: INJ-1, category: injection,
                                            severity: high, title: ...}]}

``categories`` may also be a list of objects that each carry a
``category`` field. A top-level ``report`` key wrapping the whole document
is unwrapped, so full reports written by the scanners load as well.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from skillcert.exceptions import ScanInputError

from .models import Category, CategoryScore, ScanMetadata

_YAML_SUFFIXES = {".yaml", ".yml"}


def parse_scan_result(
    data: Any,
) -> tuple[dict[str, CategoryScore], ScanMetadata]:
    """Convert a parsed scanner document into aggregator inputs.

    Args:
        data: The decoded JSON/YAML document.

    Returns:
        A ``(categories, metadata)`` pair ready for ``aggregate_scores``.

    Raises:
        ScanInputError: If the document does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise ScanInputError("Scan result must be a mapping at the top level")
    if isinstance(data.get("report"), dict):
        data = data["report"]

    raw_categories = data.get("categories")
    categories: dict[str, CategoryScore] = {}
    if isinstance(raw_categories, dict):
        for name, entry in raw_categories.items():
            score = CategoryScore.from_dict(entry, category=str(name))
            categories[_key(score)] = score
    elif isinstance(raw_categories, list):
        for entry in raw_categories:
            score = CategoryScore.from_dict(entry)
            categories[_key(score)] = score
    else:
        raise ScanInputError("Scan result has no 'categories' section")

    metadata = ScanMetadata.from_dict(data.get("metadata"))
    return categories, metadata


def _key(score: CategoryScore) -> str:
    category = score.category
    return category.value if isinstance(category, Category) else str(category)


def load_scan_result(
    path: Path,
) -> tuple[dict[str, CategoryScore], ScanMetadata]:
    """Read and parse a scanner result file (JSON, or YAML by suffix).

    Raises:
        ScanInputError: If the file cannot be read or parsed.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScanInputError(f"Cannot read scan result {path}: {exc}") from exc

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ScanInputError(f"Cannot parse scan result {path}: {exc}") from exc

    return parse_scan_result(data)
