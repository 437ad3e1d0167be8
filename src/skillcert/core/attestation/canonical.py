"""Canonical byte encoding of certificate facts.

The attestation signature is computed over bytes, and verification has to
re-derive exactly the same bytes from the decoded token. Relying on
``json.dumps`` defaults for that is fragile, so the encoding is spelled out
here and never delegated to serializer defaults:

- The value is a flat object: string keys, scalar values.
- Keys are emitted in ascending code-point order.
- No whitespace: ``{"a":1,"b":"x"}``.
- Strings are JSON string literals with every non-ASCII character escaped
  as ``\\uXXXX``.
- ``True``/``False``/``None`` become ``true``/``false``/``null``.
- Integers are plain decimal. Finite floats use ``repr`` (the shortest
  string that round-trips), so ``95`` and ``95.0`` encode differently.
- Nested containers, NaN, infinities and any other type are rejected.

The output is always pure ASCII, so the bytes are the UTF-8 encoding too.
"""

from __future__ import annotations

import json
import math
from typing import Any, Mapping

from skillcert.exceptions import CanonicalizationError


def _encode_string(value: str) -> str:
    # json.dumps on a bare str only escapes; it has no ordering concerns.
    return json.dumps(value, ensure_ascii=True)


def _encode_scalar(key: str, value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationError(f"Field '{key}' is not a finite number")
        return repr(value)
    if isinstance(value, str):
        return _encode_string(value)
    raise CanonicalizationError(
        f"Field '{key}' has unsupported type {type(value).__name__}"
    )


def canonical_json(data: Mapping[str, Any]) -> str:
    """Return the canonical text form of a flat mapping.

    Raises:
        CanonicalizationError: If a key is not a string or a value is not a
            supported scalar.
    """
    if not isinstance(data, Mapping):
        raise CanonicalizationError(
            f"Expected a mapping, got {type(data).__name__}"
        )
    for key in data:
        if not isinstance(key, str):
            raise CanonicalizationError(f"Non-string key: {key!r}")
    parts: list[str] = []
    for key in sorted(data):
        parts.append(f"{_encode_string(key)}:{_encode_scalar(key, data[key])}")
    return "{" + ",".join(parts) + "}"


def canonical_bytes(data: Mapping[str, Any]) -> bytes:
    """Return the canonical byte encoding used as signature input."""
    return canonical_json(data).encode("ascii")
