"""Environment-driven settings for SkillCert.

Only two knobs exist, both read from the process environment:

- ``SKILLCERT_SIGNING_KEY`` -- URL-safe base64 of a 32-byte Ed25519 seed.
  When set, the process signing key is derived from it, so attestations
  stay verifiable across restarts. When unset, a fresh key is generated on
  first use and lives only as long as the process.
- ``SKILLCERT_ISSUER`` -- issuer label written into new certificates.
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
from dataclasses import dataclass, field

from skillcert import DEFAULT_ISSUER

logger = logging.getLogger(__name__)

SIGNING_KEY_ENV: str = "SKILLCERT_SIGNING_KEY"
ISSUER_ENV: str = "SKILLCERT_ISSUER"

SEED_LENGTH: int = 32


def decode_seed(value: str) -> bytes | None:
    """Decode a URL-safe base64 signing seed.

    Padding is optional. Returns None (after logging a warning) when the
    value contains characters outside the URL-safe alphabet or does not
    decode to exactly 32 bytes.

    Args:
        value: The encoded seed, typically from the environment.

    Returns:
        The raw 32-byte seed, or None if the value is unusable.
    """
    text = value.strip()
    if "+" in text or "/" in text:
        logger.warning("%s is not URL-safe base64; ignoring it", SIGNING_KEY_ENV)
        return None
    padded = text + "=" * (-len(text) % 4)
    # validate=True only exists for the standard alphabet
    standard = padded.replace("-", "+").replace("_", "/")
    try:
        seed = base64.b64decode(standard.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError):
        logger.warning("%s is not valid base64; ignoring it", SIGNING_KEY_ENV)
        return None
    if len(seed) != SEED_LENGTH:
        logger.warning(
            "%s must decode to %d bytes, got %d; ignoring it",
            SIGNING_KEY_ENV, SEED_LENGTH, len(seed),
        )
        return None
    return seed


def encode_seed(seed: bytes) -> str:
    """Encode a raw seed the way ``SKILLCERT_SIGNING_KEY`` expects it."""
    return base64.urlsafe_b64encode(seed).rstrip(b"=").decode("ascii")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings.

    Attributes:
        signing_seed: Raw Ed25519 seed, or None to generate a key per process.
        issuer: Issuer label for newly minted certificates.
    """

    signing_seed: bytes | None = field(default=None, repr=False)
    issuer: str = DEFAULT_ISSUER

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ`` (for tests).
        """
        env = os.environ if environ is None else environ
        raw_seed = env.get(SIGNING_KEY_ENV, "")
        seed = decode_seed(raw_seed) if raw_seed else None
        issuer = env.get(ISSUER_ENV, "").strip() or DEFAULT_ISSUER
        return cls(signing_seed=seed, issuer=issuer)
