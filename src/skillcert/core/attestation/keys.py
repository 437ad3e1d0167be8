"""Process signing identity: an Ed25519 key pair created once, lazily.

The ``KeyStore`` owns the only mutable state of the attestation subsystem.
Initialisation is guarded by a lock with a double-checked fast path, so
concurrent first callers all observe the same key pair and none of them can
see a half-built one. Once created, the pair is read-only and is shared
without further locking.

Key material lives in memory only. A store constructed with a seed derives
the same pair on every start; without one, each process gets a fresh pair
and attestations it issued stop verifying after a restart.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import threading
from dataclasses import dataclass, field

from nacl.signing import SigningKey, VerifyKey

from skillcert.config import SEED_LENGTH, Settings
from skillcert.exceptions import AttestationError

logger = logging.getLogger(__name__)

KEY_ID_PREFIX: str = "skillcert-ed25519-"


@dataclass(frozen=True)
class KeyPair:
    """An Ed25519 signing identity.

    The private half is excluded from ``repr`` and is never serialised by
    this package; only ``public_key_b64`` and ``key_id`` leave the process.

    Attributes:
        signing_key: Private key used to sign attestations.
        verify_key: Public key used to verify them.
    """

    signing_key: SigningKey = field(repr=False)
    verify_key: VerifyKey

    @classmethod
    def generate(cls) -> KeyPair:
        signing_key = SigningKey.generate()
        return cls(signing_key=signing_key, verify_key=signing_key.verify_key)

    @classmethod
    def from_seed(cls, seed: bytes) -> KeyPair:
        """Derive a key pair deterministically from a 32-byte seed.

        Raises:
            AttestationError: If the seed has the wrong length.
        """
        if len(seed) != SEED_LENGTH:
            raise AttestationError(
                f"Signing seed must be {SEED_LENGTH} bytes, got {len(seed)}"
            )
        signing_key = SigningKey(seed)
        return cls(signing_key=signing_key, verify_key=signing_key.verify_key)

    @property
    def public_key_bytes(self) -> bytes:
        return bytes(self.verify_key)

    @property
    def public_key_b64(self) -> str:
        """Public key as unpadded URL-safe base64."""
        encoded = base64.urlsafe_b64encode(self.public_key_bytes)
        return encoded.rstrip(b"=").decode("ascii")

    @property
    def key_id(self) -> str:
        """Short stable identifier derived from the public key."""
        digest = hashlib.sha256(self.public_key_bytes).hexdigest()[:16]
        return f"{KEY_ID_PREFIX}{digest}"


class KeyStore:
    """Owner of the process key pair, with once-only lazy creation.

    Example::

        store = KeyStore()
        pair = store.get_or_create()
        assert store.get_or_create() is pair

    Args:
        seed: Optional 32-byte Ed25519 seed. When given, the key pair is
            derived from it instead of being randomly generated.
    """

    def __init__(self, seed: bytes | None = None) -> None:
        if seed is not None and len(seed) != SEED_LENGTH:
            raise AttestationError(
                f"Signing seed must be {SEED_LENGTH} bytes, got {len(seed)}"
            )
        self._seed = seed
        self._lock = threading.Lock()
        self._key_pair: KeyPair | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> KeyStore:
        return cls(seed=settings.signing_seed)

    @property
    def is_initialized(self) -> bool:
        return self._key_pair is not None

    def get_or_create(self) -> KeyPair:
        """Return the key pair, creating it on first call.

        Safe under concurrent first access: exactly one pair is ever built
        and every caller receives that same object.
        """
        key_pair = self._key_pair
        if key_pair is not None:
            return key_pair
        with self._lock:
            if self._key_pair is None:
                if self._seed is not None:
                    self._key_pair = KeyPair.from_seed(self._seed)
                    logger.info(
                        "Loaded signing key %s from configured seed",
                        self._key_pair.key_id,
                    )
                else:
                    self._key_pair = KeyPair.generate()
                    logger.info(
                        "Generated ephemeral signing key %s",
                        self._key_pair.key_id,
                    )
            return self._key_pair
