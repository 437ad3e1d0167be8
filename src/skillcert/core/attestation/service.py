"""Attestation service: sign certificate facts, verify tokens.

Token Format:
    token    = base64url_nopad(envelope_json)
    envelope = {"data": <facts>, "key_id": <str>, "signature": <str>}
    signature = base64url_nopad(Ed25519(canonical_bytes(data)))

The envelope JSON itself need not be canonical: verification re-derives the
signed bytes from the decoded ``data`` object, so only the canonical
encoding of ``data`` has to be stable. Tokens contain only URL-safe
characters and carry no ``=`` padding.

Verification is an integrity check and nothing more. It returns a single
bool and never raises; malformed, wrongly-keyed and tampered tokens are
indistinguishable to the caller. Expiry is NOT checked here (see
``CertificateFacts.is_expired``).
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import threading
from typing import Any

from nacl.exceptions import CryptoError

from skillcert.config import Settings
from skillcert.exceptions import CanonicalizationError, CertificateValidationError

from .canonical import canonical_bytes
from .keys import KeyPair, KeyStore
from .models import CertificateFacts

logger = logging.getLogger(__name__)


def b64url_encode(raw: bytes) -> str:
    """Unpadded URL-safe base64."""
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """Decode unpadded URL-safe base64, rejecting foreign characters.

    Raises:
        ValueError: If ``text`` is not valid URL-safe base64.
    """
    if "+" in text or "/" in text:
        raise ValueError("Not URL-safe base64")
    padded = text + "=" * (-len(text) % 4)
    # validate=True only exists for the standard alphabet
    standard = padded.replace("-", "+").replace("_", "/")
    return base64.b64decode(standard.encode("ascii"), validate=True)


class AttestationService:
    """Creates and verifies signed attestation tokens.

    The service reads the key pair from its ``KeyStore``; both operations
    only read key material, so one instance may be shared across threads.

    Args:
        key_store: Source of the signing identity. Defaults to a new store
            with an ephemeral key.
    """

    def __init__(self, key_store: KeyStore | None = None) -> None:
        self._key_store = key_store or KeyStore()

    @property
    def key_store(self) -> KeyStore:
        return self._key_store

    def get_or_create_key_pair(self) -> KeyPair:
        """Return the signing identity, creating it on first use."""
        return self._key_store.get_or_create()

    def public_key_b64(self) -> str:
        """Return the public key for publication (unpadded base64url)."""
        return self.get_or_create_key_pair().public_key_b64

    # -- Signing -------------------------------------------------------------

    def create_attestation(self, facts: CertificateFacts) -> str:
        """Sign certificate facts into an opaque, URL-safe token.

        Args:
            facts: The facts to certify.

        Returns:
            The attestation token.

        Raises:
            CertificateValidationError: If ``facts`` are malformed. This is a
                caller error and is raised before anything is signed.
        """
        facts.validate()
        key_pair = self.get_or_create_key_pair()
        data = facts.to_dict()
        signed = key_pair.signing_key.sign(canonical_bytes(data))
        envelope = {
            "data": data,
            "key_id": key_pair.key_id,
            "signature": b64url_encode(signed.signature),
        }
        payload = json.dumps(envelope, separators=(",", ":"), ensure_ascii=True)
        return b64url_encode(payload.encode("ascii"))

    # -- Verification --------------------------------------------------------

    def _decode_envelope(self, token: str) -> dict[str, Any] | None:
        if not isinstance(token, str) or not token:
            return None
        try:
            raw = b64url_decode(token)
            envelope = json.loads(raw.decode("utf-8"))
        except (ValueError, UnicodeError, binascii.Error, RecursionError):
            return None
        if not isinstance(envelope, dict):
            return None
        if not isinstance(envelope.get("data"), dict):
            return None
        if not isinstance(envelope.get("signature"), str):
            return None
        return envelope

    def _check(self, token: str) -> dict[str, Any] | None:
        """Return the verified ``data`` object, or None on any failure."""
        envelope = self._decode_envelope(token)
        if envelope is None:
            logger.debug("Attestation rejected: undecodable token")
            return None

        key_pair = self.get_or_create_key_pair()
        key_id = envelope.get("key_id")
        if key_id is not None and key_id != key_pair.key_id:
            logger.debug("Attestation rejected: signed by another key")
            return None

        try:
            message = canonical_bytes(envelope["data"])
            signature = b64url_decode(envelope["signature"])
            key_pair.verify_key.verify(message, signature)
        except (CanonicalizationError, CryptoError, ValueError, TypeError):
            logger.debug("Attestation rejected: signature check failed")
            return None
        return envelope["data"]

    def verify_attestation(self, token: str) -> bool:
        """Return True iff ``token`` decodes and its signature is valid.

        Any mutation of any signed field, including adding or removing a
        field, changes the canonical bytes and fails verification. Never
        raises.
        """
        return self._check(token) is not None

    def decode_attestation(self, token: str) -> CertificateFacts | None:
        """Return the embedded facts of a verified token, else None.

        A correctly signed token whose facts no longer map onto
        ``CertificateFacts`` (e.g. issued by a newer release with extra
        fields) also yields None.
        """
        data = self._check(token)
        if data is None:
            return None
        try:
            return CertificateFacts.from_dict(data)
        except (CertificateValidationError, TypeError):
            return None


# ---------------------------------------------------------------------------
# Process-wide default service
# ---------------------------------------------------------------------------

_default_lock = threading.Lock()
_default_service: AttestationService | None = None


def default_service() -> AttestationService:
    """Return the process-wide service, configured from the environment.

    The service (and through it the key store) is built once; the key
    pair itself is still only created on first signing or verification.
    """
    global _default_service
    service = _default_service
    if service is not None:
        return service
    with _default_lock:
        if _default_service is None:
            settings = Settings.from_env()
            _default_service = AttestationService(KeyStore.from_settings(settings))
        return _default_service


def get_or_create_key_pair() -> KeyPair:
    """Return the process-wide signing identity."""
    return default_service().get_or_create_key_pair()


def create_attestation(facts: CertificateFacts) -> str:
    """Sign ``facts`` with the process-wide signing identity."""
    return default_service().create_attestation(facts)


def verify_attestation(token: str) -> bool:
    """Verify ``token`` against the process-wide signing identity."""
    return default_service().verify_attestation(token)


def decode_attestation(token: str) -> CertificateFacts | None:
    return default_service().decode_attestation(token)
