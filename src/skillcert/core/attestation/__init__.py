"""Signed, tamper-evident attestations for trust reports.

Submodules:
    canonical  -- canonical_bytes: the exact signature input encoding
    keys       -- KeyPair, KeyStore (once-only lazy Ed25519 identity)
    models     -- CertificateFacts
    service    -- AttestationService, create/verify/decode helpers
    certify    -- issue_certificate: TrustReport -> signed Certificate

All public names are re-exported here so callers can write
``from skillcert.core.attestation import verify_attestation``.
"""

from skillcert.core.attestation.canonical import canonical_bytes, canonical_json
from skillcert.core.attestation.keys import KeyPair, KeyStore
from skillcert.core.attestation.models import FACT_FIELDS, CertificateFacts
from skillcert.core.attestation.service import (
    AttestationService,
    create_attestation,
    decode_attestation,
    default_service,
    get_or_create_key_pair,
    verify_attestation,
)
from skillcert.core.attestation.certify import (
    Certificate,
    build_facts,
    compute_content_hash,
    issue_certificate,
)

__all__ = [
    "FACT_FIELDS",
    "AttestationService",
    "Certificate",
    "CertificateFacts",
    "KeyPair",
    "KeyStore",
    "build_facts",
    "canonical_bytes",
    "canonical_json",
    "compute_content_hash",
    "create_attestation",
    "decode_attestation",
    "default_service",
    "get_or_create_key_pair",
    "issue_certificate",
    "verify_attestation",
]
