"""SkillCert exception hierarchy.

All public exceptions inherit from SkillCertError, giving callers a single
base class to catch when they want to handle any SkillCert-specific failure
without swallowing unrelated errors.

Note that attestation *verification* never raises: every failure mode
collapses to ``False`` so that callers cannot distinguish a malformed token
from a tampered one.
"""


class SkillCertError(Exception):
    """Base exception for all SkillCert errors."""


class ScanInputError(SkillCertError):
    """Raised when scanner output cannot be turned into category scores.

    Covers unreadable result files, unsupported formats, and records
    missing the fields the aggregator needs.
    """


class CertificateValidationError(SkillCertError):
    """Raised when certificate facts are incomplete or malformed.

    This is a caller contract violation detected at the issuance boundary,
    before anything is signed.
    """


class CanonicalizationError(SkillCertError):
    """Raised when a value has no canonical byte encoding.

    Covers nested containers, non-finite floats, and types outside the
    scalar set that certificate facts are built from.
    """


class AttestationError(SkillCertError):
    """Raised when an attestation cannot be produced.

    Covers signing key material that cannot be loaded and failures while
    encoding the signed envelope.
    """


class BadgeWriteError(SkillCertError):
    """Raised when badge artifacts cannot be written to disk."""
