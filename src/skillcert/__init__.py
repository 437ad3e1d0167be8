"""SkillCert: Trust scoring and signed attestations for agent skills."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Issuer label embedded in every certificate unless overridden.
DEFAULT_ISSUER = "SkillCert"
