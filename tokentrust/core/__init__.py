"""Shared exception types for TokenTrust."""

from tokentrust.core.exceptions import (
    ConfigurationError,
    EvidenceValidationError,
    TokenTrustError,
)

__all__ = ["ConfigurationError", "EvidenceValidationError", "TokenTrustError"]
