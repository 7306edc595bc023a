"""
Application-level exceptions.

Raised at the edges only: evidence validation at the collaborator boundary
and configuration lookup. The scoring engine itself does not raise for
well-typed input.
"""

from __future__ import annotations


class TokenTrustError(Exception):
    """Base class for TokenTrust errors."""


class EvidenceValidationError(TokenTrustError):
    """A collaborator payload did not match its evidence schema."""

    def __init__(self, source: str, errors: list[str]) -> None:
        self.source = source
        self.errors = list(errors)
        detail = "; ".join(self.errors) if self.errors else "invalid payload"
        super().__init__(f"invalid {source} evidence: {detail}")


class ConfigurationError(TokenTrustError):
    """Unknown profile or policy name, or unusable configuration value."""
