"""
Confidence weighting policies for verification.

A policy decides how much each EvidenceCheck adds to the denominator
(total weight) and the numerator (verified weight) of confidence.
Non-participating sources never count toward either.

ParticipatingWeightPolicy is the default: a check contributes
its reported weight, which collaborators only set when matched. So a source
that answered "not listed" adds nothing, and confidence collapses toward 100
whenever anything matches. NominalWeightPolicy instead charges an unmatched
participating source its nominal weight in the denominator. Under both,
negative or non-finite weights count as 0.
"""

from __future__ import annotations

from typing import Protocol

from tokentrust.analysis_engine.models import EvidenceCheck
from tokentrust.core.exceptions import ConfigurationError
from tokentrust.core.numbers import finite_weight


class WeightingPolicy(Protocol):
    name: str

    def weights(self, check: EvidenceCheck) -> tuple[float, float]:
        """Return (total contribution, verified contribution) for one check."""
        ...


class ParticipatingWeightPolicy:
    name = "participating"

    def weights(self, check: EvidenceCheck) -> tuple[float, float]:
        if not check.participated:
            return (0.0, 0.0)
        weight = finite_weight(check.weight)
        return (weight, weight if check.matched else 0.0)


class NominalWeightPolicy:
    name = "nominal"

    def weights(self, check: EvidenceCheck) -> tuple[float, float]:
        if not check.participated:
            return (0.0, 0.0)
        if check.matched:
            weight = finite_weight(check.weight)
            return (weight, weight)
        return (finite_weight(check.nominal_weight), 0.0)


POLICIES: dict[str, type] = {
    ParticipatingWeightPolicy.name: ParticipatingWeightPolicy,
    NominalWeightPolicy.name: NominalWeightPolicy,
}


def get_policy(name: str) -> WeightingPolicy:
    try:
        return POLICIES[name.strip().lower()]()
    except KeyError:
        raise ConfigurationError(f"unknown weighting policy {name!r}; expected one of {sorted(POLICIES)}") from None
