"""
Verification aggregator: combine registry, venue and on-chain evidence
into a single VerificationResult.

Critical-infrastructure tokens short-circuit to OFFICIAL with confidence 100.
Otherwise confidence = 100 * verified_weight / total_weight rounded half up, with the
per-check contributions decided by an injected WeightingPolicy. Level is
assigned from confidence and verified weight jointly:

    OFFICIAL     confidence >= 80 and verified_weight >= 60
    ESTABLISHED  confidence >= 60 and verified_weight >= 40
    COMMUNITY    confidence >= 40 and verified_weight >= 20
    UNVERIFIED   otherwise
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from tokentrust.analysis_engine.models import (
    EvidenceCheck,
    MetadataSummary,
    TokenIdentity,
    VerificationLevel,
    VerificationResult,
)
from tokentrust.analysis_engine.registry import TokenRegistry, default_critical_registry
from tokentrust.analysis_engine.weighting import ParticipatingWeightPolicy, WeightingPolicy
from tokentrust.core.numbers import round_half_up
from tokentrust.trust_logging import get_logger

logger = get_logger(__name__)

SYSTEM_REGISTRY_SOURCE = "System Registry"
NO_SOURCES_REASON = "No verification sources found"

# (level, min confidence, min verified weight), checked in order
LEVEL_RULES: tuple[tuple[VerificationLevel, int, float], ...] = (
    (VerificationLevel.OFFICIAL, 80, 60.0),
    (VerificationLevel.ESTABLISHED, 60, 40.0),
    (VerificationLevel.COMMUNITY, 40, 20.0),
)

HIGH_TRUST_SCORE = 80
TOP_MARKET_CAP_RANK = 100


def _detail_reasons(details: dict) -> list[str]:
    """Qualitative boosts a matched source may report in its details."""
    reasons: list[str] = []
    if details.get("strict_listing") or details.get("verified"):
        reasons.append("Strictly verified listing")
    trust_score = details.get("trust_score")
    if isinstance(trust_score, (int, float)) and trust_score > HIGH_TRUST_SCORE:
        reasons.append("High trust score")
    rank = details.get("market_cap_rank")
    if isinstance(rank, (int, float)) and 0 < rank < TOP_MARKET_CAP_RANK:
        reasons.append("Top 100 market cap")
    return reasons


def _gap_reasons(metadata: MetadataSummary) -> list[str]:
    reasons: list[str] = []
    if not metadata.name or not metadata.symbol:
        reasons.append("Missing basic metadata")
    if not metadata.has_image:
        reasons.append("No token image")
    if not metadata.has_description:
        reasons.append("No token description")
    return reasons


def level_for(confidence: int, verified_weight: float) -> VerificationLevel:
    for level, min_confidence, min_weight in LEVEL_RULES:
        if confidence >= min_confidence and verified_weight >= min_weight:
            return level
    return VerificationLevel.UNVERIFIED


class VerificationAggregator:
    """
    Pure aggregation over already-collected evidence.

    The critical registry and weighting policy are fixed at construction so
    one aggregator can be shared across requests without hidden state.
    """

    def __init__(
        self,
        critical_registry: TokenRegistry | None = None,
        policy: WeightingPolicy | None = None,
    ) -> None:
        self.critical_registry = critical_registry if critical_registry is not None else default_critical_registry()
        self.policy = policy if policy is not None else ParticipatingWeightPolicy()

    def aggregate(
        self,
        identity: TokenIdentity,
        checks: Iterable[EvidenceCheck],
        metadata: MetadataSummary | None = None,
    ) -> VerificationResult:
        critical_name = self.critical_registry.lookup(identity.address)
        if critical_name is not None:
            return VerificationResult(
                is_verified=True,
                level=VerificationLevel.OFFICIAL,
                confidence=100,
                reasons=(f"Critical infrastructure: {critical_name}",),
                sources=(SYSTEM_REGISTRY_SOURCE,),
            )

        totals: list[float] = []
        verified: list[float] = []
        reasons: list[str] = []
        sources: list[str] = []
        for check in checks:
            total_part, verified_part = self.policy.weights(check)
            totals.append(total_part)
            verified.append(verified_part)
            if check.participated and check.matched:
                reasons.append(f"Verified on {check.source}")
                sources.append(check.source)
                reasons.extend(_detail_reasons(check.details or {}))

        # fsum is exact, so permuting checks cannot move a rounding boundary
        total_weight = math.fsum(totals)
        verified_weight = math.fsum(verified)
        confidence = round_half_up(100 * verified_weight / total_weight) if total_weight > 0 else 0
        confidence = max(0, min(100, int(confidence)))

        level = level_for(confidence, verified_weight)
        is_verified = level is not VerificationLevel.UNVERIFIED
        if metadata is not None and not is_verified:
            reasons.extend(_gap_reasons(metadata))

        result = VerificationResult(
            is_verified=is_verified,
            level=level,
            confidence=confidence,
            reasons=tuple(reasons) if reasons else (NO_SOURCES_REASON,),
            sources=tuple(sources),
        )
        logger.debug(
            "verification_aggregated",
            token=identity.address,
            policy=self.policy.name,
            total_weight=total_weight,
            verified_weight=verified_weight,
            confidence=confidence,
            verification_level=level.value,
        )
        return result


def verify(
    identity: TokenIdentity,
    evidence: Iterable[EvidenceCheck],
    *,
    critical_registry: TokenRegistry | None = None,
    policy: WeightingPolicy | None = None,
    metadata: MetadataSummary | None = None,
) -> VerificationResult:
    """Aggregate evidence for one token into a VerificationResult."""
    return VerificationAggregator(critical_registry, policy).aggregate(identity, evidence, metadata)
