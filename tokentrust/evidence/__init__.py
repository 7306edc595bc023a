"""
Evidence boundary: validated collaborator records, local probes, and the
AnalysisContext builder.
"""

from tokentrust.evidence.collector import collect_checks
from tokentrust.evidence.context import build_analysis_context, context_from_bundle
from tokentrust.evidence.liquidity import analyze_volume_liquidity, calculate_rug_pull_risk
from tokentrust.evidence.models import (
    CreatorProfile,
    EvidenceBundle,
    LiquiditySnapshot,
    OnChainAuthority,
    RegistryProbe,
    SocialSnapshot,
    TokenMetadataRecord,
    TransactionSummary,
    parse_evidence,
)
from tokentrust.evidence.probes import (
    NOMINAL_SOURCE_WEIGHTS,
    governance_check,
    liquidity_presence_check,
    local_checks,
    metadata_check,
)

__all__ = [
    "collect_checks",
    "build_analysis_context",
    "context_from_bundle",
    "analyze_volume_liquidity",
    "calculate_rug_pull_risk",
    "CreatorProfile",
    "EvidenceBundle",
    "LiquiditySnapshot",
    "OnChainAuthority",
    "RegistryProbe",
    "SocialSnapshot",
    "TokenMetadataRecord",
    "TransactionSummary",
    "parse_evidence",
    "NOMINAL_SOURCE_WEIGHTS",
    "governance_check",
    "liquidity_presence_check",
    "local_checks",
    "metadata_check",
]
