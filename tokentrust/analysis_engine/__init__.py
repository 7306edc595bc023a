"""
Analysis engine package: token verification and risk scoring.

Consumes already-collected, validated evidence and produces a
VerificationResult and a RiskAssessment. Pure functions of their inputs:
no I/O, no clock, no global state.
"""

from tokentrust.analysis_engine.models import (
    AnalysisContext,
    CreatorRisk,
    EvidenceCheck,
    HeuristicFlag,
    MetadataSummary,
    RiskAssessment,
    RiskLevel,
    TokenIdentity,
    VerificationLevel,
    VerificationResult,
    VolumeLiquidityContext,
    VolumeLiquidityPattern,
)
from tokentrust.analysis_engine.registry import (
    TokenRegistry,
    default_critical_registry,
    default_governance_registry,
    load_critical_registry,
)
from tokentrust.analysis_engine.weighting import (
    NominalWeightPolicy,
    ParticipatingWeightPolicy,
    get_policy,
)
from tokentrust.analysis_engine.verification import VerificationAggregator, verify
from tokentrust.analysis_engine.heuristics import (
    HeuristicClassifier,
    HeuristicConfig,
    KeywordScamClassifier,
    classify,
    load_scam_keywords,
)
from tokentrust.analysis_engine.profiles import (
    PROFILES,
    ScoringProfile,
    get_profile,
)
from tokentrust.analysis_engine.risk_engine import RiskFactorEngine, assess_risk
from tokentrust.analysis_engine.recommendations import recommend

__all__ = [
    "AnalysisContext",
    "CreatorRisk",
    "EvidenceCheck",
    "HeuristicFlag",
    "MetadataSummary",
    "RiskAssessment",
    "RiskLevel",
    "TokenIdentity",
    "VerificationLevel",
    "VerificationResult",
    "VolumeLiquidityContext",
    "VolumeLiquidityPattern",
    "TokenRegistry",
    "default_critical_registry",
    "default_governance_registry",
    "load_critical_registry",
    "NominalWeightPolicy",
    "ParticipatingWeightPolicy",
    "get_policy",
    "VerificationAggregator",
    "verify",
    "HeuristicClassifier",
    "HeuristicConfig",
    "KeywordScamClassifier",
    "classify",
    "load_scam_keywords",
    "PROFILES",
    "ScoringProfile",
    "get_profile",
    "RiskFactorEngine",
    "assess_risk",
    "recommend",
]
