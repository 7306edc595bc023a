"""
Token analysis pipeline: evidence bundle -> verify -> classify -> assess.

Single entrypoint for the CLI and for callers embedding the engine; returns
a TokenVerdict whose to_dict() is the flat record handed to API layers.
Profile, weighting policy and registries come from settings unless passed
explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tokentrust.analysis_engine.heuristics import HeuristicClassifier, KeywordScamClassifier, load_scam_keywords
from tokentrust.analysis_engine.models import (
    EvidenceCheck,
    HeuristicFlag,
    RiskAssessment,
    TokenIdentity,
    VerificationResult,
)
from tokentrust.analysis_engine.profiles import ScoringProfile, get_profile
from tokentrust.analysis_engine.registry import TokenRegistry, load_critical_registry
from tokentrust.analysis_engine.risk_engine import RiskFactorEngine, assess_risk
from tokentrust.analysis_engine.verification import VerificationAggregator
from tokentrust.analysis_engine.weighting import WeightingPolicy, get_policy
from tokentrust.config import get_settings
from tokentrust.evidence.context import context_from_bundle
from tokentrust.evidence.models import EvidenceBundle
from tokentrust.evidence.probes import local_checks
from tokentrust.trust_logging import bind_token


@dataclass(frozen=True)
class TokenVerdict:
    token: str
    verification: VerificationResult
    heuristic: HeuristicFlag
    assessment: RiskAssessment
    profile: str
    checks: tuple[EvidenceCheck, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "token": self.token,
            "profile": self.profile,
            "verification": self.verification.to_dict(),
            "heuristic": self.heuristic.to_dict(),
            "score": self.assessment.score,
            "level": self.assessment.level.value,
            "risk_factors": list(self.assessment.risk_factors),
            "safety_factors": list(self.assessment.safety_factors),
            "recommendations": list(self.assessment.recommendations),
            "checks": [c.to_dict() for c in self.checks],
        }


def run_token_analysis(
    bundle: EvidenceBundle,
    *,
    now: datetime | None = None,
    extra_checks: list[EvidenceCheck] | None = None,
    profile: ScoringProfile | None = None,
    policy: WeightingPolicy | None = None,
    critical_registry: TokenRegistry | None = None,
    governance_registry: TokenRegistry | None = None,
    classifier: HeuristicClassifier | None = None,
) -> TokenVerdict:
    """
    Run full analysis for one validated evidence bundle.

    Registry probes carried in the bundle come first, then extra_checks
    (e.g. from collect_checks), then the local metadata, liquidity and
    governance probes. Raises ConfigurationError for unknown configured
    profile/policy names; any failure after that yields the fail-safe
    assessment.
    """
    if profile is None or policy is None or critical_registry is None or classifier is None:
        settings = get_settings()
        profile = profile or get_profile(settings.scoring_profile)
        policy = policy or get_policy(settings.weighting_policy)
        if critical_registry is None:
            critical_registry = load_critical_registry(settings.critical_registry_path)
        if classifier is None:
            classifier = HeuristicClassifier(
                name_classifier=KeywordScamClassifier(load_scam_keywords(settings.scam_keywords_path))
            )

    identity = TokenIdentity(address=bundle.token)
    log = bind_token(identity.address, __name__)
    log.info("token_pipeline_start", profile=profile.version)

    checks: list[EvidenceCheck] = [probe.to_check() for probe in bundle.registry]
    checks.extend(extra_checks or [])
    verification = VerificationResult.unverified()
    heuristic = HeuristicFlag.negative()
    try:
        context = context_from_bundle(bundle, now=now)
        checks.extend(local_checks(identity, context.metadata, bundle.liquidity, governance_registry))
        verification = VerificationAggregator(critical_registry, policy).aggregate(
            identity, checks, context.metadata
        )
        heuristic = classifier.classify(context)
    except Exception as e:
        log.warning("risk_engine_failsafe", stage="context", error=str(e))
        assessment = RiskAssessment.failsafe()
    else:
        assessment = assess_risk(context, verification, heuristic, engine=RiskFactorEngine(profile))

    log.info(
        "token_pipeline_done",
        score=assessment.score,
        risk_level=assessment.level.value,
        verification_level=verification.level.value,
    )
    return TokenVerdict(
        token=identity.address,
        verification=verification,
        heuristic=heuristic,
        assessment=assessment,
        profile=profile.version,
        checks=tuple(checks),
    )
