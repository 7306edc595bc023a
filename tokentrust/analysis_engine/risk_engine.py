"""
Risk factor engine: turn an AnalysisContext plus the verification and
heuristic verdicts into a RiskAssessment.

Order of evaluation (and of risk/safety factor entries):
verification baseline -> authorities -> age -> transfer volume -> creator
-> metadata -> venue (rug pull, liquidity, volume/liquidity, pools).

Token-level factors are skipped for OFFICIAL tokens, discounted for other
verified levels and for heuristically legitimate new tokens, and applied at
full weight otherwise. Venue factors always apply, at reduced weight when
verified. The final score is clamped to 0-100 and mapped to a level with a
verification-dependent threshold table, so the same score can read LOW for
an OFFICIAL token and MEDIUM for an unverified one.

Missing context fields contribute nothing and produce no factor entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tokentrust.analysis_engine.heuristics import HeuristicClassifier
from tokentrust.analysis_engine.models import (
    AnalysisContext,
    CreatorRisk,
    FAILSAFE_FACTOR,
    HeuristicFlag,
    RiskAssessment,
    VerificationLevel,
    VerificationResult,
    VolumeLiquidityContext,
)
from tokentrust.analysis_engine.profiles import DEFAULT_PROFILE, FactorMultipliers, ScoringProfile
from tokentrust.analysis_engine.recommendations import recommend
from tokentrust.core.numbers import round_half_up
from tokentrust.trust_logging import get_logger

logger = get_logger(__name__)

SCORE_MIN = 0
SCORE_MAX = 100

VERIFIED_SUFFIX = "(but token is verified)"
RECENT_SUFFIX = "(recently launched - monitoring)"


@dataclass
class _Tally:
    """Running score and factor lists for one scoring pass."""

    score: float = 0.0
    risk: list[str] = field(default_factory=list)
    safety: list[str] = field(default_factory=list)

    def add(self, amount: float, factor: str) -> None:
        self.score += amount
        self.risk.append(factor)


class RiskFactorEngine:
    """
    Deterministic scorer parameterized by a versioned ScoringProfile.

    Holds no per-request state; one instance can serve any number of
    analyses.
    """

    def __init__(self, profile: ScoringProfile | None = None) -> None:
        self.profile = profile or DEFAULT_PROFILE

    # ------------------------------------------------------------------
    # Step 1: verification baseline
    # ------------------------------------------------------------------

    def _baseline(self, tally: _Tally, verification: VerificationResult, recent: bool) -> None:
        p = self.profile
        if verification.is_verified:
            base = p.verification_discounts.get(verification.level, 0.0)
            discount = round_half_up(base * verification.confidence / 100)
            tally.score = max(0.0, tally.score - discount)
            tally.safety.append(
                f"Dynamically verified: {verification.level.value} ({verification.confidence}% confidence)"
            )
            for source in verification.sources:
                tally.safety.append(f"Listed on {source}")
            if verification.level is VerificationLevel.OFFICIAL:
                tally.score = max(0.0, tally.score - p.official_extra_discount)
                tally.safety.append("Official verification - maximum trust level")
            return

        if recent:
            penalty = max(
                p.heuristic_min_penalty,
                p.heuristic_base_penalty - verification.confidence * p.heuristic_confidence_slope,
            )
            tally.add(penalty, "Token not verified on major platforms (recently launched)")
            tally.safety.append("Recently launched token - verification pending")
        else:
            penalty = max(
                p.unverified_min_penalty,
                p.unverified_base_penalty - verification.confidence * p.unverified_confidence_slope,
            )
            tally.add(penalty, "Token not verified on major platforms")

    # ------------------------------------------------------------------
    # Step 2: token-level factors
    # ------------------------------------------------------------------

    @staticmethod
    def _label(plain: str, root: str, verified: bool, recent: bool) -> str:
        if verified:
            return f"{root} {VERIFIED_SUFFIX}"
        if recent:
            return f"{root} {RECENT_SUFFIX}"
        return plain

    def _token_factors(
        self,
        tally: _Tally,
        context: AnalysisContext,
        mult: FactorMultipliers | None,
        verified: bool,
        recent: bool,
    ) -> None:
        p = self.profile
        w = p.weights

        def scaled(weight: float, attr: str) -> float:
            return weight * getattr(mult, attr) if mult is not None else weight

        if context.mint_revoked is False:
            tally.add(
                scaled(w.mint_authority, "mint_authority"),
                self._label("Active mint authority - unlimited supply possible", "Active mint authority", verified, recent),
            )
        elif context.mint_revoked is True:
            tally.safety.append("Mint authority revoked - supply is fixed")

        if context.freeze_revoked is False:
            tally.add(
                scaled(w.freeze_authority, "freeze_authority"),
                self._label("Active freeze authority - accounts can be frozen", "Active freeze authority", verified, recent),
            )
        elif context.freeze_revoked is True:
            tally.safety.append("Freeze authority revoked - accounts protected")

        days = context.days_active
        if days is not None:
            if days < p.very_new_days:
                tally.add(
                    scaled(w.token_age, "very_new_token"),
                    self._label("Very new token - high risk", "Very new token", verified, recent),
                )
            elif days < p.new_days:
                tally.add(
                    scaled(w.token_age * p.new_token_scale, "new_token"),
                    self._label("New token - moderate risk", "New token", verified, recent),
                )
            elif days > p.established_days:
                tally.safety.append("Established token - lower risk")

        transfers = context.total_transfers
        if transfers is not None:
            if transfers < p.low_transfers:
                tally.add(
                    scaled(w.transaction_volume, "transaction_volume"),
                    self._label("Low transaction volume - suspicious", "Low transaction volume", verified, recent),
                )
            elif transfers > p.high_transfers:
                tally.safety.append("High transaction volume - active trading")

        if context.creator_risk is CreatorRisk.HIGH:
            tally.add(
                scaled(w.creator_behavior, "creator_behavior"),
                self._label("Suspicious creator behavior detected", "Suspicious creator behavior", verified, recent),
            )
        elif context.creator_risk is CreatorRisk.LOW:
            tally.safety.append("Normal creator behavior patterns")

        if context.metadata is not None:
            if not context.metadata.has_real_name:
                tally.add(
                    scaled(w.metadata_quality, "metadata_quality"),
                    self._label("Poor metadata quality", "Poor metadata quality", verified, recent),
                )
            else:
                tally.safety.append("Good metadata quality")

    # ------------------------------------------------------------------
    # Step 3: venue factors
    # ------------------------------------------------------------------

    def _venue_factors(self, tally: _Tally, context: AnalysisContext, verified: bool) -> None:
        p = self.profile
        w = p.weights
        vm = p.venue_multipliers

        if context.rug_pull_detected:
            text = "Rug pull risk detected"
            if context.rug_pull_confidence is not None:
                text += f" ({context.rug_pull_confidence}% confidence)"
            if context.rug_pull_indicators:
                text += ": " + ", ".join(context.rug_pull_indicators)
            tally.add(w.rug_pull * vm.rug_pull.pick(verified), text)

        liquidity = context.total_liquidity
        if liquidity is not None:
            if liquidity < p.very_low_liquidity:
                tally.add(
                    w.low_liquidity * vm.very_low_liquidity.pick(verified),
                    f"Very low liquidity (< ${p.very_low_liquidity / 1000:g}k)",
                )
            elif liquidity < p.low_liquidity:
                tally.add(
                    w.low_liquidity * vm.low_liquidity.pick(verified),
                    f"Low liquidity (< ${p.low_liquidity / 1000:g}k)",
                )

        pattern = context.volume_liquidity
        if pattern is not None:
            if pattern.context is VolumeLiquidityContext.SUSPICIOUS:
                tally.add(
                    w.volume_liquidity_ratio * vm.suspicious_pattern.pick(verified),
                    f"Suspicious volume-to-liquidity pattern: {pattern.explanation}",
                )
            elif pattern.context is VolumeLiquidityContext.LEGITIMATE:
                tally.safety.append(f"Legitimate volume-to-liquidity pattern: {pattern.explanation}")
        elif context.volume_24h is not None and liquidity is not None:
            if context.volume_24h > liquidity * p.max_volume_liquidity_ratio:
                tally.add(
                    w.volume_liquidity_ratio * vm.high_volume_ratio.pick(verified),
                    "High volume relative to liquidity",
                )

        if context.pool_count == 1:
            tally.add(
                w.pool_concentration * vm.pool_concentration.pick(verified),
                "Single DEX pool - liquidity concentrated in one venue",
            )

        if liquidity is not None and liquidity > p.strong_liquidity:
            tally.safety.append(f"Strong liquidity: ${liquidity:,.0f} USD")
        if context.liquidity_locked_pct:
            lock = f"Liquidity locked: {context.liquidity_locked_pct:g}%"
            if context.liquidity_lock_days:
                lock += f" for {context.liquidity_lock_days:g} days"
            tally.safety.append(lock)
        if context.pool_count is not None and context.pool_count > 1:
            tally.safety.append(f"Multiple DEX pools: {context.pool_count} exchanges")

    # ------------------------------------------------------------------

    def score(
        self,
        context: AnalysisContext,
        verification: VerificationResult,
        heuristic: HeuristicFlag,
    ) -> RiskAssessment:
        verified = verification.is_verified
        recent = heuristic.is_recently_launched_legitimate and not verified
        tally = _Tally()

        self._baseline(tally, verification, recent)

        if not (verified and verification.level is VerificationLevel.OFFICIAL):
            if verified:
                mult = self.profile.multipliers_for(verification.level)
            elif recent:
                mult = self.profile.heuristic_multipliers
            else:
                mult = None
            self._token_factors(tally, context, mult, verified, recent)

        self._venue_factors(tally, context, verified)

        score = round_half_up(min(float(SCORE_MAX), max(float(SCORE_MIN), tally.score)))
        level_class = verification.level if verified else VerificationLevel.UNVERIFIED
        level = self.profile.thresholds_for(level_class).level_for(score)

        assessment = RiskAssessment(
            score=score,
            level=level,
            risk_factors=tuple(tally.risk),
            safety_factors=tuple(tally.safety),
            recommendations=tuple(recommend(score, verification, heuristic)),
        )
        logger.debug(
            "risk_engine_result",
            token=context.token.address,
            profile=self.profile.version,
            score=score,
            risk_level=level.value,
            verification_level=verification.level.value,
            recently_launched=recent,
            risk_factor_count=len(tally.risk),
        )
        return assessment


def assess_risk(
    context: AnalysisContext | None,
    verification: VerificationResult | None,
    heuristic: HeuristicFlag | None = None,
    *,
    engine: RiskFactorEngine | None = None,
    classifier: HeuristicClassifier | None = None,
) -> RiskAssessment:
    """
    Score one token. Never raises: a missing context or any failure inside
    scoring yields the fixed fail-safe HIGH assessment.
    """
    if context is None or verification is None:
        logger.warning("risk_engine_failsafe", reason="missing_input", factor=FAILSAFE_FACTOR)
        return RiskAssessment.failsafe()
    try:
        if heuristic is None:
            heuristic = (classifier or HeuristicClassifier()).classify(context)
        return (engine or RiskFactorEngine()).score(context, verification, heuristic)
    except Exception as e:
        logger.warning(
            "risk_engine_failsafe",
            token=getattr(getattr(context, "token", None), "address", None),
            error=str(e),
        )
        return RiskAssessment.failsafe()
