"""
Data model for token verification and risk scoring.

Every record is created fresh per analysis and never mutated afterwards
(frozen dataclasses). Ordered lists are stored as tuples; to_dict() returns
flat, JSON-serializable records with lists for the API layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class VerificationLevel(str, Enum):
    OFFICIAL = "OFFICIAL"
    ESTABLISHED = "ESTABLISHED"
    COMMUNITY = "COMMUNITY"
    UNVERIFIED = "UNVERIFIED"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class CreatorRisk(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class VolumeLiquidityContext(str, Enum):
    LEGITIMATE = "LEGITIMATE"
    SUSPICIOUS = "SUSPICIOUS"
    NORMAL = "NORMAL"


# Names collaborators substitute when no real metadata exists
PLACEHOLDER_NAMES = frozenset({"unknown", "unknown token"})


@dataclass(frozen=True)
class TokenIdentity:
    """Identity of the token under analysis."""

    address: str
    """Mint address (base58)."""
    chain: str = "solana"


@dataclass(frozen=True)
class EvidenceCheck:
    """
    Outcome of querying one evidence source for one analysis.

    Collectors only set weight when matched is True;
    nominal_weight keeps the source's configured trust contribution so a
    weighting policy can penalise sources that answered but did not match.
    """

    source: str
    participated: bool
    matched: bool
    weight: float
    details: dict[str, Any] = field(default_factory=dict)
    nominal_weight: float | None = None

    @classmethod
    def absent(cls, source: str, nominal_weight: float | None = None) -> EvidenceCheck:
        """Source errored or timed out: no signal either way."""
        return cls(source=source, participated=False, matched=False, weight=0.0, nominal_weight=nominal_weight)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "participated": self.participated,
            "matched": self.matched,
            "weight": self.weight,
            "details": dict(self.details),
            "nominal_weight": self.nominal_weight,
        }


@dataclass(frozen=True)
class VerificationResult:
    """Confidence-weighted verification verdict. Produced once per analysis."""

    is_verified: bool
    level: VerificationLevel
    confidence: int
    """0-100."""
    reasons: tuple[str, ...]
    sources: tuple[str, ...]
    """Matched source names, in evidence order; used for user-facing disclosure."""

    @classmethod
    def unverified(cls, reasons: tuple[str, ...] = ("No verification sources found",)) -> VerificationResult:
        return cls(
            is_verified=False,
            level=VerificationLevel.UNVERIFIED,
            confidence=0,
            reasons=reasons,
            sources=(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_verified": self.is_verified,
            "level": self.level.value,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
            "sources": list(self.sources),
        }


@dataclass(frozen=True)
class MetadataSummary:
    """Completeness flags for token metadata, as reported by the metadata collector."""

    name: str | None = None
    symbol: str | None = None
    has_image: bool = False
    has_description: bool = False
    has_website: bool = False
    mutable: bool | None = None
    decimals: int | None = None

    @property
    def has_real_name(self) -> bool:
        """Name present and not a collaborator placeholder like 'Unknown'."""
        return bool(self.name) and self.name.strip().lower() not in PLACEHOLDER_NAMES


@dataclass(frozen=True)
class VolumeLiquidityPattern:
    """Contextual reading of the 24h volume to liquidity ratio."""

    ratio: float
    context: VolumeLiquidityContext
    confidence: int
    explanation: str
    factors: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisContext:
    """
    Read-only snapshot of everything known about a token for one analysis.

    None means the collaborator supplied no data for that field; the engine
    then omits the corresponding factor entirely.
    """

    token: TokenIdentity
    metadata: MetadataSummary | None = None

    # On-chain authority record
    mint_revoked: bool | None = None
    freeze_revoked: bool | None = None
    supply: str | None = None

    # Transaction summary
    days_active: float | None = None
    total_transfers: int | None = None

    creator_risk: CreatorRisk | None = None

    # DEX / liquidity snapshot
    total_liquidity: float | None = None
    volume_24h: float | None = None
    volume_change_24h: float | None = None
    pool_count: int | None = None
    rug_pull_detected: bool | None = None
    rug_pull_confidence: int | None = None
    rug_pull_indicators: tuple[str, ...] = ()
    volume_liquidity: VolumeLiquidityPattern | None = None
    liquidity_locked_pct: float | None = None
    liquidity_lock_days: float | None = None

    # Social snapshot
    social_score: float | None = None
    twitter_verified: bool | None = None
    twitter_followers: int | None = None
    telegram_members: int | None = None
    discord_members: int | None = None

    @property
    def has_social(self) -> bool:
        return self.social_score is not None


@dataclass(frozen=True)
class HeuristicFlag:
    """Diagnostic outcome of the recently-launched-legitimate classifier."""

    is_recently_launched_legitimate: bool
    positive_signals: int
    total_signals: int
    confidence_pct: float
    signals: tuple[tuple[str, bool], ...] = ()
    """(signal name, positive) for every counted signal, in evaluation order."""

    @classmethod
    def negative(cls) -> HeuristicFlag:
        return cls(False, 0, 0, 0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_recently_launched_legitimate": self.is_recently_launched_legitimate,
            "positive_signals": self.positive_signals,
            "total_signals": self.total_signals,
            "confidence_pct": round(self.confidence_pct, 2),
            "signals": {name: positive for name, positive in self.signals},
        }


FAILSAFE_SCORE = 75
FAILSAFE_FACTOR = "Technical analysis failed"


@dataclass(frozen=True)
class RiskAssessment:
    """Final risk verdict: score, level and the explanation behind them."""

    score: int
    """0-100, higher is riskier."""
    level: RiskLevel
    risk_factors: tuple[str, ...] = ()
    safety_factors: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()

    @classmethod
    def failsafe(cls) -> RiskAssessment:
        """Fixed verdict used when analysis could not complete: fail toward suspicion."""
        return cls(score=FAILSAFE_SCORE, level=RiskLevel.HIGH, risk_factors=(FAILSAFE_FACTOR,))

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level.value,
            "risk_factors": list(self.risk_factors),
            "safety_factors": list(self.safety_factors),
            "recommendations": list(self.recommendations),
        }
