"""
Versioned scoring profiles for the risk factor engine.

A ScoringProfile holds every weight, multiplier and threshold the engine
uses, so different tunings are data, not subclasses. Profiles are selected
by version at engine construction:

    v2  current weights (mint 30, freeze 25, age 20, ...) and the
        verification-dependent level table
    v1  legacy analyzer weights (mint 40, freeze 30, age 25, ...) with
        the older unverified bands (30 / 55 / 80)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from tokentrust.analysis_engine.models import RiskLevel, VerificationLevel
from tokentrust.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class RiskWeights:
    """Nominal contribution of each factor before any discount."""

    mint_authority: float = 30.0
    freeze_authority: float = 25.0
    token_age: float = 20.0
    transaction_volume: float = 15.0
    creator_behavior: float = 15.0
    metadata_quality: float = 10.0
    low_liquidity: float = 25.0
    volume_liquidity_ratio: float = 25.0
    rug_pull: float = 25.0
    pool_concentration: float = 10.0


@dataclass(frozen=True)
class FactorMultipliers:
    """Fraction of each token-level factor weight that still applies."""

    mint_authority: float
    freeze_authority: float
    very_new_token: float
    new_token: float
    transaction_volume: float
    creator_behavior: float
    metadata_quality: float


@dataclass(frozen=True)
class VenueMultiplier:
    verified: float
    unverified: float

    def pick(self, is_verified: bool) -> float:
        return self.verified if is_verified else self.unverified


@dataclass(frozen=True)
class VenueMultipliers:
    rug_pull: VenueMultiplier = VenueMultiplier(0.3, 1.0)
    very_low_liquidity: VenueMultiplier = VenueMultiplier(0.4, 0.8)
    low_liquidity: VenueMultiplier = VenueMultiplier(0.2, 0.5)
    suspicious_pattern: VenueMultiplier = VenueMultiplier(0.3, 0.8)
    high_volume_ratio: VenueMultiplier = VenueMultiplier(0.2, 0.6)
    pool_concentration: VenueMultiplier = VenueMultiplier(0.3, 1.0)


@dataclass(frozen=True)
class LevelThresholds:
    """
    Minimum score for each level above LOW. None means the level is
    unreachable for this verification class.
    """

    medium: float | None
    high: float | None = None
    critical: float | None = None

    def level_for(self, score: float) -> RiskLevel:
        if self.critical is not None and score >= self.critical:
            return RiskLevel.CRITICAL
        if self.high is not None and score >= self.high:
            return RiskLevel.HIGH
        if self.medium is not None and score >= self.medium:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW


VERIFIED_MULTIPLIERS = FactorMultipliers(
    mint_authority=0.2,
    freeze_authority=0.2,
    very_new_token=0.3,
    new_token=0.2,
    transaction_volume=0.3,
    creator_behavior=0.3,
    metadata_quality=0.2,
)

HEURISTIC_MULTIPLIERS = FactorMultipliers(
    mint_authority=0.5,
    freeze_authority=0.5,
    very_new_token=0.4,
    new_token=0.5,
    transaction_volume=0.4,
    creator_behavior=0.5,
    metadata_quality=0.5,
)


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(mapping)


@dataclass(frozen=True)
class ScoringProfile:
    version: str
    weights: RiskWeights = field(default_factory=RiskWeights)

    # Step 1: verification baseline
    verification_discounts: Mapping[VerificationLevel, float] = field(
        default_factory=lambda: _frozen({
            VerificationLevel.OFFICIAL: 50.0,
            VerificationLevel.ESTABLISHED: 35.0,
            VerificationLevel.COMMUNITY: 20.0,
        })
    )
    official_extra_discount: float = 40.0
    unverified_base_penalty: float = 30.0
    unverified_confidence_slope: float = 0.2
    unverified_min_penalty: float = 10.0
    heuristic_base_penalty: float = 15.0
    heuristic_confidence_slope: float = 0.1
    heuristic_min_penalty: float = 5.0

    # Step 2: token-level discounts; OFFICIAL skips these factors entirely
    verified_multipliers: Mapping[VerificationLevel, FactorMultipliers] = field(
        default_factory=lambda: _frozen({
            VerificationLevel.ESTABLISHED: VERIFIED_MULTIPLIERS,
            VerificationLevel.COMMUNITY: VERIFIED_MULTIPLIERS,
        })
    )
    heuristic_multipliers: FactorMultipliers = HEURISTIC_MULTIPLIERS

    # Step 3: venue factors
    venue_multipliers: VenueMultipliers = field(default_factory=VenueMultipliers)

    very_new_days: float = 1.0
    new_days: float = 7.0
    new_token_scale: float = 0.7
    established_days: float = 30.0
    low_transfers: int = 10
    high_transfers: int = 100
    very_low_liquidity: float = 10_000.0
    low_liquidity: float = 50_000.0
    strong_liquidity: float = 100_000.0
    max_volume_liquidity_ratio: float = 5.0

    # Step 5: verification-dependent level table
    level_thresholds: Mapping[VerificationLevel, LevelThresholds] = field(
        default_factory=lambda: _frozen({
            VerificationLevel.OFFICIAL: LevelThresholds(medium=25),
            VerificationLevel.ESTABLISHED: LevelThresholds(medium=20, high=35),
            VerificationLevel.COMMUNITY: LevelThresholds(medium=30, high=45),
            VerificationLevel.UNVERIFIED: LevelThresholds(medium=40, high=60, critical=80),
        })
    )

    def multipliers_for(self, level: VerificationLevel) -> FactorMultipliers | None:
        return self.verified_multipliers.get(level)

    def thresholds_for(self, level: VerificationLevel) -> LevelThresholds:
        return self.level_thresholds[level]


PROFILE_V2 = ScoringProfile(version="v2")

PROFILE_V1 = replace(
    PROFILE_V2,
    version="v1",
    weights=RiskWeights(
        mint_authority=40.0,
        freeze_authority=30.0,
        token_age=25.0,
        transaction_volume=15.0,
        creator_behavior=20.0,
        metadata_quality=10.0,
    ),
    level_thresholds=_frozen({
        **PROFILE_V2.level_thresholds,
        VerificationLevel.UNVERIFIED: LevelThresholds(medium=30, high=55, critical=80),
    }),
)

PROFILES: Mapping[str, ScoringProfile] = _frozen({
    PROFILE_V2.version: PROFILE_V2,
    PROFILE_V1.version: PROFILE_V1,
})

DEFAULT_PROFILE = PROFILE_V2


def get_profile(version: str) -> ScoringProfile:
    try:
        return PROFILES[version.strip().lower()]
    except KeyError:
        raise ConfigurationError(f"unknown scoring profile {version!r}; expected one of {sorted(PROFILES)}") from None
