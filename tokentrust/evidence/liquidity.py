"""
Venue signal derivation from a DEX liquidity snapshot.

calculate_rug_pull_risk: additive indicator score, detected above 50.
analyze_volume_liquidity: contextual reading of volume / liquidity, so a
deep, multi-pool market with heavy turnover is not treated like a thin pool
being churned.
"""

from __future__ import annotations

from dataclasses import dataclass

from tokentrust.analysis_engine.models import (
    MetadataSummary,
    VolumeLiquidityContext,
    VolumeLiquidityPattern,
)
from tokentrust.evidence.models import LiquiditySnapshot

RUG_PULL_DETECTION_THRESHOLD = 50

# Symbols/names expected to trade far above their pooled liquidity
HIGH_VOLUME_LEGITIMATE = frozenset({
    "wrapped sol", "wsol", "sol", "usdc", "usdt", "dai",
    "jup", "jupiter", "ray", "raydium", "orca", "orca token",
})


@dataclass(frozen=True)
class RugPullRisk:
    detected: bool
    confidence: int
    indicators: tuple[str, ...]


def calculate_rug_pull_risk(snapshot: LiquiditySnapshot) -> RugPullRisk:
    indicators: list[str] = []
    confidence = 0
    liquidity = snapshot.total_liquidity

    if liquidity < 10_000:
        indicators.append("Very low liquidity")
        confidence += 30
    if liquidity < 50_000:
        indicators.append("Low liquidity")
        confidence += 20
    if snapshot.volume_24h > liquidity * 5:
        indicators.append("High volume relative to liquidity")
        confidence += 25
    if snapshot.volume_change_24h > 500:
        indicators.append("Suspicious volume spike")
        confidence += 20
    if snapshot.pool_count == 0:
        indicators.append("No DEX pools found")
        confidence += 40
    if snapshot.pool_count == 1 and liquidity < 10_000:
        indicators.append("Single low-liquidity pool")
        confidence += 25

    return RugPullRisk(
        detected=confidence > RUG_PULL_DETECTION_THRESHOLD,
        confidence=min(confidence, 100),
        indicators=tuple(indicators),
    )


def _is_known_high_volume(metadata: MetadataSummary | None) -> bool:
    if metadata is None:
        return False
    name = (metadata.name or "").strip().lower()
    symbol = (metadata.symbol or "").strip().lower()
    return name in HIGH_VOLUME_LEGITIMATE or symbol in HIGH_VOLUME_LEGITIMATE


def analyze_volume_liquidity(
    snapshot: LiquiditySnapshot,
    metadata: MetadataSummary | None = None,
) -> VolumeLiquidityPattern | None:
    """Return None when there is no liquidity to compare against."""
    liquidity = snapshot.total_liquidity
    if liquidity <= 0:
        return None

    ratio = snapshot.volume_24h / liquidity
    factors: list[str] = []
    confidence = 0

    if ratio > 10:
        factors.append("Extremely high volume-to-liquidity ratio (>10x)")
        confidence += 30
    elif ratio > 5:
        factors.append("High volume-to-liquidity ratio (>5x)")
        confidence += 20
    elif ratio > 2:
        factors.append("Moderate volume-to-liquidity ratio (>2x)")
        confidence += 10

    if snapshot.pool_count >= 5:
        factors.append("Multiple DEX pools present (legitimate indicator)")
        confidence -= 15
    elif snapshot.pool_count == 1:
        factors.append("Single DEX pool (higher risk)")
        confidence += 15

    if liquidity > 1_000_000:
        factors.append("High liquidity (>$1M) - legitimate indicator")
        confidence -= 20
    elif liquidity < 50_000:
        factors.append("Low liquidity (<$50K) - higher risk")
        confidence += 20

    if snapshot.volume_change_24h > 200:
        factors.append("Suspicious volume spike (>200% change)")
        confidence += 25
    elif snapshot.volume_change_24h < -80:
        factors.append("Volume crash (>80% decrease)")
        confidence += 20

    if _is_known_high_volume(metadata):
        factors.append("Known legitimate token with expected high volume")
        confidence -= 30

    if confidence >= 50:
        context = VolumeLiquidityContext.SUSPICIOUS
        explanation = "High confidence of suspicious trading patterns detected"
    elif confidence <= 20:
        context = VolumeLiquidityContext.LEGITIMATE
        explanation = "Patterns consistent with legitimate trading activity"
    else:
        context = VolumeLiquidityContext.NORMAL
        explanation = "Mixed indicators - moderate risk level"

    return VolumeLiquidityPattern(
        ratio=ratio,
        context=context,
        confidence=min(max(confidence, 0), 100),
        explanation=explanation,
        factors=tuple(factors),
    )
