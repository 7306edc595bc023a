"""
Recommendation generator: pure lookup over (score, verification, heuristic).

Verified tokens get an acknowledgement of level and sources, plus a caution
note above CAUTION_SCORE. Unverified tokens are banded by score, with a
"recently launched" framing when the heuristic classifier supports them.
"""

from __future__ import annotations

from tokentrust.analysis_engine.models import HeuristicFlag, VerificationResult

CAUTION_SCORE = 20
EXTREME_SCORE = 80
HIGH_SCORE = 60
MODERATE_SCORE = 40


def recommend(score: int, verification: VerificationResult, heuristic: HeuristicFlag | None) -> list[str]:
    recommendations: list[str] = []

    if verification.is_verified:
        recommendations.append(f"VERIFIED: {verification.level.value} verification level")
        if verification.sources:
            recommendations.append(f"Verified on: {', '.join(verification.sources)}")
        if score > CAUTION_SCORE:
            recommendations.append("Note: Despite verification, some risk factors remain")
        return recommendations

    if heuristic is not None and heuristic.is_recently_launched_legitimate:
        recommendations.append("RECENTLY LAUNCHED: Token shows positive signals")
        recommendations.append("Monitor for verification on major platforms")
        recommendations.append("Check for ongoing development and community activity")
        if score >= HIGH_SCORE:
            recommendations.append("HIGH RISK: Exercise caution despite positive signals")
        elif score >= MODERATE_SCORE:
            recommendations.append("MODERATE RISK: Monitor closely for red flags")
        else:
            recommendations.append("LOW RISK: Promising new token - continue monitoring")
        recommendations.append("Tip: Wait for verification before major investments")
        return recommendations

    if score >= EXTREME_SCORE:
        recommendations.append("EXTREME RISK: Avoid this token completely")
    elif score >= HIGH_SCORE:
        recommendations.append("HIGH RISK: Exercise extreme caution")
    else:
        recommendations.append("UNVERIFIED: Token lacks verification but may be legitimate")
    return recommendations
