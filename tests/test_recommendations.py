"""
Recommendation generator lookups.
"""

from __future__ import annotations

import pytest

from tokentrust.analysis_engine.models import HeuristicFlag
from tokentrust.analysis_engine.recommendations import recommend

RECENT = HeuristicFlag(True, 5, 6, 83.3)


def test_verified_without_caution(established):
    """Verified at low score: level and sources only."""
    assert recommend(10, established, None) == [
        "VERIFIED: ESTABLISHED verification level",
        "Verified on: CoinGecko, Jupiter",
    ]


def test_verified_caution_above_twenty(established):
    """Caution note appears only when score exceeds 20."""
    assert "Note: Despite verification, some risk factors remain" not in recommend(20, established, None)
    assert recommend(21, established, None)[-1] == "Note: Despite verification, some risk factors remain"


def test_verified_ignores_heuristic(official):
    """Verification takes precedence over the recently-launched framing."""
    assert recommend(0, official, RECENT)[0] == "VERIFIED: OFFICIAL verification level"


@pytest.mark.parametrize(
    "score,band",
    [
        (75, "HIGH RISK: Exercise caution despite positive signals"),
        (60, "HIGH RISK: Exercise caution despite positive signals"),
        (59, "MODERATE RISK: Monitor closely for red flags"),
        (40, "MODERATE RISK: Monitor closely for red flags"),
        (39, "LOW RISK: Promising new token - continue monitoring"),
    ],
)
def test_recently_launched_bands(unverified, score, band):
    """Recently launched framing, monitoring tips and a score band."""
    assert recommend(score, unverified, RECENT) == [
        "RECENTLY LAUNCHED: Token shows positive signals",
        "Monitor for verification on major platforms",
        "Check for ongoing development and community activity",
        band,
        "Tip: Wait for verification before major investments",
    ]


@pytest.mark.parametrize(
    "score,message",
    [
        (100, "EXTREME RISK: Avoid this token completely"),
        (80, "EXTREME RISK: Avoid this token completely"),
        (79, "HIGH RISK: Exercise extreme caution"),
        (60, "HIGH RISK: Exercise extreme caution"),
        (59, "UNVERIFIED: Token lacks verification but may be legitimate"),
    ],
)
def test_unverified_bands(unverified, score, message):
    """Unverified without heuristic support: one banded message."""
    assert recommend(score, unverified, HeuristicFlag.negative()) == [message]
    assert recommend(score, unverified, None) == [message]
