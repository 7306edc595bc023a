"""
Pytest fixtures for TokenTrust tests. No network: all evidence is built in memory.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from tokentrust.analysis_engine.models import (
    AnalysisContext,
    TokenIdentity,
    VerificationLevel,
    VerificationResult,
)

FRESH_MINT = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
JUP_MINT = "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN"

TOKENTRUST_ENV_VARS = (
    "TOKENTRUST_SCORING_PROFILE",
    "TOKENTRUST_WEIGHTING_POLICY",
    "TOKENTRUST_CRITICAL_REGISTRY_PATH",
    "TOKENTRUST_SCAM_KEYWORDS_PATH",
    "TOKENTRUST_PROBE_TIMEOUT_SEC",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Every test starts from default configuration."""
    for var in TOKENTRUST_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def now():
    return datetime(2024, 5, 1, tzinfo=timezone.utc)


@pytest.fixture
def fresh_identity():
    return TokenIdentity(address=FRESH_MINT)


@pytest.fixture
def unverified():
    return VerificationResult.unverified()


@pytest.fixture
def official():
    return VerificationResult(
        is_verified=True,
        level=VerificationLevel.OFFICIAL,
        confidence=100,
        reasons=("Verified on CoinGecko",),
        sources=("CoinGecko",),
    )


@pytest.fixture
def established():
    return VerificationResult(
        is_verified=True,
        level=VerificationLevel.ESTABLISHED,
        confidence=70,
        reasons=("Verified on CoinGecko", "Verified on Jupiter"),
        sources=("CoinGecko", "Jupiter"),
    )


@pytest.fixture
def risky_context(fresh_identity):
    """Scenario B inputs: both authorities active, half a day old, two transfers."""
    return AnalysisContext(
        token=fresh_identity,
        mint_revoked=False,
        freeze_revoked=False,
        days_active=0.5,
        total_transfers=2,
    )


@pytest.fixture
def established_context(fresh_identity):
    """Scenario A inputs: authorities revoked, 400 days old, 500 transfers."""
    return AnalysisContext(
        token=fresh_identity,
        mint_revoked=True,
        freeze_revoked=True,
        days_active=400,
        total_transfers=500,
    )


@pytest.fixture
def recent_context(fresh_identity):
    """Scenario C inputs: five days old, active, thin liquidity, decent social score."""
    return AnalysisContext(
        token=fresh_identity,
        days_active=5,
        total_transfers=20,
        total_liquidity=5000,
        rug_pull_detected=False,
        social_score=60,
    )
