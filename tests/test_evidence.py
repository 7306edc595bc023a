"""
Evidence boundary: schema validation, local probes, liquidity derivation,
context building and the async collector.
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime

import pytest

from tokentrust.analysis_engine.models import (
    CreatorRisk,
    EvidenceCheck,
    MetadataSummary,
    TokenIdentity,
    VolumeLiquidityContext,
)
from tokentrust.analysis_engine.registry import TokenRegistry
from tokentrust.core.exceptions import EvidenceValidationError
from tokentrust.evidence import (
    EvidenceBundle,
    LiquiditySnapshot,
    OnChainAuthority,
    RegistryProbe,
    TransactionSummary,
    analyze_volume_liquidity,
    build_analysis_context,
    calculate_rug_pull_risk,
    collect_checks,
    governance_check,
    liquidity_presence_check,
    metadata_check,
    parse_evidence,
)
from tokentrust.evidence.context import derive_days_active

MINT = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
JUP_MINT = "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN"


# --- Schema validation ---


def test_parse_evidence_dispatches_on_kind():
    """Each kind maps to its own record type."""
    record = parse_evidence({"kind": "onchain", "mint_revoked": True, "freeze_revoked": False, "decimals": 6, "supply": "1000"})
    assert isinstance(record, OnChainAuthority)
    probe = parse_evidence({"kind": "registry", "source": "CoinGecko", "matched": True, "weight": 40, "details": {"trust_score": 90}})
    assert isinstance(probe, RegistryProbe)
    assert probe.to_check() == EvidenceCheck("CoinGecko", True, True, 40.0, {"trust_score": 90.0})


def test_parse_evidence_rejects_bad_payloads():
    """Validation errors surface as EvidenceValidationError with the source kind."""
    with pytest.raises(EvidenceValidationError) as exc:
        parse_evidence({"kind": "liquidity", "total_liquidity": -1, "volume_24h": 0, "pool_count": 0})
    assert exc.value.source == "liquidity"
    assert any("total_liquidity" in msg for msg in exc.value.errors)

    with pytest.raises(EvidenceValidationError):
        parse_evidence({"kind": "onchain", "mint_revoked": True, "freeze_revoked": True, "decimals": 6, "supply": "12abc"})

    with pytest.raises(EvidenceValidationError):
        parse_evidence({"kind": "weather"})


@pytest.mark.parametrize("field", ["weight", "nominal_weight"])
@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_registry_probe_rejects_non_finite_weights(field, value):
    """Infinite and NaN weights fail at the boundary."""
    payload = {"kind": "registry", "source": "CoinGecko", "matched": True, "weight": 40, field: value}
    with pytest.raises(EvidenceValidationError):
        parse_evidence(payload)


def test_bundle_rejects_json_infinity():
    """json.load accepts Infinity; the bundle does not."""
    payload = json.loads('{"token": "%s", "registry": [{"source": "X", "matched": true, "weight": Infinity}]}' % MINT)
    with pytest.raises(EvidenceValidationError):
        EvidenceBundle.from_payload(payload)


def test_registry_probe_not_participating_never_matches():
    """A non-participating probe cannot count as matched."""
    check = RegistryProbe(source="Jupiter", matched=True, weight=30, participated=False).to_check()
    assert check.participated is False
    assert check.matched is False


def test_bundle_from_payload():
    """A full bundle validates without per-record kind tags."""
    bundle = EvidenceBundle.from_payload({
        "token": MINT,
        "authority": {"mint_revoked": True, "freeze_revoked": True, "decimals": 9, "supply": "1000000000"},
        "transactions": {"total_transfers": 40, "days_active": 12},
        "creator": {"risk_level": "LOW"},
        "registry": [{"source": "CoinGecko", "matched": False}],
    })
    assert bundle.creator.risk_level is CreatorRisk.LOW
    assert bundle.registry[0].weight == 0.0
    assert bundle.liquidity is None


def test_bundle_requires_token():
    """Missing token address is invalid evidence."""
    with pytest.raises(EvidenceValidationError) as exc:
        EvidenceBundle.from_payload({"registry": []})
    assert exc.value.source == "bundle"


# --- Local probes ---


def test_metadata_probe():
    """Four of five metadata signals (80%) is a match worth 15."""
    complete = MetadataSummary(name="Bonk", symbol="BONK", has_image=True, has_website=True, has_description=False, mutable=False, decimals=5)
    check = metadata_check(complete)
    assert check.matched is True
    assert check.weight == 15.0
    assert check.details["score"] == 80

    sparse = MetadataSummary(name="Bonk", symbol="BONK", mutable=True, decimals=5)
    assert metadata_check(sparse).matched is False
    assert metadata_check(sparse).weight == 0.0
    assert metadata_check(None).participated is False


def test_liquidity_presence_probe():
    """Liquidity above 50k matches for 20."""
    deep = LiquiditySnapshot(total_liquidity=75_000, volume_24h=1000, pool_count=2)
    thin = LiquiditySnapshot(total_liquidity=50_000, volume_24h=1000, pool_count=2)
    assert liquidity_presence_check(deep).weight == 20.0
    assert liquidity_presence_check(thin).matched is False
    assert liquidity_presence_check(None).participated is False


def test_governance_probe():
    """Known governance tokens match for 35 with the protocol name."""
    check = governance_check(TokenIdentity(JUP_MINT))
    assert check.matched is True
    assert check.weight == 35.0
    assert check.details == {"protocol": "Jupiter DAO", "type": "governance"}
    assert governance_check(TokenIdentity(MINT)).matched is False
    custom = TokenRegistry({MINT: "Test DAO"}, "governance")
    assert governance_check(TokenIdentity(MINT), custom).details["protocol"] == "Test DAO"


# --- Liquidity derivation ---


def test_rug_pull_derivation():
    """Thin single pool: 30 + 20 + 25 indicators, detected."""
    risk = calculate_rug_pull_risk(LiquiditySnapshot(total_liquidity=5000, volume_24h=1000, pool_count=1))
    assert risk.detected is True
    assert risk.confidence == 75
    assert risk.indicators == ("Very low liquidity", "Low liquidity", "Single low-liquidity pool")

    healthy = calculate_rug_pull_risk(LiquiditySnapshot(total_liquidity=200_000, volume_24h=50_000, pool_count=3))
    assert healthy.detected is False
    assert healthy.indicators == ()


def test_rug_pull_threshold_is_exclusive():
    """Exactly 50 is not detected."""
    risk = calculate_rug_pull_risk(LiquiditySnapshot(total_liquidity=20_000, volume_24h=0, pool_count=2, volume_change_24h=600))
    assert risk.confidence == 40
    risk = calculate_rug_pull_risk(LiquiditySnapshot(total_liquidity=8000, volume_24h=0, pool_count=2))
    assert risk.confidence == 50
    assert risk.detected is False


def test_rug_pull_confidence_capped():
    """Confidence never exceeds 100."""
    risk = calculate_rug_pull_risk(LiquiditySnapshot(total_liquidity=0, volume_24h=10, pool_count=0, volume_change_24h=900))
    assert risk.confidence == 100


def test_volume_liquidity_pattern_contexts():
    """Deep multi-pool markets read legitimate; thin churned pools read suspicious."""
    deep = analyze_volume_liquidity(LiquiditySnapshot(total_liquidity=2_000_000, volume_24h=1_000_000, pool_count=6))
    assert deep.context is VolumeLiquidityContext.LEGITIMATE
    assert deep.confidence == 0

    churned = analyze_volume_liquidity(
        LiquiditySnapshot(total_liquidity=20_000, volume_24h=300_000, pool_count=1, volume_change_24h=300)
    )
    assert churned.context is VolumeLiquidityContext.SUSPICIOUS
    assert churned.confidence == 90
    assert churned.ratio == 15.0

    assert analyze_volume_liquidity(LiquiditySnapshot(total_liquidity=0, volume_24h=10, pool_count=0)) is None


def test_known_token_lowers_pattern_confidence():
    """Known high-volume tokens get a legitimacy adjustment."""
    snap = LiquiditySnapshot(total_liquidity=60_000, volume_24h=400_000, pool_count=1)
    plain = analyze_volume_liquidity(snap, MetadataSummary(name="Some Token", symbol="SOME"))
    known = analyze_volume_liquidity(snap, MetadataSummary(name="USD Coin", symbol="USDC"))
    assert plain.context is VolumeLiquidityContext.NORMAL
    assert known.context is VolumeLiquidityContext.LEGITIMATE


# --- Context building ---


def test_age_derived_from_first_transaction(now):
    """Age is measured from the first transaction to the injected now."""
    summary = TransactionSummary(total_transfers=10, first_tx_at=datetime(2024, 4, 21))
    assert derive_days_active(summary, now) == 10.0
    assert derive_days_active(summary, None) is None


def test_reported_age_wins(now):
    """days_active from the collector is used as-is."""
    summary = TransactionSummary(total_transfers=10, days_active=3.5, first_tx_at=datetime(2020, 1, 1))
    assert derive_days_active(summary, now) == 3.5


def test_last_transaction_bounds_age(now):
    """last_tx_at takes precedence over now."""
    summary = TransactionSummary(
        total_transfers=10,
        first_tx_at="2024-04-01T00:00:00Z",
        last_tx_at="2024-04-03T12:00:00+00:00",
    )
    assert derive_days_active(summary, now) == 2.5


def test_build_context_derives_venue_signals(now):
    """Rug pull and pattern are derived when the snapshot omits them."""
    context = build_analysis_context(
        TokenIdentity(MINT),
        liquidity=LiquiditySnapshot(total_liquidity=5000, volume_24h=1000, pool_count=1),
        now=now,
    )
    assert context.rug_pull_detected is True
    assert context.rug_pull_confidence == 75
    assert context.volume_liquidity is not None
    assert context.days_active is None


def test_build_context_keeps_reported_rug_pull():
    """A reported rug-pull flag is not second-guessed."""
    context = build_analysis_context(
        TokenIdentity(MINT),
        liquidity=LiquiditySnapshot(total_liquidity=5000, volume_24h=1000, pool_count=1, rug_pull_detected=False),
    )
    assert context.rug_pull_detected is False
    assert context.rug_pull_indicators == ()


def test_context_from_full_bundle(now):
    """Every evidence category lands in the context."""
    bundle = EvidenceBundle.from_payload({
        "token": MINT,
        "metadata": {"name": "Fresh", "symbol": "FRSH", "image": "https://x/img.png"},
        "authority": {"mint_revoked": False, "freeze_revoked": True, "decimals": 6, "supply": "500"},
        "transactions": {"total_transfers": 25, "first_tx_at": "2024-04-26T00:00:00Z", "unique_accounts": 12},
        "creator": {"risk_level": "MEDIUM"},
        "social": {"overall_score": 70, "twitter_verified": True, "community_member_counts": {"telegram": 1200}},
    })
    from tokentrust.evidence import context_from_bundle

    context = context_from_bundle(bundle, now=now)
    assert context.metadata.has_image is True
    assert context.mint_revoked is False
    assert context.days_active == 5.0
    assert context.total_transfers == 25
    assert not hasattr(context, "unique_accounts")
    assert context.creator_risk is CreatorRisk.MEDIUM
    assert context.telegram_members == 1200
    assert context.total_liquidity is None


# --- Collector ---


def test_collect_checks_isolates_failures():
    """Errors and timeouts become non-participating checks, order preserved."""

    async def coingecko():
        return RegistryProbe(source="CoinGecko", matched=True, weight=40)

    async def jupiter():
        raise ConnectionError("unreachable")

    async def registry():
        await asyncio.sleep(1)
        return {"matched": True, "weight": 25}

    async def raw():
        return {"matched": False}

    checks = asyncio.run(collect_checks(
        {"CoinGecko": coingecko, "Jupiter": jupiter, "Solana Token Registry": registry, "Birdeye": raw},
        timeout_sec=0.05,
    ))
    assert [c.source for c in checks] == ["CoinGecko", "Jupiter", "Solana Token Registry", "Birdeye"]
    assert checks[0].matched is True
    assert checks[1] == EvidenceCheck.absent("Jupiter", 30.0)
    assert checks[2] == EvidenceCheck.absent("Solana Token Registry", 25.0)
    assert checks[3].participated is True
    assert checks[3].matched is False


def test_collect_checks_invalid_payload_is_absent():
    """Payloads that fail validation count as no signal."""

    async def broken():
        return {"matched": "maybe"}

    async def wrong_type():
        return 42

    checks = asyncio.run(collect_checks({"CoinGecko": broken, "Jupiter": wrong_type}, timeout_sec=1))
    assert all(not c.participated for c in checks)


def test_collect_checks_uses_env_timeout(monkeypatch):
    """Timeout defaults to TOKENTRUST_PROBE_TIMEOUT_SEC."""
    monkeypatch.setenv("TOKENTRUST_PROBE_TIMEOUT_SEC", "0.01")

    async def slow():
        await asyncio.sleep(1)
        return {"matched": True, "weight": 40}

    checks = asyncio.run(collect_checks({"CoinGecko": slow}))
    assert checks == [EvidenceCheck.absent("CoinGecko", 40.0)]
    assert asyncio.run(collect_checks({})) == []
