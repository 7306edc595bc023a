"""
Local evidence probes: checks answerable from already-collected data,
without touching the network.

External registry probes (CoinGecko, Jupiter, Solana Token Registry) are run
by callers and handed in as RegistryProbe records; their nominal weights are
published here so absent or failed probes keep a consistent weight.
"""

from __future__ import annotations

from tokentrust.analysis_engine.models import EvidenceCheck, MetadataSummary, TokenIdentity
from tokentrust.analysis_engine.registry import TokenRegistry, default_governance_registry
from tokentrust.evidence.models import LiquiditySnapshot

SOURCE_COINGECKO = "CoinGecko"
SOURCE_JUPITER = "Jupiter"
SOURCE_TOKEN_REGISTRY = "Solana Token Registry"
SOURCE_ONCHAIN_METADATA = "On-chain Metadata"
SOURCE_DEX_LIQUIDITY = "DEX Liquidity"
SOURCE_GOVERNANCE = "Governance Token"

NOMINAL_SOURCE_WEIGHTS: dict[str, float] = {
    SOURCE_COINGECKO: 40.0,
    SOURCE_JUPITER: 30.0,
    SOURCE_TOKEN_REGISTRY: 25.0,
    SOURCE_ONCHAIN_METADATA: 15.0,
    SOURCE_DEX_LIQUIDITY: 20.0,
    SOURCE_GOVERNANCE: 35.0,
}

METADATA_MATCH_RATIO = 0.8
MAX_REASONABLE_DECIMALS = 18
LIQUIDITY_PRESENCE_USD = 50_000


def metadata_check(metadata: MetadataSummary | None) -> EvidenceCheck:
    """Matched when at least 80% of the five metadata quality signals hold."""
    nominal = NOMINAL_SOURCE_WEIGHTS[SOURCE_ONCHAIN_METADATA]
    if metadata is None:
        return EvidenceCheck.absent(SOURCE_ONCHAIN_METADATA, nominal)

    signals = {
        "has_basic_info": bool(metadata.name and metadata.symbol and metadata.has_image),
        "has_website": metadata.has_website,
        "has_description": metadata.has_description,
        "immutable": metadata.mutable is not True,
        "reasonable_decimals": metadata.decimals is not None and metadata.decimals <= MAX_REASONABLE_DECIMALS,
    }
    ratio = sum(signals.values()) / len(signals)
    matched = ratio >= METADATA_MATCH_RATIO
    return EvidenceCheck(
        source=SOURCE_ONCHAIN_METADATA,
        participated=True,
        matched=matched,
        weight=nominal if matched else 0.0,
        details={"signals": signals, "score": round(ratio * 100)},
        nominal_weight=nominal,
    )


def liquidity_presence_check(snapshot: LiquiditySnapshot | None) -> EvidenceCheck:
    nominal = NOMINAL_SOURCE_WEIGHTS[SOURCE_DEX_LIQUIDITY]
    if snapshot is None:
        return EvidenceCheck.absent(SOURCE_DEX_LIQUIDITY, nominal)
    matched = snapshot.total_liquidity > LIQUIDITY_PRESENCE_USD
    return EvidenceCheck(
        source=SOURCE_DEX_LIQUIDITY,
        participated=True,
        matched=matched,
        weight=nominal if matched else 0.0,
        details={"total_liquidity": snapshot.total_liquidity, "pool_count": snapshot.pool_count},
        nominal_weight=nominal,
    )


def governance_check(identity: TokenIdentity, registry: TokenRegistry | None = None) -> EvidenceCheck:
    nominal = NOMINAL_SOURCE_WEIGHTS[SOURCE_GOVERNANCE]
    registry = registry if registry is not None else default_governance_registry()
    protocol = registry.lookup(identity.address)
    if protocol is None:
        return EvidenceCheck(SOURCE_GOVERNANCE, participated=True, matched=False, weight=0.0, nominal_weight=nominal)
    return EvidenceCheck(
        source=SOURCE_GOVERNANCE,
        participated=True,
        matched=True,
        weight=nominal,
        details={"protocol": protocol, "type": "governance"},
        nominal_weight=nominal,
    )


def local_checks(
    identity: TokenIdentity,
    metadata: MetadataSummary | None,
    liquidity: LiquiditySnapshot | None,
    governance_registry: TokenRegistry | None = None,
) -> list[EvidenceCheck]:
    """The three local probes, in fixed order."""
    return [
        metadata_check(metadata),
        liquidity_presence_check(liquidity),
        governance_check(identity, governance_registry),
    ]
