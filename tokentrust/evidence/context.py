"""
Build an AnalysisContext from validated evidence records.

The only place time enters the analysis: token age is taken from the
transaction summary, or derived from first/last transaction timestamps
against an explicitly injected `now`. Without either, age stays unknown.
"""

from __future__ import annotations

from datetime import datetime, timezone

from tokentrust.analysis_engine.models import AnalysisContext, TokenIdentity
from tokentrust.evidence.liquidity import analyze_volume_liquidity, calculate_rug_pull_risk
from tokentrust.evidence.models import (
    CreatorProfile,
    EvidenceBundle,
    LiquiditySnapshot,
    OnChainAuthority,
    SocialSnapshot,
    TokenMetadataRecord,
    TransactionSummary,
)
from tokentrust.trust_logging import get_logger

logger = get_logger(__name__)

SECONDS_PER_DAY = 86_400


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def derive_days_active(summary: TransactionSummary, now: datetime | None) -> float | None:
    if summary.days_active is not None:
        return summary.days_active
    if summary.first_tx_at is None:
        return None
    end = summary.last_tx_at or now
    if end is None:
        logger.debug("token_age_unknown", reason="no_reference_time")
        return None
    seconds = (_as_utc(end) - _as_utc(summary.first_tx_at)).total_seconds()
    return max(0.0, seconds / SECONDS_PER_DAY)


def build_analysis_context(
    identity: TokenIdentity,
    *,
    metadata: TokenMetadataRecord | None = None,
    authority: OnChainAuthority | None = None,
    transactions: TransactionSummary | None = None,
    creator: CreatorProfile | None = None,
    liquidity: LiquiditySnapshot | None = None,
    social: SocialSnapshot | None = None,
    now: datetime | None = None,
) -> AnalysisContext:
    fields: dict = {}
    summary = metadata.to_summary() if metadata is not None else None

    if authority is not None:
        fields.update(
            mint_revoked=authority.mint_revoked,
            freeze_revoked=authority.freeze_revoked,
            supply=authority.supply,
        )

    if transactions is not None:
        fields.update(
            days_active=derive_days_active(transactions, now),
            total_transfers=transactions.total_transfers,
        )

    if creator is not None:
        fields["creator_risk"] = creator.risk_level

    if liquidity is not None:
        if liquidity.rug_pull_detected is None:
            rug = calculate_rug_pull_risk(liquidity)
            rug_detected, rug_confidence, rug_indicators = rug.detected, rug.confidence, rug.indicators
        else:
            rug_detected = liquidity.rug_pull_detected
            rug_confidence = liquidity.rug_pull_confidence
            rug_indicators = tuple(liquidity.rug_pull_indicators)
        fields.update(
            total_liquidity=liquidity.total_liquidity,
            volume_24h=liquidity.volume_24h,
            volume_change_24h=liquidity.volume_change_24h,
            pool_count=liquidity.pool_count,
            rug_pull_detected=rug_detected,
            rug_pull_confidence=rug_confidence,
            rug_pull_indicators=rug_indicators,
            volume_liquidity=analyze_volume_liquidity(liquidity, summary),
            liquidity_locked_pct=liquidity.locked_pct,
            liquidity_lock_days=liquidity.lock_days,
        )

    if social is not None:
        counts = social.community_member_counts
        fields.update(
            social_score=social.overall_score,
            twitter_verified=social.twitter_verified,
            twitter_followers=counts.twitter,
            telegram_members=counts.telegram,
            discord_members=counts.discord,
        )

    return AnalysisContext(token=identity, metadata=summary, **fields)


def context_from_bundle(bundle: EvidenceBundle, now: datetime | None = None) -> AnalysisContext:
    return build_analysis_context(
        TokenIdentity(address=bundle.token),
        metadata=bundle.metadata,
        authority=bundle.authority,
        transactions=bundle.transactions,
        creator=bundle.creator,
        liquidity=bundle.liquidity,
        social=bundle.social,
        now=now,
    )
