"""
Heuristic classifier: flag "recently launched, probably legitimate" tokens.

Evaluates up to eleven independent signals. A signal is only counted when
its underlying data is present in the AnalysisContext (absence of evidence
is not evidence of absence). The scam-name check is always counted: a token
with no name shows no scam keyword. Verified-social and active-community
signals are only counted when they hold.

A token is flagged when it is at most max_age_days old, at least
min_signals were counted, and at least min_confidence_pct of them were
positive. Age always comes from the context, never from the wall clock.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from tokentrust.analysis_engine.models import AnalysisContext, CreatorRisk, HeuristicFlag
from tokentrust.trust_logging import get_logger

logger = get_logger(__name__)

DEFAULT_SCAM_KEYWORDS: tuple[str, ...] = ("inu", "moon", "safe", "elon", "doge", "shib", "pepe", "wojak")

SIGNAL_TOKEN_AGE = "token_age"
SIGNAL_TRANSFER_ACTIVITY = "transfer_activity"
SIGNAL_NAMED_METADATA = "named_metadata"
SIGNAL_LIQUIDITY = "liquidity"
SIGNAL_NO_SCAM_KEYWORD = "no_scam_keyword"
SIGNAL_CREATOR_BEHAVIOR = "creator_behavior"
SIGNAL_VOLUME = "volume"
SIGNAL_NO_RUG_PULL = "no_rug_pull"
SIGNAL_SOCIAL_SCORE = "social_score"
SIGNAL_VERIFIED_SOCIAL = "verified_social"
SIGNAL_ACTIVE_COMMUNITY = "active_community"


class ScamNameClassifier(Protocol):
    def is_suspicious(self, name: str) -> bool:
        ...


class KeywordScamClassifier:
    """Case-insensitive substring match against a keyword list."""

    def __init__(self, keywords: Iterable[str] = DEFAULT_SCAM_KEYWORDS) -> None:
        self.keywords = tuple(k.strip().lower() for k in keywords if k and k.strip())

    def is_suspicious(self, name: str) -> bool:
        lowered = (name or "").lower()
        return any(k in lowered for k in self.keywords)


def load_scam_keywords(path: Path | None = None) -> tuple[str, ...]:
    """Keywords from a JSON array file (or TOKENTRUST_SCAM_KEYWORDS_PATH); defaults on failure."""
    if path is None:
        from tokentrust.config.env import get_scam_keywords_path

        path = get_scam_keywords_path()
    if path is None:
        return DEFAULT_SCAM_KEYWORDS
    if not path.is_file():
        logger.debug("scam_keywords_file_missing", path=str(path))
        return DEFAULT_SCAM_KEYWORDS
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("scam_keywords_load_failed", path=str(path), error=str(e))
        return DEFAULT_SCAM_KEYWORDS
    if not isinstance(data, list):
        logger.warning("scam_keywords_not_list", path=str(path))
        return DEFAULT_SCAM_KEYWORDS
    return tuple(str(k).strip().lower() for k in data if k and str(k).strip())


@dataclass(frozen=True)
class HeuristicConfig:
    """Signal thresholds. Currency amounts are USD."""

    min_age_days: float = 0.1
    max_age_days: float = 30.0
    min_transfers: int = 5
    min_liquidity: float = 100.0
    min_volume_24h: float = 10.0
    min_social_score: float = 50.0
    min_twitter_followers: int = 5000
    min_telegram_members: int = 1000
    min_discord_members: int = 500

    min_signals: int = 4
    min_confidence_pct: float = 60.0


class HeuristicClassifier:
    def __init__(
        self,
        config: HeuristicConfig | None = None,
        name_classifier: ScamNameClassifier | None = None,
    ) -> None:
        self.config = config or HeuristicConfig()
        self.name_classifier = name_classifier or KeywordScamClassifier()

    def _active_community(self, context: AnalysisContext) -> bool:
        cfg = self.config
        return (
            (context.twitter_followers or 0) > cfg.min_twitter_followers
            or (context.telegram_members or 0) > cfg.min_telegram_members
            or (context.discord_members or 0) > cfg.min_discord_members
        )

    def classify(self, context: AnalysisContext) -> HeuristicFlag:
        cfg = self.config
        signals: list[tuple[str, bool]] = []

        if context.days_active is not None:
            signals.append((SIGNAL_TOKEN_AGE, cfg.min_age_days <= context.days_active <= cfg.max_age_days))
        if context.total_transfers is not None:
            signals.append((SIGNAL_TRANSFER_ACTIVITY, context.total_transfers >= cfg.min_transfers))
        if context.metadata is not None:
            signals.append((SIGNAL_NAMED_METADATA, context.metadata.has_real_name))
        if context.total_liquidity is not None:
            signals.append((SIGNAL_LIQUIDITY, context.total_liquidity > cfg.min_liquidity))

        name = context.metadata.name if context.metadata is not None else None
        signals.append((SIGNAL_NO_SCAM_KEYWORD, not (name and self.name_classifier.is_suspicious(name))))

        if context.creator_risk is not None:
            signals.append((SIGNAL_CREATOR_BEHAVIOR, context.creator_risk is not CreatorRisk.HIGH))
        if context.volume_24h is not None:
            signals.append((SIGNAL_VOLUME, context.volume_24h > cfg.min_volume_24h))
        if context.rug_pull_detected is not None:
            signals.append((SIGNAL_NO_RUG_PULL, not context.rug_pull_detected))
        if context.social_score is not None:
            signals.append((SIGNAL_SOCIAL_SCORE, context.social_score >= cfg.min_social_score))
        if context.twitter_verified:
            signals.append((SIGNAL_VERIFIED_SOCIAL, True))
        if self._active_community(context):
            signals.append((SIGNAL_ACTIVE_COMMUNITY, True))

        total = len(signals)
        positive = sum(1 for _, ok in signals if ok)
        confidence_pct = 100.0 * positive / total if total else 0.0

        is_recent = context.days_active is not None and context.days_active <= cfg.max_age_days
        flagged = is_recent and total >= cfg.min_signals and confidence_pct >= cfg.min_confidence_pct

        if flagged:
            logger.debug(
                "recently_launched_legitimate",
                token=context.token.address,
                positive_signals=positive,
                total_signals=total,
                confidence_pct=round(confidence_pct, 1),
                days_active=context.days_active,
            )
        return HeuristicFlag(
            is_recently_launched_legitimate=flagged,
            positive_signals=positive,
            total_signals=total,
            confidence_pct=confidence_pct,
            signals=tuple(signals),
        )


def classify(context: AnalysisContext, classifier: HeuristicClassifier | None = None) -> HeuristicFlag:
    return (classifier or HeuristicClassifier()).classify(context)
