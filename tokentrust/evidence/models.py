"""
Evidence records accepted from collaborators.

One pydantic model per evidence category, tagged by a `kind` literal so a
raw payload can be dispatched with parse_evidence(). Everything entering
the engine passes through these models; validation failures surface as
EvidenceValidationError at the boundary, never inside scoring.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from tokentrust.analysis_engine.models import CreatorRisk, EvidenceCheck, MetadataSummary
from tokentrust.core.exceptions import EvidenceValidationError


class OnChainAuthority(BaseModel):
    """Mint account state: authority revocation, decimals, raw supply."""

    kind: Literal["onchain"] = "onchain"
    mint_revoked: bool
    freeze_revoked: bool
    decimals: int = Field(..., ge=0, le=255)
    supply: str = Field(..., description="Raw supply in base units, as a decimal string")

    @field_validator("supply")
    @classmethod
    def _supply_is_integer(cls, v: str) -> str:
        v = v.strip()
        if not v.isdigit():
            raise ValueError("supply must be a non-negative integer string")
        return v


class RegistryDetails(BaseModel):
    model_config = ConfigDict(extra="allow")

    trust_score: float | None = None
    market_cap_rank: int | None = None
    strict_listing: bool | None = None


class RegistryProbe(BaseModel):
    """Answer from one registry or venue listing check."""

    kind: Literal["registry"] = "registry"
    source: str = Field(..., min_length=1)
    matched: bool
    weight: float = Field(0.0, ge=0, allow_inf_nan=False)
    participated: bool = True
    nominal_weight: float | None = Field(None, ge=0, allow_inf_nan=False)
    details: RegistryDetails | None = None

    def to_check(self) -> EvidenceCheck:
        details = self.details.model_dump(exclude_none=True) if self.details is not None else {}
        return EvidenceCheck(
            source=self.source,
            participated=self.participated,
            matched=self.matched and self.participated,
            weight=self.weight,
            details=details,
            nominal_weight=self.nominal_weight,
        )


class TransactionSummary(BaseModel):
    """
    Activity summary. Either days_active is reported directly, or first/last
    transaction times are given and age is derived against an injected now.
    unique_accounts and suspicious_patterns are accepted but not scored.
    """

    kind: Literal["transactions"] = "transactions"
    total_transfers: int = Field(..., ge=0)
    days_active: float | None = Field(None, ge=0)
    first_tx_at: datetime | None = None
    last_tx_at: datetime | None = None
    unique_accounts: int = Field(0, ge=0)
    suspicious_patterns: list[str] = Field(default_factory=list)


class LiquiditySnapshot(BaseModel):
    """DEX liquidity and volume snapshot across all pools. Amounts in USD."""

    kind: Literal["liquidity"] = "liquidity"
    total_liquidity: float = Field(..., ge=0)
    volume_24h: float = Field(..., ge=0)
    pool_count: int = Field(..., ge=0)
    rug_pull_detected: bool | None = Field(None, description="Derived from the snapshot when omitted")
    rug_pull_confidence: int | None = Field(None, ge=0, le=100)
    rug_pull_indicators: list[str] = Field(default_factory=list)
    volume_change_24h: float = 0.0
    locked_pct: float | None = Field(None, ge=0, le=100)
    lock_days: float | None = Field(None, ge=0)


class CommunityCounts(BaseModel):
    twitter: int | None = Field(None, ge=0)
    telegram: int | None = Field(None, ge=0)
    discord: int | None = Field(None, ge=0)


class SocialSnapshot(BaseModel):
    kind: Literal["social"] = "social"
    overall_score: float = Field(..., ge=0, le=100)
    twitter_verified: bool = False
    community_member_counts: CommunityCounts = Field(default_factory=CommunityCounts)


class TokenMetadataRecord(BaseModel):
    kind: Literal["metadata"] = "metadata"
    name: str | None = None
    symbol: str | None = None
    image: str | None = None
    description: str | None = None
    external_url: str | None = None
    decimals: int | None = Field(None, ge=0)
    mutable: bool | None = None

    def to_summary(self) -> MetadataSummary:
        return MetadataSummary(
            name=self.name,
            symbol=self.symbol,
            has_image=bool(self.image),
            has_description=bool(self.description),
            has_website=bool(self.external_url),
            mutable=self.mutable,
            decimals=self.decimals,
        )


class CreatorProfile(BaseModel):
    kind: Literal["creator"] = "creator"
    risk_level: CreatorRisk
    factors: list[str] = Field(default_factory=list)


Evidence = Annotated[
    Union[
        OnChainAuthority,
        RegistryProbe,
        TransactionSummary,
        LiquiditySnapshot,
        SocialSnapshot,
        TokenMetadataRecord,
        CreatorProfile,
    ],
    Field(discriminator="kind"),
]

_EVIDENCE_ADAPTER: TypeAdapter = TypeAdapter(Evidence)


def _messages(error: ValidationError) -> list[str]:
    return [f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in error.errors()]


def parse_evidence(payload: Mapping[str, Any]) -> Any:
    """Validate one raw collaborator payload, dispatching on its `kind`."""
    try:
        return _EVIDENCE_ADAPTER.validate_python(dict(payload))
    except ValidationError as e:
        source = str(payload.get("kind") or payload.get("source") or "unknown")
        raise EvidenceValidationError(source, _messages(e)) from e


class EvidenceBundle(BaseModel):
    """Everything collected for one token, as handed to the engine."""

    token: str = Field(..., min_length=1, description="Mint address (base58)")
    metadata: TokenMetadataRecord | None = None
    authority: OnChainAuthority | None = None
    transactions: TransactionSummary | None = None
    creator: CreatorProfile | None = None
    liquidity: LiquiditySnapshot | None = None
    social: SocialSnapshot | None = None
    registry: list[RegistryProbe] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> EvidenceBundle:
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as e:
            raise EvidenceValidationError("bundle", _messages(e)) from e
