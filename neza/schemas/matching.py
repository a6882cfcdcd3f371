"""Matching and auction output schemas.

ProductMatch is created fresh per matching run and never patched:
re-evaluate instead. AuctionOffer values are replaced, not mutated,
on every tick so published snapshots stay consistent for readers.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from neza.schemas.catalog import FinancialEntity, FinancialProduct
from neza.schemas.enums import OfferStatus, ProductSource, RiskTier, SpecialCondition

_FROZEN = ConfigDict(frozen=True, allow_inf_nan=False)


class RequirementCheck(BaseModel):
    """A single requirement evaluated against the profile."""

    model_config = _FROZEN

    name: str                            # e.g. "min_income"
    description: str                     # Spanish, shown when unmet
    met: bool
    points: Decimal = Decimal("0")       # score contribution when met
    value: str | None = None             # profile value, for display/audit


class ProfileEvaluation(BaseModel):
    """Requirement checks and score for one (profile, product) pair."""

    model_config = _FROZEN

    checks: tuple[RequirementCheck, ...] = ()
    missing_documents: tuple[str, ...] = ()
    compatibility_score: int = Field(ge=0, le=100)
    meets_requirements: bool
    missing_requirements: tuple[str, ...] = ()


class ProductMatch(BaseModel):
    """One profile evaluated against one product."""

    model_config = _FROZEN

    entity: FinancialEntity
    product: FinancialProduct
    compatibility_score: int = Field(ge=0, le=100)
    meets_requirements: bool
    missing_requirements: tuple[str, ...] = ()
    estimated_rate: Decimal              # percent TEA, 2 decimals
    recommended_amount: Decimal          # soles, 2 decimals
    risk_tier: RiskTier

    @property
    def entity_id(self) -> str:
        return self.entity.id

    @property
    def is_live(self) -> bool:
        """True when the product came from a bank API feed."""
        return self.product.source == ProductSource.LIVE_FEED


class AuctionOffer(BaseModel):
    """An eligible match competing in the dynamic auction."""

    model_config = _FROZEN

    id: str
    match: ProductMatch
    current_rate: Decimal
    original_rate: Decimal               # rate when the offer entered the auction
    special_conditions: frozenset[SpecialCondition] = frozenset()
    created_at: datetime
    expires_at: datetime
    last_tick_at: datetime
    status: OfferStatus = OfferStatus.CREATED
    rank: int | None = None              # 1-based among active offers, None otherwise

    @property
    def is_active(self) -> bool:
        return self.status == OfferStatus.ACTIVE

    @property
    def is_leading(self) -> bool:
        return self.is_active and self.rank == 1

    @property
    def rate_improvement(self) -> Decimal:
        """Percentage points shaved off the original rate so far."""
        return self.original_rate - self.current_rate

    def time_remaining(self, now: datetime) -> timedelta:
        """Time until expiry, never negative."""
        return max(self.expires_at - now, timedelta(0))
