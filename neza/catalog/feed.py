"""Live bank feed adapter.

Bank API ingestion (auth, polling, rate limits) happens outside the engine.
This module takes the records that ingestion produces, treats them as
untrusted input, and converts the valid ones into catalog entities with
``source=LIVE_FEED`` so they flow through the same matcher as static data.

Record fields (camelCase, as delivered by the banks):
  id, bankId, bankName, productName|name, productType|type, tea|interestRate,
  tcea, minAmount, maxAmount, minTerm, maxTerm, minIncome, employmentTypes,
  requirements
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from neza.exceptions import CatalogIntegrityError
from neza.schemas.catalog import (
    FinancialEntity,
    FinancialProduct,
    ProductCatalog,
    ProductConditions,
    ProductRequirements,
    RateRange,
)
from neza.schemas.enums import EmploymentType, EntityType, ProductSource, ProductType
from neza.schemas.profile import UserProfile

logger = logging.getLogger(__name__)

# Product type slugs used by Peruvian bank APIs
FEED_PRODUCT_TYPES: dict[str, ProductType] = {
    "credito-personal": ProductType.PERSONAL_LOAN,
    "credito-vehicular": ProductType.VEHICLE_LOAN,
    "credito-hipotecario": ProductType.MORTGAGE,
    "tarjeta-credito": ProductType.CREDIT_CARD,
    "credito-empresarial": ProductType.BUSINESS_LOAN,
}

FEED_EMPLOYMENT_TYPES: dict[str, EmploymentType] = {
    "dependiente": EmploymentType.EMPLOYEE,
    "independiente": EmploymentType.SELF_EMPLOYED,
    "empresario": EmploymentType.BUSINESS_OWNER,
    "jubilado": EmploymentType.RETIRED,
}

# Feeds publish no age/score/DTI rules; apply the most lenient registry rules.
FEED_DEFAULT_REQUIREMENTS: dict[str, Any] = {
    "min_age": 18,
    "max_age": 70,
    "min_work_time_months": 3,
    "min_credit_score": 300,
    "max_debt_to_income": Decimal("70"),
}


def _field(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class FeedProduct(BaseModel):
    """One product record from a bank API feed."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = Field(min_length=1)
    bank_id: str = Field(min_length=1, validation_alias=_field("bankId", "bank_id"))
    bank_name: str = Field(validation_alias=_field("bankName", "bank_name"))
    product_name: str = Field(default="Producto", validation_alias=_field("productName", "name", "product_name"))
    product_type: ProductType = Field(
        default=ProductType.PERSONAL_LOAN,
        validation_alias=_field("productType", "type", "product_type"),
    )
    tea: Decimal = Field(gt=0, validation_alias=_field("tea", "interestRate"))
    tcea: Decimal | None = Field(default=None, ge=0, validation_alias=_field("tcea", "totalCost"))
    min_amount: Decimal = Field(default=Decimal("1000"), ge=0, validation_alias=_field("minAmount", "min_amount"))
    max_amount: Decimal = Field(default=Decimal("500000"), ge=0, validation_alias=_field("maxAmount", "max_amount"))
    min_term: int = Field(default=12, gt=0, validation_alias=_field("minTerm", "min_term"))
    max_term: int = Field(default=60, gt=0, validation_alias=_field("maxTerm", "max_term"))
    min_income: Decimal = Field(default=Decimal("1000"), gt=0, validation_alias=_field("minIncome", "min_income"))
    employment_types: tuple[EmploymentType, ...] = Field(
        default=(EmploymentType.EMPLOYEE, EmploymentType.SELF_EMPLOYED),
        validation_alias=_field("employmentTypes", "employment_types"),
    )
    requirements: tuple[str, ...] = ()

    @field_validator("product_type", mode="before")
    @classmethod
    def map_product_type(cls, v: Any) -> Any:
        """Accept the banks' Spanish slugs as well as enum values."""
        if isinstance(v, str) and v in FEED_PRODUCT_TYPES:
            return FEED_PRODUCT_TYPES[v]
        return v

    @field_validator("employment_types", mode="before")
    @classmethod
    def map_employment_types(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return tuple(FEED_EMPLOYMENT_TYPES.get(item, item) if isinstance(item, str) else item for item in v)
        return v

    @model_validator(mode="after")
    def check_ranges(self) -> FeedProduct:
        if self.min_amount > self.max_amount:
            msg = f"minAmount {self.min_amount} exceeds maxAmount {self.max_amount}"
            raise ValueError(msg)
        if self.min_term > self.max_term:
            msg = f"minTerm {self.min_term} exceeds maxTerm {self.max_term}"
            raise ValueError(msg)
        return self

    def to_product(self) -> FinancialProduct:
        """Convert to a catalog product. The feed quotes a single TEA."""
        return FinancialProduct(
            id=self.id,
            name=self.product_name,
            type=self.product_type,
            requirements=ProductRequirements(
                min_income=self.min_income,
                additional_requirements=self.requirements,
                employment_types=self.employment_types,
                **FEED_DEFAULT_REQUIREMENTS,
            ),
            conditions=ProductConditions(
                min_amount=self.min_amount,
                max_amount=self.max_amount,
                min_term_months=self.min_term,
                max_term_months=self.max_term,
            ),
            rate=RateRange(min=self.tea, max=self.tea),
            source=ProductSource.LIVE_FEED,
        )


def parse_feed(records: Iterable[dict[str, Any]]) -> list[FeedProduct]:
    """Validate raw feed records, skipping the malformed ones.

    Invalid records are logged and dropped so one bad bank entry never
    blocks the rest of the feed.
    """
    products: list[FeedProduct] = []
    for raw in records:
        try:
            products.append(FeedProduct.model_validate(raw))
        except ValidationError as exc:
            record_id = raw.get("id", "<unknown>") if isinstance(raw, dict) else "<unknown>"
            logger.warning("Skipping invalid feed record %s: %d error(s)", record_id, exc.error_count())
    return products


def products_for_profile(products: Iterable[FeedProduct], profile: UserProfile) -> list[FeedProduct]:
    """Pre-filter feed products by income and employment type, cheapest TEA first.

    Profiles without income or employment type are not filtered on that field.
    """
    income = profile.employment.monthly_income
    employment_type = profile.employment.type

    selected = [
        p for p in products
        if (income is None or income >= p.min_income)
        and (employment_type is None or employment_type in p.employment_types)
    ]
    selected.sort(key=lambda p: p.tea)
    return selected


def feed_catalog(products: Iterable[FeedProduct]) -> ProductCatalog:
    """Group feed products by bank into a ProductCatalog.

    Raises:
        CatalogIntegrityError: If a bank publishes the same product id twice.
    """
    grouped: dict[str, list[FeedProduct]] = {}
    for product in products:
        grouped.setdefault(product.bank_id, []).append(product)

    entities: list[FinancialEntity] = []
    for bank_id, bank_products in grouped.items():
        ids = [p.id for p in bank_products]
        if len(ids) != len(set(ids)):
            msg = f"Duplicate product ids in feed for bank {bank_id}"
            raise CatalogIntegrityError(msg)
        entities.append(FinancialEntity(
            id=bank_id,
            name=bank_products[0].bank_name,
            type=EntityType.BANK,
            products=tuple(p.to_product() for p in bank_products),
        ))

    return ProductCatalog(entities=tuple(entities))
