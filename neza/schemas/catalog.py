"""Financial entity and product schemas.

Static reference data: immutable during a matching run. Contradictory
ranges (min above max) are rejected on construction so they never reach
the matcher.
"""

from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from neza.schemas.enums import EmploymentType, EntityType, ProductSource, ProductType

_FROZEN = ConfigDict(frozen=True, allow_inf_nan=False)


class RateRange(BaseModel):
    """Annual effective rate (TEA) range in percent."""

    model_config = _FROZEN

    min: Decimal = Field(ge=0)
    max: Decimal = Field(ge=0)

    @model_validator(mode="after")
    def check_order(self) -> RateRange:
        if self.min > self.max:
            msg = f"rate min {self.min} exceeds max {self.max}"
            raise ValueError(msg)
        return self


class ProductRequirements(BaseModel):
    """What an applicant must satisfy."""

    model_config = _FROZEN

    min_age: int = Field(ge=0)
    max_age: int = Field(ge=0)
    min_income: Decimal = Field(gt=0)              # monthly, soles
    min_work_time_months: int = Field(default=0, ge=0)
    min_credit_score: int = Field(gt=0)
    max_debt_to_income: Decimal = Field(ge=0)      # percentage
    documents: tuple[str, ...] = ()                # display names, e.g. "Boletas de pago (3 últimas)"
    additional_requirements: tuple[str, ...] = ()
    restrictions: tuple[str, ...] = ()
    employment_types: tuple[EmploymentType, ...] = ()    # empty = any employment type

    @model_validator(mode="after")
    def check_age_range(self) -> ProductRequirements:
        if self.min_age > self.max_age:
            msg = f"min_age {self.min_age} exceeds max_age {self.max_age}"
            raise ValueError(msg)
        return self


class ProductConditions(BaseModel):
    """Principal and term limits of a product."""

    model_config = _FROZEN

    min_amount: Decimal = Field(ge=0)
    max_amount: Decimal = Field(ge=0)
    min_term_months: int = Field(gt=0)
    max_term_months: int = Field(gt=0)
    down_payment_percent: Decimal | None = Field(default=None, ge=0, le=100)
    time_to_approval: str | None = None

    @model_validator(mode="after")
    def check_ranges(self) -> ProductConditions:
        if self.min_amount > self.max_amount:
            msg = f"min_amount {self.min_amount} exceeds max_amount {self.max_amount}"
            raise ValueError(msg)
        if self.min_term_months > self.max_term_months:
            msg = f"min_term_months {self.min_term_months} exceeds max_term_months {self.max_term_months}"
            raise ValueError(msg)
        return self


class FinancialProduct(BaseModel):
    """One product offered by a FinancialEntity."""

    model_config = _FROZEN

    id: str = Field(min_length=1)
    name: str
    type: ProductType
    requirements: ProductRequirements
    conditions: ProductConditions
    rate: RateRange
    source: ProductSource = ProductSource.CATALOG


class FinancialEntity(BaseModel):
    """A bank or lender supervised by the SBS."""

    model_config = _FROZEN

    id: str = Field(min_length=1)
    name: str
    type: EntityType = EntityType.BANK
    sbs_code: str | None = None
    products: tuple[FinancialProduct, ...] = ()


class ProductCatalog(BaseModel):
    """Ordered collection of entities and their products."""

    model_config = _FROZEN

    entities: tuple[FinancialEntity, ...] = ()

    def iter_products(
        self, product_type: ProductType | str | None = None,
    ) -> Iterator[tuple[FinancialEntity, FinancialProduct]]:
        """Yield (entity, product) pairs, optionally filtered by product type.

        An unknown product type matches nothing.
        """
        for entity in self.entities:
            for product in entity.products:
                if product_type and product.type.value != product_type:
                    continue
                yield entity, product

    @property
    def product_count(self) -> int:
        return sum(len(e.products) for e in self.entities)
