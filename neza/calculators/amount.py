"""Recommended principal calculator.

Payment capacity is 30% of monthly income, reduced by the share already
committed to existing debt. Capacity times the product's longest term
gives the affordable principal, which is clamped to the product limits.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from neza.schemas.catalog import FinancialProduct
from neza.schemas.profile import UserProfile

PAYMENT_CAPACITY_SHARE = Decimal("0.30")


def _to_soles(value: Decimal) -> Decimal:
    """Round to 2 decimal places."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def available_monthly_income(monthly_income: Decimal, debt_to_income: Decimal | None) -> Decimal:
    """Monthly amount the applicant can devote to a new installment."""
    dti = debt_to_income if debt_to_income is not None else Decimal("0")
    return monthly_income * PAYMENT_CAPACITY_SHARE * (1 - dti / 100)


def recommend_amount(profile: UserProfile, product: FinancialProduct) -> Decimal:
    """Recommend a principal bounded by affordability and product limits.

    Returns ``product.conditions.min_amount`` when income is unknown.
    """
    conditions = product.conditions
    income = profile.employment.monthly_income
    if income is None:
        return conditions.min_amount

    available = available_monthly_income(income, profile.credit.debt_to_income)
    by_affordability = available * conditions.max_term_months

    return _to_soles(min(max(by_affordability, conditions.min_amount), conditions.max_amount))
