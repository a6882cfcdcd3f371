"""Estimated annual rate (TEA) calculator.

Pure Python, Decimal arithmetic. The estimate starts from the midpoint of
the product's rate range and adds risk adjustments in percentage points:

  credit score  < 350 → +3.0   < 400 → +1.5   > 500 → −1.0
  DTI           > 40% → +2.0   < 20% → −0.5
  doc quality   < 70  → +1.0   > 90  → −0.5

The result is floored at the product's own minimum rate.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from neza.schemas.catalog import FinancialProduct
from neza.schemas.profile import UserProfile


def to_rate(value: Decimal) -> Decimal:
    """Round a rate to 2 decimal places."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def risk_adjustment(profile: UserProfile) -> Decimal:
    """Sum of risk adjustments (percentage points) for a profile."""
    adjustment = Decimal("0")

    score = profile.credit.score
    if score is not None:
        if score < 350:
            adjustment += Decimal("3.0")
        elif score < 400:
            adjustment += Decimal("1.5")
        elif score > 500:
            adjustment -= Decimal("1.0")

    dti = profile.credit.debt_to_income
    if dti is not None:
        if dti > 40:
            adjustment += Decimal("2.0")
        elif dti < 20:
            adjustment -= Decimal("0.5")

    if profile.quality_score < 70:
        adjustment += Decimal("1.0")
    elif profile.quality_score > 90:
        adjustment -= Decimal("0.5")

    return adjustment


def estimate_rate(profile: UserProfile, product: FinancialProduct) -> Decimal:
    """Estimate the annual rate this profile would be offered.

    Args:
        profile: Applicant profile.
        product: Product whose rate range anchors the estimate.

    Returns:
        Rate in percent, 2 decimals, never below ``product.rate.min``.
    """
    base_rate = (product.rate.min + product.rate.max) / 2
    return to_rate(max(product.rate.min, base_rate + risk_adjustment(profile)))
