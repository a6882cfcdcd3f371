"""Financial calculators — rate estimate, recommended amount, risk tier."""

from neza.calculators.amount import recommend_amount
from neza.calculators.rate import estimate_rate, risk_adjustment
from neza.calculators.risk import classify_risk

__all__ = [
    "estimate_rate",
    "risk_adjustment",
    "recommend_amount",
    "classify_risk",
]
