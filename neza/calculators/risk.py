"""Risk tier classifier.

Points: credit score > 450 → 3, > 350 → 2, otherwise 1; DTI < 30% → 2,
< 50% → 1; document quality > 80 → 1. Total ≥ 5 is LOW, ≥ 3 MEDIUM,
anything else HIGH. Absent signals earn no points.
"""

from __future__ import annotations

from neza.schemas.enums import RiskTier
from neza.schemas.profile import UserProfile


def risk_points(profile: UserProfile) -> int:
    points = 0

    score = profile.credit.score
    if score is not None:
        if score > 450:
            points += 3
        elif score > 350:
            points += 2
        else:
            points += 1

    dti = profile.credit.debt_to_income
    if dti is not None:
        if dti < 30:
            points += 2
        elif dti < 50:
            points += 1

    if profile.quality_score > 80:
        points += 1

    return points


def classify_risk(profile: UserProfile) -> RiskTier:
    """Map a profile to a discrete risk tier."""
    points = risk_points(profile)
    if points >= 5:
        return RiskTier.LOW
    if points >= 3:
        return RiskTier.MEDIUM
    return RiskTier.HIGH
