"""Tests for the rate, amount and risk calculators."""

from __future__ import annotations

from decimal import Decimal

import pytest

from neza.calculators.amount import recommend_amount
from neza.calculators.rate import estimate_rate, risk_adjustment
from neza.calculators.risk import classify_risk, risk_points
from neza.schemas.catalog import FinancialProduct, ProductConditions, ProductRequirements, RateRange
from neza.schemas.enums import ProductType, RiskTier
from neza.schemas.profile import CreditInfo, EmploymentInfo, UserProfile


def _product(
    rate_min: str = "16.5",
    rate_max: str = "24.0",
    min_amount: str = "1000",
    max_amount: str = "150000",
    max_term: int = 60,
) -> FinancialProduct:
    return FinancialProduct(
        id="test-product",
        name="Producto de prueba",
        type=ProductType.PERSONAL_LOAN,
        requirements=ProductRequirements(
            min_age=18,
            max_age=70,
            min_income=Decimal("1500"),
            min_credit_score=350,
            max_debt_to_income=Decimal("60"),
        ),
        conditions=ProductConditions(
            min_amount=Decimal(min_amount),
            max_amount=Decimal(max_amount),
            min_term_months=6,
            max_term_months=max_term,
        ),
        rate=RateRange(min=Decimal(rate_min), max=Decimal(rate_max)),
    )


def _profile(
    income: str | None = "3000",
    score: int | None = 420,
    dti: str | None = "25",
    quality: str = "95",
) -> UserProfile:
    return UserProfile(
        employment=EmploymentInfo(monthly_income=Decimal(income) if income is not None else None),
        credit=CreditInfo(score=score, debt_to_income=Decimal(dti) if dti is not None else None),
        quality_score=Decimal(quality),
    )


class TestRateEstimator:
    def test_reference_scenario(self) -> None:
        """Base 20.25, only the quality bonus applies (−0.5)."""
        rate = estimate_rate(_profile(), _product())
        assert rate == Decimal("19.75")
        assert Decimal("16.5") <= rate <= Decimal("21")

    def test_neutral_profile_gets_midpoint(self) -> None:
        assert estimate_rate(_profile(quality="80"), _product()) == Decimal("20.25")

    @pytest.mark.parametrize(
        ("score", "expected"),
        [(300, Decimal("3.0")), (380, Decimal("1.5")), (450, Decimal("0")), (600, Decimal("-1.0"))],
    )
    def test_credit_score_adjustment(self, score, expected) -> None:
        assert risk_adjustment(_profile(score=score, dti="30", quality="80")) == expected

    @pytest.mark.parametrize(
        ("dti", "expected"),
        [("45", Decimal("2.0")), ("30", Decimal("0")), ("10", Decimal("-0.5"))],
    )
    def test_dti_adjustment(self, dti, expected) -> None:
        assert risk_adjustment(_profile(score=450, dti=dti, quality="80")) == expected

    @pytest.mark.parametrize(
        ("quality", "expected"),
        [("50", Decimal("1.0")), ("80", Decimal("0")), ("95", Decimal("-0.5"))],
    )
    def test_quality_adjustment(self, quality, expected) -> None:
        assert risk_adjustment(_profile(score=450, dti="30", quality=quality)) == expected

    def test_absent_credit_data_contributes_nothing(self) -> None:
        assert risk_adjustment(_profile(score=None, dti=None, quality="80")) == Decimal("0")

    def test_floor_at_product_minimum(self) -> None:
        """A narrow range with a big discount never drops below rate.min."""
        rate = estimate_rate(_profile(score=700, dti="5", quality="99"), _product("16.5", "17.0"))
        assert rate == Decimal("16.50")

    def test_rounded_to_two_decimals(self) -> None:
        rate = estimate_rate(_profile(quality="80"), _product("16.333", "20.0"))
        assert rate == Decimal("18.17")


class TestAmountRecommender:
    def test_affordability_within_limits(self) -> None:
        # 3000 × 0.30 × 0.75 × 60 = 40500
        assert recommend_amount(_profile(), _product()) == Decimal("40500.00")

    def test_clamped_to_max(self) -> None:
        assert recommend_amount(_profile(income="50000", dti="0"), _product()) == Decimal("150000")

    def test_clamped_to_min(self) -> None:
        assert recommend_amount(_profile(income="100", dti="50"), _product(min_amount="5000")) == Decimal("5000")

    def test_unknown_income_returns_minimum(self) -> None:
        assert recommend_amount(_profile(income=None), _product()) == Decimal("1000")

    def test_absent_dti_treated_as_zero(self) -> None:
        # 2000 × 0.30 × 36 = 21600
        assert recommend_amount(_profile(income="2000", dti=None), _product(max_term=36)) == Decimal("21600.00")

    def test_dti_above_100_falls_back_to_minimum(self) -> None:
        assert recommend_amount(_profile(dti="150"), _product()) == Decimal("1000")


class TestRiskClassifier:
    def test_reference_profile_is_low_risk(self) -> None:
        # score 420 → 2, DTI 25 → 2, quality 95 → 1
        assert risk_points(_profile()) == 5
        assert classify_risk(_profile()) == RiskTier.LOW

    def test_medium(self) -> None:
        # score 420 → 2, DTI 40 → 1, quality 70 → 0
        assert classify_risk(_profile(dti="40", quality="70")) == RiskTier.MEDIUM

    def test_high(self) -> None:
        # score 300 → 1, DTI 60 → 0, quality 50 → 0
        assert classify_risk(_profile(score=300, dti="60", quality="50")) == RiskTier.HIGH

    def test_excellent_score_alone_is_medium(self) -> None:
        assert classify_risk(_profile(score=700, dti=None, quality="50")) == RiskTier.MEDIUM

    def test_no_signals_is_high(self) -> None:
        assert classify_risk(UserProfile()) == RiskTier.HIGH
