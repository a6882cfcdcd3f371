"""Profile evaluator — scores one profile against one product's requirements.

Pure Python, deterministic. Independent checks, each evaluated only
when the profile carries the field:

  age within range          +20
  income ≥ minimum          +min(2.5, income / minimum) × 10
  work time ≥ minimum       +15
  credit score ≥ minimum    +min(2.0, score / minimum) × 10
  DTI ≤ maximum             +15
  accepted employment type  +5   (only when the product lists types)

Document quality adds ``quality_score × 0.05``. Missing required documents
multiply the running score by 0.7 without failing the product. The final
score is rounded and clamped to [0, 100].
"""

from __future__ import annotations

import re
from decimal import Decimal, ROUND_HALF_UP

from neza.schemas.catalog import FinancialProduct
from neza.schemas.matching import ProfileEvaluation, RequirementCheck
from neza.schemas.profile import UserProfile

AGE_POINTS = Decimal("20")
WORK_TIME_POINTS = Decimal("15")
DTI_POINTS = Decimal("15")
EMPLOYMENT_TYPE_POINTS = Decimal("5")
INCOME_RATIO_CAP = Decimal("2.5")
SCORE_RATIO_CAP = Decimal("2.0")
RATIO_MULTIPLIER = Decimal("10")
QUALITY_BONUS_FACTOR = Decimal("0.05")
MISSING_DOCS_PENALTY = Decimal("0.7")


def document_slug(name: str) -> str:
    """Normalize a document display name to a profile document key."""
    return re.sub(r"\s+", "-", name.strip().lower())


def _plain(value: Decimal) -> str:
    """Render a Decimal without exponent or trailing zeros (1500.00 → 1500)."""
    normalized = value.normalize()
    return format(normalized, "f")


def _check_age(profile: UserProfile, product: FinancialProduct) -> RequirementCheck | None:
    age = profile.personal_info.age
    if age is None:
        return None
    req = product.requirements
    met = req.min_age <= age <= req.max_age
    return RequirementCheck(
        name="age",
        description=f"Edad debe estar entre {req.min_age} y {req.max_age} años",
        met=met,
        points=AGE_POINTS if met else Decimal("0"),
        value=str(age),
    )


def _check_income(profile: UserProfile, product: FinancialProduct) -> RequirementCheck | None:
    income = profile.employment.monthly_income
    if income is None:
        return None
    minimum = product.requirements.min_income
    met = income >= minimum
    points = min(INCOME_RATIO_CAP, income / minimum) * RATIO_MULTIPLIER if met else Decimal("0")
    return RequirementCheck(
        name="min_income",
        description=f"Ingreso mínimo requerido: S/. {_plain(minimum)}",
        met=met,
        points=points,
        value=f"S/. {_plain(income)}",
    )


def _check_work_time(profile: UserProfile, product: FinancialProduct) -> RequirementCheck | None:
    months = profile.employment.work_time_months
    if months is None:
        return None
    minimum = product.requirements.min_work_time_months
    met = months >= minimum
    return RequirementCheck(
        name="min_work_time",
        description=f"Tiempo mínimo de trabajo: {minimum} meses",
        met=met,
        points=WORK_TIME_POINTS if met else Decimal("0"),
        value=f"{months} meses",
    )


def _check_employment_type(profile: UserProfile, product: FinancialProduct) -> RequirementCheck | None:
    employment_type = profile.employment.type
    accepted = product.requirements.employment_types
    if employment_type is None or not accepted:
        return None
    met = employment_type in accepted
    return RequirementCheck(
        name="employment_type",
        description="Tipo de empleo no compatible",
        met=met,
        points=EMPLOYMENT_TYPE_POINTS if met else Decimal("0"),
        value=employment_type.value,
    )


def _check_credit_score(profile: UserProfile, product: FinancialProduct) -> RequirementCheck | None:
    score = profile.credit.score
    if score is None:
        return None
    minimum = product.requirements.min_credit_score
    met = score >= minimum
    points = min(SCORE_RATIO_CAP, Decimal(score) / minimum) * RATIO_MULTIPLIER if met else Decimal("0")
    return RequirementCheck(
        name="min_credit_score",
        description=f"Score crediticio mínimo: {minimum}",
        met=met,
        points=points,
        value=str(score),
    )


def _check_debt_to_income(profile: UserProfile, product: FinancialProduct) -> RequirementCheck | None:
    dti = profile.credit.debt_to_income
    if dti is None:
        return None
    maximum = product.requirements.max_debt_to_income
    met = dti <= maximum
    return RequirementCheck(
        name="max_debt_to_income",
        description=f"Ratio deuda/ingresos máximo: {_plain(maximum)}%",
        met=met,
        points=DTI_POINTS if met else Decimal("0"),
        value=f"{_plain(dti)}%",
    )


REQUIREMENT_CHECKS = (
    _check_age,
    _check_income,
    _check_work_time,
    _check_employment_type,
    _check_credit_score,
    _check_debt_to_income,
)


def missing_documents(profile: UserProfile, product: FinancialProduct) -> list[str]:
    """Slugs of required documents absent from the profile, in product order."""
    provided = set(profile.documents)
    return [
        slug
        for slug in (document_slug(d) for d in product.requirements.documents)
        if slug not in provided
    ]


def evaluate_profile(profile: UserProfile, product: FinancialProduct) -> ProfileEvaluation:
    """Evaluate one product's requirements against a profile.

    Returns:
        ProfileEvaluation with every performed check, the clamped integer
        score, the ordered missing-requirement messages and the pass/fail flag.
    """
    checks = [c for c in (fn(profile, product) for fn in REQUIREMENT_CHECKS) if c is not None]

    score = sum((c.points for c in checks), Decimal("0"))
    score += profile.quality_score * QUALITY_BONUS_FACTOR

    missing = [c.description for c in checks if not c.met]

    absent_docs = missing_documents(profile, product)
    if absent_docs:
        missing.append(f"Documentos faltantes: {', '.join(absent_docs)}")
        score *= MISSING_DOCS_PENALTY

    rounded = int(score.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return ProfileEvaluation(
        checks=tuple(checks),
        missing_documents=tuple(absent_docs),
        compatibility_score=max(0, min(100, rounded)),
        meets_requirements=all(c.met for c in checks),
        missing_requirements=tuple(missing),
    )
