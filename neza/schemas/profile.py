"""User profile schemas fed into the matching engine.

Built once per session from intake answers and document analysis.
Every scoring input is optional: an absent field skips its check rather
than failing it. Numeric fields reject NaN, infinities and negatives.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from neza.exceptions import MalformedProfileError
from neza.schemas.enums import BureauStatus, EmploymentType

_FROZEN = ConfigDict(frozen=True, allow_inf_nan=False)


class PersonalInfo(BaseModel):
    """Identity data collected at intake."""

    model_config = _FROZEN

    name: str | None = None
    dni: str | None = None               # 8-digit Peruvian national ID
    age: int | None = Field(default=None, ge=0, le=130)


class EmploymentInfo(BaseModel):
    """Employment and income."""

    model_config = _FROZEN

    type: EmploymentType | None = None
    monthly_income: Decimal | None = Field(default=None, ge=0)   # soles
    work_time_months: int | None = Field(default=None, ge=0)
    company: str | None = None


class CreditInfo(BaseModel):
    """Credit bureau signals."""

    model_config = _FROZEN

    score: int | None = Field(default=None, ge=0)
    debt_to_income: Decimal | None = Field(default=None, ge=0)    # percentage, e.g. 25 = 25%
    has_negative_history: bool = False
    bureau_status: BureauStatus | None = None


class DocumentAnalysis(BaseModel):
    """Outcome of analysing one uploaded document."""

    model_config = _FROZEN

    document_type: str
    is_valid: bool
    confidence: Decimal = Field(ge=0, le=1)
    issues: tuple[str, ...] = ()


class UserProfile(BaseModel):
    """Aggregated user data for one matching run.

    ``documents`` maps a document-type slug (e.g. ``"dni"``) to its
    analysis; ``quality_score`` summarizes document reliability (0–100).
    """

    model_config = _FROZEN

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    employment: EmploymentInfo = Field(default_factory=EmploymentInfo)
    credit: CreditInfo = Field(default_factory=CreditInfo)
    documents: dict[str, DocumentAnalysis] = Field(default_factory=dict)
    quality_score: Decimal = Field(default=Decimal("0"), ge=0, le=100)


def parse_profile(data: dict[str, Any]) -> UserProfile:
    """Validate raw profile data, rejecting malformed input.

    Raises:
        MalformedProfileError: If any field is missing its type, negative,
            NaN or out of range.
    """
    try:
        return UserProfile.model_validate(data)
    except ValidationError as exc:
        msg = f"Malformed user profile: {exc.error_count()} invalid field(s)"
        raise MalformedProfileError(msg) from exc
