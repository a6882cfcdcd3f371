"""Domain enums shared by profile, catalog and auction schemas.

All enums use str mixin for JSON serialization.
"""

from __future__ import annotations

from enum import Enum


class EmploymentType(str, Enum):
    """How the user earns income."""

    EMPLOYEE = "employee"
    SELF_EMPLOYED = "self_employed"
    BUSINESS_OWNER = "business_owner"
    RETIRED = "retired"


class BureauStatus(str, Enum):
    """Credit bureau (INFOCORP) standing."""

    NORMAL = "normal"
    PROBLEM = "problem"
    DEFICIENT = "deficient"


class EntityType(str, Enum):
    """SBS entity classification."""

    BANK = "bank"
    CAJA = "caja"
    FINANCIERA = "financiera"
    COOPERATIVA = "cooperativa"


class ProductType(str, Enum):
    """Financial product families offered in the marketplace."""

    PERSONAL_LOAN = "personal_loan"
    VEHICLE_LOAN = "vehicle_loan"
    MORTGAGE = "mortgage"
    CREDIT_CARD = "credit_card"
    BUSINESS_LOAN = "business_loan"


class ProductSource(str, Enum):
    """Where a product definition came from."""

    CATALOG = "catalog"      # static SBS registry
    LIVE_FEED = "live_feed"  # bank API ingestion


class RiskTier(str, Enum):
    """Coarse default-risk classification."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class OfferStatus(str, Enum):
    """Auction offer lifecycle: created → active → expired | withdrawn."""

    CREATED = "created"
    ACTIVE = "active"
    EXPIRED = "expired"
    WITHDRAWN = "withdrawn"


class SpecialCondition(str, Enum):
    """Tags attached to an offer when it enters the auction."""

    PREFERRED_CLIENT = "preferred_client"
    NO_FEES = "no_fees"
    LOW_RISK = "low_risk"
    EXPRESS_APPROVAL = "express_approval"
    REAL_TIME_DATA = "real_time_data"


# Spanish display labels for the presentation layer
SPECIAL_CONDITION_LABELS: dict[SpecialCondition, str] = {
    SpecialCondition.PREFERRED_CLIENT: "Cliente preferencial",
    SpecialCondition.NO_FEES: "Sin comisiones",
    SpecialCondition.LOW_RISK: "Bajo riesgo",
    SpecialCondition.EXPRESS_APPROVAL: "Aprobación express en 24 horas",
    SpecialCondition.REAL_TIME_DATA: "Datos en tiempo real",
}
