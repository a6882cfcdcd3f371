"""Pydantic schemas for profiles, catalog data, matches and auction offers."""

from neza.schemas.catalog import (
    FinancialEntity,
    FinancialProduct,
    ProductCatalog,
    ProductConditions,
    ProductRequirements,
    RateRange,
)
from neza.schemas.enums import (
    BureauStatus,
    EmploymentType,
    EntityType,
    OfferStatus,
    ProductSource,
    ProductType,
    RiskTier,
    SpecialCondition,
)
from neza.schemas.matching import AuctionOffer, ProductMatch, ProfileEvaluation, RequirementCheck
from neza.schemas.profile import (
    CreditInfo,
    DocumentAnalysis,
    EmploymentInfo,
    PersonalInfo,
    UserProfile,
    parse_profile,
)

__all__ = [
    "AuctionOffer",
    "BureauStatus",
    "CreditInfo",
    "DocumentAnalysis",
    "EmploymentInfo",
    "EmploymentType",
    "EntityType",
    "FinancialEntity",
    "FinancialProduct",
    "OfferStatus",
    "PersonalInfo",
    "ProductCatalog",
    "ProductConditions",
    "ProductMatch",
    "ProductRequirements",
    "ProductSource",
    "ProductType",
    "ProfileEvaluation",
    "RateRange",
    "RequirementCheck",
    "RiskTier",
    "SpecialCondition",
    "UserProfile",
    "parse_profile",
]
