"""Catalog matcher — evaluates every catalog product against a user profile.

Pure Python orchestrator. No I/O, no shared state: safe to call
repeatedly and from concurrent callers. Fetching live products is the
feed collaborator's job; this module only consumes validated catalogs.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from neza.calculators.amount import recommend_amount
from neza.calculators.rate import estimate_rate
from neza.calculators.risk import classify_risk
from neza.config import MatchingSettings
from neza.config import settings as default_settings
from neza.matching.evaluator import evaluate_profile
from neza.schemas.catalog import FinancialEntity, FinancialProduct, ProductCatalog
from neza.schemas.enums import ProductType
from neza.schemas.matching import ProductMatch
from neza.schemas.profile import UserProfile

logger = logging.getLogger(__name__)


def ranking_key(match: ProductMatch) -> tuple[int, Decimal, str]:
    """Sort key: score descending, then estimated rate ascending, then product id."""
    return (-match.compatibility_score, match.estimated_rate, match.product.id)


def evaluate_product(
    profile: UserProfile,
    entity: FinancialEntity,
    product: FinancialProduct,
) -> ProductMatch:
    """Build the ProductMatch for a single (entity, product) pair."""
    evaluation = evaluate_profile(profile, product)
    return ProductMatch(
        entity=entity,
        product=product,
        compatibility_score=evaluation.compatibility_score,
        meets_requirements=evaluation.meets_requirements,
        missing_requirements=evaluation.missing_requirements,
        estimated_rate=estimate_rate(profile, product),
        recommended_amount=recommend_amount(profile, product),
        risk_tier=classify_risk(profile),
    )


def match_products(
    profile: UserProfile,
    catalog: ProductCatalog,
    product_type: ProductType | str | None = None,
) -> list[ProductMatch]:
    """Evaluate all catalog products against a profile.

    Args:
        profile: Validated applicant profile.
        catalog: Validated product catalog (static registry or feed).
        product_type: Optional product family filter.

    Returns:
        Matches ranked by compatibility score (desc), then estimated rate (asc).
    """
    matches = [
        evaluate_product(profile, entity, product)
        for entity, product in catalog.iter_products(product_type)
    ]
    matches.sort(key=ranking_key)

    logger.debug(
        "Matched %d products (%d eligible, type=%s)",
        len(matches),
        sum(1 for m in matches if m.meets_requirements),
        product_type or "any",
    )
    return matches


def match_with_feed(
    profile: UserProfile,
    catalog: ProductCatalog,
    feed_catalog: ProductCatalog,
    product_type: ProductType | str | None = None,
    settings: MatchingSettings | None = None,
) -> list[ProductMatch]:
    """Match live feed products, topping up with catalog products when the feed is thin.

    When fewer than ``min_live_matches`` live matches exist, the best catalog
    matches are added until ``max_supplemented_matches`` is reached. Live
    matches always rank ahead of catalog ones; each group uses the standard
    ranking.
    """
    cfg = settings or default_settings.matching

    live = match_products(profile, feed_catalog, product_type)
    combined = list(live)

    if len(live) < cfg.min_live_matches:
        room = max(0, cfg.max_supplemented_matches - len(live))
        supplement = match_products(profile, catalog, product_type)[:room]
        combined.extend(supplement)
        logger.debug("Feed returned %d matches, supplemented with %d catalog matches", len(live), len(supplement))

    combined.sort(key=lambda m: (not m.is_live, *ranking_key(m)))
    return combined
