"""Matching engine — profile evaluation, catalog ranking and per-entity dedup."""

from neza.matching.dedupe import dedupe
from neza.matching.engine import match_products, match_with_feed
from neza.matching.evaluator import evaluate_profile

__all__ = [
    "dedupe",
    "evaluate_profile",
    "match_products",
    "match_with_feed",
]
