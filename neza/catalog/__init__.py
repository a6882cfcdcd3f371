"""Product catalog sources — static SBS registry and live bank feed adapter."""

from neza.catalog.feed import FeedProduct, feed_catalog, parse_feed, products_for_profile
from neza.catalog.loader import load_catalog, load_entity
from neza.catalog.registry import sbs_catalog

__all__ = [
    "FeedProduct",
    "feed_catalog",
    "load_catalog",
    "load_entity",
    "parse_feed",
    "products_for_profile",
    "sbs_catalog",
]
