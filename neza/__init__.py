"""NEZA matching engine — ranks financial products for a profile and runs the rate auction."""

from neza.auction import AuctionDriver, advance, start_auction
from neza.matching import dedupe, match_products, match_with_feed
from neza.schemas import AuctionOffer, ProductCatalog, ProductMatch, UserProfile

__all__ = [
    "AuctionDriver",
    "AuctionOffer",
    "ProductCatalog",
    "ProductMatch",
    "UserProfile",
    "advance",
    "dedupe",
    "match_products",
    "match_with_feed",
    "start_auction",
]
