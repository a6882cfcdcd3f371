"""Dynamic auction — offer lifecycle, periodic rate decay and ranking."""

from neza.auction.driver import AuctionDriver
from neza.auction.simulator import active_offers, advance, leading_offer, start_auction, withdraw

__all__ = [
    "AuctionDriver",
    "active_offers",
    "advance",
    "leading_offer",
    "start_auction",
    "withdraw",
]
