"""Dynamic auction simulator.

Pure functions over immutable snapshots. Each offer follows
``created → active → expired | withdrawn``:

- ``start_auction`` admits eligible matches, tags special conditions and
  draws an expiry 30–90 minutes out.
- ``advance`` decays the rate of every active offer that has not been
  ticked within ``min_tick_interval_seconds``, expires offers whose time
  is up, and re-ranks the survivors by current rate (rank 1 leads).

Rates only go down and never below ``rate_floor`` (8.0%): offers open at
the floor or above, and each decay is floored there.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Protocol

from neza.config import AuctionSettings
from neza.config import settings as default_settings
from neza.exceptions import OfferNotFoundError
from neza.schemas.enums import OfferStatus, RiskTier, SpecialCondition
from neza.schemas.matching import AuctionOffer, ProductMatch

logger = logging.getLogger(__name__)

PREFERRED_CLIENT_SCORE = 90
NO_FEES_SCORE = 80

_CLOSED = (OfferStatus.EXPIRED, OfferStatus.WITHDRAWN)


class RandomSource(Protocol):
    """Anything with ``random.Random.uniform`` semantics."""

    def uniform(self, a: float, b: float) -> float: ...


def _to_rate(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def offer_id(match: ProductMatch) -> str:
    """Stable offer id: one per (entity, product)."""
    return f"{match.entity.id}:{match.product.id}"


def special_conditions(match: ProductMatch) -> frozenset[SpecialCondition]:
    """Tags granted to a match when it enters the auction."""
    tags: set[SpecialCondition] = set()
    if match.compatibility_score >= PREFERRED_CLIENT_SCORE:
        tags.add(SpecialCondition.PREFERRED_CLIENT)
    if match.compatibility_score >= NO_FEES_SCORE:
        tags.add(SpecialCondition.NO_FEES)
    if match.risk_tier == RiskTier.LOW:
        tags.add(SpecialCondition.LOW_RISK)
        tags.add(SpecialCondition.EXPRESS_APPROVAL)
    if match.is_live:
        tags.add(SpecialCondition.REAL_TIME_DATA)
    return frozenset(tags)


def _decay_bounds(offer: AuctionOffer, cfg: AuctionSettings) -> tuple[float, float]:
    """Live feed rates move less than simulated catalog rates."""
    if offer.match.is_live:
        return cfg.feed_decay_min, cfg.feed_decay_max
    return cfg.catalog_decay_min, cfg.catalog_decay_max


def decay_rate(current: Decimal, decay: Decimal, floor: Decimal) -> Decimal:
    """Lower ``current`` by ``decay`` without crossing ``floor``."""
    return _to_rate(max(current - decay, floor))


def rank_offers(offers: Iterable[AuctionOffer]) -> tuple[AuctionOffer, ...]:
    """Activate created offers and rank active ones by current rate.

    Active offers come first (rank 1 = lowest rate, ties by id); closed
    offers follow in their previous order with ``rank=None``.
    """
    live: list[AuctionOffer] = []
    closed: list[AuctionOffer] = []
    for offer in offers:
        if offer.status in _CLOSED:
            closed.append(offer if offer.rank is None else offer.model_copy(update={"rank": None}))
        else:
            live.append(offer)

    live.sort(key=lambda o: (o.current_rate, o.id))
    ranked = [
        o if (o.status == OfferStatus.ACTIVE and o.rank == i)
        else o.model_copy(update={"status": OfferStatus.ACTIVE, "rank": i})
        for i, o in enumerate(live, start=1)
    ]
    return tuple(ranked + closed)


def start_auction(
    matches: Sequence[ProductMatch],
    now: datetime | None = None,
    rng: RandomSource | None = None,
    settings: AuctionSettings | None = None,
) -> tuple[AuctionOffer, ...]:
    """Create ranked offers from the eligible matches.

    Only matches with ``meets_requirements`` enter. At most ``max_offers``
    are admitted, in input order, so pass a ranked (and deduplicated) list.
    """
    cfg = settings or default_settings.auction
    rng = rng or random.Random(cfg.random_seed)
    now = now or _utcnow()

    eligible = [m for m in matches if m.meets_requirements][: cfg.max_offers]
    floor = Decimal(str(cfg.rate_floor))

    offers = []
    for match in eligible:
        lifetime = rng.uniform(cfg.expiry_min_minutes, cfg.expiry_max_minutes)
        # quotes below the floor open at the floor
        opening_rate = _to_rate(max(match.estimated_rate, floor))
        offers.append(AuctionOffer(
            id=offer_id(match),
            match=match,
            current_rate=opening_rate,
            original_rate=opening_rate,
            special_conditions=special_conditions(match),
            created_at=now,
            expires_at=now + timedelta(minutes=lifetime),
            last_tick_at=now,
            status=OfferStatus.CREATED,
        ))

    logger.info("Auction started: %d offers from %d matches", len(offers), len(matches))
    return rank_offers(offers)


def _tick_offer(
    offer: AuctionOffer,
    now: datetime,
    rng: RandomSource,
    cfg: AuctionSettings,
) -> AuctionOffer:
    if offer.status in _CLOSED:
        return offer

    if now >= offer.expires_at:
        logger.debug("Offer %s expired", offer.id)
        return offer.model_copy(update={"status": OfferStatus.EXPIRED, "rank": None})

    elapsed = (now - offer.last_tick_at).total_seconds()
    if elapsed < cfg.min_tick_interval_seconds:
        return offer

    low, high = _decay_bounds(offer, cfg)
    decay = Decimal(str(rng.uniform(low, high)))
    new_rate = decay_rate(offer.current_rate, decay, Decimal(str(cfg.rate_floor)))
    return offer.model_copy(update={"current_rate": new_rate, "last_tick_at": now})


def advance(
    offers: Sequence[AuctionOffer],
    now: datetime,
    rng: RandomSource | None = None,
    settings: AuctionSettings | None = None,
) -> tuple[AuctionOffer, ...]:
    """Compute the next auction snapshot at ``now``.

    The input is never modified. Calling twice with the same ``now``
    returns an equal snapshot, because the second call finds every offer
    ticked less than ``min_tick_interval_seconds`` ago.
    """
    cfg = settings or default_settings.auction
    rng = rng or random.Random(cfg.random_seed)

    snapshot = rank_offers(_tick_offer(o, now, rng, cfg) for o in offers)

    leader = leading_offer(snapshot)
    logger.debug(
        "Auction advanced: %d active, leader=%s",
        sum(1 for o in snapshot if o.is_active),
        leader.id if leader else None,
    )
    return snapshot


def withdraw(offers: Sequence[AuctionOffer], withdrawn_id: str) -> tuple[AuctionOffer, ...]:
    """Withdraw one offer from the auction and re-rank the rest.

    Raises:
        OfferNotFoundError: If no offer has the given id.
    """
    if not any(o.id == withdrawn_id for o in offers):
        msg = f"Offer {withdrawn_id} not found"
        raise OfferNotFoundError(msg)

    logger.info("Offer %s withdrawn", withdrawn_id)
    return rank_offers(
        o.model_copy(update={"status": OfferStatus.WITHDRAWN, "rank": None})
        if o.id == withdrawn_id and o.status not in _CLOSED
        else o
        for o in offers
    )


def active_offers(offers: Iterable[AuctionOffer]) -> list[AuctionOffer]:
    """Active offers in rank order."""
    return sorted((o for o in offers if o.is_active), key=lambda o: o.rank or 0)


def leading_offer(offers: Iterable[AuctionOffer]) -> AuctionOffer | None:
    """The rank-1 active offer, if any."""
    for offer in offers:
        if offer.is_leading:
            return offer
    return None
