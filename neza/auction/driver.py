"""Auction driver — periodic ticker that owns the published auction snapshot.

The driver is the only writer. Each tick computes the next snapshot with
the pure ``advance`` function and swaps the reference; readers always get
a complete immutable tuple. A failed tick is logged and the previous
snapshot stays published.

Usage:
    driver = AuctionDriver(settings=settings.auction)
    driver.open(dedupe(match_products(profile, sbs_catalog())))
    await driver.start()
    ...
    driver.snapshot          # latest published offers
    await driver.stop()
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from neza.auction.simulator import RandomSource, advance, leading_offer, start_auction, withdraw
from neza.config import AuctionSettings
from neza.config import settings as default_settings
from neza.exceptions import AuctionTickError
from neza.schemas.matching import AuctionOffer, ProductMatch

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
SnapshotHandler = Callable[[tuple[AuctionOffer, ...]], None]


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


class AuctionDriver:
    """Runs one auction: publishes snapshots and advances them on a fixed interval."""

    def __init__(
        self,
        settings: AuctionSettings | None = None,
        clock: Clock = system_clock,
        rng: RandomSource | None = None,
    ) -> None:
        self._settings = settings or default_settings.auction
        self._clock = clock
        # Seeded from system entropy unless a seed is configured
        self._rng = rng or random.Random(self._settings.random_seed)
        self._snapshot: tuple[AuctionOffer, ...] = ()
        self._handlers: list[SnapshotHandler] = []
        self._task: asyncio.Task[None] | None = None
        self.tick_count = 0
        self.failed_ticks = 0

    # ── Snapshot access ─────────────────────────────────────────────

    @property
    def snapshot(self) -> tuple[AuctionOffer, ...]:
        """The latest published snapshot (immutable)."""
        return self._snapshot

    @property
    def leader(self) -> AuctionOffer | None:
        return leading_offer(self._snapshot)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, handler: SnapshotHandler) -> None:
        """Register a callback invoked with every newly published snapshot."""
        self._handlers.append(handler)
        logger.info("Registered snapshot subscriber: %s", getattr(handler, "__name__", repr(handler)))

    def _publish(self, snapshot: tuple[AuctionOffer, ...]) -> None:
        self._snapshot = snapshot
        for handler in list(self._handlers):
            try:
                handler(snapshot)
            except Exception:
                logger.exception("Snapshot subscriber %s failed", getattr(handler, "__name__", repr(handler)))

    # ── Auction operations ──────────────────────────────────────────

    def open(self, matches: Sequence[ProductMatch]) -> tuple[AuctionOffer, ...]:
        """Start a fresh auction from ranked, deduplicated matches."""
        snapshot = start_auction(matches, now=self._clock(), rng=self._rng, settings=self._settings)
        self._publish(snapshot)
        return snapshot

    def tick(self) -> tuple[AuctionOffer, ...]:
        """Advance the auction once and publish the result.

        Raises:
            AuctionTickError: If advancing failed. The previous snapshot
                remains published.
        """
        previous = self._snapshot
        try:
            snapshot = advance(previous, self._clock(), rng=self._rng, settings=self._settings)
        except Exception as exc:
            self.failed_ticks += 1
            logger.exception("Auction tick failed; keeping previous snapshot")
            msg = "Failed to advance auction"
            raise AuctionTickError(msg) from exc

        self.tick_count += 1
        self._publish(snapshot)
        return snapshot

    def withdraw(self, withdrawn_id: str) -> tuple[AuctionOffer, ...]:
        """Withdraw an offer and publish the re-ranked snapshot."""
        snapshot = withdraw(self._snapshot, withdrawn_id)
        self._publish(snapshot)
        return snapshot

    # ── Lifecycle ───────────────────────────────────────────────────

    async def start(self) -> None:
        """Start the periodic ticker. No-op if already running."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Auction driver started (interval=%ss)", self._settings.tick_interval_seconds)

    async def stop(self) -> None:
        """Stop the ticker. The last snapshot stays readable."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Auction driver stopped after %d ticks (%d failed)", self.tick_count, self.failed_ticks)

    async def _run(self) -> None:
        """Background task: tick every ``tick_interval_seconds`` until cancelled."""
        while True:
            try:
                await asyncio.sleep(self._settings.tick_interval_seconds)
                self.tick()
            except asyncio.CancelledError:
                logger.info("Auction ticker shutting down")
                raise
            except AuctionTickError:
                continue
