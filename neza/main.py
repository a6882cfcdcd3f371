"""Composition root — wires settings, logging, matcher and auction driver.

Usage:
    python -m neza.main

Runs the auction for a sample profile against the static SBS catalog and
logs the leading offer after every tick, until interrupted.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from decimal import Decimal

import structlog

from neza.auction.driver import AuctionDriver
from neza.catalog.registry import sbs_catalog
from neza.config import Settings
from neza.config import settings as default_settings
from neza.matching.dedupe import dedupe
from neza.matching.engine import match_products
from neza.schemas.catalog import ProductCatalog
from neza.schemas.enums import EmploymentType
from neza.schemas.matching import AuctionOffer
from neza.schemas.profile import CreditInfo, EmploymentInfo, PersonalInfo, UserProfile

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure stdlib logging and structlog for the process."""
    cfg = settings or default_settings
    logging.basicConfig(
        level=getattr(logging, cfg.log_level),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        stream=sys.stdout,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def build_driver(
    profile: UserProfile,
    catalog: ProductCatalog | None = None,
    settings: Settings | None = None,
) -> AuctionDriver:
    """Match, dedupe and open an auction for ``profile``; the driver is not started."""
    cfg = settings or default_settings
    matches = dedupe(match_products(profile, catalog if catalog is not None else sbs_catalog()))

    driver = AuctionDriver(settings=cfg.auction)
    driver.open(matches)
    return driver


def _log_leader(snapshot: tuple[AuctionOffer, ...]) -> None:
    leader = next((o for o in snapshot if o.is_leading), None)
    if leader is None:
        logger.info("No active offers")
        return
    logger.info(
        "Leading offer: %s %.2f%% (from %.2f%%), %d active",
        leader.match.entity.name,
        leader.current_rate,
        leader.original_rate,
        sum(1 for o in snapshot if o.is_active),
    )


SAMPLE_PROFILE = UserProfile(
    personal_info=PersonalInfo(name="Juan Carlos García López", dni="12345678", age=38),
    employment=EmploymentInfo(
        type=EmploymentType.EMPLOYEE,
        monthly_income=Decimal("3500"),
        work_time_months=24,
    ),
    credit=CreditInfo(score=460, debt_to_income=Decimal("22")),
    quality_score=Decimal("85"),
)


async def run(profile: UserProfile = SAMPLE_PROFILE) -> None:
    driver = build_driver(profile)
    driver.subscribe(_log_leader)
    _log_leader(driver.snapshot)

    await driver.start()
    try:
        while driver.is_running:
            await asyncio.sleep(1)
    finally:
        await driver.stop()


if __name__ == "__main__":
    configure_logging()
    logger.info("Starting NEZA auction (env=%s)", default_settings.environment)
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("NEZA auction stopped")
