"""Tests for the auction driver (periodic ticker + snapshot publisher)."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from neza.auction.driver import AuctionDriver
from neza.catalog.registry import sbs_catalog
from neza.config import AuctionSettings
from neza.exceptions import AuctionTickError
from neza.matching import dedupe, match_products
from neza.schemas.enums import EmploymentType
from neza.schemas.profile import CreditInfo, EmploymentInfo, PersonalInfo, UserProfile

T0 = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock; optionally steps forward on every read."""

    def __init__(self, start: datetime = T0, auto_step: timedelta | None = None) -> None:
        self.now = start
        self.auto_step = auto_step

    def __call__(self) -> datetime:
        current = self.now
        if self.auto_step is not None:
            self.now += self.auto_step
        return current

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FixedRandom:
    def __init__(self, value: float) -> None:
        self.value = value

    def uniform(self, a: float, b: float) -> float:
        return min(max(self.value, a), b)


def _matches():
    profile = UserProfile(
        personal_info=PersonalInfo(age=35),
        employment=EmploymentInfo(
            type=EmploymentType.EMPLOYEE,
            monthly_income=Decimal("3000"),
            work_time_months=24,
        ),
        credit=CreditInfo(score=420, debt_to_income=Decimal("25")),
        quality_score=Decimal("95"),
    )
    return dedupe(match_products(profile, sbs_catalog()))


def _driver(clock: FakeClock, **overrides) -> AuctionDriver:
    return AuctionDriver(settings=AuctionSettings(**overrides), clock=clock, rng=FixedRandom(0.5))


class TestSnapshots:
    def test_open_publishes_ranked_offers(self) -> None:
        driver = _driver(FakeClock())
        snapshot = driver.open(_matches())
        assert driver.snapshot is snapshot
        assert len(snapshot) > 0
        assert driver.leader is not None
        assert driver.leader.rank == 1

    def test_tick_decays_and_publishes(self) -> None:
        clock = FakeClock()
        driver = _driver(clock)
        opened = driver.open(_matches())

        clock.advance(30)
        ticked = driver.tick()

        assert driver.snapshot is ticked
        assert driver.tick_count == 1
        for before in opened:
            after = next(o for o in ticked if o.id == before.id)
            assert after.current_rate <= before.current_rate

    def test_published_snapshot_is_immutable_tuple(self) -> None:
        clock = FakeClock()
        driver = _driver(clock)
        opened = driver.open(_matches())
        rates = [o.current_rate for o in opened]

        clock.advance(30)
        driver.tick()

        assert isinstance(opened, tuple)
        assert [o.current_rate for o in opened] == rates

    def test_double_tick_same_time(self) -> None:
        clock = FakeClock()
        driver = _driver(clock)
        driver.open(_matches())
        clock.advance(30)
        first = driver.tick()
        second = driver.tick()
        assert first == second

    def test_withdraw_through_driver(self) -> None:
        driver = _driver(FakeClock())
        driver.open(_matches())
        leader_id = driver.leader.id
        driver.withdraw(leader_id)
        assert driver.leader is not None
        assert driver.leader.id != leader_id


class TestFailures:
    def test_failed_tick_keeps_previous_snapshot(self) -> None:
        clock = FakeClock()
        driver = _driver(clock)
        opened = driver.open(_matches())
        clock.advance(30)

        with patch("neza.auction.driver.advance", side_effect=RuntimeError("boom")):
            with pytest.raises(AuctionTickError):
                driver.tick()

        assert driver.snapshot is opened
        assert driver.failed_ticks == 1
        assert driver.tick_count == 0

    def test_failing_subscriber_is_isolated(self) -> None:
        clock = FakeClock()
        driver = _driver(clock)
        broken = MagicMock(side_effect=ValueError("bad handler"))
        received = []
        driver.subscribe(broken)
        driver.subscribe(received.append)

        driver.open(_matches())

        broken.assert_called_once()
        assert received == [driver.snapshot]


class TestLifecycle:
    @pytest.mark.asyncio()
    async def test_start_ticks_until_stopped(self) -> None:
        clock = FakeClock(auto_step=timedelta(seconds=30))
        driver = _driver(clock, tick_interval_seconds=0.01)
        driver.open(_matches())

        await driver.start()
        assert driver.is_running
        await asyncio.sleep(0.1)
        await driver.stop()

        assert not driver.is_running
        assert driver.tick_count >= 1
        assert driver.leader is not None

    @pytest.mark.asyncio()
    async def test_ticker_survives_failures(self) -> None:
        clock = FakeClock(auto_step=timedelta(seconds=30))
        driver = _driver(clock, tick_interval_seconds=0.01)
        opened = driver.open(_matches())

        with patch("neza.auction.driver.advance", side_effect=RuntimeError("boom")):
            await driver.start()
            await asyncio.sleep(0.05)
            assert driver.is_running
            await driver.stop()

        assert driver.failed_ticks >= 1
        assert driver.snapshot is opened

    @pytest.mark.asyncio()
    async def test_start_twice_and_stop_without_start(self) -> None:
        driver = _driver(FakeClock(), tick_interval_seconds=10)
        await driver.stop()
        await driver.start()
        task = driver._task
        await driver.start()
        assert driver._task is task
        await driver.stop()
        assert driver._task is None
