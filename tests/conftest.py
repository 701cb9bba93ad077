"""Pytest configuration and fixtures for plancal tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from datetime import date
from typing import Any, TypeVar

import pytest

from plancal.holidays import HolidayIndex
from plancal.logger import reset_logger
from plancal.models import CommitResult, DateRange, Holiday, Product

T = TypeVar("T")

NEW_YEAR = date(2025, 1, 1)


@pytest.fixture(autouse=True)
def clean_logger() -> None:
    """Reset logger configuration before each test for isolation."""
    reset_logger()


@pytest.fixture
def new_year() -> HolidayIndex:
    """Holiday set with only 2025-01-01 (a Wednesday)."""
    return HolidayIndex([Holiday(date=NEW_YEAR, name="New Year's Day", id="h1")])


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion (no async test plugin needed)."""
    return asyncio.run(coro)


def product(product_id: str, start: date, end: date, **kwargs: Any) -> Product:
    """Build a Product with its name defaulting to its id."""
    kwargs.setdefault("name", product_id.title())
    return Product(id=product_id, start_date=start, end_date=end, **kwargs)


class RecordingCommit:
    """Commit callback that records calls and returns a fixed result."""

    def __init__(
        self,
        result: CommitResult | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.result = result or CommitResult.success()
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, date, date]] = []

    async def __call__(self, product_id: str, start_date: date, end_date: date) -> CommitResult:
        self.calls.append((product_id, start_date, end_date))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class RecordingListener:
    """RescheduleListener that keeps every notification."""

    def __init__(self) -> None:
        self.succeeded: list[tuple[str, DateRange]] = []
        self.rejected: list[str] = []

    def on_reschedule_succeeded(self, product_id: str, date_range: DateRange) -> None:
        self.succeeded.append((product_id, date_range))

    def on_reschedule_rejected(self, reason: str) -> None:
        self.rejected.append(reason)


@pytest.fixture
def make_commit() -> Callable[..., RecordingCommit]:
    return RecordingCommit


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()
