"""Segment classification for product timelines."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from .business_days import get_business_days_in_range
from .holidays import HolidayIndex
from .logger import debug_enabled, get_logger
from .models import SegmentType

if TYPE_CHECKING:
    from .models import Product

logger = get_logger()

Classification = dict[date, SegmentType]


def classify_range(start: date, end: date, holidays: HolidayIndex) -> Classification:
    """Classify every business day in [start, end].

    Days that are not business days get no entry: no segment is rendered for
    weekends or holidays inside a range.
    """
    business_days = get_business_days_in_range(start, end, holidays)
    last = len(business_days) - 1

    result: Classification = {}
    for i, day in enumerate(business_days):
        if last == 0:
            result[day] = SegmentType.SINGLE
        elif i == 0:
            result[day] = SegmentType.FIRST
        elif i == last:
            result[day] = SegmentType.LAST
        else:
            result[day] = SegmentType.MIDDLE
    return result


class TimelineClassifier:
    """Caches per-product classifications.

    Each product keeps at most one cached entry, keyed by
    (start_date, end_date, holiday set version). A change to any of those
    replaces the entry on next access, so stale results are never served.
    """

    def __init__(self) -> None:
        self._cache: dict[str, tuple[tuple[date, date, str], Classification]] = {}
        self.hits = 0
        self.misses = 0

    def classify(
        self, product_id: str, start: date, end: date, holidays: HolidayIndex
    ) -> Classification:
        key = (start, end, holidays.version)
        cached = self._cache.get(product_id)
        if cached is not None and cached[0] == key:
            self.hits += 1
            return cached[1]

        self.misses += 1
        if debug_enabled():
            logger.debug(f"Classifying {product_id} over {start}..{end} (holidays {key[2]})")
        result = classify_range(start, end, holidays)
        self._cache[product_id] = (key, result)
        return result

    def classify_product(self, product: Product, holidays: HolidayIndex) -> Classification:
        return self.classify(product.id, product.start_date, product.end_date, holidays)

    def segment_type(
        self, product: Product, day: date, holidays: HolidayIndex
    ) -> SegmentType | None:
        """Segment type of product on day, or None if no segment renders there."""
        return self.classify_product(product, holidays).get(day)

    def invalidate(self, product_id: str | None = None) -> None:
        """Drop cached entries for one product, or all of them."""
        if product_id is None:
            self._cache.clear()
        else:
            self._cache.pop(product_id, None)

    def prune(self, live_product_ids: set[str]) -> None:
        """Forget products that are no longer in the product list."""
        for product_id in list(self._cache):
            if product_id not in live_product_ids:
                del self._cache[product_id]

    def __len__(self) -> int:
        return len(self._cache)
