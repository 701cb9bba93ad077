"""User-facing reschedule notifications."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .business_days import count_business_days
from .holidays import HolidayIndex
from .logger import get_logger
from .models import DateRange, Product

logger = get_logger()


def format_reschedule_message(
    product_name: str,
    date_range: DateRange,
    holidays: HolidayIndex,
    date_format: str = "%b %d, %Y",
) -> str:
    """Summary shown after a successful reschedule.

    Example:
        Checkout - 4 business days
        From Dec 30, 2024
        To Jan 03, 2025
    """
    count = count_business_days(date_range.start, date_range.end, holidays)
    unit = "business day" if count == 1 else "business days"
    return (
        f"{product_name} - {count} {unit}\n"
        f"From {date_range.start.strftime(date_format)}\n"
        f"To {date_range.end.strftime(date_format)}"
    )


@dataclass
class Notification:
    ok: bool
    message: str


def _default_notifications() -> list[Notification]:
    return []


@dataclass
class NotificationLog:
    """RescheduleListener that formats and records every notification."""

    products: dict[str, Product]
    holidays: HolidayIndex
    date_format: str = "%b %d, %Y"
    notifications: list[Notification] = field(default_factory=_default_notifications)

    @classmethod
    def for_products(
        cls, products: Iterable[Product], holidays: HolidayIndex, date_format: str = "%b %d, %Y"
    ) -> NotificationLog:
        return cls({p.id: p for p in products}, holidays, date_format)

    def on_reschedule_succeeded(self, product_id: str, date_range: DateRange) -> None:
        product = self.products.get(product_id)
        name = product.name if product else product_id
        message = format_reschedule_message(name, date_range, self.holidays, self.date_format)
        self.notifications.append(Notification(ok=True, message=message))

    def on_reschedule_rejected(self, reason: str) -> None:
        message = f"Could not update product dates: {reason}"
        logger.error(message)
        self.notifications.append(Notification(ok=False, message=message))
