"""Month grid assembly for the roadmap calendar.

The grid shows Monday to Friday only; weekend days are not cells at all.
Holidays swallow every product segment that would fall on them, so the grid
never suggests work happens on a holiday.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from .business_days import is_business_day, is_weekend
from .drag import DragView
from .holidays import HolidayIndex, HolidayLike
from .logger import debug_enabled, get_logger
from .models import DateRange, Holiday, Milestone, PreviewRange, Product, SegmentType
from .timeline import Classification, TimelineClassifier, classify_range

logger = get_logger()

DAYS_PER_WEEK = 7
WORKDAYS_PER_WEEK = 5
DECEMBER = 12


def month_start(day: date) -> date:
    return day.replace(day=1)


def next_month(day: date) -> date:
    """First day of the month after day's month."""
    if day.month == DECEMBER:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def previous_month(day: date) -> date:
    """First day of the month before day's month."""
    if day.month == 1:
        return date(day.year - 1, 12, 1)
    return date(day.year, day.month - 1, 1)


def visible_range(month: date) -> DateRange:
    """Days shown for month: the month padded out to full Monday-Sunday weeks."""
    first = month_start(month)
    last = next_month(first) - timedelta(days=1)
    start = first - timedelta(days=first.weekday())
    end = last + timedelta(days=DAYS_PER_WEEK - 1 - last.weekday())
    return DateRange(start, end)


class BusinessDayMapCache:
    """Business-day flags for one visible range.

    Keyed by (visible start, visible end, holiday set version); any change to
    those rebuilds the map, anything else reuses it.
    """

    def __init__(self) -> None:
        self._key: tuple[date, date, str] | None = None
        self._map: dict[date, bool] = {}

    def get(self, visible: DateRange, holidays: HolidayIndex) -> dict[date, bool]:
        key = (visible.start, visible.end, holidays.version)
        if key != self._key:
            if debug_enabled():
                logger.debug(f"Rebuilding business-day map for {visible}")
            day_map: dict[date, bool] = {}
            current = visible.start
            while current <= visible.end:
                day_map[current] = is_business_day(current, holidays)
                current += timedelta(days=1)
            self._key = key
            self._map = day_map
        return self._map


@dataclass(frozen=True)
class SegmentView:
    """One product card inside a day cell."""

    product_id: str
    product_name: str
    segment_type: SegmentType
    is_drag_preview: bool = False
    is_being_dragged: bool = False
    milestone: Milestone | None = None
    color: str | None = None


@dataclass(frozen=True)
class MilestoneMarker:
    product_id: str
    milestone: Milestone


@dataclass(frozen=True)
class DayCell:
    """Render-ready state for one weekday."""

    date: date
    holiday: Holiday | None
    is_business_day: bool
    in_current_month: bool
    is_today: bool
    segments: tuple[SegmentView, ...]
    milestone_markers: tuple[MilestoneMarker, ...]


@dataclass(frozen=True)
class MonthGrid:
    """Snapshot of one month, rows of Monday-Friday cells."""

    month: date
    visible_range: DateRange
    weeks: tuple[tuple[DayCell, ...], ...]
    preview: PreviewRange | None = None

    @property
    def drop_blocked(self) -> bool:
        """True while the pointer is over a cell the drag cannot land on."""
        return self.preview is not None and not self.preview.valid

    @property
    def cells(self) -> list[DayCell]:
        return [cell for week in self.weeks for cell in week]

    def cell(self, day: date) -> DayCell | None:
        for cell in self.cells:
            if cell.date == day:
                return cell
        return None


class MonthGridPresenter:
    """Builds MonthGrid snapshots, keeping its caches between builds."""

    def __init__(
        self,
        classifier: TimelineClassifier | None = None,
        business_day_cache: BusinessDayMapCache | None = None,
        *,
        show_milestones: bool = True,
    ) -> None:
        self.classifier = classifier or TimelineClassifier()
        self.business_day_cache = business_day_cache or BusinessDayMapCache()
        self.show_milestones = show_milestones

    def build(  # noqa: PLR0913 - all inputs are per-render data
        self,
        month: date,
        products: Iterable[Product],
        holidays: HolidayIndex | Iterable[HolidayLike],
        drag: DragView | None = None,
        today: date | None = None,
    ) -> MonthGrid:
        """Assemble the grid for the month containing month.

        Args:
            month: Any day in the month to show
            products: Current product list
            holidays: Active holiday set
            drag: Drag snapshot from DragRescheduler.view(), if any
            today: Day to flag as today (defaults to the system date)
        """
        index = HolidayIndex.coerce(holidays)
        view = drag or DragView()
        first = month_start(month)
        visible = visible_range(first)
        today = today or date.today()  # noqa: DTZ011
        business_days = self.business_day_cache.get(visible, index)

        product_list = list(products)
        self.classifier.prune({product.id for product in product_list})

        placed: list[tuple[Product, DateRange, Classification, bool]] = []
        for product in product_list:
            shown = view.display_range(product)
            classification = self.classifier.classify(product.id, shown.start, shown.end, index)
            placed.append((product, shown, classification, view.is_dragging(product.id)))

        preview_product, preview_classification = self._preview_overlay(view, product_list, index)

        weeks: list[tuple[DayCell, ...]] = []
        week: list[DayCell] = []
        current = visible.start
        while current <= visible.end:
            if not is_weekend(current):
                week.append(
                    self._build_cell(
                        current,
                        first,
                        today,
                        index,
                        business_days[current],
                        placed,
                        preview_product,
                        preview_classification,
                    )
                )
                if len(week) == WORKDAYS_PER_WEEK:
                    weeks.append(tuple(week))
                    week = []
            current += timedelta(days=1)

        return MonthGrid(month=first, visible_range=visible, weeks=tuple(weeks), preview=view.preview)

    @staticmethod
    def _preview_overlay(
        view: DragView, products: list[Product], holidays: HolidayIndex
    ) -> tuple[Product | None, Classification]:
        if view.session is None or view.preview is None:
            return None, {}
        if view.preview.date_range == view.session.original_range:
            return None, {}
        for product in products:
            if product.id == view.session.product_id:
                preview = view.preview
                return product, classify_range(preview.start_date, preview.end_date, holidays)
        return None, {}

    def _build_cell(  # noqa: PLR0913
        self,
        day: date,
        month: date,
        today: date,
        holidays: HolidayIndex,
        business_day: bool,
        placed: list[tuple[Product, DateRange, Classification, bool]],
        preview_product: Product | None,
        preview_classification: Classification,
    ) -> DayCell:
        holiday = holidays.get(day)
        segments: list[SegmentView] = []
        markers: list[MilestoneMarker] = []

        if holiday is None:
            for product, shown, classification, being_dragged in placed:
                if not shown.contains(day):
                    continue
                segment_type = classification.get(day)
                if segment_type is None:
                    continue
                milestone = product.milestone_on(day) if self.show_milestones else None
                segments.append(
                    SegmentView(
                        product_id=product.id,
                        product_name=product.name,
                        segment_type=segment_type,
                        is_being_dragged=being_dragged,
                        milestone=milestone,
                        color=product.color,
                    )
                )
                if milestone is not None:
                    markers.append(MilestoneMarker(product.id, milestone))

            if preview_product is not None and day in preview_classification:
                segments.append(
                    SegmentView(
                        product_id=preview_product.id,
                        product_name=preview_product.name,
                        segment_type=preview_classification[day],
                        is_drag_preview=True,
                        color=preview_product.color,
                    )
                )

        return DayCell(
            date=day,
            holiday=holiday,
            is_business_day=business_day,
            in_current_month=(day.year, day.month) == (month.year, month.month),
            is_today=day == today,
            segments=tuple(segments),
            milestone_markers=tuple(markers),
        )
