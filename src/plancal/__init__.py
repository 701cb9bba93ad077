"""plancal - business-day aware roadmap calendar.

Main entry points:
- business_days: working-day arithmetic over a Mon-Fri week and a holiday list
- TimelineClassifier: first/middle/last/single segments for product timelines
- DragRescheduler: drag-to-reschedule state machine with a single commit boundary
- MonthGridPresenter: render-ready month grids
"""

from .business_days import (
    add_business_days,
    adjust_date_to_business_day,
    compute_end_date,
    count_business_days,
    get_business_days_in_range,
    get_next_business_day,
    get_previous_business_day,
    is_business_day,
    subtract_business_days,
)
from .drag import CommitReschedule, DragRescheduler, DragView, RescheduleListener
from .exceptions import InvalidArgumentError, ParseError, PlancalError, ValidationError
from .grid import DayCell, MonthGrid, MonthGridPresenter, SegmentView
from .holidays import HolidayIndex
from .models import (
    AdjustDirection,
    BeginResult,
    CommitResult,
    DateRange,
    DragEdge,
    DragOutcome,
    DragPhase,
    DragSession,
    Holiday,
    Milestone,
    MilestoneStatus,
    PreviewRange,
    Product,
    RejectionReason,
    SegmentType,
)
from .pointer import GridPointerSession, PointerSession, SegmentRef
from .timeline import TimelineClassifier, classify_range

__all__ = [
    # Calendar arithmetic
    "is_business_day",
    "add_business_days",
    "subtract_business_days",
    "count_business_days",
    "get_next_business_day",
    "get_previous_business_day",
    "adjust_date_to_business_day",
    "get_business_days_in_range",
    "compute_end_date",
    "HolidayIndex",
    # Timeline classification
    "TimelineClassifier",
    "classify_range",
    # Drag
    "DragRescheduler",
    "DragView",
    "CommitReschedule",
    "RescheduleListener",
    "PointerSession",
    "GridPointerSession",
    "SegmentRef",
    # Grid
    "MonthGridPresenter",
    "MonthGrid",
    "DayCell",
    "SegmentView",
    # Models
    "AdjustDirection",
    "BeginResult",
    "CommitResult",
    "DateRange",
    "DragEdge",
    "DragOutcome",
    "DragPhase",
    "DragSession",
    "Holiday",
    "Milestone",
    "MilestoneStatus",
    "PreviewRange",
    "Product",
    "RejectionReason",
    "SegmentType",
    # Exceptions
    "PlancalError",
    "InvalidArgumentError",
    "ValidationError",
    "ParseError",
]
