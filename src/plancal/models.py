"""Data models for plancal."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


class SegmentType(str, Enum):
    """Position of a business day within a product's timeline."""

    FIRST = "first"
    LAST = "last"
    MIDDLE = "middle"
    SINGLE = "single"

    @property
    def is_draggable(self) -> bool:
        """Only the true start/end edges of a timeline may move."""
        return self is not SegmentType.MIDDLE


class DragEdge(str, Enum):
    """Which boundary of a timeline is being repositioned."""

    START = "start"
    END = "end"


class AdjustDirection(str, Enum):
    """How to move a non-business day onto a business day."""

    FORWARD = "forward"
    BACKWARD = "backward"
    NEAREST = "nearest"


class MilestoneStatus(str, Enum):
    """Progress state of a milestone."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class DragPhase(str, Enum):
    """States of the drag-to-reschedule state machine."""

    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"


class BeginResult(str, Enum):
    """Outcome of an attempt to start a drag session."""

    STARTED = "started"
    PERMISSION_DENIED = "permission_denied"
    NOT_DRAGGABLE = "not_draggable"
    BUSY = "busy"


class DragOutcome(str, Enum):
    """Outcome of ending (or cancelling) a drag session."""

    COMMITTED = "committed"
    REJECTED = "rejected"  # Persistence failed; dates rolled back
    CANCELLED = "cancelled"  # Invalid or unchanged preview; nothing persisted
    IGNORED = "ignored"  # No active session


class RejectionReason(str, Enum):
    """Why a drag target was refused while moving."""

    NON_BUSINESS_DAY = "non_business_day"
    INVERTED_RANGE = "inverted_range"
    NO_BUSINESS_DAYS = "no_business_days"


@dataclass(frozen=True)
class Holiday:
    """A non-working calendar day."""

    date: date
    name: str
    id: str | None = None


@dataclass(frozen=True)
class DateRange:
    """An inclusive range of calendar days."""

    start: date
    end: date

    @property
    def is_ordered(self) -> bool:
        return self.start <= self.end

    def contains(self, day: date) -> bool:
        """Check whether day falls inside the range (inclusive)."""
        return self.start <= day <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


@dataclass(frozen=True)
class Milestone:
    """A named checkpoint inside a product timeline."""

    id: str
    name: str
    start_date: date
    end_date: date
    status: MilestoneStatus = MilestoneStatus.PENDING


def _default_milestones() -> tuple[Milestone, ...]:
    return ()


def _default_meta() -> dict[str, Any]:
    return {}


@dataclass(frozen=True)
class Product:
    """A product timeline on the roadmap.

    Only id, start_date and end_date matter for scheduling; everything else
    is carried through for display.
    """

    id: str
    name: str
    start_date: date
    end_date: date
    milestones: tuple[Milestone, ...] = field(default_factory=_default_milestones)
    color: str | None = None
    meta: dict[str, Any] = field(default_factory=_default_meta, compare=False, hash=False)

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    def milestone_on(self, day: date) -> Milestone | None:
        """Return the first milestone starting on day, if any."""
        for milestone in self.milestones:
            if milestone.start_date == day:
                return milestone
        return None


@dataclass(frozen=True)
class DragSession:
    """An active drag gesture on one edge of a product timeline."""

    product_id: str
    edge: DragEdge
    original_start_date: date
    original_end_date: date

    @property
    def original_range(self) -> DateRange:
        return DateRange(self.original_start_date, self.original_end_date)


@dataclass(frozen=True)
class PreviewRange:
    """Tentative range shown while dragging.

    When valid is False the dates are the last valid preview, not the
    rejected target.
    """

    product_id: str
    start_date: date
    end_date: date
    valid: bool = True
    rejection: RejectionReason | None = None

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)


@dataclass(frozen=True)
class CommitResult:
    """Result returned by the persistence boundary."""

    ok: bool
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> CommitResult:
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, message: str) -> CommitResult:
        return cls(ok=False, message=message)
