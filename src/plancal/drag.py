"""Drag-to-reschedule state machine.

A drag moves either the start or the end edge of one product timeline to a
new business day:

    IDLE --begin--> DRAGGING --move--> DRAGGING
    DRAGGING --end--> COMMITTING --> IDLE   (valid, changed preview)
    DRAGGING --end/cancel--> IDLE           (invalid or unchanged preview)

At most one session exists at a time, and a session stays active until its
commit resolves, so no new drag can begin while a commit is outstanding.
The only side effect is the commit callback; everything else is derived
state exposed through read-only snapshots.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from datetime import date
from typing import TYPE_CHECKING, Protocol

from .business_days import count_business_days, is_business_day
from .exceptions import InvalidArgumentError
from .logger import checks_enabled, get_logger
from .models import (
    BeginResult,
    CommitResult,
    DateRange,
    DragEdge,
    DragOutcome,
    DragPhase,
    DragSession,
    PreviewRange,
    RejectionReason,
    SegmentType,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .holidays import HolidayIndex
    from .models import Product

logger = get_logger()

DEFAULT_COMMIT_TIMEOUT_SECONDS = 10.0


class CommitReschedule(Protocol):
    """Persistence boundary for a finished drag."""

    async def __call__(self, product_id: str, start_date: date, end_date: date) -> CommitResult:
        """Persist the new range for product_id.

        Returns:
            CommitResult with ok=False and a message on failure
        """
        ...


class RescheduleListener(Protocol):
    """Receives user-facing notifications about commits."""

    def on_reschedule_succeeded(self, product_id: str, date_range: DateRange) -> None: ...

    def on_reschedule_rejected(self, reason: str) -> None: ...


def _default_overrides() -> dict[str, DateRange]:
    return {}


@dataclass(frozen=True)
class DragView:
    """Read-only view of drag state for rendering."""

    phase: DragPhase = DragPhase.IDLE
    session: DragSession | None = None
    preview: PreviewRange | None = None
    overrides: dict[str, DateRange] = field(default_factory=_default_overrides)

    def display_range(self, product: Product) -> DateRange:
        """Range to render for product, honoring pending and committed drags."""
        return self.overrides.get(product.id, product.date_range)

    def is_dragging(self, product_id: str) -> bool:
        return (
            self.phase == DragPhase.DRAGGING
            and self.session is not None
            and self.session.product_id == product_id
        )


def edge_matches_segment(edge: DragEdge, segment_type: SegmentType) -> bool:
    """Whether a segment of this type can be grabbed by this edge.

    A first segment carries the start edge, a last segment the end edge, and a
    single-day timeline carries both.
    """
    if not segment_type.is_draggable:
        return False
    if segment_type == SegmentType.FIRST:
        return edge == DragEdge.START
    if segment_type == SegmentType.LAST:
        return edge == DragEdge.END
    return True


class DragRescheduler:
    """Owns the single drag session and its preview."""

    def __init__(
        self,
        commit: CommitReschedule,
        listener: RescheduleListener | None = None,
        *,
        commit_timeout_seconds: float | None = DEFAULT_COMMIT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the rescheduler.

        Args:
            commit: Async persistence callback, invoked once per committed drag
            listener: Optional receiver for success/rejection notifications
            commit_timeout_seconds: Commit calls running longer than this fail
                (None disables the timeout)
        """
        self._commit = commit
        self._listener = listener
        self._commit_timeout = commit_timeout_seconds

        self._phase = DragPhase.IDLE
        self._session: DragSession | None = None
        self._preview: PreviewRange | None = None
        # Ranges shown in place of stored dates: in-flight commits and
        # successful commits the product store has not reported back yet
        self._pending: dict[str, DateRange] = {}
        # product id -> (range stored before the commit, committed range)
        self._committed: dict[str, tuple[DateRange, DateRange]] = {}

    @property
    def phase(self) -> DragPhase:
        return self._phase

    @property
    def session(self) -> DragSession | None:
        return self._session

    @property
    def preview(self) -> PreviewRange | None:
        return self._preview

    @property
    def is_active(self) -> bool:
        return self._phase != DragPhase.IDLE

    def begin(  # noqa: PLR0913 - mirrors the drag-begin payload
        self,
        product_id: str,
        edge: DragEdge,
        start_date: date,
        end_date: date,
        segment_type: SegmentType,
        *,
        can_edit: bool,
    ) -> BeginResult:
        """Start dragging one edge of a product timeline.

        Args:
            product_id: Product being rescheduled
            edge: Which edge is grabbed
            start_date: Current start date of the product
            end_date: Current end date of the product
            segment_type: Classification of the grabbed segment
            can_edit: Whether the caller holds edit capability

        Returns:
            STARTED if a session was created, otherwise why it was declined

        Raises:
            InvalidArgumentError: If start_date is after end_date
        """
        if start_date > end_date:
            raise InvalidArgumentError(
                f"Product {product_id} has inverted range {start_date}..{end_date}"
            )

        if not can_edit:
            logger.checks(f"Drag of {product_id} declined: no edit capability")
            return BeginResult.PERMISSION_DENIED

        if not edge_matches_segment(edge, segment_type):
            logger.checks(
                f"Drag of {product_id} declined: {segment_type.value} segment "
                f"cannot move the {edge.value} edge"
            )
            return BeginResult.NOT_DRAGGABLE

        if self._phase != DragPhase.IDLE:
            active = self._session.product_id if self._session else "?"
            logger.checks(
                f"Drag of {product_id} declined: session for {active} is {self._phase.value}"
            )
            return BeginResult.BUSY

        self._session = DragSession(
            product_id=product_id,
            edge=edge,
            original_start_date=start_date,
            original_end_date=end_date,
        )
        self._preview = PreviewRange(product_id, start_date, end_date, valid=True)
        self._phase = DragPhase.DRAGGING
        logger.changes(f"Dragging {edge.value} of {product_id} from {start_date}..{end_date}")
        return BeginResult.STARTED

    def move(self, target: date, holidays: HolidayIndex) -> PreviewRange | None:
        """Recompute the preview for the day under the pointer.

        Safe to call at any rate: only the most recent call matters. An
        invalid target holds the preview at its last valid dates and marks it
        invalid instead of snapping to a nearby day.

        Returns:
            The updated preview, or None when no drag is in progress
        """
        if self._phase != DragPhase.DRAGGING or self._session is None or self._preview is None:
            return None

        session = self._session
        if session.edge == DragEdge.START:
            candidate = DateRange(target, session.original_end_date)
        else:
            candidate = DateRange(session.original_start_date, target)

        rejection = self._validate(target, candidate, holidays)
        if rejection is None:
            self._preview = PreviewRange(
                session.product_id, candidate.start, candidate.end, valid=True
            )
        else:
            self._preview = replace(self._preview, valid=False, rejection=rejection)

        if checks_enabled():
            verdict = "ok" if rejection is None else f"rejected ({rejection.value})"
            logger.checks(f"  Move {session.edge.value} of {session.product_id} to {target}: {verdict}")
        return self._preview

    @staticmethod
    def _validate(
        target: date, candidate: DateRange, holidays: HolidayIndex
    ) -> RejectionReason | None:
        # Interior holidays are fine: they only leave a gap in the segments.
        # The target day itself has to be workable.
        if not is_business_day(target, holidays):
            return RejectionReason.NON_BUSINESS_DAY
        if not candidate.is_ordered:
            return RejectionReason.INVERTED_RANGE
        if count_business_days(candidate.start, candidate.end, holidays) < 1:
            return RejectionReason.NO_BUSINESS_DAYS
        return None

    async def end(self) -> DragOutcome:
        """Finish the drag, committing the preview if it is valid and changed."""
        if self._phase != DragPhase.DRAGGING or self._session is None or self._preview is None:
            return DragOutcome.IGNORED

        session = self._session
        preview = self._preview
        new_range = preview.date_range

        if not preview.valid or new_range == session.original_range:
            reason = "invalid target" if not preview.valid else "unchanged"
            logger.changes(f"Drag of {session.product_id} cancelled ({reason})")
            self._reset()
            return DragOutcome.CANCELLED

        self._phase = DragPhase.COMMITTING
        self._preview = None
        self._pending[session.product_id] = new_range
        logger.changes(f"Committing {session.product_id}: {session.original_range} -> {new_range}")

        try:
            result = await self._run_commit(session.product_id, new_range)
        finally:
            self._pending.pop(session.product_id, None)
            self._reset()

        if result.ok:
            self._committed[session.product_id] = (session.original_range, new_range)
            logger.changes(f"Committed {session.product_id} at {new_range}")
            if self._listener is not None:
                self._listener.on_reschedule_succeeded(session.product_id, new_range)
            return DragOutcome.COMMITTED

        logger.warning(
            f"Commit of {session.product_id} failed, restoring {session.original_range}: "
            f"{result.message}"
        )
        if self._listener is not None:
            self._listener.on_reschedule_rejected(result.message)
        return DragOutcome.REJECTED

    async def _run_commit(self, product_id: str, new_range: DateRange) -> CommitResult:
        task = asyncio.ensure_future(self._commit(product_id, new_range.start, new_range.end))
        done, _ = await asyncio.wait({task}, timeout=self._commit_timeout)
        if not done:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            return CommitResult.failure(f"Timed out after {self._commit_timeout:g} seconds")

        # Exceptions raised by the callback itself, TimeoutError included
        try:
            return task.result()
        except Exception as e:  # noqa: BLE001 - persistence failures become a rejected commit
            return CommitResult.failure(str(e) or type(e).__name__)

    def cancel(self) -> DragOutcome:
        """Abort the gesture without committing.

        A commit already in flight cannot be cancelled.
        """
        if self._phase != DragPhase.DRAGGING or self._session is None:
            return DragOutcome.IGNORED
        logger.changes(f"Drag of {self._session.product_id} aborted")
        self._reset()
        return DragOutcome.CANCELLED

    def _reset(self) -> None:
        self._phase = DragPhase.IDLE
        self._session = None
        self._preview = None

    def view(self, products: Iterable[Product] | None = None) -> DragView:
        """Snapshot the drag state for rendering.

        When products is given, a committed range stays in the overrides only
        while that product still reports the dates it had before the commit.
        Any other range means the store has moved on, and products missing
        from the list are forgotten.
        """
        if products is not None:
            current = {product.id: product.date_range for product in products}
            for product_id, (before, _) in list(self._committed.items()):
                if current.get(product_id) != before:
                    del self._committed[product_id]

        committed = {product_id: after for product_id, (_, after) in self._committed.items()}
        overrides = {**committed, **self._pending}
        return DragView(
            phase=self._phase,
            session=self._session,
            preview=self._preview,
            overrides=overrides,
        )
