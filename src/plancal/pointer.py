"""Pointer-session adapter between a host UI and the drag state machine.

The host only deals in opaque references: a segment reference when a card is
grabbed and a cell reference (``cell-YYYY-MM-DD``) for the cell under the
pointer. This module turns those into DragRescheduler calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol

from .drag import DragRescheduler
from .holidays import HolidayIndex, HolidayLike
from .logger import get_logger
from .models import BeginResult, DragEdge, DragOutcome, PreviewRange, Product, SegmentType

logger = get_logger()

CELL_REF_PREFIX = "cell-"


def cell_ref(day: date) -> str:
    """Reference string for the grid cell of day."""
    return f"{CELL_REF_PREFIX}{day.isoformat()}"


def parse_cell_ref(ref: str | None) -> date | None:
    """Resolve a cell reference to its date, or None if it is not one."""
    if not ref or not ref.startswith(CELL_REF_PREFIX):
        return None
    try:
        return date.fromisoformat(ref[len(CELL_REF_PREFIX) :])
    except ValueError:
        return None


@dataclass(frozen=True)
class SegmentRef:
    """Reference to a grabbed segment card."""

    product_id: str
    segment_type: SegmentType
    edge: DragEdge | None = None

    def resolved_edge(self) -> DragEdge | None:
        """Edge carried by this segment.

        First and last segments imply their edge. A single-day segment
        carries both, so the host has to say which one was grabbed.
        """
        if self.edge is not None:
            return self.edge
        if self.segment_type == SegmentType.FIRST:
            return DragEdge.START
        if self.segment_type == SegmentType.LAST:
            return DragEdge.END
        return None


class PointerSession(Protocol):
    """Minimal gesture interface a host UI drives."""

    def begin_session(self, ref: SegmentRef, meta: Mapping[str, Any]) -> BeginResult: ...

    def update_session(self, position: str | None) -> PreviewRange | None: ...

    async def end_session(self, position: str | None) -> DragOutcome: ...


class GridPointerSession:
    """PointerSession backed by a DragRescheduler and the current plan data."""

    def __init__(
        self,
        rescheduler: DragRescheduler,
        products: Iterable[Product] = (),
        holidays: HolidayIndex | Iterable[HolidayLike] = (),
        *,
        can_edit: bool = False,
    ) -> None:
        self.rescheduler = rescheduler
        self.can_edit = can_edit
        self._products: dict[str, Product] = {}
        self._holidays = HolidayIndex()
        self.update_data(products, holidays)

    def update_data(
        self,
        products: Iterable[Product],
        holidays: HolidayIndex | Iterable[HolidayLike],
    ) -> None:
        """Replace the product list and holiday set seen by later events."""
        self._products = {product.id: product for product in products}
        self._holidays = HolidayIndex.coerce(holidays)

    def begin_session(self, ref: SegmentRef, meta: Mapping[str, Any]) -> BeginResult:
        """Start a drag for the grabbed segment.

        meta may carry ``edge`` ("start"/"end") for single-day segments.
        """
        product = self._products.get(ref.product_id)
        if product is None:
            logger.checks(f"Drag of unknown product {ref.product_id} ignored")
            return BeginResult.NOT_DRAGGABLE

        edge = ref.resolved_edge()
        if edge is None and "edge" in meta:
            try:
                edge = DragEdge(meta["edge"])
            except ValueError:
                logger.checks(f"Drag of {ref.product_id} ignored: unknown edge {meta['edge']!r}")
                return BeginResult.NOT_DRAGGABLE
        if edge is None:
            return BeginResult.NOT_DRAGGABLE

        return self.rescheduler.begin(
            product.id,
            edge,
            product.start_date,
            product.end_date,
            ref.segment_type,
            can_edit=self.can_edit,
        )

    def update_session(self, position: str | None) -> PreviewRange | None:
        target = parse_cell_ref(position)
        if target is None:
            return self.rescheduler.preview
        return self.rescheduler.move(target, self._holidays)

    async def end_session(self, position: str | None) -> DragOutcome:
        """Finish the gesture over position; no position means the pointer left the grid."""
        target = parse_cell_ref(position)
        if target is None:
            return self.rescheduler.cancel()
        self.rescheduler.move(target, self._holidays)
        return await self.rescheduler.end()
