"""Plain-text rendering of month grids for the command line."""

from __future__ import annotations

from .grid import DayCell, MonthGrid, SegmentView

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri")


def _format_segment(segment: SegmentView) -> str:
    text = f"{segment.product_name} [{segment.segment_type.value}]"
    if segment.is_being_dragged:
        text += " (dragging)"
    if segment.is_drag_preview:
        text += " (preview)"
    if segment.milestone is not None:
        text += f" <{segment.milestone.name}>"
    return text


def _format_cell(cell: DayCell) -> list[str]:
    marker = "*" if cell.is_today else " "
    header = f"{marker}{WEEKDAY_NAMES[cell.date.weekday()]} {cell.date.isoformat()}"
    if not cell.in_current_month:
        header += " ~"
    if cell.holiday is not None:
        return [f"{header}  HOLIDAY: {cell.holiday.name or 'unnamed'}"]
    if not cell.segments:
        return [header]
    lines = [f"{header}  {_format_segment(cell.segments[0])}"]
    indent = " " * len(header)
    lines.extend(f"{indent}  {_format_segment(segment)}" for segment in cell.segments[1:])
    return lines


def render_month_text(grid: MonthGrid) -> str:
    """Render a grid as one block of lines per week.

    Days outside the month are marked with "~", today with "*".
    """
    lines = [grid.month.strftime("%B %Y"), ""]
    for week in grid.weeks:
        for cell in week:
            lines.extend(_format_cell(cell))
        lines.append("")
    if grid.drop_blocked:
        lines.append("Drop blocked: target is not a valid business day")
    return "\n".join(lines).rstrip() + "\n"
