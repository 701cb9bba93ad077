"""Command-line interface for plancal."""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .business_days import (
    add_business_days,
    adjust_date_to_business_day,
    compute_end_date,
    count_business_days,
    subtract_business_days,
)
from .config import PlancalConfig, discover_config
from .dates import parse_day, parse_month
from .drag import DragRescheduler
from .exceptions import PlancalError
from .grid import MonthGridPresenter
from .holidays import HolidayIndex
from .logger import setup_logger
from .models import AdjustDirection, BeginResult, DragEdge, DragOutcome, SegmentType
from .notifications import NotificationLog
from .plan import Plan, load_plan, parse_plan_data
from .pointer import GridPointerSession, SegmentRef, cell_ref
from .render import render_month_text
from .store import YamlPlanStore

app = typer.Typer(
    name="plancal",
    help="Business-day aware roadmap calendar",
    add_completion=False,
)

PlanOption = Annotated[
    Path | None,
    typer.Option("--plan", "-p", help="Plan file whose holidays apply"),
]


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: plancal_config.yaml)",
        ),
    ] = None,
    today: Annotated[
        str | None,
        typer.Option("--today", help="Day to treat as today (YYYY-MM-DD, default: system date)"),
    ] = None,
) -> None:
    """Global options for plancal commands."""
    setup_logger(verbose)
    context.set_config_path(config)
    context.set_today(_parse_date_arg(today, "--today") if today else None)


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _parse_date_arg(value: str, name: str) -> date:
    try:
        return parse_day(value)
    except ValueError:
        raise _fail(f"Invalid {name} '{value}'. Use YYYY-MM-DD format.") from None


def _load(plan_path: Path | None) -> tuple[PlancalConfig, Plan | None]:
    try:
        config = discover_config(plan_path)
        plan = load_plan(plan_path, config) if plan_path is not None else None
    except (PlancalError, FileNotFoundError, ValueError) as e:
        raise _fail(str(e)) from None
    return config, plan


def _holidays(plan_path: Path | None) -> HolidayIndex:
    config, plan = _load(plan_path)
    if plan is not None:
        return plan.holidays
    return parse_plan_data({}, config).holidays


@app.command()
def month(
    file: Annotated[Path, typer.Argument(help="Path to the plan YAML file")] = Path("plan.yaml"),
    *,
    month_str: Annotated[
        str | None,
        typer.Option("--month", "-m", help="Month to show (YYYY-MM, default: current month)"),
    ] = None,
) -> None:
    """Print the Monday-Friday grid for one month."""
    config, plan = _load(file)
    assert plan is not None

    today = context.get_today()
    try:
        shown = parse_month(month_str) if month_str else today
    except ValueError as e:
        raise _fail(str(e)) from None

    presenter = MonthGridPresenter(show_milestones=config.grid.show_milestones)
    grid = presenter.build(shown, plan.products, plan.holidays, today=today)
    typer.echo(render_month_text(grid), nl=False)


@app.command()
def count(
    start: Annotated[str, typer.Argument(help="First day (YYYY-MM-DD)")],
    end: Annotated[str, typer.Argument(help="Last day (YYYY-MM-DD)")],
    plan: PlanOption = None,
) -> None:
    """Count business days in an inclusive range."""
    start_date = _parse_date_arg(start, "start date")
    end_date = _parse_date_arg(end, "end date")
    typer.echo(count_business_days(start_date, end_date, _holidays(plan)))


@app.command()
def add(
    start: Annotated[str, typer.Argument(help="Day to count from (YYYY-MM-DD)")],
    days: Annotated[int, typer.Argument(help="Business days to add", min=0)],
    plan: PlanOption = None,
) -> None:
    """Add business days to a date."""
    start_date = _parse_date_arg(start, "start date")
    typer.echo(add_business_days(start_date, days, _holidays(plan)).isoformat())


@app.command()
def subtract(
    end: Annotated[str, typer.Argument(help="Day to count back from (YYYY-MM-DD)")],
    days: Annotated[int, typer.Argument(help="Business days to subtract", min=0)],
    plan: PlanOption = None,
) -> None:
    """Subtract business days from a date."""
    end_date = _parse_date_arg(end, "end date")
    typer.echo(subtract_business_days(end_date, days, _holidays(plan)).isoformat())


@app.command()
def adjust(
    day: Annotated[str, typer.Argument(help="Day to adjust (YYYY-MM-DD)")],
    direction: Annotated[
        AdjustDirection,
        typer.Option("--direction", "-d", help="Which way to move a non-business day"),
    ] = AdjustDirection.NEAREST,
    plan: PlanOption = None,
) -> None:
    """Move a date onto a business day."""
    day_date = _parse_date_arg(day, "date")
    typer.echo(adjust_date_to_business_day(day_date, _holidays(plan), direction).isoformat())


@app.command("end-date")
def end_date_command(
    start: Annotated[str, typer.Argument(help="First day of the timeline (YYYY-MM-DD)")],
    days: Annotated[int, typer.Argument(help="Timeline length in business days", min=1)],
    plan: PlanOption = None,
) -> None:
    """Compute the end date of a timeline from its length in business days."""
    start_date = _parse_date_arg(start, "start date")
    typer.echo(compute_end_date(start_date, days, _holidays(plan)).isoformat())


@app.command()
def reschedule(  # noqa: PLR0913 - CLI command needs multiple options
    file: Annotated[Path, typer.Argument(help="Path to the plan YAML file")],
    product_id: Annotated[str, typer.Argument(help="Product to reschedule")],
    *,
    edge: Annotated[DragEdge, typer.Option("--edge", "-e", help="Edge to move")],
    to: Annotated[str, typer.Option("--to", help="New date for the edge (YYYY-MM-DD)")],
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Validate and report without writing the file")
    ] = False,
) -> None:
    """Move the start or end of a product timeline, as a drag on the grid would."""
    config, plan = _load(file)
    assert plan is not None
    target = _parse_date_arg(to, "--to")

    product = plan.get_product(product_id)
    if product is None:
        raise _fail(f"Unknown product '{product_id}'")

    if count_business_days(product.start_date, product.end_date, plan.holidays) == 1:
        segment_type = SegmentType.SINGLE
    else:
        segment_type = SegmentType.FIRST if edge == DragEdge.START else SegmentType.LAST

    listener = NotificationLog.for_products(plan.products, plan.holidays, config.display.date_format)
    rescheduler = DragRescheduler(
        YamlPlanStore(file, dry_run=dry_run),
        listener,
        commit_timeout_seconds=config.drag.commit_timeout_seconds,
    )
    session = GridPointerSession(rescheduler, plan.products, plan.holidays, can_edit=True)

    begin = session.begin_session(SegmentRef(product.id, segment_type, edge), {})
    if begin != BeginResult.STARTED:
        raise _fail(f"Cannot drag {product_id}: {begin.value}")

    preview = session.update_session(cell_ref(target))
    if preview is not None and not preview.valid:
        session.rescheduler.cancel()
        reason = preview.rejection.value if preview.rejection else "invalid target"
        raise _fail(f"Cannot move {edge.value} of {product_id} to {target}: {reason}")

    outcome = asyncio.run(session.end_session(cell_ref(target)))
    for notification in listener.notifications:
        typer.echo(notification.message, err=not notification.ok)

    if outcome == DragOutcome.CANCELLED:
        typer.echo(f"No change: {product_id} already spans {product.date_range}")
    elif outcome == DragOutcome.REJECTED:
        raise typer.Exit(1)


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
