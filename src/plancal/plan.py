"""Plan file loading: products and holidays from YAML."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .holidays import HolidayIndex
from .models import Holiday, Milestone, Product
from .schemas import HolidaySchema, PlanSchema

if TYPE_CHECKING:
    from .config import PlancalConfig


@dataclass
class Plan:
    """Products and holidays loaded from a plan file."""

    products: list[Product]
    holidays: HolidayIndex
    path: Path | None = None

    def get_product(self, product_id: str) -> Product | None:
        for product in self.products:
            if product.id == product_id:
                return product
        return None


def _to_holiday(schema: HolidaySchema) -> Holiday:
    return Holiday(date=schema.date, name=schema.name, id=schema.id)


def parse_plan_data(data: Any, config: PlancalConfig | None = None) -> Plan:
    """Build a Plan from already-loaded YAML data.

    Holidays from config are merged in after the plan's own holidays, so a
    plan entry wins when both name the same date.

    Raises:
        ParseError: If data is not a mapping
        ValidationError: If products or holidays are invalid
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError("YAML must contain a dictionary at the root level")

    try:
        schema = PlanSchema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid plan: {e}") from e

    products: list[Product] = []
    for product_id, product_schema in schema.products.items():
        milestones = tuple(
            Milestone(
                id=milestone.id or f"{product_id}-m{i + 1}",
                name=milestone.name,
                start_date=milestone.start_date,
                end_date=milestone.end_date or milestone.start_date,
                status=milestone.status,
            )
            for i, milestone in enumerate(product_schema.milestones)
        )
        products.append(
            Product(
                id=product_id,
                name=product_schema.name or product_id,
                start_date=product_schema.start_date,
                end_date=product_schema.end_date,
                milestones=milestones,
                color=product_schema.color,
                meta=product_schema.meta,
            )
        )

    holidays = [_to_holiday(h) for h in schema.holidays]
    if config is not None:
        holidays.extend(_to_holiday(h) for h in config.holidays)

    return Plan(products=products, holidays=HolidayIndex(holidays))


def load_plan(path: Path | str, config: PlancalConfig | None = None) -> Plan:
    """Load and validate a plan file.

    Raises:
        ParseError: If the file is missing or is not valid YAML
        ValidationError: If its content is invalid
    """
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML: {e}") from e

    plan = parse_plan_data(data, config)
    plan.path = path
    return plan
