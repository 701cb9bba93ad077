"""Pydantic schemas for YAML data validation."""

from __future__ import annotations

import datetime
from datetime import date
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from .models import MilestoneStatus


class HolidaySchema(BaseModel):
    """Schema for one holiday entry."""

    date: datetime.date
    name: str = ""
    id: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id_to_string(cls, v: Any) -> str | None:
        if v is None:
            return None
        return str(v)


class MilestoneSchema(BaseModel):
    """Schema for a milestone inside a product."""

    id: str | None = None
    name: str
    start_date: date
    end_date: date | None = None  # Defaults to start_date
    status: MilestoneStatus = MilestoneStatus.PENDING

    @model_validator(mode="after")
    def validate_end_after_start(self) -> MilestoneSchema:
        """Ensure the milestone does not end before it starts."""
        if self.end_date is None:
            self.end_date = self.start_date
        if self.end_date < self.start_date:
            raise ValueError(
                f"milestone '{self.name}' ends ({self.end_date}) before it starts ({self.start_date})"
            )
        return self


class ProductSchema(BaseModel):
    """Schema for a product timeline."""

    name: str | None = None  # Defaults to the product id
    start_date: date
    end_date: date
    color: str | None = None
    milestones: list[MilestoneSchema] = Field(default_factory=list[MilestoneSchema])
    meta: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_end_after_start(self) -> ProductSchema:
        """Ensure the timeline is not inverted."""
        if self.end_date < self.start_date:
            raise ValueError(f"end_date ({self.end_date}) is before start_date ({self.start_date})")
        return self


class PlanSchema(BaseModel):
    """Schema for the entire plan YAML file."""

    holidays: list[HolidaySchema] = Field(default_factory=list[HolidaySchema])
    products: dict[str, ProductSchema] = Field(default_factory=dict)

    @field_validator("holidays", "products", mode="before")
    @classmethod
    def empty_section(cls, v: Any, info: ValidationInfo) -> Any:
        """Treat an empty YAML section (null) as empty."""
        if v is None:
            return [] if info.field_name == "holidays" else {}
        return v
