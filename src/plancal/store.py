"""YAML-backed persistence for rescheduled products."""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path
from typing import Any, cast

import yaml

from .logger import get_logger
from .models import CommitResult

logger = get_logger()


class YamlPlanStore:
    """Commit callback that rewrites a product's dates in a plan file.

    Only the product's start_date and end_date keys change; everything else
    in the file is written back as loaded.
    """

    def __init__(self, path: Path | str, *, dry_run: bool = False) -> None:
        self.path = Path(path)
        self.dry_run = dry_run

    async def __call__(self, product_id: str, start_date: date, end_date: date) -> CommitResult:
        return await asyncio.to_thread(self.write_dates, product_id, start_date, end_date)

    def write_dates(self, product_id: str, start_date: date, end_date: date) -> CommitResult:
        """Persist new dates for product_id synchronously."""
        if start_date > end_date:
            return CommitResult.failure(f"Refusing inverted range {start_date}..{end_date}")

        try:
            with self.path.open(encoding="utf-8") as f:
                raw_data: Any = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            return CommitResult.failure(f"Could not read {self.path}: {e}")

        if not isinstance(raw_data, dict):
            return CommitResult.failure(f"Invalid plan file format: {self.path}")
        data = cast(dict[str, Any], raw_data)

        products = data.get("products")
        if not isinstance(products, dict) or product_id not in products:
            return CommitResult.failure(f"Product '{product_id}' not found in {self.path}")

        entry = cast(dict[str, Any], products[product_id])
        entry["start_date"] = start_date
        entry["end_date"] = end_date

        if self.dry_run:
            logger.changes(f"Dry run: not writing {product_id} to {self.path}")
            return CommitResult.success("dry run")

        try:
            with self.path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            return CommitResult.failure(f"Could not write {self.path}: {e}")

        logger.changes(f"Wrote {product_id} {start_date}..{end_date} to {self.path}")
        return CommitResult.success()
