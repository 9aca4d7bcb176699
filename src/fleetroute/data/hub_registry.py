"""Transfer hub registry: built-in Delhi hubs, optionally replaced by a workbook."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from openpyxl import load_workbook

from ..config import settings
from ..models.domain import Coordinate, Hub

logger = logging.getLogger(__name__)

_BUILTIN_HUBS: tuple[Hub, ...] = (
    Hub(name="north", coordinate=Coordinate(28.832652, 77.099613)),
    Hub(name="west", coordinate=Coordinate(28.685020, 77.098174)),
    Hub(name="south", coordinate=Coordinate(28.513000, 77.269200)),
    Hub(name="east", coordinate=Coordinate(28.639425, 77.310904)),
    Hub(name="central", coordinate=Coordinate(28.700257, 77.167209)),
    Hub(name="micro-mundka", coordinate=Coordinate(28.7744, 77.0405)),
    Hub(name="micro-okhla", coordinate=Coordinate(28.5358, 77.2764)),
)


def _normalize_hub_name(name: str) -> str:
    return name.strip()


def _load_hubs_from_file(source: Path) -> tuple[Hub, ...]:
    """Load hubs from an Excel workbook with Hub, Latitude and Longitude columns."""
    if not source.exists():
        raise FileNotFoundError(f"Hub workbook not found: {source}")

    wb = load_workbook(source, data_only=True, read_only=True)
    sheet = wb.active
    rows = sheet.iter_rows(min_row=1, values_only=True)
    header = next(rows, None)
    if header is None:
        raise ValueError(f"Hub workbook '{source}' is empty.")

    header_map = {name: idx for idx, name in enumerate(header)}
    missing_columns = {"Hub", "Latitude", "Longitude"} - set(header_map)
    if missing_columns:
        raise ValueError(f"Hub workbook missing columns: {', '.join(sorted(missing_columns))}")

    hubs: list[Hub] = []
    seen: set[str] = set()
    for row in rows:
        name_value = row[header_map["Hub"]]
        if not name_value:
            continue
        name = _normalize_hub_name(str(name_value))
        if name in seen:
            logger.warning(f"Skipping duplicate hub row '{name}' in {source}")
            continue
        seen.add(name)
        hubs.append(
            Hub(
                name=name,
                coordinate=Coordinate(float(row[header_map["Latitude"]]), float(row[header_map["Longitude"]])),
            )
        )
    if not hubs:
        raise ValueError(f"Hub workbook '{source}' contains no hubs.")
    return tuple(hubs)


@lru_cache(maxsize=4)
def load_hubs(source: Optional[Path] = None) -> tuple[Hub, ...]:
    """Return the hub registry, read once per process.

    The configured workbook takes precedence over the built-in table.
    """
    workbook_path = source or settings.hubs_file
    if workbook_path is None:
        return _BUILTIN_HUBS
    hubs = _load_hubs_from_file(workbook_path)
    logger.info(f"Loaded {len(hubs)} hubs from {workbook_path}")
    return hubs


def all_hubs() -> dict[str, Coordinate]:
    """Mapping of hub name to coordinate, in registry order."""
    return {hub.name: hub.coordinate for hub in load_hubs()}


def get_hub(name: str) -> Optional[Coordinate]:
    return all_hubs().get(name)


def clear_hub_cache() -> None:
    load_hubs.cache_clear()
