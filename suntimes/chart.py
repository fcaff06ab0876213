"""Year-long sun-up charts built on :func:`suntimes.astro.compute_altitudes`."""

from __future__ import annotations

import calendar
import json
import logging
from datetime import MAXYEAR, MINYEAR, UTC, date, datetime, timedelta
from typing import Dict, List, Tuple

import numpy as np

from .astro import InvalidInputError, compute_altitudes

__all__ = ["sun_up_grid", "render_sun_chart"]

LOGGER = logging.getLogger(__name__)

MONTH_INITIALS = "JFMAMJJASOND"
HOURS_PER_DAY = 24

# Quadrant glyph for (top-left, bottom-left, top-right, bottom-right).
_QUADRANTS: Dict[Tuple[bool, bool, bool, bool], str] = {
    (True, True, True, True): "█",
    (True, True, True, False): "▛",
    (True, True, False, True): "▙",
    (True, True, False, False): "▌",
    (True, False, True, True): "▜",
    (True, False, True, False): "▀",
    (True, False, False, True): "▚",
    (True, False, False, False): "▘",
    (False, True, True, True): "▟",
    (False, True, True, False): "▞",
    (False, True, False, True): "▄",
    (False, True, False, False): "▖",
    (False, False, True, True): "▐",
    (False, False, True, False): "▝",
    (False, False, False, True): "▗",
    (False, False, False, False): "░",
}


def sun_up_grid(year: int, latitude: float, longitude: float = 0.0) -> np.ndarray:
    """Return a ``(days_in_year, 24)`` boolean grid of the sun being above the horizon.

    Row ``d`` is day ``d`` of *year* (zero-based) and column ``h`` is ``h:00`` UTC.
    """

    if not MINYEAR <= year <= MAXYEAR:
        raise InvalidInputError(f"Year must be within {MINYEAR}..{MAXYEAR}: {year}")
    days = 366 if calendar.isleap(year) else 365
    first = datetime(year, 1, 1, tzinfo=UTC)
    instants = [first + timedelta(hours=hour) for hour in range(days * HOURS_PER_DAY)]
    altitudes = compute_altitudes(instants, latitude, longitude)
    return (altitudes >= 0.0).reshape(days, HOURS_PER_DAY)


def render_sun_chart(grid: np.ndarray, year: int) -> str:
    """Render *grid* as quadrant blocks, two days by two hours per glyph."""

    days, hours = grid.shape

    def cell(x: int, y: int) -> bool:
        if 0 <= x < days and 0 <= y < hours:
            return bool(grid[x, y])
        return False

    start = date(year, 1, 1)
    columns = [start + timedelta(days=x) for x in range(0, days, 2)]
    lines: List[str] = [
        "  " + "".join(MONTH_INITIALS[column.month - 1] for column in columns),
        "  " + "".join(str(column.day)[-1] for column in columns),
    ]
    for y in range(0, hours, 2):
        glyphs = "".join(
            _QUADRANTS[(cell(x, y), cell(x, y + 1), cell(x + 1, y), cell(x + 1, y + 1))]
            for x in range(0, days, 2)
        )
        lines.append(f"{y:>2}{glyphs}")

    LOGGER.debug(json.dumps({"event": "chart_rendered", "year": year, "days": days}))
    return "\n".join(lines)
