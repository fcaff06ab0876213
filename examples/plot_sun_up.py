"""Print a year-long chart of the hours the sun is above the horizon."""

from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional

from suntimes.chart import render_sun_chart, sun_up_grid

logging.basicConfig(level=logging.INFO, format="%(message)s")
LOGGER = logging.getLogger("sun-up-chart")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot sun-up hours (UTC) for a whole year")
    parser.add_argument("--latitude", type=float, default=80.0, help="Latitude in degrees")
    parser.add_argument("--longitude", type=float, default=0.0, help="Longitude in degrees")
    parser.add_argument("--year", type=int, default=2022)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    grid = sun_up_grid(args.year, args.latitude, args.longitude)
    print(render_sun_chart(grid, args.year))
    LOGGER.info(
        json.dumps(
            {
                "event": "chart_rendered",
                "year": args.year,
                "lat": args.latitude,
                "lon": args.longitude,
                "sun_up_hours": int(grid.sum()),
            }
        )
    )


if __name__ == "__main__":
    main()
