from __future__ import annotations

from pathlib import Path

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
import pytest

from suntimes import InvalidInputError
from suntimes.chart import render_sun_chart, sun_up_grid


@pytest.fixture(scope="module")
def arctic_grid() -> np.ndarray:
    return sun_up_grid(2022, 80.0)


def test_grid_shape(arctic_grid: np.ndarray):
    assert arctic_grid.shape == (365, 24)
    assert arctic_grid.dtype == bool
    assert sun_up_grid(2024, 0.0).shape == (366, 24)


def test_arctic_summer_and_winter(arctic_grid: np.ndarray):
    assert arctic_grid[171].all()  # 21 June
    assert not arctic_grid[354].any()  # 21 December


def test_equator_day_and_night():
    grid = sun_up_grid(2022, 0.0, 0.0)
    assert grid[78, 12]
    assert not grid[78, 0]
    assert grid.sum(axis=1).min() >= 11


def test_grid_rejects_invalid_latitude():
    with pytest.raises(InvalidInputError):
        sun_up_grid(2022, 95.0)


def test_grid_covers_the_last_representable_year():
    grid = sun_up_grid(9999, 0.0)
    assert grid.shape == (365, 24)
    assert render_sun_chart(grid, 9999).splitlines()[0].endswith("D")


@pytest.mark.parametrize("year", [0, 10000])
def test_grid_rejects_unrepresentable_years(year: int):
    with pytest.raises(InvalidInputError):
        sun_up_grid(year, 0.0)


def test_render_layout(arctic_grid: np.ndarray):
    lines = render_sun_chart(arctic_grid, 2022).splitlines()
    assert len(lines) == 2 + 12
    assert all(len(line) == 2 + 183 for line in lines)
    assert lines[0].startswith("  JJJJJJJJJJJJJJJJF")
    assert lines[1].startswith("  13579135791357912")
    assert [line[:2] for line in lines[2:]] == [f"{hour:>2}" for hour in range(0, 24, 2)]


def test_render_uniform_grids():
    up = render_sun_chart(np.ones((4, 24), dtype=bool), 2022).splitlines()
    down = render_sun_chart(np.zeros((4, 24), dtype=bool), 2022).splitlines()
    assert up[0] == "  JJ"
    assert up[1] == "  13"
    assert all(line[2:] == "██" for line in up[2:])
    assert all(line[2:] == "░░" for line in down[2:])


def test_render_quadrants():
    grid = np.zeros((4, 24), dtype=bool)
    grid[0, 0] = True
    grid[1, 1] = True
    grid[2, 3] = True
    grid[3, 2] = True
    lines = render_sun_chart(grid, 2022).splitlines()
    assert lines[2] == " 0▚░"
    assert lines[3] == " 2░▞"


def test_render_odd_day_count_pads_with_down():
    grid = np.ones((3, 24), dtype=bool)
    lines = render_sun_chart(grid, 2022).splitlines()
    assert lines[2] == " 0█▌"


def test_example_script_prints_chart(capsys: pytest.CaptureFixture[str]):
    import importlib.util

    script = PROJECT_ROOT / "examples" / "plot_sun_up.py"
    spec = importlib.util.spec_from_file_location("plot_sun_up", script)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    module.main(["--latitude", "-60", "--year", "2023"])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 14
    assert lines[2].startswith(" 0")
