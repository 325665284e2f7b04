"""Pytest configuration and fixtures."""

import json
import shutil
from pathlib import Path
from typing import Any

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def line_three_points() -> Path:
    """Path to a single route of three points 0.01 degrees apart."""
    return FIXTURES / "line_three_points.geojson"


@pytest.fixture
def two_routes() -> Path:
    """Path to two routes sharing an agency and a start point."""
    return FIXTURES / "two_routes.geojson"


@pytest.fixture
def not_a_collection() -> Path:
    """Path to a bare Feature instead of a FeatureCollection."""
    return FIXTURES / "not_a_collection.geojson"


@pytest.fixture
def config_file() -> Path:
    """Path to a JSON config with weekday and weekend service windows."""
    return FIXTURES / "config.json"


@pytest.fixture
def line_geojson(line_three_points: Path) -> dict[str, Any]:
    """Parsed three-point route."""
    with open(line_three_points, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def two_routes_geojson(two_routes: Path) -> dict[str, Any]:
    """Parsed two-route collection."""
    with open(two_routes, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def tmp_output(tmp_path: Path) -> Path:
    """Temporary output directory."""
    output_dir = tmp_path / "gtfs"
    output_dir.mkdir()
    yield output_dir
    # Cleanup
    if output_dir.exists():
        shutil.rmtree(output_dir)
