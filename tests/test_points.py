"""Tests for point filtering and distance accumulation."""

import math

import pytest

from geojson_gtfs.errors import InputFormatError
from geojson_gtfs.pipeline.points import EARTH_RADIUS_KM, distance_km, retain_points

ONE_HUNDREDTH_DEGREE_KM = EARTH_RADIUS_KM * math.radians(0.01)


def test_distance_along_meridian() -> None:
    """Test distance between points on the same meridian."""
    assert distance_km([0, 0], [0, 0.01]) == pytest.approx(ONE_HUNDREDTH_DEGREE_KM)
    assert distance_km([0, 0], [0, 0.01]) == pytest.approx(1.112, abs=1e-3)


def test_distance_is_symmetric_and_zero_for_same_point() -> None:
    """Test distance symmetry and identity."""
    a, b = [13.40, 52.50], [13.44, 52.52]
    assert distance_km(a, b) == pytest.approx(distance_km(b, a))
    assert distance_km(a, a) == 0


def test_distance_uses_lon_lat_order() -> None:
    """Test longitude differences shrink with latitude."""
    at_equator = distance_km([0, 0], [1, 0])
    at_60_north = distance_km([0, 60], [1, 60])
    assert at_60_north == pytest.approx(at_equator / 2, rel=1e-3)


def test_threshold_zero_keeps_every_distinct_point() -> None:
    """Test all distinct points are retained in order."""
    coordinates = [[0, 0], [0, 0.01], [0, 0.02]]
    points = retain_points(coordinates, 0)

    assert [p.coordinate for p in points] == coordinates
    assert [p.index for p in points] == [0, 1, 2]
    assert points[0].segment_distance_km == 0
    assert points[0].cumulative_distance_km == 0
    assert points[1].segment_distance_km == pytest.approx(ONE_HUNDREDTH_DEGREE_KM)
    assert points[2].cumulative_distance_km == pytest.approx(2 * ONE_HUNDREDTH_DEGREE_KM)


def test_filtered_point_collapses_into_next_segment() -> None:
    """Test a skipped point's distance is carried into the next kept segment."""
    points = retain_points([[0, 0], [0, 0.01], [0, 0.02]], 2)

    assert [p.index for p in points] == [0, 2]
    assert points[1].segment_distance_km == pytest.approx(2 * ONE_HUNDREDTH_DEGREE_KM)
    # 1.11 km to the skipped point plus 2.22 km to the kept one
    assert points[1].cumulative_distance_km == pytest.approx(3 * ONE_HUNDREDTH_DEGREE_KM)


def test_cumulative_distance_includes_skipped_points() -> None:
    """Test kept segments plus skipped distances add up to the cumulative distance."""
    coordinates = [[0, 0], [0, 0.004], [0, 0.02], [0, 0.021], [0, 0.03]]
    threshold = 0.5
    points = retain_points(coordinates, threshold)

    assert [p.index for p in points] == [0, 2, 4]

    kept = sum(p.segment_distance_km for p in points)
    skipped = distance_km(coordinates[0], coordinates[1]) + distance_km(
        coordinates[2], coordinates[3]
    )
    assert points[-1].cumulative_distance_km == pytest.approx(kept + skipped)

    cumulative = [p.cumulative_distance_km for p in points]
    assert cumulative == sorted(cumulative)


def test_identical_consecutive_points_are_skipped() -> None:
    """Test zero-length segments are filtered even with a zero threshold."""
    points = retain_points([[1, 1], [1, 1], [1, 1.01]], 0)

    assert [p.index for p in points] == [0, 2]
    assert points[1].segment_distance_km == pytest.approx(ONE_HUNDREDTH_DEGREE_KM)


def test_single_coordinate() -> None:
    """Test a one-point path keeps that point with zero distance."""
    points = retain_points([[5, 5]], 10)

    assert len(points) == 1
    assert points[0].segment_distance_km == 0
    assert points[0].cumulative_distance_km == 0


def test_empty_path() -> None:
    """Test an empty path keeps nothing."""
    assert retain_points([], 0) == []


def test_previous_point_not_moved_by_skipped_points() -> None:
    """Test each candidate is measured against the last kept point."""
    # Each step is ~0.56 km, below the threshold, but they add up
    coordinates = [[0, 0], [0, 0.005], [0, 0.01], [0, 0.015]]
    points = retain_points(coordinates, 1.2)

    assert [p.index for p in points] == [0, 3]
    assert points[1].segment_distance_km == pytest.approx(1.5 * ONE_HUNDREDTH_DEGREE_KM)
    assert points[1].cumulative_distance_km == pytest.approx(3 * ONE_HUNDREDTH_DEGREE_KM)


@pytest.mark.parametrize("coords", [[0], "ab", [0, "1"], None])
def test_malformed_coordinate(coords: object) -> None:
    """Test malformed coordinates are rejected."""
    with pytest.raises(InputFormatError):
        retain_points([[0, 0], coords], 0)
