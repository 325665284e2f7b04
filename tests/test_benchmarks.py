"""Benchmark tests."""

from pathlib import Path
from typing import Any

import pytest

from geojson_gtfs import convert, transform


def _long_route(points: int) -> dict[str, Any]:
    coordinates = [[13.0 + i * 0.001, 52.0 + (i % 7) * 0.0005] for i in range(points)]
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"route_id": str(n)},
                "geometry": {"type": "LineString", "coordinates": coordinates},
            }
            for n in range(10)
        ],
    }


@pytest.mark.benchmark
def test_bench_transform_long_routes(benchmark: Any) -> None:
    """Benchmark the transform of ten 1000-point routes over three service windows."""
    geojson = _long_route(1000)
    windows = [{"service_id": name} for name in ("weekday", "saturday", "sunday")]

    bundle = benchmark(
        transform, geojson, {"serviceWindows": windows, "skipStopsWithinDistance": 0.05}
    )

    assert len(bundle.trips) == 30


@pytest.mark.benchmark
def test_bench_convert_two_routes(two_routes: Path, tmp_path: Path, benchmark: Any) -> None:
    """Benchmark conversion of the two-route fixture."""

    def do_convert() -> None:
        output = tmp_path / "bench_two_routes"
        output.mkdir(exist_ok=True)
        convert(str(two_routes), str(output))

    benchmark(do_convert)
