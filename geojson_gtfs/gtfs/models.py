"""Data models for schedule records and internal representations."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

Record = dict[str, Any]
Coordinate = Sequence[float]  # (lon, lat)
Feature = dict[str, Any]
ServiceWindow = Any  # opaque to the transform, passed to map_trip and map_service

PrepareFeatureFn = Callable[[Feature], Any]
MapAgencyFn = Callable[[Feature, int], Record]
MapStopFn = Callable[[Coordinate, int, Feature, int], Record]
MapShapePointFn = Callable[[Coordinate, int, Feature, int, float], Record]
MapRouteFn = Callable[[Feature, int], Record]
MapTripFn = Callable[[ServiceWindow, Feature, int], Record]
MapStopTimeFn = Callable[[Record, Record, int, str, str], Record]
MapFrequencyFn = Callable[[Record, Feature, int], Record]
MapServiceFn = Callable[[ServiceWindow], Record]
MapVehicleSpeedFn = Callable[[Feature, int], float]


@dataclass(frozen=True)
class RetainedPoint:
    """Coordinate kept by the proximity filter."""

    coordinate: Coordinate
    index: int  # position in the feature's original coordinate list
    segment_distance_km: float  # from the previous retained point, 0 for the first
    cumulative_distance_km: float  # includes distance of filtered-out points


@dataclass
class ScheduleBundle:
    """Schedule tables produced by a transform, keyed like GTFS files."""

    agency: list[Record] = field(default_factory=list)
    calendar: list[Record] = field(default_factory=list)
    routes: list[Record] = field(default_factory=list)
    trips: list[Record] = field(default_factory=list)
    frequencies: list[Record] = field(default_factory=list)
    stops: list[Record] = field(default_factory=list)
    stop_times: list[Record] = field(default_factory=list)
    shapes: list[Record] = field(default_factory=list)

    TABLES = (
        "agency",
        "calendar",
        "routes",
        "trips",
        "frequencies",
        "stops",
        "stop_times",
        "shapes",
    )

    def as_dict(self) -> dict[str, list[Record]]:
        return {name: getattr(self, name) for name in self.TABLES}

    def stats(self) -> dict[str, int]:
        return {name: len(getattr(self, name)) for name in self.TABLES}


@dataclass
class TransformConfig:
    """Configuration for the transform.

    Mapping functions left as None are filled in by ``resolve_config``.
    """

    service_windows: list[ServiceWindow] | None = None
    skip_stops_within_distance: float = 0  # km
    stop_duration: int = 0  # seconds
    prepare_geojson_feature: PrepareFeatureFn | None = None
    map_agency: MapAgencyFn | None = None
    map_stop: MapStopFn | None = None
    map_shape_point: MapShapePointFn | None = None
    map_route: MapRouteFn | None = None
    map_trip: MapTripFn | None = None
    map_stop_time: MapStopTimeFn | None = None
    map_frequency: MapFrequencyFn | None = None
    map_service: MapServiceFn | None = None
    map_vehicle_speed: MapVehicleSpeedFn | None = None


@dataclass
class Manifest:
    """Build manifest with metadata and checksums."""

    tool_version: str
    created_at_iso: str
    inputs: dict[str, Any]
    outputs: dict[str, str]  # filename -> sha256
    stats: dict[str, int]
    build: dict[str, str]


@dataclass
class ValidationReport:
    """Report from validation process."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)
