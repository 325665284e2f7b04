"""Default mapping functions and configuration resolution."""

import logging
import math
from collections.abc import Mapping
from dataclasses import fields, replace
from typing import Any

from geojson_gtfs.errors import ConfigurationError
from geojson_gtfs.gtfs.models import (
    Coordinate,
    Feature,
    Record,
    ServiceWindow,
    TransformConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_VEHICLE_SPEED = 50  # km/h
DEFAULT_HEADWAY_SECS = 600
DEFAULT_START_TIME = "06:00:00"
DEFAULT_END_TIME = "22:00:00"
DEFAULT_ROUTE_TYPE = 3  # bus

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

DEFAULT_SERVICE_WINDOW = {
    "service_id": "default",
    **{day: 1 for day in WEEKDAYS},
    "start_date": "20000101",
    "end_date": "20991231",
}

# Option names accepted in mapping-style configuration
OPTION_ALIASES = {
    "serviceWindows": "service_windows",
    "skipStopsWithinDistance": "skip_stops_within_distance",
    "stopDuration": "stop_duration",
    "prepareGeojsonFeature": "prepare_geojson_feature",
    "mapAgency": "map_agency",
    "mapStop": "map_stop",
    "mapShapePoint": "map_shape_point",
    "mapRoute": "map_route",
    "mapTrip": "map_trip",
    "mapStopTime": "map_stop_time",
    "mapFrequency": "map_frequency",
    "mapService": "map_service",
    "mapVehicleSpeed": "map_vehicle_speed",
}


def _properties(feature: Feature) -> dict[str, Any]:
    return feature.get("properties") or {}


def default_route_id(feature: Feature, feature_index: int) -> str:
    return str(_properties(feature).get("route_id", feature_index))


def map_agency(feature: Feature, feature_index: int) -> Record:
    props = _properties(feature)
    return {
        "agency_id": props.get("agency_id", "agency"),
        "agency_name": props.get("agency_name", "Unknown agency"),
        "agency_url": props.get("agency_url", "https://www.example.com"),
        "agency_timezone": props.get("agency_timezone", "UTC"),
    }


def map_stop(coords: Coordinate, coords_index: int, feature: Feature, feature_index: int) -> Record:
    return {
        "stop_id": f"{feature_index}-{coords_index}",
        "stop_name": f"Stop {coords_index + 1} of route {default_route_id(feature, feature_index)}",
        "stop_lat": coords[1],
        "stop_lon": coords[0],
    }


def map_shape_point(
    coords: Coordinate,
    coords_index: int,
    feature: Feature,
    feature_index: int,
    distance: float,
) -> Record:
    return {
        "shape_id": default_route_id(feature, feature_index),
        "shape_pt_lat": coords[1],
        "shape_pt_lon": coords[0],
        "shape_pt_sequence": coords_index,
        "shape_dist_traveled": distance,
    }


def map_route(feature: Feature, feature_index: int) -> Record:
    props = _properties(feature)
    route_id = default_route_id(feature, feature_index)
    return {
        "agency_id": props.get("agency_id", "agency"),
        "route_id": route_id,
        "route_short_name": props.get("name", route_id),
        "route_type": props.get("route_type", DEFAULT_ROUTE_TYPE),
    }


def map_trip(service_window: ServiceWindow, feature: Feature, feature_index: int) -> Record:
    route_id = default_route_id(feature, feature_index)
    service_id = service_window["service_id"]
    return {
        "route_id": route_id,
        "service_id": service_id,
        "trip_id": f"{route_id}-{service_id}",
        "shape_id": route_id,
    }


def map_stop_time(
    trip: Record,
    stop: Record,
    stop_sequence: int,
    arrival_time: str,
    departure_time: str,
) -> Record:
    return {
        "trip_id": trip["trip_id"],
        "stop_id": stop["stop_id"],
        "arrival_time": arrival_time,
        "departure_time": departure_time,
        "stop_sequence": stop_sequence,
    }


def map_frequency(trip: Record, feature: Feature, feature_index: int) -> Record:
    props = _properties(feature)
    return {
        "trip_id": trip["trip_id"],
        "start_time": props.get("start_time", DEFAULT_START_TIME),
        "end_time": props.get("end_time", DEFAULT_END_TIME),
        "headway_secs": props.get("headway_secs", DEFAULT_HEADWAY_SECS),
    }


def map_service(service_window: ServiceWindow) -> Record:
    record = {"service_id": service_window["service_id"]}
    for day in WEEKDAYS:
        record[day] = int(bool(service_window.get(day, 0)))
    record["start_date"] = service_window.get("start_date", DEFAULT_SERVICE_WINDOW["start_date"])
    record["end_date"] = service_window.get("end_date", DEFAULT_SERVICE_WINDOW["end_date"])
    return record


def map_vehicle_speed(feature: Feature, feature_index: int) -> float:
    return _properties(feature).get("vehicle_speed", DEFAULT_VEHICLE_SPEED)


DEFAULT_MAPPERS = {
    "map_agency": map_agency,
    "map_stop": map_stop,
    "map_shape_point": map_shape_point,
    "map_route": map_route,
    "map_trip": map_trip,
    "map_stop_time": map_stop_time,
    "map_frequency": map_frequency,
    "map_service": map_service,
    "map_vehicle_speed": map_vehicle_speed,
}


def resolve_config(user_config: TransformConfig | Mapping[str, Any] | None = None) -> TransformConfig:
    """
    Merge user configuration with defaults.

    Accepts a TransformConfig, a mapping using either the camelCase option
    names or the TransformConfig field names, or None.
    """
    if user_config is None:
        config = TransformConfig()
    elif isinstance(user_config, TransformConfig):
        config = replace(user_config)
    elif isinstance(user_config, Mapping):
        config = _config_from_mapping(user_config)
    else:
        raise ConfigurationError(
            f"Expected TransformConfig or mapping, found {type(user_config).__name__}"
        )

    if config.service_windows is None:
        config.service_windows = [dict(DEFAULT_SERVICE_WINDOW)]
    else:
        config.service_windows = list(config.service_windows)

    for name, default in DEFAULT_MAPPERS.items():
        value = getattr(config, name)
        if value is None:
            setattr(config, name, default)
        elif not callable(value):
            raise ConfigurationError(f"Option {name} must be callable, got {value!r}")

    if config.prepare_geojson_feature is not None and not callable(config.prepare_geojson_feature):
        raise ConfigurationError("Option prepare_geojson_feature must be callable")

    _check_number(config.skip_stops_within_distance, "skip_stops_within_distance")
    _check_number(config.stop_duration, "stop_duration")
    if not isinstance(config.stop_duration, int):
        raise ConfigurationError(
            f"Option stop_duration must be an integer number of seconds, got {config.stop_duration}"
        )

    return config


def _config_from_mapping(options: Mapping[str, Any]) -> TransformConfig:
    known = {f.name for f in fields(TransformConfig)}
    kwargs: dict[str, Any] = {}

    for key, value in options.items():
        name = OPTION_ALIASES.get(key, key)
        if name not in known:
            raise ConfigurationError(f"Unknown configuration option: {key}")
        if value is not None:
            kwargs[name] = value

    return TransformConfig(**kwargs)


def _check_number(value: object, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"Option {name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigurationError(f"Option {name} must be finite, got {value}")
    if value < 0:
        raise ConfigurationError(f"Option {name} must not be negative, got {value}")
