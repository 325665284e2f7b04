"""Trip scheduling from path distances and vehicle speed."""

import logging
import math
from collections.abc import Sequence

from geojson_gtfs.errors import ConfigurationError
from geojson_gtfs.gtfs.models import (
    Feature,
    Record,
    ScheduleBundle,
    ServiceWindow,
    TransformConfig,
)
from geojson_gtfs.pipeline.times import seconds_to_time

logger = logging.getLogger(__name__)


def check_vehicle_speed(speed: object, feature_index: int) -> float:
    """Return the speed as a float, rejecting values that cannot drive a schedule."""
    if isinstance(speed, bool) or not isinstance(speed, (int, float)):
        raise ConfigurationError(
            f"Vehicle speed for feature {feature_index} must be a number, got {speed!r}"
        )
    if not math.isfinite(speed) or speed <= 0:
        raise ConfigurationError(
            f"Vehicle speed for feature {feature_index} must be positive and finite, got {speed}"
        )
    return float(speed)


def schedule_stop_times(
    segment_distances_km: Sequence[float], speed_kmh: float, stop_duration: int
) -> list[tuple[int, int]]:
    """
    Compute (arrival, departure) seconds for each stop of a trip.

    Travel time is rounded up per segment, so rounding error accumulates along
    the trip rather than being corrected against the cumulative distance.
    """
    speed_mps = speed_kmh * 1000 / 3600
    elapsed = 0
    times: list[tuple[int, int]] = []

    for distance in segment_distances_km:
        elapsed += math.ceil(distance * 1000 / speed_mps)
        times.append((elapsed, elapsed + stop_duration))

    return times


def build_trips(
    bundle: ScheduleBundle,
    config: TransformConfig,
    feature: Feature,
    feature_index: int,
    route_stops: list[tuple[Record, float]],
    speed_kmh: float,
) -> None:
    """Append one trip, one frequency and its stop times per service window."""
    times = schedule_stop_times(
        [distance for _, distance in route_stops], speed_kmh, config.stop_duration
    )

    service_windows: list[ServiceWindow] = config.service_windows or []
    for service_window in service_windows:
        trip = config.map_trip(service_window, feature, feature_index)
        bundle.trips.append(trip)

        frequency = config.map_frequency(trip, feature, feature_index)
        bundle.frequencies.append(frequency)

        for stop_sequence, ((stop, _), (arrival, departure)) in enumerate(zip(route_stops, times)):
            stop_time = config.map_stop_time(
                trip,
                stop,
                stop_sequence,
                seconds_to_time(arrival),
                seconds_to_time(departure),
            )
            bundle.stop_times.append(stop_time)

    logger.debug(
        f"Feature {feature_index}: {len(service_windows)} trips, "
        f"{len(route_stops)} stops each"
    )
