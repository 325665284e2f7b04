"""Stop and shape point materialization for a single feature."""

import logging

from geojson_gtfs.errors import InputFormatError
from geojson_gtfs.gtfs.models import Feature, Record, ScheduleBundle, TransformConfig
from geojson_gtfs.pipeline.points import retain_points

logger = logging.getLogger(__name__)


def feature_coordinates(feature: Feature, feature_index: int) -> list:
    """Return the ordered coordinate list of a feature's geometry."""
    geometry = feature.get("geometry") if isinstance(feature, dict) else None
    coordinates = geometry.get("coordinates") if isinstance(geometry, dict) else None

    if not isinstance(coordinates, (list, tuple)):
        raise InputFormatError(
            f"Feature {feature_index} has no geometry.coordinates sequence"
        )
    return list(coordinates)


def build_stops(
    bundle: ScheduleBundle,
    config: TransformConfig,
    feature: Feature,
    feature_index: int,
) -> list[tuple[Record, float]]:
    """
    Map every retained coordinate of a feature to a stop and a shape point.

    Returns the feature's stops in path order, each paired with its distance in
    kilometers from the previous retained stop, for scheduling.
    """
    coordinates = feature_coordinates(feature, feature_index)
    points = retain_points(coordinates, config.skip_stops_within_distance)

    route_stops: list[tuple[Record, float]] = []
    for point in points:
        stop = config.map_stop(point.coordinate, point.index, feature, feature_index)
        shape_point = config.map_shape_point(
            point.coordinate,
            point.index,
            feature,
            feature_index,
            point.cumulative_distance_km,
        )
        bundle.stops.append(stop)
        bundle.shapes.append(shape_point)
        route_stops.append((stop, point.segment_distance_km))

    logger.debug(
        f"Feature {feature_index}: kept {len(points)} of {len(coordinates)} points "
        f"(threshold {config.skip_stops_within_distance} km)"
    )
    return route_stops
