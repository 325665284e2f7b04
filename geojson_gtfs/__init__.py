"""GeoJSON to GTFS - Generate transit schedules from route geometries."""

from geojson_gtfs.api import convert, transform, validate
from geojson_gtfs.errors import ConfigurationError, GeoJSONToGTFSError, InputFormatError
from geojson_gtfs.gtfs.models import ScheduleBundle, TransformConfig
from geojson_gtfs.version import VERSION

__version__ = VERSION
__all__ = [
    "VERSION",
    "ConfigurationError",
    "GeoJSONToGTFSError",
    "InputFormatError",
    "ScheduleBundle",
    "TransformConfig",
    "convert",
    "transform",
    "validate",
]
