"""Errors raised by the GeoJSON to GTFS transform."""


class GeoJSONToGTFSError(Exception):
    """Base class for transform errors."""


class InputFormatError(GeoJSONToGTFSError, ValueError):
    """Input is not a GeoJSON FeatureCollection of line paths."""


class ConfigurationError(GeoJSONToGTFSError, ValueError):
    """Transform configuration is invalid."""
