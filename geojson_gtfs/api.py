"""Public API for geojson-gtfs."""

import hashlib
import json
import logging
import platform
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from geojson_gtfs.errors import InputFormatError
from geojson_gtfs.gtfs.config import resolve_config
from geojson_gtfs.gtfs.models import Manifest, ScheduleBundle, TransformConfig, ValidationReport
from geojson_gtfs.gtfs.reader import GTFSFeedReader
from geojson_gtfs.gtfs.validator import BundleValidator
from geojson_gtfs.output.csv import write_gtfs_files, write_gtfs_zip
from geojson_gtfs.output.json import write_json_bundle
from geojson_gtfs.pipeline.dedup import deduplicate
from geojson_gtfs.pipeline.stops import build_stops
from geojson_gtfs.pipeline.trips import build_trips, check_vehicle_speed
from geojson_gtfs.version import VERSION

logger = logging.getLogger(__name__)


def transform(
    geojson: Mapping[str, Any],
    config: TransformConfig | Mapping[str, Any] | None = None,
) -> ScheduleBundle:
    """
    Transform a GeoJSON FeatureCollection of route paths into schedule tables.

    Args:
        geojson: FeatureCollection whose features carry LineString-like
            ``geometry.coordinates`` in (lon, lat) order
        config: TransformConfig or mapping of options; unset options use defaults

    Returns:
        ScheduleBundle with agency, calendar, routes, trips and stops deduplicated
    """
    geo_type = geojson.get("type") if isinstance(geojson, Mapping) else None
    if geo_type != "FeatureCollection":
        raise InputFormatError(f"Expected FeatureCollection, found {geo_type}, Aborting")

    features = geojson.get("features") or []
    if not isinstance(features, (list, tuple)):
        raise InputFormatError(f"Expected a list of features, found {type(features).__name__}")
    for feature_index, feature in enumerate(features):
        if not isinstance(feature, dict):
            raise InputFormatError(f"Feature {feature_index} is not a GeoJSON object")

    config = resolve_config(config)
    service_windows = config.service_windows

    if config.prepare_geojson_feature:
        logger.debug("Preparing GeoJSON features")
        for feature in features:
            config.prepare_geojson_feature(feature)

    bundle = ScheduleBundle()
    bundle.agency = [config.map_agency(feature, i) for i, feature in enumerate(features)]
    bundle.calendar = [config.map_service(window) for window in service_windows]
    bundle.routes = [config.map_route(feature, i) for i, feature in enumerate(features)]

    for feature_index, feature in enumerate(features):
        logger.debug(f"Processing GeoJSON feature {feature_index}")

        speed = check_vehicle_speed(
            config.map_vehicle_speed(feature, feature_index), feature_index
        )
        route_stops = build_stops(bundle, config, feature, feature_index)
        build_trips(bundle, config, feature, feature_index, route_stops, speed)

    bundle = deduplicate(bundle)
    logger.info(
        f"Transformed {len(features)} features and {len(service_windows)} service windows "
        f"into {len(bundle.trips)} trips, {len(bundle.stops)} stops, "
        f"{len(bundle.stop_times)} stop_times"
    )
    return bundle


def convert(
    input_path: str,
    output_path: str,
    config: TransformConfig | Mapping[str, Any] | None = None,
    zip_output: bool = False,
    debug_json: bool = False,
) -> Manifest:
    """
    Convert a GeoJSON file into a GTFS feed.

    Args:
        input_path: Path to GeoJSON FeatureCollection file
        output_path: Path to output directory
        config: Optional transform configuration
        zip_output: Also write the feed as gtfs.zip
        debug_json: Also write the bundle as bundle.json

    Returns:
        Manifest with build metadata
    """
    logger.info(f"Starting conversion: {input_path} -> {output_path}")
    start_time = datetime.now(UTC)

    source = Path(input_path)
    if not source.is_file():
        raise FileNotFoundError(f"GeoJSON input not found: {input_path}")

    with open(source, encoding="utf-8") as f:
        geojson = json.load(f)

    bundle = transform(geojson, config)

    output_dir = Path(output_path)
    files_written = write_gtfs_files(output_dir, bundle)

    if zip_output:
        zip_path = output_dir / "gtfs.zip"
        write_gtfs_zip(zip_path, bundle)
        files_written[zip_path.name] = str(zip_path)

    if debug_json:
        files_written.update(write_json_bundle(output_dir, bundle))

    # Compute checksums
    checksums = {}
    for filename, filepath in files_written.items():
        with open(filepath, "rb") as f:
            checksums[filename] = hashlib.sha256(f.read()).hexdigest()

    manifest = Manifest(
        tool_version=VERSION,
        created_at_iso=start_time.isoformat(),
        inputs={"geojson_path": input_path},
        outputs=checksums,
        stats=bundle.stats(),
        build={
            "python": platform.python_version(),
            "platform": platform.platform(),
        },
    )

    manifest_path = output_dir / "manifest.json"
    with open(manifest_path, "w", encoding="utf-8") as f:
        json.dump(
            {
                "tool_version": manifest.tool_version,
                "created_at": manifest.created_at_iso,
                "inputs": manifest.inputs,
                "outputs": manifest.outputs,
                "stats": manifest.stats,
                "build": manifest.build,
            },
            f,
            indent=2,
            sort_keys=True,
        )

    logger.info(f"Wrote manifest to {manifest_path}")

    elapsed = (datetime.now(UTC) - start_time).total_seconds()
    logger.info(f"Conversion completed in {elapsed:.2f}s")

    return manifest


def validate(output_path: str) -> ValidationReport:
    """
    Validate a GTFS feed directory written by ``convert``.

    Args:
        output_path: Path to output directory containing GTFS .txt files

    Returns:
        ValidationReport with results
    """
    logger.info(f"Validating output: {output_path}")

    output_dir = Path(output_path)
    errors: list[str] = []
    warnings: list[str] = []

    # Only tables listed in the manifest belong to the last conversion
    manifest_path = output_dir / "manifest.json"
    manifest_outputs: dict[str, str] | None = None
    if manifest_path.exists():
        with open(manifest_path, encoding="utf-8") as f:
            manifest_outputs = json.load(f).get("outputs", {})
    else:
        warnings.append("manifest.json not found, checksums not verified")

    required_files = ["agency.txt", "routes.txt", "trips.txt", "stops.txt", "stop_times.txt"]
    for filename in required_files:
        if not (output_dir / filename).exists():
            errors.append(f"Required file missing: {filename}")
        elif manifest_outputs is not None and filename not in manifest_outputs:
            errors.append(f"Required file not listed in manifest: {filename}")

    if errors:
        return ValidationReport(valid=False, errors=errors, warnings=warnings)

    tables = None
    if manifest_outputs is not None:
        tables = [t for t in ScheduleBundle.TABLES if f"{t}.txt" in manifest_outputs]

    bundle = GTFSFeedReader(str(output_dir)).read_all(tables)
    report = BundleValidator(bundle).validate()
    report.warnings[:0] = warnings

    # Verify checksums
    for filename, expected_hash in (manifest_outputs or {}).items():
        filepath = output_dir / filename
        if not filepath.exists():
            report.errors.append(f"File listed in manifest is missing: {filename}")
            continue
        with open(filepath, "rb") as f:
            actual_hash = hashlib.sha256(f.read()).hexdigest()
        if actual_hash != expected_hash:
            report.errors.append(
                f"Checksum mismatch for {filename}: "
                f"expected {expected_hash}, got {actual_hash}"
            )

    report.valid = not report.errors
    return report
