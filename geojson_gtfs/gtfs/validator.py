"""Schedule bundle validator."""

import logging
from collections import Counter

from geojson_gtfs.gtfs.models import Record, ScheduleBundle, ValidationReport
from geojson_gtfs.pipeline.times import time_to_seconds

logger = logging.getLogger(__name__)


class BundleValidator:
    """Validate schedule tables for consistency."""

    def __init__(self, bundle: ScheduleBundle) -> None:
        """Initialize validator with the bundle to check."""
        self.bundle = bundle
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def validate(self) -> ValidationReport:
        """Run all validation checks."""
        logger.info("Validating schedule bundle")

        self._validate_tables()
        self._validate_trips()
        self._validate_frequencies()
        self._validate_stop_times()

        valid = len(self.errors) == 0

        report = ValidationReport(
            valid=valid,
            errors=self.errors.copy(),
            warnings=self.warnings.copy(),
            stats=self.bundle.stats(),
        )

        if not valid:
            logger.error(f"Validation failed with {len(self.errors)} errors")
        elif self.warnings:
            logger.warning(f"Validation passed with {len(self.warnings)} warnings")
        else:
            logger.info("Validation passed")

        return report

    def _validate_tables(self) -> None:
        """Warn about empty tables."""
        for table, count in self.bundle.stats().items():
            if count == 0:
                self.warnings.append(f"Table {table} is empty")

    def _validate_trips(self) -> None:
        """Validate trips reference known routes and services."""
        route_ids = {str(route.get("route_id")) for route in self.bundle.routes}
        service_ids = {str(entry.get("service_id")) for entry in self.bundle.calendar}
        routes_with_trips = set()

        for trip in self.bundle.trips:
            route_id = str(trip.get("route_id"))
            routes_with_trips.add(route_id)
            if route_id not in route_ids:
                self.errors.append(
                    f"Trip {trip.get('trip_id')} references non-existent route {route_id}"
                )
            if service_ids and str(trip.get("service_id")) not in service_ids:
                self.errors.append(
                    f"Trip {trip.get('trip_id')} references non-existent service "
                    f"{trip.get('service_id')}"
                )

        for route_id in sorted(route_ids - routes_with_trips):
            self.warnings.append(f"Route {route_id} has no trips")

    def _validate_frequencies(self) -> None:
        """Validate each trip has exactly one frequency."""
        if not self.bundle.frequencies:
            return

        counts = Counter(str(freq.get("trip_id")) for freq in self.bundle.frequencies)
        for trip in self.bundle.trips:
            trip_id = str(trip.get("trip_id"))
            if counts.get(trip_id, 0) != 1:
                self.errors.append(
                    f"Trip {trip_id} has {counts.get(trip_id, 0)} frequencies, expected 1"
                )

    def _validate_stop_times(self) -> None:
        """Validate stop_times reference valid stops/trips and times never decrease."""
        stop_ids = {str(stop.get("stop_id")) for stop in self.bundle.stops}
        trip_ids = {str(trip.get("trip_id")) for trip in self.bundle.trips}

        # Group by trip
        trip_stop_times: dict[str, list[Record]] = {}
        for st in self.bundle.stop_times:
            trip_stop_times.setdefault(str(st.get("trip_id")), []).append(st)

        for trip_id, stop_times in trip_stop_times.items():
            if trip_id not in trip_ids:
                self.errors.append(f"Stop times reference non-existent trip {trip_id}")
                continue

            prev_arrival = -1
            prev_departure = -1
            for st in stop_times:
                stop_id = str(st.get("stop_id"))
                if stop_id not in stop_ids:
                    self.errors.append(
                        f"Stop time for trip {trip_id} references non-existent stop {stop_id}"
                    )

                try:
                    arrival = time_to_seconds(str(st["arrival_time"]))
                    departure = time_to_seconds(str(st["departure_time"]))
                except (KeyError, ValueError) as e:
                    self.errors.append(f"Trip {trip_id} has invalid time at stop {stop_id}: {e}")
                    continue

                if arrival < prev_arrival or departure < prev_departure:
                    self.errors.append(
                        f"Trip {trip_id} has decreasing times at stop {stop_id}: "
                        f"{prev_arrival} -> {arrival}"
                    )
                if departure < arrival:
                    self.errors.append(
                        f"Trip {trip_id} departs before arriving at stop {stop_id}"
                    )

                prev_arrival = arrival
                prev_departure = departure
