"""Deduplication of schedule records by identity field."""

import logging
from dataclasses import replace

from geojson_gtfs.gtfs.models import Record, ScheduleBundle

logger = logging.getLogger(__name__)

# Tables collapsed by identity field; frequencies, stop_times and shapes hold
# one entry per occurrence and are left as produced.
IDENTITY_FIELDS = {
    "agency": "agency_id",
    "calendar": "service_id",
    "routes": "route_id",
    "trips": "trip_id",
    "stops": "stop_id",
}


def unique_by(records: list[Record], field: str) -> list[Record]:
    """Keep the first record for each value of ``field``, preserving order."""
    seen: set = set()
    unique: list[Record] = []

    for record in records:
        if field not in record:
            unique.append(record)
            continue

        key = _hashable(record[field])
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)

    return unique


def deduplicate(bundle: ScheduleBundle) -> ScheduleBundle:
    """Return a copy of the bundle with identity-keyed tables deduplicated."""
    changes = {}
    for table, field in IDENTITY_FIELDS.items():
        records = getattr(bundle, table)
        changes[table] = unique_by(records, field)
        dropped = len(records) - len(changes[table])
        if dropped:
            logger.debug(f"Dropped {dropped} duplicate {table} records by {field}")

    return replace(bundle, **changes)


def _hashable(value: object) -> object:
    try:
        hash(value)
    except TypeError:
        # Tagged so an unhashable value never equals a string id with the same text
        return ("unhashable", repr(value))
    return value
