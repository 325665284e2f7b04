"""GTFS feed reader."""

import csv
import logging
from collections.abc import Iterable
from pathlib import Path

from geojson_gtfs.gtfs.models import Record, ScheduleBundle

logger = logging.getLogger(__name__)


class GTFSFeedReader:
    """Read a GTFS feed directory back into a ScheduleBundle.

    Values are kept as the strings found in the files.
    """

    def __init__(self, gtfs_path: str) -> None:
        """Initialize reader with GTFS directory path."""
        self.gtfs_path = Path(gtfs_path)
        if not self.gtfs_path.is_dir():
            raise ValueError(f"GTFS path not found or not a directory: {gtfs_path}")

    def read_all(self, tables: Iterable[str] | None = None) -> ScheduleBundle:
        """Read the GTFS tables present in the directory, or only ``tables`` if given."""
        logger.info(f"Reading GTFS data from {self.gtfs_path}")

        selected = ScheduleBundle.TABLES if tables is None else set(tables)

        bundle = ScheduleBundle()
        for table in ScheduleBundle.TABLES:
            if table in selected:
                setattr(bundle, table, self.read_table(table))

        logger.info(
            f"Loaded {len(bundle.stops)} stops, {len(bundle.routes)} routes, "
            f"{len(bundle.trips)} trips, {len(bundle.stop_times)} stop_times, "
            f"{len(bundle.shapes)} shape points"
        )
        return bundle

    def read_table(self, table: str) -> list[Record]:
        """Read <table>.txt, returning an empty list if it is absent."""
        file_path = self.gtfs_path / f"{table}.txt"
        if not file_path.exists():
            logger.info(f"{file_path.name} not found, skipping")
            return []

        with open(file_path, encoding="utf-8-sig", newline="") as f:
            return [dict(row) for row in csv.DictReader(f)]
