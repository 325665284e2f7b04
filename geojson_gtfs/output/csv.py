"""GTFS text file output."""

import csv
import io
import logging
import zipfile
from pathlib import Path

from geojson_gtfs.gtfs.models import Record, ScheduleBundle

logger = logging.getLogger(__name__)


def table_columns(records: list[Record]) -> list[str]:
    """Union of record keys, in first-seen order."""
    columns: dict[str, None] = {}
    for record in records:
        for key in record:
            columns.setdefault(key, None)
    return list(columns)


def _write_table(f: io.TextIOBase, records: list[Record]) -> None:
    writer = csv.DictWriter(f, fieldnames=table_columns(records), lineterminator="\n")
    writer.writeheader()
    writer.writerows(records)


def write_gtfs_files(output_path: Path, bundle: ScheduleBundle) -> dict[str, str]:
    """Write one GTFS .txt file per non-empty table, removing files of empty ones."""
    logger.info(f"Writing GTFS files to {output_path}")

    output_path.mkdir(parents=True, exist_ok=True)

    files_written = {}

    for table, records in bundle.as_dict().items():
        file_path = output_path / f"{table}.txt"

        if not records:
            if file_path.exists():
                file_path.unlink()
                logger.info(f"Removed stale {file_path.name}, table {table} is empty")
            continue

        with open(file_path, "w", encoding="utf-8", newline="") as f:
            _write_table(f, records)
        files_written[file_path.name] = str(file_path)
        logger.debug(f"Wrote {len(records)} records to {file_path}")

    logger.info(f"Wrote {len(files_written)} GTFS files")
    return files_written


def write_gtfs_zip(zip_path: Path, bundle: ScheduleBundle) -> str:
    """Write the GTFS tables into a single zip archive."""
    zip_path.parent.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for table, records in bundle.as_dict().items():
            if not records:
                continue
            buffer = io.StringIO()
            _write_table(buffer, records)
            archive.writestr(f"{table}.txt", buffer.getvalue())

    logger.info(f"Wrote {zip_path}")
    return str(zip_path)
