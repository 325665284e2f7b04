"""JSON debug output."""

import json
import logging
from pathlib import Path

from geojson_gtfs.gtfs.models import ScheduleBundle

logger = logging.getLogger(__name__)


def write_json_bundle(output_path: Path, bundle: ScheduleBundle) -> dict[str, str]:
    """Write the whole bundle as a single debug JSON file."""
    output_path.mkdir(parents=True, exist_ok=True)

    bundle_path = output_path / "bundle.json"
    with open(bundle_path, "w", encoding="utf-8") as f:
        json.dump(
            {"stats": bundle.stats(), "tables": bundle.as_dict()},
            f,
            indent=2,
            sort_keys=True,
            default=str,
        )
    logger.info(f"Wrote {bundle_path}")

    return {"bundle.json": str(bundle_path)}
