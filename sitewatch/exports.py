"""Export documents: the full dataset as JSON, incidents as CSV."""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Iterable, Union

from sitewatch.models.schemas import Incident, Snapshot
from sitewatch.utils.logger import get_logger

logger = get_logger(__name__)

EXPORT_ORDER = ("workers", "incidents", "zones", "devices", "attendance")
INCIDENT_COLUMNS = ("type", "severity", "timestamp")


def export_json(snapshot: Snapshot) -> str:
    """Pretty-printed JSON of all five collections."""
    data = snapshot.model_dump(mode="json", by_alias=True)
    return json.dumps({key: data[key] for key in EXPORT_ORDER}, indent=2)


def export_incidents_csv(incidents: Iterable[Incident]) -> str:
    """One row per incident; empty document when there are no incidents."""
    rows = [
        {"type": i.type, "severity": i.severity, "timestamp": i.timestamp.isoformat()}
        for i in incidents
    ]
    if not rows:
        return ""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=INCIDENT_COLUMNS, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def write_export(text: str, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info(f"Wrote export to {path}")
    return path
