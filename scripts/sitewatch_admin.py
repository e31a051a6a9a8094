#!/usr/bin/env python
"""CLI for maintaining the local SiteWatch dataset.

Usage:
    python scripts/sitewatch_admin.py --summary
    python scripts/sitewatch_admin.py --reset
    python scripts/sitewatch_admin.py --slots
    python scripts/sitewatch_admin.py --export-json out/data.json --export-incidents out/incidents.csv

This will:
- Load the stored snapshot (seeding one if storage is empty)
- Optionally discard it and regenerate demonstration data
- Optionally write the JSON / CSV exports
- Optionally list the occupied storage slots
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to path so 'sitewatch' imports work
sys.path.insert(0, str(Path(__file__).parent.parent))

from sitewatch.analytics import dashboard_stats
from sitewatch.config import get_settings
from sitewatch.exports import export_incidents_csv, export_json, write_export
from sitewatch.storage import SnapshotStorage
from sitewatch.store import AppStore
from sitewatch.utils.formatting import format_datetime
from sitewatch.utils.logger import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Maintain the local SiteWatch dataset")
    parser.add_argument("--database-url", default=None, help="Override SITEWATCH_DATABASE_URL")
    parser.add_argument("--reset", action="store_true", help="Regenerate demonstration data")
    parser.add_argument("--export-json", type=Path, default=None, help="Write all records as JSON")
    parser.add_argument("--export-incidents", type=Path, default=None, help="Write incidents as CSV")
    parser.add_argument("--summary", action="store_true", help="Print dashboard KPIs")
    parser.add_argument("--slots", action="store_true", help="List occupied storage slots")
    args = parser.parse_args()

    settings = get_settings()
    if args.database_url:
        settings.database_url = args.database_url
    setup_logging(settings.log_level)

    storage = SnapshotStorage(settings=settings)
    store = AppStore(storage=storage).initialize()
    if args.reset:
        store.reset_data()
    if args.export_json:
        write_export(export_json(store.snapshot()), args.export_json)
    if args.export_incidents:
        write_export(export_incidents_csv(store.incidents), args.export_incidents)
    if args.summary:
        stats = dashboard_stats(store)
        print(f"Active workers:  {stats.active_workers}")
        print(f"Active zones:    {stats.active_zones}")
        print(f"Incidents (24h): {stats.incidents_last_24h}")
        print(f"PPE compliance:  {stats.ppe_compliance}%")
        for incident in stats.recent_incidents:
            print(
                f"  {format_datetime(incident.timestamp)}  {incident.severity:<6}  "
                f"{incident.type} ({store.worker_name(incident.worker_id)} @ {store.zone_name(incident.zone_id)})"
            )
    if args.slots:
        for key in storage.slot_keys():
            print(key)


if __name__ == "__main__":
    main()
