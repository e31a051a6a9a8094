from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine

from sitewatch.analytics import (
    active_worker_count,
    active_zone_count,
    attendance_summary,
    dashboard_stats,
    device_status_counts,
    incidents_by_severity,
    incidents_by_type,
    percentage,
    ppe_compliance,
    ppe_compliance_by_shift,
    recent_incident_count,
    recent_incidents,
    report_stats,
    worked_hours,
)
from sitewatch.config import Settings
from sitewatch.models.schemas import Attendance, Device, Incident, Worker, Zone
from sitewatch.storage import SnapshotStorage
from sitewatch.store import AppStore

NOW = datetime(2024, 3, 1, 12, 0)


def _worker(shift="A", status="Active", compliant=True):
    return Worker(
        name="Test Worker",
        role="Operator",
        shift=shift,
        status=status,
        phone="5550000000",
        badge_id="WSI-1",
        ppe_compliant=compliant,
    )


def _incident(hours_ago, type="Fall", severity="Low"):
    return Incident(type=type, severity=severity, timestamp=NOW - timedelta(hours=hours_ago))


def test_active_counts():
    workers = [_worker(), _worker(status="Off"), _worker(status="OnLeave"), _worker()]
    zones = [
        Zone(name="North Pit", type="Surface", active=True),
        Zone(name="Hazmat Zone", type="Restricted", active=False),
    ]
    assert active_worker_count(workers) == 2
    assert active_zone_count(zones) == 1


def test_recent_incident_count_uses_24h_window():
    incidents = [_incident(1), _incident(23.9), _incident(24), _incident(48)]
    assert recent_incident_count(incidents, now=NOW) == 2
    assert recent_incident_count(incidents, now=NOW, window=timedelta(days=3)) == 4


def test_ppe_compliance_empty_is_zero():
    assert ppe_compliance([]) == 0


def test_ppe_compliance_rounds_half_up():
    workers = [_worker(compliant=True)] + [_worker(compliant=False)] * 7
    assert ppe_compliance(workers) == 13
    assert percentage(2, 3) == 67
    assert percentage(1, 3) == 33


def test_incidents_grouped():
    incidents = [
        _incident(1, "Fall", "High"),
        _incident(2, "Gas Alert", "Low"),
        _incident(3, "Fall", "Low"),
    ]
    assert incidents_by_type(incidents) == {"Fall": 2, "Gas Alert": 1}
    assert incidents_by_severity(incidents) == {"High": 1, "Low": 2}
    assert incidents_by_type([]) == {}


def test_ppe_by_shift_handles_empty_shift():
    workers = [_worker("A", compliant=True), _worker("A", compliant=False), _worker("B", compliant=True)]
    assert ppe_compliance_by_shift(workers) == {"A": 50, "B": 100, "C": 0}


def test_worked_hours():
    check_in = datetime(2024, 1, 1, 8, 0, 0)
    assert worked_hours(check_in, None) == 0
    assert worked_hours(check_in, datetime(2024, 1, 1, 16, 30, 0)) == 8.5
    assert worked_hours(check_in, datetime(2024, 1, 1, 17, 10, 0)) == pytest.approx(9.2)


def test_attendance_summary():
    check_in = datetime(2024, 1, 1, 8, 0)
    records = [
        Attendance(worker_id="w1", check_in=check_in, check_out=check_in + timedelta(hours=8), method="NFC"),
        Attendance(worker_id="w2", check_in=check_in, check_out=check_in + timedelta(hours=9), method="BLE"),
        Attendance(worker_id="w3", check_in=check_in, method="Manual"),
    ]
    summary = attendance_summary(records)
    assert summary.total_records == 3
    assert summary.total_hours == 17.0
    assert summary.average_hours == 5.7
    assert summary.checked_in == 1
    assert attendance_summary([]).average_hours == 0


def test_device_status_counts_include_all_statuses():
    devices = [
        Device(type="Camera", serial="CAM-10002", status="Online"),
        Device(type="Gateway", serial="GAT-10003", status="Degraded"),
    ]
    assert device_status_counts(devices) == {"Online": 1, "Offline": 0, "Degraded": 1}


def test_recent_incidents_limit():
    incidents = [_incident(h) for h in range(8)]
    assert recent_incidents(incidents) == incidents[:5]


@pytest.fixture()
def store():
    engine = create_engine("sqlite:///:memory:", future=True)
    return AppStore(storage=SnapshotStorage(engine=engine, settings=Settings()))


def test_dashboard_and_report_bundles(store):
    store.add_worker(_worker(shift="B", compliant=False))
    store.add_zone({"name": "North Pit", "type": "Surface", "active": True})
    store.add_incident(_incident(2, "Zone Intrusion", "Medium"))
    store.add_incident(_incident(30, "Other", "Medium"))

    dash = dashboard_stats(store, now=NOW)
    assert dash.active_workers == 1
    assert dash.active_zones == 1
    assert dash.incidents_last_24h == 1
    assert dash.ppe_compliance == 0
    assert len(dash.recent_incidents) == 2
    assert dash.incidents_by_type == {"Zone Intrusion": 1, "Other": 1}

    report = report_stats(store)
    assert report.incidents_by_severity == {"Medium": 2}
    assert report.ppe_compliance_by_shift == {"A": 0, "B": 0, "C": 0}
    assert report.attendance.total_records == 0
