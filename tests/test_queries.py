from datetime import datetime

from sitewatch.models.schemas import Device, Worker
from sitewatch.queries import SEARCH_KEYS, filter_records, search_records
from sitewatch.utils.formatting import format_date, format_datetime, format_hours, format_time


def _worker(name, role="Operator", shift="A", badge="WSI-1000"):
    return Worker(
        name=name,
        role=role,
        shift=shift,
        status="Active",
        phone="555-555-1000",
        badge_id=badge,
        ppe_compliant=True,
    )


WORKERS = [
    _worker("John Smith", "Operator", "A", "WSI-1000"),
    _worker("Maria Garcia", "Technician", "B", "WSI-1001"),
    _worker("David Chen", "Supervisor", "A", "WSI-1002"),
]


def test_filter_by_multiple_fields():
    assert [w.name for w in filter_records(WORKERS, shift="A")] == ["John Smith", "David Chen"]
    assert [w.name for w in filter_records(WORKERS, shift="A", role="Supervisor")] == ["David Chen"]


def test_empty_filters_match_everything():
    assert filter_records(WORKERS, role="", shift=None) == WORKERS


def test_search_is_case_insensitive_over_keys():
    assert [w.name for w in search_records(WORKERS, "garcia", SEARCH_KEYS["workers"])] == ["Maria Garcia"]
    assert [w.name for w in search_records(WORKERS, "1002", SEARCH_KEYS["workers"])] == ["David Chen"]
    assert search_records(WORKERS, "  ", SEARCH_KEYS["workers"]) == WORKERS


def test_search_devices_by_serial():
    devices = [
        Device(type="Camera", serial="CAM-10002", status="Online"),
        Device(type="Gateway", serial="GAT-10003", status="Offline"),
    ]
    assert search_records(devices, "gat", SEARCH_KEYS["devices"]) == [devices[1]]


def test_formatting():
    moment = datetime(2024, 1, 5, 8, 30)
    assert format_date(moment) == "Jan 5, 2024"
    assert format_time(moment) == "08:30 AM"
    assert format_datetime(moment) == "Jan 5, 08:30 AM"
    assert format_hours(8.5) == "8.5"
    assert format_hours(0) == "0.0"
