import pytest
from datetime import datetime, timedelta, timezone

from sitewatch.models.schemas import (
    Attendance,
    Incident,
    RecordValidationError,
    Worker,
    Zone,
    validate_record,
)


def _worker_data(**overrides):
    data = {
        "name": "Ann Lee",
        "role": "Operator",
        "shift": "A",
        "status": "Active",
        "phone": "5551234567",
        "badgeId": "W-01",
        "ppeCompliant": True,
    }
    data.update(overrides)
    return data


def test_worker_accepts_aliases_and_assigns_id():
    worker = Worker(**_worker_data())
    assert worker.badge_id == "W-01"
    assert worker.ppe_compliant is True
    assert len(worker.id) == 9
    assert isinstance(worker.created_at, datetime)


def test_worker_accepts_attribute_names():
    worker = Worker(
        name="Bo Diaz",
        role="Technician",
        shift="B",
        status="Off",
        phone="5559876543",
        badge_id="W-02",
        ppe_compliant=False,
    )
    assert worker.model_dump(by_alias=True)["badgeId"] == "W-02"


def test_enum_values_are_plain_strings():
    worker = Worker(**_worker_data(role="Supervisor"))
    assert worker.role == "Supervisor"
    assert type(worker.role) is str


def test_validate_record_reports_min_length_and_enum():
    result = validate_record("workers", _worker_data(name="A", role="Manager"))
    assert not result.ok
    assert result.record is None
    constraints = {e.field: e.constraint for e in result.errors}
    assert constraints["name"] == "min_length"
    assert constraints["role"] == "enum"


def test_validate_record_reports_missing_field():
    data = _worker_data()
    del data["phone"]
    result = validate_record("workers", data)
    assert [(e.field, e.constraint) for e in result.errors] == [("phone", "missing")]


def test_validate_record_reports_null_reference():
    result = validate_record("attendance", {"workerId": None, "method": "NFC"})
    assert [(e.field, e.constraint) for e in result.errors] == [("workerId", "null")]


def test_validate_record_success():
    result = validate_record(Zone, {"name": "North Pit", "type": "Surface", "active": True})
    assert result.ok
    assert result.record.beacons is None


def test_attendance_check_out_must_follow_check_in():
    check_in = datetime(2024, 1, 1, 8, 0)
    result = validate_record(
        "attendance",
        {
            "workerId": "w1",
            "checkIn": check_in,
            "checkOut": check_in - timedelta(minutes=1),
            "method": "BLE",
        },
    )
    assert len(result.errors) == 1
    assert result.errors[0].constraint == "order"
    assert result.errors[0].field in ("checkOut", "check_out")


def test_attendance_open_check_in_is_valid():
    att = Attendance(workerId="w1", method="Manual")
    assert att.check_out is None


def test_unknown_collection_rejected():
    with pytest.raises(ValueError):
        validate_record("vehicles", {})


def test_record_validation_error_is_value_error():
    result = validate_record("zones", {"name": "Z", "type": "Orbit", "active": True})
    err = RecordValidationError("zones", result.errors)
    assert isinstance(err, ValueError)
    assert "name" in str(err)
    assert err.entity == "zones"


def test_offset_timestamps_become_naive_local():
    incident = Incident(type="Fall", severity="High", timestamp="2024-01-01T08:00:00Z")
    expected = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert incident.timestamp.tzinfo is None
    assert incident.timestamp == expected


def test_attendance_mixed_offsets_validate_without_error():
    check_in = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    ok = validate_record(
        "attendance",
        {
            "workerId": "w1",
            "checkIn": "2024-01-01T08:00:00Z",
            "checkOut": (check_in + timedelta(hours=8)).isoformat(),
            "method": "NFC",
        },
    )
    assert ok.ok
    assert ok.record.check_in == check_in

    early = validate_record(
        "attendance",
        {
            "workerId": "w1",
            "checkIn": "2024-01-01T08:00:00Z",
            "checkOut": (check_in - timedelta(minutes=5)).isoformat(),
            "method": "NFC",
        },
    )
    assert [e.constraint for e in early.errors] == ["order"]
