"""Data schemas and validation."""
from .schemas import (
    ENTITY_MODELS,
    PRIMARY_COLORS,
    THEME_MODES,
    Attendance,
    CheckInMethod,
    Device,
    DeviceStatus,
    DeviceType,
    FieldError,
    Incident,
    IncidentType,
    PrimaryColor,
    RecordModel,
    RecordValidationError,
    Severity,
    Shift,
    Snapshot,
    ThemeMode,
    ValidationResult,
    Worker,
    WorkerRole,
    WorkerStatus,
    Zone,
    ZoneType,
    validate_record,
)

__all__ = [
    "ENTITY_MODELS",
    "PRIMARY_COLORS",
    "THEME_MODES",
    "Attendance",
    "CheckInMethod",
    "Device",
    "DeviceStatus",
    "DeviceType",
    "FieldError",
    "Incident",
    "IncidentType",
    "PrimaryColor",
    "RecordModel",
    "RecordValidationError",
    "Severity",
    "Shift",
    "Snapshot",
    "ThemeMode",
    "ValidationResult",
    "Worker",
    "WorkerRole",
    "WorkerStatus",
    "Zone",
    "ZoneType",
    "validate_record",
]
