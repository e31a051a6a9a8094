"""Pydantic schemas for the five site records and the UI preferences.

These schemas are the contract at every ingress point: records typed in
by an operator, records produced by the seed generator, and snapshots
read back from durable storage all pass through the same models.

Attribute names are snake_case; the persisted/exported names are the
camelCase aliases (``badgeId``, ``createdAt`` ...). Either is accepted
on input.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Type, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from sitewatch.ids import new_id


class WorkerRole(str, Enum):
    OPERATOR = "Operator"
    TECHNICIAN = "Technician"
    SUPERVISOR = "Supervisor"


class Shift(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class WorkerStatus(str, Enum):
    ACTIVE = "Active"
    OFF = "Off"
    ON_LEAVE = "OnLeave"


class IncidentType(str, Enum):
    FALL = "Fall"
    GAS_ALERT = "Gas Alert"
    ZONE_INTRUSION = "Zone Intrusion"
    OTHER = "Other"


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ZoneType(str, Enum):
    SURFACE = "Surface"
    UNDERGROUND = "Underground"
    RESTRICTED = "Restricted"


class DeviceType(str, Enum):
    SMART_VEST = "SmartVest"
    UWB_ANCHOR = "UWB Anchor"
    CAMERA = "Camera"
    GATEWAY = "Gateway"


class DeviceStatus(str, Enum):
    ONLINE = "Online"
    OFFLINE = "Offline"
    DEGRADED = "Degraded"


class CheckInMethod(str, Enum):
    NFC = "NFC"
    BLE = "BLE"
    MANUAL = "Manual"


ThemeMode = Literal["light", "dark", "system"]
PrimaryColor = Literal["blue", "green", "orange", "red", "slate"]

THEME_MODES = get_args(ThemeMode)
PRIMARY_COLORS = get_args(PrimaryColor)


def naive_local(value: datetime) -> datetime:
    """Convert an offset-aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class RecordModel(BaseModel):
    """Common base: generator-assigned id, alias-aware, enums stored as values.

    All timestamps are held as naive local datetimes so records parsed from
    offset-bearing ISO strings compare cleanly with seeded ones.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str = Field(default_factory=new_id)

    @field_validator("*", mode="after")
    @classmethod
    def timestamps_to_local(cls, v):
        if isinstance(v, datetime):
            return naive_local(v)
        return v


class Worker(RecordModel):
    name: str = Field(min_length=2)
    role: WorkerRole
    shift: Shift
    status: WorkerStatus
    phone: str = Field(min_length=10)
    badge_id: str = Field(alias="badgeId", min_length=3)
    ppe_compliant: bool = Field(alias="ppeCompliant")
    created_at: datetime = Field(alias="createdAt", default_factory=datetime.now)


class Incident(RecordModel):
    type: IncidentType
    severity: Severity
    worker_id: Optional[str] = Field(default=None, alias="workerId")
    zone_id: Optional[str] = Field(default=None, alias="zoneId")
    timestamp: datetime = Field(default_factory=datetime.now)
    notes: str = ""


class Zone(RecordModel):
    name: str = Field(min_length=2)
    type: ZoneType
    beacons: Optional[List[str]] = None
    active: bool


class Device(RecordModel):
    type: DeviceType
    serial: str = Field(min_length=5)
    status: DeviceStatus
    zone_id: Optional[str] = Field(default=None, alias="zoneId")
    last_seen: datetime = Field(alias="lastSeen", default_factory=datetime.now)


class Attendance(RecordModel):
    worker_id: str = Field(alias="workerId")
    check_in: datetime = Field(alias="checkIn", default_factory=datetime.now)
    check_out: Optional[datetime] = Field(default=None, alias="checkOut")
    method: CheckInMethod

    @field_validator("check_out")
    @classmethod
    def check_out_after_check_in(cls, v: Optional[datetime], info):
        check_in = info.data.get("check_in")
        if v is not None and check_in is not None and naive_local(v) < naive_local(check_in):
            raise PydanticCustomError("order", "checkOut must not be earlier than checkIn")
        return v


class Snapshot(BaseModel):
    """The five collections at one instant."""

    workers: List[Worker] = Field(default_factory=list)
    zones: List[Zone] = Field(default_factory=list)
    devices: List[Device] = Field(default_factory=list)
    incidents: List[Incident] = Field(default_factory=list)
    attendance: List[Attendance] = Field(default_factory=list)


# collection name -> record model
ENTITY_MODELS: Dict[str, Type[RecordModel]] = {
    "workers": Worker,
    "incidents": Incident,
    "zones": Zone,
    "devices": Device,
    "attendance": Attendance,
}

# pydantic error type -> constraint reported to callers
_CONSTRAINTS = {
    "string_too_short": "min_length",
    "enum": "enum",
    "literal_error": "enum",
    "missing": "missing",
    "order": "order",
}


@dataclass
class FieldError:
    field: str
    constraint: str
    message: str


class RecordValidationError(ValueError):
    """Raised when a record does not satisfy its schema."""

    def __init__(self, entity: str, errors: List[FieldError]):
        self.entity = entity
        self.errors = errors
        summary = "; ".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(f"Invalid {entity} record: {summary}")


@dataclass
class ValidationResult:
    record: Optional[RecordModel] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.record is not None and not self.errors


def field_errors(exc: ValidationError) -> List[FieldError]:
    """Flatten a pydantic ValidationError into per-field constraint failures."""
    errors: List[FieldError] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        kind = err.get("type", "")
        constraint = _CONSTRAINTS.get(kind)
        if constraint is None:
            constraint = "null" if err.get("input", ...) is None else "type"
        errors.append(FieldError(field=loc, constraint=constraint, message=err.get("msg", "")))
    return errors


def resolve_model(entity: Union[str, Type[RecordModel]]) -> Type[RecordModel]:
    if isinstance(entity, str):
        try:
            return ENTITY_MODELS[entity]
        except KeyError:
            raise ValueError(f"Unknown entity collection: {entity}") from None
    return entity


def validate_record(
    entity: Union[str, Type[RecordModel]], data: Mapping[str, Any]
) -> ValidationResult:
    """Parse ``data`` into the entity's model.

    Returns a ValidationResult holding either the record or the list of
    violated constraints; never raises for bad field values.
    """
    model = resolve_model(entity)
    try:
        return ValidationResult(record=model.model_validate(dict(data)))
    except ValidationError as exc:
        return ValidationResult(errors=field_errors(exc))
