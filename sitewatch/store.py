"""Application store: the single owner of all mutable session state.

Holds the five record collections and the UI preferences. Every
mutation goes through an AppStore method, which validates the record,
updates memory and then writes the full snapshot through the
persistence adapter before returning.

Lifecycle: construct once, call initialize() to populate from storage
(or from seed data when storage is empty), then mutate through the
add_* / update_* / delete_* methods.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Mapping, Optional, Union

from sitewatch.ids import new_id
from sitewatch.models.schemas import (
    PRIMARY_COLORS,
    THEME_MODES,
    Attendance,
    Device,
    Incident,
    PrimaryColor,
    RecordModel,
    RecordValidationError,
    Snapshot,
    ThemeMode,
    Worker,
    Zone,
    resolve_model,
    validate_record,
)
from sitewatch.seed import generate_all_data
from sitewatch.storage import SnapshotStorage
from sitewatch.utils.logger import get_logger

logger = get_logger(__name__)

COLLECTIONS = ("workers", "incidents", "zones", "devices", "attendance")

# Collections kept newest-first, with the attribute they are ordered by.
TIME_ORDERED = {"incidents": "timestamp", "attendance": "check_in"}

NO_REFERENCE = "-"
UNKNOWN_REFERENCE = "Unknown"

RecordInput = Union[RecordModel, Mapping[str, Any]]


def _insert_position(records: List[RecordModel], record: RecordModel, time_field: str) -> int:
    """Index ahead of the first record that is not newer than ``record``."""
    when = getattr(record, time_field)
    for index, existing in enumerate(records):
        if getattr(existing, time_field) <= when:
            return index
    return len(records)


def _normalize_changes(model: type, changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Map alias keys to attribute names; drop ``id`` and unknown keys."""
    fields = model.model_fields
    by_alias = {info.alias: name for name, info in fields.items() if info.alias}
    normalized = {}
    for key, value in changes.items():
        name = by_alias.get(key, key)
        if name == "id" or name not in fields:
            continue
        normalized[name] = value
    return normalized


class AppStore:
    """Session-wide state container.

    Collections are exposed as copies; mutate only through the store's
    methods so every change reaches durable storage.
    """

    def __init__(
        self,
        storage: Optional[SnapshotStorage] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.storage = storage or SnapshotStorage()
        self._rng = rng
        self._collections: Dict[str, List[RecordModel]] = {name: [] for name in COLLECTIONS}
        self.theme_mode: ThemeMode = "light"
        self.primary_color: PrimaryColor = "blue"
        self.sidebar_open = True

    # -------- read access --------

    @property
    def workers(self) -> List[Worker]:
        return list(self._collections["workers"])

    @property
    def incidents(self) -> List[Incident]:
        return list(self._collections["incidents"])

    @property
    def zones(self) -> List[Zone]:
        return list(self._collections["zones"])

    @property
    def devices(self) -> List[Device]:
        return list(self._collections["devices"])

    @property
    def attendance(self) -> List[Attendance]:
        return list(self._collections["attendance"])

    def snapshot(self) -> Snapshot:
        return Snapshot(**{name: list(records) for name, records in self._collections.items()})

    def _records(self, kind: str) -> List[RecordModel]:
        try:
            return self._collections[kind]
        except KeyError:
            raise ValueError(f"Unknown collection: {kind}") from None

    def get(self, kind: str, record_id: Optional[str]) -> Optional[RecordModel]:
        if record_id is None:
            return None
        for record in self._records(kind):
            if record.id == record_id:
                return record
        return None

    def get_worker(self, worker_id: Optional[str]) -> Optional[Worker]:
        return self.get("workers", worker_id)

    def get_zone(self, zone_id: Optional[str]) -> Optional[Zone]:
        return self.get("zones", zone_id)

    def worker_name(self, worker_id: Optional[str]) -> str:
        """Display name for a soft worker reference."""
        if not worker_id:
            return NO_REFERENCE
        worker = self.get_worker(worker_id)
        return worker.name if worker else UNKNOWN_REFERENCE

    def zone_name(self, zone_id: Optional[str]) -> str:
        """Display name for a soft zone reference."""
        if not zone_id:
            return NO_REFERENCE
        zone = self.get_zone(zone_id)
        return zone.name if zone else UNKNOWN_REFERENCE

    # -------- generic CRUD --------

    def _persist(self) -> None:
        self.storage.save(self.snapshot())

    def add(self, kind: str, data: RecordInput) -> RecordModel:
        """Validate and insert a record, assigning an id when none is given.

        A caller-supplied id already used in the collection is replaced by
        a fresh one. Raises RecordValidationError and leaves the store
        untouched when the record is invalid.
        """
        records = self._records(kind)
        model = resolve_model(kind)
        if isinstance(data, model):
            record = data.model_copy()
        else:
            result = validate_record(model, data)
            if not result.ok:
                raise RecordValidationError(kind, result.errors)
            record = result.record

        taken = {r.id for r in records}
        if record.id in taken:
            fresh = new_id(self._rng)
            while fresh in taken:
                fresh = new_id(self._rng)
            logger.warning(f"Duplicate {kind} id {record.id}; assigned {fresh}")
            record = record.model_copy(update={"id": fresh})

        time_field = TIME_ORDERED.get(kind)
        if time_field is None:
            records.append(record)
        else:
            records.insert(_insert_position(records, record, time_field), record)

        self._persist()
        logger.debug(f"Added {kind} record {record.id}")
        return record

    def update(self, kind: str, record_id: str, changes: Mapping[str, Any]) -> Optional[RecordModel]:
        """Overlay ``changes`` on the record with ``record_id``.

        Unknown ids are ignored (returns None). The id itself never changes.
        """
        records = self._records(kind)
        for index, current in enumerate(records):
            if current.id == record_id:
                break
        else:
            return None

        model = type(current)
        fields = _normalize_changes(model, changes)
        merged = current.model_dump()
        merged.update(fields)
        result = validate_record(model, merged)
        if not result.ok:
            raise RecordValidationError(kind, result.errors)

        records[index] = result.record
        time_field = TIME_ORDERED.get(kind)
        if time_field is not None and time_field in fields:
            records.sort(key=lambda r: getattr(r, time_field), reverse=True)

        self._persist()
        logger.debug(f"Updated {kind} record {record_id}: {sorted(fields)}")
        return result.record

    def delete(self, kind: str, record_id: str) -> None:
        """Remove the record with ``record_id``; unknown ids are ignored."""
        records = self._records(kind)
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return
        records[:] = remaining
        self._persist()
        logger.debug(f"Deleted {kind} record {record_id}")

    # -------- per-entity CRUD --------

    def add_worker(self, data: RecordInput) -> Worker:
        return self.add("workers", data)

    def update_worker(self, worker_id: str, changes: Mapping[str, Any]) -> Optional[Worker]:
        return self.update("workers", worker_id, changes)

    def delete_worker(self, worker_id: str) -> None:
        self.delete("workers", worker_id)

    def add_incident(self, data: RecordInput) -> Incident:
        return self.add("incidents", data)

    def update_incident(self, incident_id: str, changes: Mapping[str, Any]) -> Optional[Incident]:
        return self.update("incidents", incident_id, changes)

    def delete_incident(self, incident_id: str) -> None:
        self.delete("incidents", incident_id)

    def add_zone(self, data: RecordInput) -> Zone:
        return self.add("zones", data)

    def update_zone(self, zone_id: str, changes: Mapping[str, Any]) -> Optional[Zone]:
        return self.update("zones", zone_id, changes)

    def delete_zone(self, zone_id: str) -> None:
        self.delete("zones", zone_id)

    def add_device(self, data: RecordInput) -> Device:
        return self.add("devices", data)

    def update_device(self, device_id: str, changes: Mapping[str, Any]) -> Optional[Device]:
        return self.update("devices", device_id, changes)

    def delete_device(self, device_id: str) -> None:
        self.delete("devices", device_id)

    def add_attendance(self, data: RecordInput) -> Attendance:
        return self.add("attendance", data)

    def update_attendance(self, attendance_id: str, changes: Mapping[str, Any]) -> Optional[Attendance]:
        return self.update("attendance", attendance_id, changes)

    def delete_attendance(self, attendance_id: str) -> None:
        self.delete("attendance", attendance_id)

    # -------- preferences --------

    def set_theme_mode(self, mode: ThemeMode) -> None:
        if mode not in THEME_MODES:
            raise ValueError(f"Theme mode must be one of {THEME_MODES}, got {mode!r}")
        self.theme_mode = mode
        self.storage.save_theme_mode(mode)

    def set_primary_color(self, color: PrimaryColor) -> None:
        if color not in PRIMARY_COLORS:
            raise ValueError(f"Primary color must be one of {PRIMARY_COLORS}, got {color!r}")
        self.primary_color = color
        self.storage.save_primary_color(color)

    def toggle_sidebar(self) -> None:
        self.sidebar_open = not self.sidebar_open

    # -------- lifecycle --------

    def _adopt(self, snapshot: Snapshot) -> None:
        for name in COLLECTIONS:
            self._collections[name] = list(getattr(snapshot, name))

    def reset_data(self) -> None:
        """Discard all records and regenerate the demonstration dataset."""
        self.storage.clear()
        self._adopt(generate_all_data(self._rng))
        self._persist()
        logger.info(
            f"Seeded {len(self._collections['workers'])} workers, "
            f"{len(self._collections['incidents'])} incidents, "
            f"{len(self._collections['attendance'])} attendance records"
        )

    def initialize(self) -> "AppStore":
        """Load the stored snapshot (or seed one), then apply stored preferences."""
        stored = self.storage.load()
        if stored is not None:
            self._adopt(stored)
            logger.info("Loaded snapshot from storage")
        else:
            self.reset_data()

        theme = self.storage.load_theme_mode()
        if theme:
            self.theme_mode = theme
        color = self.storage.load_primary_color()
        if color:
            self.primary_color = color
        return self
