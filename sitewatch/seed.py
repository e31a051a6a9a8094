"""Demonstration dataset for first run and reset.

Every cross-reference produced here (incident -> worker/zone,
device -> zone, attendance -> worker) points at a record generated in
the same pass, so a fresh seed always resolves cleanly. Output is random
unless a seeded ``random.Random`` is passed in.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import List, Optional

from sitewatch.ids import new_id
from sitewatch.models.schemas import (
    Attendance,
    CheckInMethod,
    Device,
    DeviceStatus,
    DeviceType,
    Incident,
    IncidentType,
    Severity,
    Shift,
    Snapshot,
    Worker,
    WorkerRole,
    WorkerStatus,
    Zone,
    ZoneType,
)

WORKER_NAMES = [
    "John Smith", "Maria Garcia", "David Chen", "Sarah Johnson", "Michael Brown",
    "Lisa Wang", "James Wilson", "Emma Davis", "Robert Lee", "Jennifer Taylor",
    "William Anderson", "Jessica Martinez", "Thomas Rodriguez", "Amanda White",
    "Daniel Kim", "Ashley Thompson", "Christopher Moore", "Michelle Lewis",
    "Matthew Clark", "Stephanie Hall", "Anthony Allen", "Laura Young",
    "Mark King", "Karen Wright",
]

ZONE_DEFINITIONS = [
    ("North Pit", ZoneType.SURFACE),
    ("South Pit", ZoneType.SURFACE),
    ("East Mining Area", ZoneType.SURFACE),
    ("Shaft A Level 1", ZoneType.UNDERGROUND),
    ("Shaft A Level 2", ZoneType.UNDERGROUND),
    ("Shaft B Level 1", ZoneType.UNDERGROUND),
    ("Processing Plant", ZoneType.SURFACE),
    ("Storage Area", ZoneType.RESTRICTED),
    ("Hazmat Zone", ZoneType.RESTRICTED),
    ("Equipment Yard", ZoneType.SURFACE),
]

ACTIVE_WORKERS = 18
PPE_COMPLIANT_RATE = 0.8
WORKER_HISTORY_DAYS = 90

ZONE_ACTIVE_RATE = 0.9
MIN_BEACONS, MAX_BEACONS = 2, 5

NUM_DEVICES = 18
ONLINE_DEVICES = 14
ZONED_DEVICES = 15

NUM_INCIDENTS = 40
INCIDENT_WORKER_RATE = 0.7
INCIDENT_ZONE_RATE = 0.8
INCIDENT_HISTORY_DAYS = 14

ATTENDANCE_DAYS = 14
ABSENCE_RATE = 0.1
CHECKED_OUT_RATE = 0.95


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()


def generate_workers(
    rng: Optional[random.Random] = None, now: Optional[datetime] = None
) -> List[Worker]:
    rng = _rng(rng)
    now = now or datetime.now()
    roles = list(WorkerRole)
    shifts = list(Shift)
    statuses = list(WorkerStatus)

    workers = []
    for i, name in enumerate(WORKER_NAMES):
        workers.append(
            Worker(
                id=new_id(rng),
                name=name,
                role=roles[i % len(roles)],
                shift=shifts[i % len(shifts)],
                status=WorkerStatus.ACTIVE if i < ACTIVE_WORKERS else statuses[i % len(statuses)],
                phone=f"555-555-{1000 + i:04d}",
                badge_id=f"WSI-{1000 + i}",
                ppe_compliant=rng.random() < PPE_COMPLIANT_RATE,
                created_at=now - timedelta(days=rng.random() * WORKER_HISTORY_DAYS),
            )
        )
    return workers


def generate_zones(rng: Optional[random.Random] = None) -> List[Zone]:
    rng = _rng(rng)
    zones = []
    for i, (name, zone_type) in enumerate(ZONE_DEFINITIONS):
        beacon_count = rng.randint(MIN_BEACONS, MAX_BEACONS)
        zones.append(
            Zone(
                id=new_id(rng),
                name=name,
                type=zone_type,
                beacons=[f"BCN-{i}-{j}" for j in range(beacon_count)],
                active=rng.random() < ZONE_ACTIVE_RATE,
            )
        )
    return zones


def generate_devices(
    zones: List[Zone], rng: Optional[random.Random] = None, now: Optional[datetime] = None
) -> List[Device]:
    """Devices cycle through the four types; the last few are left unzoned."""
    rng = _rng(rng)
    now = now or datetime.now()
    types = list(DeviceType)
    statuses = list(DeviceStatus)

    devices = []
    for i in range(NUM_DEVICES):
        device_type = types[i % len(types)]
        zone_id = zones[i % len(zones)].id if zones and i < ZONED_DEVICES else None
        devices.append(
            Device(
                id=new_id(rng),
                type=device_type,
                serial=f"{device_type.value[:3].upper()}-{10000 + i}",
                status=DeviceStatus.ONLINE if i < ONLINE_DEVICES else statuses[i % len(statuses)],
                zone_id=zone_id,
                last_seen=now - timedelta(days=rng.random()),
            )
        )
    return devices


def generate_incidents(
    workers: List[Worker],
    zones: List[Zone],
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[Incident]:
    rng = _rng(rng)
    now = now or datetime.now()
    types = list(IncidentType)
    severities = list(Severity)

    incidents = []
    for _ in range(NUM_INCIDENTS):
        incident_type = rng.choice(types)
        severity = rng.choice(severities)
        worker_id = rng.choice(workers).id if workers and rng.random() < INCIDENT_WORKER_RATE else None
        zone_id = rng.choice(zones).id if zones and rng.random() < INCIDENT_ZONE_RATE else None
        incidents.append(
            Incident(
                id=new_id(rng),
                type=incident_type,
                severity=severity,
                worker_id=worker_id,
                zone_id=zone_id,
                timestamp=now - timedelta(days=rng.random() * INCIDENT_HISTORY_DAYS),
                notes=f"{incident_type.value} incident reported. {severity.value} severity level.",
            )
        )

    incidents.sort(key=lambda inc: inc.timestamp, reverse=True)
    return incidents


def generate_attendance(
    workers: List[Worker], rng: Optional[random.Random] = None, now: Optional[datetime] = None
) -> List[Attendance]:
    """One check-in per active worker per day, with some absences and open shifts."""
    rng = _rng(rng)
    now = now or datetime.now()
    methods = list(CheckInMethod)
    active = [w for w in workers if w.status == WorkerStatus.ACTIVE.value]

    records = []
    for day in range(ATTENDANCE_DAYS):
        for worker in active:
            if rng.random() < ABSENCE_RATE:
                continue
            check_in = (now - timedelta(days=day)).replace(
                hour=7 + rng.randint(0, 1),
                minute=rng.randint(0, 59),
                second=0,
                microsecond=0,
            )
            check_out = None
            if rng.random() < CHECKED_OUT_RATE:
                check_out = check_in + timedelta(hours=8 + rng.random() * 2)
            records.append(
                Attendance(
                    id=new_id(rng),
                    worker_id=worker.id,
                    check_in=check_in,
                    check_out=check_out,
                    method=rng.choice(methods),
                )
            )

    records.sort(key=lambda att: att.check_in, reverse=True)
    return records


def generate_all_data(
    rng: Optional[random.Random] = None, now: Optional[datetime] = None
) -> Snapshot:
    """Build a complete, internally consistent snapshot."""
    rng = _rng(rng)
    now = now or datetime.now()
    workers = generate_workers(rng, now)
    zones = generate_zones(rng)
    devices = generate_devices(zones, rng, now)
    incidents = generate_incidents(workers, zones, rng, now)
    attendance = generate_attendance(workers, rng, now)
    return Snapshot(
        workers=workers,
        zones=zones,
        devices=devices,
        incidents=incidents,
        attendance=attendance,
    )
