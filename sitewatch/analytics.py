"""Dashboard and report aggregates.

Every function here is a pure read of the records it is given and is
recomputed on each call; there is no cache to invalidate.

Percentages and hours round half up (``round_half_up``) so that 12.5%
shows as 13, not Python's banker's-rounded 12.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from sitewatch.models.schemas import (
    Attendance,
    Device,
    DeviceStatus,
    Incident,
    Shift,
    Worker,
    WorkerStatus,
    Zone,
)

if TYPE_CHECKING:
    from sitewatch.store import AppStore

RECENT_WINDOW = timedelta(hours=24)
RECENT_INCIDENT_LIMIT = 5


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def percentage(part: int, total: int) -> int:
    """round(100 * part / total); 0 when there is nothing to divide by."""
    if total == 0:
        return 0
    return int(round_half_up(part / total * 100))


# -------- dashboard KPIs --------


def active_worker_count(workers: Iterable[Worker]) -> int:
    return sum(1 for w in workers if w.status == WorkerStatus.ACTIVE.value)


def active_zone_count(zones: Iterable[Zone]) -> int:
    return sum(1 for z in zones if z.active)


def recent_incident_count(
    incidents: Iterable[Incident],
    now: Optional[datetime] = None,
    window: timedelta = RECENT_WINDOW,
) -> int:
    """Incidents strictly newer than ``now - window``."""
    cutoff = (now or datetime.now()) - window
    return sum(1 for i in incidents if i.timestamp > cutoff)


def ppe_compliance(workers: Iterable[Worker]) -> int:
    workers = list(workers)
    compliant = sum(1 for w in workers if w.ppe_compliant)
    return percentage(compliant, len(workers))


def recent_incidents(incidents: Iterable[Incident], limit: int = RECENT_INCIDENT_LIMIT) -> List[Incident]:
    """Newest ``limit`` incidents; relies on the collection's newest-first order."""
    return list(incidents)[:limit]


# -------- report aggregates --------


def incidents_by_type(incidents: Iterable[Incident]) -> Dict[str, int]:
    return dict(Counter(i.type for i in incidents))


def incidents_by_severity(incidents: Iterable[Incident]) -> Dict[str, int]:
    return dict(Counter(i.severity for i in incidents))


def ppe_compliance_by_shift(workers: Iterable[Worker]) -> Dict[str, int]:
    workers = list(workers)
    result = {}
    for shift in Shift:
        members = [w for w in workers if w.shift == shift.value]
        result[shift.value] = percentage(sum(1 for w in members if w.ppe_compliant), len(members))
    return result


def device_status_counts(devices: Iterable[Device]) -> Dict[str, int]:
    counts = {status.value: 0 for status in DeviceStatus}
    for device in devices:
        counts[device.status] += 1
    return counts


# -------- attendance --------


def worked_hours(check_in: datetime, check_out: Optional[datetime]) -> float:
    """Hours between check-in and check-out to one decimal; 0 while checked in."""
    if check_out is None:
        return 0
    return round_half_up((check_out - check_in).total_seconds() / 3600, 1)


@dataclass
class AttendanceSummary:
    total_records: int = 0
    total_hours: float = 0.0
    average_hours: float = 0.0
    checked_in: int = 0


def attendance_summary(attendance: Iterable[Attendance]) -> AttendanceSummary:
    records = list(attendance)
    total = sum(worked_hours(a.check_in, a.check_out) for a in records)
    average = total / len(records) if records else 0.0
    return AttendanceSummary(
        total_records=len(records),
        total_hours=round_half_up(total, 1),
        average_hours=round_half_up(average, 1),
        checked_in=sum(1 for a in records if a.check_out is None),
    )


# -------- page-level bundles --------


@dataclass
class DashboardStats:
    active_workers: int = 0
    active_zones: int = 0
    incidents_last_24h: int = 0
    ppe_compliance: int = 0
    recent_incidents: List[Incident] = field(default_factory=list)
    incidents_by_type: Dict[str, int] = field(default_factory=dict)


@dataclass
class ReportStats:
    incidents_by_type: Dict[str, int] = field(default_factory=dict)
    incidents_by_severity: Dict[str, int] = field(default_factory=dict)
    ppe_compliance_by_shift: Dict[str, int] = field(default_factory=dict)
    device_status: Dict[str, int] = field(default_factory=dict)
    attendance: AttendanceSummary = field(default_factory=AttendanceSummary)


def dashboard_stats(store: "AppStore", now: Optional[datetime] = None) -> DashboardStats:
    incidents = store.incidents
    return DashboardStats(
        active_workers=active_worker_count(store.workers),
        active_zones=active_zone_count(store.zones),
        incidents_last_24h=recent_incident_count(incidents, now=now),
        ppe_compliance=ppe_compliance(store.workers),
        recent_incidents=recent_incidents(incidents),
        incidents_by_type=incidents_by_type(incidents),
    )


def report_stats(store: "AppStore") -> ReportStats:
    incidents = store.incidents
    return ReportStats(
        incidents_by_type=incidents_by_type(incidents),
        incidents_by_severity=incidents_by_severity(incidents),
        ppe_compliance_by_shift=ppe_compliance_by_shift(store.workers),
        device_status=device_status_counts(store.devices),
        attendance=attendance_summary(store.attendance),
    )
