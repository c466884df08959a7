"""Överlappskontroll för ledighetsansökningar."""

import datetime
from typing import NamedTuple

from avvikelser.core.constants import BOOKED_LEAVE_STATUSES
from avvikelser.core.models import LeaveRequest


class OverlapResult(NamedTuple):
    has_overlap: bool
    conflicting_requests: list[LeaveRequest]
    message: str | None = None


def date_ranges_overlap(
    start1: datetime.date,
    end1: datetime.date,
    start2: datetime.date,
    end2: datetime.date,
) -> bool:
    """Två inklusiva intervall överlappar om start1 <= end2 och start2 <= end1."""
    return start1 <= end2 and start2 <= end1


def _booked_for(
    existing: list[LeaveRequest],
    employee_id: str,
    exclude_request_id: int | None = None,
) -> list[LeaveRequest]:
    return [
        r
        for r in existing
        if r.employee_id == employee_id
        and r.status in BOOKED_LEAVE_STATUSES
        and (exclude_request_id is None or r.id != exclude_request_id)
    ]


def _format_range(request: LeaveRequest) -> str:
    start = request.start_date.isoformat()
    end = request.end_date.isoformat()
    return start if start == end else f"{start} - {end}"


def check_leave_request_overlap(
    employee_id: str,
    start_date: datetime.date,
    end_date: datetime.date,
    existing: list[LeaveRequest],
    exclude_request_id: int | None = None,
) -> OverlapResult:
    """
    Kontrollerar att en ny (eller redigerad) ansökan inte krockar med
    godkänd eller väntande ledighet för samma anställd.

    exclude_request_id används vid redigering så att ansökan inte krockar
    med sig själv.
    """
    conflicts = [
        r
        for r in _booked_for(existing, employee_id, exclude_request_id)
        if date_ranges_overlap(start_date, end_date, r.start_date, r.end_date)
    ]

    if not conflicts:
        return OverlapResult(has_overlap=False, conflicting_requests=[])

    conflict_dates = ", ".join(_format_range(r) for r in conflicts)
    return OverlapResult(
        has_overlap=True,
        conflicting_requests=conflicts,
        message=(
            f"Överlappning med befintlig ledighet: {conflict_dates}. "
            "Du kan inte ansöka om ledighet för dagar som redan är bokade."
        ),
    )


def dates_in_range(start_date: datetime.date, end_date: datetime.date) -> list[datetime.date]:
    return [
        start_date + datetime.timedelta(days=offset)
        for offset in range((end_date - start_date).days + 1)
    ]


def is_date_booked(date: datetime.date, existing: list[LeaveRequest], employee_id: str) -> bool:
    return any(r.start_date <= date <= r.end_date for r in _booked_for(existing, employee_id))
