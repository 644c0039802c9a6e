# ho_core/officers/calendar.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
from urllib.parse import urlencode

from django.conf import settings

from ho_core.officers.constants import ROTATION_WEEKS, EventKind
from ho_core.officers.records import OfficerRecord

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"


class CalendarDateMissing(Exception):
    """The requested event has no date to put on a calendar."""


@dataclass(frozen=True)
class CalendarLink:
    officer_id: str
    kind: str
    url: str


def _location() -> str:
    return getattr(settings, "OFFICERS_CALENDAR_LOCATION", "")


def build_calendar_link(record: OfficerRecord, kind: str) -> CalendarLink:
    """
    Pre-filled all-day Google Calendar event for a presentation or a sign-out.
    Raises CalendarDateMissing instead of emitting a link without a date.
    """
    if kind == EventKind.PRESENTATION:
        if not record.clinical_presentation_date:
            raise CalendarDateMissing("No presentation date set for this officer")
        title = f"Clinical Presentation - {record.full_name}"
        when = record.clinical_presentation_date
        details = "\n".join([
            f"House Officer: {record.full_name}",
            f"Unit: {record.unit_assigned}",
            f"Topic: {record.clinical_presentation_topic or 'Not specified'}",
            f"Gender: {record.gender}",
        ])
    elif kind == EventKind.SIGNOUT:
        title = f"Sign Out - {record.full_name}"
        when = record.expected_sign_out_date
        details = "\n".join([
            f"House Officer: {record.full_name}",
            f"Unit: {record.unit_assigned}",
            f"Expected Sign Out Date ({ROTATION_WEEKS} weeks from sign-in)",
            f"Gender: {record.gender}",
        ])
    else:
        raise ValueError(f"Unknown calendar event kind: {kind!r}")

    day = when.strftime("%Y%m%d")
    query = urlencode({
        "action": "TEMPLATE",
        "text": title,
        "dates": f"{day}/{day}",
        "details": details,
        "location": _location(),
    })
    return CalendarLink(officer_id=record.id, kind=str(kind), url=f"{GOOGLE_CALENDAR_URL}?{query}")


def build_bulk_calendar_links(records: Iterable[OfficerRecord]) -> list[CalendarLink]:
    """Presentation link (when dated) followed by the sign-out link, per officer."""
    links: list[CalendarLink] = []
    for r in records:
        if r.clinical_presentation_date:
            links.append(build_calendar_link(r, EventKind.PRESENTATION))
        links.append(build_calendar_link(r, EventKind.SIGNOUT))
    return links

