# ho_core/officers/selectors.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from django.conf import settings
from django.core.exceptions import ValidationError

from ho_core.officers.constants import (
    ANY,
    PRIORITY_UNITS,
    SORT_FIELDS,
    SORT_ORDERS,
    EventKind,
    Gender,
    PriorityUnit,
    Unit,
)
from ho_core.officers.dates import get_days_until_date, get_timeline_color, get_timeline_progress, is_upcoming
from ho_core.officers.records import OfficerRecord


@dataclass(frozen=True)
class OfficerFilter:
    unit: str = ""
    gender: str = ""
    search_term: str = ""
    sort_by: str = "fullName"
    sort_order: str = "asc"

    @classmethod
    def from_params(cls, params: Any) -> "OfficerFilter":
        """
        Query params supported:
          - unit (exact, "any" or empty = all)
          - gender (exact, "any" or empty = all)
          - search (or searchTerm): substring of name or presentation topic
          - sortBy in {fullName, dateSignedIn, clinicalPresentationDate, expectedSignOutDate}
          - sortOrder in {asc, desc}
        """
        unit = (params.get("unit") or "").strip()
        gender = (params.get("gender") or "").strip()
        search_term = (params.get("search") or params.get("searchTerm") or "").strip()
        sort_by = (params.get("sortBy") or "fullName").strip()
        sort_order = (params.get("sortOrder") or "asc").strip().lower()

        if unit.lower() == ANY:
            unit = ""
        if gender.lower() == ANY:
            gender = ""

        if unit and unit not in Unit.values:
            raise ValidationError({"unit": f"unit is invalid. Allowed: {Unit.values}"})
        if gender and gender not in Gender.values:
            raise ValidationError({"gender": f"gender is invalid. Allowed: {Gender.values}"})
        if sort_by not in SORT_FIELDS:
            raise ValidationError({"sortBy": f"sortBy is invalid. Allowed: {list(SORT_FIELDS)}"})
        if sort_order not in SORT_ORDERS:
            raise ValidationError({"sortOrder": f"sortOrder is invalid. Allowed: {list(SORT_ORDERS)}"})

        return cls(unit=unit, gender=gender, search_term=search_term, sort_by=sort_by, sort_order=sort_order)

    def matches(self, record: OfficerRecord) -> bool:
        if self.unit and record.unit_assigned != self.unit:
            return False
        if self.gender and record.gender != self.gender:
            return False
        if self.search_term:
            needle = self.search_term.lower()
            topic = (record.clinical_presentation_topic or "").lower()
            if needle not in record.full_name.lower() and needle not in topic:
                return False
        return True


def filter_officers(records: Iterable[OfficerRecord], flt: OfficerFilter) -> list[OfficerRecord]:
    """
    Conjunctive filter + stable sort. Returns a new list; the input is left alone.
    """
    matched = [r for r in records if flt.matches(r)]
    return sorted(
        matched,
        key=lambda r: r.sort_key(flt.sort_by),
        reverse=flt.sort_order == "desc",
    )


def select_by_ids(records: Iterable[OfficerRecord], ids: Optional[Sequence[str]]) -> list[OfficerRecord]:
    """Keep the given subset (in view order); no ids means the whole view."""
    if not ids:
        return list(records)
    wanted = set(ids)
    return [r for r in records if r.id in wanted]


def unit_distribution(records: Iterable[OfficerRecord]) -> dict[str, int]:
    counts = Counter(r.unit_assigned for r in records)
    # fixed unit order, empty units omitted
    return {u: counts[u] for u in Unit.values if counts.get(u)}


# -------------------------------------------------------------------
# Dashboard statistics (over the filtered view)
# -------------------------------------------------------------------

@dataclass(frozen=True)
class OfficerStats:
    total: int
    male: int
    female: int
    upcoming_presentations: int
    upcoming_sign_outs: int
    unit_distribution: dict[str, int] = field(default_factory=dict)


def compute_stats(filtered: Sequence[OfficerRecord], *, today: Optional[date] = None) -> OfficerStats:
    return OfficerStats(
        total=len(filtered),
        male=sum(1 for r in filtered if r.gender == Gender.MALE),
        female=sum(1 for r in filtered if r.gender == Gender.FEMALE),
        upcoming_presentations=sum(
            1 for r in filtered
            if r.clinical_presentation_date and is_upcoming(r.clinical_presentation_date, today=today)
        ),
        upcoming_sign_outs=sum(1 for r in filtered if is_upcoming(r.expected_sign_out_date, today=today)),
        unit_distribution=unit_distribution(filtered),
    )


# -------------------------------------------------------------------
# Priority allocation (over the full record set, never the filtered view)
# -------------------------------------------------------------------

@dataclass(frozen=True)
class PriorityUnitStatus:
    name: str
    priority: int
    required: int
    assigned: int
    shortage: int
    is_complete: bool
    progress: float
    officers: list[str]


@dataclass(frozen=True)
class PriorityAllocation:
    units: list[PriorityUnitStatus]
    total_required: int
    total_assigned: int
    completion_percentage: int


def get_priority_units() -> tuple[PriorityUnit, ...]:
    configured = getattr(settings, "OFFICERS_PRIORITY_UNITS", None)
    if not configured:
        return PRIORITY_UNITS
    return tuple(
        u if isinstance(u, PriorityUnit) else PriorityUnit(name=u["name"], required=int(u["required"]), priority=int(u["priority"]))
        for u in configured
    )


def priority_allocation(
    all_records: Sequence[OfficerRecord],
    *,
    units: Optional[Sequence[PriorityUnit]] = None,
) -> PriorityAllocation:
    targets = sorted(units if units is not None else get_priority_units(), key=lambda u: u.priority)

    statuses: list[PriorityUnitStatus] = []
    for unit in targets:
        names = [r.full_name for r in all_records if r.unit_assigned == unit.name]
        assigned = len(names)
        progress = min(assigned / unit.required * 100, 100.0) if unit.required else 100.0
        statuses.append(
            PriorityUnitStatus(
                name=str(unit.name),
                priority=unit.priority,
                required=unit.required,
                assigned=assigned,
                shortage=max(0, unit.required - assigned),
                is_complete=assigned >= unit.required,
                progress=float(progress),
                officers=names,
            )
        )

    total_required = sum(u.required for u in targets)
    total_assigned = sum(s.assigned for s in statuses)
    completion = round(total_assigned / total_required * 100) if total_required else 100

    return PriorityAllocation(
        units=statuses,
        total_required=total_required,
        total_assigned=total_assigned,
        completion_percentage=int(completion),
    )


# -------------------------------------------------------------------
# Timelines
# -------------------------------------------------------------------

@dataclass(frozen=True)
class TimelineEntry:
    officer: OfficerRecord
    target_date: date
    days_until: int
    color: str
    progress: float


def build_timeline(
    records: Iterable[OfficerRecord],
    kind: str,
    *,
    today: Optional[date] = None,
) -> list[TimelineEntry]:
    """
    Sign-out or presentation timeline, nearest date first.
    Officers without a presentation date are left out of the presentation timeline.
    """
    if kind not in EventKind.values:
        raise ValidationError({"kind": f"kind is invalid. Allowed: {EventKind.values}"})

    entries: list[TimelineEntry] = []
    for r in records:
        target = r.expected_sign_out_date if kind == EventKind.SIGNOUT else r.clinical_presentation_date
        if target is None:
            continue
        entries.append(
            TimelineEntry(
                officer=r,
                target_date=target,
                days_until=get_days_until_date(target, today),
                color=str(get_timeline_color(target, today).value),
                progress=get_timeline_progress(r.date_signed_in, target, today),
            )
        )

    entries.sort(key=lambda e: e.days_until)
    return entries
