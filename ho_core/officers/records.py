# ho_core/officers/records.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from django.utils.dateparse import parse_datetime

from ho_core.officers.dates import parse_iso_date


# attribute name -> wire/column name
WIRE_NAMES = {
    "id": "id",
    "full_name": "fullName",
    "gender": "gender",
    "date_signed_in": "dateSignedIn",
    "unit_assigned": "unitAssigned",
    "clinical_presentation_topic": "clinicalPresentationTopic",
    "clinical_presentation_date": "clinicalPresentationDate",
    "expected_sign_out_date": "expectedSignOutDate",
    "created_at": "createdAt",
}
ATTR_NAMES = {wire: attr for attr, wire in WIRE_NAMES.items()}

DATE_FIELDS = {"date_signed_in", "clinical_presentation_date", "expected_sign_out_date"}
IMMUTABLE_FIELDS = {"id", "created_at"}


@dataclass(frozen=True)
class OfficerRecord:
    """
    One tracked house officer's rotation data.
    Immutable snapshot; edits produce a new record via with_updates().
    """
    id: str
    full_name: str
    gender: str
    date_signed_in: date
    unit_assigned: str
    expected_sign_out_date: date
    created_at: datetime
    clinical_presentation_topic: str = ""
    clinical_presentation_date: Optional[date] = None

    def with_updates(self, fields: Mapping[str, Any]) -> "OfficerRecord":
        changes = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
        return dataclasses.replace(self, **changes)

    def sort_key(self, wire_field: str) -> str:
        """
        String key for presentation ordering. ISO dates compare lexically in
        chronological order; an unset date sorts as the empty string.
        """
        value = getattr(self, ATTR_NAMES[wire_field])
        if value is None:
            return ""
        if isinstance(value, date):
            return value.isoformat()
        return str(value)

    # ----------------------------
    # Wire format (camelCase, ISO strings)
    # ----------------------------
    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fullName": self.full_name,
            "gender": self.gender,
            "dateSignedIn": self.date_signed_in.isoformat(),
            "unitAssigned": self.unit_assigned,
            "clinicalPresentationTopic": self.clinical_presentation_topic or "",
            "clinicalPresentationDate": (
                self.clinical_presentation_date.isoformat() if self.clinical_presentation_date else ""
            ),
            "expectedSignOutDate": self.expected_sign_out_date.isoformat(),
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_wire(cls, row: Mapping[str, Any]) -> "OfficerRecord":
        created_at = row.get("createdAt")
        if isinstance(created_at, str):
            created_at = parse_datetime(created_at)
        if created_at is None:
            raise ValueError(f"Officer row {row.get('id')!r} has no valid createdAt.")

        date_signed_in = parse_iso_date(row["dateSignedIn"])
        expected_sign_out_date = parse_iso_date(row["expectedSignOutDate"])
        if date_signed_in is None or expected_sign_out_date is None:
            raise ValueError(f"Officer row {row.get('id')!r} is missing a sign-in or sign-out date.")

        return cls(
            id=str(row["id"]),
            full_name=row["fullName"],
            gender=row["gender"],
            date_signed_in=date_signed_in,
            unit_assigned=row["unitAssigned"],
            clinical_presentation_topic=row.get("clinicalPresentationTopic") or "",
            clinical_presentation_date=parse_iso_date(row.get("clinicalPresentationDate")),
            expected_sign_out_date=expected_sign_out_date,
            created_at=created_at,
        )


def fields_to_wire(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Partial attribute dict -> partial wire dict (dates as ISO strings, unset date as '')."""
    out: dict[str, Any] = {}
    for attr, value in fields.items():
        if attr in DATE_FIELDS:
            value = value.isoformat() if value else ""
        elif isinstance(value, datetime):
            value = value.isoformat()
        out[WIRE_NAMES[attr]] = value
    return out
