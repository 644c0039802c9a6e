# ho_core/officers/services.py

from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping, Optional

from django.core.exceptions import ValidationError
from django.utils.timezone import now

from ho_core.officers.constants import Gender, Unit
from ho_core.officers.dates import calculate_sign_out_date, parse_iso_date
from ho_core.officers.records import OfficerRecord
from ho_core.officers.storage import OfficerRecordStore, get_record_store

logger = logging.getLogger("officers_services")


class OfficerService:
    """
    Officer write-model operations.

    Notes:
    - All validation happens here, before the record store is touched.
    - expected_sign_out_date is always derived from date_signed_in; clients never set it.
    - The record store swallows remote failures, so none of these raise for an outage.
    """

    EDITABLE_FIELDS = {
        "full_name",
        "gender",
        "date_signed_in",
        "unit_assigned",
        "clinical_presentation_topic",
        "clinical_presentation_date",
    }

    class NotFound(Exception):
        pass

    # -------------------------
    # Internal helpers
    # -------------------------
    @staticmethod
    def _store(store: Optional[OfficerRecordStore]) -> OfficerRecordStore:
        return store if store is not None else get_record_store()

    @staticmethod
    def _clean(data: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
        """
        Normalizes and validates officer fields. Raises ValidationError({field: message}).
        Only keys present in `data` are returned when partial=True.
        """
        errors: dict[str, str] = {}
        cleaned: dict[str, Any] = {}

        def present(key: str) -> bool:
            return key in data or not partial

        if present("full_name"):
            full_name = (data.get("full_name") or "").strip()
            if not full_name:
                errors["full_name"] = "Full name is required."
            cleaned["full_name"] = full_name

        if present("gender"):
            gender = data.get("gender") or ""
            if gender not in Gender.values:
                errors["gender"] = f"Gender must be one of {Gender.values}."
            cleaned["gender"] = gender

        if present("unit_assigned"):
            unit = data.get("unit_assigned") or ""
            if unit not in Unit.values:
                errors["unit_assigned"] = "Unit assigned must be one of the clinical units."
            cleaned["unit_assigned"] = unit

        for key, required in (("date_signed_in", True), ("clinical_presentation_date", False)):
            if not present(key):
                continue
            try:
                value = parse_iso_date(data.get(key))
            except ValueError as e:
                errors[key] = str(e)
                continue
            if value is None and required:
                errors[key] = "Date signed in is required."
            cleaned[key] = value

        if present("clinical_presentation_topic"):
            cleaned["clinical_presentation_topic"] = (data.get("clinical_presentation_topic") or "").strip()

        if errors:
            raise ValidationError(errors)
        return cleaned

    # -------------------------
    # Create
    # -------------------------
    @staticmethod
    def create_officer(
        *,
        full_name: str,
        gender: str,
        date_signed_in,
        unit_assigned: str,
        clinical_presentation_topic: str = "",
        clinical_presentation_date=None,
        store: Optional[OfficerRecordStore] = None,
    ) -> OfficerRecord:
        cleaned = OfficerService._clean(
            {
                "full_name": full_name,
                "gender": gender,
                "date_signed_in": date_signed_in,
                "unit_assigned": unit_assigned,
                "clinical_presentation_topic": clinical_presentation_topic,
                "clinical_presentation_date": clinical_presentation_date,
            },
            partial=False,
        )

        record = OfficerRecord(
            id=uuid.uuid4().hex,
            created_at=now(),
            expected_sign_out_date=calculate_sign_out_date(cleaned["date_signed_in"]),
            **cleaned,
        )
        OfficerService._store(store).add(record)
        logger.info("Officer %s added to %s", record.id, record.unit_assigned)
        return record

    # -------------------------
    # Edit (partial)
    # -------------------------
    @staticmethod
    def update_officer(
        *,
        officer_id: str,
        data: Mapping[str, Any],
        store: Optional[OfficerRecordStore] = None,
    ) -> OfficerRecord:
        """
        Partial edit. A new date_signed_in always brings a recomputed
        expected_sign_out_date with it, so the stored value is never stale.
        """
        s = OfficerService._store(store)
        current = s.get(officer_id)
        if current is None:
            raise OfficerService.NotFound(officer_id)

        updates = {k: v for k, v in (data or {}).items() if k in OfficerService.EDITABLE_FIELDS}
        cleaned = OfficerService._clean(updates, partial=True)
        if not cleaned:
            return current

        if "date_signed_in" in cleaned:
            cleaned["expected_sign_out_date"] = calculate_sign_out_date(cleaned["date_signed_in"])

        s.update(officer_id, cleaned)
        logger.info("Officer %s updated: %s", officer_id, sorted(cleaned.keys()))
        return current.with_updates(cleaned)

    # -------------------------
    # Delete
    # -------------------------
    @staticmethod
    def delete_officer(*, officer_id: str, store: Optional[OfficerRecordStore] = None) -> None:
        s = OfficerService._store(store)
        if s.get(officer_id) is None:
            raise OfficerService.NotFound(officer_id)
        s.delete(officer_id)
        logger.info("Officer %s deleted", officer_id)
