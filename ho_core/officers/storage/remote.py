# ho_core/officers/storage/remote.py
from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

import requests
from django.db import transaction

from ho_core.officers.models import HouseOfficer
from ho_core.officers.records import OfficerRecord, fields_to_wire
from ho_core.officers.storage.results import RemoteStoreError, Result, capture_remote


class RemoteStore(Protocol):
    """
    Durable, shared record store keyed by officer id.
    Every call settles into a Result; none of them raise for remote failure.
    """

    def load_all(self) -> Result[list[OfficerRecord]]: ...

    def insert(self, record: OfficerRecord) -> Result[OfficerRecord]: ...

    def update(self, officer_id: str, fields: Mapping[str, Any]) -> Result[None]: ...

    def delete(self, officer_id: str) -> Result[None]: ...

    def replace_all(self, records: Sequence[OfficerRecord]) -> Result[int]: ...


# -------------------------------------------------------------------
# Django ORM backend (table house_officers)
# -------------------------------------------------------------------

def _row_to_record(row: HouseOfficer) -> OfficerRecord:
    return OfficerRecord(
        id=row.id,
        full_name=row.full_name,
        gender=row.gender,
        date_signed_in=row.date_signed_in,
        unit_assigned=row.unit_assigned,
        clinical_presentation_topic=row.clinical_presentation_topic or "",
        clinical_presentation_date=row.clinical_presentation_date,
        expected_sign_out_date=row.expected_sign_out_date,
        created_at=row.created_at,
    )


def _record_to_row(record: OfficerRecord) -> HouseOfficer:
    return HouseOfficer(
        id=record.id,
        full_name=record.full_name,
        gender=record.gender,
        date_signed_in=record.date_signed_in,
        unit_assigned=record.unit_assigned,
        clinical_presentation_topic=record.clinical_presentation_topic or "",
        clinical_presentation_date=record.clinical_presentation_date,
        expected_sign_out_date=record.expected_sign_out_date,
        created_at=record.created_at,
    )


class OrmRemoteStore:
    """
    Remote store on a Django database alias. Database errors (unreachable
    server, missing table) become failed Results.
    """

    def __init__(self, *, using: str = "default"):
        self.using = using

    def _qs(self):
        return HouseOfficer.objects.using(self.using)

    def load_all(self) -> Result[list[OfficerRecord]]:
        return capture_remote(
            "load_all",
            lambda: [_row_to_record(r) for r in self._qs().order_by("-created_at")],
        )

    def insert(self, record: OfficerRecord) -> Result[OfficerRecord]:
        def _insert():
            qs = self._qs()
            row = _record_to_row(record)
            with transaction.atomic(using=qs.db):
                row.save(using=qs.db, force_insert=True)
            return _row_to_record(row)

        return capture_remote("insert", _insert)

    def update(self, officer_id: str, fields: Mapping[str, Any]) -> Result[None]:
        def _update():
            updates = {k: v for k, v in fields.items() if k not in {"id", "created_at"}}
            if updates:
                self._qs().filter(id=officer_id).update(**updates)

        return capture_remote("update", _update)

    def delete(self, officer_id: str) -> Result[None]:
        def _delete():
            self._qs().filter(id=officer_id).delete()

        return capture_remote("delete", _delete)

    def replace_all(self, records: Sequence[OfficerRecord]) -> Result[int]:
        def _replace():
            with transaction.atomic(using=self.using):
                self._qs().all().delete()
                if records:
                    self._qs().bulk_create([_record_to_row(r) for r in records])
            return len(records)

        return capture_remote("replace_all", _replace)


# -------------------------------------------------------------------
# PostgREST / Supabase backend
# -------------------------------------------------------------------

class PostgrestRemoteStore:
    """
    Remote store on a Supabase (PostgREST) table over HTTP.
    """

    def __init__(self, *, base_url: str, api_key: str, table: str = "house_officers", timeout: float = 10.0,
                 session: requests.Session | None = None):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key or ""
        self.table = table
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def _url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self, *, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(self, method: str, *, params=None, json=None, prefer: str | None = None):
        if not self.base_url or not self.api_key:
            raise RemoteStoreError("Remote store is not configured (SUPABASE_URL / SUPABASE_ANON_KEY).")

        r = self.session.request(
            method,
            self._url,
            params=params,
            json=json,
            headers=self._headers(prefer=prefer),
            timeout=self.timeout,
        )
        if r.status_code >= 400:
            raise RemoteStoreError(f"{method} {self.table} returned {r.status_code}: {r.text[:200]}")
        if not r.content:
            return None
        return r.json()

    def load_all(self) -> Result[list[OfficerRecord]]:
        def _load():
            rows = self._request("GET", params={"select": "*", "order": "createdAt.desc"}) or []
            if not isinstance(rows, list):
                raise RemoteStoreError(f"Expected a list of rows from {self.table}, got {type(rows).__name__}.")
            try:
                return [OfficerRecord.from_wire(row) for row in rows]
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise RemoteStoreError(f"Unexpected row shape from {self.table}: {exc}") from exc

        return capture_remote("load_all", _load)

    def insert(self, record: OfficerRecord) -> Result[OfficerRecord]:
        def _insert():
            rows = self._request("POST", json=[record.to_wire()], prefer="return=representation") or []
            if not rows:
                return record
            try:
                return OfficerRecord.from_wire(rows[0])
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise RemoteStoreError(f"Unexpected row shape from {self.table}: {exc}") from exc

        return capture_remote("insert", _insert)

    def update(self, officer_id: str, fields: Mapping[str, Any]) -> Result[None]:
        def _update():
            payload = fields_to_wire({k: v for k, v in fields.items() if k not in {"id", "created_at"}})
            if payload:
                self._request("PATCH", params={"id": f"eq.{officer_id}"}, json=payload)

        return capture_remote("update", _update)

    def delete(self, officer_id: str) -> Result[None]:
        return capture_remote(
            "delete",
            lambda: self._request("DELETE", params={"id": f"eq.{officer_id}"}),
        )

    def replace_all(self, records: Sequence[OfficerRecord]) -> Result[int]:
        def _replace():
            # PostgREST refuses unfiltered deletes; "id != ''" matches every row.
            self._request("DELETE", params={"id": "neq."})
            if records:
                self._request("POST", json=[r.to_wire() for r in records])
            return len(records)

        return capture_remote("replace_all", _replace)
