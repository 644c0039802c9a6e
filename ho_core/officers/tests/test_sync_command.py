from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from ho_core.officers.models import HouseOfficer
from ho_core.officers.storage import get_record_store

from .fakes import make_record

pytestmark = pytest.mark.django_db


def test_sync_pushes_local_cache_to_remote():
    store = get_record_store()
    HouseOfficer.objects.create(
        id="stale",
        full_name="Stale Row",
        gender="Male",
        date_signed_in="2024-01-01",
        unit_assigned="Neurology",
        expected_sign_out_date="2024-03-25",
        created_at="2024-01-01T08:00:00Z",
    )
    local = [make_record(full_name="Kept One"), make_record(full_name="Kept Two")]
    store.local.write(local)

    out = StringIO()
    call_command("sync_officers", stdout=out)

    assert "pushed to remote store: 2" in out.getvalue()
    assert set(HouseOfficer.objects.values_list("id", flat=True)) == {r.id for r in local}


def test_sync_dry_run_writes_nothing():
    get_record_store().local.write([make_record()])

    out = StringIO()
    call_command("sync_officers", "--dry-run", stdout=out)

    assert "Local officer records: 1" in out.getvalue()
    assert HouseOfficer.objects.count() == 0


def test_sync_refuses_empty_cache():
    with pytest.raises(CommandError):
        call_command("sync_officers")


def test_sync_reports_remote_failure(monkeypatch):
    from ho_core.officers.storage import RemoteStoreError, Result

    store = get_record_store()
    store.local.write([make_record()])
    monkeypatch.setattr(store.remote, "replace_all", lambda records: Result.failure(RemoteStoreError("down")))

    with pytest.raises(CommandError, match="rejected the sync"):
        call_command("sync_officers")
