from datetime import date
from unittest import mock

import pytest
import requests

from ho_core.officers.storage import LocalCache, OfficerRecordStore, PostgrestRemoteStore, RemoteStoreError
from ho_core.officers.tests.fakes import make_record


def _response(status_code=200, payload=None):
    r = mock.Mock()
    r.status_code = status_code
    r.content = b"" if payload is None else b"x"
    r.text = "" if payload is None else str(payload)
    r.json.return_value = payload
    return r


@pytest.fixture
def session():
    return mock.Mock(spec=requests.Session)


@pytest.fixture
def remote(session):
    return PostgrestRemoteStore(
        base_url="https://example.supabase.co/",
        api_key="anon-key",
        timeout=3,
        session=session,
    )


def test_load_all_orders_newest_first_and_parses_rows(remote, session):
    record = make_record(full_name="Ngozi Remote", clinical_presentation_date=date(2025, 2, 1))
    session.request.return_value = _response(200, [record.to_wire()])

    result = remote.load_all()

    assert result.ok
    assert result.value == [record]
    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert method == "GET"
    assert url == "https://example.supabase.co/rest/v1/house_officers"
    assert kwargs["params"] == {"select": "*", "order": "createdAt.desc"}
    assert kwargs["headers"]["apikey"] == "anon-key"
    assert kwargs["timeout"] == 3


def test_insert_returns_stored_row(remote, session):
    record = make_record()
    session.request.return_value = _response(201, [record.to_wire()])

    result = remote.insert(record)

    assert result.ok
    assert result.value == record
    assert session.request.call_args.kwargs["json"] == [record.to_wire()]
    assert session.request.call_args.kwargs["headers"]["Prefer"] == "return=representation"


def test_update_sends_partial_wire_fields(remote, session):
    session.request.return_value = _response(204)

    result = remote.update("abc", {"date_signed_in": date(2025, 2, 1), "clinical_presentation_date": None})

    assert result.ok
    kwargs = session.request.call_args.kwargs
    assert kwargs["params"] == {"id": "eq.abc"}
    assert kwargs["json"] == {"dateSignedIn": "2025-02-01", "clinicalPresentationDate": ""}


def test_delete_by_id(remote, session):
    session.request.return_value = _response(204)

    assert remote.delete("abc").ok
    assert session.request.call_args.args[0] == "DELETE"
    assert session.request.call_args.kwargs["params"] == {"id": "eq.abc"}


def test_replace_all_deletes_everything_then_inserts(remote, session):
    session.request.return_value = _response(201)
    records = [make_record(), make_record()]

    result = remote.replace_all(records)

    assert result.ok
    assert result.value == 2
    first, second = session.request.call_args_list
    assert first.args[0] == "DELETE"
    assert first.kwargs["params"] == {"id": "neq."}
    assert second.args[0] == "POST"
    assert second.kwargs["json"] == [r.to_wire() for r in records]


def test_http_error_status_is_a_failed_result(remote, session):
    session.request.return_value = _response(401, {"message": "Invalid API key"})

    result = remote.load_all()

    assert not result.ok
    assert isinstance(result.error, RemoteStoreError)


def test_network_error_is_a_failed_result(remote, session):
    session.request.side_effect = requests.ConnectionError("unreachable")

    result = remote.insert(make_record())

    assert not result.ok
    assert isinstance(result.error, requests.ConnectionError)


def test_malformed_rows_are_a_failed_result(remote, session):
    session.request.return_value = _response(200, [{"id": "x"}])

    result = remote.load_all()

    assert not result.ok
    assert isinstance(result.error, RemoteStoreError)


def test_missing_configuration_is_a_failed_result(session):
    remote = PostgrestRemoteStore(base_url="", api_key="", session=session)

    result = remote.load_all()

    assert not result.ok
    session.request.assert_not_called()


@pytest.mark.parametrize("blank", ["", None])
@pytest.mark.parametrize("field", ["dateSignedIn", "expectedSignOutDate"])
def test_row_without_required_date_is_a_failed_result(remote, session, field, blank):
    row = make_record().to_wire()
    row[field] = blank
    session.request.return_value = _response(200, [row])

    result = remote.load_all()

    assert not result.ok
    assert isinstance(result.error, RemoteStoreError)


def test_row_without_sign_in_date_does_not_replace_local_cache(remote, session, settings):
    local = LocalCache(alias=settings.OFFICERS_LOCAL_CACHE_ALIAS)
    cached = [make_record(full_name="Cached")]
    local.write(cached)
    row = make_record(full_name="Broken").to_wire()
    row["dateSignedIn"] = ""
    session.request.return_value = _response(200, [row])

    store = OfficerRecordStore(remote=remote, local=local)

    assert store.load() == cached
    assert local.read() == cached


def test_object_instead_of_row_list_is_a_failed_result(remote, session):
    session.request.return_value = _response(200, {"message": "unexpected", "code": "PGRST000"})

    result = remote.load_all()

    assert not result.ok
    assert isinstance(result.error, RemoteStoreError)
