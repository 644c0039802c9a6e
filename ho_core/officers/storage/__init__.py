# ho_core/officers/storage/__init__.py
from __future__ import annotations

import threading

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from ho_core.officers.storage.local import LocalCache
from ho_core.officers.storage.remote import OrmRemoteStore, PostgrestRemoteStore, RemoteStore
from ho_core.officers.storage.results import RemoteStoreError, Result, capture_remote
from ho_core.officers.storage.store import LoadDecision, LoadSource, OfficerRecordStore, choose_load_source

_store: OfficerRecordStore | None = None
_store_lock = threading.Lock()


def build_remote_store() -> RemoteStore:
    backend = getattr(settings, "OFFICERS_REMOTE_BACKEND", "orm")
    if backend == "orm":
        return OrmRemoteStore(using=getattr(settings, "OFFICERS_REMOTE_DB_ALIAS", "default"))
    if backend == "postgrest":
        return PostgrestRemoteStore(
            base_url=settings.OFFICERS_REMOTE_URL,
            api_key=settings.OFFICERS_REMOTE_KEY,
            table=getattr(settings, "OFFICERS_REMOTE_TABLE", "house_officers"),
            timeout=getattr(settings, "OFFICERS_REMOTE_TIMEOUT", 10.0),
        )
    raise ImproperlyConfigured(f"Unknown OFFICERS_REMOTE_BACKEND: {backend!r} (expected 'orm' or 'postgrest').")


def build_record_store() -> OfficerRecordStore:
    return OfficerRecordStore(
        remote=build_remote_store(),
        local=LocalCache(alias=getattr(settings, "OFFICERS_LOCAL_CACHE_ALIAS", "officers_local")),
    )


def get_record_store() -> OfficerRecordStore:
    """Process-wide store; one instance so its write lock covers every request thread."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = build_record_store()
    return _store


def reset_record_store() -> None:
    global _store
    with _store_lock:
        _store = None


__all__ = [
    "LoadDecision",
    "LoadSource",
    "LocalCache",
    "OfficerRecordStore",
    "OrmRemoteStore",
    "PostgrestRemoteStore",
    "RemoteStore",
    "RemoteStoreError",
    "Result",
    "build_record_store",
    "build_remote_store",
    "capture_remote",
    "choose_load_source",
    "get_record_store",
    "reset_record_store",
]
