# ho_core/officers/storage/store.py
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ho_core.officers.records import OfficerRecord
from ho_core.officers.storage.local import LocalCache
from ho_core.officers.storage.remote import RemoteStore
from ho_core.officers.storage.results import Result

logger = logging.getLogger("officers_storage")


class LoadSource:
    REMOTE = "remote"
    LOCAL = "local"


@dataclass(frozen=True)
class LoadDecision:
    records: list[OfficerRecord]
    source: str
    refresh_local: bool


def choose_load_source(remote: Result[list[OfficerRecord]], local_records: Sequence[OfficerRecord]) -> LoadDecision:
    """
    Precedence rules for reading the record set:

    - remote succeeded with rows  -> remote rows win and replace the local copy
    - remote succeeded but empty  -> local copy (an empty remote is not trusted)
    - remote failed               -> local copy, unchanged
    """
    if remote.ok and remote.value:
        return LoadDecision(records=list(remote.value), source=LoadSource.REMOTE, refresh_local=True)
    return LoadDecision(records=list(local_records), source=LoadSource.LOCAL, refresh_local=False)


class OfficerRecordStore:
    """
    Single logical record set written through to a remote store and a local cache.

    Remote failures never propagate: every mutation is committed locally once the
    remote call has settled, whatever its outcome. Mutations are serialized per
    store so the local read-modify-write cannot interleave.
    """

    def __init__(self, *, remote: RemoteStore, local: LocalCache):
        self.remote = remote
        self.local = local
        # Per-process only. Several worker processes sharing one FileBasedCache
        # can still lose local writes; deploy a single worker process per cache.
        self._write_lock = threading.Lock()

    def load(self) -> list[OfficerRecord]:
        remote = self.remote.load_all()
        decision = choose_load_source(remote, self.local.read())
        if not remote.ok:
            logger.warning(
                "Remote load failed (%s); serving %d locally cached records.", remote.error, len(decision.records)
            )
        if decision.refresh_local:
            self.local.write(decision.records)
        logger.debug("Loaded %d officer records from %s", len(decision.records), decision.source)
        return decision.records

    def get(self, officer_id: str) -> Optional[OfficerRecord]:
        for record in self.load():
            if record.id == officer_id:
                return record
        return None

    def add(self, record: OfficerRecord) -> None:
        with self._write_lock:
            result = self.remote.insert(record)
            records = self.local.read()
            records.append(record)
            self.local.write(records)
        self._log_local_only("add", record.id, result)

    def update(self, officer_id: str, fields: Mapping[str, Any]) -> None:
        """
        Applies a partial update by id. Derived fields are the caller's job:
        the store writes exactly what it is given.
        """
        with self._write_lock:
            result = self.remote.update(officer_id, fields)
            records = self.local.read()
            changed = False
            for i, record in enumerate(records):
                if record.id == officer_id:
                    records[i] = record.with_updates(fields)
                    changed = True
                    break
            if changed:
                self.local.write(records)
        self._log_local_only("update", officer_id, result)

    def delete(self, officer_id: str) -> None:
        with self._write_lock:
            result = self.remote.delete(officer_id)
            records = [r for r in self.local.read() if r.id != officer_id]
            self.local.write(records)
        self._log_local_only("delete", officer_id, result)

    def push_local_to_remote(self) -> Result[int]:
        """
        Resync: replace the remote table with the local copy
        (delete-all-then-bulk-insert). The failure, if any, is returned.
        """
        with self._write_lock:
            records = self.local.read()
            return self.remote.replace_all(records)

    @staticmethod
    def _log_local_only(operation: str, officer_id: str, result: Result) -> None:
        if not result.ok:
            logger.warning("Officer %s %s saved to local cache only; remote store unavailable.", officer_id, operation)
