# ho_core/officers/storage/local.py
from __future__ import annotations

import json
import logging
from typing import Sequence

from django.core.cache import caches

from ho_core.officers.records import OfficerRecord

logger = logging.getLogger("officers_storage")

STORAGE_KEY = "house_officers_data"


class LocalCache:
    """
    Process-local fallback copy of the whole record set.

    The set is kept as a single JSON blob under one cache key and is always
    read and written wholesale; partial edits are read-full/mutate/write-full.
    """

    def __init__(self, *, alias: str = "officers_local", key: str = STORAGE_KEY):
        self.alias = alias
        self.key = key

    @property
    def _cache(self):
        return caches[self.alias]

    def read(self) -> list[OfficerRecord]:
        blob = self._cache.get(self.key)
        if not blob:
            return []
        try:
            return [OfficerRecord.from_wire(row) for row in json.loads(blob)]
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Local officer cache is unreadable, treating it as empty: %s", exc)
            return []

    def write(self, records: Sequence[OfficerRecord]) -> None:
        blob = json.dumps([r.to_wire() for r in records])
        self._cache.set(self.key, blob, timeout=None)

    def clear(self) -> None:
        self._cache.delete(self.key)
