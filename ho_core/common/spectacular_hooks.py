# ho_core/common/spectacular_hooks.py
from __future__ import annotations

PRIMARY_PREFIX = "/api/v1/"
ALIAS_PREFIX = "/api/"


def _is_alias(path: str) -> bool:
    return path.startswith(ALIAS_PREFIX) and not path.startswith(PRIMARY_PREFIX)


def preprocess_exclude_legacy_api(endpoints):
    """
    The officer API is mounted twice (/api/v1/ and the unversioned /api/ alias).
    Only the versioned copy goes into the schema, so operation ids stay unique.
    """
    return [endpoint for endpoint in endpoints if not _is_alias(endpoint[0])]
