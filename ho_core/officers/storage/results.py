# ho_core/officers/storage/results.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

import requests
from django.db import Error as DatabaseFailure

T = TypeVar("T")

logger = logging.getLogger("officers_storage")


class RemoteStoreError(Exception):
    """Remote store rejected an operation (bad status, bad payload, misconfiguration)."""


# Everything a remote backend may raise when it is unreachable or refuses a call.
REMOTE_FAILURES = (DatabaseFailure, requests.RequestException, RemoteStoreError)


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of one backend call: either a value or the failure that prevented it.
    """
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Result[T]":
        return cls(error=error)


def capture_remote(operation: str, call: Callable[[], T]) -> Result[T]:
    """
    Run one remote call and fold its failure into a Result.
    Failures are logged here; nothing is raised to the caller.
    """
    try:
        return Result.success(call())
    except REMOTE_FAILURES as exc:
        logger.warning("Remote store %s failed: %s", operation, exc)
        return Result.failure(exc)
