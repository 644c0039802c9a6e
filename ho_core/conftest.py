# ho_core/conftest.py
import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from ho_core.officers.storage import LocalCache, OfficerRecordStore, reset_record_store
from ho_core.officers.tests.fakes import FakeRemoteStore


@pytest.fixture(autouse=True)
def clean_officer_storage(settings):
    """
    Every test starts with an empty local cache and a freshly built process-wide store.
    """
    local = LocalCache(alias=settings.OFFICERS_LOCAL_CACHE_ALIAS)
    local.clear()
    reset_record_store()
    yield
    local.clear()
    reset_record_store()


@pytest.fixture
def user(db):
    User = get_user_model()
    return User.objects.create_user(username="registrar", password="testpass", is_active=True)


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def local_cache(settings):
    return LocalCache(alias=settings.OFFICERS_LOCAL_CACHE_ALIAS)


@pytest.fixture
def fake_remote():
    return FakeRemoteStore()


@pytest.fixture
def store(fake_remote, local_cache):
    """Record store over an in-memory remote; flip fake_remote.failing to simulate an outage."""
    return OfficerRecordStore(remote=fake_remote, local=local_cache)
