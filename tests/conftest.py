from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from reservation_api.app.api.v1.deps import get_clock
from reservation_api.app.core.config import settings
from reservation_api.app.core.store import MemoryStore, get_store, init_store
from reservation_api.app.main import app
from reservation_api.app.services.account_service import AccountService
from reservation_api.app.services.booking_service import BookingService
from reservation_api.app.services.join_service import JoinService

# Every test runs on this "today" so date rules are deterministic.
TODAY = date(2026, 3, 10)
TOMORROW = (TODAY + timedelta(days=1)).isoformat()
YESTERDAY = (TODAY - timedelta(days=1)).isoformat()


def fixed_clock() -> date:
    return TODAY


@pytest.fixture(name="store")
def store_fixture():
    """Empty collections, nothing seeded."""
    store = MemoryStore()
    init_store(store, seed=False)
    return store


@pytest.fixture(name="accounts")
def accounts_fixture(store):
    return AccountService(store)


@pytest.fixture(name="bookings")
def bookings_fixture(store):
    return BookingService(store, clock=fixed_clock)


@pytest.fixture(name="join")
def join_fixture(accounts, bookings):
    return JoinService(accounts, bookings)


@pytest.fixture(name="seeded_store")
def seeded_store_fixture():
    """Primary administrator (id 1) and default operator (id 2)."""
    store = MemoryStore()
    init_store(store, seed=True)
    return store


@pytest.fixture(name="client")
def client_fixture(seeded_store):
    """Test client whose routes use the seeded in-memory store and the fixed clock.

    Overrides are installed before the client starts so the startup hook
    initialises the test store, never the configured file.
    """
    app.dependency_overrides[get_store] = lambda: seeded_store
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def login(client: TestClient, email: str, credential: str) -> dict:
    response = client.post("/api/v1/auth/login", json={"email": email, "credential": credential})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(client):
    return login(client, settings.primary_admin_email, settings.primary_admin_credential)


@pytest.fixture(name="operator_headers")
def operator_headers_fixture(client):
    return login(client, settings.default_operator_email, settings.default_operator_credential)


@pytest.fixture(name="client_headers")
def client_headers_fixture(client):
    """Ana registers herself (id 3 after the two seeded accounts) and logs in."""
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Ana Ruiz", "email": "ana@x.com", "credential": "secret1"},
    )
    assert response.status_code == 201, response.text
    return login(client, "ana@x.com", "secret1")
