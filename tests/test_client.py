import pytest

from reservation_api_client import ReservationAPI
from tests.conftest import TOMORROW, YESTERDAY


@pytest.fixture(name="api")
def api_fixture(client):
    """Client library speaking to the in-process test application."""
    return ReservationAPI(base_url="http://testserver", session=client)


def test_login_keeps_token(api):
    user, error = api.login("admin@reservas.com", "admin123")

    assert error is None
    assert user["role"] == "administrator"
    assert api.api_key
    me, error = api.me()
    assert me["email"] == "admin@reservas.com"

    api.logout()
    me, error = api.me()
    assert me is None
    assert error["status_code"] == 401


def test_login_failure(api):
    user, error = api.login("admin@reservas.com", "wrong!!")
    assert user is None
    assert error["status_code"] == 401
    assert error["message"] == "Invalid credentials"
    assert api.api_key is None


def test_errors_carry_kind(api):
    api.register("Ana Ruiz", "ana@x.com", "secret1")

    data, error = api.register("Ana Again", "ana@x.com", "secret1")

    assert data is None
    assert error == {"status_code": 409, "kind": "DuplicateEmail", "message": error["message"]}


def test_booking_flow(api):
    api.register("Ana Ruiz", "ana@x.com", "secret1")
    api.login("ana@x.com", "secret1")

    booking, error = api.create_booking(TOMORROW, "10:00")
    assert error is None
    assert booking["ownerId"] == 3

    _, error = api.create_booking(YESTERDAY, "10:00")
    assert (error["kind"], error["message"]) == ("ValidationError", "past date")

    mine, _ = api.list_my_bookings()
    assert [b["id"] for b in mine] == [booking["id"]]
    history, _ = api.my_history()
    assert len(history) == 1

    change, error = api.cancel_booking(booking["id"])
    assert change["newStatus"] == "cancelled"

    listing, error = api.list_bookings()
    assert listing == []
    assert error["status_code"] == 403


def test_staff_and_admin_operations(api):
    api.register("Ana Ruiz", "ana@x.com", "secret1")
    api.login("ana@x.com", "secret1")
    booking, _ = api.create_booking(TOMORROW, "10:00")

    api.login("operador@reservas.com", "operador123")
    change, _ = api.update_booking_status(booking["id"], "confirmed")
    assert change["previousStatus"] == "pending"
    moved, _ = api.reprogram_booking(booking["id"], time="15:00")
    assert moved["booking"]["time"] == "15:00"
    stats, _ = api.booking_stats()
    assert stats["confirmed"] == 1
    today, error = api.list_today_bookings()
    assert today == [] and error is None
    recent, _ = api.list_bookings(recent=True)
    assert recent[0]["ownerName"] == "Ana Ruiz"

    api.login("admin@reservas.com", "admin123")
    created, _ = api.create_account("Eva Operadora", "eva@x.com", "secret3", "operator")
    updated, _ = api.update_account(created["id"], name="Eva Ruiz")
    assert updated["name"] == "Eva Ruiz"
    fetched, _ = api.get_account(created["id"])
    assert fetched["role"] == "operator"
    accounts, _ = api.list_accounts()
    assert len(accounts) == 4

    deletion, _ = api.delete_account(3)
    assert deletion["cascadedCount"] == 1
    _, error = api.delete_booking(booking["id"])
    assert error["kind"] == "NotFound"
