"""End-to-end properties of the account and booking services working
together on one store."""

import random

from reservation_api.app.core.result import ErrorKind
from reservation_api.app.core.store import ACCOUNTS_KEY, BOOKINGS_KEY
from reservation_api.app.schemas.account import AccountUpdate
from reservation_api.app.schemas.booking import BookingStatus
from tests.conftest import TOMORROW


def test_ids_always_exceed_the_live_maximum(accounts, bookings):
    rng = random.Random(20260310)
    for n in range(60):
        live = [b.id for b in bookings.list_all()]
        if live and rng.random() < 0.4:
            bookings.delete(rng.choice(live))
            continue
        created = bookings.create(1, TOMORROW, "10:00").value
        assert created.id > max(live, default=0)

        live_accounts = [a.id for a in accounts.list_all()]
        account = accounts.create("Someone", f"user{n}@x.com", "secret1", "client").value
        assert account.id > max(live_accounts, default=0)


def test_emails_stay_unique(accounts):
    accounts.create("Ana Ruiz", "ana@x.com", "secret1", "client")
    luis = accounts.create("Luis Mora", "luis@x.com", "secret1", "client").value
    accounts.create("Ana Copy", "ana@x.com", "secret1", "client")
    accounts.update(luis.id, AccountUpdate(email="ana@x.com"))

    emails = [a.email for a in accounts.list_all()]
    assert len(emails) == len(set(emails)) == 2


def test_reprogram_keeps_active_statuses(bookings):
    pending = bookings.create(1, TOMORROW, "10:00").value
    confirmed = bookings.create(1, TOMORROW, "11:00").value
    bookings.confirm(confirmed.id)

    assert bookings.reprogram(pending.id, new_time="12:00").value.booking.status == BookingStatus.PENDING
    assert bookings.reprogram(confirmed.id, new_time="13:00").value.booking.status == BookingStatus.CONFIRMED


def test_orphan_from_interrupted_cascade_is_still_enriched(accounts, bookings, join, store):
    ana = accounts.create("Ana Ruiz", "ana@x.com", "secret1", "client").value
    bookings.create(ana.id, TOMORROW, "10:00")
    # Account removed without touching bookings
    store.write(ACCOUNTS_KEY, [])

    [enriched] = join.enrich_all()
    assert enriched.owner_name == "Usuario no encontrado"


def test_client_lifecycle(accounts, bookings, store):
    ana = accounts.create("Ana Ruiz", "ana@x.com", "secret1", "client")
    assert ana.ok and ana.value.id == 1

    booking = bookings.create(1, TOMORROW, "09:00")
    assert booking.value.status == BookingStatus.PENDING

    change = bookings.update_status(1, "confirmed").value
    assert (change.previous_status, change.new_status) == (BookingStatus.PENDING, BookingStatus.CONFIRMED)

    deletion = accounts.delete(1)
    assert deletion.ok
    assert deletion.value.cascaded_count == 1
    assert store.read(BOOKINGS_KEY) == []
    assert bookings.find_by_id(1) is None
    assert bookings.update_status(1, "cancelled").kind == ErrorKind.NOT_FOUND
