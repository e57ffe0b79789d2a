from reservation_api.app.core.store import BOOKINGS_KEY
from reservation_api.app.schemas.account import AccountUpdate
from reservation_api.app.services.join_service import MISSING_OWNER_FIELD, MISSING_OWNER_NAME
from tests.conftest import TODAY, TOMORROW


def test_enrich_attaches_owner_details(accounts, bookings, join):
    ana = accounts.create("Ana Ruiz", "ana@x.com", "secret1", "client").value
    bookings.create(ana.id, TOMORROW, "10:00")

    [enriched] = join.enrich_all()

    assert enriched.owner_id == ana.id
    assert (enriched.owner_name, enriched.owner_email, enriched.owner_role) == ("Ana Ruiz", "ana@x.com", "client")
    dumped = enriched.model_dump(by_alias=True)
    assert dumped["ownerName"] == "Ana Ruiz"
    assert "credential" not in dumped


def test_orphaned_bookings_get_placeholders(store, join):
    store.write(BOOKINGS_KEY, [{"id": 1, "ownerId": 99, "date": TOMORROW, "time": "10:00", "status": "pending"}])

    [enriched] = join.enrich_all()

    assert enriched.owner_name == MISSING_OWNER_NAME == "Usuario no encontrado"
    assert enriched.owner_email == MISSING_OWNER_FIELD == "N/A"
    assert enriched.owner_role == "N/A"
    assert join.owner_name(99) == "Usuario no encontrado"
    assert not join.owner_exists(99)


def test_enrichment_reflects_renamed_owner(accounts, bookings, join):
    ana = accounts.create("Ana Ruiz", "ana@x.com", "secret1", "client").value
    bookings.create(ana.id, TOMORROW, "10:00")
    assert join.enrich_all()[0].owner_name == "Ana Ruiz"

    accounts.update(ana.id, AccountUpdate(name="Ana María"))

    assert join.enrich_all()[0].owner_name == "Ana María"
    assert join.owner_name(ana.id) == "Ana María"
    assert join.owner_exists(ana.id)


def test_enrich_does_not_modify_store(accounts, bookings, join, store):
    ana = accounts.create("Ana Ruiz", "ana@x.com", "secret1", "client").value
    bookings.create(ana.id, TOMORROW, "10:00")
    before = store.read(BOOKINGS_KEY)

    join.enrich_all(most_recent_first=True)
    join.enrich_today()

    assert store.read(BOOKINGS_KEY) == before


def test_most_recent_first_ordering(accounts, bookings, join):
    ana = accounts.create("Ana Ruiz", "ana@x.com", "secret1", "client").value
    bookings.create(ana.id, "2026-03-12", "09:00")
    bookings.create(ana.id, "2026-03-20", "09:00")
    bookings.create(ana.id, "2026-03-12", "18:00")

    assert [b.id for b in join.enrich_all()] == [1, 2, 3]
    assert [b.id for b in join.enrich_all(most_recent_first=True)] == [2, 3, 1]


def test_enrich_by_owner_and_today(accounts, bookings, join):
    ana = accounts.create("Ana Ruiz", "ana@x.com", "secret1", "client").value
    luis = accounts.create("Luis Mora", "luis@x.com", "secret2", "client").value
    today = TODAY.isoformat()
    bookings.create(ana.id, today, "16:00")
    bookings.create(luis.id, today, "09:00")
    bookings.create(ana.id, TOMORROW, "10:00")

    assert [b.time for b in join.enrich_by_owner(ana.id)] == ["16:00", "10:00"]
    assert [(b.owner_name, b.time) for b in join.enrich_today()] == [("Luis Mora", "09:00"), ("Ana Ruiz", "16:00")]


def test_recent_ordering_survives_refused_input(accounts, bookings, join):
    ana = accounts.create("Ana Ruiz", "ana@x.com", "secret1", "client").value
    assert not bookings.create(ana.id, TOMORROW, "10:00\n").ok
    bookings.create(ana.id, TOMORROW, "10:00")

    assert [b.time for b in join.enrich_all(most_recent_first=True)] == ["10:00"]
