from datetime import date

import pytest

from travelsage.models import Booking, Itinerary, ItineraryDay, ItineraryItem
from travelsage.repositories.supabase import (
    SupabaseBookingRepository,
    SupabaseCatalogRepository,
    SupabaseItineraryRepository,
    SupabaseUserRepository,
    escape_like,
)
from travelsage.utils.errors import DependencyError


class FakeResult:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Records the builder chain and answers ``execute`` with canned rows"""

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.calls = []

    def __getattr__(self, name):
        def step(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return step

    def execute(self):
        self.client.executed.append((self.table, self.calls))
        if self.client.error:
            raise self.client.error
        return FakeResult(self.client.rows.get(self.table, []))


class FakeClient:
    def __init__(self, rows=None, error=None):
        self.rows = rows or {}
        self.error = error
        self.executed = []

    def table(self, name):
        return FakeQuery(self, name)


def rome_trip():
    return Itinerary(
        id="it1",
        user_id="user1",
        name="Rome weekend",
        destination="Rome",
        start_date=date(2025, 6, 1),
        days=[ItineraryDay(title="Arrival", date=date(2025, 6, 1), items=[ItineraryItem(id="item1", title="Colosseum")])],
    )


async def test_itinerary_rows_embed_days_as_json():
    client = FakeClient()
    await SupabaseItineraryRepository(client).add(rome_trip())

    table, calls = client.executed[0]
    assert table == "itineraries"
    name, args, _ = calls[0]
    assert name == "insert"
    row = args[0]
    assert row["user_id"] == "user1"
    assert row["start_date"] == "2025-06-01"
    assert row["days"][0]["items"][0]["id"] == "item1"


async def test_find_by_item_id_scans_rows():
    row = rome_trip().model_dump(mode="json")
    repo = SupabaseItineraryRepository(FakeClient({"itineraries": [row]}))

    found = await repo.find_by_item_id("item1")
    assert found is not None and found.id == "it1"
    assert await repo.find_by_item_id("nope") is None


async def test_booking_type_filter_and_order():
    client = FakeClient()
    await SupabaseBookingRepository(client).list_for_user("user1", "restaurant")

    _, calls = client.executed[0]
    assert ("eq", ("user_id", "user1"), {}) in calls
    assert ("eq", ("type", "restaurant"), {}) in calls
    assert calls[-1] == ("order", ("created_at",), {"desc": True})


async def test_catalog_rows_are_validated():
    client = FakeClient({"restaurants": [{
        "id": "rest1", "name": "Trattoria", "description": "Pasta", "location": "Rome",
        "cuisine": ["Italian"], "price_range": "$$", "rating": 4.5,
    }]})

    restaurant = await SupabaseCatalogRepository(client).get_restaurant("rest1")
    assert restaurant.name == "Trattoria"
    assert restaurant.price_range == "$$"


async def test_request_failures_become_dependency_errors():
    repo = SupabaseBookingRepository(FakeClient(error=RuntimeError("connection refused")))

    with pytest.raises(DependencyError) as exc:
        await repo.get("b1")
    assert exc.value.details == {"original_error": "connection refused"}
    assert exc.value.status_code == 500


async def test_saved_booking_falls_back_to_input_when_no_rows_return():
    booking = Booking(user_id="user1", type="activity", item_id="act1", date=date(2025, 6, 2))
    saved = await SupabaseBookingRepository(FakeClient()).save(booking)
    assert saved is booking


@pytest.mark.parametrize("raw, escaped", [
    ("johndoe", "johndoe"),
    ("jo_ndoe", "jo\\_ndoe"),
    ("a%", "a\\%"),
    ("back\\slash", "back\\\\slash"),
])
def test_escape_like(raw, escaped):
    assert escape_like(raw) == escaped


async def test_user_lookups_match_literally():
    client = FakeClient()
    users = SupabaseUserRepository(client)

    await users.get_by_username("jo_ndoe")
    await users.get_by_email("100%@example.com")

    lookups = [call for _, calls in client.executed for call in calls if call[0] == "ilike"]
    assert lookups == [
        ("ilike", ("username", "jo\\_ndoe"), {}),
        ("ilike", ("email", "100\\%@example.com"), {}),
    ]
