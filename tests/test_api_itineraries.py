import pytest

PARIS = {"name": "Summer in Paris", "destination": "Paris", "startDate": "2025-06-01", "numberOfDays": 3}

WITH_ITEMS = {
    "name": "Rome weekend",
    "destination": "Rome",
    "startDate": "2025-06-01",
    "days": [
        {"title": "Arrival", "items": [{"title": "Colosseum", "startTime": "14:00", "endTime": "16:00"}]},
        {"items": [{"title": "Vatican Museums"}, {"title": "Pasta dinner", "type": "food"}]},
    ],
}


@pytest.fixture
def itinerary(auth_client):
    response = auth_client.post("/api/itineraries", json=WITH_ITEMS)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_with_number_of_days(auth_client):
    response = auth_client.post("/api/itineraries", json=PARIS)

    assert response.status_code == 201
    body = response.json()
    assert body["userId"] == "user1"
    assert body["endDate"] == "2025-06-03"
    assert [day["date"] for day in body["days"]] == ["2025-06-01", "2025-06-02", "2025-06-03"]
    assert body["days"][0]["title"] == "Day 1 in Paris"


def test_create_without_a_session_belongs_to_anonymous(client):
    response = client.post("/api/itineraries", json=PARIS)
    assert response.status_code == 201
    assert response.json()["userId"] == "anonymous"


def test_create_with_prompt_uses_the_assistant(auth_client):
    response = auth_client.post("/api/itineraries", json={
        "name": "Tokyo food trip",
        "destination": "Tokyo",
        "startDate": "2025-06-01",
        "numberOfDays": 2,
        "prompt": "street food and temples",
    })

    assert response.status_code == 201
    days = response.json()["days"]
    assert [day["title"] for day in days] == ["Day 1: Exploring Tokyo", "Day 2: More Tokyo Adventures"]
    assert all(item["id"] and item["status"] == "none" for day in days for item in day["items"])


def test_prompt_draft_is_padded_to_the_requested_length(auth_client):
    response = auth_client.post("/api/itineraries", json={
        "name": "Long Bali stay",
        "destination": "Bali",
        "startDate": "2025-06-01",
        "numberOfDays": 5,
        "prompt": "beaches and temples",
    })

    body = response.json()
    assert len(body["days"]) == 5
    assert body["days"][3]["title"] == "Day 4 in Bali"
    assert body["days"][4]["date"] == "2025-06-05"
    assert body["days"][4]["items"] == []
    assert body["endDate"] == "2025-06-05"


def test_create_validation_error_shape(auth_client):
    response = auth_client.post("/api/itineraries", json={"destination": "Paris", "numberOfDays": 3})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "ValidationError"
    assert [e["field"] for e in body["details"]["errors"]] == ["name", "startDate"]
    assert all(e["message"] for e in body["details"]["errors"])


def test_create_rejects_malformed_items(auth_client):
    response = auth_client.post("/api/itineraries", json={
        **PARIS, "days": [{"items": [{"title": "Louvre", "type": "museum"}]}],
    })
    assert response.status_code == 400
    assert response.json()["details"]["errors"][0]["field"] == "days.0.items.0.type"


def test_current_and_user_itineraries(auth_client, itinerary):
    current = auth_client.get("/api/itineraries/current")
    assert current.status_code == 200
    assert current.json()["id"] == itinerary["id"]

    mine = auth_client.get("/api/itineraries/user")
    assert [it["id"] for it in mine.json()] == [itinerary["id"]]


def test_current_without_itineraries(other_client):
    response = other_client.get("/api/itineraries/current")
    assert response.status_code == 404
    assert response.json()["message"] == "No active itinerary found"


def test_itinerary_routes_require_a_session(client):
    assert client.get("/api/itineraries/current").status_code == 401
    assert client.get("/api/itineraries/user").status_code == 401
    assert client.get("/api/itineraries/anything").status_code == 401


def test_get_update_delete(auth_client, itinerary):
    path = f"/api/itineraries/{itinerary['id']}"
    assert auth_client.get(path).json()["name"] == "Rome weekend"

    updated = auth_client.patch(path, json={"name": "Roman holiday"})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Roman holiday"
    assert updated.json()["days"] == itinerary["days"]

    deleted = auth_client.delete(path)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Itinerary deleted successfully"}
    assert auth_client.get(path).status_code == 404


def test_other_users_cannot_touch_an_itinerary(auth_client, other_client, itinerary):
    path = f"/api/itineraries/{itinerary['id']}"

    for response in (
        other_client.get(path),
        other_client.patch(path, json={"name": "Hijacked"}),
        other_client.delete(path),
    ):
        assert response.status_code == 403
        assert response.json()["error"] == "AuthorizationError"

    assert auth_client.get(path).json()["name"] == "Rome weekend"


def test_admin_passes_ownership_checks(admin_client, itinerary):
    response = admin_client.get(f"/api/itineraries/{itinerary['id']}")
    assert response.status_code == 200


def test_item_status_update(auth_client, other_client, itinerary):
    item_id = itinerary["days"][1]["items"][0]["id"]
    path = f"/api/itineraries/items/{item_id}/status"

    first = auth_client.patch(path, json={"status": "confirmed"})
    second = auth_client.patch(path, json={"status": "confirmed"})
    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert first.json()["status"] == "confirmed"

    assert auth_client.patch(path, json={"status": "done"}).status_code == 400
    assert other_client.patch(path, json={"status": "cancelled"}).status_code == 403

    missing = auth_client.patch("/api/itineraries/items/nope/status", json={"status": "pending"})
    assert missing.status_code == 404
    assert missing.json()["message"] == "Item not found in any itinerary"


@pytest.mark.parametrize("number_of_days", [500, -1])
def test_prompt_creation_checks_the_day_count(auth_client, number_of_days):
    response = auth_client.post("/api/itineraries", json={
        "name": "Tokyo", "destination": "Tokyo", "startDate": "2025-06-01",
        "numberOfDays": number_of_days, "prompt": "3 days in Tokyo",
    })
    assert response.status_code == 400
    assert response.json()["details"]["errors"][0]["field"] == "numberOfDays"


def test_explicit_days_are_capped(auth_client):
    response = auth_client.post("/api/itineraries", json={**WITH_ITEMS, "days": [{}] * 200})
    assert response.status_code == 400
    assert response.json()["details"]["errors"][0]["field"] == "days"


def test_duplicate_item_ids_are_rejected(auth_client):
    response = auth_client.post("/api/itineraries", json={**WITH_ITEMS, "days": [
        {"items": [{"id": "dup", "title": "Colosseum"}, {"id": "dup", "title": "Forum"}]},
    ]})
    assert response.status_code == 400
    assert response.json()["details"]["errors"][0]["field"] == "days.0.items.1.id"


def test_shared_client_ids_do_not_link_itineraries(auth_client, other_client):
    days = [{"items": [{"id": "shared", "title": "Colosseum"}]}]
    mine = auth_client.post("/api/itineraries", json={**WITH_ITEMS, "days": days}).json()
    theirs = other_client.post("/api/itineraries", json={**WITH_ITEMS, "days": days}).json()

    item_id = mine["days"][0]["items"][0]["id"]
    assert item_id != theirs["days"][0]["items"][0]["id"]
    assert auth_client.patch(f"/api/itineraries/items/{item_id}/status", json={"status": "cancelled"}).status_code == 200
    assert other_client.get(f"/api/itineraries/{theirs['id']}").json()["days"][0]["items"][0]["status"] == "none"


def test_update_rejects_end_before_start(auth_client, itinerary):
    response = auth_client.patch(f"/api/itineraries/{itinerary['id']}", json={"endDate": "2025-05-01"})
    assert response.status_code == 400
    assert response.json()["details"]["errors"][0]["field"] == "endDate"
    assert auth_client.get(f"/api/itineraries/{itinerary['id']}").json()["endDate"] == "2025-06-02"
