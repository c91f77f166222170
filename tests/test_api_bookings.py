import pytest

DINNER = {"restaurantId": "rest1", "date": "2025-06-01", "time": "19:30"}


@pytest.fixture
def tour(auth_client):
    response = auth_client.post("/api/bookings", json={"type": "activity", "itemId": "act1", "date": "2025-06-02"})
    assert response.status_code == 201, response.text
    return response.json()


def test_book_restaurant_is_confirmed(auth_client):
    response = auth_client.post("/api/restaurants/book", json=DINNER)

    assert response.status_code == 201
    body = response.json()
    assert body["type"] == "restaurant"
    assert body["itemId"] == "rest1"
    assert body["status"] == "confirmed"
    assert body["partySize"] == 2
    assert len(body["confirmationCode"]) == 8
    assert body["userId"] == "user1"


def test_book_restaurant_requires_a_session(client):
    response = client.post("/api/restaurants/book", json=DINNER)
    assert response.status_code == 401


def test_book_unknown_restaurant(auth_client):
    response = auth_client.post("/api/restaurants/book", json={**DINNER, "restaurantId": "rest99"})
    assert response.status_code == 404
    assert response.json()["message"] == "Restaurant not found"


def test_book_restaurant_requires_date_and_time(auth_client):
    response = auth_client.post("/api/restaurants/book", json={"restaurantId": "rest1"})
    assert response.status_code == 400
    assert {e["field"] for e in response.json()["details"]["errors"]} == {"date", "time"}


def test_generic_booking_defaults_to_pending(tour):
    assert tour["status"] == "pending"
    assert tour["confirmationCode"] is None
    assert tour["partySize"] == 1


def test_invalid_booking_type(auth_client):
    response = auth_client.post("/api/bookings", json={"type": "spa", "itemId": "x", "date": "2025-06-02"})
    assert response.status_code == 400
    assert response.json()["details"]["errors"][0]["field"] == "type"


def test_list_bookings_by_type(auth_client, tour):
    dinner = auth_client.post("/api/restaurants/book", json=DINNER).json()

    restaurants = auth_client.get("/api/bookings", params={"type": "restaurant"}).json()
    assert [b["id"] for b in restaurants] == [dinner["id"]]
    everything = auth_client.get("/api/bookings", params={"type": "all"}).json()
    assert {b["id"] for b in everything} == {dinner["id"], tour["id"]}
    assert auth_client.get("/api/bookings", params={"type": "spa"}).status_code == 400


def test_bookings_are_private(other_client, tour):
    assert other_client.get("/api/bookings").json() == []

    response = other_client.get(f"/api/bookings/{tour['id']}")
    assert response.status_code == 403
    assert response.json()["details"] == {"resource": "booking"}
    assert other_client.patch(f"/api/bookings/{tour['id']}/status", json={"status": "cancelled"}).status_code == 403


def test_confirming_a_booking_issues_a_code(auth_client, tour):
    response = auth_client.patch(f"/api/bookings/{tour['id']}/status", json={"status": "confirmed"})

    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"
    assert len(response.json()["confirmationCode"]) == 8
    assert auth_client.get(f"/api/bookings/{tour['id']}").json()["status"] == "confirmed"


def test_unknown_booking(auth_client):
    response = auth_client.get("/api/bookings/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"
