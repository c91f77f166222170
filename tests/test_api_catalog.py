def names(response):
    assert response.status_code == 200, response.text
    return [item["name"] for item in response.json()]


def test_destination_search(client):
    assert names(client.get("/api/destinations", params={"query": "paris"})) == ["Paris"]
    assert names(client.get("/api/destinations", params={"continent": "Europe", "interest": "Romance"})) == [
        "Paris", "Santorini",
    ]
    assert len(names(client.get("/api/destinations", params={"continent": "all"}))) == 6


def test_featured_and_single_destination(client):
    assert len(names(client.get("/api/destinations/featured"))) == 6

    paris = client.get("/api/destinations/dest1").json()
    assert paris["name"] == "Paris"
    assert paris["isFeatured"] is True
    assert paris["imageUrl"].startswith("https://")

    missing = client.get("/api/destinations/dest99")
    assert missing.status_code == 404
    assert missing.json() == {"error": "NotFound", "message": "Destination not found", "details": {}}


def test_destination_activities(client):
    assert len(names(client.get("/api/destinations/dest6/activities"))) == 4
    assert names(client.get("/api/destinations/dest99/activities")) == []


def test_restaurant_search(client):
    assert names(client.get("/api/restaurants", params={"priceRange": "$$$"})) == ["Sakura Sushi"]
    assert names(client.get("/api/restaurants", params={"cuisine": "Italian"})) == ["Trattoria Bella Italia"]
    assert names(client.get("/api/restaurants", params={"location": "barcelona"})) == ["El Jardin"]
    assert len(names(client.get("/api/restaurants/recommended"))) == 4
    assert client.get("/api/restaurants/rest2").json()["reviewCount"] == 178


def test_activities(client):
    assert names(client.get("/api/activities", params={"category": "Architecture"})) == ["Gaudí Architecture Tour"]
    assert [a["id"] for a in client.get("/api/activities/popular").json()] == ["act1", "act4", "act2", "act3"]
    assert client.get("/api/activities/act99").status_code == 404
