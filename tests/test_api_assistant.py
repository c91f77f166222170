from fastapi.testclient import TestClient

from travelsage.agents import GENERIC_RESPONSE
from travelsage.main import create_app


def test_query(client):
    response = client.post("/api/ai/query", json={"query": "Suggest restaurants in Barcelona"})

    assert response.status_code == 200
    body = response.json()
    assert body["intent"] == "restaurant_search"
    assert body["response"]
    assert body["source"] == "rules"
    assert body["tokens"] == {"prompt": 0, "completion": 0, "total": 0}


def test_query_without_keywords(client):
    response = client.post("/api/ai/query", json={"query": "Hello there"})
    assert response.json()["response"] == GENERIC_RESPONSE


def test_blank_and_missing_input(client):
    blank = client.post("/api/ai/query", json={"query": "   "})
    assert blank.status_code == 400
    assert blank.json()["details"]["errors"][0]["field"] == "query"

    missing = client.post("/api/ai/voice-query", json={})
    assert missing.status_code == 400
    assert missing.json()["details"]["errors"][0]["field"] == "transcript"


def test_input_length_is_capped(client):
    response = client.post("/api/ai/analyze-preferences", json={"input": "beach " * 200})

    assert response.status_code == 400
    assert response.json()["details"]["errors"] == [{"field": "input", "message": "At most 1000 characters"}]


def test_generate_itinerary(client):
    response = client.post("/api/ai/generate-itinerary", json={"prompt": "3 days in Rome", "startDate": "2025-06-01"})

    assert response.status_code == 200
    itinerary = response.json()["itinerary"]
    assert itinerary["name"] == "Trip to Rome"
    assert [day["date"] for day in itinerary["days"]] == ["2025-06-01", "2025-06-02", "2025-06-03"]
    assert itinerary["days"][0]["items"][1]["startTime"] == "10:00"


def test_restaurant_recommendations(client):
    response = client.post("/api/ai/restaurant-recommendations", json={
        "preferences": "vegan food with a view", "location": "Bali",
    })

    assert response.status_code == 200
    recommendations = response.json()["recommendations"]
    assert "Green Palette" in [r["name"] for r in recommendations]
    assert {r["location"] for r in recommendations} == {"Bali"}
    assert all(r["recommendationReason"] for r in recommendations)


def test_analyze_preferences(client):
    response = client.post("/api/ai/analyze-preferences", json={
        "input": "A week of hiking and wine in Lisbon, mid-range hotels",
    })

    preferences = response.json()["preferences"]
    assert preferences["destinations"] == ["Lisbon"]
    assert preferences["travelDuration"] == 7
    assert preferences["budget"] == "medium"
    assert preferences["interests"] == ["hiking", "wine"]
    assert preferences["accommodation"] == ["hotel"]


def test_voice_query(client):
    response = client.post("/api/ai/voice-query", json={"transcript": "Find sushi restaurants in Tokyo"})

    body = response.json()
    assert body["intent"] == "restaurant_search"
    assert body["entities"]["cuisine"] == "Japanese"
    assert body["entities"]["destination"] == "Tokyo"
    assert body["response"] == "Searching for Japanese restaurants in Tokyo."


def test_assistant_is_rate_limited(build_container):
    client = TestClient(create_app(build_container(ASSISTANT_REQUESTS_PER_MINUTE=2)))
    for _ in range(2):
        assert client.post("/api/ai/query", json={"query": "tips"}).status_code == 200

    response = client.post("/api/ai/query", json={"query": "tips"})
    assert response.status_code == 429
    assert response.json()["error"] == "RateLimitExceeded"
