"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from caloritons.api.app import create_app

APPLE_BODY = {
    "name": "Maçã",
    "weight": 130,
    "portion_name": "1 unidade média",
    "per100g": {"calories": 52, "protein": 0.3, "carbs": 14, "fat": 0.2},
}


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_empty_day_uses_defaults(container) -> None:
    client = TestClient(create_app(container))

    data = client.get("/days/2024-05-10").json()

    assert data["log"] == {"food": [], "water": 0}
    assert data["summary"]["calories"]["goal"] == 2000


def test_add_and_edit_food(container) -> None:
    client = TestClient(create_app(container))

    added = client.post("/days/2024-05-10/foods", json=APPLE_BODY).json()
    entry_id = added["log"]["food"][0]["id"]
    edited = client.post(
        "/days/2024-05-10/foods", json={**APPLE_BODY, "id": entry_id, "weight": 200}
    ).json()

    assert added["log"]["food"][0]["calories"] == 68
    assert len(edited["log"]["food"]) == 1
    assert edited["log"]["food"][0]["calories"] == 104
    assert edited["summary"]["totals"]["calories"] == 104


def test_invalid_food_is_rejected(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/days/2024-05-10/foods", json={**APPLE_BODY, "weight": 0})

    assert response.status_code == 422
    assert dict(container.day_log_store.logs) == {}


def test_out_of_range_food_is_rejected(container) -> None:
    client = TestClient(create_app(container))
    huge_facts = {**APPLE_BODY["per100g"], "calories": 1e308}

    heavy = client.post("/days/2024-05-10/foods", json={**APPLE_BODY, "weight": 1e308})
    dense = client.post(
        "/days/2024-05-10/foods", json={**APPLE_BODY, "per100g": huge_facts}
    )

    assert heavy.status_code == 422
    assert dense.status_code == 422
    assert dict(container.day_log_store.logs) == {}


def test_delete_requires_confirmation(container) -> None:
    client = TestClient(create_app(container))
    added = client.post("/days/2024-05-10/foods", json=APPLE_BODY).json()
    entry_id = added["log"]["food"][0]["id"]

    refused = client.delete(f"/days/2024-05-10/foods/{entry_id}")
    confirmed = client.delete(f"/days/2024-05-10/foods/{entry_id}?confirm=true")

    assert refused.status_code == 409
    assert confirmed.status_code == 200
    assert confirmed.json()["log"]["food"] == []


def test_water_endpoints(container) -> None:
    client = TestClient(create_app(container))

    client.put("/days/2024-05-10/water", json={"amount": 200})
    data = client.post("/days/2024-05-10/water", json={"delta": -10000}).json()

    assert data["log"]["water"] == 0


def test_replace_goals_requires_positive_values(container) -> None:
    client = TestClient(create_app(container))
    goals = {"calories": 1800, "carbs": 225, "protein": 90, "fat": 60, "water": 2000}

    rejected = client.put("/goals", json={**goals, "fat": 0})
    accepted = client.put("/goals", json=goals)

    assert rejected.status_code == 422
    assert accepted.json() == goals
    assert client.get("/goals").json() == goals


def test_calculator_preview_does_not_change_goals(container) -> None:
    client = TestClient(create_app(container))
    stats = {
        "weight": 70,
        "height": 170,
        "age": 30,
        "gender": "female",
        "activity_level": "sedentary",
    }

    preview = client.post("/calculator", json=stats).json()
    applied = client.post("/calculator/apply", json=stats).json()

    assert preview["metrics"]["tdee"] == 1742
    assert preview["metrics"]["bmi_category"] == "normal weight"
    assert applied["goals"] == {
        "calories": 1742,
        "carbs": 218,
        "protein": 87,
        "fat": 58,
        "water": 2450,
    }
    assert client.get("/goals").json() == applied["goals"]


def test_calculator_rejects_zero_height(container) -> None:
    client = TestClient(create_app(container))
    stats = {
        "weight": 70,
        "height": 0,
        "age": 30,
        "gender": "female",
        "activity_level": "sedentary",
    }

    assert client.post("/calculator", json=stats).status_code == 422


def test_session_lookup_and_save(container) -> None:
    client = TestClient(create_app(container))

    staged = client.post("/session/lookup", json={"query": "maçã"}).json()
    client.patch("/session/staged", json={"weight": 200})
    saved = client.post("/session/staged/save").json()

    assert staged["staged"]["food"]["name"] == "Maçã"
    assert staged["staged"]["preview"]["calories"] == 68
    assert saved["staged"] is None
    assert saved["day"] == "2024-05-10"
    assert saved["log"]["food"][0]["calories"] == 104


def test_session_lookup_not_found(container, lookup_client) -> None:
    lookup_client.response = ""
    client = TestClient(create_app(container))

    response = client.post("/session/lookup", json={"query": "xyz"})

    assert response.status_code == 404


def test_session_lookup_rejects_blank_query(container, lookup_client) -> None:
    client = TestClient(create_app(container))

    response = client.post("/session/lookup", json={"query": "   "})

    assert response.status_code == 422
    assert lookup_client.prompts == []


def test_session_lookup_failure(container, lookup_client) -> None:
    lookup_client.error = ConnectionError("network down")
    client = TestClient(create_app(container))

    response = client.post("/session/lookup", json={"query": "maçã"})

    assert response.status_code == 502
    assert client.get("/session").json()["staged"] is None


def test_session_date_navigation(container) -> None:
    client = TestClient(create_app(container))
    client.post("/session/water", json={"delta": 500})

    moved = client.post("/session/date/shift", json={"days": 1}).json()
    back = client.put("/session/date", json={"day": "2024-05-10"}).json()

    assert moved["day"] == "2024-05-11"
    assert moved["log"]["water"] == 0
    assert back["log"]["water"] == 500


def test_session_edit_and_delete(container) -> None:
    client = TestClient(create_app(container))
    added = client.post("/days/2024-05-10/foods", json=APPLE_BODY).json()
    entry_id = added["log"]["food"][0]["id"]

    editing = client.post(f"/session/entries/{entry_id}/edit").json()
    cancelled = client.delete("/session/staged").json()
    refused = client.delete(f"/session/entries/{entry_id}")
    removed = client.delete(f"/session/entries/{entry_id}?confirm=true").json()

    assert editing["staged"]["food"]["id"] == entry_id
    assert cancelled["staged"] is None
    assert refused.status_code == 409
    assert removed["log"]["food"] == []


def test_session_date_shift_out_of_range(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/session/date/shift", json={"days": 10**7})

    assert response.status_code == 400
    assert client.get("/session").json()["day"] == "2024-05-10"
