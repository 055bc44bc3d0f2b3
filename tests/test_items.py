"""Item API tests."""

from datetime import date, timedelta

import pytest


@pytest.fixture
def refs(client, auth_headers):
    """Category and location ids by name for the registered user."""
    categories = client.get("/api/v1/categories", headers=auth_headers).json()
    locations = client.get("/api/v1/locations", headers=auth_headers).json()
    return {
        "categories": {c["name"]: c["id"] for c in categories},
        "locations": {loc["name"]: loc["id"] for loc in locations},
    }


@pytest.fixture
def create_item(client, auth_headers, refs):
    def _create(name="Canned beans", category="Food", location="Home", **fields):
        payload = {
            "name": name,
            "quantity": 10,
            "unit": "cans",
            "category_id": refs["categories"][category],
            "location_id": refs["locations"][location],
        }
        payload.update(fields)
        response = client.post("/api/v1/items", headers=auth_headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


def item_events(client, auth_headers, item_id):
    events = client.get("/api/v1/events", headers=auth_headers).json()
    return [e for e in events if e["item_id"] == item_id]


def test_create_item(client, auth_headers, create_item):
    item = create_item(description="Black beans", min_quantity=4)

    assert item["name"] == "Canned beans"
    assert item["category"]["name"] == "Food"
    assert item["location"]["name"] == "Home"
    assert item["min_quantity"] == 4
    assert item["target_quantity"] == 0


def test_create_item_creates_events(client, auth_headers, create_item):
    """Expiration and maintenance fields produce calendar events."""
    item = create_item(
        name="Generator",
        category="Fuel & Energy",
        expiration_date="2026-06-01",
        maintenance_interval=90,
        last_maintenance_date="2026-01-01",
    )

    events = item_events(client, auth_headers, item["id"])

    assert {(e["type"], e["title"], e["date"]) for e in events} == {
        ("expiration", "Generator expires", "2026-06-01"),
        ("maintenance", "Generator maintenance", "2026-04-01"),
    }


def test_create_item_with_invalid_category(client, auth_headers, refs):
    response = client.post(
        "/api/v1/items",
        headers=auth_headers,
        json={
            "name": "Rope",
            "quantity": 1,
            "unit": "coil",
            "category_id": 999999,
            "location_id": refs["locations"]["Home"],
        },
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid category"


def test_interval_upper_bound(client, auth_headers, refs, create_item):
    """Intervals up to 100 years are accepted; longer ones are rejected."""
    item = create_item(
        name="Water heater",
        category="Tools",
        maintenance_interval=36500,
        last_maintenance_date="2024-01-01",
    )
    events = item_events(client, auth_headers, item["id"])
    assert [e["date"] for e in events] == [(date(2024, 1, 1) + timedelta(days=36500)).isoformat()]

    for field in ("maintenance_interval", "rotation_schedule"):
        response = client.post(
            "/api/v1/items",
            headers=auth_headers,
            json={
                "name": "Barrel",
                "quantity": 1,
                "unit": "each",
                "category_id": refs["categories"]["Water"],
                "location_id": refs["locations"]["Home"],
                field: 5_000_000,
                "last_maintenance_date": "2024-01-01",
                "last_rotation_date": "2024-01-01",
            },
        )
        assert response.status_code == 422

        response = client.put(
            f"/api/v1/items/{item['id']}", headers=auth_headers, json={field: 36501}
        )
        assert response.status_code == 422


def test_due_date_past_calendar_end_has_no_event(client, auth_headers, create_item):
    item = create_item(
        name="Heirloom knife",
        category="Tools",
        maintenance_interval=90,
        last_maintenance_date="9999-12-01",
        expiration_date="2030-01-01",
    )

    assert [e["type"] for e in item_events(client, auth_headers, item["id"])] == ["expiration"]


def test_update_item_moves_event(client, auth_headers, create_item):
    item = create_item(expiration_date="2026-06-01")
    event_id = item_events(client, auth_headers, item["id"])[0]["id"]

    response = client.put(
        f"/api/v1/items/{item['id']}",
        headers=auth_headers,
        json={"expiration_date": "2026-09-01", "name": "Pinto beans"},
    )
    assert response.status_code == 200

    events = item_events(client, auth_headers, item["id"])
    assert len(events) == 1
    assert events[0]["id"] == event_id
    assert events[0]["date"] == "2026-09-01"
    assert events[0]["title"] == "Pinto beans expires"


def test_update_item_clearing_date_removes_event(client, auth_headers, create_item):
    item = create_item(expiration_date="2026-06-01", min_quantity=5)

    response = client.put(
        f"/api/v1/items/{item['id']}",
        headers=auth_headers,
        json={"expiration_date": None, "min_quantity": None, "name": None},
    )

    assert response.status_code == 200
    assert response.json()["expiration_date"] is None
    assert response.json()["min_quantity"] == 0
    assert response.json()["name"] == "Canned beans"
    assert item_events(client, auth_headers, item["id"]) == []


def test_list_items_sorted_and_searchable(client, auth_headers, create_item):
    create_item(name="Rice", description="Long grain")
    create_item(name="Beans")
    create_item(name="Oats", description="Rolled, long shelf life")

    names = [i["name"] for i in client.get("/api/v1/items", headers=auth_headers).json()]
    assert names == ["Beans", "Oats", "Rice"]

    response = client.get("/api/v1/items", headers=auth_headers, params={"search": "LONG"})
    assert [i["name"] for i in response.json()] == ["Oats", "Rice"]


def test_list_items_filtered_by_category(client, auth_headers, refs, create_item):
    create_item(name="Beans")
    create_item(name="Flashlight", category="Tools", unit="units")

    response = client.get(
        "/api/v1/items", headers=auth_headers, params={"category_id": refs["categories"]["Tools"]}
    )
    assert [i["name"] for i in response.json()] == ["Flashlight"]


def test_low_inventory_filter(client, auth_headers, create_item):
    """Items without a minimum use the default threshold of 10."""
    create_item(name="Default low", quantity=5)
    create_item(name="Default ok", quantity=50)
    create_item(name="Explicit ok", quantity=3, min_quantity=2)
    create_item(name="Explicit low", quantity=2, min_quantity=2)

    response = client.get("/api/v1/items", headers=auth_headers, params={"low_inventory": True})
    assert [i["name"] for i in response.json()] == ["Default low", "Explicit low"]


def test_expiring_soon_filter(client, auth_headers, create_item):
    today = date.today()
    create_item(name="Soon", expiration_date=(today + timedelta(days=10)).isoformat())
    create_item(name="Later", expiration_date=(today + timedelta(days=90)).isoformat())
    create_item(name="Expired", expiration_date=(today - timedelta(days=1)).isoformat())

    response = client.get("/api/v1/items", headers=auth_headers, params={"expiring_soon": True})
    assert [i["name"] for i in response.json()] == ["Soon"]


def test_needs_maintenance_filter(client, auth_headers, create_item):
    today = date.today()
    create_item(
        name="Overdue",
        category="Tools",
        maintenance_interval=30,
        last_maintenance_date=(today - timedelta(days=40)).isoformat(),
    )
    create_item(
        name="Fine",
        category="Tools",
        maintenance_interval=30,
        last_maintenance_date=today.isoformat(),
    )

    response = client.get("/api/v1/items", headers=auth_headers, params={"needs_maintenance": True})
    assert [i["name"] for i in response.json()] == ["Overdue"]


def test_consume_and_add(client, auth_headers, create_item):
    item = create_item(quantity=10)

    response = client.post(
        f"/api/v1/items/{item['id']}/consume", headers=auth_headers, json={"quantity": 3}
    )
    assert response.status_code == 200
    assert response.json()["quantity"] == 7

    response = client.post(
        f"/api/v1/items/{item['id']}/add",
        headers=auth_headers,
        json={"quantity": 5, "note": "Costco run"},
    )
    assert response.status_code == 200
    assert response.json()["quantity"] == 12

    recent = client.get("/api/v1/items/activity/recent", headers=auth_headers).json()
    assert {(r["type"], r["quantity"]) for r in recent} == {("consumption", 3), ("addition", 5)}


def test_consume_more_than_available(client, auth_headers, create_item):
    item = create_item(quantity=2)

    response = client.post(
        f"/api/v1/items/{item['id']}/consume", headers=auth_headers, json={"quantity": 5}
    )

    assert response.status_code == 400
    assert "only 2 available" in response.json()["detail"]
    assert client.get(f"/api/v1/items/{item['id']}", headers=auth_headers).json()["quantity"] == 2


def test_batch_activity_is_all_or_nothing(client, auth_headers, create_item):
    beans = create_item(name="Beans", quantity=10)
    rice = create_item(name="Rice", quantity=1)

    response = client.post(
        "/api/v1/items/activity",
        headers=auth_headers,
        json={
            "entries": [
                {"item_id": beans["id"], "quantity": 4},
                {"item_id": rice["id"], "quantity": 5},
            ]
        },
    )

    assert response.status_code == 400
    assert client.get(f"/api/v1/items/{beans['id']}", headers=auth_headers).json()["quantity"] == 10


def test_batch_activity(client, auth_headers, create_item):
    beans = create_item(name="Beans", quantity=10)
    rice = create_item(name="Rice", quantity=1)

    response = client.post(
        "/api/v1/items/activity",
        headers=auth_headers,
        json={
            "entries": [
                {"item_id": beans["id"], "quantity": 4},
                {"item_id": rice["id"], "quantity": 9, "type": "addition"},
            ]
        },
    )

    assert response.status_code == 200
    assert len(response.json()) == 2
    assert client.get(f"/api/v1/items/{rice['id']}", headers=auth_headers).json()["quantity"] == 10

    stats = client.get("/api/v1/items/activity/stats", headers=auth_headers).json()
    totals = {t["item_name"]: (t["consumed"], t["added"]) for t in stats["by_item"]}
    assert totals == {"Beans": (4, 0), "Rice": (0, 9)}


def test_batch_activity_rejects_unknown_item(client, auth_headers):
    response = client.post(
        "/api/v1/items/activity",
        headers=auth_headers,
        json={"entries": [{"item_id": 999999, "quantity": 1}]},
    )
    assert response.status_code == 400


def test_maintenance_done_moves_pending_event(client, auth_headers, create_item):
    item = create_item(
        name="Water filter",
        category="Tools",
        maintenance_interval=90,
        last_maintenance_date="2026-01-01",
    )
    event_id = item_events(client, auth_headers, item["id"])[0]["id"]

    response = client.post(
        f"/api/v1/items/{item['id']}/maintenance-done",
        headers=auth_headers,
        params={"performed_on": "2026-03-01"},
    )

    assert response.status_code == 200
    assert response.json()["last_maintenance_date"] == "2026-03-01"
    events = item_events(client, auth_headers, item["id"])
    assert [(e["id"], e["date"], e["completed"]) for e in events] == [(event_id, "2026-05-30", False)]


def test_rotation_done_defaults_to_today(client, auth_headers, create_item):
    item = create_item(name="Water bottles", category="Water", rotation_schedule=180, last_rotation_date="2026-01-01")

    response = client.post(f"/api/v1/items/{item['id']}/rotation-done", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["last_rotation_date"] == date.today().isoformat()
    events = item_events(client, auth_headers, item["id"])
    assert events[0]["date"] == (date.today() + timedelta(days=180)).isoformat()


def test_delete_item_removes_events(client, auth_headers, create_item):
    item = create_item(expiration_date="2026-06-01")
    client.post(f"/api/v1/items/{item['id']}/consume", headers=auth_headers, json={"quantity": 1})

    response = client.delete(f"/api/v1/items/{item['id']}", headers=auth_headers)

    assert response.status_code == 204
    assert client.get(f"/api/v1/items/{item['id']}", headers=auth_headers).status_code == 404
    assert client.get("/api/v1/events", headers=auth_headers).json() == []
    assert client.get("/api/v1/items/activity/recent", headers=auth_headers).json() == []


def test_items_are_scoped_to_user(client, auth_headers, create_item):
    item = create_item()
    other = client.post(
        "/api/v1/auth/register",
        json={"email": "other@example.com", "password": "password123", "name": "Other"},
    ).json()
    other_headers = {"Authorization": f"Bearer {other['access_token']}"}

    assert client.get(f"/api/v1/items/{item['id']}", headers=other_headers).status_code == 404
    assert client.get("/api/v1/items", headers=other_headers).json() == []
