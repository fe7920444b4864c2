"""
Test Suite: /foods HTTP surface
-------------------------------

Covers:
    POST   /foods        → 200, generated id/createdAt, updatedAt null
    GET    /foods        → 200, array of every stored record
    GET    /foods/{id}   → 200 record | 404 plain text
    PUT    /foods/{id}   → 200 merged record | 400 plain text
    DELETE /foods/{id}   → 200 removed record | 400 plain text
    Storage failure      → 503 plain text
"""

from fastapi.testclient import TestClient

from food_api.app.core.stable_map import StableMap
from food_api.app.main import create_app
from food_api.app.schemas.food import Food

RICE = {"name": "Rice", "type": "grain", "price": "2"}


def test_create_returns_generated_fields(client):
    resp = client.post("/foods", json=RICE)

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"]
    assert body["createdAt"]
    assert body.get("updatedAt") is None
    assert {k: body[k] for k in RICE} == RICE


def test_create_requires_attributes(client):
    resp = client.post("/foods", json={"name": "Rice"})

    assert resp.status_code == 422
    assert client.get("/foods").json() == []


def test_create_then_read_returns_same_record(client):
    created = client.post("/foods", json={**RICE, "origin": "Thailand"}).json()

    resp = client.get(f"/foods/{created['id']}")

    assert resp.status_code == 200
    assert resp.json() == created
    assert resp.json()["origin"] == "Thailand"


def test_read_missing_id_is_404_plain_text(client):
    resp = client.get("/foods/missing")

    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "the food with id=missing not found"


def test_list_returns_all_records(client):
    ids = {client.post("/foods", json=RICE).json()["id"] for _ in range(3)}
    client.delete(f"/foods/{sorted(ids)[0]}")

    resp = client.get("/foods")

    assert resp.status_code == 200
    assert {food["id"] for food in resp.json()} == ids - {sorted(ids)[0]}


def test_update_missing_id_is_400_and_creates_nothing(client):
    resp = client.put("/foods/missing", json={"price": "3"})

    assert resp.status_code == 400
    assert resp.text == "couldn't update a food with id=missing. food not found"
    assert client.get("/foods").json() == []


def test_update_cannot_override_system_fields(client):
    created = client.post("/foods", json=RICE).json()

    resp = client.put(
        f"/foods/{created['id']}",
        json={"id": "hijack", "createdAt": "1999-01-01T00:00:00Z", "type": "cereal"},
    )

    body = resp.json()
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
    assert body["type"] == "cereal"
    assert client.get("/foods/hijack").status_code == 404


def test_delete_missing_id_is_400(client):
    created = client.post("/foods", json=RICE).json()

    resp = client.delete("/foods/missing")

    assert resp.status_code == 400
    assert resp.text == "couldn't delete a food with id=missing. food not found"
    assert client.get("/foods").json() == [created]


def test_update_null_clears_extra_field(client):
    created = client.post("/foods", json={**RICE, "origin": "Thailand"}).json()

    resp = client.put(f"/foods/{created['id']}", json={"origin": None})

    assert resp.status_code == 200
    assert resp.json()["origin"] is None
    assert resp.json()["price"] == "2"
    assert client.get(f"/foods/{created['id']}").json()["origin"] is None


def test_rice_lifecycle(client):
    created = client.post("/foods", json=RICE).json()
    food_id = created["id"]

    updated = client.put(f"/foods/{food_id}", json={"price": "3"})
    assert updated.status_code == 200
    updated = updated.json()
    assert updated["id"] == food_id
    assert updated["createdAt"] == created["createdAt"]
    assert updated["price"] == "3"
    assert updated["name"] == "Rice"
    assert updated["updatedAt"] is not None
    assert Food.model_validate(updated).updated_at >= Food.model_validate(updated).created_at

    deleted = client.delete(f"/foods/{food_id}")
    assert deleted.status_code == 200
    assert deleted.json() == updated

    assert client.get(f"/foods/{food_id}").status_code == 404


def test_records_survive_app_restart(tmp_path):
    db_file = str(tmp_path / "restart.db")
    with TestClient(create_app(database_path=db_file)) as first:
        created = first.post("/foods", json=RICE).json()

    with TestClient(create_app(database_path=db_file)) as second:
        resp = second.get(f"/foods/{created['id']}")

    assert resp.status_code == 200
    assert resp.json() == created


def test_storage_failure_is_503(tmp_path):
    app = create_app(database_path=str(tmp_path / "ok.db"))
    with TestClient(app) as c:
        app.state.food_service.storage = StableMap(str(tmp_path / "no-schema.db"), Food)

        resp = c.get("/foods")

    assert resp.status_code == 503
    assert resp.text == "storage unavailable"
