"""
Tests for the HTTP endpoints
"""
import json

from habittrack.core.config import settings


def create(client, **fields):
    response = client.post("/habits", json={"name": "Read", **fields})
    assert response.status_code == 201
    return response.json()["data"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "message": "Server is alive"}


def test_add_and_list_habits(client):
    habit = create(client, theme="orange", pattern="waves")

    body = client.get("/habits").json()

    assert body["date"] == "2024-01-10"
    assert [h["id"] for h in body["habits"]] == [habit["id"]]
    listed = body["habits"][0]
    assert listed["color"] == "#f97316"
    assert listed["stats"]["daysTracked"] == 1
    assert len(listed["recentDays"]) == 7


def test_add_habit_validation(client):
    assert client.post("/habits", json={"name": "   "}).status_code == 422
    assert client.post("/habits", json={"name": "x", "frequency": "hourly"}).status_code == 422
    assert client.post("/habits", json={"name": "x", "theme": "teal"}).status_code == 422
    assert client.post("/habits", json={"name": "x", "pattern": "zigzag"}).status_code == 422


def test_update_habit(client):
    habit = create(client)

    response = client.patch(f"/habits/{habit['id']}", json={"name": "Read daily", "archived": True})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Read daily"
    assert data["archived"] is True
    assert data["createdAt"] == habit["createdAt"]


def test_update_and_delete_unknown_habit(client):
    assert client.patch("/habits/nope", json={"name": "x"}).status_code == 404
    assert client.delete("/habits/nope").status_code == 404
    assert client.get("/habits/nope").status_code == 404


def test_delete_habit_removes_check_ins(client, store):
    habit = create(client)
    client.post(f"/habits/{habit['id']}/checkins/2024-01-09/toggle")

    assert client.delete(f"/habits/{habit['id']}").status_code == 200
    assert store.snapshot() == {"habits": [], "checkIns": {}}


def test_reorder(client):
    first = create(client, name="one")
    second = create(client, name="two")

    response = client.put("/habits/order", json={"ids": [second["id"], first["id"]]})
    assert response.status_code == 200
    assert response.json()["ids"] == [second["id"], first["id"]]

    response = client.put("/habits/order", json={"ids": [second["id"]]})
    assert response.status_code == 409
    assert [h["name"] for h in client.get("/habits").json()["habits"]] == ["two", "one"]


def test_check_in_flow_and_stats(client):
    habit = create(client)
    base = f"/habits/{habit['id']}/checkins"

    toggled = client.post(f"{base}/2024-01-09/toggle").json()
    assert toggled["check_in"]["completed"] is True

    valued = client.put(f"{base}/2024-01-10/value", json={"value": 8}).json()
    assert valued["check_in"]["value"] == 8

    noted = client.put(f"{base}/2024-01-08/note", json={"note": "rest day"}).json()
    assert noted["check_in"] == {"completed": False, "value": 0, "note": "rest day",
                                 "timestamp": noted["check_in"]["timestamp"]}

    stats = client.get(f"/habits/{habit['id']}/stats").json()["stats"]
    assert stats["currentStreak"] == 2
    assert stats["totalCompletions"] == 2

    check_ins = client.get(base).json()["check_ins"]
    assert sorted(check_ins) == ["2024-01-08", "2024-01-09", "2024-01-10"]

    cleared = client.put(f"{base}/2024-01-08/note", json={"note": ""}).json()
    assert cleared["check_in"] is None


def test_negative_value_is_clamped(client):
    habit = create(client)
    response = client.put(f"/habits/{habit['id']}/checkins/2024-01-09/value", json={"value": -2})

    assert response.status_code == 200
    assert response.json()["check_in"] is None


def test_future_check_in_rejected(client, store):
    habit = create(client)

    response = client.post(f"/habits/{habit['id']}/checkins/2024-01-11/toggle")

    assert response.status_code == 400
    assert store.get_check_ins(habit["id"]) == {}


def test_check_in_unknown_habit_and_bad_date(client):
    assert client.post("/habits/nope/checkins/2024-01-09/toggle").status_code == 404
    habit = create(client)
    assert client.post(f"/habits/{habit['id']}/checkins/2024-02-30/toggle").status_code == 422


def test_note_length_limit(client):
    habit = create(client)
    url = f"/habits/{habit['id']}/checkins/2024-01-09/note"

    assert client.put(url, json={"note": "x" * 250}).status_code == 200
    assert client.put(url, json={"note": "x" * 251}).status_code == 422


def test_calendar_endpoint(client):
    habit = create(client)
    client.post(f"/habits/{habit['id']}/checkins/2024-01-09/toggle")

    body = client.get(f"/habits/{habit['id']}/calendar", params={"weeks": 2, "week_start": "monday"}).json()

    assert [w["weekStart"] for w in body["weeks"]] == ["2024-01-01", "2024-01-08"]
    tuesday = body["weeks"][1]["days"][1]
    assert tuesday["date"] == "2024-01-09"
    assert tuesday["completed"] is True
    assert client.get(f"/habits/{habit['id']}/calendar", params={"weeks": 0}).status_code == 422


def test_calendar_defaults_to_settings(client):
    habit = create(client)
    body = client.get(f"/habits/{habit['id']}/calendar").json()
    assert len(body["weeks"]) == settings.HEATMAP_WEEKS


def test_export_import_round_trip(client):
    habit = create(client)
    client.put(f"/habits/{habit['id']}/checkins/2024-01-09/value", json={"value": 3})

    response = client.get("/data/export")
    assert response.status_code == 200
    assert "habit-tracker-backup-2024-01-10.habittrack" in response.headers["content-disposition"]
    exported = response.json()
    assert exported["version"] == 1

    client.post("/data/reset")
    assert client.get("/habits").json()["habits"] == []

    imported = client.post("/data/import", content=json.dumps(exported))
    assert imported.status_code == 200

    again = client.get("/data/export").json()
    assert again["habits"] == exported["habits"]
    assert again["checkIns"] == exported["checkIns"]


def test_invalid_import_rejected(client):
    habit = create(client)

    response = client.post("/data/import", content=json.dumps({"habits": []}))

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid file format"
    assert [h["id"] for h in client.get("/habits").json()["habits"]] == [habit["id"]]


def test_backup_endpoint_writes_file(client, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "EXPORT_DIR", str(tmp_path))
    create(client)

    response = client.post("/data/backup")

    assert response.status_code == 201
    files = list(tmp_path.glob("*.habittrack"))
    assert len(files) == 1
    assert json.loads(files[0].read_text(encoding="utf-8"))["habits"][0]["name"] == "Read"
