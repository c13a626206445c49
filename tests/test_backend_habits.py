import sqlite3

from tests.support import ALICE, BOB, auth_headers


def _create_habit(client, name="Read", priority=0, month=3, year=2024, email=ALICE):
    response = client.post(
        "/v1/habits",
        json={"name": name, "priority": priority, "month": month, "year": year},
        headers=auth_headers(email),
    )
    assert response.status_code == 200, response.text
    return response.json()


def _put_log(client, habit_id, day, status, email=ALICE):
    return client.put(
        "/v1/habit-logs",
        json={"habit_id": habit_id, "date": day, "status": status},
        headers=auth_headers(email),
    )


class TestAuth:
    def test_health_is_public(self, backend_client):
        assert backend_client.get("/health").json() == {"ok": True}

    def test_missing_token_is_rejected(self, backend_client):
        response = backend_client.get("/v1/todos", headers={"X-User-Email": ALICE})
        assert response.status_code == 401

    def test_wrong_token_is_rejected(self, backend_client):
        response = backend_client.get("/v1/todos", headers=auth_headers(token="nope"))
        assert response.status_code == 401

    def test_missing_email_is_rejected(self, backend_client):
        response = backend_client.get("/v1/todos", headers=auth_headers(email=""))
        assert response.status_code == 401

    def test_bootstrap(self, backend_client):
        payload = backend_client.get("/v1/bootstrap", headers=auth_headers()).json()
        assert payload["user_email"] == ALICE
        assert payload["user_name"] == "Alice"
        assert payload["quick_indicators"]["open_todos"] == 0


class TestHabits:
    def test_list_is_scoped_to_month(self, backend_client):
        _create_habit(backend_client, "March habit", month=3)
        _create_habit(backend_client, "April habit", month=4)
        items = backend_client.get(
            "/v1/habits", params={"month": 3, "year": 2024}, headers=auth_headers()
        ).json()["items"]
        assert [item["name"] for item in items] == ["March habit"]

    def test_ordered_by_priority_then_creation(self, backend_client):
        _create_habit(backend_client, "Low first", priority=0)
        _create_habit(backend_client, "High", priority=2)
        _create_habit(backend_client, "Low second", priority=0)
        items = backend_client.get(
            "/v1/habits", params={"month": 3, "year": 2024}, headers=auth_headers()
        ).json()["items"]
        assert [item["name"] for item in items] == ["High", "Low first", "Low second"]

    def test_empty_name_is_rejected(self, backend_client):
        response = backend_client.post(
            "/v1/habits",
            json={"name": "   ", "priority": 0, "month": 3, "year": 2024},
            headers=auth_headers(),
        )
        assert response.status_code == 400

    def test_invalid_month_is_rejected(self, backend_client):
        response = backend_client.post(
            "/v1/habits",
            json={"name": "Read", "priority": 0, "month": 13, "year": 2024},
            headers=auth_headers(),
        )
        assert response.status_code == 422

    def test_update(self, backend_client):
        habit = _create_habit(backend_client)
        response = backend_client.patch(
            f"/v1/habits/{habit['id']}", json={"name": "Read more", "priority": 2}, headers=auth_headers()
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Read more"
        assert response.json()["priority"] == 2

    def test_duplicate_name_in_same_month_is_rejected(self, backend_client):
        _create_habit(backend_client, "Read")
        response = backend_client.post(
            "/v1/habits",
            json={"name": "Read", "priority": 1, "month": 3, "year": 2024},
            headers=auth_headers(),
        )
        assert response.status_code == 400
        items = backend_client.get(
            "/v1/habits", params={"month": 3, "year": 2024}, headers=auth_headers()
        ).json()["items"]
        assert len(items) == 1

    def test_same_name_allowed_in_other_month_or_for_other_user(self, backend_client):
        _create_habit(backend_client, "Read", month=3)
        _create_habit(backend_client, "Read", month=4)
        _create_habit(backend_client, "Read", month=3, email=BOB)

    def test_rename_onto_existing_name_is_rejected(self, backend_client):
        _create_habit(backend_client, "Read")
        walk = _create_habit(backend_client, "Walk")
        response = backend_client.patch(
            f"/v1/habits/{walk['id']}", json={"name": "Read"}, headers=auth_headers()
        )
        assert response.status_code == 400
        same = backend_client.patch(
            f"/v1/habits/{walk['id']}", json={"name": "Walk", "priority": 2}, headers=auth_headers()
        )
        assert same.status_code == 200

    def test_update_of_another_users_habit_is_not_found(self, backend_client):
        habit = _create_habit(backend_client)
        response = backend_client.patch(
            f"/v1/habits/{habit['id']}", json={"name": "Hijack"}, headers=auth_headers(BOB)
        )
        assert response.status_code == 404

    def test_users_are_isolated(self, backend_client):
        _create_habit(backend_client, "Alice habit")
        items = backend_client.get(
            "/v1/habits", params={"month": 3, "year": 2024}, headers=auth_headers(BOB)
        ).json()["items"]
        assert items == []


class TestHabitLogs:
    def test_upsert_is_idempotent(self, backend_client, db_path):
        habit = _create_habit(backend_client)
        first = _put_log(backend_client, habit["id"], "2024-03-01", "done")
        second = _put_log(backend_client, habit["id"], "2024-03-01", "done")
        assert first.status_code == 200 and second.status_code == 200
        assert first.json()["id"] == second.json()["id"]
        with sqlite3.connect(db_path) as conn:
            count = conn.execute("SELECT COUNT(*) FROM habit_logs").fetchone()[0]
        assert count == 1

    def test_upsert_updates_status(self, backend_client):
        habit = _create_habit(backend_client)
        _put_log(backend_client, habit["id"], "2024-03-01", "done")
        _put_log(backend_client, habit["id"], "2024-03-01", "skip")
        items = backend_client.get(
            "/v1/habit-logs", params={"habit_id": [habit["id"]]}, headers=auth_headers()
        ).json()["items"]
        assert len(items) == 1
        assert items[0]["status"] == "skip"
        assert items[0]["date"] == "2024-03-01"

    def test_list_several_habits(self, backend_client):
        first = _create_habit(backend_client, "A")
        second = _create_habit(backend_client, "B")
        _put_log(backend_client, first["id"], "2024-03-01", "done")
        _put_log(backend_client, second["id"], "2024-03-02", "skip")
        items = backend_client.get(
            "/v1/habit-logs", params={"habit_id": [first["id"], second["id"]]}, headers=auth_headers()
        ).json()["items"]
        assert {(item["habit_id"], item["status"]) for item in items} == {
            (first["id"], "done"),
            (second["id"], "skip"),
        }

    def test_no_ids_returns_nothing(self, backend_client):
        assert backend_client.get("/v1/habit-logs", headers=auth_headers()).json()["items"] == []

    def test_invalid_status_is_rejected(self, backend_client):
        habit = _create_habit(backend_client)
        assert _put_log(backend_client, habit["id"], "2024-03-01", "maybe").status_code == 422

    def test_unknown_habit_is_not_found(self, backend_client):
        assert _put_log(backend_client, "missing", "2024-03-01", "done").status_code == 404

    def test_other_user_cannot_write_or_read_logs(self, backend_client):
        habit = _create_habit(backend_client)
        _put_log(backend_client, habit["id"], "2024-03-01", "done")
        assert _put_log(backend_client, habit["id"], "2024-03-02", "done", email=BOB).status_code == 404
        items = backend_client.get(
            "/v1/habit-logs", params={"habit_id": [habit["id"]]}, headers=auth_headers(BOB)
        ).json()["items"]
        assert items == []

    def test_delete_habit_removes_its_logs(self, backend_client, db_path):
        habit = _create_habit(backend_client)
        other = _create_habit(backend_client, "Other")
        _put_log(backend_client, habit["id"], "2024-03-01", "done")
        _put_log(backend_client, habit["id"], "2024-03-02", "skip")
        _put_log(backend_client, other["id"], "2024-03-01", "done")
        assert backend_client.delete(f"/v1/habits/{habit['id']}", headers=auth_headers()).status_code == 200
        with sqlite3.connect(db_path) as conn:
            remaining = conn.execute("SELECT habit_id FROM habit_logs").fetchall()
        assert remaining == [(other["id"],)]

    def test_delete_by_other_user_keeps_habit(self, backend_client):
        habit = _create_habit(backend_client)
        backend_client.delete(f"/v1/habits/{habit['id']}", headers=auth_headers(BOB))
        items = backend_client.get(
            "/v1/habits", params={"month": 3, "year": 2024}, headers=auth_headers()
        ).json()["items"]
        assert [item["id"] for item in items] == [habit["id"]]
