from tests.support import ALICE, BOB, auth_headers


class TestSleepLogs:
    def test_duration_is_derived_by_the_store(self, backend_client):
        response = backend_client.put(
            "/v1/sleep-logs",
            json={"date": "2024-03-01", "sleep_time": "22:00", "wake_time": "06:00", "quality": 4},
            headers=auth_headers(),
        )
        assert response.status_code == 200, response.text
        payload = response.json()
        assert payload["duration"] == 480
        assert payload["sleep_time"] == "22:00"
        assert payload["wake_time"] == "06:00"

    def test_equal_times_store_zero(self, backend_client):
        payload = backend_client.put(
            "/v1/sleep-logs",
            json={"date": "2024-03-02", "sleep_time": "23:30", "wake_time": "23:30"},
            headers=auth_headers(),
        ).json()
        assert payload["duration"] == 0

    def test_one_log_per_day(self, backend_client):
        for wake in ("06:00", "07:00"):
            backend_client.put(
                "/v1/sleep-logs",
                json={"date": "2024-03-01", "sleep_time": "23:00", "wake_time": wake, "quality": 3},
                headers=auth_headers(),
            )
        items = backend_client.get(
            "/v1/sleep-logs", params={"start": "2024-02-01", "end": "2024-03-31"}, headers=auth_headers()
        ).json()["items"]
        assert len(items) == 1
        assert items[0]["duration"] == 480

    def test_listing_is_newest_first_and_ranged(self, backend_client):
        for day in ("2024-03-01", "2024-03-03", "2024-04-01"):
            backend_client.put(
                "/v1/sleep-logs",
                json={"date": day, "sleep_time": "23:00", "wake_time": "07:00"},
                headers=auth_headers(),
            )
        items = backend_client.get(
            "/v1/sleep-logs", params={"start": "2024-03-01", "end": "2024-03-31"}, headers=auth_headers()
        ).json()["items"]
        assert [item["date"] for item in items] == ["2024-03-03", "2024-03-01"]

    def test_quality_out_of_range(self, backend_client):
        response = backend_client.put(
            "/v1/sleep-logs",
            json={"date": "2024-03-01", "sleep_time": "23:00", "wake_time": "07:00", "quality": 6},
            headers=auth_headers(),
        )
        assert response.status_code == 422


class TestTodos:
    def test_crud(self, backend_client):
        first = backend_client.post("/v1/todos", json={"title": "Buy milk"}, headers=auth_headers()).json()
        second = backend_client.post("/v1/todos", json={"title": "Call mom"}, headers=auth_headers()).json()
        assert first["completed"] is False
        assert (first["position"], second["position"]) == (0, 1)

        updated = backend_client.patch(
            f"/v1/todos/{first['id']}", json={"completed": True}, headers=auth_headers()
        ).json()
        assert updated["completed"] is True

        backend_client.delete(f"/v1/todos/{second['id']}", headers=auth_headers())
        items = backend_client.get("/v1/todos", headers=auth_headers()).json()["items"]
        assert [item["title"] for item in items] == ["Buy milk"]

    def test_positions_stay_distinct_after_delete(self, backend_client):
        created = [
            backend_client.post("/v1/todos", json={"title": title}, headers=auth_headers()).json()
            for title in ("a", "b", "c")
        ]
        backend_client.delete(f"/v1/todos/{created[0]['id']}", headers=auth_headers())
        backend_client.post("/v1/todos", json={"title": "d"}, headers=auth_headers())
        items = backend_client.get("/v1/todos", headers=auth_headers()).json()["items"]
        assert [(item["title"], item["position"]) for item in items] == [("b", 1), ("c", 2), ("d", 3)]

    def test_empty_title(self, backend_client):
        response = backend_client.post("/v1/todos", json={"title": " "}, headers=auth_headers())
        assert response.status_code == 400

    def test_other_user_sees_nothing(self, backend_client):
        todo = backend_client.post("/v1/todos", json={"title": "Private"}, headers=auth_headers()).json()
        assert backend_client.get("/v1/todos", headers=auth_headers(BOB)).json()["items"] == []
        response = backend_client.patch(
            f"/v1/todos/{todo['id']}", json={"completed": True}, headers=auth_headers(BOB)
        )
        assert response.status_code == 404


class TestGoals:
    def test_completion_sets_progress(self, backend_client):
        goal = backend_client.post(
            "/v1/goals", json={"title": "Run 10k", "target_date": "2024-12-31"}, headers=auth_headers()
        ).json()
        assert goal["progress"] == 0
        assert goal["target_date"] == "2024-12-31"

        done = backend_client.patch(
            f"/v1/goals/{goal['id']}", json={"completed": True}, headers=auth_headers()
        ).json()
        assert done["completed"] is True
        assert done["progress"] == 100

        reopened = backend_client.patch(
            f"/v1/goals/{goal['id']}", json={"completed": False}, headers=auth_headers()
        ).json()
        assert reopened["progress"] == 0

    def test_progress_bounds(self, backend_client):
        goal = backend_client.post("/v1/goals", json={"title": "Read"}, headers=auth_headers()).json()
        response = backend_client.patch(
            f"/v1/goals/{goal['id']}", json={"progress": 150}, headers=auth_headers()
        )
        assert response.status_code == 422

    def test_bootstrap_counts_active_goals(self, backend_client):
        backend_client.post("/v1/goals", json={"title": "One"}, headers=auth_headers())
        indicators = backend_client.get("/v1/bootstrap", headers=auth_headers()).json()["quick_indicators"]
        assert indicators["active_goals"] == 1


class TestShortcuts:
    def test_create_and_list(self, backend_client):
        backend_client.post(
            "/v1/shortcuts",
            json={"title": "Docs", "url": "docs.python.org", "category": "Work"},
            headers=auth_headers(),
        )
        items = backend_client.get("/v1/shortcuts", headers=auth_headers()).json()["items"]
        assert items[0]["url"] == "docs.python.org"
        assert items[0]["category"] == "Work"

    def test_missing_url(self, backend_client):
        response = backend_client.post(
            "/v1/shortcuts", json={"title": "Docs", "url": ""}, headers=auth_headers()
        )
        assert response.status_code == 400


class TestFocusSessions:
    def test_create_and_list_range(self, backend_client):
        for day in ("2024-03-01", "2024-03-05"):
            response = backend_client.post(
                "/v1/focus-sessions",
                json={"duration": 1500, "session_type": "pomodoro", "date": day},
                headers=auth_headers(),
            )
            assert response.status_code == 200
        items = backend_client.get(
            "/v1/focus-sessions", params={"start": "2024-03-01", "end": "2024-03-02"}, headers=auth_headers()
        ).json()["items"]
        assert len(items) == 1
        assert items[0]["session_type"] == "pomodoro"

    def test_unknown_session_type(self, backend_client):
        response = backend_client.post(
            "/v1/focus-sessions",
            json={"duration": 100, "session_type": "lap", "date": "2024-03-01"},
            headers=auth_headers(),
        )
        assert response.status_code == 422


class TestWaterAndNotes:
    def test_water_counter(self, backend_client):
        assert backend_client.get("/v1/water/2024-03-01", headers=auth_headers()).json()["count"] == 0
        backend_client.put("/v1/water/2024-03-01", json={"count": 3}, headers=auth_headers())
        backend_client.put("/v1/water/2024-03-01", json={"count": 4}, headers=auth_headers())
        assert backend_client.get("/v1/water/2024-03-01", headers=auth_headers()).json()["count"] == 4
        assert backend_client.get("/v1/water/2024-03-01", headers=auth_headers(BOB)).json()["count"] == 0

    def test_negative_water_count(self, backend_client):
        response = backend_client.put("/v1/water/2024-03-01", json={"count": -1}, headers=auth_headers())
        assert response.status_code == 422

    def test_daily_note_upsert(self, backend_client):
        assert backend_client.get("/v1/notes/2024-03-01", headers=auth_headers()).json()["note"] is None
        backend_client.put(
            "/v1/notes/2024-03-01", json={"content": "First", "college_status": "C"}, headers=auth_headers()
        )
        note = backend_client.put(
            "/v1/notes/2024-03-01", json={"content": "Second", "college_status": "H"}, headers=auth_headers()
        ).json()["note"]
        assert note["content"] == "Second"
        assert note["college_status"] == "H"
        assert note["user_email"] == ALICE

    def test_invalid_date(self, backend_client):
        response = backend_client.get("/v1/notes/not-a-date", headers=auth_headers())
        assert response.status_code == 422
