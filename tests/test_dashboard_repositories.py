from datetime import date, time
from unittest.mock import MagicMock, patch

import pytest

from habitboard.data import repositories
from habitboard.grid import Status, StatusRecord
from habitboard.timers import FinishedSession


class TestValidationHappensBeforeStoreCalls:
    @pytest.mark.parametrize(
        "call",
        [
            lambda ctx: repositories.create_habit(ctx, "   ", 0, 3, 2024),
            lambda ctx: repositories.create_habit(ctx, "Read", 5, 3, 2024),
            lambda ctx: repositories.create_habit(ctx, "Read", 0, 13, 2024),
            lambda ctx: repositories.update_habit(ctx, "h1", name=" "),
            lambda ctx: repositories.update_habit(ctx, "h1"),
            lambda ctx: repositories.add_todo(ctx, ""),
            lambda ctx: repositories.add_goal(ctx, "  "),
            lambda ctx: repositories.update_goal(ctx, "g1", " "),
            lambda ctx: repositories.set_goal_progress(ctx, "g1", 101),
            lambda ctx: repositories.add_shortcut(ctx, "Docs", ""),
            lambda ctx: repositories.add_shortcut(ctx, "", "example.com"),
            lambda ctx: repositories.upsert_sleep_log(ctx, date(2024, 3, 1), "23:00", "07:00", quality=6),
            lambda ctx: repositories.upsert_sleep_log(ctx, date(2024, 3, 1), "", "07:00"),
            lambda ctx: repositories.set_water_count(ctx, date(2024, 3, 1), -1),
            lambda ctx: repositories.save_daily_note(ctx, date(2024, 3, 1), "x", "Z"),
        ],
    )
    def test_invalid_input(self, session_ctx, mock_request, call):
        with pytest.raises(ValueError):
            call(session_ctx)
        mock_request.assert_not_called()


class TestHabitCalls:
    def test_create_habit_payload(self, session_ctx, mock_request):
        mock_request.return_value = {"id": "h1"}
        repositories.create_habit(session_ctx, "  Read   books ", 2, 3, 2024)
        mock_request.assert_called_once_with(
            session_ctx,
            "POST",
            "/v1/habits",
            json={"name": "Read books", "priority": 2, "month": 3, "year": 2024},
        )

    def test_status_records_are_typed(self, session_ctx, mock_request):
        mock_request.return_value = {
            "items": [{"id": "l1", "habit_id": "h1", "date": "2024-03-01", "status": "done"}]
        }
        records = repositories.get_status_records(session_ctx, ["h1"])
        assert records == [StatusRecord("h1", "2024-03-01", Status.DONE)]
        assert mock_request.call_args.kwargs["params"] == {"habit_id": ["h1"]}

    def test_no_habits_no_request(self, session_ctx, mock_request):
        assert repositories.get_status_records(session_ctx, []) == []
        mock_request.assert_not_called()

    def test_upsert_status_record(self, session_ctx, mock_request):
        mock_request.return_value = {"habit_id": "h1", "date": "2024-03-01", "status": "skip"}
        record = repositories.upsert_status_record(session_ctx, "h1", date(2024, 3, 1), Status.SKIP)
        assert record == StatusRecord("h1", "2024-03-01", Status.SKIP)
        assert mock_request.call_args.kwargs["json"] == {"habit_id": "h1", "date": "2024-03-01", "status": "skip"}


class TestRecordCalls:
    def test_short_focus_sessions_are_dropped(self, session_ctx, mock_request):
        assert repositories.save_focus_session(session_ctx, FinishedSession(59, "stopwatch"), date(2024, 3, 1)) is None
        assert repositories.save_focus_session(session_ctx, None, date(2024, 3, 1)) is None
        mock_request.assert_not_called()

    def test_focus_session_payload(self, session_ctx, mock_request):
        repositories.save_focus_session(session_ctx, FinishedSession(1500, "pomodoro"), date(2024, 3, 1))
        assert mock_request.call_args.kwargs["json"] == {
            "duration": 1500,
            "session_type": "pomodoro",
            "date": "2024-03-01",
        }

    def test_sleep_log_times_are_clock_strings(self, session_ctx, mock_request):
        repositories.upsert_sleep_log(session_ctx, date(2024, 3, 1), time(22, 0), time(6, 0), quality=4)
        body = mock_request.call_args.kwargs["json"]
        assert body["sleep_time"] == "22:00"
        assert body["wake_time"] == "06:00"
        assert "duration" not in body

    def test_toggle_goal_sets_progress(self, session_ctx, mock_request):
        repositories.toggle_goal_completed(session_ctx, {"id": "g1", "completed": False})
        assert mock_request.call_args.kwargs["json"] == {"completed": True, "progress": 100}
        repositories.toggle_goal_completed(session_ctx, {"id": "g1", "completed": True})
        assert mock_request.call_args.kwargs["json"] == {"completed": False, "progress": 0}

    def test_update_goal_payload(self, session_ctx, mock_request):
        mock_request.return_value = {"id": "g1", "title": "Run 10k"}
        repositories.update_goal(session_ctx, "g1", "  Run   10k ", " Before summer ", date(2024, 6, 1))
        mock_request.assert_called_once_with(
            session_ctx,
            "PATCH",
            "/v1/goals/g1",
            json={"title": "Run 10k", "description": "Before summer", "target_date": "2024-06-01"},
        )

    def test_update_goal_clears_optional_fields(self, session_ctx, mock_request):
        repositories.update_goal(session_ctx, "g1", "Run 10k", "", None)
        assert mock_request.call_args.kwargs["json"] == {"title": "Run 10k", "description": None, "target_date": None}

    def test_water_count(self, session_ctx, mock_request):
        mock_request.return_value = {"date": "2024-03-01", "count": 3}
        assert repositories.set_water_count(session_ctx, date(2024, 3, 1), 3) == 3


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("example.com", "https://example.com"),
            ("http://example.com", "http://example.com"),
            ("https://example.com/a", "https://example.com/a"),
            ("", ""),
        ],
    )
    def test_scheme_is_added(self, raw, expected):
        assert repositories.normalize_url(raw) == expected


class TestGoalsTabCallbacks:
    def test_toggle_resets_progress_slider(self, session_ctx):
        from habitboard.tabs import goals_tab

        fake_st = MagicMock()
        fake_st.session_state = {"goals.progress.g1": 40, "goals.progress.g2": 10}
        goal = {"id": "g1", "completed": False, "progress": 40}
        with patch.object(goals_tab, "st", fake_st), patch.object(goals_tab, "session_slices") as slices, patch.object(
            goals_tab.repositories, "toggle_goal_completed", return_value={**goal, "completed": True, "progress": 100}
        ):
            slices.get_value.return_value = [goal]
            goals_tab._toggle_goal(session_ctx, goal)
        assert "goals.progress.g1" not in fake_st.session_state
        assert fake_st.session_state["goals.progress.g2"] == 10
        slices.set_value.assert_called_once_with("goals", "items", [{**goal, "completed": True, "progress": 100}])

    def test_edit_sends_form_values(self, session_ctx):
        from habitboard.tabs import goals_tab

        fake_st = MagicMock()
        fake_st.session_state = {
            "goals.edit.g1.title": "Read 20 books",
            "goals.edit.g1.description": "",
            "goals.edit.g1.has_target": False,
            "goals.edit.g1.target": date(2024, 12, 31),
        }
        updated = {"id": "g1", "title": "Read 20 books"}
        with patch.object(goals_tab, "st", fake_st), patch.object(goals_tab, "session_slices") as slices, patch.object(
            goals_tab.repositories, "update_goal", return_value=updated
        ) as update_goal:
            slices.get_value.return_value = [{"id": "g1", "title": "Read books"}]
            goals_tab._edit_goal(session_ctx, "g1")
        update_goal.assert_called_once_with(session_ctx, "g1", "Read 20 books", "", None)
        slices.set_value.assert_called_once_with("goals", "items", [updated])
