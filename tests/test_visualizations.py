from habitboard.grid import LogIndex, Status, StatusRecord
from habitboard.visualizations import build_habit_matrix


class TestHabitMatrix:
    def test_values_follow_month_matrix(self):
        habits = [{"id": "h1", "name": "Read"}, {"id": "h2", "name": "Walk"}]
        index = LogIndex(
            [
                StatusRecord("h1", "2024-02-01", Status.DONE),
                StatusRecord("h2", "2024-02-29", Status.SKIP),
            ]
        )
        z, text, x_labels, y_labels = build_habit_matrix(habits, index, 2024, 2)
        assert z.shape == (2, 29)
        assert z[0, 0] == 2
        assert z[1, 28] == 1
        assert z[0, 1] == 0
        assert text[1][28] == "Walk • 2024-02-29 • skip"
        assert x_labels[0] == 1 and x_labels[-1] == 29
        assert y_labels == ["Read", "Walk"]

    def test_no_habits(self):
        z, text, _, y_labels = build_habit_matrix([], LogIndex(), 2024, 2)
        assert z.shape == (0, 29)
        assert text == [] and y_labels == []
