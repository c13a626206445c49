MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
MONTH_TO_INDEX = {label: idx + 1 for idx, label in enumerate(MONTHS)}

PRIORITY_LABELS = {2: "High", 1: "Medium", 0: "Low"}
PRIORITY_META = {
    2: {"label": "High", "color": "#D95252"},
    1: {"label": "Medium", "color": "#D9C979"},
    0: {"label": "Low", "color": "#8FB6D9"},
}

STATUS_COLORS = {
    "done": "#4CAF50",
    "skip": "#D9C979",
    "empty": "#2B2B2B",
}
STATUS_SYMBOLS = {
    "done": "✓",
    "skip": "–",
    "empty": "·",
}
STATUS_TO_INT = {"empty": 0, "skip": 1, "done": 2}

COLLEGE_STATUS_LABELS = {
    "": "No class",
    "C": "College",
    "F": "Day off",
    "H": "Holiday",
}

SLEEP_QUALITY_COLORS = {
    "good": "#4CAF50",
    "fair": "#D9C979",
    "poor": "#D95252",
    "none": "#B8B8B8",
}

DEFAULT_WATER_TARGET = 8
DEFAULT_WATER_INTERVAL_MINUTES = 60
DEFAULT_POMODORO_MINUTES = 25

SHORTCUT_CATEGORIES = ["Work", "Study", "Personal", "Tools", "Other"]
