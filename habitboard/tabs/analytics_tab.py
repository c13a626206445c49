from datetime import date

import pandas as pd
import streamlit as st

from habitboard.constants import MONTHS
from habitboard.data import repositories
from habitboard.feedback import store_action
from habitboard.grid import LogIndex, days_in_month
from habitboard.metrics import (
    completion_breakdown,
    focus_summary,
    format_duration_minutes,
    format_duration_seconds,
    per_entity_performance,
    sleep_summary,
)
from habitboard.tabs.habits_tab import load_month, selected_month
from habitboard.visualizations import completion_pie, habit_heatmap, performance_bar


def _month_bounds(year, month):
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def render_analytics_tab(ctx):
    year, month = selected_month()
    st.markdown(
        f"<div class='section-title'>Analytics · {MONTHS[month - 1]} {year}</div>", unsafe_allow_html=True
    )
    habits, records = load_month(ctx, year, month)
    if not habits:
        st.info("Add habits on the Habits tab to see analytics.")
        return

    index = LogIndex(records)
    breakdown = completion_breakdown(records)
    performance = per_entity_performance(records, habits)

    metric_cols = st.columns(4)
    metric_cols[0].metric("Logged days", breakdown["total"])
    metric_cols[1].metric("Done", f"{breakdown['done']['percentage']}%")
    metric_cols[2].metric("Skipped", f"{breakdown['skip']['percentage']}%")
    metric_cols[3].metric("Habits", len(habits))

    chart_cols = st.columns(2)
    with chart_cols[0]:
        st.plotly_chart(completion_pie(breakdown), use_container_width=True)
    with chart_cols[1]:
        st.plotly_chart(performance_bar(performance), use_container_width=True)
    st.plotly_chart(habit_heatmap(habits, index, year, month, title="Month overview"), use_container_width=True)

    table = pd.DataFrame(performance)
    if not table.empty:
        st.dataframe(
            table[["name", "done_count", "skip_count"]].rename(
                columns={"name": "Habit", "done_count": "Done", "skip_count": "Skipped"}
            ),
            hide_index=True,
            use_container_width=True,
        )

    start, end = _month_bounds(year, month)
    sessions, sleep_logs = [], []
    with store_action("load focus and sleep history"):
        sessions = repositories.list_focus_sessions(ctx, start, end)
        sleep_logs = repositories.get_sleep_logs(ctx, start, end)
    focus = focus_summary(sessions)
    sleep = sleep_summary(sleep_logs)
    extra_cols = st.columns(4)
    extra_cols[0].metric("Focus sessions", focus["sessions"])
    extra_cols[1].metric("Focus time", format_duration_seconds(focus["total_seconds"]))
    extra_cols[2].metric("Avg sleep", format_duration_minutes(sleep["avg_duration"]))
    extra_cols[3].metric("Avg sleep quality", sleep["avg_quality"] or "N/A")
