from datetime import date, time

import pandas as pd
import streamlit as st

from habitboard.constants import SLEEP_QUALITY_COLORS
from habitboard.data import repositories
from habitboard.feedback import store_action
from habitboard.metrics import format_duration_minutes, sleep_duration_minutes, sleep_quality_band, sleep_summary
from habitboard.state import session_slices
from habitboard.visualizations import sleep_duration_chart


def _load_logs(ctx, today):
    if session_slices.get_value("sleep", "loaded_for") != today.isoformat():
        with store_action("load sleep logs"):
            logs = repositories.recent_sleep_logs(ctx, today)
            session_slices.update_slice("sleep", {"logs": logs, "loaded_for": today.isoformat()})
    return session_slices.get_value("sleep", "logs", [])


def _save_log(ctx):
    with store_action("save the sleep log"):
        repositories.upsert_sleep_log(
            ctx,
            st.session_state.get("sleep.day"),
            st.session_state.get("sleep.bedtime"),
            st.session_state.get("sleep.waketime"),
            st.session_state.get("sleep.quality"),
            st.session_state.get("sleep.notes"),
        )
        session_slices.clear_slice("sleep")
        st.toast("Sleep log saved")


def render_sleep_tab(ctx):
    st.markdown("<div class='section-title'>Sleep Tracker</div>", unsafe_allow_html=True)
    today = date.today()
    logs = _load_logs(ctx, today)

    with st.form(key="sleep.form"):
        cols = st.columns(4)
        with cols[0]:
            st.date_input("Night of", value=today, key="sleep.day")
        with cols[1]:
            st.time_input("Bedtime", value=time(23, 0), key="sleep.bedtime", step=300)
        with cols[2]:
            st.time_input("Wake time", value=time(7, 0), key="sleep.waketime", step=300)
        with cols[3]:
            st.slider("Quality", min_value=1, max_value=5, value=3, key="sleep.quality")
        st.text_input("Notes", key="sleep.notes")
        st.form_submit_button("Save", on_click=_save_log, args=(ctx,))

    preview = sleep_duration_minutes(
        st.session_state.get("sleep.bedtime", time(23, 0)),
        st.session_state.get("sleep.waketime", time(7, 0)),
    )
    st.caption(f"Duration: {format_duration_minutes(preview)}")

    summary = sleep_summary(logs)
    metric_cols = st.columns(3)
    metric_cols[0].metric("Nights logged (30d)", len(logs))
    metric_cols[1].metric("Avg duration", format_duration_minutes(summary["avg_duration"]))
    metric_cols[2].metric("Avg quality", summary["avg_quality"] or "N/A")

    if not logs:
        st.caption("No sleep logged in the last 30 days.")
        return

    st.plotly_chart(sleep_duration_chart(logs), use_container_width=True)
    frame = pd.DataFrame(logs)
    frame["Duration"] = [format_duration_minutes(log.get("duration")) for log in logs]
    frame["Band"] = [sleep_quality_band(log.get("quality")) for log in logs]
    styled = frame[["date", "sleep_time", "wake_time", "Duration", "quality", "Band", "notes"]].rename(
        columns={"date": "Date", "sleep_time": "Bed", "wake_time": "Wake", "quality": "Quality", "notes": "Notes"}
    )
    st.dataframe(
        styled.style.map(lambda band: f"color: {SLEEP_QUALITY_COLORS.get(band, '')}", subset=["Band"]),
        hide_index=True,
        use_container_width=True,
    )
