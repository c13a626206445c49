from datetime import date

import streamlit as st

from habitboard.constants import DEFAULT_WATER_INTERVAL_MINUTES, DEFAULT_WATER_TARGET
from habitboard.data import repositories
from habitboard.feedback import store_action
from habitboard.metrics import format_clock
from habitboard.state import session_slices
from habitboard.timers import WaterReminderTimer

TIMER_KEY = "water.timer"


def _timer():
    if TIMER_KEY not in st.session_state:
        st.session_state[TIMER_KEY] = WaterReminderTimer(DEFAULT_WATER_TARGET, DEFAULT_WATER_INTERVAL_MINUTES)
    return st.session_state[TIMER_KEY]


def _today_count(ctx, today):
    if session_slices.get_value("water", "day") != today.isoformat():
        with store_action("load the water counter"):
            count = repositories.get_water_count(ctx, today)
            session_slices.update_slice("water", {"day": today.isoformat(), "count": count})
    return int(session_slices.get_value("water", "count", 0))


def _set_count(ctx, today, count):
    with store_action("update the water counter"):
        saved = repositories.set_water_count(ctx, today, count)
        session_slices.update_slice("water", {"day": today.isoformat(), "count": saved})


def _start_timer():
    timer = _timer()
    timer.target_glasses = int(st.session_state.get("water.target", DEFAULT_WATER_TARGET))
    timer.interval_minutes = int(st.session_state.get("water.interval", DEFAULT_WATER_INTERVAL_MINUTES))
    timer.start()
    st.toast(f"Water reminder set for {timer.target_glasses} glasses, every {timer.interval_minutes} minutes")


@st.fragment(run_every=1)
def _render_reminder():
    timer = _timer()
    event = timer.tick()
    if event is not None:
        st.toast(("🎉 " if event.goal_complete else "💧 ") + event.message)
    if timer.active:
        st.markdown(
            f"Next glass in **{format_clock(timer.remaining)}** "
            f"({timer.completed_glasses} of {timer.target_glasses} reminders)"
        )
    else:
        st.caption("Reminder is off.")


def render_water_tab(ctx):
    st.markdown("<div class='section-title'>Water</div>", unsafe_allow_html=True)
    today = date.today()
    count = _today_count(ctx, today)

    cols = st.columns([1, 2, 1])
    cols[0].button(
        "−", key="water.decrement", disabled=count <= 0, on_click=_set_count, args=(ctx, today, count - 1)
    )
    cols[1].markdown(f"<h2 style='text-align:center'>💧 {count} glasses</h2>", unsafe_allow_html=True)
    cols[2].button("+", key="water.increment", on_click=_set_count, args=(ctx, today, count + 1))

    timer = _timer()
    settings_cols = st.columns(2)
    with settings_cols[0]:
        st.number_input(
            "Target glasses", min_value=1, max_value=20, value=timer.target_glasses, key="water.target",
            disabled=timer.active,
        )
    with settings_cols[1]:
        st.number_input(
            "Interval (minutes)", min_value=1, max_value=240, value=timer.interval_minutes, key="water.interval",
            disabled=timer.active,
        )
    if timer.active:
        st.button("Stop reminder", key="water.stop", on_click=timer.stop)
    else:
        st.button("Start reminder", key="water.start", on_click=_start_timer)
    _render_reminder()
