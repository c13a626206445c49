from datetime import date

import streamlit as st

from habitboard.constants import DEFAULT_POMODORO_MINUTES
from habitboard.data import repositories
from habitboard.feedback import store_action
from habitboard.metrics import focus_summary, format_clock, format_duration_seconds
from habitboard.timers import FOCUS_MODES, POMODORO, FocusTimer
from habitboard.visualizations import focus_minutes_chart


TIMER_KEY = "focus.timer"


def _timer():
    if TIMER_KEY not in st.session_state:
        st.session_state[TIMER_KEY] = FocusTimer(pomodoro_minutes=DEFAULT_POMODORO_MINUTES)
    return st.session_state[TIMER_KEY]


def _persist(ctx, finished):
    if finished is None:
        return
    with store_action("save the focus session"):
        repositories.save_focus_session(ctx, finished, date.today())
        st.session_state.pop("focus.today_sessions", None)
        st.toast(f"Session saved: {format_duration_seconds(finished.duration)}")


def _change_mode():
    _timer().change_mode(st.session_state["focus.mode"])


def _change_minutes():
    _timer().set_pomodoro_minutes(st.session_state["focus.minutes"])


def _reset(ctx):
    _persist(ctx, _timer().reset())


@st.fragment(run_every=1)
def _render_clock(ctx):
    timer = _timer()
    finished = timer.tick()
    if finished is not None:
        st.toast("🎉 Pomodoro complete!")
        _persist(ctx, finished)
    st.markdown(f"<h1 style='text-align:center'>{format_clock(timer.seconds)}</h1>", unsafe_allow_html=True)
    if timer.mode == POMODORO:
        st.progress(min(100, int(timer.progress())) / 100)


def _today_sessions(ctx):
    if "focus.today_sessions" not in st.session_state:
        sessions = []
        with store_action("load focus sessions"):
            sessions = repositories.list_focus_sessions(ctx, date.today(), date.today())
        st.session_state["focus.today_sessions"] = sessions
    return st.session_state["focus.today_sessions"]


def render_focus_tab(ctx):
    st.markdown("<div class='section-title'>Focus Mode</div>", unsafe_allow_html=True)
    timer = _timer()
    controls = st.columns(2)
    with controls[0]:
        st.session_state.setdefault("focus.mode", timer.mode)
        st.radio(
            "Mode",
            FOCUS_MODES,
            key="focus.mode",
            format_func=str.title,
            horizontal=True,
            on_change=_change_mode,
        )
    with controls[1]:
        st.session_state.setdefault("focus.minutes", timer.pomodoro_minutes)
        st.number_input(
            "Pomodoro minutes",
            min_value=1,
            max_value=120,
            step=5,
            key="focus.minutes",
            disabled=timer.mode != POMODORO or timer.running,
            on_change=_change_minutes,
        )

    _render_clock(ctx)

    buttons = st.columns(3)
    if timer.running:
        buttons[0].button("Pause", key="focus.pause", on_click=timer.pause, use_container_width=True)
    else:
        buttons[0].button("Start", key="focus.start", on_click=timer.start, use_container_width=True)
    buttons[1].button("Reset", key="focus.reset", on_click=_reset, args=(ctx,), use_container_width=True)

    sessions = _today_sessions(ctx)
    summary = focus_summary(sessions)
    cols = st.columns(3)
    cols[0].metric("Sessions today", summary["sessions"])
    cols[1].metric("Total focus", format_duration_seconds(summary["total_seconds"]))
    cols[2].metric("Average", format_duration_seconds(summary["average_seconds"]))
    if sessions:
        st.plotly_chart(focus_minutes_chart(sessions, title="Focus minutes today"), use_container_width=True)
