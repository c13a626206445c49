import logging
from datetime import date

import streamlit as st

from habitboard.constants import (
    COLLEGE_STATUS_LABELS,
    MONTHS,
    MONTH_TO_INDEX,
    PRIORITY_LABELS,
    PRIORITY_META,
    STATUS_SYMBOLS,
)
from habitboard.data import repositories
from habitboard.feedback import store_action
from habitboard.grid import LogIndex, day_dates, export_month_csv, next_status
from habitboard.metrics import streak
from habitboard.state import session_slices

logger = logging.getLogger(__name__)


def selected_month():
    today = date.today()
    if "habits.month_label" not in st.session_state:
        st.session_state["habits.month_label"] = MONTHS[today.month - 1]
    if "habits.year" not in st.session_state:
        st.session_state["habits.year"] = today.year
    return int(st.session_state["habits.year"]), MONTH_TO_INDEX[st.session_state["habits.month_label"]]


def load_month(ctx, year, month):
    """Habits and status records of a month, cached in the session."""
    if not session_slices.month_loaded(year, month):
        with store_action("load habits"):
            habits = repositories.list_habits(ctx, month, year)
            records = repositories.get_status_records(ctx, [habit["id"] for habit in habits])
            session_slices.store_month(year, month, habits, records)
    return session_slices.month_habits(year, month), session_slices.month_records(year, month)


def _cycle_cell(ctx, year, month, habit_id, day, current):
    with store_action("save the habit status"):
        record = repositories.upsert_status_record(ctx, habit_id, day, next_status(current))
        session_slices.merge_month_record(year, month, record)


def _add_habit(ctx, year, month):
    name = st.session_state.get("habits.new_name", "")
    priority_label = st.session_state.get("habits.new_priority", PRIORITY_LABELS[0])
    priority = {label: value for value, label in PRIORITY_LABELS.items()}[priority_label]
    with store_action("add the habit"):
        repositories.create_habit(ctx, name, priority, month, year)
        session_slices.invalidate_month(year, month)
        st.session_state["habits.new_name"] = ""


def _delete_habit(ctx, year, month, habit_id):
    with store_action("delete the habit"):
        repositories.delete_habit(ctx, habit_id)
        session_slices.drop_month_habit(year, month, habit_id)


def _save_note(ctx, day):
    with store_action("save the note"):
        repositories.save_daily_note(
            ctx,
            day,
            st.session_state.get("habits.note_content", ""),
            st.session_state.get("habits.note_college", ""),
        )
        st.toast("Note saved")


def _render_grid(ctx, habits, index, year, month):
    days = day_dates(year, month)
    today = date.today()
    weights = [2.4, 0.7] + [0.45] * len(days) + [0.6, 0.4]
    header = st.columns(weights)
    header[0].markdown("**Habit**")
    header[1].markdown("**Prio**")
    for col, day in zip(header[2:], days):
        col.caption(str(day.day))
    header[-2].markdown("**🔥**")

    for habit in habits:
        row = st.columns(weights)
        row[0].markdown(habit["name"])
        meta = PRIORITY_META.get(int(habit.get("priority") or 0), PRIORITY_META[0])
        row[1].markdown(
            f"<span style='color:{meta['color']}'>{meta['label']}</span>", unsafe_allow_html=True
        )
        for col, day in zip(row[2:], days):
            status = index.status_of(habit["id"], day)
            col.button(
                STATUS_SYMBOLS[status.value],
                key=f"habits.cell.{habit['id']}.{day.isoformat()}",
                help=f"{day.isoformat()}: {status.value}",
                type="primary" if day == today else "secondary",
                on_click=_cycle_cell,
                args=(ctx, year, month, habit["id"], day, status),
            )
        current_streak = streak(
            habit["id"], today.year, today.month, today.day, index, view_year=year, view_month=month
        )
        row[-2].markdown(f"{current_streak}")
        row[-1].button(
            "✕",
            key=f"habits.delete.{habit['id']}",
            type="tertiary",
            on_click=_delete_habit,
            args=(ctx, year, month, habit["id"]),
        )


def _render_daily_note(ctx):
    st.markdown("<div class='section-title'>Daily note</div>", unsafe_allow_html=True)
    note_day = st.date_input("Day", value=date.today(), key="habits.note_day")
    loaded_key = note_day.isoformat()
    if st.session_state.get("habits.note_loaded") != loaded_key:
        note = {}
        with store_action("load the note"):
            note = repositories.get_daily_note(ctx, note_day)
        st.session_state["habits.note_content"] = note.get("content") or ""
        st.session_state["habits.note_college"] = note.get("college_status") or ""
        st.session_state["habits.note_loaded"] = loaded_key
    st.text_area("Note", key="habits.note_content", height=120)
    st.selectbox(
        "College",
        options=list(COLLEGE_STATUS_LABELS),
        format_func=lambda value: COLLEGE_STATUS_LABELS[value],
        key="habits.note_college",
    )
    st.button("Save note", key="habits.note_save", on_click=_save_note, args=(ctx, note_day))


def render_habits_tab(ctx):
    st.markdown("<div class='section-title'>Habit Grid</div>", unsafe_allow_html=True)
    top = st.columns([1, 1, 2])
    with top[0]:
        selected_month()
        st.selectbox("Month", MONTHS, key="habits.month_label")
    with top[1]:
        st.number_input("Year", min_value=1900, max_value=9999, step=1, key="habits.year")
    year, month = selected_month()

    habits, records = load_month(ctx, year, month)
    index = LogIndex(records)

    if habits:
        _render_grid(ctx, habits, index, year, month)
        st.download_button(
            "Export CSV",
            data=export_month_csv(habits, index, year, month),
            file_name=f"habits-{year:04d}-{month:02d}.csv",
            mime="text/csv",
            key="habits.export",
        )
    else:
        st.caption("No habits for this month yet.")

    with st.form(key="habits.add_form", clear_on_submit=False):
        cols = st.columns([4, 1.4, 0.8])
        with cols[0]:
            st.text_input("New habit", key="habits.new_name", placeholder="Add a habit for this month...")
        with cols[1]:
            st.selectbox("Priority", list(PRIORITY_LABELS.values()), key="habits.new_priority")
        with cols[2]:
            st.form_submit_button("Add", on_click=_add_habit, args=(ctx, year, month), use_container_width=True)

    _render_daily_note(ctx)
