import streamlit as st

from habitboard.tabs.analytics_tab import render_analytics_tab
from habitboard.tabs.focus_tab import render_focus_tab
from habitboard.tabs.goals_tab import render_goals_tab
from habitboard.tabs.habits_tab import render_habits_tab
from habitboard.tabs.shortcuts_tab import render_shortcuts_tab
from habitboard.tabs.sleep_tab import render_sleep_tab
from habitboard.tabs.todos_tab import render_todos_tab
from habitboard.tabs.water_tab import render_water_tab


TAB_RENDERERS = {
    "Habits": render_habits_tab,
    "Analytics": render_analytics_tab,
    "Sleep Tracker": render_sleep_tab,
    "Goals": render_goals_tab,
    "Focus": render_focus_tab,
    "Water": render_water_tab,
    "To-do": render_todos_tab,
    "Shortcuts": render_shortcuts_tab,
}
TAB_OPTIONS = list(TAB_RENDERERS)


def render_router(ctx):
    active = st.session_state.get("ui.active_tab") or TAB_OPTIONS[0]
    active = st.segmented_control(
        "Workspace",
        TAB_OPTIONS,
        key="ui.active_tab",
        default=active,
    )
    _render_tab(active or TAB_OPTIONS[0], ctx)


@st.fragment
def _render_tab(name, ctx):
    TAB_RENDERERS[name](ctx)
