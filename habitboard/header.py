from datetime import date

import streamlit as st

from habitboard.theme import get_active_theme, toggle_theme


@st.fragment
def render_global_header(ctx, bootstrap):
    bootstrap = bootstrap or {}
    indicators = bootstrap.get("quick_indicators") or {}
    today_iso = bootstrap.get("today") or date.today().isoformat()
    user_name = bootstrap.get("user_name") or ctx.user_name

    top = st.columns([6, 1])
    with top[0]:
        st.markdown(f"<div class='page-title'><h2>Hi, {user_name}</h2></div>", unsafe_allow_html=True)
        st.caption(today_iso)
    with top[1]:
        theme_name, _ = get_active_theme()
        st.button(
            "☀️" if theme_name == "dark" else "🌙",
            key="header.theme_toggle",
            help="Switch theme",
            on_click=toggle_theme,
        )

    if not bootstrap:
        st.warning("Backend warming up… data may take a moment to appear.")
        return

    cols = st.columns(4)
    cols[0].metric("Habits this month", indicators.get("habits_this_month", 0))
    cols[1].metric("Open todos", indicators.get("open_todos", 0))
    cols[2].metric("Active goals", indicators.get("active_goals", 0))
    cols[3].metric("Water today", indicators.get("water_today", 0))
