from itertools import groupby

import streamlit as st

from habitboard.constants import SHORTCUT_CATEGORIES
from habitboard.data import repositories
from habitboard.feedback import store_action
from habitboard.state import session_slices


def _load_shortcuts(ctx):
    if not session_slices.get_value("shortcuts", "loaded", False):
        with store_action("load shortcuts"):
            items = repositories.list_shortcuts(ctx)
            session_slices.update_slice("shortcuts", {"loaded": True, "items": items})
    return session_slices.get_value("shortcuts", "items", [])


def _add_shortcut(ctx):
    with store_action("add the shortcut"):
        shortcut = repositories.add_shortcut(
            ctx,
            st.session_state.get("shortcuts.new_title", ""),
            st.session_state.get("shortcuts.new_url", ""),
            st.session_state.get("shortcuts.new_category"),
        )
        session_slices.set_value("shortcuts", "items", session_slices.get_value("shortcuts", "items", []) + [shortcut])


def _delete_shortcut(ctx, shortcut_id):
    with store_action("delete the shortcut"):
        repositories.delete_shortcut(ctx, shortcut_id)
        items = [item for item in session_slices.get_value("shortcuts", "items", []) if item["id"] != shortcut_id]
        session_slices.set_value("shortcuts", "items", items)


def render_shortcuts_tab(ctx):
    st.markdown("<div class='section-title'>Shortcuts</div>", unsafe_allow_html=True)
    shortcuts = _load_shortcuts(ctx)

    by_category = sorted(shortcuts, key=lambda item: item.get("category") or "")
    for category, items in groupby(by_category, key=lambda item: item.get("category") or ""):
        st.caption(category or "Uncategorised")
        for item in items:
            row = st.columns([5, 0.5])
            row[0].link_button(item["title"], repositories.normalize_url(item["url"]), use_container_width=True)
            row[1].button(
                "✕",
                key=f"shortcuts.delete.{item['id']}",
                type="tertiary",
                on_click=_delete_shortcut,
                args=(ctx, item["id"]),
            )

    with st.form(key="shortcuts.add_form", clear_on_submit=True):
        cols = st.columns([2, 3, 1.5])
        with cols[0]:
            st.text_input("Title", key="shortcuts.new_title")
        with cols[1]:
            st.text_input("URL", key="shortcuts.new_url", placeholder="example.com")
        with cols[2]:
            st.selectbox("Category", SHORTCUT_CATEGORIES, key="shortcuts.new_category")
        st.form_submit_button("Add shortcut", on_click=_add_shortcut, args=(ctx,))
