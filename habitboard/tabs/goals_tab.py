from datetime import date

import streamlit as st

from habitboard.data import repositories
from habitboard.feedback import store_action
from habitboard.metrics import goal_summary
from habitboard.state import session_slices


def _load_goals(ctx):
    if not session_slices.get_value("goals", "loaded", False):
        with store_action("load goals"):
            goals = repositories.list_goals(ctx)
            session_slices.update_slice("goals", {"loaded": True, "items": goals})
    return session_slices.get_value("goals", "items", [])


def _replace_goal(updated):
    items = [updated if goal["id"] == updated["id"] else goal for goal in session_slices.get_value("goals", "items", [])]
    session_slices.set_value("goals", "items", items)


def _add_goal(ctx):
    with store_action("add the goal"):
        repositories.add_goal(
            ctx,
            st.session_state.get("goals.new_title", ""),
            st.session_state.get("goals.new_description", ""),
            st.session_state.get("goals.new_target") if st.session_state.get("goals.new_has_target") else None,
        )
        session_slices.clear_slice("goals")


def _toggle_goal(ctx, goal):
    with store_action("update the goal"):
        _replace_goal(repositories.toggle_goal_completed(ctx, goal))
        st.session_state.pop(f"goals.progress.{goal['id']}", None)


def _edit_goal(ctx, goal_id):
    prefix = f"goals.edit.{goal_id}"
    with store_action("save the goal"):
        _replace_goal(
            repositories.update_goal(
                ctx,
                goal_id,
                st.session_state.get(f"{prefix}.title", ""),
                st.session_state.get(f"{prefix}.description", ""),
                st.session_state.get(f"{prefix}.target") if st.session_state.get(f"{prefix}.has_target") else None,
            )
        )


def _save_progress(ctx, goal_id, widget_key):
    with store_action("update the goal"):
        _replace_goal(repositories.set_goal_progress(ctx, goal_id, st.session_state.get(widget_key, 0)))


def _delete_goal(ctx, goal_id):
    with store_action("delete the goal"):
        repositories.delete_goal(ctx, goal_id)
        items = [goal for goal in session_slices.get_value("goals", "items", []) if goal["id"] != goal_id]
        session_slices.set_value("goals", "items", items)


def render_goals_tab(ctx):
    st.markdown("<div class='section-title'>Goals</div>", unsafe_allow_html=True)
    goals = _load_goals(ctx)
    summary = goal_summary(goals)
    cols = st.columns(3)
    cols[0].metric("Total", summary["total"])
    cols[1].metric("Active", summary["active"])
    cols[2].metric("Completed", summary["completed"])

    with st.expander("New goal"):
        with st.form(key="goals.add_form", clear_on_submit=True):
            st.text_input("Title", key="goals.new_title")
            st.text_area("Description", key="goals.new_description", height=80)
            st.checkbox("Has target date", key="goals.new_has_target")
            st.date_input("Target date", key="goals.new_target")
            st.form_submit_button("Add goal", on_click=_add_goal, args=(ctx,))

    if not goals:
        st.caption("No goals yet.")
        return

    for goal in goals:
        with st.container(border=True):
            row = st.columns([0.5, 5, 0.5])
            with row[0]:
                st.checkbox(
                    "Done",
                    value=bool(goal.get("completed")),
                    key=f"goals.done.{goal['id']}",
                    label_visibility="collapsed",
                    on_change=_toggle_goal,
                    args=(ctx, goal),
                )
            with row[1]:
                title = f"~~{goal['title']}~~" if goal.get("completed") else f"**{goal['title']}**"
                st.markdown(title)
                if goal.get("description"):
                    st.caption(goal["description"])
                if goal.get("target_date"):
                    st.caption(f"Target: {goal['target_date']}")
            with row[2]:
                st.button(
                    "✕",
                    key=f"goals.delete.{goal['id']}",
                    type="tertiary",
                    on_click=_delete_goal,
                    args=(ctx, goal["id"]),
                )
            progress_key = f"goals.progress.{goal['id']}"
            st.progress(int(goal.get("progress") or 0) / 100)
            st.slider(
                "Progress",
                min_value=0,
                max_value=100,
                step=5,
                value=int(goal.get("progress") or 0),
                key=progress_key,
                on_change=_save_progress,
                args=(ctx, goal["id"], progress_key),
            )
            with st.expander("Edit"):
                _render_edit_form(ctx, goal)


def _render_edit_form(ctx, goal):
    prefix = f"goals.edit.{goal['id']}"
    target = goal.get("target_date")
    with st.form(key=f"{prefix}.form"):
        st.text_input("Title", value=goal.get("title", ""), key=f"{prefix}.title")
        st.text_area("Description", value=goal.get("description") or "", key=f"{prefix}.description", height=80)
        st.checkbox("Has target date", value=bool(target), key=f"{prefix}.has_target")
        st.date_input(
            "Target date",
            value=date.fromisoformat(target[:10]) if target else date.today(),
            key=f"{prefix}.target",
        )
        st.form_submit_button("Save", on_click=_edit_goal, args=(ctx, goal["id"]))
