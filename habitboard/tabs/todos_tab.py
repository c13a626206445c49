import streamlit as st

from habitboard.data import repositories
from habitboard.feedback import store_action
from habitboard.state import session_slices


def _load_todos(ctx):
    if not session_slices.get_value("todos", "loaded", False):
        with store_action("load todos"):
            items = repositories.list_todos(ctx)
            session_slices.update_slice("todos", {"loaded": True, "items": items})
    return session_slices.get_value("todos", "items", [])


def _add_todo(ctx):
    with store_action("add the todo"):
        todo = repositories.add_todo(ctx, st.session_state.get("todos.new_title", ""))
        items = session_slices.get_value("todos", "items", []) + [todo]
        session_slices.set_value("todos", "items", items)
        st.session_state["todos.new_title"] = ""


def _toggle_todo(ctx, todo_id, widget_key):
    with store_action("update the todo"):
        updated = repositories.set_todo_completed(ctx, todo_id, st.session_state.get(widget_key, False))
        items = [updated if item["id"] == todo_id else item for item in session_slices.get_value("todos", "items", [])]
        session_slices.set_value("todos", "items", items)


def _delete_todo(ctx, todo_id):
    with store_action("delete the todo"):
        repositories.delete_todo(ctx, todo_id)
        items = [item for item in session_slices.get_value("todos", "items", []) if item["id"] != todo_id]
        session_slices.set_value("todos", "items", items)


def render_todos_tab(ctx):
    st.markdown("<div class='section-title'>To-do</div>", unsafe_allow_html=True)
    todos = _load_todos(ctx)
    open_count = sum(1 for todo in todos if not todo.get("completed"))
    st.caption(f"{open_count} open of {len(todos)}")

    for todo in todos:
        row = st.columns([0.4, 6, 0.4])
        done_key = f"todos.done.{todo['id']}"
        with row[0]:
            st.checkbox(
                "Done",
                value=bool(todo.get("completed")),
                key=done_key,
                label_visibility="collapsed",
                on_change=_toggle_todo,
                args=(ctx, todo["id"], done_key),
            )
        with row[1]:
            st.markdown(f"~~{todo['title']}~~" if todo.get("completed") else todo["title"])
        with row[2]:
            st.button("✕", key=f"todos.delete.{todo['id']}", type="tertiary", on_click=_delete_todo, args=(ctx, todo["id"]))

    with st.form(key="todos.add_form", clear_on_submit=False):
        cols = st.columns([6, 1])
        with cols[0]:
            st.text_input("New todo", key="todos.new_title", label_visibility="collapsed", placeholder="Add a task...")
        with cols[1]:
            st.form_submit_button("+", on_click=_add_todo, args=(ctx,), use_container_width=True)
