import streamlit as st

from habitboard.grid import merge_record

PREFIX = "slice"


def get_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key not in st.session_state:
        st.session_state[key] = {}
    return st.session_state[key]


def get_value(slice_name, name, default=None):
    payload = get_slice(slice_name)
    return payload.get(name, default)


def set_value(slice_name, name, value):
    payload = get_slice(slice_name)
    payload[name] = value


def update_slice(slice_name, values):
    payload = get_slice(slice_name)
    payload.update(values)


def clear_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key in st.session_state:
        del st.session_state[key]


def month_slice_name(year, month):
    return f"habits.{int(year):04d}-{int(month):02d}"


def month_loaded(year, month):
    return bool(get_value(month_slice_name(year, month), "loaded", False))


def store_month(year, month, habits, records):
    update_slice(
        month_slice_name(year, month),
        {"loaded": True, "habits": list(habits), "records": list(records)},
    )


def month_habits(year, month):
    return get_value(month_slice_name(year, month), "habits", [])


def month_records(year, month):
    return get_value(month_slice_name(year, month), "records", [])


def merge_month_record(year, month, record):
    """Fold a record returned by the store into the cached month, last write wins."""
    name = month_slice_name(year, month)
    set_value(name, "records", merge_record(get_value(name, "records", []), record))


def drop_month_habit(year, month, habit_id):
    name = month_slice_name(year, month)
    habits = [habit for habit in get_value(name, "habits", []) if habit["id"] != habit_id]
    records = [record for record in get_value(name, "records", []) if record.entity_id != habit_id]
    update_slice(name, {"habits": habits, "records": records})


def invalidate_month(year, month):
    clear_slice(month_slice_name(year, month))
