import logging

import streamlit as st

from habitboard.auth import build_session_context, load_local_env, show_store_configuration_error
from habitboard.data import repositories
from habitboard.data.api_client import StoreError
from habitboard.header import render_global_header
from habitboard.logging_config import configure_logging
from habitboard.router import render_router
from habitboard.theme import inject_theme_css

logger = logging.getLogger("habitboard")

st.set_page_config(page_title="Habit Dashboard", layout="wide")

load_local_env()
configure_logging()
inject_theme_css()

context = build_session_context()
if not context.is_configured():
    show_store_configuration_error(context)

bootstrap = {}
try:
    bootstrap = repositories.load_bootstrap(context)
except StoreError as exc:
    logger.warning("Bootstrap failed: %s", exc)

with st.sidebar:
    st.caption(f"Logged as: {context.user_email}")

render_global_header(context, bootstrap)
render_router(context)
