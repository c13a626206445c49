from __future__ import annotations

import os

import streamlit as st

from habitboard.context import SessionContext

ENV_PATH = os.path.join(os.path.dirname(__file__), "..", ".env")

ENV_FALLBACK_KEYS = {
    ("app", "api_base_url"): "API_BASE_URL",
    ("app", "backend_session_secret"): "BACKEND_SESSION_SECRET",
    ("app", "user_email"): "DASHBOARD_USER_EMAIL",
    ("app", "allowed_emails"): "ALLOWED_EMAILS",
}


def load_local_env():
    if not os.path.exists(ENV_PATH):
        return
    with open(ENV_PATH, "r", encoding="utf-8") as env_file:
        for raw_line in env_file:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    current = st.secrets
    for key in path:
        try:
            if key not in current:
                return default
            current = current[key]
        except (FileNotFoundError, KeyError, AttributeError):
            # No secrets.toml at all: environment fallbacks only.
            return default
    return current


def get_current_user_email():
    user = getattr(st, "user", None)
    user_email = str(getattr(user, "email", "") or "").strip().lower()
    if user_email:
        return user_email
    configured = str(get_secret(("app", "user_email")) or "").strip().lower()
    if configured:
        return configured
    allowed_many = str(get_secret(("app", "allowed_emails")) or "").strip()
    if allowed_many:
        return allowed_many.split(",")[0].strip().lower()
    return ""


def build_session_context():
    return SessionContext(
        user_email=get_current_user_email(),
        token=str(get_secret(("app", "backend_session_secret")) or "").strip(),
        api_base_url=str(get_secret(("app", "api_base_url")) or "").strip(),
    )


def show_store_configuration_error(ctx):
    st.error("The habit store is not configured.")
    missing = []
    if not ctx.api_base_url:
        missing.append("API_BASE_URL")
    if not ctx.token:
        missing.append("BACKEND_SESSION_SECRET")
    if not ctx.user_email:
        missing.append("DASHBOARD_USER_EMAIL")
    st.markdown("Missing settings: " + ", ".join(f"`{name}`" for name in missing))
    st.code(
        "[app]\n"
        "api_base_url = \"http://localhost:8000\"\n"
        "backend_session_secret = \"LONG_RANDOM_SECRET\"\n"
        "user_email = \"you@example.com\"",
        language="toml",
    )
    st.stop()
