import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """A store call failed: transport error or a non-2xx answer."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


def _build_session():
    session = requests.Session()
    # Writes are not idempotent from the user's point of view; fail fast.
    adapter = HTTPAdapter(max_retries=0, pool_connections=10, pool_maxsize=10)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


_SESSION = _build_session()


def request(ctx, method: str, path: str, params: dict | None = None, json: dict | None = None, timeout: int = 10) -> Any:
    base = (ctx.api_base_url or "").rstrip("/")
    if not base:
        raise StoreError("API_BASE_URL not configured")
    if not ctx.token:
        raise StoreError("BACKEND_SESSION_SECRET not configured")
    if not ctx.user_email:
        raise StoreError("Missing user email for API request")
    headers = {
        "X-User-Email": ctx.user_email,
        "X-Backend-Token": ctx.token,
    }
    url = f"{base}{path}"
    try:
        response = _SESSION.request(method, url, params=params, json=json, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        raise StoreError(f"Could not reach the store: {exc}") from exc
    if not response.ok:
        try:
            detail = response.json()
        except ValueError:
            detail = response.text
        if isinstance(detail, dict):
            detail = detail.get("detail", detail)
        raise StoreError(f"API error {response.status_code} {response.reason}: {detail}", response.status_code)
    if response.status_code == 204:
        return None
    return response.json()
