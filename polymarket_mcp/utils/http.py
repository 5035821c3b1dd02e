"""Thin GET helpers over requests for the Gamma, Data API and news endpoints."""

from typing import Any, Optional

import requests

from polymarket_mcp.errors import UpstreamError

REQUEST_TIMEOUT = 10  # seconds
USER_AGENT = "Mozilla/5.0 (compatible; polymarket-mcp/1.0)"


def _get(url: str, params: Optional[dict], what: str, timeout: float) -> requests.Response:
    resp = requests.get(
        url,
        params=params,
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
    )
    if not resp.ok:
        reason = resp.reason or ""
        raise UpstreamError(
            f"Failed to fetch {what}: {resp.status_code} {reason}".rstrip(),
            status_code=resp.status_code,
            reason=reason,
        )
    return resp


def get_json(url: str, params: Optional[dict] = None, what: str = "data", timeout: float = REQUEST_TIMEOUT) -> Any:
    """GET url and decode JSON. Raises UpstreamError on non-2xx."""
    return _get(url, params, what, timeout).json()


def get_text(url: str, params: Optional[dict] = None, what: str = "data", timeout: float = REQUEST_TIMEOUT) -> str:
    """GET url and return the body as text. Raises UpstreamError on non-2xx."""
    return _get(url, params, what, timeout).text
