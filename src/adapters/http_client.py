"""httpx wrapper.

Why a wrapper:
- Standardizes headers, timeouts and transport for every sibling-service call.
- Makes testing easy: validators accept an injected client (e.g. one backed by
  `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings

# Cross-service contract: receivers read it case-insensitively.
COMPANY_ID_HEADER = "X-Company-ID"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    timeout: httpx.Timeout | float | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the project defaults.

    Why a builder:
    - Centralizes headers so every validator and probe behaves the same.
    - Per-request timeouts still come from the `TimeoutPolicy`; the client
      default only applies to calls that do not pass one.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else httpx.Timeout(25.0),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def tenant_headers(tenant_id: str | None) -> dict[str, str]:
    """Headers for a tenant-scoped validation call."""

    headers = {"Content-Type": "application/json"}
    if tenant_id:
        headers[COMPANY_ID_HEADER] = tenant_id
    return headers


def read_header(headers: dict[str, str] | httpx.Headers | None, name: str) -> str | None:
    """Read a header by name, ignoring case."""

    if not headers:
        return None
    if isinstance(headers, httpx.Headers):
        return headers.get(name)
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def describe_http_error(exc: httpx.HTTPError) -> str:
    """Short, stable description of a transport failure."""

    if isinstance(exc, httpx.TimeoutException):
        return f"timeout ({type(exc).__name__}): {exc}" if str(exc) else f"timeout ({type(exc).__name__})"
    return str(exc) or type(exc).__name__
