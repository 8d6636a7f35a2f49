"""Shared HTTP existence check for every entity kind.

Each concrete validator only declares where its entity lives (module,
resource path, payload key); the request/normalization flow is identical.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from adapters.http_client import build_async_client, describe_http_error, tenant_headers
from core.config import AppSettings
from core.domain.models import EntityKind, ModuleEndpoints, ValidationResult
from core.interfaces.validator import EntityValidator
from core.logging import tenant_context
from core.timeouts import TimeoutBudget, TimeoutPolicy

logger = logging.getLogger(__name__)


class HttpEntityValidator(EntityValidator):
    """Performs `GET {base}/api/{resource}/{id}/validate` and normalizes it.

    Outcomes:
    - 404 -> confirmed absent.
    - 2xx with `{"exists": bool, <payload_key>: {...}}` -> that answer.
    - anything else -> `exists=False` with an error message.
    """

    kind: EntityKind
    module: str
    resource: str
    payload_key: str
    send_tenant_header: bool = True

    def __init__(
        self,
        endpoints: ModuleEndpoints,
        policy: TimeoutPolicy,
        *,
        client: httpx.AsyncClient | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self._endpoints = endpoints
        self._policy = policy
        self._client = client
        self._settings = settings

    @property
    def label(self) -> str:
        return self.kind.value.capitalize()

    def url_for(self, entity_id: str) -> str:
        base = self._endpoints.url_for(self.module)
        return f"{base}/api/{self.resource}/{quote(str(entity_id), safe='')}/validate"

    async def validate(self, entity_id: str, tenant_id: str) -> ValidationResult:
        with tenant_context(tenant_id):
            if self.send_tenant_header:
                logger.info("Validating %s %s for company %s", self.kind.value, entity_id, tenant_id)
            else:
                logger.info("Validating %s %s", self.kind.value, entity_id)
            return await self._check(entity_id, tenant_id)

    async def _check(self, entity_id: str, tenant_id: str) -> ValidationResult:
        url = self.url_for(entity_id)
        headers = tenant_headers(tenant_id if self.send_tenant_header else None)

        budget_ms = self._policy.milliseconds(TimeoutBudget.INTERNAL_SERVICE)
        try:
            # Hard deadline for the whole exchange; httpx timeouts are per phase.
            response = await asyncio.wait_for(self._get(url, headers), timeout=budget_ms / 1000)
        except asyncio.TimeoutError:
            logger.error(
                "Failed to validate %s %s: timeout of %sms exceeded", self.kind.value, entity_id, budget_ms
            )
            return self._failed(f"timeout of {budget_ms}ms exceeded")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            detail = describe_http_error(exc) if isinstance(exc, httpx.HTTPError) else str(exc)
            logger.error("Failed to validate %s %s: %s", self.kind.value, entity_id, detail)
            return self._failed(detail)

        if response.status_code == 404:
            logger.info("%s %s not found", self.label, entity_id)
            return ValidationResult.absent()

        if not response.is_success:
            logger.error(
                "Failed to validate %s %s: HTTP %s", self.kind.value, entity_id, response.status_code
            )
            return self._failed(f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            logger.error("Failed to validate %s %s: response is not JSON", self.kind.value, entity_id)
            return self._failed("response is not valid JSON")

        result = self.normalize(payload) if isinstance(payload, dict) else None
        if result is None:
            logger.error("Failed to validate %s %s: unexpected payload shape", self.kind.value, entity_id)
            return self._failed("unexpected response payload")
        return result

    async def _get(self, url: str, headers: dict[str, str]) -> httpx.Response:
        timeout = self._policy.httpx_timeout(TimeoutBudget.INTERNAL_SERVICE)
        if self._client is not None:
            return await self._client.get(url, headers=headers, timeout=timeout)
        async with build_async_client(self._settings, timeout=timeout) as client:
            return await client.get(url, headers=headers)

    def normalize(self, payload: dict[str, Any]) -> ValidationResult | None:
        """Map a 2xx payload to a result; `None` means the shape is unexpected."""

        exists = payload.get("exists")
        if not isinstance(exists, bool):
            return None
        return ValidationResult(exists=exists, data=_as_data(payload.get(self.payload_key)))

    def _failed(self, detail: str) -> ValidationResult:
        return ValidationResult.failed(f"{self.label} validation failed: {detail}")


def _as_data(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None
