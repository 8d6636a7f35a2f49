"""Liveness fan-out over every registered sibling service."""

from __future__ import annotations

import asyncio
import logging

import httpx

from adapters.http_client import build_async_client, describe_http_error
from core.config import AppSettings
from core.domain.models import ModuleEndpoints
from core.timeouts import TimeoutBudget, TimeoutPolicy

logger = logging.getLogger(__name__)


class HealthAggregator:
    """Probes `GET {base}/health` on every service concurrently.

    Services are independent: a slow or dead one only costs its own probe
    (bounded by the health-check budget) and only flips its own entry.
    """

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

    async def check(self) -> dict[str, bool]:
        timeout = self._policy.httpx_timeout(TimeoutBudget.HEALTH_CHECK)
        targets = self._endpoints.as_dict()

        if self._client is not None:
            statuses = await self._probe_all(self._client, targets, timeout)
        else:
            async with build_async_client(self._settings, timeout=timeout) as client:
                statuses = await self._probe_all(client, targets, timeout)

        return dict(zip(targets, statuses))

    async def _probe_all(
        self,
        client: httpx.AsyncClient,
        targets: dict[str, str],
        timeout: httpx.Timeout,
    ) -> list[bool]:
        return await asyncio.gather(
            *(self._probe(client, module, url, timeout) for module, url in targets.items())
        )

    async def _probe(
        self,
        client: httpx.AsyncClient,
        module: str,
        base_url: str,
        timeout: httpx.Timeout,
    ) -> bool:
        budget_ms = self._policy.milliseconds(TimeoutBudget.HEALTH_CHECK)
        try:
            response = await asyncio.wait_for(
                client.get(f"{base_url}/health", timeout=timeout),
                timeout=budget_ms / 1000,
            )
        except asyncio.TimeoutError:
            logger.error("Health check failed for %s: timeout of %sms exceeded", module, budget_ms)
            return False
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            detail = describe_http_error(exc) if isinstance(exc, httpx.HTTPError) else str(exc)
            logger.error("Health check failed for %s: %s", module, detail)
            return False

        if not response.is_success:
            logger.error("Health check failed for %s: HTTP %s", module, response.status_code)
            return False
        return True
