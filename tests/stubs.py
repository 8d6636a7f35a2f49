"""Test doubles for HTTP services and validators."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Union

import httpx

from core.domain.models import EntityKind, ValidationResult

Handler = Callable[[httpx.Request], Union[httpx.Response, Awaitable[httpx.Response]]]
Route = Union[httpx.Response, Exception, Handler]


class ServiceStub:
    """Route table keyed by absolute URL (`http://crm.test/api/...`).

    Records every request in arrival order; unknown URLs answer 501.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Route] = {}
        self.calls: list[httpx.Request] = []

    def on(self, url: str, route: Route) -> None:
        self.routes[url] = route

    @property
    def called_urls(self) -> list[str]:
        return [str(request.url) for request in self.calls]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(501, json={"error": f"no stub for {request.url}"})
        if isinstance(route, httpx.Response):
            return route
        if isinstance(route, Exception):
            raise route
        result = route(request)
        if asyncio.iscoroutine(result):
            result = await result
        return result


class RecordingValidator:
    """In-memory validator that records the ids it was asked about."""

    def __init__(self, kind: EntityKind, outcomes: dict[str, ValidationResult], calls: list[str]) -> None:
        self.kind = kind
        self._outcomes = outcomes
        self._calls = calls

    async def validate(self, entity_id: str, tenant_id: str) -> ValidationResult:
        self._calls.append(f"{self.kind.value}:{entity_id}")
        await asyncio.sleep(0)
        return self._outcomes.get(entity_id, ValidationResult.found({"id": entity_id}))
