"""Shared fixtures.

HTTP is never real: every client is backed by `httpx.MockTransport` routed
through `ServiceStub`.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from core.config import AppSettings
from core.domain.models import ModuleEndpoints
from core.services.integrator import ModuleIntegrator
from core.timeouts import TimeoutPolicy
from tests.stubs import ServiceStub


@pytest.fixture
def endpoints() -> ModuleEndpoints:
    return ModuleEndpoints(
        auth="http://auth.test",
        crm="http://crm.test",
        services="http://services.test",
        agendamento="http://agendamento.test",
    )


@pytest.fixture
def policy() -> TimeoutPolicy:
    # Same hierarchy as production, scaled down so timeout tests stay fast.
    return TimeoutPolicy(
        health_check=200,
        quick_operations=300,
        internal_service=400,
        api_client=500,
        gateway=600,
    )


@pytest.fixture
def stub() -> ServiceStub:
    return ServiceStub()


@pytest_asyncio.fixture
async def client(stub: ServiceStub):
    async with httpx.AsyncClient(transport=httpx.MockTransport(stub.handler)) as http_client:
        yield http_client


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(user_agent="refcheck-tests")


@pytest.fixture
def integrator(settings, endpoints, policy, client) -> ModuleIntegrator:
    return ModuleIntegrator(settings, endpoints=endpoints, policy=policy, client=client)
