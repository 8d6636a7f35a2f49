"""Module integrator wiring and endpoint reconfiguration."""

from __future__ import annotations

import httpx
import pydantic
import pytest

from core.domain.models import EntityKind, ModuleEndpoints
from core.services.integrator import ModuleIntegrator


@pytest.mark.asyncio
async def test_configure_swaps_endpoints_by_reference(integrator, stub):
    before = integrator.get_endpoints()

    after = integrator.configure(crm="http://crm-v2.test/")

    assert after.crm == "http://crm-v2.test"
    assert before.crm == "http://crm.test"
    assert integrator.get_endpoints() is after

    await integrator.validate_customer("c-1", "comp-1")
    assert stub.called_urls == ["http://crm-v2.test/api/customers/c-1/validate"]


def test_configure_rejects_unknown_endpoint(integrator):
    with pytest.raises(ValueError, match="billing"):
        integrator.configure(billing="http://billing.test")


def test_endpoints_value_is_immutable(endpoints):
    with pytest.raises(pydantic.ValidationError):
        endpoints.crm = "http://elsewhere.test"  # type: ignore[misc]

    assert endpoints.merged(crm=None) == endpoints
    assert ModuleEndpoints.names() == ("auth", "crm", "services", "agendamento")


@pytest.mark.asyncio
async def test_single_entity_helpers_hit_owning_services(integrator, stub):
    stub.on(
        "http://auth.test/api/companies/comp-1/validate",
        httpx.Response(200, json={"success": True, "data": {"id": "comp-1"}}),
    )

    await integrator.validate_customer("c-1", "comp-1")
    await integrator.validate_professional("p-1", "comp-1")
    await integrator.validate_service("s-1", "comp-1")
    await integrator.validate_user("u-1", "comp-1")
    company = await integrator.validate_company("comp-1")
    await integrator.validate_appointment("a-1", "comp-1")

    assert company.exists is True
    assert stub.called_urls == [
        "http://crm.test/api/customers/c-1/validate",
        "http://services.test/api/professionals/p-1/validate",
        "http://services.test/api/services/s-1/validate",
        "http://auth.test/api/users/u-1/validate",
        "http://auth.test/api/companies/comp-1/validate",
        "http://agendamento.test/api/appointments/a-1/validate",
    ]


def test_validator_lookup(integrator):
    assert integrator.validator_for("customer").kind is EntityKind.CUSTOMER
    with pytest.raises(KeyError):
        integrator.validator_for("invoice")


@pytest.mark.asyncio
async def test_context_manager_owns_its_client(settings, endpoints, policy):
    async with ModuleIntegrator(settings, endpoints=endpoints, policy=policy) as integrator:
        assert integrator._client is not None
    assert integrator._client is None


def test_misconfigured_policy_is_tolerated(settings, endpoints, caplog):
    from core.timeouts import TimeoutPolicy

    integrator = ModuleIntegrator(
        settings,
        endpoints=endpoints,
        policy=TimeoutPolicy(health_check=90_000),
    )

    assert integrator.policy.health_check == 90_000
    assert any("TIMEOUT_HEALTH_CHECK" in record.getMessage() for record in caplog.records)
