"""Module integrator: one entry-point for cross-module reference checks.

This module wires the pieces that were configured separately (endpoints,
timeout policy, per-kind validators, batch coordinator, health aggregator)
so that callers (APIs, batch jobs, the CLI, tests) get one object with a
stable surface.

Configuration is explicit: endpoints and the timeout policy are values built
once from settings and passed to every validator. `configure(...)` swaps the
endpoints value by reference and rebuilds the validators; it does not mutate
anything that in-flight calls are reading.
"""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from adapters.entity_validators import VALIDATOR_CLASSES
from adapters.http_client import build_async_client
from core.config import AppSettings, ServiceEndpointSettings, TimeoutSettings
from core.domain.models import EntityKind, ModuleEndpoints, ValidationRequest, ValidationResult
from core.interfaces.validator import EntityValidator
from core.services.batch_validation import BatchValidationCoordinator
from core.services.health import HealthAggregator
from core.timeouts import TimeoutPolicy

logger = logging.getLogger(__name__)


class ModuleIntegrator:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        endpoints: ModuleEndpoints | None = None,
        policy: TimeoutPolicy | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._endpoints = endpoints or ServiceEndpointSettings().to_endpoints()
        self._policy = policy or TimeoutPolicy.from_settings(TimeoutSettings())
        self._client = client
        self._owns_client = False
        self._policy.validate_hierarchy()
        self._rebuild()

    async def __aenter__(self) -> "ModuleIntegrator":
        if self._client is None:
            self._client = build_async_client(self._settings)
            self._owns_client = True
            self._rebuild()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False
            self._rebuild()

    @property
    def policy(self) -> TimeoutPolicy:
        return self._policy

    @property
    def coordinator(self) -> BatchValidationCoordinator:
        return self._coordinator

    def get_endpoints(self) -> ModuleEndpoints:
        # Frozen model: handing out the value is a safe copy.
        return self._endpoints

    def configure(self, **endpoints: str | None) -> ModuleEndpoints:
        """Replace some endpoints (useful for tests and local setups)."""

        self._endpoints = self._endpoints.merged(**endpoints)
        self._rebuild()
        logger.info("Module endpoints configured: %s", self._endpoints.as_dict())
        return self._endpoints

    def validator_for(self, kind: EntityKind | str) -> EntityValidator:
        resolved = kind if isinstance(kind, EntityKind) else EntityKind.parse(kind)
        if resolved is None or resolved not in self._validators:
            raise KeyError(f"No validator registered for kind: {kind}")
        return self._validators[resolved]

    async def validate(self, kind: EntityKind | str, entity_id: str, tenant_id: str) -> ValidationResult:
        return await self.validator_for(kind).validate(entity_id, tenant_id)

    async def validate_customer(self, customer_id: str, tenant_id: str) -> ValidationResult:
        return await self.validate(EntityKind.CUSTOMER, customer_id, tenant_id)

    async def validate_professional(self, professional_id: str, tenant_id: str) -> ValidationResult:
        return await self.validate(EntityKind.PROFESSIONAL, professional_id, tenant_id)

    async def validate_service(self, service_id: str, tenant_id: str) -> ValidationResult:
        return await self.validate(EntityKind.SERVICE, service_id, tenant_id)

    async def validate_user(self, user_id: str, tenant_id: str) -> ValidationResult:
        return await self.validate(EntityKind.USER, user_id, tenant_id)

    async def validate_company(self, company_id: str) -> ValidationResult:
        return await self.validate(EntityKind.COMPANY, company_id, company_id)

    async def validate_appointment(self, appointment_id: str, tenant_id: str) -> ValidationResult:
        return await self.validate(EntityKind.APPOINTMENT, appointment_id, tenant_id)

    async def validate_batch(
        self,
        requests: Sequence[ValidationRequest],
        *,
        fail_fast: bool = True,
        validate_references: bool = True,
    ) -> dict[str, ValidationResult]:
        return await self._coordinator.validate_batch(
            requests,
            fail_fast=fail_fast,
            validate_references=validate_references,
        )

    async def health_check(self) -> dict[str, bool]:
        return await self._health.check()

    def _rebuild(self) -> None:
        self._validators: dict[EntityKind, EntityValidator] = {
            cls.kind: cls(self._endpoints, self._policy, client=self._client, settings=self._settings)
            for cls in VALIDATOR_CLASSES
        }
        self._coordinator = BatchValidationCoordinator(self._validators)
        self._health = HealthAggregator(
            self._endpoints, self._policy, client=self._client, settings=self._settings
        )
