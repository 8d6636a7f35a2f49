"""Reference guard for inbound write requests.

Turns a request body (plus headers) into a validation batch. When a reference
does not hold the result carries a structured rejection that an HTTP layer can
return as-is; otherwise it carries the validated entity payloads. Runs behind the gateway, which has already authenticated the
inbound request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from adapters.http_client import COMPANY_ID_HEADER, read_header
from core.domain.errors import BatchValidationError
from core.domain.models import EntityKind, ValidationRequest
from core.services.batch_validation import BatchValidationCoordinator

logger = logging.getLogger(__name__)

APPOINTMENT_REFERENCES: tuple[EntityKind, ...] = (
    EntityKind.CUSTOMER,
    EntityKind.PROFESSIONAL,
    EntityKind.SERVICE,
)

# Owning module as reported to API clients.
_OWNING_MODULE: dict[EntityKind, str] = {
    EntityKind.CUSTOMER: "crm",
    EntityKind.PROFESSIONAL: "services",
    EntityKind.SERVICE: "services",
    EntityKind.USER: "user-management",
    EntityKind.COMPANY: "user-management",
    EntityKind.APPOINTMENT: "agendamento",
}


@dataclass
class ReferenceRejection:
    """Why a write must not proceed (maps to a 4xx/5xx response)."""

    status: int
    code: str
    error: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_response(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": False, "error": self.error, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


@dataclass
class ReferenceCheck:
    """Outcome of a guard check.

    `validated` maps each checked key (`customer`, `service`, ...) to the
    entity payload its owning service returned, for the handler to reuse.
    """

    rejection: ReferenceRejection | None = None
    validated: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.rejection is None


def _camel(kind: EntityKind) -> str:
    return f"{kind.value}Id"


def _snake(kind: EntityKind) -> str:
    return f"{kind.value}_id"


def resolve_tenant_id(
    headers: Mapping[str, str] | None,
    body: Mapping[str, Any] | None = None,
) -> str | None:
    """Tenant from `X-Company-ID` (any casing), else `companyId`/`company_id`."""

    tenant = read_header(dict(headers or {}), COMPANY_ID_HEADER)
    if tenant:
        return tenant
    body = body or {}
    for name in ("companyId", "company_id"):
        value = body.get(name)
        if value:
            return str(value)
    return None


def build_reference_requests(
    body: Mapping[str, Any],
    tenant_id: str,
    kinds: Iterable[EntityKind] = APPOINTMENT_REFERENCES,
) -> list[ValidationRequest]:
    """One request per referenced id present in `body`, keyed by kind name."""

    requests: list[ValidationRequest] = []
    for kind in kinds:
        value = body.get(_camel(kind)) or body.get(_snake(kind))
        if not value:
            continue
        requests.append(
            ValidationRequest(kind=kind.value, id=str(value), tenant_id=tenant_id, key=kind.value)
        )
    return requests


class ReferenceGuard:
    def __init__(self, coordinator: BatchValidationCoordinator) -> None:
        self._coordinator = coordinator

    async def check(
        self,
        body: Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
        kinds: Iterable[EntityKind] = APPOINTMENT_REFERENCES,
        *,
        require_tenant: bool = False,
    ) -> ReferenceCheck:
        """Validate every referenced id in `body`.

        A body without references passes untouched, unless `require_tenant`
        asks for the tenant up front (as composite write paths do).
        """

        tenant_id = resolve_tenant_id(headers, body)
        if require_tenant and not tenant_id:
            return ReferenceCheck(rejection=_tenant_required())

        requests = build_reference_requests(body, tenant_id or "", kinds)
        if not requests:
            return ReferenceCheck()
        if not tenant_id:
            return ReferenceCheck(rejection=_tenant_required())

        logger.info("Validating %d references for tenant %s", len(requests), tenant_id)
        try:
            results = await self._coordinator.validate_batch(requests)
        except BatchValidationError as exc:
            return ReferenceCheck(rejection=self._rejection(exc, requests))

        validated = {key: result.data for key, result in results.items() if result.exists and result.data}
        return ReferenceCheck(validated=validated)

    async def check_appointment(
        self,
        body: Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
    ) -> ReferenceCheck:
        return await self.check(body, headers, APPOINTMENT_REFERENCES, require_tenant=True)

    @staticmethod
    def _rejection(exc: BatchValidationError, requests: list[ValidationRequest]) -> ReferenceRejection:
        kind = EntityKind.parse(exc.failed_kind)
        value = next((r.id for r in requests if r.key == exc.failed_key), None)
        label = kind.value.capitalize() if kind else exc.failed_kind
        detail = exc.original_error if isinstance(exc.original_error, str) else None

        logger.warning("Reference rejected: %s", exc.message)
        return ReferenceRejection(
            status=400,
            code=f"INVALID_{exc.failed_kind.upper()}_REFERENCE",
            error=f"{label} not found or validation failed",
            details={
                "field": _camel(kind) if kind else exc.failed_key,
                "value": value,
                "message": detail or f"{label} does not exist in {_OWNING_MODULE.get(kind, 'its')} module",
                "module": _OWNING_MODULE.get(kind) if kind else None,
            },
        )


def _tenant_required() -> ReferenceRejection:
    return ReferenceRejection(
        status=400,
        code="COMPANY_ID_REQUIRED",
        error="Company ID is required for reference validation",
    )
