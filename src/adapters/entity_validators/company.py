"""Validator: company (tenant) references.

Compatibility note:
- The auth module answers in two envelopes: the legacy `{success, data}` and
  the current `{exists, company}`. Both are accepted and normalized to the same
  `ValidationResult`; `success` wins when present.
- No tenant header is sent: the id being checked is the tenant itself.
"""

from __future__ import annotations

from typing import Any

from adapters.entity_validators.base import HttpEntityValidator
from core.domain.models import EntityKind, ValidationResult


class CompanyValidator(HttpEntityValidator):
    kind = EntityKind.COMPANY
    module = "auth"
    resource = "companies"
    payload_key = "company"
    send_tenant_header = False

    def normalize(self, payload: dict[str, Any]) -> ValidationResult | None:
        if "success" in payload:
            success = payload.get("success")
            if not isinstance(success, bool):
                return None
            data = payload.get("data")
            return ValidationResult(exists=success, data=data if isinstance(data, dict) else None)
        return super().normalize(payload)
