"""Validator: professional references (services catalog module)."""

from __future__ import annotations

from adapters.entity_validators.base import HttpEntityValidator
from core.domain.models import EntityKind


class ProfessionalValidator(HttpEntityValidator):
    kind = EntityKind.PROFESSIONAL
    module = "services"
    resource = "professionals"
    payload_key = "professional"
