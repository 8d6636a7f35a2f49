"""Validator: service references (services catalog module)."""

from __future__ import annotations

from adapters.entity_validators.base import HttpEntityValidator
from core.domain.models import EntityKind


class ServiceValidator(HttpEntityValidator):
    kind = EntityKind.SERVICE
    module = "services"
    resource = "services"
    payload_key = "service"
