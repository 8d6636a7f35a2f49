"""Validator: appointments live in the scheduling module (agendamento)."""

from __future__ import annotations

from adapters.entity_validators.base import HttpEntityValidator
from core.domain.models import EntityKind


class AppointmentValidator(HttpEntityValidator):
    kind = EntityKind.APPOINTMENT
    module = "agendamento"
    resource = "appointments"
    payload_key = "appointment"
