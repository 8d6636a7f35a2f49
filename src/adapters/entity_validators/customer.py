"""Validator: customer references (CRM module).

Typical caller: appointment creation, which must not attach a customer id
that the CRM does not know for the same company.
"""

from __future__ import annotations

from adapters.entity_validators.base import HttpEntityValidator
from core.domain.models import EntityKind


class CustomerValidator(HttpEntityValidator):
    """Checks `GET {crm}/api/customers/{id}/validate`."""

    kind = EntityKind.CUSTOMER
    module = "crm"
    resource = "customers"
    payload_key = "customer"
