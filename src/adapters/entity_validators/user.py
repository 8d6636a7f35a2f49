from __future__ import annotations

from adapters.entity_validators.base import HttpEntityValidator
from core.domain.models import EntityKind


class UserValidator(HttpEntityValidator):
    """User references are owned by user-management (the `auth` endpoint)."""

    kind = EntityKind.USER
    module = "auth"
    resource = "users"
    payload_key = "user"
