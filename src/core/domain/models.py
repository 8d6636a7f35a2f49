"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Validation results cross module boundaries (CLI, JSON export, callers),
  so a strict, self-documented shape keeps every validator honest.
- `ModuleEndpoints` is an immutable value: reconfiguring means building a
  new one and swapping the reference, never mutating fields in place.

Note:
- These models describe *what* a reference check is, not *how* it is
  performed over HTTP.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class EntityKind(str, Enum):
    """Entity kinds that can be referenced across modules."""

    CUSTOMER = "customer"
    PROFESSIONAL = "professional"
    SERVICE = "service"
    USER = "user"
    COMPANY = "company"
    APPOINTMENT = "appointment"

    @classmethod
    def parse(cls, value: str) -> "EntityKind | None":
        """Return the matching kind, or None for unrecognized values."""

        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class ValidationRequest:
    """One entry of a batch.

    `kind` stays a raw string so an unrecognized value still reaches the
    coordinator, which rejects it.
    `key` correlates the request to its entry in the result map and should be
    unique within a batch.
    """

    kind: str
    id: str
    tenant_id: str
    key: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ValidationRequest":
        """Build a request from a JSON-ish dict (accepts camelCase aliases)."""

        kind = raw.get("kind", raw.get("type"))
        tenant_id = raw.get("tenant_id", raw.get("tenantId", raw.get("companyId")))
        entity_id = raw.get("id")
        key = raw.get("key")
        missing = [
            name
            for name, value in (("kind", kind), ("id", entity_id), ("tenant_id", tenant_id), ("key", key))
            if value in (None, "")
        ]
        if missing:
            raise ValueError(f"Validation request is missing fields: {', '.join(missing)}")
        return cls(kind=str(kind), id=str(entity_id), tenant_id=str(tenant_id), key=str(key))


class ValidationResult(BaseModel):
    """Normalized outcome of one existence check.

    - `exists=True`: the owning service confirmed the entity.
    - `exists=False, error=None`: confirmed absent (e.g. HTTP 404).
    - `exists=False, error=<msg>`: could not be confirmed (transport, timeout,
      unexpected payload).
    """

    model_config = ConfigDict(frozen=True)

    exists: bool = Field(
        default=False,
        description="Whether the owning service confirmed the entity exists.",
    )
    error: str | None = Field(
        default=None,
        description="Failure detail when existence could not be confirmed.",
    )
    data: dict[str, Any] | None = Field(
        default=None,
        description="Entity payload returned by the owning service, if any.",
    )

    @classmethod
    def found(cls, data: dict[str, Any] | None = None) -> "ValidationResult":
        return cls(exists=True, data=data)

    @classmethod
    def absent(cls) -> "ValidationResult":
        return cls(exists=False)

    @classmethod
    def failed(cls, message: str) -> "ValidationResult":
        return cls(exists=False, error=message)

    @property
    def is_valid(self) -> bool:
        return self.exists and self.error is None


class ModuleEndpoints(BaseModel):
    """Base URLs of the sibling services.

    Immutable: use `merged(...)` to derive a reconfigured copy.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    auth: str = Field(default="http://localhost:3001", min_length=1)
    crm: str = Field(default="http://localhost:3002", min_length=1)
    services: str = Field(default="http://localhost:3003", min_length=1)
    agendamento: str = Field(default="http://localhost:3004", min_length=1)

    @field_validator("auth", "crm", "services", "agendamento")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(cls.model_fields)

    def url_for(self, module: str) -> str:
        if module not in self.names():
            raise KeyError(f"Unknown module endpoint: {module}")
        return getattr(self, module)

    def merged(self, **overrides: str | None) -> "ModuleEndpoints":
        """Return a new value with the given endpoints replaced.

        `None` values are ignored; unknown names raise `ValueError`.
        """

        unknown = sorted(set(overrides) - set(self.names()))
        if unknown:
            raise ValueError(f"Unknown module endpoint(s): {', '.join(unknown)}")
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ModuleEndpoints(**data)

    def as_dict(self) -> dict[str, str]:
        return dict(self.model_dump())
