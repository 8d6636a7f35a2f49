"""Entity validator contract.

Why Protocol:
- Defines a structural contract (duck typing) without rigid inheritance.
- Lets the coordinator treat HTTP validators and test doubles the same way
  without coupling the Core to concrete adapters.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import EntityKind, ValidationResult


@runtime_checkable
class EntityValidator(Protocol):
    """Minimal contract for one entity kind.

    Design rules:
    - `validate` is async because it performs I/O (HTTP).
    - It must never raise: every failure is reported in the returned
      `ValidationResult`.
    """

    kind: EntityKind

    async def validate(self, entity_id: str, tenant_id: str) -> ValidationResult:
        """Check that `entity_id` exists for `tenant_id` in the owning service."""

        ...
