"""Domain models and errors.

Why:
- Pure data structures (Pydantic v2) and typed errors live here.
- The domain knows nothing about HTTP or the CLI, only about references.
"""

from core.domain.errors import BatchValidationError, RefcheckError
from core.domain.models import EntityKind, ModuleEndpoints, ValidationRequest, ValidationResult

__all__ = [
    "BatchValidationError",
    "EntityKind",
    "ModuleEndpoints",
    "RefcheckError",
    "ValidationRequest",
    "ValidationResult",
]
