"""Hierarchical timeout policy for inter-module communication.

Principles:
- Outer layers get strictly more time than the layers they wrap, so an inner
  failure surfaces before an outer caller gives up:
  HEALTH_CHECK < QUICK_OPERATIONS < INTERNAL_SERVICE < API_CLIENT < GATEWAY.
- Every budget is overridable (`TIMEOUT_*`, milliseconds).
- A misconfigured hierarchy is logged, never rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import httpx

from core.config import TimeoutSettings

logger = logging.getLogger(__name__)


class TimeoutBudget(str, Enum):
    HEALTH_CHECK = "health_check"
    QUICK_OPERATIONS = "quick_operations"
    INTERNAL_SERVICE = "internal_service"
    API_CLIENT = "api_client"
    GATEWAY = "gateway"


HIERARCHY: tuple[TimeoutBudget, ...] = (
    TimeoutBudget.HEALTH_CHECK,
    TimeoutBudget.QUICK_OPERATIONS,
    TimeoutBudget.INTERNAL_SERVICE,
    TimeoutBudget.API_CLIENT,
    TimeoutBudget.GATEWAY,
)

_OPERATION_BUDGETS: dict[str, TimeoutBudget] = {
    "health": TimeoutBudget.HEALTH_CHECK,
    "ping": TimeoutBudget.HEALTH_CHECK,
    "auth": TimeoutBudget.QUICK_OPERATIONS,
    "refresh": TimeoutBudget.QUICK_OPERATIONS,
    "validate": TimeoutBudget.QUICK_OPERATIONS,
    "internal": TimeoutBudget.INTERNAL_SERVICE,
    "integration": TimeoutBudget.INTERNAL_SERVICE,
    "cross-module": TimeoutBudget.INTERNAL_SERVICE,
    "frontend": TimeoutBudget.API_CLIENT,
    "client": TimeoutBudget.API_CLIENT,
    "upload": TimeoutBudget.GATEWAY,
    "report": TimeoutBudget.GATEWAY,
    "export": TimeoutBudget.GATEWAY,
    "gateway": TimeoutBudget.GATEWAY,
    # External integrations (WhatsApp, ...) share the outermost budget.
    "external": TimeoutBudget.GATEWAY,
    "whatsapp": TimeoutBudget.GATEWAY,
}


@dataclass(frozen=True)
class TimeoutPolicy:
    """Five named budgets in milliseconds."""

    health_check: int = 5_000
    quick_operations: int = 10_000
    internal_service: int = 25_000
    api_client: int = 30_000
    gateway: int = 60_000

    @classmethod
    def from_settings(cls, settings: TimeoutSettings | None = None) -> "TimeoutPolicy":
        settings = settings or TimeoutSettings()
        return cls(
            health_check=settings.health_check,
            quick_operations=settings.quick_operations,
            internal_service=settings.internal_service,
            api_client=settings.api_client,
            gateway=settings.gateway,
        )

    def milliseconds(self, budget: TimeoutBudget) -> int:
        return getattr(self, budget.value)

    def seconds(self, budget: TimeoutBudget) -> float:
        return self.milliseconds(budget) / 1000

    def httpx_timeout(self, budget: TimeoutBudget) -> httpx.Timeout:
        return httpx.Timeout(self.seconds(budget))

    def for_operation(self, operation: str) -> TimeoutBudget:
        """Classify a free-text operation category.

        Unrecognized categories fall back to INTERNAL_SERVICE.
        """

        return _OPERATION_BUDGETS.get(operation.strip().lower(), TimeoutBudget.INTERNAL_SERVICE)

    def timeout_for_operation(self, operation: str) -> int:
        return self.milliseconds(self.for_operation(operation))

    def debug_headers(self, operation: str) -> dict[str, str]:
        """Headers that tag an outbound call with its operation and budget."""

        return {
            "X-Timeout-Policy": f"{self.timeout_for_operation(operation)}ms",
            "X-Operation-Type": operation,
        }

    def validate_hierarchy(self) -> list[str]:
        """Check the strict-increasing invariant.

        Logs one warning per violated adjacent pair and returns the messages.
        """

        violations: list[str] = []
        for inner, outer in zip(HIERARCHY, HIERARCHY[1:]):
            if self.milliseconds(inner) >= self.milliseconds(outer):
                message = (
                    f"TIMEOUT_{inner.name} ({self.milliseconds(inner)}ms) should be smaller "
                    f"than TIMEOUT_{outer.name} ({self.milliseconds(outer)}ms)"
                )
                logger.warning(message)
                violations.append(message)

        if not violations:
            logger.info(
                "Timeout configuration loaded: %s",
                ", ".join(f"{b.name}={self.milliseconds(b)}ms" for b in HIERARCHY),
            )
        return violations

    def as_dict(self) -> dict[str, int]:
        return {budget.value: self.milliseconds(budget) for budget in HIERARCHY}
