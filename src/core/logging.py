from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional


# Tenant of the reference check currently in flight, for enriched logging.
tenant_id_var: ContextVar[Optional[str]] = ContextVar("tenant_id", default=None)


class LoggingContextFilter(logging.Filter):
    """
    Logging filter that injects tenant_id from the context var into each log
    record so formatters can include it.

    If no tenant is set, a placeholder is used.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        tid = tenant_id_var.get()
        setattr(record, "tenant_id", tid or "-")
        return True


@contextmanager
def tenant_context(tenant_id: Optional[str]) -> Iterator[None]:
    """Bind `tenant_id` to log records emitted inside the block."""
    token = tenant_id_var.set(tenant_id)
    try:
        yield
    finally:
        tenant_id_var.reset(token)


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging with a structured format and context filter."""
    handler = logging.StreamHandler(stream=sys.stdout)
    fmt = "%(asctime)s | %(levelname)s | %(name)s | tenant=%(tenant_id)s | %(message)s"
    formatter = logging.Formatter(fmt=fmt)
    handler.setFormatter(formatter)
    handler.addFilter(LoggingContextFilter())

    root = logging.getLogger()
    # Remove pre-existing default handlers configured elsewhere (e.g., basicConfig)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
