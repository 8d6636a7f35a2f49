"""Batch reference validation.

This module owns the ordering and short-circuit rules for validating a set
of cross-module references before a dependent write:

- Requests run strictly in input order, one at a time. Request i+1 is never
  dispatched before request i has completed.
- In fail-fast mode (default) the first failing reference raises
  `BatchValidationError` and nothing after it is dispatched.
- In collect-all mode every request runs and the result map has one entry per
  request.
- An unknown kind is a programmer error and always raises.

There is no distributed transaction behind this: a reference confirmed here
can still be deleted by its owning service before the caller writes. The
guarantee is only that no further checks are issued after a known failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from core.domain.errors import BatchValidationError
from core.domain.models import EntityKind, ValidationRequest, ValidationResult
from core.interfaces.validator import EntityValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchOptions:
    """Knobs for `BatchValidationCoordinator.validate_batch`."""

    fail_fast: bool = True
    validate_references: bool = True


class BatchValidationCoordinator:
    """Runs validation requests through the validator registered for each kind."""

    def __init__(self, validators: Mapping[EntityKind, EntityValidator]) -> None:
        self._validators = dict(validators)

    @property
    def kinds(self) -> tuple[EntityKind, ...]:
        return tuple(self._validators)

    async def validate_batch(
        self,
        requests: Sequence[ValidationRequest],
        *,
        fail_fast: bool = True,
        validate_references: bool = True,
    ) -> dict[str, ValidationResult]:
        logger.info("Batch validation for %d references", len(requests))
        if not requests:
            return {}

        results: dict[str, ValidationResult] = {}
        for request in requests:
            validator = self._resolve(request)

            try:
                result = await validator.validate(request.id, request.tenant_id)
            except Exception as exc:
                # Validators report failures as data; this only catches a broken one.
                logger.exception("Validator for %s raised on key %r", request.kind, request.key)
                if fail_fast:
                    raise BatchValidationError(
                        f"Batch validation failed at key '{request.key}': {exc}",
                        failed_key=request.key,
                        failed_kind=request.kind,
                        original_error=exc,
                    ) from exc
                results[request.key] = ValidationResult.failed(str(exc) or "Validation failed")
                continue

            if validate_references and (not result.exists or result.error):
                detail = result.error or f"{request.kind} with ID '{request.id}' does not exist"
                if fail_fast:
                    logger.warning("Batch validation aborted at key %r: %s", request.key, detail)
                    raise BatchValidationError(
                        f"Batch validation failed at key '{request.key}': {detail}",
                        failed_key=request.key,
                        failed_kind=request.kind,
                        original_error=result.error
                        or LookupError(f"Reference not found: {request.kind}/{request.id}"),
                    )
                logger.warning("Reference check failed for key %r: %s", request.key, detail)

            results[request.key] = result

        logger.info("Batch validation completed: %d results", len(results))
        return results

    async def run(
        self,
        requests: Sequence[ValidationRequest],
        options: BatchOptions | None = None,
    ) -> dict[str, ValidationResult]:
        options = options or BatchOptions()
        return await self.validate_batch(
            requests,
            fail_fast=options.fail_fast,
            validate_references=options.validate_references,
        )

    def _resolve(self, request: ValidationRequest) -> EntityValidator:
        kind = EntityKind.parse(request.kind)
        validator = self._validators.get(kind) if kind is not None else None
        if validator is None:
            message = f"Unknown validation kind: {request.kind}"
            logger.error("%s (key %r)", message, request.key)
            raise BatchValidationError(
                f"Batch validation failed at key '{request.key}': {message}",
                failed_key=request.key,
                failed_kind=request.kind,
                original_error=ValueError(message),
            )
        return validator
