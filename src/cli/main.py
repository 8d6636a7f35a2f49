"""Command line entry point (Typer).

The CLI is a thin shell: every command delegates to `ModuleIntegrator` and
only handles printing and exit codes.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_results_json
from cli import doctor
from cli.ui_components import (
    build_batch_error_panel,
    build_health_table,
    build_results_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.errors import BatchValidationError
from core.domain.models import EntityKind, ValidationRequest, ValidationResult
from core.logging import configure_logging
from core.services.integrator import ModuleIntegrator

app = typer.Typer(no_args_is_help=True, help="Cross-module reference validation for ERP Nexus services.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide the banner."),
) -> None:
    settings = AppSettings()
    configure_logging(settings.log_level)
    if not quiet:
        print_banner(_console)


def load_requests(path: Path) -> list[ValidationRequest]:
    """Read a JSON list of `{kind, id, tenant_id, key}` objects."""

    try:
        raw: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"batch file is not valid JSON: {exc}", param_hint="FILE") from exc
    if not isinstance(raw, list):
        raise typer.BadParameter("batch file must contain a JSON list", param_hint="FILE")

    requests: list[ValidationRequest] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise typer.BadParameter(f"entry {index} is not a JSON object", param_hint="FILE")
        try:
            requests.append(ValidationRequest.from_dict(item))
        except ValueError as exc:
            raise typer.BadParameter(f"entry {index}: {exc}", param_hint="FILE") from exc
    return requests


async def _health() -> tuple[dict[str, bool], ModuleIntegrator]:
    async with ModuleIntegrator() as integrator:
        return await integrator.health_check(), integrator


async def _validate(kind: EntityKind, entity_id: str, tenant: str) -> ValidationResult:
    async with ModuleIntegrator() as integrator:
        return await integrator.validate(kind, entity_id, tenant)


async def _batch(
    requests: list[ValidationRequest],
    fail_fast: bool,
    validate_references: bool,
) -> dict[str, ValidationResult]:
    async with ModuleIntegrator() as integrator:
        return await integrator.validate_batch(
            requests,
            fail_fast=fail_fast,
            validate_references=validate_references,
        )


@app.command()
def health() -> None:
    """Probe `/health` on every registered service."""

    statuses, integrator = asyncio.run(_health())
    _console.print(build_health_table(statuses, integrator.get_endpoints()))
    if not all(statuses.values()):
        raise typer.Exit(code=1)


@app.command()
def validate(
    kind: EntityKind = typer.Argument(..., help="Entity kind."),
    entity_id: str = typer.Argument(..., metavar="ID", help="Entity id."),
    tenant: str = typer.Option(..., "--tenant", "-t", help="Company (tenant) id."),
) -> None:
    """Check a single reference."""

    result = asyncio.run(_validate(kind, entity_id, tenant))
    _console.print(build_results_table({kind.value: result}))
    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command()
def batch(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of requests."),
    fail_fast: bool = typer.Option(True, "--fail-fast/--no-fail-fast", help="Stop at the first failure."),
    validate_references: bool = typer.Option(
        True,
        "--validate-references/--no-validate-references",
        help="Treat missing references as failures.",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write results as JSON."),
) -> None:
    """Validate a batch of references in order."""

    requests = load_requests(file)
    try:
        results = asyncio.run(_batch(requests, fail_fast, validate_references))
    except BatchValidationError as exc:
        _console.print(build_batch_error_panel(exc))
        raise typer.Exit(code=1) from exc

    _console.print(build_results_table(results))
    if output:
        path = export_results_json(results=results, output_path=output)
        _console.print(f"[green]Results written to:[/green] {path}")
    if validate_references and not all(r.is_valid for r in results.values()):
        raise typer.Exit(code=1)


def run() -> None:
    app()
