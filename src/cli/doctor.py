"""Doctor command for configuration and connectivity diagnostics."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from cli.ui_components import build_endpoints_table, build_timeouts_table
from core.config import AppSettings, ServiceEndpointSettings, TimeoutSettings
from core.services.health import HealthAggregator
from core.timeouts import TimeoutPolicy

app = typer.Typer(no_args_is_help=True, help="Configuration and connectivity diagnostics.")

_console = Console()


@app.command()
def run() -> None:
    """Show effective config, check the timeout hierarchy and probe every service."""

    settings = AppSettings()
    endpoints = ServiceEndpointSettings().to_endpoints()
    policy = TimeoutPolicy.from_settings(TimeoutSettings())

    _console.print(build_endpoints_table(endpoints))
    _console.print(build_timeouts_table(policy))

    table = Table(title="nexus-refcheck Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    violations = policy.validate_hierarchy()
    if violations:
        for message in violations:
            table.add_row("Timeout hierarchy", "WARN", message)
    else:
        table.add_row("Timeout hierarchy", "OK", "HEALTH_CHECK < ... < GATEWAY")

    statuses = asyncio.run(HealthAggregator(endpoints, policy, settings=settings).check())
    for module, healthy in statuses.items():
        table.add_row(f"Service {module}", "OK" if healthy else "FAIL", endpoints.url_for(module))

    _console.print(table)

    if violations or not all(statuses.values()):
        raise typer.Exit(code=1)


@app.command()
def timeouts(
    operation: Optional[str] = typer.Option(None, "--operation", "-o", help="Classify an operation category."),
) -> None:
    """Print the timeout budgets (and the budget for an operation category)."""

    policy = TimeoutPolicy.from_settings(TimeoutSettings())
    _console.print(build_timeouts_table(policy))
    if operation:
        budget = policy.for_operation(operation)
        _console.print(f"[cyan]{operation}[/cyan] -> {budget.name} ({policy.milliseconds(budget)} ms)")
        for name, value in policy.debug_headers(operation).items():
            _console.print(f"  {name}: {value}")


@app.command()
def endpoints() -> None:
    """Print the configured module endpoints."""

    _console.print(build_endpoints_table(ServiceEndpointSettings().to_endpoints()))
