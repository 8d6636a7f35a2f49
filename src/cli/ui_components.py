"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets several commands reuse the same tables.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import BatchValidationError
from core.domain.models import ModuleEndpoints, ValidationResult
from core.timeouts import HIERARCHY, TimeoutPolicy


def print_banner(console: Console) -> None:
    title = Text("nexus-refcheck", style="bold cyan")
    subtitle = Text("Cross-module reference validation", style="dim")
    console.print(Panel(Text.assemble(title, "\n", subtitle), border_style="cyan", padding=(0, 2)))


def build_results_table(results: Mapping[str, ValidationResult]) -> Table:
    table = Table(title="Reference checks")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Exists", style="white")
    table.add_column("Error", style="red")
    for key, result in results.items():
        exists = "[green]yes[/green]" if result.exists else "[red]no[/red]"
        table.add_row(key, exists, result.error or "")
    return table


def build_health_table(statuses: Mapping[str, bool], endpoints: ModuleEndpoints) -> Table:
    table = Table(title="Service health")
    table.add_column("Service", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("URL", style="dim")
    for module, healthy in statuses.items():
        status = "[green]UP[/green]" if healthy else "[red]DOWN[/red]"
        table.add_row(module, status, endpoints.url_for(module))
    return table


def build_timeouts_table(policy: TimeoutPolicy) -> Table:
    table = Table(title="Timeout policy")
    table.add_column("Budget", style="cyan", no_wrap=True)
    table.add_column("Env", style="dim")
    table.add_column("Value", style="white", justify="right")
    for budget in HIERARCHY:
        table.add_row(budget.name, f"TIMEOUT_{budget.name}", f"{policy.milliseconds(budget)} ms")
    return table


def build_endpoints_table(endpoints: ModuleEndpoints) -> Table:
    table = Table(title="Module endpoints")
    table.add_column("Module", style="cyan", no_wrap=True)
    table.add_column("Base URL", style="magenta")
    for module, url in endpoints.as_dict().items():
        table.add_row(module, url)
    return table


def build_batch_error_panel(error: BatchValidationError) -> Panel:
    body = Text()
    body.append(f"{error.message}\n\n")
    body.append("Key: ", style="bold")
    body.append(f"{error.failed_key}\n")
    body.append("Kind: ", style="bold")
    body.append(f"{error.failed_kind}\n")
    if error.original_error is not None:
        body.append("Cause: ", style="bold")
        body.append(str(error.original_error), style="dim")
    return Panel(body, title=Text("Batch rejected", style="bold red"), border_style="red")
