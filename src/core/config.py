"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP validators, health probes) read config consistently.

Three settings groups, each with its own env naming:
- `AppSettings`: `REFCHECK_*` (logging, user agent).
- `ServiceEndpointSettings`: `*_SERVICE_URL`, shared with the sibling services.
- `TimeoutSettings`: `TIMEOUT_*` in milliseconds, shared with the gateway.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import ModuleEndpoints


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra deps)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "nexus-refcheck"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "nexus-refcheck"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "nexus-refcheck"
    return Path.home() / ".config" / "nexus-refcheck"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


# Project first (dev), then the per-user global config.
_ENV_FILES = (".env", str(get_user_env_file()))


class AppSettings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="REFCHECK_",
        extra="ignore",
        case_sensitive=False,
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
    )

    log_level: str = Field(
        default="INFO",
        min_length=1,
        description="Root log level (DEBUG, INFO, WARNING, ...).",
    )
    user_agent: str = Field(
        default="nexus-refcheck/0.1",
        min_length=1,
        description="User-Agent sent on every outbound call.",
    )


class ServiceEndpointSettings(BaseSettings):
    """Base URL of every sibling service, read from `*_SERVICE_URL`."""

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    # USER_MANAGEMENT_URL is the deployment name of the auth module and wins.
    auth: str = Field(
        default="http://localhost:3001",
        validation_alias=AliasChoices("USER_MANAGEMENT_URL", "AUTH_SERVICE_URL"),
    )
    crm: str = Field(
        default="http://localhost:3002",
        validation_alias=AliasChoices("CRM_SERVICE_URL"),
    )
    services: str = Field(
        default="http://localhost:3003",
        validation_alias=AliasChoices("SERVICES_SERVICE_URL"),
    )
    agendamento: str = Field(
        default="http://localhost:3004",
        validation_alias=AliasChoices("AGENDAMENTO_SERVICE_URL"),
    )

    def to_endpoints(self) -> ModuleEndpoints:
        return ModuleEndpoints(
            auth=self.auth,
            crm=self.crm,
            services=self.services,
            agendamento=self.agendamento,
        )


class TimeoutSettings(BaseSettings):
    """Timeout budgets in milliseconds, read from `TIMEOUT_*`.

    The hierarchy invariant (health_check < quick_operations <
    internal_service < api_client < gateway) is not enforced here;
    `TimeoutPolicy.validate_hierarchy` only logs violations.
    """

    model_config = SettingsConfigDict(
        env_prefix="TIMEOUT_",
        extra="ignore",
        case_sensitive=False,
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
    )

    health_check: int = Field(default=5_000, gt=0, description="Liveness probes.")
    quick_operations: int = Field(default=10_000, gt=0, description="Token refresh, simple checks.")
    internal_service: int = Field(default=25_000, gt=0, description="Cross-module validation calls.")
    api_client: int = Field(default=30_000, gt=0, description="Frontend to gateway.")
    gateway: int = Field(default=60_000, gt=0, description="Gateway proxy, uploads, long jobs.")
