"""Settings loaded from the environment (pydantic-settings)."""

from __future__ import annotations

import pydantic
import pytest

from core.config import AppSettings, ServiceEndpointSettings, TimeoutSettings

_URL_VARS = (
    "USER_MANAGEMENT_URL",
    "AUTH_SERVICE_URL",
    "CRM_SERVICE_URL",
    "SERVICES_SERVICE_URL",
    "AGENDAMENTO_SERVICE_URL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _URL_VARS:
        monkeypatch.delenv(name, raising=False)


def test_endpoint_defaults():
    endpoints = ServiceEndpointSettings().to_endpoints()

    assert endpoints.as_dict() == {
        "auth": "http://localhost:3001",
        "crm": "http://localhost:3002",
        "services": "http://localhost:3003",
        "agendamento": "http://localhost:3004",
    }


def test_endpoints_from_service_url_variables(monkeypatch):
    monkeypatch.setenv("CRM_SERVICE_URL", "http://nexus-crm:5004/")
    monkeypatch.setenv("AUTH_SERVICE_URL", "http://nexus-auth:5003")

    endpoints = ServiceEndpointSettings().to_endpoints()

    assert endpoints.crm == "http://nexus-crm:5004"
    assert endpoints.auth == "http://nexus-auth:5003"


def test_user_management_url_wins_over_auth_service_url(monkeypatch):
    monkeypatch.setenv("AUTH_SERVICE_URL", "http://old-auth:3001")
    monkeypatch.setenv("USER_MANAGEMENT_URL", "http://nexus-user-management:5003")

    assert ServiceEndpointSettings().auth == "http://nexus-user-management:5003"


def test_timeouts_must_be_positive(monkeypatch):
    monkeypatch.setenv("TIMEOUT_GATEWAY", "0")

    with pytest.raises(pydantic.ValidationError):
        TimeoutSettings()


def test_app_settings_prefix(monkeypatch):
    monkeypatch.setenv("REFCHECK_LOG_LEVEL", "DEBUG")

    assert AppSettings().log_level == "DEBUG"
