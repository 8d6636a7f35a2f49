"""Timeout policy: budgets, classifier and hierarchy check."""

from __future__ import annotations

import logging

import httpx
import pytest

from core.config import TimeoutSettings
from core.timeouts import HIERARCHY, TimeoutBudget, TimeoutPolicy


def test_defaults_follow_the_hierarchy():
    policy = TimeoutPolicy()

    assert policy.as_dict() == {
        "health_check": 5000,
        "quick_operations": 10000,
        "internal_service": 25000,
        "api_client": 30000,
        "gateway": 60000,
    }
    values = [policy.milliseconds(budget) for budget in HIERARCHY]
    assert values == sorted(values)
    assert policy.validate_hierarchy() == []


@pytest.mark.parametrize(
    "operation, budget",
    [
        ("health", TimeoutBudget.HEALTH_CHECK),
        ("ping", TimeoutBudget.HEALTH_CHECK),
        ("auth", TimeoutBudget.QUICK_OPERATIONS),
        ("refresh", TimeoutBudget.QUICK_OPERATIONS),
        ("validate", TimeoutBudget.QUICK_OPERATIONS),
        ("internal", TimeoutBudget.INTERNAL_SERVICE),
        ("cross-module", TimeoutBudget.INTERNAL_SERVICE),
        ("client", TimeoutBudget.API_CLIENT),
        ("frontend", TimeoutBudget.API_CLIENT),
        ("upload", TimeoutBudget.GATEWAY),
        ("gateway", TimeoutBudget.GATEWAY),
        ("external", TimeoutBudget.GATEWAY),
        ("whatsapp", TimeoutBudget.GATEWAY),
        ("  HEALTH ", TimeoutBudget.HEALTH_CHECK),
        ("unknown", TimeoutBudget.INTERNAL_SERVICE),
        ("", TimeoutBudget.INTERNAL_SERVICE),
    ],
)
def test_operation_classifier(operation, budget):
    assert TimeoutPolicy().for_operation(operation) is budget


def test_timeout_for_operation_in_milliseconds():
    policy = TimeoutPolicy()

    assert policy.timeout_for_operation("health") == 5000
    assert policy.timeout_for_operation("unknown") == 25000


def test_debug_headers_tag_operation_and_budget():
    policy = TimeoutPolicy()

    assert policy.debug_headers("whatsapp") == {
        "X-Timeout-Policy": "60000ms",
        "X-Operation-Type": "whatsapp",
    }


def test_seconds_and_httpx_timeout():
    policy = TimeoutPolicy(internal_service=2500)

    assert policy.seconds(TimeoutBudget.INTERNAL_SERVICE) == 2.5
    timeout = policy.httpx_timeout(TimeoutBudget.INTERNAL_SERVICE)
    assert isinstance(timeout, httpx.Timeout)
    assert timeout.read == 2.5


def test_violations_are_logged_not_rejected(caplog):
    policy = TimeoutPolicy(health_check=12_000, quick_operations=10_000, api_client=70_000)

    with caplog.at_level(logging.WARNING, logger="core.timeouts"):
        violations = policy.validate_hierarchy()

    assert len(violations) == 2
    assert "TIMEOUT_HEALTH_CHECK" in violations[0]
    assert "TIMEOUT_API_CLIENT" in violations[1]
    assert [r.levelno for r in caplog.records] == [logging.WARNING, logging.WARNING]


def test_equal_budgets_violate_strict_order():
    policy = TimeoutPolicy(internal_service=30_000, api_client=30_000)

    assert len(policy.validate_hierarchy()) == 1


def test_from_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("TIMEOUT_HEALTH_CHECK", "1000")
    monkeypatch.setenv("TIMEOUT_INTERNAL_SERVICE", "20000")

    policy = TimeoutPolicy.from_settings(TimeoutSettings())

    assert policy.health_check == 1000
    assert policy.internal_service == 20000
    assert policy.gateway == 60000
