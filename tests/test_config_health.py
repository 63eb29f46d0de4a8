"""
Tests for src/config/health.py

A FrozenClock pins the timestamp so payloads compare exactly.
"""

import json
from datetime import datetime, timezone

import pytest

from src.config.health import (
    HEALTH_SCHEMA_VERSION,
    HealthResponse,
    health_payload,
    health_response,
)
from src.config.settings import ResolvedConfig, ServiceSettings
from src.utils.time import FrozenClock

FIXED_NOW = datetime(2025, 8, 21, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def config():
    return ResolvedConfig(service=ServiceSettings(name="risk-engine", kind="engine", environment="staging"))


@pytest.fixture
def clock():
    return FrozenClock(FIXED_NOW)


def test_healthy_payload_shape(config, clock):
    payload = health_payload(config, clock=clock)

    assert payload == {
        "status": "healthy",
        "service": "risk-engine",
        "service_type": "engine",
        "version": HEALTH_SCHEMA_VERSION,
        "timestamp": "2025-08-21T12:00:00Z",
        "environment": "staging",
        "dependencies": {},
    }


def test_uptime_included_only_when_known(config, clock):
    assert "uptime_seconds" not in health_payload(config, clock=clock)
    assert health_payload(config, clock=clock, uptime_seconds=42)["uptime_seconds"] == 42


def test_unhealthy_payload_always_has_error_dependency(config, clock):
    payload = health_payload(config, status="unhealthy", reason="postgres unreachable", clock=clock)

    assert payload["status"] == "unhealthy"
    assert payload["dependencies"]["error"] == "postgres unreachable"


def test_unhealthy_error_cannot_be_overwritten_by_dependencies(config, clock):
    payload = health_payload(
        config,
        status="unhealthy",
        reason="disk full",
        clock=clock,
        dependencies={"error": "other", "redis": "ok"},
    )

    assert payload["dependencies"] == {"error": "disk full", "redis": "ok"}


def test_unhealthy_without_reason_records_unknown(config, clock):
    payload = health_payload(config, status="unhealthy", clock=clock)

    assert payload["dependencies"]["error"] == "unknown"


def test_unknown_status_is_rejected(config, clock):
    with pytest.raises(ValueError):
        health_payload(config, status="degraded", clock=clock)


def test_health_response_constructors(clock):
    healthy = HealthResponse.healthy("svc", "api", "production", clock=clock)
    assert healthy.status == "healthy"
    assert healthy.timestamp == FIXED_NOW
    assert healthy.dependencies == {}
    assert healthy.uptime_seconds is None
    assert healthy.version == "1.0.0"

    unhealthy = HealthResponse.unhealthy("svc", "api", "production", "timeout", clock=clock)
    assert unhealthy.status == "unhealthy"
    assert unhealthy.dependencies == {"error": "timeout"}


def test_health_response_defaults_to_real_clock(config):
    before = datetime.now(timezone.utc)
    response = health_response(config)
    after = datetime.now(timezone.utc)

    assert before <= response.timestamp <= after


def test_to_json_round_trips_through_json(config, clock):
    response = health_response(config, clock=clock, dependencies={"redis": "ok"})

    assert json.loads(response.to_json()) == response.to_dict()
