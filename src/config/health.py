"""
Health-check payloads for FKS services.

**Payload shape** (what external health probes consume):

    {
        "status": "healthy" | "unhealthy",
        "service": <service name>,
        "service_type": <service kind>,
        "version": "1.0.0",              # payload schema version
        "timestamp": "2025-08-21T12:00:00Z",
        "environment": <environment tag>,
        "uptime_seconds": 42,            # only when known
        "dependencies": {"postgres": "ok", ...}
    }

An unhealthy payload always carries dependencies["error"] with the reason.
Timestamps come from an injected Clock so tests can freeze them.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from src.config.settings import ResolvedConfig
from src.utils.time import Clock, RealClock, to_utc_isoformat

HEALTH_SCHEMA_VERSION = "1.0.0"

STATUS_HEALTHY = "healthy"
STATUS_UNHEALTHY = "unhealthy"


@dataclass
class HealthResponse:
    """
    One health-check result.

    Attributes:
        status: "healthy" or "unhealthy".
        service: Service name.
        service_type: Service kind ("engine", "api", ...).
        version: Payload schema version.
        timestamp: When the check ran (timezone-aware, UTC).
        environment: Deployment environment tag.
        uptime_seconds: Seconds since service start, None when unknown.
        dependencies: Dependency name -> status string.
    """
    status: str
    service: str
    service_type: str
    version: str
    timestamp: datetime
    environment: str
    uptime_seconds: Optional[int] = None
    dependencies: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def healthy(
        cls,
        service_name: str,
        service_type: str,
        environment: str,
        clock: Optional[Clock] = None,
    ) -> "HealthResponse":
        """Healthy response stamped with the current time; uptime is left unset."""
        return cls(
            status=STATUS_HEALTHY,
            service=service_name,
            service_type=service_type,
            version=HEALTH_SCHEMA_VERSION,
            timestamp=(clock or RealClock()).now(),
            environment=environment,
        )

    @classmethod
    def unhealthy(
        cls,
        service_name: str,
        service_type: str,
        environment: str,
        reason: str,
        clock: Optional[Clock] = None,
    ) -> "HealthResponse":
        """Healthy response flipped to unhealthy, with reason under dependencies["error"]."""
        response = cls.healthy(service_name, service_type, environment, clock=clock)
        response.status = STATUS_UNHEALTHY
        response.dependencies["error"] = reason
        return response

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict; uptime_seconds is omitted when unknown."""
        payload: Dict[str, Any] = {
            "status": self.status,
            "service": self.service,
            "service_type": self.service_type,
            "version": self.version,
            "timestamp": to_utc_isoformat(self.timestamp),
            "environment": self.environment,
        }
        if self.uptime_seconds is not None:
            payload["uptime_seconds"] = self.uptime_seconds
        payload["dependencies"] = dict(self.dependencies)
        return payload

    def to_json(self) -> str:
        """JSON text of to_dict()."""
        return json.dumps(self.to_dict())


def health_response(
    config: ResolvedConfig,
    status: str = STATUS_HEALTHY,
    reason: Optional[str] = None,
    clock: Optional[Clock] = None,
    uptime_seconds: Optional[int] = None,
    dependencies: Optional[Mapping[str, str]] = None,
) -> HealthResponse:
    """
    Build a HealthResponse for the service described by config.

    Args:
        config: Resolved configuration (service name, kind, environment).
        status: "healthy" or "unhealthy".
        reason: Failure reason, stored as dependencies["error"] when unhealthy.
                An unhealthy response without a reason records "unknown".
        clock: Time source for the timestamp (default: RealClock).
        uptime_seconds: Seconds since start, if the caller tracks it.
        dependencies: Extra dependency statuses (e.g., {"postgres": "ok"}).

    Raises:
        ValueError: If status is neither "healthy" nor "unhealthy".
    """
    service = config.service
    if status == STATUS_HEALTHY:
        response = HealthResponse.healthy(service.name, service.kind, service.environment, clock=clock)
    elif status == STATUS_UNHEALTHY:
        response = HealthResponse.unhealthy(
            service.name,
            service.kind,
            service.environment,
            reason if reason is not None else "unknown",
            clock=clock,
        )
    else:
        raise ValueError(
            f"Unknown health status {status!r}; expected {STATUS_HEALTHY!r} or {STATUS_UNHEALTHY!r}"
        )

    response.uptime_seconds = uptime_seconds
    if dependencies:
        # dependencies["error"] always keeps the failure reason.
        for name, dependency_status in dependencies.items():
            response.dependencies.setdefault(name, dependency_status)
    return response


def health_payload(
    config: ResolvedConfig,
    status: str = STATUS_HEALTHY,
    reason: Optional[str] = None,
    clock: Optional[Clock] = None,
    uptime_seconds: Optional[int] = None,
    dependencies: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Health payload as a plain dict (see health_response for arguments)."""
    return health_response(
        config,
        status=status,
        reason=reason,
        clock=clock,
        uptime_seconds=uptime_seconds,
        dependencies=dependencies,
    ).to_dict()
