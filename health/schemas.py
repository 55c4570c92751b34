# ============================================================================
# HEALTH RESPONSE SCHEMAS
# ============================================================================
# STATUS: Core - Response schemas
# PURPOSE: Pydantic models for the status endpoint body
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Response Schemas

Response models for the status and liveness endpoints. The router
validates every status body against StatusResponse before sending it.
"""

from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, Field

from health.core import AggregatedReport, HealthStatus


class SystemInfoModel(BaseModel):
    """Process metrics of the reporting service."""
    version: str = Field(..., description="Python implementation and version")
    threads_count: int = Field(..., ge=0)
    tasks_count: int = Field(..., ge=0, description="Unfinished asyncio tasks")
    alloc_bytes: int = Field(..., ge=0, description="Resident set size")
    total_alloc_bytes: int = Field(..., ge=0, description="Virtual memory size")
    heap_objects_count: int = Field(..., ge=0)
    gc_collections: int = Field(..., ge=0)


class ComponentModel(BaseModel):
    """Service that owns the health endpoint."""
    name: str
    version: str = ""


class StatusResponse(BaseModel):
    """Body of the status endpoint."""
    status: HealthStatus
    timestamp: datetime
    failures: Dict[str, str] = Field(
        default_factory=dict,
        description="Error text for every failing check, keyed by check name",
    )
    system: SystemInfoModel
    component: Optional[ComponentModel] = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "Partially Available",
                    "timestamp": "2026-10-18T12:00:00.000000Z",
                    "failures": {"rabbitmq": "Timeout during health check"},
                    "system": {
                        "version": "CPython 3.12.7",
                        "threads_count": 4,
                        "tasks_count": 3,
                        "alloc_bytes": 52428800,
                        "total_alloc_bytes": 419430400,
                        "heap_objects_count": 81234,
                        "gc_collections": 57,
                    },
                    "component": {"name": "orders-api", "version": "1.4.2"},
                }
            ]
        }
    }

    @classmethod
    def from_report(cls, report: AggregatedReport) -> "StatusResponse":
        return cls.model_validate(report.to_dict())

    def to_body(self) -> dict:
        """JSON-ready body; component is left out when not configured."""
        body = self.model_dump(mode="json", exclude={"component"})
        # Keep the wire timestamp exactly as the report formatted it
        body["timestamp"] = self.timestamp.isoformat().replace("+00:00", "Z")
        if self.component is not None:
            body["component"] = self.component.model_dump(mode="json")
        return body


class LivenessResponse(BaseModel):
    """Body of the liveness endpoint."""
    status: str = "alive"
    version: str
    build_date: str


__all__ = [
    "SystemInfoModel",
    "ComponentModel",
    "StatusResponse",
    "LivenessResponse",
]
