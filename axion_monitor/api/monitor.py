"""REST endpoints for the monitoring controller.

Paths (all under /api):
    GET  /status            — session status card
    GET  /reading           — latest classified record
    GET  /history?limit=    — retained records, oldest first
    GET  /alerts?limit=     — alert strings, most recent first
    GET  /risk              — aggregate risk verdict
    GET  /impacts?limit=    — high-impact timeline
    POST /monitor/start     — IDLE → RUNNING
    POST /monitor/stop      — RUNNING → IDLE
    POST /monitor/reset     — clear history, alerts and current reading

Every read returns a copy; nothing here can mutate the history.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from axion_monitor.core.controller import MonitorController

logger = logging.getLogger(__name__)


def create_monitor_router(controller: MonitorController) -> APIRouter:
    """Factory that wires the monitoring endpoints to a concrete controller."""

    router = APIRouter(prefix="/api", tags=["monitor"])

    # ── Reads ─────────────────────────────────────────────────────────

    @router.get("/status")
    async def get_status() -> dict[str, Any]:
        return controller.status().model_dump(mode="json")

    @router.get("/reading")
    async def get_reading() -> dict[str, Any]:
        record = controller.current_reading()
        if record is None:
            raise HTTPException(status_code=404, detail="No reading yet")
        return record.summary()

    @router.get("/history")
    async def get_history(limit: int | None = Query(None, ge=1)) -> dict[str, Any]:
        records = controller.recent(limit) if limit is not None else controller.history()
        return {
            "records": [r.summary() for r in records],
            "count": len(records),
            "capacity": controller.config.history_capacity,
        }

    @router.get("/alerts")
    async def get_alerts(limit: int | None = Query(None, ge=1)) -> dict[str, Any]:
        alerts = controller.alerts(limit)
        return {"alerts": alerts, "count": len(alerts)}

    @router.get("/risk")
    async def get_risk() -> dict[str, Any]:
        return controller.risk().model_dump(mode="json")

    @router.get("/impacts")
    async def get_impacts(limit: int = Query(10, ge=1)) -> dict[str, Any]:
        events = controller.high_impact_timeline(limit)
        return {
            "impacts": [e.model_dump(mode="json") for e in events],
            "count": len(events),
        }

    # ── Lifecycle ─────────────────────────────────────────────────────

    @router.post("/monitor/start")
    async def start_monitoring() -> dict[str, Any]:
        controller.start()
        return {"state": controller.state.value}

    @router.post("/monitor/stop")
    async def stop_monitoring() -> dict[str, Any]:
        await controller.stop()
        return {"state": controller.state.value}

    @router.post("/monitor/reset")
    async def reset_monitoring() -> dict[str, Any]:
        controller.reset()
        return {"state": controller.state.value, "data_points": len(controller.history())}

    return router
