"""WebSocket endpoint: streams classified readings to display clients.

Path: /ws/readings

On connect the client receives one {"type": "status", ...} frame; after
that every classified record arrives as {"type": "reading", ...} and every
lifecycle transition as {"type": "state", ...}.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from axion_monitor.core.controller import MonitorController
from axion_monitor.services.broadcaster import ReadingBroadcaster

logger = logging.getLogger(__name__)


def create_stream_router(controller: MonitorController, broadcaster: ReadingBroadcaster) -> APIRouter:
    """Factory that wires the reading stream to a controller and broadcaster."""

    router = APIRouter()

    @router.websocket("/ws/readings")
    async def stream_readings(websocket: WebSocket) -> None:
        await broadcaster.connect(websocket, first_frame={
            "type": "status",
            "status": controller.status().model_dump(mode="json"),
        })
        try:
            while True:
                # Keep the connection alive; readings are pushed server-side
                await websocket.receive_text()
        except WebSocketDisconnect:
            pass
        finally:
            broadcaster.disconnect(websocket)

    return router
