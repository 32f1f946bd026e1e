"""WebSocket endpoint for raw sample ingestion from sensor gateways.

Path: /ws/samples

Accepts JSON sample payloads, parses them at the boundary and queues them
for the controller's next ticks.  Classification happens on the tick, not
here, so the single-writer rule for history and alerts holds.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from axion_monitor.sources.queue import QueueSampleSource

logger = logging.getLogger(__name__)


def create_ingest_router(queue_source: QueueSampleSource) -> APIRouter:
    """Factory that wires the ingest endpoint to a concrete queue source."""

    router = APIRouter()

    @router.websocket("/ws/samples")
    async def ingest_samples(websocket: WebSocket) -> None:
        await websocket.accept()
        logger.info("Sensor gateway connected")

        try:
            while True:
                raw = await websocket.receive_json()

                # ── Validate at the boundary ─────────────────────────────
                try:
                    sample = queue_source.push_payload(raw)
                except ValueError as exc:
                    await websocket.send_json({"status": "error", "detail": str(exc)})
                    continue

                # ── Acknowledge ──────────────────────────────────────────
                await websocket.send_json({
                    "status": "accepted",
                    "timestamp_ms": sample.timestamp_ms,
                    "pending": queue_source.pending,
                })

        except WebSocketDisconnect:
            logger.info("Sensor gateway disconnected")

    return router
