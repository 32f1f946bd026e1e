"""Pushes classified readings and lifecycle transitions to WebSocket clients.

Design notes:
    - The controller calls its listeners synchronously from inside the tick.
      Listeners only enqueue; they never touch a socket, so a slow client
      can never delay sampling.
    - Each client has one bounded outbox drained by one sender task.  That
      task is the only writer to its socket, so frames arrive in the order
      they were produced.
    - A full outbox drops its oldest frame; a client that cannot keep up
      sees the latest readings, not a growing backlog.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

from axion_monitor.core.controller import MonitorController
from axion_monitor.domain.enums import MonitorState
from axion_monitor.domain.errors import InvalidConfiguration
from axion_monitor.domain.record import ClassifiedRecord

logger = logging.getLogger(__name__)

DEFAULT_OUTBOX_SIZE = 100


class ReadingBroadcaster:
    """Tracks connected display clients and fans out monitor events."""

    def __init__(self, outbox_size: int = DEFAULT_OUTBOX_SIZE) -> None:
        if outbox_size <= 0:
            raise InvalidConfiguration(f"outbox_size must be positive, got {outbox_size}")
        self._outbox_size = outbox_size
        self._outboxes: dict[WebSocket, asyncio.Queue[dict[str, Any]]] = {}
        self._senders: dict[WebSocket, asyncio.Task[None]] = {}

    # ── Wiring ───────────────────────────────────────────────────────

    def attach(self, controller: MonitorController) -> None:
        """Subscribe to *controller*'s reading and lifecycle events."""
        controller.on_reading(self.on_reading)
        controller.on_state_change(self.on_state_change)

    # ── Client management ────────────────────────────────────────────

    async def connect(self, ws: WebSocket, first_frame: dict[str, Any] | None = None) -> None:
        """Accept *ws* and start its sender.  *first_frame* is sent before any event."""
        await ws.accept()
        outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=self._outbox_size)
        if first_frame is not None:
            outbox.put_nowait(first_frame)
        self._outboxes[ws] = outbox
        self._senders[ws] = asyncio.create_task(self._drain(ws, outbox))
        logger.info("Display client connected (%d total)", len(self._outboxes))

    def disconnect(self, ws: WebSocket) -> None:
        if self._outboxes.pop(ws, None) is None:
            return
        sender = self._senders.pop(ws, None)
        if sender is not None and sender is not asyncio.current_task():
            sender.cancel()
        logger.info("Display client disconnected (%d remaining)", len(self._outboxes))

    @property
    def client_count(self) -> int:
        return len(self._outboxes)

    def backlog(self, ws: WebSocket) -> int:
        """Frames queued for *ws* and not yet sent."""
        outbox = self._outboxes.get(ws)
        return outbox.qsize() if outbox is not None else 0

    # ── Listeners ────────────────────────────────────────────────────

    def on_reading(self, record: ClassifiedRecord) -> None:
        self.publish({"type": "reading", "record": record.summary()})

    def on_state_change(self, old_state: MonitorState, new_state: MonitorState) -> None:
        self.publish({"type": "state", "previous": old_state.value, "state": new_state.value})

    # ── Broadcast ────────────────────────────────────────────────────

    def publish(self, data: dict[str, Any]) -> None:
        """Queue *data* for every connected client.

        Must run on the event loop that owns the clients; calls from any
        other thread are ignored.
        """
        if not self._outboxes:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; %s event not broadcast", data["type"])
            return
        for outbox in self._outboxes.values():
            if outbox.full():
                outbox.get_nowait()
                logger.debug("Display client backlog full; dropped oldest frame")
            outbox.put_nowait(data)

    async def _drain(self, ws: WebSocket, outbox: asyncio.Queue[dict[str, Any]]) -> None:
        while True:
            data = await outbox.get()
            try:
                await ws.send_json(data)
            except Exception as exc:
                logger.debug("Dropping display client after send failure: %s", exc)
                self.disconnect(ws)
                return
