"""MonitorController — owns the periodic sampling loop and its collaborators.

Design notes:
    - Two states: IDLE (initial) and RUNNING.  start() while RUNNING and
      stop() while IDLE are no-ops.
    - The periodic tick is an asyncio task on the caller's event loop.
      Deadlines are fixed-rate (loop.time() based); when the loop falls
      behind, missed deadlines are skipped rather than fired in a burst.
    - The tick is the single writer of the HistoryBuffer and AlertFeed.
      Readers only ever receive copies.
    - stop() cancels the task and awaits it, so no tick can run after
      stop() returns.  start() after stop() schedules a fresh task and
      keeps the existing history; only reset() clears it.
    - One bad sample never halts monitoring.  Source failures are
      skipped per tick until more than max_consecutive_failures happen
      in a row; then the loop ends with SourceUnavailable.
    - Nothing here is module-global: any number of controllers may run
      side by side, one per session.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass, field
from typing import Callable

from axion_monitor.core.classifier import ImpactClassifier, SeverityThresholds
from axion_monitor.core.risk import DEFAULT_HIGH_COUNT_THRESHOLD, RiskAggregator
from axion_monitor.domain.enums import MonitorState
from axion_monitor.domain.errors import InvalidConfiguration, InvalidSample, SourceUnavailable
from axion_monitor.domain.record import ClassifiedRecord
from axion_monitor.domain.risk import ImpactEvent, RiskVerdict
from axion_monitor.domain.status import MonitorStatus
from axion_monitor.foundation.identifiers import new_id
from axion_monitor.sources.base import SampleSource
from axion_monitor.store.alerts import DEFAULT_ALERT_CAPACITY, DEFAULT_ALERT_TIME_FORMAT, AlertFeed
from axion_monitor.store.history import DEFAULT_CAPACITY, HistoryBuffer

logger = logging.getLogger(__name__)

StateListener = Callable[[MonitorState, MonitorState], None]
ReadingListener = Callable[[ClassifiedRecord], None]


@dataclass(frozen=True)
class MonitorConfig:
    """Construction-time configuration of a monitoring controller."""

    tick_interval_ms: float = 100.0
    history_capacity: int = DEFAULT_CAPACITY
    alert_capacity: int = DEFAULT_ALERT_CAPACITY
    # strftime pattern for the local time shown in alert text
    alert_time_format: str = DEFAULT_ALERT_TIME_FORMAT
    thresholds: SeverityThresholds = field(default_factory=SeverityThresholds)
    high_count_threshold: int = DEFAULT_HIGH_COUNT_THRESHOLD
    # Failures tolerated in a row before the source is declared unavailable
    max_consecutive_failures: int = 10

    def __post_init__(self) -> None:
        if not math.isfinite(self.tick_interval_ms) or self.tick_interval_ms <= 0:
            raise InvalidConfiguration(
                f"tick_interval_ms must be a positive number, got {self.tick_interval_ms}"
            )
        if self.history_capacity <= 0:
            raise InvalidConfiguration(f"history_capacity must be positive, got {self.history_capacity}")
        if self.alert_capacity <= 0:
            raise InvalidConfiguration(f"alert_capacity must be positive, got {self.alert_capacity}")
        if self.high_count_threshold < 1:
            raise InvalidConfiguration(
                f"high_count_threshold must be at least 1, got {self.high_count_threshold}"
            )
        if self.max_consecutive_failures < 0:
            raise InvalidConfiguration(
                f"max_consecutive_failures must not be negative, got {self.max_consecutive_failures}"
            )

    @property
    def tick_interval_seconds(self) -> float:
        return self.tick_interval_ms / 1000.0


class MonitorController:
    """Start/stop lifecycle plus SampleSource → Classifier → History/Alerts wiring.

    Usage:
        controller = MonitorController(SyntheticSampleSource())
        controller.start()
        ...
        verdict = controller.risk()
        await controller.stop()

    Args:
        source: Producer of one RawSample per tick.
        config: Intervals, capacities and thresholds.  Defaults apply when None.
    """

    def __init__(self, source: SampleSource, config: MonitorConfig | None = None) -> None:
        self._config = config or MonitorConfig()
        self._source = source
        self._classifier = ImpactClassifier(self._config.thresholds)
        self._history = HistoryBuffer(self._config.history_capacity)
        self._alerts = AlertFeed(self._config.alert_capacity, self._config.alert_time_format)
        self._aggregator = RiskAggregator(self._config.high_count_threshold)

        self.session_id = new_id()
        self._state = MonitorState.IDLE
        self._task: asyncio.Task[None] | None = None
        self._current: ClassifiedRecord | None = None

        self._ticks = 0
        self._invalid_samples = 0
        self._source_failures = 0
        self._consecutive_failures = 0
        self._last_error: BaseException | None = None

        self._state_listeners: list[StateListener] = []
        self._reading_listeners: list[ReadingListener] = []

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        """IDLE → RUNNING.  Must be called from within a running event loop."""
        if self._state is MonitorState.RUNNING:
            logger.debug("Session %s already running; start() ignored", self.session_id)
            return
        loop = asyncio.get_running_loop()
        self._consecutive_failures = 0
        self._last_error = None
        self._set_state(MonitorState.RUNNING)
        self._task = loop.create_task(self._run(), name=f"axion-monitor-{self.session_id}")

    async def stop(self) -> None:
        """RUNNING → IDLE.  Returns only once the tick task has finished."""
        task = self._task
        if self._state is MonitorState.IDLE and (task is None or task.done()):
            return
        self._set_state(MonitorState.IDLE)
        if task is None or task.done():
            return
        task.cancel()
        if task is asyncio.current_task():
            # stop() called from a listener inside the tick itself
            return
        # asyncio.wait never raises the task's CancelledError, but our own
        # cancellation still propagates
        await asyncio.wait({task})

    def reset(self) -> None:
        """Clear history, alerts and the current reading.  State is unchanged."""
        self._history.clear()
        self._alerts.clear()
        self._current = None
        logger.info("Session %s reset", self.session_id)

    async def wait(self) -> None:
        """Wait for the sampling loop to end.

        Raises:
            SourceUnavailable: If the loop ended because the source failed.
            Exception: Whatever else ended the loop unexpectedly.
        """
        task = self._task
        if task is not None and not task.done():
            await asyncio.wait({task})
        if self._last_error is not None:
            raise self._last_error

    async def close(self) -> None:
        """Stop sampling and release the sample source."""
        await self.stop()
        self._source.close()

    async def __aenter__(self) -> "MonitorController":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── Tick ─────────────────────────────────────────────────────────────

    def tick(self) -> ClassifiedRecord | None:
        """Run one sampling cycle.

        Returns the new record, or None when the tick was skipped because
        the source failed or produced an invalid sample.

        Raises:
            SourceUnavailable: If consecutive source failures exceed the
                configured maximum.
        """
        self._ticks += 1
        try:
            sample = self._source.next_sample()
        except Exception as exc:
            self._source_failures += 1
            self._consecutive_failures += 1
            logger.warning(
                "Session %s: source '%s' failed (%d in a row): %s",
                self.session_id,
                self._source.source_name,
                self._consecutive_failures,
                exc,
            )
            if self._consecutive_failures > self._config.max_consecutive_failures:
                raise SourceUnavailable(self._consecutive_failures, exc) from exc
            return None

        self._consecutive_failures = 0

        try:
            record = self._classifier.classify(sample)
        except InvalidSample as exc:
            self._invalid_samples += 1
            logger.warning("Session %s: skipped sample — %s", self.session_id, exc.reason)
            return None

        self._current = record
        self._history.append(record)
        self._alerts.consider(record)
        for listener in list(self._reading_listeners):
            try:
                listener(record)
            except Exception:
                logger.exception("Reading listener failed")
        return record

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        interval = self._config.tick_interval_seconds
        deadline = loop.time()
        logger.info(
            "Session %s sampling every %.1f ms from '%s'",
            self.session_id,
            self._config.tick_interval_ms,
            self._source.source_name,
        )
        try:
            while self._state is MonitorState.RUNNING:
                deadline += interval
                now = loop.time()
                if deadline < now:
                    skipped = int((now - deadline) // interval) + 1
                    deadline += skipped * interval
                    logger.debug("Session %s fell behind; skipped %d tick(s)", self.session_id, skipped)
                await asyncio.sleep(deadline - now)
                if self._state is not MonitorState.RUNNING:
                    break
                self.tick()
        except SourceUnavailable as exc:
            self._last_error = exc
            logger.error("Session %s stopped: %s", self.session_id, exc)
            self._set_state(MonitorState.IDLE)
        except Exception as exc:
            self._last_error = exc
            logger.exception("Session %s sampling loop crashed", self.session_id)
            self._set_state(MonitorState.IDLE)

    # ── Observability ────────────────────────────────────────────────────

    def on_state_change(self, listener: StateListener) -> None:
        """Register *listener(old_state, new_state)* for lifecycle transitions."""
        self._state_listeners.append(listener)

    def on_reading(self, listener: ReadingListener) -> None:
        """Register *listener(record)* for every newly classified record."""
        self._reading_listeners.append(listener)

    def _set_state(self, new_state: MonitorState) -> None:
        old_state = self._state
        if old_state is new_state:
            return
        self._state = new_state
        logger.info("Session %s: %s → %s", self.session_id, old_state.value, new_state.value)
        for listener in list(self._state_listeners):
            try:
                listener(old_state, new_state)
            except Exception:
                logger.exception("State listener failed")

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is MonitorState.RUNNING

    @property
    def config(self) -> MonitorConfig:
        return self._config

    @property
    def last_error(self) -> BaseException | None:
        return self._last_error

    def current_reading(self) -> ClassifiedRecord | None:
        return self._current

    def history(self) -> tuple[ClassifiedRecord, ...]:
        return self._history.snapshot()

    def recent(self, n: int) -> tuple[ClassifiedRecord, ...]:
        """The last *n* records, oldest first (the real-time chart window)."""
        return self._history.latest(n)

    def alerts(self, limit: int | None = None) -> list[str]:
        return self._alerts.alerts(limit)

    def risk(self) -> RiskVerdict:
        """Risk verdict over the history as it is right now."""
        return self._aggregator.assess(self._history.snapshot())

    def high_impact_timeline(self, limit: int = 10) -> list[ImpactEvent]:
        return self._aggregator.high_impact_timeline(self._history.snapshot(), limit)

    def status(self) -> MonitorStatus:
        history = self._history.snapshot()
        current = self._current
        return MonitorStatus(
            session_id=str(self.session_id),
            state=self._state,
            data_points=len(history),
            high_impacts=sum(1 for r in history if r.severity.is_high_impact),
            current_severity=current.severity if current else None,
            tick_interval_ms=self._config.tick_interval_ms,
            ticks=self._ticks,
            invalid_samples=self._invalid_samples,
            source_failures=self._source_failures,
            last_error=str(self._last_error) if self._last_error else None,
        )

    # ── Dunder ───────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return (
            f"MonitorController(id={self.session_id!s}, "
            f"state={self._state.value}, "
            f"records={len(self._history)})"
        )
