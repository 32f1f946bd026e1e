"""Abstract base for sample sources.

A sample source is whatever produces one dual-sensor RawSample per tick:
a hardware driver, a synthetic generator, a replayed recording or a queue
fed over the network.

Architectural rules:
    1. next_sample() returns one RawSample or raises.
    2. Any exception is a per-tick failure.  The controller decides when
       repeated failures mean the source is unavailable.
    3. Sources never validate physics.  Non-finite values are rejected by
       the classifier, not here.
    4. No source may touch the HistoryBuffer or AlertFeed directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from axion_monitor.domain.sample import RawSample


class SampleSource(ABC):
    """Base class for producers of raw dual-sensor samples."""

    @abstractmethod
    def next_sample(self) -> RawSample:
        """Produce the sample for the current tick.

        Raises:
            SourceExhausted: If a finite source has nothing left.
            Exception: Any driver error; treated as a transient failure.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Human-readable name of this source for logs and status."""
        ...

    def close(self) -> None:
        """Release any underlying resources.  Default: nothing to do."""
