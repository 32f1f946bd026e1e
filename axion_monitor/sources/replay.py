"""ReplaySampleSource — plays back a finite, pre-recorded sequence of samples."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from axion_monitor.domain.errors import SourceExhausted
from axion_monitor.domain.sample import RawSample, Vector3
from axion_monitor.foundation.clock import utc_now
from axion_monitor.sources.base import SampleSource

logger = logging.getLogger(__name__)


class ReplaySampleSource(SampleSource):
    """Yields the given samples in order, then raises SourceExhausted."""

    def __init__(self, samples: Iterable[RawSample], name: str = "replay") -> None:
        self._samples: Iterator[RawSample] = iter(samples)
        self._name = name
        self._served = 0

    @classmethod
    def from_magnitudes(
        cls,
        sensor1: Iterable[float],
        sensor2: float = 0.0,
    ) -> "ReplaySampleSource":
        """Samples whose sensor1 vector points along z with the given magnitudes.

        Handy for scripted sessions: ``from_magnitudes([5, 40, 60])`` yields
        one LOW, one HIGH and one CRITICAL sample with default thresholds.
        """
        return cls(
            RawSample(
                sensor1=Vector3(x=0.0, y=0.0, z=float(m)),
                sensor2=Vector3(x=0.0, y=0.0, z=float(sensor2)),
                timestamp=utc_now(),
            )
            for m in sensor1
        )

    @property
    def source_name(self) -> str:
        return self._name

    @property
    def served(self) -> int:
        return self._served

    def next_sample(self) -> RawSample:
        try:
            sample = next(self._samples)
        except StopIteration:
            raise SourceExhausted(f"{self._name} exhausted after {self._served} sample(s)") from None
        self._served += 1
        return sample
