"""SyntheticSampleSource — random accelerometer readings with occasional spikes.

Each sensor reads roughly 1g of gravity on z plus small lateral jitter:
    x, y ∈ [-2, 2) g
    z    ∈ [8.8, 10.8) g

With probability *spike_probability* a tick simulates a hard hit: the
lateral components of sensor1 are amplified by *sensor1_spike_gain*
(default ×5) and those of sensor2 by *sensor2_spike_gain* (default ×4).
Raise the gains to drive the stream into the HIGH/CRITICAL bands.
"""

from __future__ import annotations

import random

from axion_monitor.domain.errors import InvalidConfiguration
from axion_monitor.domain.sample import RawSample, Vector3
from axion_monitor.foundation.clock import utc_now
from axion_monitor.sources.base import SampleSource


class SyntheticSampleSource(SampleSource):
    """Mock driver producing plausible samples for demos and fixtures.

    Args:
        spike_probability: Chance per tick of an amplified impact.
        seed: Optional seed for reproducible streams.
        lateral_range: Full width (g) of the uniform x/y jitter.
        gravity: Baseline z acceleration (g).
        gravity_jitter: Full width (g) of the uniform z jitter.
        sensor1_spike_gain: Lateral amplification of sensor1 on a spike.
        sensor2_spike_gain: Lateral amplification of sensor2 on a spike.
    """

    def __init__(
        self,
        spike_probability: float = 0.05,
        seed: int | None = None,
        lateral_range: float = 4.0,
        gravity: float = 9.8,
        gravity_jitter: float = 2.0,
        sensor1_spike_gain: float = 5.0,
        sensor2_spike_gain: float = 4.0,
    ) -> None:
        if not 0.0 <= spike_probability <= 1.0:
            raise InvalidConfiguration(
                f"spike_probability must be within [0, 1], got {spike_probability}"
            )
        self._spike_probability = spike_probability
        self._lateral_range = lateral_range
        self._gravity = gravity
        self._gravity_jitter = gravity_jitter
        self._gain1 = sensor1_spike_gain
        self._gain2 = sensor2_spike_gain
        self._rng = random.Random(seed)

    @property
    def source_name(self) -> str:
        return "synthetic"

    def next_sample(self) -> RawSample:
        x1, y1, z1 = self._base_vector()
        x2, y2, z2 = self._base_vector()

        if self._rng.random() < self._spike_probability:
            x1 *= self._gain1
            y1 *= self._gain1
            x2 *= self._gain2
            y2 *= self._gain2

        return RawSample(
            sensor1=Vector3(x=x1, y=y1, z=z1),
            sensor2=Vector3(x=x2, y=y2, z=z2),
            timestamp=utc_now(),
        )

    def _base_vector(self) -> tuple[float, float, float]:
        r = self._rng
        return (
            (r.random() - 0.5) * self._lateral_range,
            (r.random() - 0.5) * self._lateral_range,
            self._gravity + (r.random() - 0.5) * self._gravity_jitter,
        )
