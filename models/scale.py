"""Continuous linear scales.

Maps a numeric domain onto an output range (pixels along a selector, or
degrees along an arc) and back. Same semantics as a d3 linear scale,
including the "nice" tick steps used for histogram thresholds.
"""

import math

import numpy as np

import config

# Tick step thresholds: sqrt(50), sqrt(10), sqrt(2)
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


class LinearScale:
    """domain [d0, d1] <-> range [r0, r1]."""

    def __init__(self, domain: tuple[float, float], output_range: tuple[float, float]):
        d0, d1 = float(domain[0]), float(domain[1])
        self.degenerate = d0 == d1
        if self.degenerate:
            # Zero-variance field: widen so positions can still be laid out
            d1 = d0 + config.DEGENERATE_DOMAIN_EPSILON
        self.domain = (d0, d1)
        self.range = (float(output_range[0]), float(output_range[1]))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        return _interpolate(self.range, (value - d0) / (d1 - d0))

    def invert(self, position: float) -> float:
        r0, r1 = self.range
        if self.degenerate or r0 == r1:
            # Every position stands for the single observed value
            return self.domain[0]
        return _interpolate(self.domain, (position - r0) / (r1 - r0))

    def clamp_to_range(self, position: float) -> float:
        lo, hi = min(self.range), max(self.range)
        return max(lo, min(hi, position))

    def ticks(self, count: int = 10) -> list[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)


def _interpolate(bounds: tuple[float, float], t: float) -> float:
    # Exact at both ends (t=0 -> a, t=1 -> b)
    a, b = bounds
    return a * (1 - t) + b * t


def tick_step(start: float, stop: float, count: int) -> float:
    """Round step size (1, 2 or 5 times a power of ten) giving roughly `count` ticks."""
    if count <= 0 or stop == start:
        return 0.0
    raw = abs(stop - start) / count
    power = math.floor(math.log10(raw))
    error = raw / math.pow(10, power)
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    return factor * math.pow(10, power)


def nice_ticks(start: float, stop: float, count: int) -> list[float]:
    """Evenly spaced round values within [start, stop]."""
    lo, hi = min(start, stop), max(start, stop)
    step = tick_step(lo, hi, count)
    if step == 0:
        return [lo]
    first = math.ceil(lo / step)
    last = math.floor(hi / step)
    # Multiply integers by the step to avoid accumulating float error
    ticks = np.arange(first, last + 1) * step
    return [round(float(t), 12) for t in ticks]
