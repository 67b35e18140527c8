"""Binned distributions for the range selectors."""

from dataclasses import dataclass

import numpy as np

from models.scale import nice_ticks


@dataclass(frozen=True)
class Bin:
    x0: float  # inclusive
    x1: float  # exclusive, except for the last bin
    count: int

    @property
    def midpoint(self) -> float:
        return self.x0 + (self.x1 - self.x0) / 2


@dataclass(frozen=True)
class Histogram:
    domain: tuple[float, float]
    bins: list[Bin]

    @property
    def max_count(self) -> int:
        return max((b.count for b in self.bins), default=0)

    @property
    def total(self) -> int:
        return sum(b.count for b in self.bins)


def build_histogram(values, domain: tuple[float, float], bin_count: int,
                    nice: bool = False, pad: bool = False) -> Histogram:
    """Count values into bins over a domain.

    Args:
        values: Numbers; None / NaN are ignored, as are values outside the domain
        domain: (low, high); callers pass a non-degenerate domain (see LinearScale)
        bin_count: Number of equal-width bins, or the approximate tick count when nice=True
        nice: Use round thresholds (1/2/5 x 10^k) instead of equal-width edges
        pad: Add empty bins at both ends so a drawn curve drops to zero
    """
    lo, hi = float(domain[0]), float(domain[1])
    if bin_count < 1:
        raise ValueError("bin_count must be positive")

    if nice:
        inner = [t for t in nice_ticks(lo, hi, bin_count) if lo < t < hi]
        edges = np.array([lo] + inner + [hi], dtype=float)
    else:
        edges = np.linspace(lo, hi, bin_count + 1)

    data = np.array([v for v in values if v is not None], dtype=float)
    data = data[~np.isnan(data)]
    counts, _ = np.histogram(data, bins=edges)

    bins = [Bin(float(edges[i]), float(edges[i + 1]), int(counts[i])) for i in range(len(counts))]
    if pad and bins:
        bins.insert(0, Bin(lo, bins[0].x0, 0))
        bins.append(Bin(bins[-1].x1, hi, 0))

    return Histogram(domain=(lo, hi), bins=bins)
