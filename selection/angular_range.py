"""Angular (polar) Range Selector.

Same contract as the linear selector, but the metric's domain is laid along
the three-point arc: [-90, +90] degrees around the hoop, 0 pointing straight
into the court. A drag only counts if it starts on the arc (within a
tolerance band of the reference radius); otherwise the gesture is never
armed and its moves are ignored.
"""

from __future__ import annotations

import math

import config
from models.filter_spec import FilterUpdate, Range, range_dimension
from models.record import Record
from models.scale import LinearScale


def hoop_center(orientation: int = 1) -> tuple[float, float]:
    """Pixel position of the near (orientation=1) or far (-1) hoop on the court drawing."""
    ppf = config.COURT_PIXELS_PER_FOOT
    x = config.COURT_WIDTH_FT / 2 * ppf
    if orientation >= 0:
        return x, config.HOOP_BASELINE_DIST_FT * ppf
    return x, (config.COURT_LENGTH_FT - config.HOOP_BASELINE_DIST_FT) * ppf


class AngularRangeSelector:
    """Drag along an arc to select a metric range."""

    def __init__(self, metric: str, values, domain: tuple[float, float] | None = None,
                 center: tuple[float, float] | None = None,
                 reference_radius: float = config.THREE_POINT_RADIUS_FT * config.COURT_PIXELS_PER_FOOT,
                 tolerance: float = config.ARC_TOLERANCE_PX,
                 orientation: int = 1):
        self.metric = metric
        self.dimension = range_dimension(metric)
        self.orientation = 1 if orientation >= 0 else -1
        self.center = center if center is not None else hoop_center(self.orientation)
        self.reference_radius = reference_radius
        self.tolerance = tolerance

        if domain is None:
            observed = [v for v in values if v is not None and not math.isnan(v)]
            domain = (min(observed), max(observed)) if observed else (0.0, 0.0)
        self.scale = LinearScale(domain, (config.ANGLE_MIN, config.ANGLE_MAX))

        # Angle where the armed gesture started; None means not armed
        self.armed: float | None = None
        self.selection: tuple[float, float] | None = None  # angles being shown

    @classmethod
    def for_metric(cls, records: list[Record], metric: str, **kwargs) -> AngularRangeSelector:
        return cls(metric, [r.value(metric) for r in records], **kwargs)

    def angle_at(self, x: float, y: float) -> float:
        """Pointer angle in degrees, clamped into [-90, 90]."""
        dx = (x - self.center[0]) * self.orientation
        dy = (y - self.center[1]) * self.orientation
        angle = math.degrees(math.atan2(dx, dy))
        return max(config.ANGLE_MIN, min(config.ANGLE_MAX, angle))

    def on_arc(self, x: float, y: float) -> bool:
        distance = math.hypot(x - self.center[0], y - self.center[1])
        return abs(distance - self.reference_radius) <= self.tolerance

    def drag_start(self, x: float, y: float) -> bool:
        """Arm the gesture if it starts on the arc. Returns whether it armed.

        A new gesture always supersedes the previous unfinished selection.
        """
        self.selection = None
        if self.on_arc(x, y):
            self.armed = self.angle_at(x, y)
        else:
            self.armed = None
        return self.armed is not None

    def drag_move(self, x: float, y: float) -> FilterUpdate | None:
        if self.armed is None:
            return None
        current = self.angle_at(x, y)
        lo_angle, hi_angle = sorted((self.armed, current))
        self.selection = (lo_angle, hi_angle)
        low = self.scale.invert(lo_angle)
        high = self.scale.invert(hi_angle)
        return FilterUpdate(self.dimension, Range(self.metric, low, high))

    def drag_end(self, x: float, y: float) -> FilterUpdate | None:
        """Finish the gesture. A zero-width arc (a click) clears the dimension."""
        update = self.drag_move(x, y)
        self.armed = None
        if self.selection is not None and self.selection[0] == self.selection[1]:
            return self.reset()
        return update

    def reset(self) -> FilterUpdate:
        self.armed = None
        self.selection = None
        return FilterUpdate(self.dimension)
