"""Uniform bubble radius for a result set of a given size."""

import math

import config


def bubble_radius(n: int, width: float, height: float,
                  margin: float = config.LAYOUT_MARGIN,
                  min_radius: float = config.MIN_RADIUS,
                  max_radius: float = config.MAX_RADIUS,
                  packing: float = config.PACKING_EFFICIENCY) -> float:
    """Radius that lets n equal circles share the area inside the margins.

    Each item gets an equal share of the safe area; the circle of that area is
    shrunk by the packing-efficiency factor to leave room for the gaps between
    packed circles. The result is capped so a bubble never exceeds the safe
    height or width, and floored at a minimum visible size (the floor wins if
    the viewport is too small for both).

    Non-increasing in n for a fixed viewport.
    """
    if n <= 0:
        return 0.0
    safe_width = width - 2 * margin
    safe_height = height - 2 * margin
    area_per_item = max(0.0, safe_width) * max(0.0, safe_height) / n

    cap = min(max_radius, safe_height / 2, safe_width / 2)
    natural = math.sqrt(area_per_item / math.pi) * packing
    return max(min_radius, min(cap, natural))
