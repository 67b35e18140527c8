"""Force simulation for equal-radius bubbles in a bounded viewport.

Follows the d3-force model: a temperature ("alpha") cools toward a target
every tick, a weak positional force pulls every bubble toward the viewport
center, and a collision force pushes apart any two bubbles whose centers
are closer than two padded radii.

Each tick is two explicit passes:
1. integrate: forces update velocities, velocities move bubbles to
   candidate positions (pinned bubbles take their fixed position)
2. clamp: candidates are clamped into [margin + r, dim - margin - r] on both
   axes, and only the clamped positions are stored

so no bubble ever crosses the margin, whatever the physics proposes.
"""

import numpy as np

import config


class ForceSimulation:

    def __init__(self, positions: np.ndarray, radius: float,
                 width: float, height: float,
                 margin: float = config.LAYOUT_MARGIN,
                 velocities: np.ndarray | None = None,
                 fixed: np.ndarray | None = None,
                 alpha: float = config.ALPHA_START,
                 seed: int | None = None):
        """
        Args:
            positions: (n, 2) starting centers
            radius: Common bubble radius
            width, height, margin: Viewport; bubbles stay inside the margin
            velocities: (n, 2) carried-over velocities (zeros if omitted)
            fixed: (n, 2) pinned positions, NaN rows for free bubbles
            alpha: Starting temperature
            seed: Random seed for the jiggle used on coincident centers
        """
        self.positions = np.array(positions, dtype=float).reshape(-1, 2)
        n = len(self.positions)
        self.velocities = (np.zeros((n, 2)) if velocities is None
                           else np.array(velocities, dtype=float).reshape(-1, 2))
        self.fixed = (np.full((n, 2), np.nan) if fixed is None
                      else np.array(fixed, dtype=float).reshape(-1, 2))

        self.radius = float(radius)
        self.width = float(width)
        self.height = float(height)
        self.margin = float(margin)
        self.center = np.array([self.width / 2, self.height / 2])

        self.alpha = float(alpha)
        self.alpha_target = 0.0
        self.alpha_min = config.ALPHA_MIN
        self.alpha_decay = config.ALPHA_DECAY
        self.velocity_decay = config.VELOCITY_DECAY
        self.center_strength = config.CENTER_STRENGTH
        self.collide_radius = self.radius + config.COLLIDE_PADDING
        self.collide_iterations = config.COLLIDE_ITERATIONS
        self.collide_strength = config.COLLIDE_STRENGTH

        self.rng = np.random.default_rng(seed)
        self.ticks = 0
        self.stopped = False

        self.positions = self._clamp(self.positions)

    def __len__(self):
        return len(self.positions)

    @property
    def running(self) -> bool:
        return not self.stopped and len(self) > 0

    @property
    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """(low, high) allowed center coordinates, as (x, y) arrays."""
        r = self.radius
        low = np.array([self.margin + r, self.margin + r])
        high = np.array([self.width - self.margin - r, self.height - self.margin - r])
        return low, high

    def restart(self):
        self.stopped = False

    def tick(self) -> np.ndarray:
        """Advance one step and return the clamped positions."""
        self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay
        candidates = self._integrate()
        self.positions = self._clamp(candidates)
        self.ticks += 1
        if self.alpha < self.alpha_min:
            self.stopped = True
        return self.positions

    def iter_ticks(self, max_ticks: int | None = None):
        """Yield after every tick until the simulation cools (or max_ticks is hit).

        Callers can handle input between ticks; nothing here blocks.
        """
        count = 0
        while self.running and (max_ticks is None or count < max_ticks):
            self.tick()
            count += 1
            yield count

    def pin(self, index: int, x: float | None = None, y: float | None = None):
        current = self.positions[index]
        self.fixed[index] = [current[0] if x is None else x, current[1] if y is None else y]

    def unpin(self, index: int):
        self.fixed[index] = np.nan

    def is_pinned(self, index: int) -> bool:
        return not np.isnan(self.fixed[index, 0])

    # --- Passes ---

    def _integrate(self) -> np.ndarray:
        if len(self) == 0:
            return self.positions.copy()

        self._apply_centering()
        for _ in range(self.collide_iterations):
            self._apply_collision()

        self.velocities *= 1 - self.velocity_decay
        candidates = self.positions + self.velocities

        pinned = ~np.isnan(self.fixed[:, 0])
        if pinned.any():
            candidates[pinned] = self.fixed[pinned]
            self.velocities[pinned] = 0.0
        return candidates

    def _clamp(self, candidates: np.ndarray) -> np.ndarray:
        low, high = self.bounds
        # The lower bound wins if a bubble is wider than the safe area
        return np.maximum(low, np.minimum(high, candidates))

    # --- Forces ---

    def _apply_centering(self):
        self.velocities += (self.center - self.positions) * self.center_strength * self.alpha

    def _apply_collision(self):
        """One relaxation pass, resolving pairs in index order.

        Bubble i is tested against every later bubble j using i's predicted
        position from the start of its turn and j's current prediction, and
        both velocities change before bubble i + 1 is visited.
        """
        n = len(self)
        if n < 2:
            return

        min_dist = 2 * self.collide_radius
        for i in range(n - 1):
            xi = self.positions[i] + self.velocities[i]
            diff = xi - (self.positions[i + 1:] + self.velocities[i + 1:])  # i - j
            dist2 = np.einsum("jk,jk->j", diff, diff)
            overlapping = dist2 < min_dist * min_dist
            if not overlapping.any():
                continue

            diff = diff[overlapping]
            zero = diff == 0
            if zero.any():
                # Coincident on an axis: nudge apart in a random direction
                diff = np.where(zero, (self.rng.random(diff.shape) - 0.5) * 1e-6, diff)
            dist = np.sqrt(np.einsum("jk,jk->j", diff, diff))
            shift = diff * ((min_dist - dist) / dist * self.collide_strength)[:, None]

            # Equal radii: each bubble of a pair takes half the correction
            self.velocities[i] += 0.5 * shift.sum(axis=0)
            self.velocities[i + 1:][overlapping] -= 0.5 * shift
