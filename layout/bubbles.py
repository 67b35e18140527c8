"""Bubble layout: one non-overlapping circle per filtered record.

Items are keyed by (team, year). When the filtered set changes but shares
keys with the current layout, surviving bubbles keep their positions and
velocities and the simulation just warms back up (continuation). A set with
no keys in common, or a replaced dataset, starts over from scratch.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from tqdm import tqdm

import config
from layout.radius import bubble_radius
from layout.simulation import ForceSimulation
from models.record import Record


@dataclass
class Bubble:
    """Positioned circle handed to the renderer."""
    record: Record
    x: float
    y: float
    radius: float


@dataclass
class LayoutItem:
    key: tuple
    record: Record
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    pinned: bool = False


class BubbleLayout:
    """Constrained force-directed layout for a changing result set."""

    def __init__(self, width: float = config.DEFAULT_LAYOUT_WIDTH,
                 height: float = config.DEFAULT_LAYOUT_HEIGHT,
                 margin: float = config.LAYOUT_MARGIN,
                 seed: int | None = 42):
        self.width = width
        self.height = height
        self.margin = margin
        self.seed = seed
        self.keys: list[tuple] = []
        self.records: dict[tuple, Record] = {}
        self.radius = 0.0
        self.simulation: ForceSimulation | None = None

    def __len__(self):
        return len(self.keys)

    @property
    def is_empty(self) -> bool:
        return not self.keys

    @property
    def running(self) -> bool:
        return self.simulation is not None and self.simulation.running

    # --- Result set changes ---

    def update(self, records: list[Record]) -> bool:
        """Lay out a new filtered sequence.

        Returns True if the simulation restarted from scratch, False if it
        continued from the current layout.
        """
        records = _unique_by_key(records)
        new_keys = [r.key for r in records]
        if not new_keys:
            self._reset()
            return False

        shared = set(new_keys) & set(self.keys)
        if self.simulation is None or not shared:
            self._start(records)
            return True

        old_index = {key: i for i, key in enumerate(self.keys)}
        sim = self.simulation
        n = len(new_keys)
        positions = _phyllotaxis(n, self.width, self.height)
        velocities = np.zeros((n, 2))
        fixed = np.full((n, 2), np.nan)
        for i, key in enumerate(new_keys):
            j = old_index.get(key)
            if j is None:
                continue
            positions[i] = sim.positions[j]
            velocities[i] = sim.velocities[j]
            fixed[i] = sim.fixed[j]

        self.keys = new_keys
        self.records = {r.key: r for r in records}
        self.radius = bubble_radius(n, self.width, self.height, self.margin)
        self.simulation = ForceSimulation(
            positions, self.radius, self.width, self.height, self.margin,
            velocities=velocities, fixed=fixed,
            alpha=max(sim.alpha, config.REHEAT_ALPHA), seed=self.seed,
        )
        self.simulation.alpha_target = sim.alpha_target
        return False

    def replace(self, records: list[Record]):
        """New underlying dataset: discard every bubble and start over."""
        self._reset()
        records = _unique_by_key(records)
        if records:
            self._start(records)

    def resize(self, width: float, height: float, margin: float | None = None):
        """Change the viewport; bubbles keep their positions (clamped to the new bounds)."""
        self.width = width
        self.height = height
        if margin is not None:
            self.margin = margin
        if self.simulation is None:
            return
        sim = self.simulation
        self.radius = bubble_radius(len(self.keys), width, height, self.margin)
        self.simulation = ForceSimulation(
            sim.positions, self.radius, width, height, self.margin,
            velocities=sim.velocities, fixed=sim.fixed,
            alpha=max(sim.alpha, config.REHEAT_ALPHA), seed=self.seed,
        )
        self.simulation.alpha_target = sim.alpha_target

    # --- Ticking ---

    def tick(self):
        if self.simulation is not None:
            self.simulation.tick()

    def iter_ticks(self, max_ticks: int | None = None):
        if self.simulation is None:
            return iter(())
        return self.simulation.iter_ticks(max_ticks)

    def settle(self, max_ticks: int = config.DEFAULT_MAX_TICKS, show_progress: bool = True) -> int:
        """Tick until the simulation cools or max_ticks is reached. Returns ticks run."""
        iterator = self.iter_ticks(max_ticks)
        if show_progress:
            iterator = tqdm(iterator, total=max_ticks, desc="Settling layout")
        ticks = 0
        for ticks in iterator:
            pass
        return ticks

    # --- Manual drag ---

    def pin(self, key: tuple):
        """Grab a bubble: fix it in place and warm the simulation so neighbors react."""
        index = self._index(key)
        self.simulation.pin(index)
        self.simulation.alpha_target = config.DRAG_ALPHA_TARGET
        self.simulation.restart()

    def drag(self, key: tuple, x: float, y: float):
        self.simulation.pin(self._index(key), x, y)

    def release(self, key: tuple):
        index = self._index(key)
        self.simulation.unpin(index)
        self.simulation.alpha_target = 0.0

    # --- Output ---

    def bubbles(self) -> list[Bubble]:
        if self.simulation is None:
            return []
        positions = self.simulation.positions
        return [
            Bubble(self.records[key], float(positions[i, 0]), float(positions[i, 1]), self.radius)
            for i, key in enumerate(self.keys)
        ]

    def items(self) -> list[LayoutItem]:
        if self.simulation is None:
            return []
        sim = self.simulation
        return [
            LayoutItem(key, self.records[key], float(sim.positions[i, 0]), float(sim.positions[i, 1]),
                       float(sim.velocities[i, 0]), float(sim.velocities[i, 1]),
                       self.radius, sim.is_pinned(i))
            for i, key in enumerate(self.keys)
        ]

    # --- Internals ---

    def _start(self, records: list[Record]):
        n = len(records)
        self.keys = [r.key for r in records]
        self.records = {r.key: r for r in records}
        self.radius = bubble_radius(n, self.width, self.height, self.margin)
        self.simulation = ForceSimulation(
            _phyllotaxis(n, self.width, self.height), self.radius,
            self.width, self.height, self.margin, seed=self.seed,
        )

    def _reset(self):
        self.keys = []
        self.records = {}
        self.radius = 0.0
        self.simulation = None

    def _index(self, key: tuple) -> int:
        try:
            return self.keys.index(key)
        except ValueError:
            raise KeyError(f"No bubble for {key!r}") from None


def _phyllotaxis(n: int, width: float, height: float) -> np.ndarray:
    """Sunflower spiral around the viewport center; index i lands at a stable spot."""
    i = np.arange(n)
    r = config.INITIAL_RADIUS * np.sqrt(0.5 + i)
    angle = i * config.INITIAL_ANGLE
    return np.column_stack([width / 2 + r * np.cos(angle), height / 2 + r * np.sin(angle)])


def _unique_by_key(records: list[Record]) -> list[Record]:
    seen = set()
    unique = []
    for r in records:
        if r.key in seen:
            continue
        seen.add(r.key)
        unique.append(r)
    return unique


def bubble_label(team: str, radius: float) -> str:
    """Text shown inside a bubble: full name when it fits, else a short code."""
    if radius > config.FULL_LABEL_MIN_RADIUS:
        return team
    words = team.split()
    if len(words) > 1:
        return "".join(w[0] for w in words)[:3].upper()
    return team[:3].upper()


def label_font_size(radius: float) -> float:
    return max(config.LABEL_FONT_MIN, min(config.LABEL_FONT_MAX, radius / 2.5))


def min_center_distance(bubbles: list[Bubble]) -> float:
    """Smallest distance between two bubble centers (inf for fewer than two)."""
    if len(bubbles) < 2:
        return math.inf
    points = np.array([[b.x, b.y] for b in bubbles])
    diff = points[:, None, :] - points[None, :, :]
    dist = np.sqrt(np.einsum("ijk,ijk->ij", diff, diff))
    np.fill_diagonal(dist, np.inf)
    return float(dist.min())
