"""Seed Multi-Select: toggle any subset of seeds 1-16."""

import config
from models.filter_spec import FilterUpdate, SeedSet

SEEDS = list(range(config.MIN_SEED, config.MAX_SEED + 1))


class SeedMultiSelect:

    def __init__(self):
        self.selected: set[int] = set()

    def toggle(self, seed: int) -> FilterUpdate:
        """Add or remove a seed. An empty selection clears the seed filter."""
        if seed not in SEEDS:
            raise ValueError(f"Invalid seed: {seed}")
        if seed in self.selected:
            self.selected.discard(seed)
        else:
            self.selected.add(seed)
        return self.current()

    def current(self) -> FilterUpdate:
        if not self.selected:
            return FilterUpdate(config.SEED_DIMENSION)
        return FilterUpdate(config.SEED_DIMENSION, SeedSet(self.selected))

    def clear(self) -> FilterUpdate:
        self.selected.clear()
        return self.current()
