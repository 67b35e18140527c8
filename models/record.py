"""Team-season record model."""

import math
from dataclasses import dataclass, field

import config


@dataclass
class Record:
    team: str
    year: int | None
    seed: int | None
    conference: str = ""
    win_pct: float | None = None  # percentage points, e.g. 75.0
    # Shooting / efficiency metrics by column name; None when the cell did not parse
    metrics: dict[str, float | None] = field(default_factory=dict)
    postseason: str | None = None
    win_pct_display: str = ""

    @property
    def key(self) -> tuple[str, int | None]:
        """Identity of the record across filter passes and layouts."""
        return self.team, self.year

    def value(self, metric: str) -> float | None:
        """Numeric value for a metric name, or None if missing or not a number."""
        if metric == config.WIN_PCT_METRIC:
            raw = self.win_pct
        else:
            raw = self.metrics.get(metric)
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            return None
        if math.isnan(raw):
            return None
        return float(raw)

    def __str__(self):
        seed = self.seed if self.seed is not None else "-"
        return f"({seed}) {self.team} {self.year}"
