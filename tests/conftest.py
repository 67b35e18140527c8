"""Shared pytest fixtures for explorer tests."""

import pytest

from models.record import Record


# =============================================================================
# Record Fixtures
# =============================================================================


def make_record(team: str, year: int | None = 2019, seed: int | None = 1,
                win_pct: float | None = 70.0, conference: str = "ACC",
                postseason: str | None = None, **metrics) -> Record:
    """Build a record; metric keyword names map to dataset columns (3P_O -> P3_O)."""
    renamed = {_column(name): value for name, value in metrics.items()}
    return Record(
        team=team,
        year=year,
        seed=seed,
        conference=conference,
        win_pct=win_pct,
        metrics=renamed,
        postseason=postseason,
        win_pct_display=f"{win_pct:.1f}%" if win_pct is not None else "",
    )


def _column(name: str) -> str:
    # Python identifiers can't start with a digit: P3_O -> 3P_O, P2_D -> 2P_D
    if name.startswith("P") and name[1:2].isdigit():
        return name[1] + "P" + name[2:]
    return name


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def records() -> list[Record]:
    """A small two-season field with mixed seeds and metrics."""
    return [
        make_record("Duke", 2019, 1, 85.0, EFG_O=55.1, EFG_D=44.0, P3_O=30.2, P3_D=31.0),
        make_record("Virginia", 2019, 1, 92.0, EFG_O=55.0, EFG_D=44.7, P3_O=39.5, P3_D=29.5),
        make_record("Michigan St.", 2019, 2, 80.0, EFG_O=56.0, EFG_D=43.1, P3_O=38.0, P3_D=31.5),
        make_record("Wofford", 2019, 7, 85.0, EFG_O=57.2, EFG_D=48.0, P3_O=41.6, P3_D=33.0),
        make_record("Gonzaga", 2021, 1, 100.0, EFG_O=61.0, EFG_D=45.0, P3_O=36.8, P3_D=30.2),
        make_record("Baylor", 2021, 1, 93.0, EFG_O=57.5, EFG_D=47.0, P3_O=41.3, P3_D=30.8),
        make_record("Oral Roberts", 2021, 15, 60.0, EFG_O=52.0, EFG_D=50.5, P3_O=37.0, P3_D=34.1),
        make_record("Houston", 2021, 2, 86.0, EFG_O=51.5, EFG_D=43.5, P3_O=35.0, P3_D=28.9),
    ]


@pytest.fixture
def win_pct_records() -> list[Record]:
    """Five teams with win % 55, 60, 65, 70, 75."""
    return [
        make_record(f"Team {pct}", 2019, 5, float(pct))
        for pct in (55, 60, 65, 70, 75)
    ]


@pytest.fixture
def seeded_records() -> list[Record]:
    """Two teams on each of seeds 1, 2 and 3."""
    return [
        make_record(f"Seed{seed} Team{i}", 2019, seed, 70.0 + i)
        for seed in (1, 2, 3)
        for i in range(2)
    ]
