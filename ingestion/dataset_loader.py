"""Tournament dataset ingestion.

Reads the cleaned team-season CSV (one row per team per year) and turns it
into Records. The file contains every Division I team; only rows with a
valid tournament seed are kept ("eligible" records).

Expected columns (case-insensitive):
- TEAM, YEAR, SEED, CONF
- W % (display string like "75.0%"), or G and W to derive it
- Shooting / efficiency metrics listed in config.METRIC_COLUMNS
- POSTSEASON (optional finish, e.g. "Champions", "E8")
"""

import os
from io import StringIO

import pandas as pd
import requests

import config
from models.record import Record

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data", "raw")


def load_dataset(filepath: str) -> list[Record]:
    """Load eligible records from a CSV file on disk."""
    df = pd.read_csv(filepath, dtype=str, keep_default_na=False)
    records = parse_dataset(df)
    print(f"Loaded {len(records)} eligible records from {filepath}")
    return records


def fetch_dataset(url: str, save: bool = True) -> list[Record]:
    """Download the CSV and parse it.

    Returns an empty list (with a warning) when the download fails.
    """
    print(f"Fetching dataset from {url}...")

    try:
        resp = requests.get(url, timeout=30)
        resp.raise_for_status()
    except requests.RequestException as e:
        print(f"Warning: Could not fetch dataset: {e}")
        print("Download the CSV manually and run 'python cli.py load --file path.csv' instead.")
        return []

    if save:
        os.makedirs(DATA_DIR, exist_ok=True)
        csv_path = os.path.join(DATA_DIR, "dataset.csv")
        with open(csv_path, "w", encoding="utf-8") as f:
            f.write(resp.text)
        print(f"Saved to {csv_path}")

    df = pd.read_csv(StringIO(resp.text), dtype=str, keep_default_na=False)
    records = parse_dataset(df)
    print(f"Loaded {len(records)} eligible records from {url}")
    return records


def parse_dataset(df: pd.DataFrame) -> list[Record]:
    """Convert raw rows to Records, dropping teams that did not make the tournament.

    Row order is preserved.
    """
    team_col = _find_col(df, [config.TEAM_COL, "team"])
    year_col = _find_col(df, [config.YEAR_COL, "season"])
    seed_col = _find_col(df, [config.SEED_COL])
    conf_col = _find_col(df, [config.CONF_COL, "conference"])
    win_col = _find_col(df, [config.WIN_PCT_COL, "W%", "win_pct", "WIN %"])
    games_col = _find_col(df, [config.GAMES_COL])
    wins_col = _find_col(df, [config.WINS_COL])
    post_col = _find_col(df, [config.POSTSEASON_COL])

    if not team_col or not seed_col:
        print("Warning: Could not find TEAM/SEED columns; no records loaded.")
        print(f"Available columns: {list(df.columns)}")
        return []

    metric_cols = {}
    for metric in config.METRIC_COLUMNS:
        col = _find_col(df, [metric])
        if col:
            metric_cols[metric] = col

    records = []
    skipped = 0
    for _, row in df.iterrows():
        seed = parse_seed(row[seed_col])
        if seed is None:
            skipped += 1
            continue

        win_display = str(row[win_col]).strip() if win_col else ""
        win_pct = parse_percentage(win_display) if win_col else None
        if win_pct is None and games_col and wins_col:
            win_pct = _derive_win_pct(row[wins_col], row[games_col])

        records.append(Record(
            team=str(row[team_col]).strip(),
            year=parse_int(row[year_col]) if year_col else None,
            seed=seed,
            conference=str(row[conf_col]).strip() if conf_col else "",
            win_pct=win_pct,
            metrics={name: parse_float(row[col]) for name, col in metric_cols.items()},
            postseason=_parse_postseason(row[post_col]) if post_col else None,
            win_pct_display=win_display or _format_pct(win_pct),
        ))

    if skipped:
        print(f"Skipped {skipped} rows without a tournament seed")
    return records


def parse_seed(value) -> int | None:
    """Tournament seed 1-16, or None for sentinels, blanks and anything else."""
    text = str(value if value is not None else "").strip().upper()
    if text in config.SEED_SENTINELS:
        return None
    seed = parse_int(text)
    if seed is None or not config.MIN_SEED <= seed <= config.MAX_SEED:
        return None
    return seed


def parse_int(value) -> int | None:
    """Integer-like strings ("2019", "3.0") to int; anything else to None."""
    number = parse_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def parse_float(value) -> float | None:
    try:
        number = float(str(value).strip())
    except (ValueError, TypeError):
        return None
    if number != number:  # NaN
        return None
    return number


def parse_percentage(value) -> float | None:
    """Percentage display string ("75.0%") to percentage points (75.0)."""
    if value is None:
        return None
    return parse_float(str(value).replace("%", ""))


def _derive_win_pct(wins, games) -> float | None:
    w = parse_float(wins)
    g = parse_float(games)
    if w is None or not g:
        return None
    return 100.0 * w / g


def _parse_postseason(value) -> str | None:
    text = str(value).strip()
    if not text or text.upper() in config.SEED_SENTINELS:
        return None
    return text


def _format_pct(win_pct: float | None) -> str:
    return f"{win_pct:.1f}%" if win_pct is not None else ""


def _find_col(df: pd.DataFrame, candidates: list[str]) -> str | None:
    """Find a column by trying multiple possible names."""
    for c in candidates:
        if c in df.columns:
            return c
        # Case-insensitive fallback
        for actual in df.columns:
            if str(actual).strip().lower() == c.lower():
                return actual
    return None
