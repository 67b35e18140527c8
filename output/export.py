"""Export the positioned-circle sequence for an external renderer."""

import csv
import json
import os

from layout.bubbles import Bubble, bubble_label

FIELDS = ["team", "year", "seed", "conference", "win_pct", "postseason", "label", "x", "y", "radius"]


def bubble_rows(bubbles: list[Bubble]) -> list[dict]:
    return [
        {
            "team": b.record.team,
            "year": b.record.year,
            "seed": b.record.seed,
            "conference": b.record.conference,
            "win_pct": b.record.win_pct,
            "postseason": b.record.postseason,
            "label": bubble_label(b.record.team, b.radius),
            "x": round(b.x, 2),
            "y": round(b.y, 2),
            "radius": round(b.radius, 2),
        }
        for b in bubbles
    ]


def export_layout_csv(bubbles: list[Bubble], filepath: str):
    """Write one row per bubble.

    Columns: team, year, seed, conference, win_pct, postseason, label, x, y, radius
    """
    _ensure_dir(filepath)
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDS)
        writer.writeheader()
        writer.writerows(bubble_rows(bubbles))
    print(f"Exported {len(bubbles)} bubbles to {filepath}")


def export_layout_json(bubbles: list[Bubble], filepath: str, width: float, height: float):
    """Write the viewport and bubbles as JSON. An empty layout is flagged explicitly."""
    data = {
        "width": width,
        "height": height,
        "empty": not bubbles,
        "bubbles": bubble_rows(bubbles),
    }
    _ensure_dir(filepath)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    print(f"Exported {len(bubbles)} bubbles to {filepath}")


def _ensure_dir(filepath: str):
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
