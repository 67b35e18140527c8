"""Pretty-print filters, records, distributions and layouts."""

from tabulate import tabulate

from layout.bubbles import Bubble, bubble_label, label_font_size
from models.filter_spec import FilterState, Range, SeedSet, SingleValue
from models.record import Record
from selection.histogram import Histogram

NO_MATCHES = "No teams match the current filters."


def print_filters(state: FilterState):
    """Print the active filter dimensions."""
    print("\n=== ACTIVE FILTERS ===\n")
    if not state:
        print("  (none: showing every tournament team)")
        return

    rows = []
    for dimension, spec in sorted(state.items()):
        rows.append([dimension, describe_spec(spec)])
    print(tabulate(rows, headers=["Dimension", "Constraint"], tablefmt="simple"))


def describe_spec(spec) -> str:
    if isinstance(spec, Range):
        return f"{spec.low:.2f} to {spec.high:.2f}"
    if isinstance(spec, SeedSet):
        return "seeds " + ", ".join(str(s) for s in sorted(spec.values))
    if isinstance(spec, SingleValue):
        return f"= {spec.value}"
    return "any"


def print_records(records: list[Record], limit: int | None = None):
    """Print the filtered records with the fields shown in a bubble tooltip."""
    print(f"\n=== {len(records)} MATCHING TEAMS ===\n")
    if not records:
        print(f"  {NO_MATCHES}")
        return

    shown = records if limit is None else records[:limit]
    rows = [
        [r.team, r.year, r.seed, r.win_pct_display, r.conference, r.postseason or "N/A"]
        for r in shown
    ]
    headers = ["Team", "Year", "Seed", "Win %", "Conf", "Finish"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    if limit is not None and len(records) > limit:
        print(f"  ... and {len(records) - limit} more")


def print_histogram(histogram: Histogram, label: str, bar_width: int = 40):
    """Print a distribution as horizontal bars."""
    print(f"\n=== {label.upper()} DISTRIBUTION ===\n")
    peak = histogram.max_count
    rows = []
    for b in histogram.bins:
        if b.x0 == b.x1:
            continue  # zero-width padding bins only shape the drawn curve
        bar = "#" * (round(b.count / peak * bar_width) if peak else 0)
        rows.append([f"{b.x0:.2f}", f"{b.x1:.2f}", b.count, bar])
    print(tabulate(rows, headers=["From", "To", "Teams", ""], tablefmt="simple"))


def print_layout(bubbles: list[Bubble], limit: int | None = None):
    """Print positioned bubbles the way a renderer would draw them."""
    print(f"\n=== BUBBLE LAYOUT ({len(bubbles)} bubbles) ===\n")
    if not bubbles:
        print(f"  {NO_MATCHES}")
        return

    radius = bubbles[0].radius
    print(f"  Radius: {radius:.1f}px   Label font: {label_font_size(radius):.1f}px\n")
    shown = bubbles if limit is None else bubbles[:limit]
    rows = [
        [bubble_label(b.record.team, b.radius), b.record.team, b.record.year, f"{b.x:.1f}", f"{b.y:.1f}"]
        for b in shown
    ]
    print(tabulate(rows, headers=["Label", "Team", "Year", "X", "Y"], tablefmt="simple"))
    if limit is not None and len(bubbles) > limit:
        print(f"  ... and {len(bubbles) - limit} more")
