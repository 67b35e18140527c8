"""Tournament Bubble Explorer - CLI entry point.

Usage:
    python cli.py load [--file path.csv | --url URL]
    python cli.py filter [--year 2019] [--seeds 1 2] [--win-pct 60 80] [--metric 3P_O 35 40] [--clear DIM] [--clear-all]
    python cli.py histogram [--metric win_pct] [--bins 20] [--width 300]
    python cli.py layout [--width 960] [--height 600] [--margin 20] [--max-ticks 1000]
    python cli.py show
    python cli.py export [--format csv|json] [--output path]
"""

import argparse
import os
import pickle
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
STATE_FILE = os.path.join(DATA_DIR, "state.pkl")


def save_state(state: dict):
    """Save intermediate state to disk."""
    os.makedirs(DATA_DIR, exist_ok=True)
    with open(STATE_FILE, "wb") as f:
        pickle.dump(state, f)


def load_state() -> dict:
    """Load intermediate state from disk."""
    if os.path.exists(STATE_FILE):
        with open(STATE_FILE, "rb") as f:
            return pickle.load(f)
    return {}


def _reducer_for(state: dict):
    from filtering.reducer import FilterReducer
    reducer = FilterReducer(state.get("records", []))
    reducer.state = dict(state.get("filters", {}))
    return reducer


# --- Commands ---

def cmd_load(args):
    """Load the tournament dataset."""
    if args.url:
        from ingestion.dataset_loader import fetch_dataset
        records = fetch_dataset(args.url)
    elif args.file:
        from ingestion.dataset_loader import load_dataset
        records = load_dataset(args.file)
    else:
        print("ERROR: Pass --file or --url.")
        return

    if not records:
        print("No eligible records loaded; keeping the previous dataset.")
        return

    # New dataset: filters and layout start over
    save_state({"records": records, "filters": {}})

    years = sorted({r.year for r in records if r.year is not None})
    if years:
        print(f"Seasons: {years[0]}-{years[-1]} ({len(years)} with data)")


def cmd_filter(args):
    """Apply filter updates and print the surviving records."""
    state = load_state()
    if not state.get("records"):
        print("ERROR: No dataset loaded. Run 'python cli.py load --file path.csv' first.")
        return

    from filtering.events import coerce_range_payload, coerce_seed_payload, coerce_year_payload
    from models.filter_spec import range_dimension
    reducer = _reducer_for(state)

    if args.clear_all:
        reducer.clear_all()
    for dimension in args.clear or []:
        if dimension not in (config.YEAR_DIMENSION, config.SEED_DIMENSION):
            dimension = range_dimension(dimension)
        reducer.clear(dimension)

    updates = []
    if args.year is not None:
        if args.year in config.UNAVAILABLE_YEARS:
            print(f"Warning: {args.year} has no tournament data; year filter unchanged.")
        else:
            updates.append(coerce_year_payload(args.year))
    if args.seeds:
        invalid = [s for s in args.seeds if not config.MIN_SEED <= s <= config.MAX_SEED]
        if invalid:
            print(f"ERROR: Invalid seeds: {invalid}")
            return
        updates.append(coerce_seed_payload(args.seeds))
    if args.win_pct:
        updates.append(coerce_range_payload(args.win_pct))
    for name, low, high in args.metric or []:
        updates.append(coerce_range_payload({"metric": name, "range": [low, high]}))

    for update in updates:
        reducer.dispatch(update)

    state["filters"] = reducer.state
    save_state(state)

    from output.printer import print_filters, print_records
    print_filters(reducer.state)
    print_records(reducer.filtered(), limit=args.limit)


def cmd_histogram(args):
    """Print the distribution a range selector draws."""
    state = load_state()
    records = state.get("records")
    if not records:
        print("ERROR: No dataset loaded. Run 'python cli.py load --file path.csv' first.")
        return

    from output.printer import print_histogram
    from selection.linear_range import LinearRangeSelector
    if args.metric == config.WIN_PCT_METRIC:
        selector = LinearRangeSelector.for_win_pct(records, width=args.width)
    else:
        # Arc metrics have no strip of their own; their distribution is binned the same way
        selector = LinearRangeSelector.for_metric(records, args.metric, bin_count=args.bins, width=args.width)
    print_histogram(selector.histogram, args.metric)


def cmd_layout(args):
    """Settle the bubble layout for the current filtered set."""
    state = load_state()
    if not state.get("records"):
        print("ERROR: No dataset loaded. Run 'python cli.py load --file path.csv' first.")
        return

    from layout.bubbles import BubbleLayout
    filtered = _reducer_for(state).filtered()

    layout = state.get("layout")
    if layout is None:
        layout = BubbleLayout(args.width, args.height, args.margin)
        layout.replace(filtered)
    else:
        if (layout.width, layout.height, layout.margin) != (args.width, args.height, args.margin):
            layout.resize(args.width, args.height, args.margin)
        restarted = layout.update(filtered)
        print("Restarted layout" if restarted else "Continuing from previous layout")

    ticks = layout.settle(max_ticks=args.max_ticks)
    print(f"Ran {ticks} ticks")

    state["layout"] = layout
    save_state(state)

    from output.printer import print_layout
    print_layout(layout.bubbles(), limit=args.limit)


def cmd_show(args):
    """Display filters, filtered records and the last layout."""
    state = load_state()
    if not state.get("records"):
        print("ERROR: No dataset loaded. Run 'python cli.py load --file path.csv' first.")
        return

    from output.printer import print_filters, print_layout, print_records
    reducer = _reducer_for(state)
    print_filters(reducer.state)
    print_records(reducer.filtered(), limit=args.limit)

    layout = state.get("layout")
    if layout is not None:
        print_layout(layout.bubbles(), limit=args.limit)


def cmd_export(args):
    """Export the positioned bubbles."""
    state = load_state()
    layout = state.get("layout")
    if layout is None:
        print("ERROR: No layout. Run 'python cli.py layout' first.")
        return

    bubbles = layout.bubbles()
    if args.format == "csv":
        from output.export import export_layout_csv
        output_path = args.output or os.path.join(DATA_DIR, "bubbles.csv")
        export_layout_csv(bubbles, output_path)
    elif args.format == "json":
        from output.export import export_layout_json
        output_path = args.output or os.path.join(DATA_DIR, "bubbles.json")
        export_layout_json(bubbles, output_path, layout.width, layout.height)
    else:
        print(f"Unknown format: {args.format}")


# --- Main ---

def main():
    parser = argparse.ArgumentParser(
        description="Tournament Bubble Explorer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflow:
  1. python cli.py load --file cleaneddataset.csv   # Load tournament teams
  2. python cli.py filter --year 2019 --seeds 1 2   # Narrow the field
  3. python cli.py layout                           # Pack the survivors into bubbles
  4. python cli.py export --format json             # Hand positions to a renderer
        """
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # load
    p_load = subparsers.add_parser("load", help="Load the tournament dataset")
    p_load.add_argument("--file", help="CSV file path")
    p_load.add_argument("--url", help="Download the CSV from a URL")

    # filter
    p_filter = subparsers.add_parser("filter", help="Apply filters")
    p_filter.add_argument("--year", type=int)
    p_filter.add_argument("--seeds", type=int, nargs="+")
    p_filter.add_argument("--win-pct", type=float, nargs=2, metavar=("LOW", "HIGH"))
    p_filter.add_argument("--metric", nargs=3, action="append", metavar=("NAME", "LOW", "HIGH"),
                          help="Range on a named metric, e.g. --metric 3P_O 35 40")
    p_filter.add_argument("--clear", action="append", metavar="DIM",
                          help="Clear 'year', 'seed' or a metric name")
    p_filter.add_argument("--clear-all", action="store_true")
    p_filter.add_argument("--limit", type=int, default=50)

    # histogram
    p_hist = subparsers.add_parser("histogram", help="Print a metric's distribution")
    p_hist.add_argument("--metric", default=config.WIN_PCT_METRIC)
    p_hist.add_argument("--bins", type=int, default=config.METRIC_HISTOGRAM_BINS)
    p_hist.add_argument("--width", type=float, default=config.DEFAULT_SELECTOR_WIDTH)

    # layout
    p_layout = subparsers.add_parser("layout", help="Settle the bubble layout")
    p_layout.add_argument("--width", type=float, default=config.DEFAULT_LAYOUT_WIDTH)
    p_layout.add_argument("--height", type=float, default=config.DEFAULT_LAYOUT_HEIGHT)
    p_layout.add_argument("--margin", type=float, default=config.LAYOUT_MARGIN)
    p_layout.add_argument("--max-ticks", type=int, default=config.DEFAULT_MAX_TICKS)
    p_layout.add_argument("--limit", type=int, default=50)

    # show
    p_show = subparsers.add_parser("show", help="Display current filters and layout")
    p_show.add_argument("--limit", type=int, default=50)

    # export
    p_export = subparsers.add_parser("export", help="Export bubble positions")
    p_export.add_argument("--format", choices=["csv", "json"], default="json")
    p_export.add_argument("--output", help="Output file path")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    commands = {
        "load": cmd_load,
        "filter": cmd_filter,
        "histogram": cmd_histogram,
        "layout": cmd_layout,
        "show": cmd_show,
        "export": cmd_export,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        cmd_func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
