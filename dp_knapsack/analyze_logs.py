"""Utilities to analyze metrics files written by SolverLogger.

Each solver run with a SolverLogger leaves a <run_id>_metrics.json file.
These helpers load them into a pandas DataFrame and summarise them.
"""

import json
from pathlib import Path

import numpy as np
import pandas as pd

RUN_COLUMNS = ["instance_name", "timestamp", "trait", "n_items", "capacity", "runtime",
               "rows_filled", "cells_written", "items_selected", "total_value"]


def _run_row(metrics):
    problem = metrics.get("problem_data", {})
    result = metrics.get("final_result", {})
    return {
        "instance_name": metrics.get("instance_name"),
        "timestamp": metrics.get("timestamp"),
        "trait": problem.get("trait"),
        "n_items": problem.get("n_items"),
        "capacity": problem.get("capacity"),
        "runtime": metrics.get("total_runtime"),
        "rows_filled": metrics.get("rows_filled", 0),
        "cells_written": metrics.get("cells_written", 0),
        "items_selected": metrics.get("items_selected", 0),
        "total_value": result.get("total_value"),
    }


def load_metrics(metrics_files):
    """Load one or more metrics JSON files into a DataFrame (one row per run)."""
    rows = []
    for file in metrics_files:
        with open(Path(file), 'r') as f:
            rows.append(_run_row(json.load(f)))
    return pd.DataFrame(rows, columns=RUN_COLUMNS)


def summarize_runs(df):
    """Aggregate runs per problem variant.

    The fill ratio is cells_written over the dense table size
    (n_items + 1) * (capacity + 1); it is NaN where the size is unknown.
    """
    df = df.copy()
    for column in ("n_items", "capacity", "runtime", "cells_written"):
        df[column] = pd.to_numeric(df[column], errors="coerce")
    dense = (df["n_items"] + 1) * (df["capacity"] + 1)
    df["fill_ratio"] = np.where(dense > 0, df["cells_written"] / dense, np.nan)

    summary = df.groupby("trait").agg(
        runs=("instance_name", "count"),
        mean_runtime=("runtime", "mean"),
        max_runtime=("runtime", "max"),
        mean_cells_written=("cells_written", "mean"),
        mean_fill_ratio=("fill_ratio", "mean"),
    )
    return summary.reset_index()


def analyze_metrics(metrics_file):
    """Print a summary of a single solver run."""
    with open(metrics_file, 'r') as f:
        metrics = json.load(f)

    print("=" * 70)
    print(f"ANALYSIS: {metrics['instance_name']}")
    print(f"Run ID: {metrics['timestamp']}")
    print("=" * 70)

    print("\n--- PERFORMANCE SUMMARY ---")
    print(f"Total runtime: {metrics['total_runtime']:.3f} seconds")
    print(f"Rows filled: {metrics['rows_filled']:,}")
    print(f"Cells written: {metrics['cells_written']:,}")
    print(f"Items selected: {metrics['items_selected']:,}")

    if 'problem_data' in metrics:
        print("\n--- PROBLEM CHARACTERISTICS ---")
        prob = metrics['problem_data']
        print(f"Variant: {prob['trait']}")
        print(f"Items: {prob['n_items']}")
        print(f"Capacity: {prob['capacity']}")
        dense = (prob['n_items'] + 1) * (prob['capacity'] + 1)
        if dense > 0:
            print(f"Cells written vs dense table: {100 * metrics['cells_written'] / dense:.1f}%")

    if 'final_result' in metrics:
        print("\n--- FINAL RESULT ---")
        result = metrics['final_result']
        print(f"Total value: {result['total_value']}")
        print(f"Total weight: {result['total_weight']}")
        print(f"Items packed: {result['n_selected']}")

    print("\n" + "=" * 70)
