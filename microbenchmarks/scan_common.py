#!/usr/bin/env python3
"""
Shared module for the scan benchmark.

Contains the benchmark configuration, query definitions, file and table
naming, and the latency statistics used by both scan_datasets.py and
scan_benchmark.py.
"""

from collections import OrderedDict

# --- Configuration ---

ROW_COUNT = 1_000_000
RUN_COUNT = 10
ROW_SIZES = (16, 32, 512, 1024, 4096)

# Fixed seed so that regenerated datasets are byte-identical
DATASET_SEED = 1603296558158

# --- Query Definitions ---

QUERIES = OrderedDict([
    ("sum-length-payload", {
        "name": "Sum of payload lengths",
        "sql": "SELECT SUM(LENGTH(payload)) FROM {table}",
    }),
    ("select-count", {
        "name": "Count of number column",
        "sql": "SELECT COUNT(number) FROM {table}",
    }),
])


class BenchmarkConfig:
    """Parameters shared by the dataset generator and the scan runner."""

    def __init__(self, row_count=ROW_COUNT, run_count=RUN_COUNT,
                 row_sizes=ROW_SIZES, queries=None, seed=DATASET_SEED,
                 output_dir="."):
        self.row_count = row_count
        self.run_count = run_count
        self.row_sizes = tuple(row_sizes)
        self.queries = QUERIES if queries is None else queries
        self.seed = seed
        self.output_dir = output_dir

    def __repr__(self):
        return (f"BenchmarkConfig(row_count={self.row_count}, "
                f"run_count={self.run_count}, row_sizes={self.row_sizes}, "
                f"queries={list(self.queries)}, seed={self.seed}, "
                f"output_dir={self.output_dir!r})")


# --- Naming ---

def table_name(size):
    """Table holding rows of the given byte width, e.g. scan_0016."""
    return f"scan_{size:04d}"


def dataset_filename(size):
    return table_name(size) + ".csv"


def results_filename(label, query_label, row_count):
    return f"results-{label}-{query_label}-rowcount{row_count}.csv"


# --- Statistics ---

def median(samples):
    """
    Median of nanosecond samples.

    For an even count this averages sorted[n/2] and sorted[n/2 + 1], one
    position above the usual pair. Existing result files were computed this
    way, so it is kept. With two samples the upper index is clamped to the
    last element.
    """
    if not samples:
        raise ValueError("median of empty sequence")

    ordered = sorted(int(s) for s in samples)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[mid]

    upper = min(mid + 1, len(ordered) - 1)
    return (ordered[mid] + ordered[upper]) / 2.0


def to_millis(nanoseconds):
    """Whole milliseconds, truncated."""
    return int(nanoseconds) // 1_000_000
