#!/usr/bin/env python3
"""
Scan benchmark for row width vs. full-table scan latency.

Two commands:
1. csvs - generate one synthetic CSV dataset per row size
2. scan - time every query against the scan_<size> tables, loaded from those
   datasets beforehand, and save per-run and median latencies

Usage:
    ./scan_benchmark.py csvs
    ./scan_benchmark.py scan pg16 postgresql://pg@localhost:5432/regression
"""

import argparse
import csv
import os
import sys
import time
import traceback

import psycopg

from scan_common import (
    BenchmarkConfig,
    median,
    results_filename,
    table_name,
    to_millis,
)
from scan_datasets import make_files

# Exit status for argument errors; any other failure aborts with FATAL_EXIT
USAGE_EXIT = 1
FATAL_EXIT = 2

TAB_WIDTH = 8


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(USAGE_EXIT, f"{self.prog}: error: {message}\n")


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = ArgumentParser(
        description="Scan latency benchmark over tables of different row widths.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s csvs                                    # Write scan_*.csv datasets
    %(prog)s scan pg16 postgresql://localhost/bench  # Benchmark a database
        """
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    subparsers.add_parser(
        "csvs",
        help="Generate the synthetic CSV datasets in the current directory"
    )
    scan = subparsers.add_parser(
        "scan",
        help="Run the timed scan queries against a database"
    )
    scan.add_argument(
        "label",
        help="Free-form name of the database under test, used in result file names"
    )
    scan.add_argument(
        "conn_uri",
        help="Connection string, e.g. postgresql://user@host:5432/dbname"
    )
    return parser.parse_args(argv)


# --- Timing ---

def time_query(conn, sql):
    """
    Run a query once and return its latency in nanoseconds.

    Timing covers issuing the query up to closing its cursor; no rows are
    fetched.
    """
    start = time.perf_counter_ns()
    cur = conn.cursor()
    try:
        cur.execute(sql)
    finally:
        cur.close()
    return time.perf_counter_ns() - start


def collect_timings(conn, query_def, config):
    """Return one list of run_count latencies per row size, in config order."""
    timings = []
    for size in config.row_sizes:
        sql = query_def["sql"].format(table=table_name(size))
        samples = []
        for _ in range(config.run_count):
            samples.append(time_query(conn, sql))
        timings.append(samples)
    return timings


# --- Output ---

def result_rows(timings, config):
    """Header, one row per run and a trailing median row, as strings."""
    rows = [["run"] + [f"{size} B" for size in config.row_sizes]]
    for run in range(config.run_count):
        rows.append([str(run + 1)] +
                    [str(to_millis(samples[run])) for samples in timings])
    rows.append(["median"] +
                [str(to_millis(median(samples))) for samples in timings])
    return rows


def format_table(rows):
    """Align columns on tab stops; the last column is left unpadded."""
    if not rows:
        return ""

    # Width of each padded column in tab stops, at least one tab past its
    # longest cell
    stops = [max(len(row[col]) for row in rows) // TAB_WIDTH + 1
             for col in range(len(rows[0]) - 1)]

    lines = []
    for row in rows:
        parts = [cell + "\t" * (stops[col] - len(cell) // TAB_WIDTH)
                 for col, cell in enumerate(row[:-1])]
        parts.append(row[-1])
        lines.append("".join(parts))
    return "\n".join(lines) + "\n"


def write_results(path, rows):
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerows(rows)


# --- Benchmark ---

def run_scan(label, conn_uri, config):
    """Time every configured query against every row size and save results."""
    conn = psycopg.connect(conn_uri, autocommit=True)
    try:
        for query_label, query_def in config.queries.items():
            filename = results_filename(label, query_label, config.row_count)
            path = os.path.join(config.output_dir, filename)
            print(f"Database: {label}, Query: {query_label}")
            print(f"Query: {query_def['sql']}")
            print(f"Saving results to {filename}.")
            print()

            timings = collect_timings(conn, query_def, config)
            rows = result_rows(timings, config)
            write_results(path, rows)

            sys.stdout.write(format_table(rows))
            print()
            print()
    finally:
        conn.close()


def main(argv=None):
    args = parse_arguments(argv)
    config = BenchmarkConfig()

    try:
        if args.command == "csvs":
            make_files(config)
        else:
            run_scan(args.label, args.conn_uri, config)
    except (OSError, csv.Error, psycopg.Error) as e:
        traceback.print_exc()
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(FATAL_EXIT)


if __name__ == "__main__":
    main()
