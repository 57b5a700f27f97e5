#!/usr/bin/env python3
"""
Synthetic dataset generation for the scan benchmark.

Writes one headerless CSV file per row size, each holding rows of
(index, category, base64 payload). The payload is sized so that a row is
roughly the target width; the two numeric columns account for 16 bytes.
"""

import base64
import csv
import os
import random

from scan_common import dataset_filename

# Bytes reserved for the index and category columns
NUMERIC_OVERHEAD = 16


def payload_length(size):
    """Raw payload bytes whose base64 encoding fills size - 16 characters."""
    encoded = max(size - NUMERIC_OVERHEAD, 0)
    return encoded // 4 * 3


def generate_rows(rng, row_count, size):
    """Yield (index, category, payload) rows drawn from rng."""
    nbytes = payload_length(size)
    for i in range(row_count):
        payload = rng.randbytes(nbytes)
        category = rng.randrange(1000)
        yield i, category, base64.b64encode(payload).decode("ascii")


def write_dataset(rng, config, size):
    """Write the dataset file for one row size and return its path."""
    path = os.path.join(config.output_dir, dataset_filename(size))
    with open(path, "w", newline="", encoding="ascii") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerows(generate_rows(rng, config.row_count, size))
    return path


def make_files(config, rng=None):
    """
    Generate the dataset file for every configured row size.

    All files are drawn from one random source, seeded from the config unless
    one is passed in, so the same seed always yields the same files.
    """
    if rng is None:
        rng = random.Random(config.seed)

    paths = []
    for size in config.row_sizes:
        path = write_dataset(rng, config, size)
        size_mib = os.path.getsize(path) / 1024.0 / 1024.0
        print(f"Wrote {os.path.basename(path)} ({size_mib:.2f} MiB).")
        paths.append(path)
    return paths
