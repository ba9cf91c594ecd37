"""
COVID-19 migration data generator.

Builds every synthetic collection and writes it to the data directory
(MIGRATION_DATA_DIR, default ./data). Run this once before starting the API.

Usage: python generate_data.py [--seed 42] [--output-dir data]
"""

import argparse
import sys
import time
from typing import List, Optional

from config import STATES, STATES_ARTIFACT, get_data_dir
from data_store import DataWriteError, write_collection
from generator import generate_all


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate synthetic COVID-19 migration datasets.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a repeatable run")
    parser.add_argument("--output-dir", default=None, help="Directory for the generated artifacts")
    return parser.parse_args(argv)


def run(output_dir: str, seed: Optional[int] = None) -> None:
    """Generates and writes all artifacts. Raises DataWriteError on any write failure."""
    print("\n========================================")
    print("COVID-19 Migration Data Generator")
    print("========================================\n")
    started = time.perf_counter()

    collections = generate_all(seed)

    print("\n========================================")
    print("Writing data files...")
    print("========================================\n")
    for name, data in collections.items():
        write_collection(output_dir, name, data)
    write_collection(output_dir, STATES_ARTIFACT, STATES)

    elapsed = time.perf_counter() - started
    print("\n========================================")
    print("✓ All data generated successfully!")
    print(f"✓ Time elapsed: {elapsed:.2f}s")
    print("========================================\n")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    output_dir = args.output_dir or get_data_dir()
    try:
        run(output_dir, seed=args.seed)
    except DataWriteError as exc:
        print(f"\n❌ Data generation failed: {exc}", file=sys.stderr)
        print("Check that the output directory is writable and try again.\n", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
