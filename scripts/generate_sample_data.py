#!/usr/bin/env python3
"""
Generate the three sample CSV sources from a seeded synthetic post table.

Usage:
    python scripts/generate_sample_data.py [--output-dir D] [--seed N] [--n-posts N]

Example:
    python scripts/generate_sample_data.py --output-dir data --seed 7 --n-posts 800
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from socialcharts.data.sample_generator import write_sample_sources


def main():
    parser = argparse.ArgumentParser(
        description="Generate sample social media CSV sources"
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=str,
        default="data",
        help="Directory to write the CSV files to (default: data)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--n-posts",
        type=int,
        default=500,
        help="Number of raw posts to generate (default: 500)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print verbose output",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        written = write_sample_sources(args.output_dir, n_posts=args.n_posts, seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    for kind, path in written.items():
        print(f"{kind.value:<12} -> {path}")


if __name__ == "__main__":
    main()
