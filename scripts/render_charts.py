#!/usr/bin/env python3
"""
Render the boxplot, grouped bar and line charts from CSV sources.

Usage:
    python scripts/render_charts.py [--data-dir D] [--output-dir O] [--format png|svg]
        [--config charts.yaml] [--charts boxplot,line] [--export-json] [--parallel] [--verbose]

Example:
    python scripts/generate_sample_data.py --output-dir data
    python scripts/render_charts.py --data-dir data --format svg --export-json
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from socialcharts.config import ChartsConfig, config_from_dict, load_config
from socialcharts.exceptions import ConfigError
from socialcharts.pipeline import format_pipeline_summary, run_pipeline


def build_config(args: argparse.Namespace) -> ChartsConfig:
    """Config file first, then command-line overrides."""
    config = load_config(args.config) if args.config else ChartsConfig()

    overrides: dict = {}
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    if args.format:
        overrides["output_format"] = args.format
    if args.charts:
        overrides["charts"] = args.charts
    if args.export_json:
        overrides["export_json"] = True
    if args.parallel:
        overrides["parallel_load"] = True

    return config_from_dict(overrides, base=config)


def main():
    parser = argparse.ArgumentParser(
        description="Render social media engagement charts"
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        help="Directory containing the CSV sources (default: data)",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=str,
        help="Directory to write charts to (default: output/charts)",
    )
    parser.add_argument(
        "--format",
        choices=["png", "svg"],
        help="Output image format (default: png)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="YAML configuration file (optional)",
    )
    parser.add_argument(
        "--charts",
        type=str,
        help="Comma-separated charts to render, e.g. boxplot,line (default: all)",
    )
    parser.add_argument(
        "--export-json",
        action="store_true",
        help="Also write each chart spec as JSON",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Load the sources concurrently",
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
        config = build_config(args)
    except (ConfigError, FileNotFoundError) as e:
        print(f"Error: {e}")
        sys.exit(2)

    data_dir = Path(config.data_dir)
    if not data_dir.exists():
        print(f"Error: Data directory not found: {data_dir}")
        print("Run scripts/generate_sample_data.py first or specify a different --data-dir")
        sys.exit(1)

    result = run_pipeline(config)
    print(format_pipeline_summary(result))

    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
