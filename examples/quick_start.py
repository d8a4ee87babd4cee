#!/usr/bin/env python3
"""Quick start example for socialcharts.

Generates sample sources into a temporary directory, renders all three
charts as SVG and prints the boxplot's five-number summaries.

Usage:
    python examples/quick_start.py
"""

import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from socialcharts.config import ChartsConfig
from socialcharts.data.schemas import ChartKind
from socialcharts.data.sample_generator import write_sample_sources
from socialcharts.pipeline import format_pipeline_summary, run_pipeline


def main() -> None:
    """Run a quick rendering demo."""
    print("=" * 60)
    print("socialcharts - Quick Start Demo")
    print("=" * 60)

    workdir = Path(tempfile.mkdtemp(prefix="socialcharts-"))
    write_sample_sources(workdir / "data", n_posts=300, seed=7)

    config = ChartsConfig(
        data_dir=workdir / "data",
        output_dir=workdir / "charts",
        output_format="svg",
        export_json=True,
    )
    result = run_pipeline(config)
    print("\n" + format_pipeline_summary(result))

    boxplot = result.chart_results[ChartKind.BOXPLOT]
    if boxplot.spec is not None:
        print("\n" + "=" * 60)
        print("LIKES BY AGE GROUP")
        print("=" * 60)
        for summary in boxplot.spec.metadata["summaries"]:
            print(
                f"  {summary['category']:<8} n={summary['count']:<4} min={summary['min']:<6.0f} "
                f"q1={summary['q1']:<7.1f} median={summary['median']:<7.1f} "
                f"q3={summary['q3']:<7.1f} max={summary['max']:.0f}"
            )


if __name__ == "__main__":
    main()
