"""
Module: pipeline

Purpose: Two-phase orchestrator: load every source, then build, paint and
save every chart.

Key Functions:
- run_pipeline: Execute the whole run from ChartsConfig to files on disk
- run_chart: Build, render and optionally export a single chart
- load_datasets: Load phase, optionally concurrent

Architecture Notes:
- Failures are local to one chart: the chart's ChartResult records the
  error and the remaining charts continue
- The load phase may run concurrently; results are keyed by ChartKind so
  they match a sequential run
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from socialcharts.charts import BUILDERS
from socialcharts.charts.primitives import ChartSpec
from socialcharts.config import ChartsConfig
from socialcharts.data.loader import CsvDatasetLoader, LoadResult
from socialcharts.data.schemas import ChartKind, Dataset
from socialcharts.rendering.export import export_chart_to_json
from socialcharts.rendering.matplotlib_renderer import render_to_file, set_style

logger = logging.getLogger(__name__)


# =============================================================================
# RESULTS
# =============================================================================


@dataclass
class PipelineStageResult:
    """Result from a single pipeline stage."""

    stage_name: str
    success: bool
    duration_ms: float
    metrics: dict[str, Any] = field(default_factory=dict)
    error_message: str | None = None


@dataclass
class ChartResult:
    """Outcome of one chart's run through the pipeline."""

    kind: ChartKind
    success: bool = False
    spec: ChartSpec | None = None
    output_path: Path | None = None
    json_path: Path | None = None
    dropped_rows: int = 0
    stage_results: list[PipelineStageResult] = field(default_factory=list)
    error_message: str | None = None

    @property
    def failed_stage(self) -> str | None:
        return next((s.stage_name for s in self.stage_results if not s.success), None)


@dataclass
class PipelineResult:
    """Complete pipeline execution result."""

    config: ChartsConfig
    chart_results: dict[ChartKind, ChartResult] = field(default_factory=dict)
    total_duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return all(r.success for r in self.chart_results.values())

    @property
    def failed(self) -> list[ChartResult]:
        return [r for r in self.chart_results.values() if not r.success]

    @property
    def output_paths(self) -> list[Path]:
        return [r.output_path for r in self.chart_results.values() if r.output_path is not None]

    def get_summary(self) -> dict[str, Any]:
        """Get summary of pipeline results."""
        return {
            "total_charts": len(self.chart_results),
            "succeeded": len(self.chart_results) - len(self.failed),
            "failed": [r.kind.value for r in self.failed],
            "total_duration_ms": self.total_duration_ms,
            "success": self.success,
            "charts": [
                {
                    "kind": r.kind.value,
                    "success": r.success,
                    "output_path": str(r.output_path) if r.output_path else None,
                    "dropped_rows": r.dropped_rows,
                    "error": r.error_message,
                    "stages": [
                        {"name": s.stage_name, "success": s.success, "duration_ms": s.duration_ms}
                        for s in r.stage_results
                    ],
                }
                for r in self.chart_results.values()
            ],
        }


# =============================================================================
# STAGES
# =============================================================================


def _time_stage(
    stage_name: str,
    func: Callable[[], Any],
    stage_results: list[PipelineStageResult],
) -> Any:
    """Execute a stage, time it and append its result; exceptions propagate."""
    logger.debug(f"Starting: {stage_name}")

    start = time.perf_counter()
    try:
        result = func()
    except Exception as e:
        duration = (time.perf_counter() - start) * 1000
        stage_results.append(
            PipelineStageResult(
                stage_name=stage_name,
                success=False,
                duration_ms=duration,
                error_message=str(e),
            )
        )
        raise

    duration = (time.perf_counter() - start) * 1000
    stage_results.append(PipelineStageResult(stage_name=stage_name, success=True, duration_ms=duration))
    logger.debug(f"Completed: {stage_name} ({duration:.1f}ms)")
    return result


def _load_one(kind: ChartKind, config: ChartsConfig) -> LoadResult:
    loader = CsvDatasetLoader(
        config.source_path(kind),
        kind,
        delimiter=config.delimiter,
        retries=config.load_retries,
        retry_delay_s=config.retry_delay_s,
    )
    return loader.load()


def load_datasets(
    config: ChartsConfig,
    kinds: list[ChartKind] | None = None,
) -> dict[ChartKind, LoadResult | Exception]:
    """
    Load phase: read the source of every requested chart.

    Args:
        config: Run configuration (paths, delimiter, retry policy)
        kinds: Charts to load (defaults to config.charts)

    Returns:
        Mapping of chart kind to its LoadResult, or to the exception that
        stopped it loading
    """
    kinds = list(config.charts) if kinds is None else kinds
    outcomes: dict[ChartKind, LoadResult | Exception] = {}

    if config.parallel_load and len(kinds) > 1:
        with ThreadPoolExecutor(max_workers=len(kinds)) as executor:
            futures = {kind: executor.submit(_load_one, kind, config) for kind in kinds}
            for kind, future in futures.items():
                try:
                    outcomes[kind] = future.result()
                except Exception as e:
                    outcomes[kind] = e
    else:
        for kind in kinds:
            try:
                outcomes[kind] = _load_one(kind, config)
            except Exception as e:
                outcomes[kind] = e

    return outcomes


def run_chart(
    dataset: Dataset,
    config: ChartsConfig,
    *,
    result: ChartResult | None = None,
) -> ChartResult:
    """
    Build, render and (optionally) export one chart.

    Never raises for chart-level failures; they are recorded on the result.

    Args:
        dataset: Loaded dataset; its kind selects the builder
        config: Run configuration (output directory, format, dpi, export)
        result: Result to continue (e.g. one already holding the load stage)

    Returns:
        ChartResult
    """
    kind = dataset.kind
    result = result or ChartResult(kind=kind)
    result.dropped_rows = dataset.dropped_rows
    stages = result.stage_results

    try:
        spec: ChartSpec = _time_stage("build", lambda: BUILDERS[kind](dataset), stages)
        result.spec = spec

        output_path = config.output_path(spec.chart_id)
        result.output_path = _time_stage(
            "render",
            lambda: render_to_file(spec, output_path, dpi=config.dpi),
            stages,
        )

        if config.export_json:
            json_path = config.output_path(spec.chart_id, "json")
            _time_stage("export", lambda: export_chart_to_json(spec, json_path), stages)
            result.json_path = json_path

        result.success = True
    except Exception as e:
        result.success = False
        result.error_message = str(e)
        logger.error(f"Chart {kind.value} failed at {result.failed_stage}: {e}")

    return result


def run_pipeline(
    config: ChartsConfig | None = None,
    *,
    datasets: dict[ChartKind, Dataset] | None = None,
) -> PipelineResult:
    """
    Execute the complete chart pipeline.

    Phase one loads every source (skipping kinds supplied in ``datasets``);
    phase two builds, paints and saves each chart that loaded.

    Args:
        config: Run configuration
        datasets: Optional pre-loaded datasets keyed by chart kind

    Returns:
        PipelineResult with one ChartResult per configured chart
    """
    config = config or ChartsConfig()
    datasets = dict(datasets or {})
    start_time = time.perf_counter()
    set_style(config.style)

    results = {kind: ChartResult(kind=kind) for kind in config.charts}

    # Phase 1: load
    to_load = [kind for kind in config.charts if kind not in datasets]
    load_start = time.perf_counter()
    outcomes = load_datasets(config, to_load)
    load_duration = (time.perf_counter() - load_start) * 1000

    for kind, outcome in outcomes.items():
        result = results[kind]
        if isinstance(outcome, Exception):
            result.stage_results.append(
                PipelineStageResult(
                    stage_name="load",
                    success=False,
                    duration_ms=load_duration,
                    error_message=str(outcome),
                )
            )
            result.error_message = str(outcome)
            logger.error(f"Chart {kind.value} failed at load: {outcome}")
            continue

        result.stage_results.append(
            PipelineStageResult(
                stage_name="load",
                success=True,
                duration_ms=outcome.load_duration_ms,
                metrics={
                    "rows": len(outcome.dataset),
                    "total_rows": outcome.total_rows,
                    "attempts": outcome.attempts,
                    "warnings": len(outcome.warnings),
                },
            )
        )
        datasets[kind] = outcome.dataset

    # Phase 2: build, render, export
    for kind in config.charts:
        if kind in datasets:
            run_chart(datasets[kind], config, result=results[kind])

    pipeline_result = PipelineResult(
        config=config,
        chart_results=results,
        total_duration_ms=(time.perf_counter() - start_time) * 1000,
    )
    logger.info(
        f"Rendered {len(results) - len(pipeline_result.failed)}/{len(results)} charts "
        f"in {pipeline_result.total_duration_ms:.0f}ms"
    )
    return pipeline_result


def format_pipeline_summary(result: PipelineResult) -> str:
    """Format pipeline result as a human-readable summary."""
    lines = [
        "=" * 60,
        "CHART PIPELINE SUMMARY",
        "=" * 60,
        f"Status: {'SUCCESS' if result.success else 'PARTIAL FAILURE'}",
        f"Duration: {result.total_duration_ms:.0f}ms",
        "",
    ]

    for r in result.chart_results.values():
        if r.success:
            line = f"  [OK]     {r.kind.value:<12} -> {r.output_path}"
            if r.dropped_rows:
                line += f" ({r.dropped_rows} rows dropped)"
        else:
            line = f"  [FAILED] {r.kind.value:<12} at {r.failed_stage}: {r.error_message}"
        lines.append(line)

    return "\n".join(lines)
