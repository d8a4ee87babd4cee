"""
Module: config

Purpose: Run configuration for the chart pipelines.

Key Functions:
- ChartsConfig: Where to read sources, where to write charts, load policy
- load_config: Build a ChartsConfig from a YAML file

Architecture Notes:
- Plain dataclass with sensible defaults; YAML only overrides what it names
- Per-chart geometry lives in charts.layout, not here
"""

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from socialcharts.data.schemas import DEFAULT_SOURCE_FILES, ChartKind
from socialcharts.exceptions import ConfigError

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("png", "svg")

# Names accepted by seaborn.set_style
PLOT_STYLES = ("white", "dark", "whitegrid", "darkgrid", "ticks")


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class ChartsConfig:
    """Configuration for a chart rendering run."""

    # Inputs
    data_dir: Path = Path("data")
    sources: dict[ChartKind, str] = field(default_factory=lambda: dict(DEFAULT_SOURCE_FILES))
    delimiter: str = ","

    # Load policy
    load_retries: int = 1
    retry_delay_s: float = 0.0
    parallel_load: bool = False

    # Which charts to produce, in order
    charts: tuple[ChartKind, ...] = tuple(ChartKind)

    # Outputs
    output_dir: Path = Path("output/charts")
    output_format: str = "png"
    dpi: int = 100
    export_json: bool = False
    style: str = "white"

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"output_format must be one of {OUTPUT_FORMATS}, got {self.output_format!r}",
                key="output_format",
            )
        if self.style not in PLOT_STYLES:
            raise ConfigError(
                f"style must be one of {PLOT_STYLES}, got {self.style!r}",
                key="style",
            )
        if self.load_retries < 0:
            raise ConfigError("load_retries must be >= 0", key="load_retries")
        if self.retry_delay_s < 0:
            raise ConfigError("retry_delay_s must be >= 0", key="retry_delay_s")
        if self.dpi <= 0:
            raise ConfigError("dpi must be positive", key="dpi")
        missing = [kind.value for kind in self.charts if kind not in self.sources]
        if missing:
            raise ConfigError(
                f"No source file configured for: {', '.join(missing)}",
                key="sources",
            )

    def source_path(self, kind: ChartKind) -> Path:
        """Full path of the source file for a chart."""
        return Path(self.data_dir) / self.sources[kind]

    def output_path(self, chart_id: str, suffix: str | None = None) -> Path:
        """Full path of an output file for a chart."""
        return Path(self.output_dir) / f"{chart_id}.{suffix or self.output_format}"


# =============================================================================
# YAML LOADING
# =============================================================================


def _parse_kind(value: Any, key: str) -> ChartKind:
    try:
        return ChartKind(str(value))
    except ValueError:
        valid = ", ".join(k.value for k in ChartKind)
        raise ConfigError(f"Unknown chart {value!r} in {key}; expected one of {valid}", key=key) from None


def config_from_dict(data: dict[str, Any], *, base: ChartsConfig | None = None) -> ChartsConfig:
    """
    Apply a dictionary of settings on top of a base configuration.

    Unknown keys are ignored with a warning.

    Args:
        data: Settings keyed by ChartsConfig field name
        base: Configuration to start from (defaults to ChartsConfig())

    Returns:
        New ChartsConfig

    Raises:
        ConfigError: If a value has the wrong shape or is out of range
    """
    base = base or ChartsConfig()
    known = {f.name for f in fields(ChartsConfig)}
    updates: dict[str, Any] = {}

    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key {key!r}")
            continue

        if key in ("data_dir", "output_dir"):
            if not isinstance(value, (str, os.PathLike)):
                raise ConfigError(f"{key} must be a path, got {value!r}", key=key)
            updates[key] = Path(value)
        elif key == "sources":
            if not isinstance(value, dict):
                raise ConfigError("sources must be a mapping of chart -> file name", key=key)
            sources = dict(base.sources)
            for chart, filename in value.items():
                sources[_parse_kind(chart, key)] = str(filename)
            updates[key] = sources
        elif key == "charts":
            if isinstance(value, str):
                value = [v.strip() for v in value.split(",") if v.strip()]
            if not isinstance(value, list):
                raise ConfigError("charts must be a list of chart names", key=key)
            updates[key] = tuple(_parse_kind(v, key) for v in value)
        else:
            updates[key] = value

    try:
        return replace(base, **updates)
    except TypeError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: Path | str, *, base: ChartsConfig | None = None) -> ChartsConfig:
    """Load configuration from a YAML file.

    Expected YAML format:
    ```yaml
    data_dir: data
    output_dir: output/charts
    output_format: svg
    charts: [boxplot, line]
    sources:
      boxplot: socialMedia.csv
    ```

    Args:
        path: Path to the YAML file
        base: Configuration the file overrides

    Returns:
        ChartsConfig

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the YAML is invalid or holds bad values
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return base or ChartsConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")

    return config_from_dict(data, base=base)
