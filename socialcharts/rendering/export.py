"""
JSON export of chart specs.

The exported document holds the layout, every primitive in paint order
and the chart metadata (summaries, domains, row counts), so a chart can
be inspected or re-painted by another front end.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np

from socialcharts.charts.primitives import ChartSpec
from socialcharts.exceptions import ChartExportError


class ChartJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy scalars, enums and paths."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


def chart_to_dict(spec: ChartSpec) -> dict[str, Any]:
    """Convert a chart spec to a JSON-ready dictionary."""
    return spec.to_dict()


def export_chart_to_json(
    spec: ChartSpec,
    filepath: str | Path | None = None,
    *,
    indent: int = 2,
) -> str:
    """
    Export chart spec to JSON.

    Args:
        spec: Chart to export
        filepath: Optional filepath to write to
        indent: JSON indentation level

    Returns:
        JSON string

    Raises:
        ChartExportError: If export fails
    """
    try:
        json_str = json.dumps(chart_to_dict(spec), indent=indent, cls=ChartJSONEncoder)

        if filepath:
            path = Path(filepath)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json_str)

        return json_str

    except Exception as e:
        raise ChartExportError(
            f"Failed to export chart {spec.chart_id} to JSON: {e}",
            export_format="json",
            context={"chart_id": spec.chart_id},
        ) from e


def load_chart_json(filepath: str | Path) -> dict[str, Any]:
    """
    Load an exported chart from a JSON file.

    Raises:
        ChartExportError: If the file cannot be read or parsed
    """
    try:
        result: dict[str, Any] = json.loads(Path(filepath).read_text())
        return result
    except Exception as e:
        raise ChartExportError(
            f"Failed to load chart from JSON: {e}",
            export_format="json",
        ) from e
