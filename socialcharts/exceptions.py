"""
Module: exceptions

Purpose: Domain-specific exception hierarchy for the chart pipelines.

All exceptions include context information. Failures are local to a single
chart: the pipeline catches them per chart and keeps rendering the others.
"""

from typing import Any


class SocialChartsError(Exception):
    """Base exception for all chart pipeline errors."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


class DataLoadError(SocialChartsError):
    """Raised when a delimited source cannot be read, even after retrying."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        attempts: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if source is not None:
            ctx["source"] = source
        if attempts is not None:
            ctx["attempts"] = attempts
        super().__init__(message, context=ctx)
        self.source = source
        self.attempts = attempts


class DataValidationError(SocialChartsError):
    """Raised when data fails schema or statistical validation."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if field is not None:
            ctx["field"] = field
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx)
        self.field = field
        self.value = value


class ScaleDomainError(SocialChartsError):
    """Raised when a scale is built with bad parameters or asked for an unknown value."""

    def __init__(
        self,
        message: str,
        *,
        scale_type: str,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["scale_type"] = scale_type
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx)
        self.scale_type = scale_type
        self.value = value


class ChartBuildError(SocialChartsError):
    """Raised when a chart builder cannot turn a dataset into primitives."""

    def __init__(
        self,
        message: str,
        *,
        chart_kind: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if chart_kind is not None:
            ctx["chart_kind"] = chart_kind
        super().__init__(message, context=ctx)
        self.chart_kind = chart_kind


class RenderError(SocialChartsError):
    """Raised when painting or saving a chart fails."""

    def __init__(
        self,
        message: str,
        *,
        chart_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if chart_id is not None:
            ctx["chart_id"] = chart_id
        super().__init__(message, context=ctx)
        self.chart_id = chart_id


class ChartExportError(SocialChartsError):
    """Raised when a chart spec cannot be exported."""

    def __init__(
        self,
        message: str,
        *,
        export_format: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if export_format is not None:
            ctx["export_format"] = export_format
        super().__init__(message, context=ctx)
        self.export_format = export_format


class ConfigError(SocialChartsError):
    """Raised when a configuration file contains invalid values."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if key is not None:
            ctx["key"] = key
        super().__init__(message, context=ctx)
        self.key = key
