"""
Module: smoothing

Purpose: Natural cubic spline smoothing for line charts.

x and y are each interpolated as a natural cubic spline over the uniform
parameter t = 0..n-1 (second derivative zero at both ends), then every
piece is expressed as a cubic Bezier segment. The curve passes exactly
through every input point, in input order.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy.interpolate import CubicSpline

from socialcharts.charts.primitives import BezierSegment, Point, svg_path_data


@dataclass(frozen=True)
class SmoothPath:
    """Start point plus cubic Bezier segments."""

    start: Point | None
    segments: tuple[BezierSegment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.start is None

    def to_svg(self) -> str:
        return svg_path_data(self.start, self.segments)

    def sample(self, per_segment: int = 16) -> np.ndarray:
        """
        Dense polyline along the path.

        Args:
            per_segment: Samples per segment (excluding the shared start)

        Returns:
            Array of shape (m, 2); every segment end point is included exactly
        """
        if self.start is None:
            return np.empty((0, 2))

        current = np.asarray(self.start, dtype=float)
        samples = [current[None, :]]
        s = np.linspace(0.0, 1.0, per_segment + 1)[1:, None]

        for seg in self.segments:
            c1 = np.asarray(seg.c1)
            c2 = np.asarray(seg.c2)
            end = np.asarray(seg.end)
            curve = (
                (1 - s) ** 3 * current
                + 3 * (1 - s) ** 2 * s * c1
                + 3 * (1 - s) * s ** 2 * c2
                + s ** 3 * end
            )
            curve[-1] = end
            samples.append(curve)
            current = end

        return np.vstack(samples)


def natural_cubic_path(points: Sequence[Point]) -> SmoothPath:
    """
    Natural cubic spline through ``points`` as Bezier segments.

    Args:
        points: (x, y) pixel coordinates in drawing order

    Returns:
        SmoothPath. No points gives an empty path; one point gives a
        start point with no segment; two points give one straight segment.
    """
    n = len(points)
    if n == 0:
        return SmoothPath(start=None)

    xy = np.asarray(points, dtype=float)
    start = (float(xy[0, 0]), float(xy[0, 1]))
    if n == 1:
        return SmoothPath(start=start)

    if n == 2:
        p0, p1 = xy
        delta = (p1 - p0) / 3
        return SmoothPath(start=start, segments=(_segment(p0 + delta, p1 - delta, p1),))

    t = np.arange(n, dtype=float)
    spline = CubicSpline(t, xy, axis=0, bc_type="natural")
    # Derivatives with respect to t at every knot; unit spacing
    derivatives = spline(t, 1)

    segments = tuple(
        _segment(
            xy[i] + derivatives[i] / 3,
            xy[i + 1] - derivatives[i + 1] / 3,
            xy[i + 1],
        )
        for i in range(n - 1)
    )
    return SmoothPath(start=start, segments=segments)


def _segment(c1: np.ndarray, c2: np.ndarray, end: np.ndarray) -> BezierSegment:
    return BezierSegment(
        c1=(float(c1[0]), float(c1[1])),
        c2=(float(c2[0]), float(c2[1])),
        end=(float(end[0]), float(end[1])),
    )
