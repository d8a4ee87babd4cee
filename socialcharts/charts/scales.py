"""
Module: scales

Purpose: Map data domains onto pixel ranges.

Key Classes:
- BandScale: ordered categories -> equal-width padded bands
- LinearScale: continuous domain -> continuous range, with "nice" ticks
- OrdinalColorScale: ordered categories -> palette colors

Architecture Notes:
- Scales are immutable and rebuilt per chart from the full dataset
- Category order is first-occurrence order of the input, never sorted
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import seaborn as sns

from socialcharts.exceptions import ScaleDomainError


# Post type legend colors
DEFAULT_PALETTE: tuple[str, ...] = ("#1f77b4", "#ff7f0e", "#2ca02c")

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def unique_in_order(values: Iterable[str]) -> tuple[str, ...]:
    """Distinct values in first-occurrence order."""
    return tuple(dict.fromkeys(values))


# =============================================================================
# BAND SCALE
# =============================================================================


@dataclass(frozen=True)
class BandScale:
    """
    Divide a pixel range into one band per category.

    Each category owns a step of ``(stop - start) / n`` pixels; the band
    occupies ``1 - padding`` of the step and the remaining padding is split
    evenly on both sides, so bands never overlap and together with their
    padding cover the range exactly.
    """

    domain: tuple[str, ...]
    range: tuple[float, float] = (0.0, 1.0)
    padding: float = 0.0
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.padding < 1.0:
            raise ScaleDomainError(
                f"Band padding must be in [0, 1), got {self.padding}",
                scale_type="band",
                value=self.padding,
            )
        start, stop = self.range
        if stop < start:
            raise ScaleDomainError(
                f"Band range must be increasing, got {self.range}",
                scale_type="band",
                value=self.range,
            )
        domain = unique_in_order(self.domain)
        object.__setattr__(self, "domain", domain)
        object.__setattr__(self, "range", (float(start), float(stop)))
        object.__setattr__(self, "_index", {category: i for i, category in enumerate(domain)})

    @property
    def step(self) -> float:
        """Pixels allotted to each category, band plus padding."""
        if not self.domain:
            return 0.0
        start, stop = self.range
        return (stop - start) / len(self.domain)

    @property
    def bandwidth(self) -> float:
        return self.step * (1.0 - self.padding)

    def index(self, category: str) -> int:
        try:
            return self._index[category]
        except KeyError:
            raise ScaleDomainError(
                f"{category!r} is not in the band scale domain",
                scale_type="band",
                value=category,
            ) from None

    def __call__(self, category: str) -> float:
        """Start (left edge) of the category's band."""
        return self.range[0] + self.index(category) * self.step + self.step * self.padding / 2

    def center(self, category: str) -> float:
        return self(category) + self.bandwidth / 2

    def __contains__(self, category: object) -> bool:
        return category in self._index

    def __len__(self) -> int:
        return len(self.domain)

    def bands(self) -> list[tuple[str, float, float]]:
        """(category, start, end) for every band in domain order."""
        return [(c, self(c), self(c) + self.bandwidth) for c in self.domain]


def band_scale(
    values: Iterable[str],
    range_: tuple[float, float],
    *,
    padding: float = 0.0,
) -> BandScale:
    """Build a band scale whose domain is the distinct values in first-occurrence order."""
    return BandScale(domain=unique_in_order(values), range=range_, padding=padding)


# =============================================================================
# LINEAR SCALE
# =============================================================================


def _tick_spec(start: float, stop: float, count: float) -> tuple[int, int, float]:
    """Integer tick bounds and increment for a nice 1/2/5 x 10^k step."""
    step = (stop - start) / max(0.0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1

    if power < 0:
        inc = 10 ** -power / factor
        i1 = math.floor(start * inc + 0.5)
        i2 = math.floor(stop * inc + 0.5)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1 = math.floor(start / inc + 0.5)
        i2 = math.floor(stop / inc + 0.5)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def nice_ticks(start: float, stop: float, count: int = 10) -> list[float]:
    """
    Roughly ``count`` evenly spaced round values within [start, stop].

    Spacing is 1, 2 or 5 times a power of ten.
    """
    if count <= 0:
        return []
    if start == stop:
        return [float(start)]

    reverse = stop < start
    lo, hi = (stop, start) if reverse else (start, stop)
    i1, i2, inc = _tick_spec(lo, hi, count)
    if i2 < i1:
        return []

    if inc < 0:
        ticks = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        ticks = [float((i1 + i) * inc) for i in range(i2 - i1 + 1)]
    return ticks[::-1] if reverse else ticks


@dataclass(frozen=True)
class LinearScale:
    """
    Map a numeric domain linearly onto a pixel range.

    Charts pass an inverted range, ``(inner_height, 0)``, because pixel y
    grows downward. A degenerate domain (both ends equal) maps every value
    to the middle of the range.
    """

    domain: tuple[float, float]
    range: tuple[float, float] = (0.0, 1.0)

    def __post_init__(self) -> None:
        d0, d1 = self.domain
        r0, r1 = self.range
        for value in (d0, d1, r0, r1):
            if not math.isfinite(value):
                raise ScaleDomainError(
                    f"Linear scale bounds must be finite, got domain={self.domain} range={self.range}",
                    scale_type="linear",
                    value=value,
                )
        object.__setattr__(self, "domain", (float(d0), float(d1)))
        object.__setattr__(self, "range", (float(r0), float(r1)))

    @property
    def is_degenerate(self) -> bool:
        return self.domain[0] == self.domain[1]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if self.is_degenerate:
            return (r0 + r1) / 2
        if value == d0:
            return r0
        if value == d1:
            return r1
        t = (value - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)

    def invert(self, pixel: float) -> float:
        """Domain value for a pixel coordinate."""
        d0, d1 = self.domain
        r0, r1 = self.range
        if self.is_degenerate or r0 == r1:
            return d0
        t = (pixel - r0) / (r1 - r0)
        return d0 + t * (d1 - d0)

    def ticks(self, count: int = 10) -> list[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)


def linear_scale_for(
    values: Sequence[float],
    range_: tuple[float, float],
    *,
    headroom: float = 1.0,
) -> LinearScale:
    """
    Build a zero-based linear scale covering ``values``.

    Args:
        values: Data values to cover
        range_: Pixel range, usually (inner_height, 0)
        headroom: Multiplier applied to the maximum (e.g. 1.1 for 10% space)

    Returns:
        LinearScale over [0, max(values) * headroom]; [0, 0] if values is empty
    """
    top = max(values) * headroom if len(values) else 0.0
    return LinearScale(domain=(0.0, top), range=range_)


# =============================================================================
# ORDINAL COLOR SCALE
# =============================================================================


@dataclass(frozen=True)
class OrdinalColorScale:
    """Assign palette colors to categories by position, cycling the palette."""

    domain: tuple[str, ...]
    palette: tuple[str, ...] = DEFAULT_PALETTE

    def __post_init__(self) -> None:
        if not self.palette:
            raise ScaleDomainError("Color palette must not be empty", scale_type="ordinal")
        object.__setattr__(self, "domain", unique_in_order(self.domain))
        object.__setattr__(self, "palette", tuple(self.palette))

    def __call__(self, category: str) -> str:
        try:
            position = self.domain.index(category)
        except ValueError:
            raise ScaleDomainError(
                f"{category!r} is not in the color scale domain",
                scale_type="ordinal",
                value=category,
            ) from None
        return self.palette[position % len(self.palette)]

    @classmethod
    def from_palette_name(cls, domain: Iterable[str], name: str) -> "OrdinalColorScale":
        """Build a scale from a seaborn palette name (e.g. "Set2", "viridis")."""
        categories = unique_in_order(domain)
        colors = sns.color_palette(name, max(len(categories), 1)).as_hex()
        return cls(domain=categories, palette=tuple(colors))
