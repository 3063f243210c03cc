"""
Scale and geometry builders shared by every chart renderer.

The scales follow the d3 conventions the charts were designed around:

* ``BandScale``   -- ordinal categories (dates) to evenly spaced bands.
* ``LinearScale`` -- continuous values to pixels, with "nice" tick values.
* ``ColorScale``  -- continuous values to a color between two endpoints.
* ``OrdinalColorScale`` -- slice index to a fixed categorical palette.

Degenerate inputs never raise: an empty band domain has no bands, and a
linear domain whose endpoints are equal maps every value to the middle of
the range.
"""

import math
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

from plotly.colors import qualitative

from ..models.data_models import WeatherRecord

# d3's schemeCategory10
CATEGORY10 = tuple(qualitative.D3)

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ============================================================================
# DOMAIN HELPERS
# ============================================================================

def max_value(records: Sequence[WeatherRecord], field: str) -> float:
    """True maximum of ``field`` over the records, 0.0 for an empty set."""
    return max((float(getattr(r, field)) for r in records), default=0.0)


def value_domain(records: Sequence[WeatherRecord], field: str,
                 headroom: float = 1.0) -> Tuple[float, float]:
    """``[0, max * headroom]`` for a value axis."""
    return 0.0, max_value(records, field) * headroom


# ============================================================================
# BAND SCALE
# ============================================================================

class BandScale:
    """
    Maps discrete domain values to bands of equal width.

    Inner and outer padding are both ``padding`` and bands are centred in the
    range.  Duplicate domain values collapse onto the first occurrence.  A
    reversed range (``range_[0] > range_[1]``) lays the first value out at
    the high end.

    Attributes:
        domain (list): Distinct domain values in first-seen order.
        step (float): Distance between the starts of adjacent bands.
        bandwidth (float): Width of each band.
    """

    def __init__(self, domain: Sequence[Hashable], range_: Tuple[float, float],
                 padding: float = 0.0):
        self.domain: List[Hashable] = list(dict.fromkeys(domain))
        self.range = (float(range_[0]), float(range_[1]))
        self.padding = float(padding)

        n = len(self.domain)
        r0, r1 = self.range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)

        self.step = (stop - start) / max(1.0, n - self.padding + self.padding * 2)
        start += (stop - start - self.step * (n - self.padding)) * 0.5
        self.bandwidth = self.step * (1 - self.padding)

        positions = [start + self.step * i for i in range(n)]
        if reverse:
            positions.reverse()
        self._positions: Dict[Hashable, float] = dict(zip(self.domain, positions))

    def __call__(self, value: Hashable) -> Optional[float]:
        """Start of the band for ``value``, or None if it is not in the domain."""
        return self._positions.get(value)

    def center(self, value: Hashable) -> Optional[float]:
        """Middle of the band for ``value``."""
        position = self(value)
        if position is None:
            return None
        return position + self.bandwidth / 2

    def ticks(self) -> List[Tuple[float, str]]:
        """Axis ticks at band centres, labelled with the domain value."""
        return [(self.center(value), str(value)) for value in self.domain]


# ============================================================================
# LINEAR SCALE
# ============================================================================

def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    step = (stop - start) / max(0.0, count)
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1

    if power < 0:
        inc = math.pow(10, -power) / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = math.pow(10, power) * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def nice_ticks(start: float, stop: float, count: int = 10) -> List[float]:
    """Evenly spaced round values between ``start`` and ``stop`` (d3.ticks)."""
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
        values = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        values = [(i1 + i) * inc for i in range(i2 - i1 + 1)]
    if reverse:
        values.reverse()
    return values


class LinearScale:
    """
    Linear map from ``domain`` to ``range_``.

    When both domain endpoints are equal every value maps to the middle of
    the range, so empty and single-valued record sets stay drawable.
    """

    def __init__(self, domain: Tuple[float, float], range_: Tuple[float, float]):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    @property
    def degenerate(self) -> bool:
        return self.domain[0] == self.domain[1]

    def normalize(self, value: float) -> float:
        """Position of ``value`` within the domain as a 0..1 fraction."""
        d0, d1 = self.domain
        if d0 == d1:
            return 0.5
        return (float(value) - d0) / (d1 - d0)

    def __call__(self, value: float) -> float:
        r0, r1 = self.range
        return r0 + (r1 - r0) * self.normalize(value)

    def ticks(self, count: int = 10) -> List[Tuple[float, str]]:
        """Axis ticks as ``(position, label)`` pairs."""
        return [(self(v), format_number(v)) for v in nice_ticks(*self.domain, count)]


def format_number(value: float) -> str:
    """12.0 -> '12', 12.5 -> '12.5'."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


# ============================================================================
# COLOR SCALES
# ============================================================================

def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """'#00246B' -> (0, 36, 107)."""
    value = color.lstrip('#')
    if len(value) == 3:
        value = ''.join(ch * 2 for ch in value)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def rgb_to_hex(rgb: Sequence[float]) -> str:
    channels = [max(0, min(255, _round_half_up(c))) for c in rgb]
    return '#{:02x}{:02x}{:02x}'.format(*channels)


class ColorScale:
    """Linear RGB interpolation between two colors across a value domain."""

    def __init__(self, domain: Tuple[float, float], colors: Tuple[str, str]):
        self._position = LinearScale(domain, (0.0, 1.0))
        self.colors = tuple(colors)
        self._low = hex_to_rgb(colors[0])
        self._high = hex_to_rgb(colors[1])

    @property
    def domain(self) -> Tuple[float, float]:
        return self._position.domain

    def __call__(self, value: float) -> str:
        t = min(1.0, max(0.0, self._position(value)))
        return rgb_to_hex([lo + (hi - lo) * t for lo, hi in zip(self._low, self._high)])


class OrdinalColorScale:
    """Fixed categorical palette indexed by position, wrapping around."""

    def __init__(self, palette: Sequence[str] = CATEGORY10):
        self.palette = tuple(palette)

    def __call__(self, index: int) -> str:
        return self.palette[index % len(self.palette)]


def describe_scale(scale: Any) -> Dict[str, Any]:
    """Summary used in debug logging."""
    summary = {'type': type(scale).__name__, 'domain': getattr(scale, 'domain', None)}
    if isinstance(scale, BandScale):
        summary['bandwidth'] = round(scale.bandwidth, 3)
    return summary
