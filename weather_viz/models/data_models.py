"""
Data models and error taxonomy for the weather chart pipeline.

This module defines the **schema layer** of the package: the single entity
flowing through it (``WeatherRecord``), the chart selection state, the
result container produced by the fetcher, and the exceptions raised inside
the data layer.

Dataclass hierarchy
-------------------
::

    WeatherRecord
        One calendar day: date key, temperature (°C), humidity (%).
        Frozen; a record set is a tuple of these.

    FetchResult
        Outcome of the one outbound fetch: the record tuple (possibly empty)
        plus an error message when the fetch or normalization failed.

Chart selection
---------------
``ChartType`` enumerates the six visualizations plus ``NONE``.  The value is
threaded explicitly through ``render_chart`` so the drawing surface state
machine (Empty / Showing(type)) is visible in the call graph.

Error taxonomy
--------------
- ``FetchError``       -- non-2xx status or network failure.
- ``MalformedPayload`` -- missing/mismatched arrays or unusable values.
Both derive from ``WeatherDataError`` and never escape the fetcher.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Any


# ============================================================================
# ERRORS
# ============================================================================

class WeatherDataError(Exception):
    """Base class for failures while obtaining the record set."""


class FetchError(WeatherDataError):
    """The weather API could not be reached or answered with a non-2xx status."""


class MalformedPayload(WeatherDataError):
    """The API answered, but the payload does not have the expected shape."""


# ============================================================================
# WEATHER RECORD
# ============================================================================

@dataclass(frozen=True)
class WeatherRecord:
    """A single day of weather data.

    Attributes:
        date: Calendar day as ``YYYY-MM-DD``; unique within a record set.
        temperature: Degrees Celsius, may be fractional.
        humidity: Relative humidity in percent (0-100 expected, not enforced).
    """
    date: str
    temperature: float
    humidity: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, keys in table column order."""
        return {
            'date': self.date,
            'temperature': self.temperature,
            'humidity': self.humidity,
        }


# ============================================================================
# CHART SELECTION
# ============================================================================

class ChartType(Enum):
    """
    Which chart currently occupies the drawing surface.

    ``NONE`` is the Empty state; every other member is Showing(type).
    """
    BAR = "bar"
    LINE = "line"
    SCATTER = "scatter"
    PIE = "pie"
    HEATMAP = "heatmap"
    HISTOGRAM = "histogram"
    NONE = "none"

    @classmethod
    def from_name(cls, name: str) -> "ChartType":
        """Look up a chart type by its value, case-insensitively.

        Raises:
            ValueError: If ``name`` is not a known chart type.
        """
        key = str(name).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        valid = ', '.join(m.value for m in cls)
        raise ValueError(f"Unknown chart type '{name}'. Expected one of: {valid}")

    @classmethod
    def drawable(cls) -> Tuple["ChartType", ...]:
        """The six chart types that produce a scene, in button order."""
        return tuple(m for m in cls if m is not cls.NONE)


# Alias used where the value plays the role of process state
ChartSelection = ChartType


# ============================================================================
# FETCH RESULT
# ============================================================================

@dataclass(frozen=True)
class FetchResult:
    """Outcome of fetching and normalizing the weather feed.

    On failure ``records`` is empty and ``error`` carries a human-readable
    message; downstream renderers always receive a (possibly empty) tuple.
    """
    records: Tuple[WeatherRecord, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when the fetch and normalization both succeeded."""
        return self.error is None

    def __len__(self) -> int:
        return len(self.records)
