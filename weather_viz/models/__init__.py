"""
Models module for the Weather Chart Explorer.

Contains the record type, chart selection enum, fetch result and errors.
"""

from .data_models import (
    WeatherRecord,
    ChartType,
    ChartSelection,
    FetchResult,
    WeatherDataError,
    FetchError,
    MalformedPayload,
)

__all__ = [
    'WeatherRecord',
    'ChartType',
    'ChartSelection',
    'FetchResult',
    'WeatherDataError',
    'FetchError',
    'MalformedPayload',
]
