"""
Data module: fetches the weather feed and normalizes it into daily records.
"""

from .fetcher import (
    fetch_weather_data,
    normalize,
    normalize_payload,
    records_to_frame,
    date_part,
)

__all__ = [
    'fetch_weather_data',
    'normalize',
    'normalize_payload',
    'records_to_frame',
    'date_part',
]
