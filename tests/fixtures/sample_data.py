"""
Sample data fixtures for testing

This module provides payloads shaped like the Open-Meteo hourly feed and
ready-made record sets for use in unit tests.
"""

from unittest.mock import MagicMock

import pandas as pd

from weather_viz.models.data_models import WeatherRecord


def make_dates(count, start='2024-05-01'):
    """
    Consecutive calendar days as ``YYYY-MM-DD`` strings.

    Args:
        count: Number of days
        start: First day

    Returns:
        list[str]: The dates in order
    """
    return [d.strftime('%Y-%m-%d') for d in pd.date_range(start, periods=count, freq='D')]


def make_hourly_payload(dates, samples_per_day=24, base_temperature=10.0, base_humidity=50.0):
    """
    Create an hourly payload with ``samples_per_day`` samples per date.

    Temperature for day ``d``, hour ``h`` is ``base_temperature + d + h / 10``;
    humidity is ``base_humidity + d``.  The first sample of each day is
    therefore ``base_temperature + d`` / ``base_humidity + d``.

    Returns:
        dict: Payload with an ``hourly`` block of three parallel arrays
    """
    times, temperatures, humidities = [], [], []
    for d, date in enumerate(dates):
        for h in range(samples_per_day):
            times.append(f"{date}T{h:02d}:00")
            temperatures.append(round(base_temperature + d + h / 10, 1))
            humidities.append(base_humidity + d)

    return {
        'latitude': 52.52,
        'longitude': 13.41,
        'hourly_units': {'time': 'iso8601', 'temperature_2m': '°C', 'relative_humidity_2m': '%'},
        'hourly': {
            'time': times,
            'temperature_2m': temperatures,
            'relative_humidity_2m': humidities,
        },
    }


def create_sample_records():
    """
    Five days of records with distinct temperatures.

    Returns:
        tuple[WeatherRecord, ...]: Records in date order
    """
    rows = [
        ('2024-05-01', 12.0, 60.0),
        ('2024-05-02', 15.5, 55.0),
        ('2024-05-03', 9.0, 80.0),
        ('2024-05-04', 20.0, 45.0),
        ('2024-05-05', 17.0, 50.0),
    ]
    return tuple(WeatherRecord(date, temperature, humidity) for date, temperature, humidity in rows)


def make_response(status_code=200, payload=None, json_error=None):
    """
    Mock ``requests.Response``.

    Args:
        status_code: HTTP status to report
        payload: Value returned by ``.json()``
        json_error: Exception raised by ``.json()`` instead

    Returns:
        MagicMock: The response stand-in
    """
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response
