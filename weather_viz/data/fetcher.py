"""
Weather Feed Fetcher & Normalizer.

Turns the raw hourly Open-Meteo payload into the canonical record set the
charts consume.

Data Flow
---------
1. One GET to WEATHER_API_URL with WEATHER_API_PARAMS  -->  JSON payload
2. ``hourly.time / temperature_2m / relative_humidity_2m``  -->  DataFrame
3. Date = substring of each timestamp before the ``T`` separator
4. Keep the first sample per date, stop after MAX_RECORDS dates
5. Validate the kept samples  -->  tuple of WeatherRecord

Failure handling
----------------
``normalize_payload`` is strict and raises ``MalformedPayload``.  The public
entry points ``normalize`` and ``fetch_weather_data`` never raise: every
``WeatherDataError`` is logged and converted into an empty ``FetchResult``
carrying the error message, so renderers always receive a tuple.
"""

import logging
import numbers
import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd
import requests

from ..core.config import (
    WEATHER_API_URL,
    WEATHER_API_PARAMS,
    REQUEST_TIMEOUT_SECONDS,
    HOURLY_KEY,
    TIME_FIELD,
    TEMPERATURE_FIELD,
    HUMIDITY_FIELD,
    TIME_SEPARATOR,
    MAX_RECORDS,
)
from ..models.data_models import (
    WeatherRecord,
    FetchResult,
    WeatherDataError,
    FetchError,
    MalformedPayload,
)

logger = logging.getLogger(__name__)

# Column names of the working DataFrame
RECORD_COLUMNS = ['date', 'temperature', 'humidity']

_PAYLOAD_FIELDS = (TIME_FIELD, TEMPERATURE_FIELD, HUMIDITY_FIELD)


# ============================================================================
# PAYLOAD VALIDATION
# ============================================================================

def _extract_hourly(payload: Any) -> Dict[str, List[Any]]:
    """Pull the three parallel arrays out of the payload.

    Raises:
        MalformedPayload: If the hourly block or any array is missing, not a
            list, or the arrays differ in length.
    """
    if not isinstance(payload, dict):
        raise MalformedPayload(f"Expected a JSON object, got {type(payload).__name__}")

    hourly = payload.get(HOURLY_KEY)
    if not isinstance(hourly, dict):
        raise MalformedPayload(f"Payload has no '{HOURLY_KEY}' block")

    arrays = {}
    for field in _PAYLOAD_FIELDS:
        values = hourly.get(field)
        if not isinstance(values, list):
            raise MalformedPayload(f"Missing or non-list '{HOURLY_KEY}.{field}' array")
        arrays[field] = values

    lengths = {field: len(values) for field, values in arrays.items()}
    if len(set(lengths.values())) > 1:
        raise MalformedPayload(f"Mismatched array lengths: {lengths}")

    return arrays


def _as_number(value: Any, field: str, date: str) -> float:
    """Coerce a JSON number to float, rejecting null, booleans and NaN."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MalformedPayload(f"Non-numeric {field} {value!r} for {date}")
    number = float(value)
    if math.isnan(number):
        raise MalformedPayload(f"Missing {field} for {date}")
    return number


def date_part(timestamp: Any) -> Optional[str]:
    """Return the calendar-day portion of a ``<date>T<time>`` timestamp.

    A timestamp without a separator is returned whole; non-strings map to
    ``None``.
    """
    if not isinstance(timestamp, str):
        return None
    return timestamp.split(TIME_SEPARATOR, 1)[0]


# ============================================================================
# NORMALIZATION
# ============================================================================

def normalize_payload(payload: Any, limit: int = MAX_RECORDS) -> Tuple[WeatherRecord, ...]:
    """
    Convert a raw hourly payload into at most ``limit`` daily records.

    The first sample seen for each date wins; collection stops once
    ``limit`` distinct dates are kept, so samples past the cut-off are never
    inspected.  Record order is feed order.

    Args:
        payload: Decoded JSON from the weather API.
        limit: Maximum number of distinct dates to keep.

    Returns:
        Tuple of WeatherRecord (empty when the feed has no samples).

    Raises:
        MalformedPayload: If the payload shape is wrong or a kept sample has
            a non-string timestamp or a non-numeric value.
    """
    arrays = _extract_hourly(payload)
    if not arrays[TIME_FIELD]:
        return ()

    df = pd.DataFrame({
        'time': pd.Series(arrays[TIME_FIELD], dtype=object),
        'temperature': pd.Series(arrays[TEMPERATURE_FIELD], dtype=object),
        'humidity': pd.Series(arrays[HUMIDITY_FIELD], dtype=object),
    })
    df['date'] = df['time'].map(date_part)

    # drop_duplicates keeps the first occurrence, head() is the cut-off
    daily = df.drop_duplicates(subset='date', keep='first').head(limit)

    records = []
    for row in daily.itertuples(index=False):
        if row.date is None:
            raise MalformedPayload(f"Non-string timestamp {row.time!r}")
        records.append(WeatherRecord(
            date=row.date,
            temperature=_as_number(row.temperature, TEMPERATURE_FIELD, row.date),
            humidity=_as_number(row.humidity, HUMIDITY_FIELD, row.date),
        ))

    logger.debug(f"[Normalizer] {len(df)} samples -> {len(records)} daily records")
    return tuple(records)


def normalize(payload: Any, limit: int = MAX_RECORDS) -> FetchResult:
    """Non-raising form of ``normalize_payload``.

    Malformed payloads are logged and produce an empty result.
    """
    try:
        return FetchResult(records=normalize_payload(payload, limit=limit))
    except MalformedPayload as e:
        logger.error(f"[Normalizer] Malformed weather payload: {e}")
        return FetchResult(records=(), error=str(e))


# ============================================================================
# HTTP FETCH
# ============================================================================

def _request_payload(url: str, params: Dict[str, Any], timeout: float,
                     session: Optional[requests.Session]) -> Any:
    """Perform the single GET and decode its JSON body."""
    get = session.get if session is not None else requests.get
    try:
        response = get(url, params=params, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Network failure: {e}") from e

    if not 200 <= response.status_code < 300:
        raise FetchError(f"HTTP error! status: {response.status_code}")

    try:
        return response.json()
    except ValueError as e:
        raise MalformedPayload(f"Response body is not valid JSON: {e}") from e


def fetch_weather_data(url: str = WEATHER_API_URL,
                       params: Optional[Dict[str, Any]] = None,
                       timeout: float = REQUEST_TIMEOUT_SECONDS,
                       session: Optional[requests.Session] = None,
                       limit: int = MAX_RECORDS) -> FetchResult:
    """
    Fetch the weather feed and normalize it into daily records.

    Exactly one outbound request is made; there are no retries.  Network
    failures, non-2xx answers and malformed payloads are logged and turned
    into an empty ``FetchResult`` with ``error`` set.

    Args:
        url: Forecast endpoint.
        params: Query parameters (defaults to WEATHER_API_PARAMS).
        timeout: Seconds before the request is abandoned.
        session: Optional ``requests.Session`` to issue the request with.
        limit: Maximum number of daily records.

    Returns:
        FetchResult with the record tuple (possibly empty).
    """
    query = dict(WEATHER_API_PARAMS if params is None else params)
    logger.info(f"[Fetcher] GET {url} params={query}")

    try:
        payload = _request_payload(url, query, timeout, session)
        records = normalize_payload(payload, limit=limit)
    except WeatherDataError as e:
        logger.error(f"[Fetcher] Failed to fetch weather data: {e}")
        return FetchResult(records=(), error=str(e))

    if records:
        logger.info(f"[Fetcher] Weather data fetched: {len(records)} days "
                    f"({records[0].date} .. {records[-1].date})")
    else:
        logger.warning("[Fetcher] Weather feed contained no samples")
    return FetchResult(records=records)


def records_to_frame(records: Optional[Iterable[WeatherRecord]]) -> pd.DataFrame:
    """Tabulate a record set as a DataFrame with ``date, temperature, humidity``."""
    rows = [record.to_dict() for record in (records or ())]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)
