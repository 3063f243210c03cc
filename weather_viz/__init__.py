"""
Weather Chart Explorer - interactive charts of a ten-day weather sample.

This package provides:
- Fetching the Open-Meteo hourly feed and reducing it to one record per day
- Six chart renderers (bar, line, scatter, pie, heatmap, histogram) built as
  drawing-surface independent scene descriptors
- Hover tooltips, entry animations and the pie legend
- A Plotly/Streamlit surface and a headless recording surface
- The Date / Temperature / Humidity data table
"""

__version__ = "1.0.0"
__author__ = "Weather Chart Explorer Team"

# Core imports
from .core.config import *

# Models
from .models import (
    WeatherRecord,
    ChartType,
    ChartSelection,
    FetchResult,
    WeatherDataError,
    FetchError,
    MalformedPayload,
)

# Data
from .data import fetch_weather_data, normalize_payload, records_to_frame

# Visualization
from .visualization import (
    build_scene,
    render_chart,
    RecordingSurface,
    PlotlySurface,
    TableView,
    build_table,
)
