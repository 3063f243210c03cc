"""
Weather Chart Explorer - Streamlit page.

Layout:
- Error banner when the weather feed could not be loaded
- Six chart buttons (bar, line, scatter, pie, heatmap, histogram)
- The selected chart, drawn on a PlotlySurface
- The Date / Temperature / Humidity table

The feed is fetched once per browser session and only successful fetches
are cached across sessions; every button click re-renders the chart from
the same record set, starting from a cleared surface.
"""

import logging
import sys
from pathlib import Path
from typing import Tuple

import streamlit as st

# Add project root to path for imports (streamlit runs this file as a script)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from weather_viz.core.config import DASHBOARD_TITLE, TABLE_HEADER_COLOR
from weather_viz.dashboard.app import configure_page
from weather_viz.data.fetcher import fetch_weather_data
from weather_viz.models.data_models import ChartType, FetchResult, WeatherDataError, WeatherRecord
from weather_viz.visualization.plotly_surface import PlotlySurface
from weather_viz.visualization.renderers import render_chart
from weather_viz.visualization.table import TableView

logger = logging.getLogger(__name__)

CHART_BUTTONS = [
    (ChartType.BAR, "📊 Bar Chart"),
    (ChartType.LINE, "📈 Line Chart"),
    (ChartType.SCATTER, "⚬ Scatter Plot"),
    (ChartType.PIE, "🥧 Pie Chart"),
    (ChartType.HEATMAP, "🟦 Heatmap"),
    (ChartType.HISTOGRAM, "📶 Histogram"),
]


# ============================================================================
# DATA
# ============================================================================

@st.cache_data(show_spinner="Fetching weather data...")
def load_weather_records() -> Tuple[WeatherRecord, ...]:
    """Successful fetches only; a failure raises and is never cached."""
    result = fetch_weather_data()
    if not result.ok:
        raise WeatherDataError(result.error)
    return result.records


def load_weather_data() -> FetchResult:
    """
    The record set for this browser session.

    The first run of a session fetches (or reuses another session's cached
    success); the outcome, failure included, is then kept in session state.
    """
    if 'weather_data' not in st.session_state:
        try:
            st.session_state.weather_data = FetchResult(records=load_weather_records())
        except WeatherDataError as e:
            st.session_state.weather_data = FetchResult(records=(), error=str(e))
    return st.session_state.weather_data


# ============================================================================
# PAGE SECTIONS
# ============================================================================

def render_header():
    st.markdown(f"""
    <div style="background-color: {TABLE_HEADER_COLOR}; padding: 16px 24px; border-radius: 8px;">
        <h1 style="color: white; margin: 0;">{DASHBOARD_TITLE}</h1>
        <p style="color: white; margin: 4px 0 0 0;">Berlin, 1-10 May 2024: daily temperature and humidity</p>
    </div>
    """, unsafe_allow_html=True)


def render_buttons() -> ChartType:
    """Chart button row; returns the selection after this run's click, if any."""
    columns = st.columns(len(CHART_BUTTONS))
    for column, (chart_type, label) in zip(columns, CHART_BUTTONS):
        with column:
            if st.button(label, key=f"btn_{chart_type.value}", width='stretch'):
                st.session_state.selection = chart_type
    return st.session_state.selection


def render_chart_area(result: FetchResult, chart_type: ChartType):
    surface = PlotlySurface()
    drawn = render_chart(surface, chart_type, result.records)
    if drawn is ChartType.NONE:
        return
    st.plotly_chart(surface.figure, width='content', key=f"chart_{drawn.value}")
    if surface.figure.frames:
        st.caption("Press Play to replay the entry animation.")


def render_table(result: FetchResult):
    st.subheader("Weather Data")
    table = TableView()
    st.dataframe(table.render(result.records), hide_index=True, width='stretch')


# ============================================================================
# MAIN
# ============================================================================

def main():
    configure_page()

    if 'selection' not in st.session_state:
        st.session_state.selection = ChartType.BAR

    render_header()

    result = load_weather_data()
    logger.debug(f"[Dashboard] {len(result)} records, selection={st.session_state.selection.value}")
    if not result.ok:
        st.error(f"Failed to fetch weather data: {result.error}")
    elif not result.records:
        st.warning("No weather data fetched.")

    selection = render_buttons()
    render_chart_area(result, selection)
    render_table(result)


main()
