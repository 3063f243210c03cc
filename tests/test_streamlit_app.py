"""
Unit tests for weather_viz/dashboard/streamlit_app.py

Drives the Streamlit page headless with streamlit.testing and a mocked
``requests.get``:
- Error banner and empty table when the fetch fails
- Default bar chart and filled table on success
- Chart buttons switching the rendered chart
- Failed fetches kept per session, never shared through the cache
"""

import json
import unittest
from unittest.mock import patch
from pathlib import Path
import sys

import requests
import streamlit as st
from streamlit.testing.v1 import AppTest

# Add parent directory to path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from weather_viz.dashboard.app import get_dashboard_path
from tests.fixtures.sample_data import make_dates, make_hourly_payload, make_response

APP_TIMEOUT = 30


def chart_annotations(at):
    """Annotation texts of the Plotly figure on the page."""
    charts = at.get('plotly_chart')
    if not charts:
        return []
    figure = json.loads(charts[0].proto.spec)
    return [a.get('text') for a in figure['layout'].get('annotations', [])]


class TestDashboardPage(unittest.TestCase):
    """Test suite for the Streamlit host page."""

    def setUp(self):
        st.cache_data.clear()
        self.payload = make_hourly_payload(make_dates(3))

    def tearDown(self):
        st.cache_data.clear()

    def new_session(self):
        return AppTest.from_file(get_dashboard_path(), default_timeout=APP_TIMEOUT)

    @patch('requests.get')
    def test_failed_fetch_shows_error_and_empty_table(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("down")

        at = self.new_session().run()

        self.assertFalse(at.exception)
        self.assertEqual(len(at.error), 1)
        self.assertEqual(at.error[0].value, 'Failed to fetch weather data: Network failure: down')
        table = at.dataframe[0].value
        self.assertEqual(len(table), 0)
        self.assertEqual(list(table.columns), ['Date', 'Temperature (°C)', 'Humidity (%)'])

    @patch('requests.get')
    def test_http_error_shows_status(self, mock_get):
        mock_get.return_value = make_response(status_code=503)

        at = self.new_session().run()

        self.assertEqual(at.error[0].value, 'Failed to fetch weather data: HTTP error! status: 503')

    @patch('requests.get')
    def test_default_bar_chart_on_success(self, mock_get):
        mock_get.return_value = make_response(payload=self.payload)

        at = self.new_session().run()

        self.assertFalse(at.exception)
        self.assertEqual(len(at.error), 0)
        self.assertEqual(len(at.warning), 0)
        self.assertEqual(at.session_state['selection'].value, 'bar')
        self.assertIn('Bar Chart', chart_annotations(at))
        table = at.dataframe[0].value
        self.assertEqual(list(table['Date']), ['2024-05-01', '2024-05-02', '2024-05-03'])

    @patch('requests.get')
    def test_button_click_switches_chart(self, mock_get):
        mock_get.return_value = make_response(payload=self.payload)
        at = self.new_session().run()

        at.button(key='btn_pie').click().run()

        self.assertEqual(at.session_state['selection'].value, 'pie')
        annotations = chart_annotations(at)
        self.assertIn('Pie Chart', annotations)
        self.assertNotIn('Bar Chart', annotations)

        at.button(key='btn_heatmap').click().run()
        self.assertIn('Temperature based on color intensity', chart_annotations(at))

        # Re-runs reuse the session's records
        self.assertEqual(mock_get.call_count, 1)

    @patch('requests.get')
    def test_failure_is_terminal_for_its_session(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("down")
        at = self.new_session().run()

        mock_get.side_effect = None
        mock_get.return_value = make_response(payload=self.payload)
        at.button(key='btn_line').click().run()

        self.assertEqual(mock_get.call_count, 1)
        self.assertEqual(len(at.error), 1)
        self.assertEqual(len(at.dataframe[0].value), 0)

    @patch('requests.get')
    def test_failure_not_shared_with_next_session(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("down")
        first = self.new_session().run()
        self.assertEqual(len(first.error), 1)

        mock_get.side_effect = None
        mock_get.return_value = make_response(payload=self.payload)
        second = self.new_session().run()

        self.assertEqual(mock_get.call_count, 2)
        self.assertEqual(len(second.error), 0)
        self.assertEqual(len(second.dataframe[0].value), 3)

    @patch('requests.get')
    def test_success_cached_across_sessions(self, mock_get):
        mock_get.return_value = make_response(payload=self.payload)

        self.new_session().run()
        second = self.new_session().run()

        self.assertEqual(mock_get.call_count, 1)
        self.assertEqual(len(second.dataframe[0].value), 3)


if __name__ == '__main__':
    unittest.main()
