"""
Unit tests for weather_viz.visualization.table
"""

import unittest
from pathlib import Path
import sys

# Add parent directory to path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from weather_viz.models.data_models import WeatherRecord
from weather_viz.visualization.table import TableView, build_table
from tests.fixtures.sample_data import create_sample_records


class TestTable(unittest.TestCase):
    """Test suite for the data table."""

    def test_headers_and_rows(self):
        df = build_table(create_sample_records())
        self.assertEqual(list(df.columns), ['Date', 'Temperature (°C)', 'Humidity (%)'])
        self.assertEqual(len(df), 5)
        self.assertEqual(df.iloc[0]['Date'], '2024-05-01')

    def test_empty_table_keeps_header(self):
        df = build_table(())
        self.assertEqual(len(df), 0)
        self.assertEqual(len(df.columns), 3)

    def test_render_replaces_previous_rows(self):
        view = TableView()
        view.render(create_sample_records())
        view.render([WeatherRecord('2024-05-09', 8.5, 90.0)])

        self.assertEqual(len(view.frame), 1)
        self.assertEqual(view.frame.iloc[0]['Temperature (°C)'], 8.5)

    def test_html(self):
        view = TableView()
        view.render(create_sample_records())
        html = view.to_html()

        self.assertIn('background-color: rgb(76 104 159)', html)
        self.assertIn('<th', html)
        self.assertIn('<td style="border: 1px solid black; padding: 8px;">15.5</td>', html)
        self.assertIn('>20</td>', html)
        self.assertEqual(html.count('<tr>'), 6)


if __name__ == '__main__':
    unittest.main()
