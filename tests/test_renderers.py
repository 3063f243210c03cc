"""
Unit tests for weather_viz.visualization.renderers

Covers:
- Geometry of each of the six charts
- Empty and single-record record sets
- Pie angle allocation
- Scene dispatch by chart type
"""

import math
import unittest
from pathlib import Path
import sys

# Add parent directory to path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from weather_viz.core.config import (
    PLOT_HEIGHT,
    PLOT_WIDTH,
    PRIMARY_COLOR,
    HISTOGRAM_COLOR,
    HISTOGRAM_HOVER_COLOR,
    LINE_POINT_COLOR,
    HEATMAP_CAPTION,
    LEGEND_ORIGIN,
    LEGEND_ROW_HEIGHT,
)
from weather_viz.models.data_models import ChartType, WeatherRecord
from weather_viz.visualization.renderers import (
    build_scene,
    build_bar_scene,
    build_line_scene,
    build_scatter_scene,
    build_pie_scene,
    build_heatmap_scene,
    build_histogram_scene,
    pie_angles,
    path_data,
    render_chart,
)
from weather_viz.visualization.scales import CATEGORY10
from weather_viz.visualization.scene import MOUSEOVER, MOUSEOUT, SetAttr, ShowTooltip, HideTooltip
from weather_viz.visualization.surface import RecordingSurface
from tests.fixtures.sample_data import create_sample_records


def rendered(chart_type, records, finish=True):
    """Draw one chart on a fresh RecordingSurface."""
    surface = RecordingSurface()
    render_chart(surface, chart_type, records)
    if finish:
        surface.finish_animations()
    return surface


class TestBarChart(unittest.TestCase):
    """Test suite for the bar chart."""

    def setUp(self):
        self.records = create_sample_records()

    def test_single_record_fills_plot_height(self):
        """Test one record yields a bar from y=0 with height 400 once grown."""
        surface = rendered(ChartType.BAR, [WeatherRecord('2024-05-01', 12.0, 60.0)])
        bars = surface.find(kind='rect', role='data')

        self.assertEqual(len(bars), 1)
        self.assertAlmostEqual(bars[0].attrs['y'], 0.0)
        self.assertAlmostEqual(bars[0].attrs['height'], PLOT_HEIGHT)

    def test_bars_start_flat(self):
        surface = rendered(ChartType.BAR, self.records, finish=False)
        for bar in surface.find(kind='rect', role='data'):
            self.assertEqual(bar.attrs['y'], PLOT_HEIGHT)
            self.assertEqual(bar.attrs['height'], 0.0)
        self.assertTrue(surface.animating)

    def test_one_bar_per_record(self):
        surface = rendered(ChartType.BAR, self.records)
        bars = surface.find(kind='rect', role='data')

        self.assertEqual([b.record.date for b in bars], [r.date for r in self.records])
        self.assertTrue(all(b.attrs['fill'] == PRIMARY_COLOR for b in bars))

    def test_tallest_bar_reaches_top(self):
        """Test the true maximum maps to the top of the plot (no headroom)."""
        surface = rendered(ChartType.BAR, self.records)
        tallest = max(surface.find(kind='rect', role='data'), key=lambda b: b.record.temperature)
        self.assertAlmostEqual(tallest.attrs['y'], 0.0)

    def test_labels_appear_after_growth(self):
        surface = rendered(ChartType.BAR, self.records, finish=False)
        self.assertEqual(surface.texts('data-label'), [])

        surface.finish_animations()
        self.assertEqual(surface.texts('data-label'),
                         ['Temp: 12', 'Temp: 15.5', 'Temp: 9', 'Temp: 20', 'Temp: 17'])

    def test_axes_and_title(self):
        surface = rendered(ChartType.BAR, self.records)
        self.assertEqual(surface.texts('title'), ['Bar Chart'])
        self.assertEqual(surface.texts('axis-label'), ['Date', 'Temperature (°C)'])
        self.assertIn('2024-05-03', surface.texts('tick'))

    def test_hover_shows_tooltip(self):
        bar = build_bar_scene(self.records).data_shapes[0]
        self.assertEqual(bar.handlers[MOUSEOVER], (ShowTooltip(),))
        self.assertEqual(bar.handlers[MOUSEOUT], (HideTooltip(),))


class TestLineChart(unittest.TestCase):
    """Test suite for the line chart."""

    def setUp(self):
        self.records = create_sample_records()

    def test_path_and_markers(self):
        scene = build_line_scene(self.records)
        paths = [s for s in scene.shapes if s.kind == 'path']
        circles = [s for s in scene.shapes if s.kind == 'circle']

        self.assertEqual(len(paths), 1)
        self.assertEqual(len(paths[0].attrs['points']), len(self.records))
        self.assertEqual(paths[0].attrs['fill'], 'none')
        self.assertEqual(len(circles), len(self.records))
        self.assertTrue(all(c.attrs['fill'] == LINE_POINT_COLOR for c in circles))

    def test_markers_at_band_centres(self):
        scene = build_line_scene([WeatherRecord('2024-05-01', 10.0, 50.0)])
        circle = [s for s in scene.shapes if s.kind == 'circle'][0]
        self.assertAlmostEqual(circle.attrs['cx'], PLOT_WIDTH / 2)

    def test_hover_enlarges_marker(self):
        circle = [s for s in build_line_scene(self.records).shapes if s.kind == 'circle'][0]
        self.assertIn(SetAttr('r', 8), circle.handlers[MOUSEOVER])
        self.assertIn(SetAttr('r', 5), circle.handlers[MOUSEOUT])

    def test_labels(self):
        scene = build_line_scene(self.records)
        labels = [t.text for t in scene.texts if t.role == 'data-label']
        self.assertEqual(labels[1], 'Temp: 15.5')

    def test_empty_has_no_path(self):
        scene = build_line_scene(())
        self.assertEqual([s for s in scene.shapes if s.kind == 'path'], [])

    def test_path_data(self):
        self.assertEqual(path_data([(0, 1), (2, 3)]), 'M0,1L2,3')
        self.assertIsNone(path_data([]))


class TestScatterPlot(unittest.TestCase):
    """Test suite for the scatter plot."""

    def test_positions(self):
        records = create_sample_records()
        scene = build_scatter_scene(records)
        circles = scene.data_shapes

        hottest = next(c for c in circles if c.record.temperature == 20.0)
        self.assertAlmostEqual(hottest.attrs['cx'], PLOT_WIDTH)

        humid = next(c for c in circles if c.record.humidity == 80.0)
        self.assertAlmostEqual(humid.attrs['cy'], PLOT_HEIGHT - PLOT_HEIGHT / 1.2)

    def test_humidity_labels_and_axis_titles(self):
        scene = build_scatter_scene(create_sample_records())
        labels = [t.text for t in scene.texts if t.role == 'data-label']
        axis_labels = [t.text for t in scene.texts if t.role == 'axis-label']

        self.assertEqual(labels[0], 'Humidity: 60')
        self.assertEqual(axis_labels, ['Temperature (°C)', 'Humidity (%)'])


class TestPieChart(unittest.TestCase):
    """Test suite for the pie chart and legend."""

    def test_angles_descending_allocation(self):
        """Test the largest value is laid out first while output keeps input order."""
        angles = pie_angles([1.0, 1.0, 2.0])
        self.assertEqual(angles[2], (0.0, math.pi))
        self.assertAlmostEqual(angles[0][0], math.pi)
        self.assertAlmostEqual(angles[0][1], 1.5 * math.pi)
        self.assertAlmostEqual(angles[1][1], 2 * math.pi)

    def test_non_positive_values_get_empty_slices(self):
        angles = pie_angles([0.0, -1.0, 2.0])
        self.assertAlmostEqual(angles[2][1] - angles[2][0], 2 * math.pi)
        self.assertEqual(angles[0][0], angles[0][1])
        self.assertEqual(angles[1][0], angles[1][1])

    def test_all_zero(self):
        self.assertEqual(pie_angles([0.0, 0.0]), [(0.0, 0.0), (0.0, 0.0)])

    def test_slices_cover_full_circle(self):
        surface = rendered(ChartType.PIE, create_sample_records())
        arcs = surface.find(kind='arc')
        spans = sum(a.attrs['end_angle'] - a.attrs['start_angle'] for a in arcs)
        self.assertAlmostEqual(spans, 2 * math.pi)

    def test_slices_sweep_from_zero(self):
        surface = rendered(ChartType.PIE, create_sample_records(), finish=False)
        for arc in surface.find(kind='arc'):
            self.assertEqual(arc.attrs['end_angle'], 0.0)

    def test_legend_rows(self):
        records = create_sample_records()
        scene = build_pie_scene(records)
        swatches = [s for s in scene.shapes if s.role == 'legend']
        labels = [t.text for t in scene.texts if t.role == 'legend']

        self.assertEqual(labels, [r.date for r in records])
        self.assertEqual([s.attrs['fill'] for s in swatches], list(CATEGORY10[:len(records)]))
        self.assertEqual(swatches[1].attrs['y'], LEGEND_ORIGIN[1] + LEGEND_ROW_HEIGHT)

    def test_no_axes(self):
        scene = build_pie_scene(create_sample_records())
        self.assertFalse(any(s.role == 'axis' for s in scene.shapes))
        self.assertEqual([t.text for t in scene.texts if t.role == 'title'], ['Pie Chart'])


class TestHeatmap(unittest.TestCase):
    """Test suite for the heatmap."""

    def test_cells(self):
        records = create_sample_records()
        cells = build_heatmap_scene(records).data_shapes

        self.assertEqual(len(cells), len(records))
        self.assertTrue(all(c.css_class == 'cell' for c in cells))
        hottest = next(c for c in cells if c.record.temperature == 20.0)
        self.assertEqual(hottest.attrs['fill'], '#cadcfc')

    def test_temperature_rows_fill_plot_height(self):
        cells = build_heatmap_scene(create_sample_records()).data_shapes
        self.assertAlmostEqual(cells[0].attrs['height'] * len(cells), PLOT_HEIGHT)

    def test_caption(self):
        scene = build_heatmap_scene(create_sample_records())
        self.assertEqual([t.text for t in scene.texts if t.role == 'caption'], [HEATMAP_CAPTION])


class TestHistogram(unittest.TestCase):
    """Test suite for the histogram."""

    def test_bars_with_headroom(self):
        surface = rendered(ChartType.HISTOGRAM, create_sample_records())
        bars = surface.find(kind='rect', role='data')
        tallest = max(bars, key=lambda b: b.record.temperature)

        self.assertTrue(all(b.attrs['fill'] == HISTOGRAM_COLOR for b in bars))
        self.assertAlmostEqual(tallest.attrs['y'], PLOT_HEIGHT - PLOT_HEIGHT / 1.2)
        self.assertEqual(surface.texts('title'), ['Interactive Histogram'])

    def test_hover_recolors_without_restore(self):
        bar = build_histogram_scene(create_sample_records()).data_shapes[0]
        self.assertIn(SetAttr('fill', HISTOGRAM_HOVER_COLOR, 200), bar.handlers[MOUSEOVER])
        self.assertEqual(bar.handlers[MOUSEOUT], (HideTooltip(),))

    def test_no_value_labels(self):
        surface = rendered(ChartType.HISTOGRAM, create_sample_records())
        self.assertEqual(surface.texts('data-label'), [])


class TestDegenerateRecordSets(unittest.TestCase):
    """Test suite for empty and missing record sets across all charts."""

    def test_empty_records_draw_title_and_axes(self):
        for chart_type in ChartType.drawable():
            with self.subTest(chart=chart_type.value):
                surface = rendered(chart_type, ())
                self.assertEqual(surface.data_nodes, [])
                self.assertEqual(len(surface.texts('title')), 1)
                if chart_type is not ChartType.PIE:
                    self.assertTrue(surface.find(kind='line', role='axis'))

    def test_none_records_render_empty_state(self):
        for chart_type in ChartType.drawable():
            with self.subTest(chart=chart_type.value):
                surface = rendered(chart_type, None)
                self.assertEqual(surface.state, chart_type)
                self.assertEqual(surface.data_nodes, [])

    def test_all_zero_temperatures(self):
        records = [WeatherRecord('2024-05-01', 0.0, 0.0), WeatherRecord('2024-05-02', 0.0, 0.0)]
        for chart_type in ChartType.drawable():
            with self.subTest(chart=chart_type.value):
                surface = rendered(chart_type, records)
                self.assertGreaterEqual(len(surface.find(role='data')), 2)

    def test_records_are_not_mutated(self):
        records = list(create_sample_records())
        snapshot = list(records)
        for chart_type in ChartType.drawable():
            build_scene(chart_type, records)
        self.assertEqual(records, snapshot)


class TestBuildScene(unittest.TestCase):
    """Test suite for chart dispatch."""

    def test_by_name(self):
        scene = build_scene('Heatmap', create_sample_records())
        self.assertEqual(scene.chart_type, ChartType.HEATMAP)

    def test_none_has_no_scene(self):
        with self.assertRaises(ValueError):
            build_scene(ChartType.NONE, ())

    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            build_scene('radar', ())

    def test_settled_scene(self):
        settled = build_bar_scene(create_sample_records()).settled()
        self.assertEqual(settled.animations, [])
        self.assertEqual(len([t for t in settled.texts if t.role == 'data-label']), 5)


if __name__ == '__main__':
    unittest.main()
