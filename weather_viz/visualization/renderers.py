"""
Chart Renderers for the six weather visualizations.

Each ``build_*_scene`` function is a pure function from a record set to a
``Scene``: it derives the chart's scales from the records, emits one shape
descriptor per record (geometry, style, hover handlers), the axes, the
title, any value labels and the entry animation specs.  Nothing is drawn
here.

``render_chart`` is the dispatch and the drawing-surface state machine:

    Showing(previous) --clear()--> Empty --draw_scene()--> Showing(new)

Every call clears first, so repeated calls or chart switches never leave
shapes of an earlier chart behind.

Charts:
    1. Bar        -- temperature bars that grow in, value labels afterwards
    2. Line       -- temperature path with a marker and label per day
    3. Scatter    -- humidity against temperature
    4. Pie        -- temperature share per day with a date legend
    5. Heatmap    -- one cell per day colored by temperature
    6. Histogram  -- temperature bars with hover recolor
"""

import logging
import math
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from ..core.config import (
    PLOT_WIDTH,
    PLOT_HEIGHT,
    X_AXIS_OFFSET,
    TICK_SIZE,
    TITLE_POSITION,
    TITLE_FONT_SIZE,
    AXIS_LABEL_FONT_SIZE,
    TICK_FONT_SIZE,
    X_AXIS_LABEL_POSITION,
    Y_AXIS_LABEL_POSITION,
    BAR_PADDING,
    LINE_PADDING,
    HEATMAP_X_PADDING,
    HEATMAP_Y_PADDING,
    HISTOGRAM_PADDING,
    BAR_HEADROOM,
    HEATMAP_HEADROOM,
    SCATTER_X_HEADROOM,
    LINE_HEADROOM,
    HISTOGRAM_HEADROOM,
    SCATTER_Y_HEADROOM,
    PRIMARY_COLOR,
    LINE_POINT_COLOR,
    HISTOGRAM_COLOR,
    HISTOGRAM_HOVER_COLOR,
    LABEL_COLOR,
    HEATMAP_COLORS,
    BAR_GROW_DURATION_MS,
    PIE_SWEEP_DURATION_MS,
    HISTOGRAM_HOVER_DURATION_MS,
    BAR_LABEL_OFFSET,
    BAR_LABEL_FONT_SIZE,
    LINE_POINT_RADIUS,
    LINE_POINT_HOVER_RADIUS,
    LINE_LABEL_OFFSET,
    LINE_LABEL_FONT_SIZE,
    SCATTER_POINT_RADIUS,
    SCATTER_LABEL_OFFSET,
    SCATTER_LABEL_FONT_SIZE,
    PIE_CENTER,
    PIE_OUTER_RADIUS,
    PIE_INNER_RADIUS,
    HEATMAP_CAPTION,
    HEATMAP_CAPTION_POSITION,
    HEATMAP_CAPTION_FONT_SIZE,
)
from ..models.data_models import ChartType, WeatherRecord
from .interaction import build_legend
from .scales import (
    BandScale,
    ColorScale,
    LinearScale,
    OrdinalColorScale,
    describe_scale,
    format_number,
    value_domain,
)
from .scene import Animation, Scene, SetAttr, Shape, Text, tooltip_handlers

logger = logging.getLogger(__name__)

Records = Tuple[WeatherRecord, ...]
Scale = Union[BandScale, LinearScale]

TEMPERATURE_LABEL = "Temperature (°C)"
HUMIDITY_LABEL = "Humidity (%)"
DATE_LABEL = "Date"


# ============================================================================
# SHARED HELPERS
# ============================================================================

def _as_records(records: Optional[Iterable[WeatherRecord]]) -> Records:
    """A missing record set renders as the empty state."""
    return tuple(records or ())


def _day_scale(records: Records, padding: float) -> BandScale:
    return BandScale([r.date for r in records], (0, PLOT_WIDTH), padding)


def _value_scale(records: Records, field: str, headroom: float) -> LinearScale:
    return LinearScale(value_domain(records, field, headroom), (PLOT_HEIGHT, 0))


def add_axes(scene: Scene, x_scale: Scale, y_scale: Scale,
             x_label: str, y_label: str) -> None:
    """Bottom and left axes with tick marks, tick labels and axis titles."""
    x_range = sorted(x_scale.range)
    y_range = sorted(y_scale.range)

    # Bottom axis, translated (X_AXIS_OFFSET, PLOT_HEIGHT)
    ox, oy = X_AXIS_OFFSET, PLOT_HEIGHT
    scene.add_shape(Shape(
        kind='line',
        attrs={'x1': ox + x_range[0], 'y1': oy, 'x2': ox + x_range[1], 'y2': oy, 'stroke': 'currentColor'},
        css_class='axis x-axis',
        role='axis',
    ))
    for position, label in x_scale.ticks():
        scene.add_shape(Shape(
            kind='line',
            attrs={'x1': ox + position, 'y1': oy, 'x2': ox + position, 'y2': oy + TICK_SIZE,
                   'stroke': 'currentColor'},
            css_class='tick',
            role='axis',
        ))
        scene.texts.append(Text(x=ox + position, y=oy + TICK_SIZE + 3, text=label,
                                font_size=TICK_FONT_SIZE, dy='0.71em', role='tick'))
    scene.texts.append(Text(x=ox + X_AXIS_LABEL_POSITION[0], y=oy + X_AXIS_LABEL_POSITION[1],
                            text=x_label, font_size=AXIS_LABEL_FONT_SIZE, role='axis-label'))

    # Left axis at the origin
    scene.add_shape(Shape(
        kind='line',
        attrs={'x1': 0, 'y1': y_range[0], 'x2': 0, 'y2': y_range[1], 'stroke': 'currentColor'},
        css_class='axis y-axis',
        role='axis',
    ))
    for position, label in y_scale.ticks():
        scene.add_shape(Shape(
            kind='line',
            attrs={'x1': -TICK_SIZE, 'y1': position, 'x2': 0, 'y2': position, 'stroke': 'currentColor'},
            css_class='tick',
            role='axis',
        ))
        scene.texts.append(Text(x=-TICK_SIZE - 3, y=position, text=label, anchor='end',
                                font_size=TICK_FONT_SIZE, dy='0.32em', role='tick'))
    scene.texts.append(Text(x=Y_AXIS_LABEL_POSITION[0], y=Y_AXIS_LABEL_POSITION[1], text=y_label,
                            font_size=AXIS_LABEL_FONT_SIZE, rotate=-90, role='axis-label'))


def add_title(scene: Scene) -> None:
    scene.texts.append(Text(x=TITLE_POSITION[0], y=TITLE_POSITION[1], text=scene.title,
                            font_size=TITLE_FONT_SIZE, role='title'))


def _growing_bars(scene: Scene, records: Records, x_scale: BandScale, y_scale: LinearScale,
                  fill: str, handlers_factory: Callable[[], dict],
                  on_complete: Tuple[Text, ...] = ()) -> None:
    """
    Bottom-anchored rects that start flat and grow to their value.

    ``on_complete`` is appended when the first bar finishes growing; every
    bar shares the same duration.
    """
    for i, record in enumerate(records):
        final_y = min(y_scale(record.temperature), PLOT_HEIGHT)
        final_height = PLOT_HEIGHT - final_y
        index = scene.add_shape(Shape(
            kind='rect',
            attrs={
                'x': x_scale(record.date),
                'y': PLOT_HEIGHT,
                'width': x_scale.bandwidth,
                'height': 0.0,
                'fill': fill,
            },
            record=record,
            handlers=handlers_factory(),
            css_class='bar',
        ))
        scene.animations.append(Animation(index, 'y', PLOT_HEIGHT, final_y, BAR_GROW_DURATION_MS))
        scene.animations.append(Animation(index, 'height', 0.0, final_height, BAR_GROW_DURATION_MS,
                                          on_complete=on_complete if i == 0 else ()))


# ============================================================================
# CHART 1: BAR
# ============================================================================

def build_bar_scene(records: Optional[Iterable[WeatherRecord]]) -> Scene:
    """Temperature per day as bars; value labels appear once the bars have grown."""
    records = _as_records(records)
    x_scale = _day_scale(records, BAR_PADDING)
    y_scale = _value_scale(records, 'temperature', BAR_HEADROOM)
    scene = Scene(ChartType.BAR, "Bar Chart")

    labels = tuple(
        Text(
            x=x_scale(r.date) + x_scale.bandwidth / 2,
            y=y_scale(r.temperature) + BAR_LABEL_OFFSET,
            text=f"Temp: {format_number(r.temperature)}",
            font_size=BAR_LABEL_FONT_SIZE,
            fill=LABEL_COLOR,
            role='data-label',
        )
        for r in records
    )
    _growing_bars(scene, records, x_scale, y_scale, PRIMARY_COLOR, tooltip_handlers,
                  on_complete=labels)

    add_axes(scene, x_scale, y_scale, DATE_LABEL, TEMPERATURE_LABEL)
    add_title(scene)
    logger.debug(f"[Render] bar scales x={describe_scale(x_scale)} y={describe_scale(y_scale)}")
    return scene


# ============================================================================
# CHART 2: LINE
# ============================================================================

def path_data(points: List[Tuple[float, float]]) -> Optional[str]:
    """SVG path string through ``points`` (None when there are none)."""
    if not points:
        return None
    head, *tail = points
    return f"M{head[0]},{head[1]}" + ''.join(f"L{x},{y}" for x, y in tail)


def build_line_scene(records: Optional[Iterable[WeatherRecord]]) -> Scene:
    """Temperature path through band centres with a labelled marker per day."""
    records = _as_records(records)
    x_scale = _day_scale(records, LINE_PADDING)
    y_scale = _value_scale(records, 'temperature', LINE_HEADROOM)
    scene = Scene(ChartType.LINE, "Line Chart")

    points = [(x_scale.center(r.date), y_scale(r.temperature)) for r in records]
    if points:
        scene.add_shape(Shape(
            kind='path',
            attrs={'points': points, 'd': path_data(points), 'fill': 'none', 'stroke': PRIMARY_COLOR},
            css_class='line',
        ))

    for record, (cx, cy) in zip(records, points):
        scene.add_shape(Shape(
            kind='circle',
            attrs={'cx': cx, 'cy': cy, 'r': LINE_POINT_RADIUS, 'fill': LINE_POINT_COLOR},
            record=record,
            handlers=tooltip_handlers(
                on_enter=(SetAttr('r', LINE_POINT_HOVER_RADIUS),),
                on_leave=(SetAttr('r', LINE_POINT_RADIUS),),
            ),
        ))
        scene.texts.append(Text(
            x=cx + LINE_LABEL_OFFSET,
            y=cy,
            text=f"Temp: {format_number(record.temperature)}",
            font_size=LINE_LABEL_FONT_SIZE,
            anchor='start',
            fill=LABEL_COLOR,
            role='data-label',
        ))

    add_axes(scene, x_scale, y_scale, DATE_LABEL, TEMPERATURE_LABEL)
    add_title(scene)
    return scene


# ============================================================================
# CHART 3: SCATTER
# ============================================================================

def build_scatter_scene(records: Optional[Iterable[WeatherRecord]]) -> Scene:
    """One circle per day at (temperature, humidity), humidity labelled below."""
    records = _as_records(records)
    x_scale = LinearScale(value_domain(records, 'temperature', SCATTER_X_HEADROOM), (0, PLOT_WIDTH))
    y_scale = _value_scale(records, 'humidity', SCATTER_Y_HEADROOM)
    scene = Scene(ChartType.SCATTER, "Scatter Plot")

    for record in records:
        cx, cy = x_scale(record.temperature), y_scale(record.humidity)
        scene.add_shape(Shape(
            kind='circle',
            attrs={'cx': cx, 'cy': cy, 'r': SCATTER_POINT_RADIUS, 'fill': PRIMARY_COLOR},
            record=record,
            handlers=tooltip_handlers(),
        ))
        scene.texts.append(Text(
            x=cx,
            y=cy + SCATTER_LABEL_OFFSET,
            text=f"Humidity: {format_number(record.humidity)}",
            font_size=SCATTER_LABEL_FONT_SIZE,
            fill=LABEL_COLOR,
            dy='0.3em',
            role='data-label',
        ))

    add_axes(scene, x_scale, y_scale, TEMPERATURE_LABEL, HUMIDITY_LABEL)
    add_title(scene)
    return scene


# ============================================================================
# CHART 4: PIE
# ============================================================================

def pie_angles(values: List[float]) -> List[Tuple[float, float]]:
    """
    Start/end angles (radians, clockwise from 12 o'clock) per value.

    Space is handed out largest value first while the result keeps input
    order.  Non-positive values get an empty slice.
    """
    total = sum(v for v in values if v > 0)
    k = 2 * math.pi / total if total else 0.0
    order = sorted(range(len(values)), key=lambda i: -values[i])

    angles: List[Tuple[float, float]] = [(0.0, 0.0)] * len(values)
    a0 = 0.0
    for i in order:
        a1 = a0 + (values[i] * k if values[i] > 0 else 0.0)
        angles[i] = (a0, a1)
        a0 = a1
    return angles


def build_pie_scene(records: Optional[Iterable[WeatherRecord]]) -> Scene:
    """Temperature share per day; slices sweep open from zero angle."""
    records = _as_records(records)
    color_scale = OrdinalColorScale()
    scene = Scene(ChartType.PIE, "Pie Chart")
    cx, cy = PIE_CENTER

    angles = pie_angles([r.temperature for r in records])
    for i, (record, (start, end)) in enumerate(zip(records, angles)):
        index = scene.add_shape(Shape(
            kind='arc',
            attrs={
                'cx': cx,
                'cy': cy,
                'inner_radius': PIE_INNER_RADIUS,
                'outer_radius': PIE_OUTER_RADIUS,
                'start_angle': 0.0,
                'end_angle': 0.0,
                'fill': color_scale(i),
            },
            record=record,
            handlers=tooltip_handlers(),
            css_class='arc',
        ))
        scene.animations.append(Animation(index, 'start_angle', 0.0, start, PIE_SWEEP_DURATION_MS))
        scene.animations.append(Animation(index, 'end_angle', 0.0, end, PIE_SWEEP_DURATION_MS))

    swatches, labels = build_legend(records, color_scale)
    for swatch in swatches:
        scene.add_shape(swatch)
    scene.texts.extend(labels)

    add_title(scene)
    return scene


# ============================================================================
# CHART 5: HEATMAP
# ============================================================================

def build_heatmap_scene(records: Optional[Iterable[WeatherRecord]]) -> Scene:
    """One cell per day; the temperature band sets the row, the color its intensity."""
    records = _as_records(records)
    x_scale = _day_scale(records, HEATMAP_X_PADDING)
    y_scale = BandScale([r.temperature for r in records], (PLOT_HEIGHT, 0), HEATMAP_Y_PADDING)
    color_scale = ColorScale(value_domain(records, 'temperature', HEATMAP_HEADROOM), HEATMAP_COLORS)
    scene = Scene(ChartType.HEATMAP, "Heatmap")

    for record in records:
        scene.add_shape(Shape(
            kind='rect',
            attrs={
                'x': x_scale(record.date),
                'y': y_scale(record.temperature),
                'width': x_scale.bandwidth,
                'height': y_scale.bandwidth,
                'fill': color_scale(record.temperature),
            },
            record=record,
            handlers=tooltip_handlers(),
            css_class='cell',
        ))

    add_axes(scene, x_scale, y_scale, DATE_LABEL, TEMPERATURE_LABEL)
    add_title(scene)
    scene.texts.append(Text(
        x=HEATMAP_CAPTION_POSITION[0],
        y=HEATMAP_CAPTION_POSITION[1],
        text=HEATMAP_CAPTION,
        font_size=HEATMAP_CAPTION_FONT_SIZE,
        fill=LABEL_COLOR,
        role='caption',
    ))
    return scene


# ============================================================================
# CHART 6: HISTOGRAM
# ============================================================================

def _histogram_handlers() -> dict:
    # The hover color sticks after the pointer leaves; only the tooltip hides
    return tooltip_handlers(
        on_enter=(SetAttr('fill', HISTOGRAM_HOVER_COLOR, HISTOGRAM_HOVER_DURATION_MS),),
    )


def build_histogram_scene(records: Optional[Iterable[WeatherRecord]]) -> Scene:
    """Temperature bars with 20% headroom that recolor on hover."""
    records = _as_records(records)
    x_scale = _day_scale(records, HISTOGRAM_PADDING)
    y_scale = _value_scale(records, 'temperature', HISTOGRAM_HEADROOM)
    scene = Scene(ChartType.HISTOGRAM, "Interactive Histogram")

    _growing_bars(scene, records, x_scale, y_scale, HISTOGRAM_COLOR, _histogram_handlers)

    add_axes(scene, x_scale, y_scale, DATE_LABEL, TEMPERATURE_LABEL)
    add_title(scene)
    return scene


# ============================================================================
# DISPATCH
# ============================================================================

SCENE_BUILDERS: Dict[ChartType, Callable[[Records], Scene]] = {
    ChartType.BAR: build_bar_scene,
    ChartType.LINE: build_line_scene,
    ChartType.SCATTER: build_scatter_scene,
    ChartType.PIE: build_pie_scene,
    ChartType.HEATMAP: build_heatmap_scene,
    ChartType.HISTOGRAM: build_histogram_scene,
}


def build_scene(chart_type: Union[ChartType, str],
                records: Optional[Iterable[WeatherRecord]]) -> Scene:
    """Scene for ``chart_type`` (a ChartType or its name)."""
    if not isinstance(chart_type, ChartType):
        chart_type = ChartType.from_name(chart_type)
    if chart_type is ChartType.NONE:
        raise ValueError("ChartType.NONE has no scene")
    return SCENE_BUILDERS[chart_type](_as_records(records))


def render_chart(surface, chart_type: Union[ChartType, str],
                 records: Optional[Iterable[WeatherRecord]],
                 selection: ChartType = ChartType.NONE) -> ChartType:
    """
    Replace whatever the surface shows with ``chart_type``.

    Args:
        surface: Drawing surface (``clear`` / ``draw_scene``).
        chart_type: Chart to draw; ``ChartType.NONE`` just clears.
        records: Record set; ``None`` renders the empty state.
        selection: The chart currently on the surface.

    Returns:
        The new selection.
    """
    if not isinstance(chart_type, ChartType):
        chart_type = ChartType.from_name(chart_type)
    records = _as_records(records)

    logger.debug(f"[Render] {selection.value} -> {chart_type.value} ({len(records)} records)")
    surface.clear()
    if chart_type is ChartType.NONE:
        return ChartType.NONE

    scene = build_scene(chart_type, records)
    surface.draw_scene(scene)
    logger.info(f"[Render] Drew {chart_type.value} chart: {len(scene.data_shapes)} shapes")
    return chart_type
