"""
Plotly drawing surface for the browser dashboard.

Translates scene descriptors into a ``plotly.graph_objects.Figure`` laid out
in canvas units: the x axis spans ``[FIGURE_X_MIN, CANVAS_WIDTH]`` and the y
axis is reversed over ``[CANVAS_HEIGHT, 0]``, so scene coordinates (SVG
style, y grows downward) are used unchanged.

Shape mapping
-------------
- rect    -> ``go.Bar`` with explicit ``base``/``width`` (barmode overlay)
- circle  -> ``go.Scatter`` marker, diameter = 2r
- path    -> ``go.Scatter`` line
- arc     -> filled ``go.Scatter`` polygon sampled along the arc
- line    -> layout shape (axes and ticks)
- text    -> layout annotation

Hover handlers become Plotly hover text (the tooltip); a ``SetAttr('fill')``
on enter becomes the hover label color.  Attribute changes Plotly cannot
express on hover (marker radius) are not reproduced.

The figure shows each scene's settled state.  Scenes with animation specs
also get ``frames`` sampling the animations and a Play button.
"""

import logging
from typing import Any, Dict, Optional

import numpy as np
import plotly.graph_objects as go

from ..core.config import (
    CANVAS_WIDTH,
    CANVAS_HEIGHT,
    FIGURE_X_MIN,
    ANIMATION_FRAMES,
    CHART_BACKGROUND,
    CHART_FONT_COLOR,
    AXIS_COLOR,
)
from ..models.data_models import ChartType, WeatherRecord
from .interaction import format_tooltip
from .scene import MOUSEOVER, Handlers, Scene, SetAttr, Shape, Text
from .surface import Surface

logger = logging.getLogger(__name__)

_XANCHOR = {'start': 'left', 'middle': 'center', 'end': 'right'}
_YANCHOR = {'0.71em': 'top', '0.32em': 'middle', '0.3em': 'middle'}

ARC_SEGMENTS = 64


def create_plotly_theme() -> Dict[str, Any]:
    """Get consistent Plotly theme settings."""
    return dict(
        paper_bgcolor=CHART_BACKGROUND,
        plot_bgcolor=CHART_BACKGROUND,
        font=dict(family='Inter', color=CHART_FONT_COLOR),
        margin=dict(l=10, r=10, t=10, b=10),
    )


# ============================================================================
# DESCRIPTOR -> PLOTLY
# ============================================================================

def _hover_color(handlers: Handlers) -> Optional[str]:
    for action in handlers.get(MOUSEOVER, ()):
        if isinstance(action, SetAttr) and action.name == 'fill':
            return action.value
    return None


def _hover(record: Optional[WeatherRecord], handlers: Handlers) -> Dict[str, Any]:
    if record is None or not handlers:
        return dict(hoverinfo='skip')
    hover = dict(hovertext=[format_tooltip(record, html=True)], hoverinfo='text', name=record.date)
    color = _hover_color(handlers)
    if color:
        hover['hoverlabel'] = dict(bgcolor=color)
    return hover


def arc_polygon(attrs: Dict[str, Any], segments: int = ARC_SEGMENTS):
    """Outline of an annular sector; angles clockwise from 12 o'clock."""
    cx, cy = attrs['cx'], attrs['cy']
    inner, outer = attrs['inner_radius'], attrs['outer_radius']
    angles = np.linspace(attrs['start_angle'], attrs['end_angle'], segments + 1)

    xs = list(cx + outer * np.sin(angles))
    ys = list(cy - outer * np.cos(angles))
    if inner > 0:
        xs += list(cx + inner * np.sin(angles[::-1]))
        ys += list(cy - inner * np.cos(angles[::-1]))
    else:
        xs.append(cx)
        ys.append(cy)
    xs.append(xs[0])
    ys.append(ys[0])
    return xs, ys


def shape_trace(shape: Shape, attrs: Optional[Dict[str, Any]] = None):
    """Plotly trace for a non-line shape, drawn with ``attrs`` (default: its own)."""
    attrs = shape.attrs if attrs is None else attrs
    hover = _hover(shape.record, shape.handlers)

    if shape.kind == 'rect':
        return go.Bar(
            x=[attrs['x'] + attrs['width'] / 2],
            y=[attrs['height']],
            base=[attrs['y']],
            width=[attrs['width']],
            marker=dict(color=attrs['fill'], line=dict(width=0)),
            **hover,
        )
    if shape.kind == 'circle':
        return go.Scatter(
            x=[attrs['cx']],
            y=[attrs['cy']],
            mode='markers',
            marker=dict(size=2 * attrs['r'], color=attrs['fill']),
            **hover,
        )
    if shape.kind == 'path':
        points = attrs['points']
        return go.Scatter(
            x=[p[0] for p in points],
            y=[p[1] for p in points],
            mode='lines',
            line=dict(color=attrs['stroke'], width=1.5),
            hoverinfo='skip',
        )
    if shape.kind == 'arc':
        xs, ys = arc_polygon(attrs)
        if shape.record is not None and shape.handlers:
            # Filled regions report the trace name on hover
            hover = dict(hoveron='fills', hoverinfo='name',
                         name=format_tooltip(shape.record, html=True))
        return go.Scatter(
            x=xs,
            y=ys,
            mode='lines',
            fill='toself',
            fillcolor=attrs['fill'],
            line=dict(color=attrs['fill'], width=0.5),
            **hover,
        )
    raise ValueError(f"Unsupported shape kind: {shape.kind}")


def text_annotation(text: Text) -> Dict[str, Any]:
    return dict(
        x=text.x,
        y=text.y,
        xref='x',
        yref='y',
        text=text.text,
        showarrow=False,
        xanchor=_XANCHOR.get(text.anchor, 'center'),
        yanchor=_YANCHOR.get(text.dy, 'bottom'),
        textangle=text.rotate,
        font=dict(size=text.font_size, color=text.fill or CHART_FONT_COLOR),
    )


# ============================================================================
# SURFACE
# ============================================================================

class PlotlySurface(Surface):
    """
    Surface backed by a Plotly figure.

    Attributes:
        figure (go.Figure): The figure for the chart currently drawn.
        animate (bool): Attach entry-animation frames to animated scenes.
    """

    def __init__(self, animate: bool = True, frame_count: int = ANIMATION_FRAMES):
        super().__init__()
        self.animate = animate
        self.frame_count = frame_count
        self.figure = self._blank_figure()

    def _blank_figure(self) -> go.Figure:
        fig = go.Figure()
        fig.update_layout(
            **create_plotly_theme(),
            width=CANVAS_WIDTH - FIGURE_X_MIN + 20,
            height=CANVAS_HEIGHT + 20,
            showlegend=False,
            barmode='overlay',
            hovermode='closest',
            xaxis=dict(range=[FIGURE_X_MIN, CANVAS_WIDTH], visible=False, fixedrange=True),
            yaxis=dict(range=[CANVAS_HEIGHT, 0], visible=False, fixedrange=True),
        )
        return fig

    def clear(self) -> None:
        self.figure = self._blank_figure()
        self.state = ChartType.NONE
        self.tooltip.hide()

    def draw_shape(self, shape: Shape) -> None:
        if shape.kind == 'line':
            a = shape.attrs
            self.figure.add_shape(type='line', x0=a['x1'], y0=a['y1'], x1=a['x2'], y1=a['y2'],
                                  xref='x', yref='y', line=dict(color=AXIS_COLOR, width=1))
            return
        self.figure.add_trace(shape_trace(shape))

    def draw_text(self, text: Text) -> None:
        self.figure.add_annotation(**text_annotation(text))

    def draw_scene(self, scene: Scene) -> None:
        # The static figure is the end state; frames replay the entry
        super().draw_scene(scene.settled())
        if self.animate and scene.animations:
            self._add_frames(scene)

    def _add_frames(self, scene: Scene) -> None:
        duration = scene.duration_ms
        times = np.linspace(0, duration, self.frame_count + 1)
        frames = []
        for t in times:
            data = [shape_trace(shape, scene.attrs_at(i, t))
                    for i, shape in enumerate(scene.shapes) if shape.kind != 'line']
            annotations = [text_annotation(text) for text in scene.texts_at(t)]
            frames.append(go.Frame(data=data, name=f"{t:.0f}ms", layout=dict(annotations=annotations)))
        self.figure.frames = frames

        frame_ms = duration / max(1, self.frame_count)
        self.figure.update_layout(updatemenus=[dict(
            type='buttons',
            showactive=False,
            x=1.0,
            y=1.0,
            xanchor='right',
            yanchor='top',
            buttons=[dict(
                label='Play',
                method='animate',
                args=[None, dict(frame=dict(duration=frame_ms, redraw=True),
                                 transition=dict(duration=0),
                                 fromcurrent=False)],
            )],
        )])
        logger.debug(f"[Surface] {scene.chart_type.value}: {len(frames)} animation frames over {duration}ms")
