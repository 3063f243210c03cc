"""
Visualization module: scales, scene descriptors, the six chart renderers,
drawing surfaces and the data table.
"""

from .scales import BandScale, LinearScale, ColorScale, OrdinalColorScale, nice_ticks
from .scene import Scene, Shape, Text, Animation, ShowTooltip, HideTooltip, SetAttr
from .interaction import Tooltip, format_tooltip, build_legend
from .renderers import build_scene, render_chart, pie_angles, SCENE_BUILDERS
from .surface import Surface, RecordingSurface
from .plotly_surface import PlotlySurface, create_plotly_theme
from .table import TableView, build_table

__all__ = [
    'BandScale',
    'LinearScale',
    'ColorScale',
    'OrdinalColorScale',
    'nice_ticks',
    'Scene',
    'Shape',
    'Text',
    'Animation',
    'ShowTooltip',
    'HideTooltip',
    'SetAttr',
    'Tooltip',
    'format_tooltip',
    'build_legend',
    'build_scene',
    'render_chart',
    'pie_angles',
    'SCENE_BUILDERS',
    'Surface',
    'RecordingSurface',
    'PlotlySurface',
    'create_plotly_theme',
    'TableView',
    'build_table',
]
