"""
Interaction layer: the shared tooltip, hover action execution, the legend.

Only one tooltip exists per drawing surface; with a single pointer two
shapes can never be hovered at once, so the tooltip is plain mutable state.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..core.config import (
    LEGEND_ORIGIN,
    LEGEND_ROW_HEIGHT,
    LEGEND_SWATCH_SIZE,
    LEGEND_TEXT_OFFSET,
    LEGEND_TEXT_COLOR,
)
from ..models.data_models import WeatherRecord
from .scales import OrdinalColorScale, format_number
from .scene import Action, HideTooltip, SetAttr, Shape, ShowTooltip, Text


def format_tooltip(record: Optional[WeatherRecord], html: bool = False) -> str:
    """Tooltip text for a record: date, temperature and humidity lines."""
    if record is None:
        return ''
    lines = [
        ('Date', record.date),
        ('Temperature', f"{format_number(record.temperature)} °C"),
        ('Humidity', f"{format_number(record.humidity)} %"),
    ]
    if html:
        return '<br>'.join(f"<b>{label}:</b> {value}" for label, value in lines)
    return '\n'.join(f"{label}: {value}" for label, value in lines)


class Tooltip:
    """
    The shared tooltip element.

    Attributes:
        visible (bool): Whether the tooltip is displayed.
        content (str): Text of the last record shown.
        record (WeatherRecord): The record currently shown, if any.
    """

    def __init__(self):
        self.visible = False
        self.content = ''
        self.record: Optional[WeatherRecord] = None

    def show(self, record: Optional[WeatherRecord]) -> None:
        self.record = record
        self.content = format_tooltip(record)
        self.visible = True

    def hide(self) -> None:
        self.visible = False


def apply_actions(actions: Sequence[Action], attrs: Dict[str, Any],
                  record: Optional[WeatherRecord], tooltip: Tooltip,
                  transition: Optional[Callable[[SetAttr], None]] = None) -> None:
    """
    Execute hover actions against a drawn shape's attributes.

    A ``SetAttr`` with a duration is handed to ``transition`` when the caller
    runs timed changes; otherwise the new value is applied at once.
    """
    for action in actions:
        if isinstance(action, ShowTooltip):
            tooltip.show(record)
        elif isinstance(action, HideTooltip):
            tooltip.hide()
        elif isinstance(action, SetAttr):
            if action.duration_ms > 0 and transition is not None:
                transition(action)
            else:
                attrs[action.name] = action.value
        else:
            raise TypeError(f"Unsupported hover action: {action!r}")


def build_legend(records: Sequence[WeatherRecord],
                 color_scale: Optional[OrdinalColorScale] = None,
                 origin: Tuple[float, float] = LEGEND_ORIGIN) -> Tuple[List[Shape], List[Text]]:
    """
    One swatch + date label row per record, stacked vertically.

    Row ``i`` sits ``i * LEGEND_ROW_HEIGHT`` below ``origin``; the swatch
    color matches slice ``i`` of the pie.

    Returns:
        (swatch shapes, label texts)
    """
    color_scale = color_scale or OrdinalColorScale()
    ox, oy = origin
    swatches, labels = [], []
    for i, record in enumerate(records):
        row_y = oy + i * LEGEND_ROW_HEIGHT
        swatches.append(Shape(
            kind='rect',
            attrs={
                'x': ox,
                'y': row_y,
                'width': LEGEND_SWATCH_SIZE,
                'height': LEGEND_SWATCH_SIZE,
                'fill': color_scale(i),
            },
            record=record,
            css_class='legend',
            role='legend',
        ))
        labels.append(Text(
            x=ox + LEGEND_TEXT_OFFSET,
            y=row_y + LEGEND_SWATCH_SIZE,
            text=record.date,
            anchor='start',
            fill=LEGEND_TEXT_COLOR,
            dy='0.3em',
            role='legend',
        ))
    return swatches, labels
