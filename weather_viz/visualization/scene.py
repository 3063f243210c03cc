"""
Scene descriptors produced by the chart renderers.

A renderer never draws.  It returns a ``Scene``: plain data describing every
shape (geometry, style, hover handlers), every text item, and every
animation.  A drawing surface then performs the actual draw/attach step.

Descriptor types
----------------
``Shape``      -- rect / circle / path / arc / line with an ``attrs`` dict,
                  the record it represents (if any) and hover handlers.
``Text``       -- positioned text (title, axis labels, ticks, value labels).
``Animation``  -- ``{target, property, start, end, duration_ms, on_complete}``;
                  ``target`` indexes ``Scene.shapes`` and ``on_complete``
                  holds text appended once the animation ends.
Hover actions  -- ``ShowTooltip``, ``HideTooltip``, ``SetAttr``, keyed by
                  ``MOUSEOVER`` / ``MOUSEOUT``.

Shapes are created with animated properties at their *start* values; the
settled state is available through ``Scene.settled_attrs``.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple, Union

from ..core.config import CANVAS_WIDTH, CANVAS_HEIGHT
from ..models.data_models import ChartType, WeatherRecord

MOUSEOVER = 'mouseover'
MOUSEOUT = 'mouseout'


# ============================================================================
# HOVER ACTIONS
# ============================================================================

@dataclass(frozen=True)
class ShowTooltip:
    """Populate the shared tooltip with the shape's record and show it."""


@dataclass(frozen=True)
class HideTooltip:
    """Hide the shared tooltip."""


@dataclass(frozen=True)
class SetAttr:
    """Change one attribute of the hovered shape, over ``duration_ms`` if set."""
    name: str
    value: Any
    duration_ms: int = 0


Action = Union[ShowTooltip, HideTooltip, SetAttr]
Handlers = Dict[str, Tuple[Action, ...]]


def tooltip_handlers(on_enter: Tuple[Action, ...] = (),
                     on_leave: Tuple[Action, ...] = ()) -> Handlers:
    """Standard hover wiring: tooltip on enter, hidden on leave."""
    return {
        MOUSEOVER: tuple(on_enter) + (ShowTooltip(),),
        MOUSEOUT: tuple(on_leave) + (HideTooltip(),),
    }


# ============================================================================
# SHAPES & TEXT
# ============================================================================

@dataclass
class Shape:
    """A drawable shape.

    ``role`` is ``data`` for shapes bound to a record, ``axis`` for axis
    lines and ``legend`` for legend swatches.
    """
    kind: str
    attrs: Dict[str, Any]
    record: Optional[WeatherRecord] = None
    handlers: Handlers = field(default_factory=dict)
    css_class: str = ''
    role: str = 'data'


@dataclass(frozen=True)
class Text:
    """A positioned text item (SVG conventions: anchor start/middle/end)."""
    x: float
    y: float
    text: str
    font_size: float = 12
    anchor: str = 'middle'
    fill: Optional[str] = None
    rotate: float = 0.0
    dy: Optional[str] = None
    role: str = 'label'


@dataclass(frozen=True)
class Animation:
    """Timed linear interpolation of one numeric shape property."""
    target: int
    property: str
    start: float
    end: float
    duration_ms: int
    on_complete: Tuple[Text, ...] = ()

    def value_at(self, elapsed_ms: float) -> float:
        if self.duration_ms <= 0:
            return self.end
        t = min(1.0, max(0.0, elapsed_ms / self.duration_ms))
        return self.start + (self.end - self.start) * t


# ============================================================================
# SCENE
# ============================================================================

@dataclass
class Scene:
    """Everything one chart draws on a fresh canvas."""
    chart_type: ChartType
    title: str
    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    shapes: List[Shape] = field(default_factory=list)
    texts: List[Text] = field(default_factory=list)
    animations: List[Animation] = field(default_factory=list)

    def add_shape(self, shape: Shape) -> int:
        """Append a shape and return its index (the animation target)."""
        self.shapes.append(shape)
        return len(self.shapes) - 1

    @property
    def data_shapes(self) -> List[Shape]:
        return [s for s in self.shapes if s.role == 'data']

    @property
    def duration_ms(self) -> int:
        """Time until the last animation ends."""
        return max((a.duration_ms for a in self.animations), default=0)

    def attrs_at(self, index: int, elapsed_ms: float) -> Dict[str, Any]:
        """Attributes of shape ``index`` ``elapsed_ms`` into the animations."""
        attrs = dict(self.shapes[index].attrs)
        for animation in self.animations:
            if animation.target == index:
                attrs[animation.property] = animation.value_at(elapsed_ms)
        return attrs

    def settled_attrs(self, index: int) -> Dict[str, Any]:
        """Attributes of shape ``index`` once every animation has ended."""
        return self.attrs_at(index, float(self.duration_ms))

    def texts_at(self, elapsed_ms: float) -> List[Text]:
        """Static texts plus those appended by animations finished by then."""
        texts = list(self.texts)
        for animation in self.animations:
            if animation.on_complete and elapsed_ms >= animation.duration_ms:
                texts.extend(animation.on_complete)
        return texts

    def settled(self) -> "Scene":
        """Copy of the scene in its final state, with no animations left."""
        shapes = [replace(shape, attrs=self.settled_attrs(i))
                  for i, shape in enumerate(self.shapes)]
        return Scene(
            chart_type=self.chart_type,
            title=self.title,
            width=self.width,
            height=self.height,
            shapes=shapes,
            texts=self.texts_at(float(self.duration_ms)),
        )
