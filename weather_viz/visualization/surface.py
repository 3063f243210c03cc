"""
Drawing surfaces.

A surface is the one place a scene is turned into drawn state.  Renderers
only talk to the capability interface below, so the geometry logic can be
exercised without any UI runtime.

    clear()            -- remove everything drawn (Showing -> Empty)
    draw_shape(shape)  -- draw one shape descriptor and attach its handlers
    draw_text(text)    -- draw one text item
    draw_scene(scene)  -- draw a whole scene and start its animations
                          (Empty -> Showing(scene.chart_type))

``RecordingSurface`` keeps an in-memory scene graph of ``Node`` objects.  It
is used by the tests and by the ``--health-check`` render smoke test, and it
runs animation specs and timed hover changes itself via ``advance`` /
``finish_animations``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..models.data_models import ChartType, WeatherRecord
from .interaction import Tooltip, apply_actions
from .scales import ColorScale
from .scene import Animation, Handlers, Scene, SetAttr, Shape, Text

logger = logging.getLogger(__name__)


class Surface:
    """
    Base drawing surface.

    Subclasses implement ``clear``, ``draw_shape`` and ``draw_text``;
    ``draw_scene`` and the selection state are shared.

    Attributes:
        state (ChartType): ``ChartType.NONE`` while empty, otherwise the
            chart currently drawn.
        tooltip (Tooltip): The single tooltip element of this surface.
    """

    def __init__(self):
        self.state = ChartType.NONE
        self.tooltip = Tooltip()

    def clear(self) -> None:
        raise NotImplementedError

    def draw_shape(self, shape: Shape) -> Any:
        raise NotImplementedError

    def draw_text(self, text: Text) -> Any:
        raise NotImplementedError

    def start_animations(self, scene: Scene, drawn: List[Any]) -> None:
        """Hook for surfaces that run animation specs; ``drawn`` parallels ``scene.shapes``."""

    def draw_scene(self, scene: Scene) -> None:
        if self.state is not ChartType.NONE:
            raise RuntimeError(
                f"Cannot draw {scene.chart_type.value}: surface still shows {self.state.value}"
            )
        self.state = scene.chart_type
        drawn = [self.draw_shape(shape) for shape in scene.shapes]
        for text in scene.texts:
            self.draw_text(text)
        self.start_animations(scene, drawn)


# ============================================================================
# RECORDING SURFACE
# ============================================================================

@dataclass
class Node:
    """One drawn element of the in-memory scene graph."""
    kind: str
    attrs: Dict[str, Any]
    chart_type: ChartType
    record: Optional[WeatherRecord] = None
    handlers: Handlers = field(default_factory=dict)
    css_class: str = ''
    role: str = 'data'


@dataclass
class _Running:
    animation: Animation
    node: Node
    elapsed_ms: float = 0.0


@dataclass
class _Transition:
    """A timed hover change of one node attribute."""
    node: Node
    name: str
    start: Any
    end: Any
    duration_ms: int
    elapsed_ms: float = 0.0

    @property
    def done(self) -> bool:
        return self.elapsed_ms >= self.duration_ms

    def value(self) -> Any:
        if self.done:
            return self.end
        t = max(0.0, self.elapsed_ms / self.duration_ms)
        if _is_hex_color(self.start) and _is_hex_color(self.end):
            return ColorScale((0.0, 1.0), (self.start, self.end))(t)
        if isinstance(self.start, (int, float)) and isinstance(self.end, (int, float)):
            return self.start + (self.end - self.start) * t
        # Anything else switches when the transition ends
        return self.start


def _is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and value.startswith('#')


class RecordingSurface(Surface):
    """
    Headless surface holding drawn nodes in a list.

    Text nodes have kind ``text`` and keep the ``Text`` fields in ``attrs``.
    """

    def __init__(self):
        super().__init__()
        self.nodes: List[Node] = []
        self._running: List[_Running] = []
        self._transitions: List[_Transition] = []

    # ---- capability interface ----

    def clear(self) -> None:
        if self.nodes:
            logger.debug(f"[Surface] Removing {len(self.nodes)} {self.state.value} nodes")
        self.nodes = []
        self._running = []
        self._transitions = []
        self.state = ChartType.NONE
        self.tooltip.hide()

    def draw_shape(self, shape: Shape) -> Node:
        node = Node(
            kind=shape.kind,
            attrs=dict(shape.attrs),
            chart_type=self.state,
            record=shape.record,
            handlers=shape.handlers,
            css_class=shape.css_class,
            role=shape.role,
        )
        self.nodes.append(node)
        return node

    def draw_text(self, text: Text) -> Node:
        node = Node(
            kind='text',
            attrs={
                'x': text.x,
                'y': text.y,
                'text': text.text,
                'font_size': text.font_size,
                'anchor': text.anchor,
                'fill': text.fill,
                'rotate': text.rotate,
                'dy': text.dy,
            },
            chart_type=self.state,
            role=text.role,
        )
        self.nodes.append(node)
        return node

    def start_animations(self, scene: Scene, drawn: List[Node]) -> None:
        self._running = [_Running(a, drawn[a.target]) for a in scene.animations]

    # ---- animation runtime ----

    @property
    def animating(self) -> bool:
        return bool(self._running or self._transitions)

    def advance(self, ms: float) -> None:
        """Move every running animation and hover transition forward by ``ms`` milliseconds."""
        still_running = []
        for running in self._running:
            running.elapsed_ms += ms
            animation = running.animation
            running.node.attrs[animation.property] = animation.value_at(running.elapsed_ms)
            if running.elapsed_ms >= animation.duration_ms:
                for text in animation.on_complete:
                    self.draw_text(text)
            else:
                still_running.append(running)
        self._running = still_running

        for transition in self._transitions:
            transition.elapsed_ms += ms
            transition.node.attrs[transition.name] = transition.value()
        self._transitions = [t for t in self._transitions if not t.done]

    def finish_animations(self) -> None:
        """Run every animation and hover transition to its end value."""
        remaining = max(
            [r.animation.duration_ms - r.elapsed_ms for r in self._running]
            + [t.duration_ms - t.elapsed_ms for t in self._transitions],
            default=0,
        )
        if self.animating:
            self.advance(max(remaining, 0))

    # ---- interaction ----

    def dispatch(self, node: Node, event: str) -> None:
        """Deliver a pointer event (``mouseover`` / ``mouseout``) to a node."""
        apply_actions(node.handlers.get(event, ()), node.attrs, node.record, self.tooltip,
                      transition=lambda action: self._start_transition(node, action))

    def _start_transition(self, node: Node, action: SetAttr) -> None:
        # A new change of the same attribute interrupts the running one
        self._transitions = [t for t in self._transitions
                             if not (t.node is node and t.name == action.name)]
        self._transitions.append(_Transition(
            node=node,
            name=action.name,
            start=node.attrs.get(action.name),
            end=action.value,
            duration_ms=action.duration_ms,
        ))

    # ---- queries ----

    def find(self, kind: Optional[str] = None, role: Optional[str] = None) -> List[Node]:
        return [n for n in self.nodes
                if (kind is None or n.kind == kind) and (role is None or n.role == role)]

    @property
    def data_nodes(self) -> List[Node]:
        return self.find(role='data')

    def texts(self, role: Optional[str] = None) -> List[str]:
        return [n.attrs['text'] for n in self.find(kind='text', role=role)]

    def chart_types(self) -> Tuple[ChartType, ...]:
        """Distinct chart types that own a drawn node."""
        return tuple(dict.fromkeys(n.chart_type for n in self.nodes))
