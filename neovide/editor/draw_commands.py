"""Draw commands produced by the editor and the batcher that ships them."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..bridge.events import EditorMode
from ..event_aggregator import EVENT_AGGREGATOR, EventAggregator
from .cursor import Cursor
from .style import Style

# Event key under which batches (lists) of draw commands are sent.
DRAW_COMMAND_BATCH = "draw_command_batch"


class WindowDrawCommand:
    """Base of commands addressed to one window."""

    __slots__ = ()


class DrawCommand:
    """Base of commands sent to the renderer."""

    __slots__ = ()


@dataclass
class LineFragment:
    """A run of cells in one row sharing a style."""

    text: str
    window_left: int
    window_top: int
    width: int
    style: Style | None = None


@dataclass
class DrawPosition(WindowDrawCommand):
    grid_position: tuple[float, float]
    grid_size: tuple[int, int]
    floating_order: int | None = None


@dataclass
class DrawLine(WindowDrawCommand):
    fragments: list[LineFragment] = field(default_factory=list)


@dataclass
class DrawScroll(WindowDrawCommand):
    top: int
    bottom: int
    left: int
    right: int
    rows: int
    cols: int


@dataclass
class DrawClear(WindowDrawCommand):
    pass


@dataclass
class DrawHide(WindowDrawCommand):
    pass


@dataclass
class DrawShow(WindowDrawCommand):
    pass


@dataclass
class DrawClose(WindowDrawCommand):
    pass


@dataclass
class DrawViewport(WindowDrawCommand):
    scroll_delta: float


@dataclass
class WindowDraw(DrawCommand):
    grid_id: int
    command: WindowDrawCommand


@dataclass
class CloseWindow(DrawCommand):
    grid_id: int


@dataclass
class UpdateCursor(DrawCommand):
    cursor: Cursor


@dataclass
class FontChanged(DrawCommand):
    font: str


@dataclass
class LineSpaceChanged(DrawCommand):
    linespace: int


@dataclass
class DefaultStyleChanged(DrawCommand):
    style: Style


@dataclass
class ModeChanged(DrawCommand):
    mode: EditorMode


class DrawCommandBatcher:
    """Collects draw commands and sends them on as one batch."""

    def __init__(self, aggregator: EventAggregator | None = None) -> None:
        self._aggregator = EVENT_AGGREGATOR if aggregator is None else aggregator
        self._lock = threading.Lock()
        self._pending: list[DrawCommand] = []

    def queue(self, draw_command: DrawCommand) -> None:
        with self._lock:
            self._pending.append(draw_command)

    def send_batch(self) -> None:
        """Send everything queued so far, possibly nothing, as one list."""
        with self._lock:
            batch, self._pending = self._pending, []
        self._aggregator.send(batch, DRAW_COMMAND_BATCH)