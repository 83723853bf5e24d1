"""
Click/drag disambiguation for a single map region.

Panning the map by dragging across a country must not count as a click on
that country. Each region keeps one RegionInteraction; a gesture only selects
the region when the pointer stayed strictly within the threshold (Euclidean,
screen pixels) between pointer down and pointer up.
"""

import logging
import math
from enum import Enum
from typing import Callable, Optional

from .config import DRAG_THRESHOLD_PX

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    IDLE = "idle"
    POINTER_DOWN = "pointer_down"
    DRAGGING = "dragging"
    CLICK_PENDING = "click_pending"


class PointerEvent:
    """Screen-space pointer event. The host map checks propagation_stopped before handling it."""

    def __init__(self, x: float, y: float):
        self.x = float(x)
        self.y = float(y)
        self.propagation_stopped = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    def __repr__(self) -> str:
        return f"PointerEvent(x={self.x}, y={self.y}, stopped={self.propagation_stopped})"


class RegionInteraction:
    def __init__(self, on_select: Optional[Callable[[], None]] = None,
                 threshold: float = DRAG_THRESHOLD_PX):
        self.on_select = on_select
        self.threshold = float(threshold)
        self.state = InteractionState.IDLE
        self._origin = None

    def pointer_down(self, event: PointerEvent) -> None:
        self.state = InteractionState.POINTER_DOWN
        self._origin = (event.x, event.y)
        # Keep the map from starting its own pan for this gesture
        event.stop_propagation()

    def pointer_move(self, event: PointerEvent) -> None:
        if self.state is not InteractionState.POINTER_DOWN:
            return
        if self._moved(event):
            self.state = InteractionState.DRAGGING

    def _moved(self, event: PointerEvent) -> bool:
        dx = event.x - self._origin[0]
        dy = event.y - self._origin[1]
        return math.hypot(dx, dy) >= self.threshold

    def pointer_up(self, event: PointerEvent) -> bool:
        """Finish the gesture. Returns True when it counted as a selection."""
        state = self.state
        if state is InteractionState.POINTER_DOWN and self._moved(event):
            # Released away from the press point with no move event in between
            state = InteractionState.DRAGGING
        self._origin = None
        if state is InteractionState.DRAGGING:
            self.state = InteractionState.IDLE
            logger.debug("Ignored drag across region")
            return False
        if state is not InteractionState.POINTER_DOWN:
            self.state = InteractionState.IDLE
            return False

        self.state = InteractionState.CLICK_PENDING
        event.stop_propagation()
        try:
            if self.on_select is not None:
                self.on_select()
        finally:
            self.state = InteractionState.IDLE
        return True

    def click(self, x: float = 0.0, y: float = 0.0) -> bool:
        """A pointer down/up pair at the same screen position."""
        self.pointer_down(PointerEvent(x, y))
        return self.pointer_up(PointerEvent(x, y))

    def cancel(self) -> None:
        self.state = InteractionState.IDLE
        self._origin = None
