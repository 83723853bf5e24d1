import logging
import math
import time
from dataclasses import dataclass
from typing import List, Optional

from .config import HISTORY_LIMIT
from .geometry import Geometry, bbox_center, transform
from .registry import BoundaryRegistry

logger = logging.getLogger(__name__)

STATUS_COMPARED = "compared"
STATUS_NO_DATA = "no_data"
STATUS_RESET = "reset"
STATUS_ERROR = "error"

STATE_NO_SELECTION = "NoSelection"
STATE_SELECTED = "Selected"


@dataclass(frozen=True)
class ComparisonResult:
    message: str
    status: str
    overlay_geometry: Optional[Geometry] = None
    highlighted_country: Optional[str] = None
    ratio: Optional[float] = None
    scale_factor: Optional[float] = None


@dataclass(frozen=True)
class HistoryEntry:
    country: str
    detail: str
    timestamp: float


# =========================
# Messages
# =========================
def prompt_message(reference: str) -> str:
    return f"Click any country to compare its size with {reference}"


def format_ratio(reference: str, name: str, ratio: float) -> str:
    if ratio > 1:
        return f"{reference} is {ratio:.1f} times bigger than {name}"
    return f"{reference} is {1 / ratio:.1f} times smaller than {name}"


def no_data_message(name: Optional[str]) -> str:
    return f"No area data available for {name or 'this country'}"


def error_message(name: Optional[str]) -> str:
    return f"Error comparing with {name or 'this country'}"


def _usable_area(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


# =========================
# History
# =========================
class ComparisonHistory:
    """Most recent comparisons first, one entry per country."""

    def __init__(self, limit: int = HISTORY_LIMIT):
        self.limit = limit
        self._entries: List[HistoryEntry] = []

    def record(self, country: str, detail: str, timestamp: Optional[float] = None) -> None:
        entry = HistoryEntry(country, detail, time.time() if timestamp is None else timestamp)
        kept = [e for e in self._entries if e.country != country]
        self._entries = [entry] + kept[: max(self.limit - 1, 0)]

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


# =========================
# Orchestrator
# =========================
class ComparisonOrchestrator:
    """
    Owns the single overlay and the selection state.

    The UI shell keeps this object and calls select_country() / reset() on it
    directly; every selectable region's RegionInteraction is wired to
    select_country() by bind_interactions().
    """

    def __init__(self, registry: BoundaryRegistry, history: Optional[ComparisonHistory] = None):
        self.registry = registry
        self.history = history if history is not None else ComparisonHistory()
        self.overlay: Optional[Geometry] = None
        self.selected: Optional[str] = None
        self.message = prompt_message(registry.reference)
        self.bind_interactions()

    @property
    def reference(self) -> str:
        return self.registry.reference

    @property
    def state(self) -> str:
        return STATE_SELECTED if self.selected is not None else STATE_NO_SELECTION

    def bind_interactions(self) -> None:
        for region in self.registry.regions:
            if region.interaction is not None:
                region.interaction.on_select = self._selector(region.name)

    def _selector(self, name: str):
        def select() -> None:
            self.select_country(name)
        return select

    def reset(self) -> ComparisonResult:
        self.overlay = None
        self.selected = None
        self.registry.reset_styles()
        self.message = prompt_message(self.reference)
        return ComparisonResult(message=self.message, status=STATUS_RESET)

    def select_country(self, name: str) -> ComparisonResult:
        if name == self.reference:
            return self.reset()

        try:
            result = self._compare(name)
        except Exception:
            logger.exception("Comparison with %r failed", name)
            result = ComparisonResult(message=error_message(name), status=STATUS_ERROR)

        self.overlay = result.overlay_geometry
        self.selected = name
        self.registry.highlight(name)
        self.message = result.message
        if result.status != STATUS_ERROR:
            self.history.record(name, result.message)
        return result

    def _compare(self, name: str) -> ComparisonResult:
        reference_area = _usable_area(self.registry.area(self.reference))
        other_area = _usable_area(self.registry.area(name))
        logger.debug("Areas - %s: %s, %s: %s", self.reference, reference_area, name, other_area)

        if reference_area is None or other_area is None:
            logger.warning("Missing area data for comparison with %r", name)
            return ComparisonResult(message=no_data_message(name), status=STATUS_NO_DATA,
                                    highlighted_country=name)

        ratio = reference_area / other_area
        scale_factor = math.sqrt(other_area / reference_area)
        overlay = self._scaled_reference(name, scale_factor)

        return ComparisonResult(
            message=format_ratio(self.reference, name, ratio),
            status=STATUS_COMPARED,
            overlay_geometry=overlay,
            highlighted_country=name,
            ratio=ratio,
            scale_factor=scale_factor,
        )

    def _scaled_reference(self, name: str, scale_factor: float) -> Optional[Geometry]:
        reference_geometry = self.registry.geometry(self.reference)
        target_geometry = self.registry.geometry(name)
        if reference_geometry is None or target_geometry is None:
            logger.warning("No boundary geometry for %r, overlay skipped",
                           self.reference if reference_geometry is None else name)
            return None

        source_center = bbox_center(reference_geometry)
        target_center = bbox_center(target_geometry)
        if source_center is None or target_center is None:
            logger.warning("Empty boundary geometry, overlay skipped for %r", name)
            return None

        logger.debug("Scale factor %.4f, %s center %s, %s center %s",
                     scale_factor, self.reference, source_center, name, target_center)
        return transform(reference_geometry, scale_factor, source_center, target_center)
