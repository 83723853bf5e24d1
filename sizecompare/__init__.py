"""Compare any country's size against a reference country on a world map."""

from .comparison import ComparisonHistory, ComparisonOrchestrator, ComparisonResult, format_ratio
from .errors import GeometryError, LoadError, SizeCompareError
from .geometry import LonLat, MultiPolygon, Polygon, bbox_center, transform
from .interaction import InteractionState, PointerEvent, RegionInteraction
from .registry import BoundaryRegistry, Region, region_style, resolve_name

__all__ = [
    "BoundaryRegistry",
    "ComparisonHistory",
    "ComparisonOrchestrator",
    "ComparisonResult",
    "GeometryError",
    "InteractionState",
    "LoadError",
    "LonLat",
    "MultiPolygon",
    "PointerEvent",
    "Polygon",
    "Region",
    "RegionInteraction",
    "SizeCompareError",
    "bbox_center",
    "format_ratio",
    "region_style",
    "resolve_name",
    "transform",
]
