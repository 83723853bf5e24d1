import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .config import NAME_KEYS, REFERENCE_COUNTRY
from .errors import GeometryError
from .geometry import Geometry, from_geojson
from .interaction import RegionInteraction

logger = logging.getLogger(__name__)


# =========================
# Region styles
# =========================
REFERENCE_FILL = "#ff4444"
DEFAULT_FILL = "#ffffff"
STROKE_COLOR = "#000000"


@dataclass(frozen=True)
class RegionStyle:
    fill_color: str
    fill_opacity: float
    color: str = STROKE_COLOR
    weight: float = 1
    opacity: float = 0.8

    def to_leaflet(self) -> Dict[str, Any]:
        return {
            "fillColor": self.fill_color,
            "fillOpacity": self.fill_opacity,
            "color": self.color,
            "weight": self.weight,
            "opacity": self.opacity,
        }


def region_style(is_reference: bool, is_hovered: bool = False, is_highlighted: bool = False) -> RegionStyle:
    fill = REFERENCE_FILL if is_reference else DEFAULT_FILL
    if is_hovered:
        return RegionStyle(fill_color=fill, fill_opacity=0.6, weight=2)
    if is_highlighted:
        return RegionStyle(fill_color=fill, fill_opacity=0.5, weight=2)
    return RegionStyle(fill_color=fill, fill_opacity=0.7 if is_reference else 0.3)


# =========================
# Records
# =========================
@dataclass(frozen=True)
class Boundary:
    name: Optional[str]
    geometry: Geometry
    properties: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(eq=False)
class Region:
    boundary: Boundary
    is_reference: bool = False
    selectable: bool = True
    hovered: bool = False
    highlighted: bool = False
    interaction: Optional[RegionInteraction] = None

    @property
    def name(self) -> Optional[str]:
        return self.boundary.name

    @property
    def geometry(self) -> Geometry:
        return self.boundary.geometry

    @property
    def style(self) -> RegionStyle:
        return region_style(self.is_reference, self.hovered, self.highlighted)

    def reset_style(self) -> None:
        self.hovered = False
        self.highlighted = False


def resolve_name(properties: Optional[Dict[str, Any]], name_keys: Sequence[str] = NAME_KEYS) -> Optional[str]:
    """First non-empty string found under name_keys, in order."""
    if not isinstance(properties, dict):
        return None
    for key in name_keys:
        value = properties.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


# =========================
# Registry
# =========================
class BoundaryRegistry:
    """
    Country regions keyed by display name, plus the area table.

    Built once after both datasets are loaded and never rebuilt; only the
    per-region visual flags change afterwards.
    """

    def __init__(self, areas: Optional[Dict[str, float]] = None,
                 reference: str = REFERENCE_COUNTRY,
                 name_keys: Sequence[str] = NAME_KEYS):
        self.reference = reference
        self.name_keys = tuple(name_keys)
        self._areas = dict(areas or {})
        self._regions: Dict[str, Region] = {}
        self.unknown: List[Region] = []

    @classmethod
    def build(cls, features: Iterable[Dict[str, Any]],
              areas: Optional[Dict[str, float]] = None,
              reference: str = REFERENCE_COUNTRY,
              name_keys: Sequence[str] = NAME_KEYS) -> "BoundaryRegistry":
        registry = cls(areas=areas, reference=reference, name_keys=name_keys)
        skipped = 0
        for feature in features:
            if not isinstance(feature, dict):
                skipped += 1
                continue
            try:
                geometry = from_geojson(feature.get("geometry"))
            except GeometryError as e:
                logger.warning("Skipping feature without polygon geometry: %s", e)
                skipped += 1
                continue
            properties = feature.get("properties") or {}
            registry.add(Boundary(resolve_name(properties, registry.name_keys), geometry, dict(properties)))

        logger.info("Registered %d regions (%d unnamed, %d skipped)",
                    len(registry), len(registry.unknown), skipped)
        if registry.reference_region is None:
            logger.error("Reference country %r not found in boundary data", reference)
        return registry

    def add(self, boundary: Boundary) -> Region:
        if boundary.name is None:
            logger.warning("Country without name: %s", boundary.properties)
            region = Region(boundary=boundary, selectable=False)
            self.unknown.append(region)
            return region

        existing = self._regions.get(boundary.name)
        if existing is not None:
            logger.warning("Duplicate boundary for %r ignored", boundary.name)
            return existing

        region = Region(
            boundary=boundary,
            is_reference=boundary.name == self.reference,
            interaction=RegionInteraction(),
        )
        self._regions[boundary.name] = region
        return region

    # -- lookups
    def __contains__(self, name: object) -> bool:
        return name in self._regions

    def __len__(self) -> int:
        return len(self._regions)

    def get(self, name: str) -> Optional[Region]:
        return self._regions.get(name)

    def geometry(self, name: str) -> Optional[Geometry]:
        region = self._regions.get(name)
        return region.geometry if region is not None else None

    def area(self, name: str) -> Optional[float]:
        return self._areas.get(name)

    @property
    def names(self) -> List[str]:
        return list(self._regions)

    @property
    def regions(self) -> List[Region]:
        return list(self._regions.values())

    @property
    def all_regions(self) -> List[Region]:
        """Named and unnamed regions, everything that gets rendered."""
        return self.regions + self.unknown

    @property
    def reference_region(self) -> Optional[Region]:
        return self._regions.get(self.reference)

    # -- visual state
    def set_hovered(self, name: str, hovered: bool = True) -> None:
        region = self._regions.get(name)
        if region is not None:
            region.hovered = hovered

    def highlight(self, name: str) -> None:
        self.clear_highlight()
        region = self._regions.get(name)
        if region is not None:
            region.highlighted = True

    def clear_highlight(self) -> None:
        for region in self._regions.values():
            region.highlighted = False

    @property
    def highlighted(self) -> Optional[str]:
        for name, region in self._regions.items():
            if region.highlighted:
                return name
        return None

    def reset_styles(self) -> None:
        for region in self.all_regions:
            region.reset_style()
