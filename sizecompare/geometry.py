"""
Boundary geometry types and the scale/translate transform.

Geometries carry their own kind ("Polygon" or "MultiPolygon") so nothing has
to guess the shape from how deeply the coordinate lists are nested.

The transform works in plain degree space (equirectangular): offsets from the
source center are multiplied by the scale factor and added to the target
center. It is not geodesically correct; distortion grows with latitude and
with the size of the shape.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, NamedTuple, Optional, Tuple, Union

from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon

from .errors import GeometryError


class LonLat(NamedTuple):
    lon: float
    lat: float


Ring = Tuple[Tuple[float, float], ...]


@dataclass(frozen=True)
class Polygon:
    rings: Tuple[Ring, ...]
    kind: str = "Polygon"


@dataclass(frozen=True)
class MultiPolygon:
    polygons: Tuple[Polygon, ...]
    kind: str = "MultiPolygon"


Geometry = Union[Polygon, MultiPolygon]

GEOMETRY_KINDS = ("Polygon", "MultiPolygon")


# =========================
# GeoJSON conversion
# =========================
def _ring_from_coords(coords) -> Ring:
    # Only X and Y are kept even if Z exists
    return tuple((float(c[0]), float(c[1])) for c in coords)


def _polygon_from_coords(coords) -> Polygon:
    return Polygon(rings=tuple(_ring_from_coords(r) for r in coords))


def from_geojson(mapping: Dict[str, Any]) -> Geometry:
    if not isinstance(mapping, dict):
        raise GeometryError(f"Geometry must be a mapping, got {type(mapping).__name__}.")
    kind = mapping.get("type")
    coords = mapping.get("coordinates")
    if kind not in GEOMETRY_KINDS:
        raise GeometryError(f"Unsupported geometry type: {kind!r}.")
    if not isinstance(coords, (list, tuple)):
        raise GeometryError(f"{kind} has no coordinate array.")
    try:
        if kind == "Polygon":
            return _polygon_from_coords(coords)
        return MultiPolygon(polygons=tuple(_polygon_from_coords(p) for p in coords))
    except (TypeError, ValueError, IndexError) as e:
        raise GeometryError(f"Malformed {kind} coordinates: {e}") from e


def _polygon_coords(polygon: Polygon) -> list:
    return [[[lon, lat] for lon, lat in ring] for ring in polygon.rings]


def to_geojson(geometry: Geometry) -> Dict[str, Any]:
    if geometry.kind == "Polygon":
        return {"type": "Polygon", "coordinates": _polygon_coords(geometry)}
    return {
        "type": "MultiPolygon",
        "coordinates": [_polygon_coords(p) for p in geometry.polygons],
    }


def _to_shapely_polygon(polygon: Polygon) -> Optional[ShapelyPolygon]:
    rings = [r for r in polygon.rings if r]
    if not rings:
        return None
    return ShapelyPolygon(rings[0], rings[1:])


def to_shapely(geometry: Geometry):
    """Shapely version of the geometry, for geopandas/folium rendering. Empty rings are dropped."""
    if geometry.kind == "Polygon":
        return _to_shapely_polygon(geometry) or ShapelyPolygon()
    parts = [p for p in (_to_shapely_polygon(p) for p in geometry.polygons) if p is not None]
    return ShapelyMultiPolygon(parts)


# =========================
# Inspection helpers
# =========================
def polygons(geometry: Geometry) -> Tuple[Polygon, ...]:
    if geometry.kind == "Polygon":
        return (geometry,)
    return geometry.polygons


def iter_points(geometry: Geometry) -> Iterator[Tuple[float, float]]:
    for polygon in polygons(geometry):
        for ring in polygon.rings:
            yield from ring


def ring_count(geometry: Geometry) -> int:
    return sum(len(p.rings) for p in polygons(geometry))


def point_count(geometry: Geometry) -> int:
    return sum(len(r) for p in polygons(geometry) for r in p.rings)


def bounds(geometry: Geometry) -> Optional[Tuple[float, float, float, float]]:
    """(min_lon, min_lat, max_lon, max_lat), or None when there is no coordinate at all."""
    points = list(iter_points(geometry))
    if not points:
        return None
    lons = [p[0] for p in points]
    lats = [p[1] for p in points]
    return (min(lons), min(lats), max(lons), max(lats))


def bbox_center(geometry: Geometry) -> Optional[LonLat]:
    # Midpoint of the bounding box, not the area centroid.
    box = bounds(geometry)
    if box is None:
        return None
    min_lon, min_lat, max_lon, max_lat = box
    return LonLat((min_lon + max_lon) / 2.0, (min_lat + max_lat) / 2.0)


# =========================
# Scale & translate
# =========================
def _transform_ring(ring: Ring, scale: float, source: LonLat, target: LonLat) -> Ring:
    return tuple(
        (target.lon + (lon - source.lon) * scale, target.lat + (lat - source.lat) * scale)
        for lon, lat in ring
    )


def _transform_polygon(polygon: Polygon, scale: float, source: LonLat, target: LonLat) -> Polygon:
    return Polygon(rings=tuple(_transform_ring(r, scale, source, target) for r in polygon.rings))


def transform(geometry: Geometry,
              scale_factor: float,
              source_center: Tuple[float, float],
              target_center: Tuple[float, float]) -> Geometry:
    """
    Rescale a geometry around source_center and move it onto target_center.

    Returns a new geometry of the same kind with the same ring and point counts.
    A zero scale collapses every point onto target_center and a negative scale
    mirrors the shape through it; neither is an error.
    """
    source = LonLat(*source_center)
    target = LonLat(*target_center)
    scale = float(scale_factor)
    if geometry.kind == "Polygon":
        return _transform_polygon(geometry, scale, source, target)
    if geometry.kind == "MultiPolygon":
        return MultiPolygon(
            polygons=tuple(_transform_polygon(p, scale, source, target) for p in geometry.polygons)
        )
    raise GeometryError(f"Unsupported geometry kind: {geometry.kind!r}.")
