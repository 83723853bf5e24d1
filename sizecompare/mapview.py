import logging
from typing import Any, Dict, Optional

import folium
import geopandas as gpd

from .config import MAP_CENTER, MAP_MAX_ZOOM, MAP_MIN_ZOOM, MAP_ZOOM
from .geometry import Geometry, to_geojson, to_shapely
from .registry import BoundaryRegistry, region_style

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"
OVERLAY_STYLE = {"fillColor": "#ff0000", "fillOpacity": 0.7, "color": "#ff0000", "weight": 4, "opacity": 1.0}


def regions_to_gdf(registry: BoundaryRegistry) -> gpd.GeoDataFrame:
    rows = []
    geoms = []
    for region in registry.all_regions:
        rows.append({
            "name": region.name or UNKNOWN_LABEL,
            "role": "region",
            "selectable": region.selectable,
            "is_reference": region.is_reference,
            "hovered": region.hovered,
            "highlighted": region.highlighted,
        })
        geoms.append(to_shapely(region.geometry))
    return gpd.GeoDataFrame(rows, geometry=gpd.GeoSeries(geoms, crs="EPSG:4326"))


def feature_style(feature: Dict[str, Any]) -> Dict[str, Any]:
    """Leaflet style for an exported region feature, from its reference/hovered/highlighted flags."""
    props = feature.get("properties") or {}
    return region_style(
        bool(props.get("is_reference")), bool(props.get("hovered")), bool(props.get("highlighted"))
    ).to_leaflet()


def _hover_style(feature: Dict[str, Any]) -> Dict[str, Any]:
    props = feature.get("properties") or {}
    return region_style(bool(props.get("is_reference")), True, bool(props.get("highlighted"))).to_leaflet()


def overlay_feature(geometry: Geometry, reference: str) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "properties": {"name": reference, "role": "overlay"},
        "geometry": to_geojson(geometry),
    }


def build_map(registry: Optional[BoundaryRegistry] = None,
              overlay: Optional[Geometry] = None,
              center_latlon=MAP_CENTER,
              zoom: int = MAP_ZOOM) -> folium.Map:
    """Base tile map, country regions when loaded, and the scaled reference overlay on top."""
    m = folium.Map(
        location=list(center_latlon),
        zoom_start=zoom,
        min_zoom=MAP_MIN_ZOOM,
        max_zoom=MAP_MAX_ZOOM,
        control_scale=True,
    )

    if registry is not None and registry.all_regions:
        gdf = regions_to_gdf(registry)
        logger.debug("Rendering %d regions", len(gdf))
        folium.GeoJson(
            gdf.to_json(),
            name="Countries",
            style_function=feature_style,
            highlight_function=_hover_style,
            tooltip=folium.GeoJsonTooltip(fields=["name"], labels=False),
        ).add_to(m)

    if overlay is not None and registry is not None:
        folium.GeoJson(
            overlay_feature(overlay, registry.reference),
            name=f"{registry.reference} (scaled)",
            style_function=lambda feat: dict(OVERLAY_STYLE),
        ).add_to(m)

    return m


def clicked_region_name(feature: Optional[Dict[str, Any]]) -> Optional[str]:
    """Region name from a clicked map feature; None for the overlay, unnamed regions or no feature."""
    if not isinstance(feature, dict):
        return None
    props = feature.get("properties") or {}
    if props.get("role") != "region" or not props.get("selectable"):
        return None
    name = props.get("name")
    return name if isinstance(name, str) and name else None
