import os
from pathlib import Path

# --------------------------
# Config
# --------------------------
ROOT = Path(__file__).resolve().parents[1]

BOUNDARIES_URL = os.getenv(
    "SIZECOMPARE_BOUNDARIES_URL",
    "https://raw.githubusercontent.com/holtzy/D3-graph-gallery/master/DATA/world.geojson",
)
AREAS_PATH = os.getenv("SIZECOMPARE_AREAS_PATH", str(ROOT / "data" / "country_areas.json"))
CACHE_DIR = Path(os.getenv("SIZECOMPARE_CACHE_DIR", str(ROOT / "data" / "cache")))

HTTP_TIMEOUT = float(os.getenv("SIZECOMPARE_HTTP_TIMEOUT", "30"))

REFERENCE_COUNTRY = os.getenv("SIZECOMPARE_REFERENCE", "Indonesia")

# Property keys tried in order when naming a boundary feature.
NAME_KEYS = ("NAME", "name", "NAME_EN", "NAME_LONG")

DRAG_THRESHOLD_PX = float(os.getenv("SIZECOMPARE_DRAG_THRESHOLD_PX", "3"))
HISTORY_LIMIT = int(os.getenv("SIZECOMPARE_HISTORY_LIMIT", "4"))

MAP_CENTER = (-0.7893, 113.9213)
MAP_ZOOM = 3
MAP_MIN_ZOOM = 2
MAP_MAX_ZOOM = 10

REFERENCE_FACTS = [
    ("Total Islands", "17,000+"),
    ("Coastline", "~54,700 km"),
    ("Total Area", "1.9 million km²"),
    ("Population", "276 million+"),
]
