"""
Fetching and validating the boundary and area datasets.

Every failure surfaces as LoadError so the caller can keep the base map alive
and show the problem instead of crashing.
"""

import hashlib
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import requests

from .config import CACHE_DIR, HTTP_TIMEOUT
from .errors import LoadError

logger = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_json(url: str, timeout: float = HTTP_TIMEOUT) -> Any:
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
        return r.json()
    except requests.RequestException as e:
        raise LoadError(f"Failed to fetch {url}: {e}") from e
    except ValueError as e:
        raise LoadError(f"Response from {url} is not valid JSON: {e}") from e


def _cache_path(url: str, cache_dir: Path) -> Path:
    digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:16]
    return cache_dir / f"{digest}.json"


def _read_json_file(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LoadError(f"Could not read {path}: {e}") from e
    except ValueError as e:
        raise LoadError(f"{path} is not valid JSON: {e}") from e


def load_json_source(source: str, cache_dir: Optional[Path] = CACHE_DIR,
                     timeout: float = HTTP_TIMEOUT) -> Any:
    """Read JSON from a local path or an http(s) URL. URLs are cached on disk when cache_dir is set."""
    if not _is_url(source):
        return _read_json_file(Path(source))

    cache_file = _cache_path(source, Path(cache_dir)) if cache_dir else None
    if cache_file is not None and cache_file.exists():
        logger.info("Using cached copy of %s", source)
        return _read_json_file(cache_file)

    data = fetch_json(source, timeout=timeout)
    if cache_file is not None:
        try:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            cache_file.write_text(json.dumps(data), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not cache %s: %s", source, e)
    return data


# =========================
# Validation
# =========================
def parse_feature_collection(data: Any) -> List[Dict[str, Any]]:
    if data is None:
        raise LoadError("Countries data is empty.")
    if not isinstance(data, dict):
        raise LoadError("Countries data is not a valid object.")
    features = data.get("features")
    if features is None:
        raise LoadError(
            "No features property in countries data. Available keys: " + ", ".join(map(str, data))
        )
    if not isinstance(features, list):
        raise LoadError(f"Features is not an array. Type: {type(features).__name__}")
    if not features:
        raise LoadError("Features array is empty.")
    return features


def parse_area_table(data: Any) -> Dict[str, float]:
    if not isinstance(data, dict):
        raise LoadError("Invalid country areas data format.")
    areas = {}
    for name, value in data.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            logger.warning("Ignoring non-numeric area for %r: %r", name, value)
            continue
        areas[str(name)] = float(value)
    return areas


def load_datasets(boundaries_source: str, areas_source: str,
                  cache_dir: Optional[Path] = CACHE_DIR,
                  timeout: float = HTTP_TIMEOUT) -> Tuple[List[Dict[str, Any]], Dict[str, float]]:
    areas = parse_area_table(load_json_source(areas_source, cache_dir=cache_dir, timeout=timeout))
    logger.info("Country areas loaded: %d", len(areas))

    features = parse_feature_collection(load_json_source(boundaries_source, cache_dir=cache_dir, timeout=timeout))
    logger.info("Countries data loaded: %d features", len(features))
    return features, areas
