"""
Country features: fetching the Natural Earth collection, cleaning it up and
turning each row into an immutable `CountryFeature`.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

import geopandas as gpd
import pandas as pd
import requests
from shapely.geometry.base import BaseGeometry

from globe_quiz import geometry as geo
from globe_quiz.config import (
    EXCLUDED_ISO,
    GEOJSON_URL,
    INVALID_ISO,
    ISO_OVERRIDES,
    REQUEST_TIMEOUT,
)
from globe_quiz.errors import FeatureDataError
from globe_quiz.names import canonical_name

logger = logging.getLogger(__name__)

PROPERTY_COLUMNS = ("ISO_A2", "ADMIN", "NAME_EN", "POP_EST", "CONTINENT", "SUBREGION")
POLYGON_TYPES = ("Polygon", "MultiPolygon")


@dataclass(frozen=True)
class CountryFeature:
    iso: str
    admin: str
    geometry: BaseGeometry
    name_en: Optional[str] = None
    pop_est: Optional[int] = None
    continent: Optional[str] = None
    subregion: Optional[str] = None

    @property
    def name(self):
        return canonical_name(self)

    @property
    def area(self):
        return geo.geometry_area(self.geometry)

    def polygons(self):
        return list(geo.iter_polygons(self.geometry))

    def contains(self, point):
        return geo.point_in_geometry(point, self.geometry)


def is_selectable(feature):
    return bool(feature.iso) and feature.iso != INVALID_ISO and feature.iso not in EXCLUDED_ISO


# ==================== Fetch ====================
def fetch_feature_collection(url=GEOJSON_URL, timeout=REQUEST_TIMEOUT):
    logger.info("Fetching country features from %s", url)
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except requests.RequestException as exc:
        raise FeatureDataError(f"Could not fetch country data: {exc}") from exc
    except ValueError as exc:
        raise FeatureDataError(f"Country data is not valid JSON: {exc}") from exc

    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise FeatureDataError("Country data is not a GeoJSON FeatureCollection")
    if not isinstance(data.get("features"), list):
        raise FeatureDataError("Country data has no feature list")
    return data


# ==================== Cleanup ====================
def _clean_text(value):
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _clean_population(value):
    if value is None or pd.isna(value):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _prepare_frame(raw_features):
    gdf = gpd.GeoDataFrame.from_features(raw_features)
    for column in PROPERTY_COLUMNS:
        if column not in gdf.columns:
            gdf[column] = None

    iso = gdf["ISO_A2"].astype("string").str.strip().str.upper()
    missing = (iso.isna() | (iso == "") | (iso == INVALID_ISO)).fillna(True).astype(bool)

    override = gdf["ADMIN"].map(ISO_OVERRIDES)
    remap = missing & override.notna()
    for admin, code in zip(gdf.loc[remap, "ADMIN"], override[remap]):
        logger.debug("ISO override applied: %s -> %s", admin, code)
    gdf["iso"] = iso.mask(remap, override)
    return gdf


def features_from_collection(collection):
    """Turn a parsed FeatureCollection into the playable feature list."""
    raw_features = collection.get("features") or []
    if not raw_features:
        logger.warning("Feature collection is empty")
        return ()

    gdf = _prepare_frame(raw_features)
    iso = gdf["iso"]

    valid_iso = (iso.notna() & (iso != "") & (iso != INVALID_ISO)).fillna(False).astype(bool)
    excluded = iso.isin(list(EXCLUDED_ISO)).fillna(False).astype(bool)
    valid_geom = gdf.geometry.notna() & gdf.geom_type.isin(POLYGON_TYPES)
    valid_geom &= ~gdf.geometry.is_empty.fillna(True)

    keep = valid_iso & ~excluded & valid_geom
    for admin in gdf.loc[~keep, "ADMIN"]:
        logger.debug("Dropping feature without a playable code or polygon: %s", admin)

    kept = gdf[keep]
    duplicated = kept["iso"].duplicated(keep="first")
    for code in kept.loc[duplicated, "iso"]:
        logger.warning("Duplicate ISO code %s, keeping the first feature", code)
    kept = kept[~duplicated]

    features = tuple(
        CountryFeature(
            iso=str(row.iso),
            admin=_clean_text(row.ADMIN) or "",
            geometry=row.geometry,
            name_en=_clean_text(row.NAME_EN),
            pop_est=_clean_population(row.POP_EST),
            continent=_clean_text(row.CONTINENT),
            subregion=_clean_text(row.SUBREGION),
        )
        for row in kept.itertuples(index=False)
    )
    logger.info("Loaded %d countries (%d rows dropped)", len(features), len(gdf) - len(features))
    return features


def load_features(url=GEOJSON_URL, timeout=REQUEST_TIMEOUT):
    return features_from_collection(fetch_feature_collection(url, timeout))


def index_by_iso(features):
    return MappingProxyType({f.iso: f for f in features})
