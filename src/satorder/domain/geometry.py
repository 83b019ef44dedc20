"""Area-of-interest parsing for spatial catalog filters.

Stored coverage polygons and user-supplied areas share one reference
system, SRID 4326 (WGS84 longitude/latitude). Inputs that declare another
CRS, or whose coordinates cannot be WGS84 degrees, are rejected rather
than reprojected.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from shapely.errors import ShapelyError
from shapely.geometry import Polygon, mapping, shape
from shapely.validation import explain_validity

from satorder.domain.errors import InvalidGeometry

SRID = 4326

# CRS names that denote plain WGS84 lon/lat.
_WGS84_CRS_NAMES = frozenset(
    {
        "EPSG:4326",
        "urn:ogc:def:crs:EPSG::4326",
        "urn:ogc:def:crs:OGC:1.3:CRS84",
        "urn:ogc:def:crs:OGC::CRS84",
    }
)


@dataclass(frozen=True)
class AreaFilter:
    """A validated polygon to intersect against stored coverage areas."""

    polygon: Polygon

    @property
    def geojson(self) -> str:
        """Canonical GeoJSON text handed to the store's ``ST_Intersects``."""
        return polygon_to_geojson(self.polygon)

    def intersects(self, other: Polygon) -> bool:
        return bool(self.polygon.intersects(other))


def polygon_to_geojson(polygon: Polygon) -> str:
    return json.dumps(mapping(polygon), separators=(",", ":"))


def geojson_to_dict(text: str) -> dict[str, Any]:
    """Decode stored GeoJSON text for a response payload."""
    return json.loads(text)


def parse_area_filter(raw: str) -> AreaFilter:
    """Parse a GeoJSON Polygon string into an :class:`AreaFilter`.

    Raises:
        InvalidGeometry: Not JSON, not a Polygon, wrong CRS, or invalid rings.
    """
    return AreaFilter(polygon=parse_polygon(raw, field="area"))


def parse_polygon(raw: str | Mapping[str, Any], *, field: str = "geometry") -> Polygon:
    """Validate a GeoJSON Polygon (text or decoded mapping) and build it."""
    if isinstance(raw, str):
        try:
            obj = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidGeometry(f"Invalid GeoJSON: {exc.msg}", field=field) from exc
    else:
        obj = raw

    if not isinstance(obj, Mapping):
        raise InvalidGeometry("GeoJSON must be an object", field=field)
    if obj.get("type") != "Polygon":
        raise InvalidGeometry("GeoJSON geometry must be of type 'Polygon'", field=field)

    _check_crs(obj.get("crs"), field=field)
    rings = _check_rings(obj.get("coordinates"), field=field)

    try:
        polygon = shape({"type": "Polygon", "coordinates": rings})
    except (ShapelyError, ValueError, TypeError) as exc:
        raise InvalidGeometry(f"Invalid polygon: {exc}", field=field) from exc

    if polygon.is_empty:
        raise InvalidGeometry("Polygon is empty", field=field)
    if not polygon.is_valid:
        raise InvalidGeometry(f"Invalid polygon: {explain_validity(polygon)}", field=field)
    return polygon


def _check_crs(crs: Any, *, field: str) -> None:
    if crs is None:
        return
    name = None
    if isinstance(crs, Mapping):
        props = crs.get("properties")
        if isinstance(props, Mapping):
            name = props.get("name")
    if name not in _WGS84_CRS_NAMES:
        raise InvalidGeometry(
            f"Unsupported CRS {name!r}; coordinates must be WGS84 (EPSG:{SRID})",
            field=field,
        )


def _check_rings(coordinates: Any, *, field: str) -> list[list[tuple[float, float]]]:
    if not _is_sequence(coordinates) or not coordinates:
        raise InvalidGeometry("Polygon coordinates must be a non-empty array", field=field)

    rings: list[list[tuple[float, float]]] = []
    for ring in coordinates:
        if not _is_sequence(ring) or len(ring) < 4:
            raise InvalidGeometry("Each linear ring needs at least 4 positions", field=field)
        positions = [_check_position(pos, field=field) for pos in ring]
        if positions[0] != positions[-1]:
            raise InvalidGeometry("Linear rings must be closed", field=field)
        rings.append(positions)
    return rings


def _check_position(pos: Any, *, field: str) -> tuple[float, float]:
    if not _is_sequence(pos) or len(pos) < 2:
        raise InvalidGeometry("Positions must be [longitude, latitude] arrays", field=field)
    lon, lat = pos[0], pos[1]
    for value in (lon, lat):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidGeometry("Coordinates must be numbers", field=field)
        if not math.isfinite(value):
            raise InvalidGeometry("Coordinates must be finite", field=field)
    if not (-180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0):
        raise InvalidGeometry(
            f"Coordinate ({lon}, {lat}) is outside WGS84 (EPSG:{SRID}) bounds",
            field=field,
        )
    return float(lon), float(lat)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))
