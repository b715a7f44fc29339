from __future__ import annotations

import json
from typing import Any, Iterable, Iterator

from shapely.geometry import MultiPoint

from leaflet_notebook.layers.types import (
    Coord,
    Geometry,
    Line,
    Points,
    Polygon,
    parse_geometry,
    to_coord,
)


# Descriptors are [lat, lon]; GeoJSON positions are [lon, lat].
def transpose_coord(pair: Any) -> tuple[float, float]:
    lat, lon = to_coord(pair)
    return (lon, lat)


def _positions(coords: Iterable[Coord]) -> list[list[float]]:
    return [list(transpose_coord(c)) for c in coords]


def multipoint_feature(coords: Iterable[Coord]) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "MultiPoint", "coordinates": _positions(coords)},
    }


def linestring_feature(coords: Iterable[Coord]) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": _positions(coords)},
    }


def polygon_feature(rings: Iterable[Iterable[Coord]]) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {
            "type": "Polygon",
            "coordinates": [_positions(ring) for ring in rings],
        },
    }


def geojson_feature(descriptor: Any) -> dict[str, Any]:
    geom: Geometry = parse_geometry(descriptor)
    if isinstance(geom, Points):
        return multipoint_feature(geom.coords)
    if isinstance(geom, Line):
        return linestring_feature(geom.coords)
    if isinstance(geom, Polygon):
        return polygon_feature(geom.rings)
    raise TypeError(f"Unhandled geometry variant: {type(geom).__name__}")


def geojson_features(geometries: Iterable[Any]) -> dict[str, Any]:
    return {"features": [geojson_feature(g) for g in geometries]}


def dumps_compact(value: Any, *, ensure_ascii: bool = True) -> str:
    return json.dumps(
        value, separators=(",", ":"), allow_nan=False, ensure_ascii=ensure_ascii
    )


def geojson(geometries: Iterable[Any]) -> str:
    return dumps_compact(geojson_features(geometries))


def _iter_positions(coordinates: Any) -> Iterator[tuple[float, float]]:
    # Walk nested coordinate arrays down to [lon, lat] positions.
    if coordinates and not isinstance(coordinates[0], (list, tuple)):
        yield (coordinates[0], coordinates[1])
        return
    for c in coordinates:
        yield from _iter_positions(c)


def features_bounds(
    features: Iterable[dict[str, Any]],
) -> tuple[tuple[float, float], tuple[float, float]] | None:
    """
    Bounding box of all feature positions as `((south, west), (north, east))`.

    This is the corner order Leaflet's `fitBounds` expects. Returns None when there is
    nothing to fit (no features, or only empty coordinate lists).
    """
    positions = [
        p
        for f in features
        for p in _iter_positions(f["geometry"]["coordinates"])
    ]
    if not positions:
        return None
    min_lon, min_lat, max_lon, max_lat = MultiPoint(positions).bounds
    return ((min_lat, min_lon), (max_lat, max_lon))
