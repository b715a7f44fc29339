from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Literal, TypeAlias, Union

from leaflet_notebook.errors import InvalidGeometryError


GeometryKind = Literal["points", "line", "polygon"]

Coord: TypeAlias = tuple[float, float]  # (lat, lon)


@dataclass(frozen=True)
class Points:
    coords: tuple[Coord, ...]

    kind: GeometryKind = "points"


@dataclass(frozen=True)
class Line:
    coords: tuple[Coord, ...]  # ordered path

    kind: GeometryKind = "line"


@dataclass(frozen=True)
class Polygon:
    rings: tuple[tuple[Coord, ...], ...]  # [outer_ring, *holes]

    kind: GeometryKind = "polygon"


Geometry: TypeAlias = Union[Points, Line, Polygon]


def _is_number(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool) and math.isfinite(v)


def _as_list(v: Any) -> list[Any] | None:
    # Any non-string iterable (lists, tuples, generators, numpy arrays) is a list here.
    if isinstance(v, (str, bytes, Mapping)) or not isinstance(v, Iterable):
        return None
    return v if isinstance(v, list) else list(v)


def _plain_number(v: Real) -> int | float:
    # Fraction, numpy scalars etc. become builtins so they serialize as JSON.
    return int(v) if isinstance(v, Integral) else float(v)


def to_coord(raw: Any) -> Coord:
    """Validate a single `[lat, lon]` pair and return it as builtin numbers."""
    pair = _as_list(raw)
    if pair is None or len(pair) != 2:
        raise InvalidGeometryError(
            f"Coordinate must be a [lat, lon] pair, got {raw!r}"
        )
    lat, lon = pair
    if not (_is_number(lat) and _is_number(lon)):
        raise InvalidGeometryError(f"Coordinate values must be numbers, got {raw!r}")
    return (_plain_number(lat), _plain_number(lon))


def to_coords(raw: Any) -> tuple[Coord, ...]:
    coords = _as_list(raw)
    if coords is None:
        raise InvalidGeometryError(f"Expected a list of [lat, lon] pairs, got {raw!r}")
    return tuple(to_coord(p) for p in coords)


def to_rings(raw: Any) -> tuple[tuple[Coord, ...], ...]:
    items = _as_list(raw)
    if items is None:
        raise InvalidGeometryError(f"Expected a list of polygon rings, got {raw!r}")
    rings = []
    for item in items:
        ring = _as_list(item)
        # A bare pair here means the caller forgot one level of nesting.
        if ring is None or (ring and _as_list(ring[0]) is None):
            raise InvalidGeometryError(
                f"Polygon ring must be a list of [lat, lon] pairs, got {item!r}"
            )
        rings.append(to_coords(ring))
    return tuple(rings)


def snapshot_descriptor(raw: Any) -> Any:
    """
    Copy a descriptor into fresh nested lists.

    One-shot iterables are drained once, and later changes to the caller's lists
    don't reach the copy. Variants and scalars are returned as they are.
    """
    if isinstance(raw, (Points, Line, Polygon)):
        return raw
    items = _as_list(raw)
    if items is None:
        return raw
    return [snapshot_descriptor(v) for v in items]


def _tag(v: Any) -> str | None:
    if not isinstance(v, str):
        return None
    return v[1:] if v.startswith(":") else v


def parse_geometry(raw: Any) -> Geometry:
    """
    Turn a caller-supplied descriptor into a geometry variant.

    Accepted shapes:
    - an existing `Points` / `Line` / `Polygon`
    - `["points", coords]`, `["line", coords]`, `["polygon", rings]`
    - a bare coordinate list (no tag), treated as points
    """
    if isinstance(raw, (Points, Line, Polygon)):
        return raw
    items = _as_list(raw)
    if items is None:
        raise InvalidGeometryError(f"Unsupported geometry descriptor: {raw!r}")

    tag = _tag(items[0]) if items else None
    if tag is None:
        # Untagged: a bare coordinate list. No second pass; anything else fails here.
        return Points(coords=to_coords(items))

    if len(items) != 2:
        raise InvalidGeometryError(
            f"Tagged descriptor must be [type, coordinates], got {items!r}"
        )
    payload = items[1]
    if tag == "points":
        return Points(coords=to_coords(payload))
    if tag == "line":
        return Line(coords=to_coords(payload))
    if tag == "polygon":
        return Polygon(rings=to_rings(payload))
    raise InvalidGeometryError(f"Unknown geometry type: {items[0]!r}")
