from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from leaflet_notebook.config import configured_defaults
from leaflet_notebook.errors import UnknownOptionValueError


DEFAULT_OPTIONS: dict[str, Any] = {
    "width": 400,
    "height": 400,
    "leaflet-js-url": "https://unpkg.com/leaflet@1.9.4/dist/leaflet.js",
    "leaflet-css-url": "https://unpkg.com/leaflet@1.9.4/dist/leaflet.css",
    "tile-layer-url": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
    "color": "steelblue",
    "opacity": 1.0,
}

RECOGNIZED_OPTIONS = frozenset([*DEFAULT_OPTIONS, "view"])

# Shared across every map on a page; the loader script guards on these ids.
LEAFLET_JS_TAG_ID = "leaflet-js"
LEAFLET_CSS_TAG_ID = "leaflet-css"


class MapView(BaseModel):
    lat: float
    lon: float
    zoom: float = Field(ge=0.0, le=24.0)

    def set_view_args(self) -> list[Any]:
        # Arguments for Leaflet's `map.setView(center, zoom)`.
        return [[self.lat, self.lon], self.zoom]


class MapOptions(BaseModel):
    """
    Recognized view options, after defaults are merged.

    Field aliases are the hyphenated option names used by callers and YAML files.
    Anything unrecognized is kept as an extra and otherwise ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    leaflet_js_url: str = Field(alias="leaflet-js-url", min_length=1)
    leaflet_css_url: str = Field(alias="leaflet-css-url", min_length=1)
    tile_layer_url: str = Field(alias="tile-layer-url", min_length=1)
    color: str = Field(min_length=1)
    opacity: float = Field(ge=0.0, le=1.0)
    view: MapView | None = None

    @field_validator("view", mode="before")
    @classmethod
    def _coerce_view(cls, v: Any) -> Any:
        # Accept [lat, lon, zoom] and Leaflet's own [[lat, lon], zoom].
        if v is None or isinstance(v, (dict, MapView)):
            return v
        if isinstance(v, (list, tuple)):
            if len(v) == 3:
                return {"lat": v[0], "lon": v[1], "zoom": v[2]}
            if len(v) == 2 and isinstance(v[0], (list, tuple)) and len(v[0]) == 2:
                return {"lat": v[0][0], "lon": v[0][1], "zoom": v[1]}
        raise ValueError("view must be [lat, lon, zoom] or [[lat, lon], zoom]")


def merge_options(opts: Mapping[str, Any]) -> dict[str, Any]:
    """Built-in defaults, then the configured YAML defaults, then the view's own options."""
    return {**DEFAULT_OPTIONS, **configured_defaults(), **dict(opts)}


def resolve_options(opts: Mapping[str, Any]) -> MapOptions:
    merged = merge_options(opts)
    try:
        return MapOptions.model_validate(merged)
    except ValidationError as e:
        bad = ", ".join(
            f"{'.'.join(str(p) for p in err['loc'])}={err.get('input')!r} ({err['msg']})"
            for err in e.errors()
        )
        raise UnknownOptionValueError(f"Invalid map option value(s): {bad}") from e
