from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from jinja2 import Environment, StrictUndefined
from markupsafe import Markup

from leaflet_notebook.layers.geojson import dumps_compact, features_bounds, geojson_features
from leaflet_notebook.view.options import (
    LEAFLET_CSS_TAG_ID,
    LEAFLET_JS_TAG_ID,
    resolve_options,
)

if TYPE_CHECKING:
    from leaflet_notebook.view.types import LeafletView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rendered:
    """What a notebook host needs to show a map: content kind, markup, and an echo of the input."""

    type: Literal["html"]
    content: str
    value: str


def js_literal(value: Any) -> Markup:
    """
    Compact JSON, safe to paste into a <script> body.

    `</` is escaped (as `<\\/`, still valid JSON) so the literal can't close the
    script element, and U+2028/U+2029 as `\\u` escapes for older JS engines. Every
    other character, non-ASCII included, comes through verbatim.
    """
    text = dumps_compact(value, ensure_ascii=False)
    text = text.replace("</", "<\\/")
    text = text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
    return Markup(text)


# The loader state on `window` is shared by every map rendered into the page:
# - leafletJsIsLoading: set once when the first map starts fetching leaflet.js
# - leafletJsLoaded: set once when that fetch completes
# - leafletJsLoadedCallbacks: maps waiting for the fetch, run in order then cleared
# Nothing resets these for the lifetime of the page.
CONTENT_TEMPLATE = """<div>
<div id="{{ map_id }}" style="height: {{ height }}px; width: {{ width }}px;"></div>
<script type="text/javascript">
(function () {
  var mapId = {{ map_id|js }};
  var createMap = function () {
    console.log('Running createMap for ' + mapId);
    var map = L.map(mapId);
    L.tileLayer({{ tile_layer_url|js }}).addTo(map);
    var geoJson = L.geoJson(
      {{ geojson|js }},
      {style: {'color': {{ color|js }}, 'opacity': {{ opacity|js }}}});
    geoJson.addTo(map);
    var view = {{ view|js }};
    var bounds = {{ bounds|js }};
    if (view) {
      map.setView.apply(map, view);
    } else if (bounds) {
      map.fitBounds(bounds);
    } else {
      map.fitWorld();
    }
  };
  if (!document.getElementById({{ css_tag_id|js }})) {
    console.log('Adding css for ' + mapId);
    var link = document.createElement('link');
    link.rel = 'stylesheet';
    link.href = {{ leaflet_css_url|js }};
    link.id = {{ css_tag_id|js }};
    document.head.appendChild(link);
  }
  if (!window.leafletJsLoaded) {
    if (!window.leafletJsIsLoading) {
      console.log('Adding js for ' + mapId);
      window.leafletJsLoadedCallbacks = [createMap];
      window.leafletJsIsLoading = true;
      var script = document.createElement('script');
      script.src = {{ leaflet_js_url|js }};
      script.id = {{ js_tag_id|js }};
      script.onload = function () {
        console.log('js loaded');
        window.leafletJsIsLoading = false;
        window.leafletJsLoaded = true;
        var callbacks = window.leafletJsLoadedCallbacks;
        for (var i = 0; i < callbacks.length; i++) {
          callbacks[i]();
        }
        window.leafletJsLoadedCallbacks = [];
      };
      script.onerror = function () { console.log('failed to load ' + script.src); };
      document.head.appendChild(script);
    } else {
      console.log('Adding callback for ' + mapId);
      window.leafletJsLoadedCallbacks.push(createMap);
    }
  } else {
    console.log('Calling createMap directly for ' + mapId);
    createMap();
  }
})();
</script>
</div>"""

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{{ title }}</title>
</head>
<body>
{{ content }}
</body>
</html>
"""

_env = Environment(autoescape=True, undefined=StrictUndefined)
_env.filters["js"] = js_literal
_content_template = _env.from_string(CONTENT_TEMPLATE)
_page_template = _env.from_string(PAGE_TEMPLATE)


def new_map_id() -> str:
    return str(uuid.uuid4())


def template_values(view: "LeafletView", *, map_id: str) -> dict[str, Any]:
    options = resolve_options(view.opts)
    collection = geojson_features(view.geometries)
    return {
        **(options.model_extra or {}),
        "map_id": map_id,
        "width": options.width,
        "height": options.height,
        "leaflet_js_url": options.leaflet_js_url,
        "leaflet_css_url": options.leaflet_css_url,
        "tile_layer_url": options.tile_layer_url,
        "color": options.color,
        "opacity": options.opacity,
        "view": options.view.set_view_args() if options.view is not None else None,
        "bounds": features_bounds(collection["features"]),
        "geojson": collection,
        "js_tag_id": LEAFLET_JS_TAG_ID,
        "css_tag_id": LEAFLET_CSS_TAG_ID,
    }


def render_view(view: "LeafletView", *, map_id: str | None = None) -> Rendered:
    mid = map_id or new_map_id()
    values = template_values(view, map_id=mid)
    logger.debug(
        "Rendering map %s with %d feature(s)", mid, len(values["geojson"]["features"])
    )
    return Rendered(type="html", content=_content_template.render(values), value=repr(view))


def render_page(view: "LeafletView", *, title: str = "Map") -> str:
    """The map fragment wrapped in a standalone HTML document."""
    fragment = render_view(view).content
    return _page_template.render(title=title, content=Markup(fragment))
