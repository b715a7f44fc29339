"""
Interactive Leaflet maps for notebook cell output.

    from leaflet_notebook import leaflet

    leaflet([[37.77, -122.42], [48.85, 2.35]], ":color", "red")
"""
import logging

from leaflet_notebook.errors import (
    InvalidGeometryError,
    LeafletNotebookError,
    MissingOptionValueError,
    UnknownOptionValueError,
)
from leaflet_notebook.layers.geojson import (
    geojson,
    geojson_feature,
    geojson_features,
    linestring_feature,
    multipoint_feature,
    polygon_feature,
    transpose_coord,
)
from leaflet_notebook.layers.types import Line, Points, Polygon
from leaflet_notebook.render.template import Rendered, render_page, render_view
from leaflet_notebook.view.options import DEFAULT_OPTIONS
from leaflet_notebook.view.parse import Option, opt
from leaflet_notebook.view.types import LeafletView, leaflet

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_OPTIONS",
    "InvalidGeometryError",
    "LeafletNotebookError",
    "LeafletView",
    "Line",
    "MissingOptionValueError",
    "Option",
    "Points",
    "Polygon",
    "Rendered",
    "UnknownOptionValueError",
    "geojson",
    "geojson_feature",
    "geojson_features",
    "leaflet",
    "linestring_feature",
    "multipoint_feature",
    "opt",
    "polygon_feature",
    "render_page",
    "render_view",
    "transpose_coord",
]
