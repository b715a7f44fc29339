from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from leaflet_notebook.layers.types import snapshot_descriptor
from leaflet_notebook.view.parse import option_name, parse_args

if TYPE_CHECKING:
    from leaflet_notebook.render.template import Rendered


@dataclass(frozen=True)
class LeafletView:
    """
    Geometry descriptors plus view options, as passed to `leaflet(...)`.

    Descriptors and options are copied on construction, so later changes to the
    caller's lists don't show up in renders. Descriptors are only validated when
    rendered.
    """

    geometries: tuple[Any, ...]
    opts: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "geometries", tuple(snapshot_descriptor(g) for g in self.geometries)
        )
        object.__setattr__(
            self, "opts", MappingProxyType(copy.deepcopy(dict(self.opts)))
        )

    def __repr__(self) -> str:
        return f"LeafletView(geometries={list(self.geometries)!r}, opts={dict(self.opts)!r})"

    def render(self, *, map_id: str | None = None) -> "Rendered":
        from leaflet_notebook.render.template import render_view

        return render_view(self, map_id=map_id)

    def save(self, path: str | Path, *, title: str = "Map") -> Path:
        """Write a standalone HTML page for this view."""
        from leaflet_notebook.render.template import render_page

        p = Path(path)
        p.write_text(render_page(self, title=title), encoding="utf-8")
        return p

    # Notebook display hooks.
    def _repr_html_(self) -> str:
        return self.render().content

    def _repr_mimebundle_(self, include=None, exclude=None) -> dict[str, str]:
        rendered = self.render()
        return {"text/html": rendered.content, "text/plain": rendered.value}


def leaflet(*args: Any, **kwargs: Any) -> LeafletView:
    """
    Build a map view from geometry descriptors and options.

        leaflet([[37.77, -122.42], [48.85, 2.35]])
        leaflet(["line", path], ["polygon", [ring]], ":color", "red", ":opacity", 0.5)
        leaflet(points, color="red", tile_layer_url="https://...")

    Keyword arguments are applied after positional option markers.
    """
    geometries, opts = parse_args(args)
    for key, value in kwargs.items():
        opts[option_name(key)] = value
    return LeafletView(geometries=tuple(geometries), opts=opts)
