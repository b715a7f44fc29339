from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from leaflet_notebook.errors import LeafletNotebookError
from leaflet_notebook.render.template import render_page
from leaflet_notebook.view.types import LeafletView

logger = logging.getLogger(__name__)

app = FastAPI(title="leaflet-notebook preview")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8888"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RenderRequest(BaseModel):
    # Same descriptor shapes as `leaflet(...)`: ["points", coords], ["line", coords], ...
    geometries: list[Any] = Field(default_factory=list)
    # Hyphenated option names, e.g. {"tile-layer-url": "...", "color": "red"}.
    options: dict[str, Any] = Field(default_factory=dict)
    title: str = "Map"


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/render", response_class=HTMLResponse)
def render(body: RenderRequest) -> HTMLResponse:
    view = LeafletView(geometries=tuple(body.geometries), opts=body.options)
    try:
        page = render_page(view, title=body.title)
    except LeafletNotebookError as e:
        logger.info("Rejected render request: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e
    return HTMLResponse(content=page)
