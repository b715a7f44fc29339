from .template import Rendered, render_page, render_view

__all__ = ["Rendered", "render_page", "render_view"]
