"""
Response renderer for server-rendered pages.

Every page receives the same envelope: the handler's `data` and
`gridprop` payloads, a JSON string mirror of each for client-side
templates, the resolved user, the navigation menu, the layout name and
the global front-end settings (also mirrored as JSON).
"""

import json
from pathlib import Path
from typing import Any, Dict

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def to_json(value: Any) -> str:
    return json.dumps(jsonable_encoder(value), ensure_ascii=False)


def render_params(request: Request, data: Any = None, gridprop: Any = None, layout: str = "mainLayout") -> Dict[str, Any]:
    settings = request.app.state.settings
    rendered: Dict[str, Any] = {}
    if data is not None:
        rendered["data"] = data
        rendered["JSONdata"] = to_json(data)
    if gridprop is not None:
        rendered["gridprop"] = gridprop
        rendered["JSONgridprop"] = to_json(gridprop)
    rendered["user"] = getattr(request.state, "user", None) or {}
    rendered["menuData"] = getattr(request.state, "menu_data", None) or {}
    rendered["layout"] = layout
    front_end = settings.front_end_params("FE")
    rendered["settings"] = front_end
    rendered["JSONsettings"] = to_json(front_end)
    return rendered


def render(request: Request, view: str, data: Any = None, gridprop: Any = None,
           layout: str = "mainLayout", status_code: int = 200):
    """Render `<view><EXT>` with the page envelope."""
    context = render_params(request, data, gridprop, layout)
    name = view + request.app.state.settings.EXT
    return templates.TemplateResponse(request, name, context, status_code=status_code)
