"""Home page slider resources."""

from fastapi import APIRouter

from mercass.api.procedure_routes import CommandRoute, ViewRoute, register_command_routes, register_view_routes
from mercass.database.core.params import Param, signature

router = APIRouter()

_SLIDER_ID = Param("sliderId", "Id", kind="int", default=0)
_SLIDER_FIELDS = (
    "categoryId", "slayt", "title", "subTitle", "button1Action", "button2Action", "button3Action",
    "isActive", "pageOrder", "autoPassTime",
)

VIEWS = [
    ViewRoute("/api/sliders", "v_allSliders"),
    ViewRoute("/api/activeSliders", "v_activeSliders"),
    ViewRoute("/api/inactiveSliders", "v_inactiveSliders"),
]

COMMANDS = [
    CommandRoute("/api/createSlider", signature("sp_createSlider", *_SLIDER_FIELDS, "createBy", "updateBy")),
    CommandRoute("/api/updateSlider", signature("sp_updateSlider", "sliderId", *_SLIDER_FIELDS, "updateBy")),
    CommandRoute("/api/updateSliderOrder", signature(
        "sp_updateSliderOrder", _SLIDER_ID, Param("newPageOrder", kind="int", default=0),
    )),
    CommandRoute("/api/deleteSlider", signature("sp_deleteSlider", _SLIDER_ID)),
    CommandRoute("/api/activateSlider", signature("sp_activateSlider", _SLIDER_ID)),
    CommandRoute("/api/deactivateSlider", signature("sp_deactivateSlider", _SLIDER_ID)),
]

register_view_routes(router, VIEWS)
register_command_routes(router, COMMANDS)
