"""Customer reference (logo wall) resources."""

from fastapi import APIRouter

from mercass.api.procedure_routes import CommandRoute, ViewRoute, register_command_routes, register_view_routes
from mercass.database.core.params import Param, signature

router = APIRouter()

_REFERENCE_ID = Param("referenceId", "Id", kind="int", default=0)

VIEWS = [
    ViewRoute("/api/reference", "v_allReference"),
    ViewRoute("/api/activeReferences", "v_activeReferences"),
    ViewRoute("/api/inactiveReferences", "v_inactiveReferences"),
]

COMMANDS = [
    CommandRoute("/api/activateReference", signature("sp_activateReference", _REFERENCE_ID)),
    CommandRoute("/api/deactivateReference", signature("sp_deactivateReference", _REFERENCE_ID)),
    CommandRoute("/api/deleteReference", signature("sp_deleteReference", _REFERENCE_ID)),
    CommandRoute("/api/updateReference", signature(
        "sp_updateReference", "referenceId", "title", "refImg", "isActive", "isDeleted", "refLink", "updateBy",
    )),
    CommandRoute("/api/createReference", signature(
        "sp_createReference", "title", "refImg", "isActive", "isDeleted", "refLink", "createBy", "updateBy",
    )),
]

register_view_routes(router, VIEWS)
register_command_routes(router, COMMANDS)
