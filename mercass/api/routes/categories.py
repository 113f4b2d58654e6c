"""Category resources."""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from mercass.api.dependencies import get_executor
from mercass.api.procedure_routes import CommandRoute, ViewRoute, register_command_routes, register_view_routes
from mercass.database.core.commands import ViewQuery
from mercass.database.core.params import Param, signature, try_parse_int

router = APIRouter()

INVALID_CATEGORY_ID = "Geçersiz kategori ID"

VIEWS = [
    ViewRoute("/api/categoryStatistics", "v_categoryStatistics"),
    ViewRoute("/api/categories", "v_allCategories"),
    ViewRoute("/api/activeCategories", "v_ActiveCategories"),
    ViewRoute("/api/passiveCategories", "v_PassiveCategories"),
    ViewRoute("/api/mainPageCategories", "v_MainPageCategories"),
    ViewRoute("/api/nonMainPageCategories", "v_NonMainPageCategories"),
    ViewRoute("/api/menuCategories", "v_MenuCategories"),
    ViewRoute("/api/nonMenuCategories", "v_NonMenuCategories"),
]

_CATEGORY_ID = Param("categoryId", "Id", kind="int", default=0)

COMMANDS = [
    CommandRoute("/api/createCategories", signature(
        "sp_createCategories", "categoryName", "categoryTitle", "categoryImg", "categoryDesc", "categoryLevel",
    )),
    CommandRoute("/api/categoriesFrezee", signature("sp_categoryFreeze", _CATEGORY_ID)),
    CommandRoute("/api/deleteCategory", signature("sp_deleteCategory", _CATEGORY_ID)),
    CommandRoute("/api/updateCategorySearchOrder", signature(
        "sp_updateCategorySearchOrder", _CATEGORY_ID, Param("newSearchOrder", "searchOrder", kind="int", default=0),
    )),
]


async def _lookup(request: Request, view: str, raw_id: str):
    category_id = try_parse_int(raw_id, 0)
    if category_id <= 0:
        return PlainTextResponse(INVALID_CATEGORY_ID, status_code=500)
    result = await get_executor(request).run(ViewQuery(view, {"Id": category_id}))
    if not result.recordset:
        return PlainTextResponse(INVALID_CATEGORY_ID, status_code=500)
    return result.recordset


@router.get("/api/category/{category_id}")
async def category_detail(request: Request, category_id: str):
    return await _lookup(request, "v_categoryDetails", category_id)


@router.get("/api/categoryStatistics/{category_id}")
async def category_statistics(request: Request, category_id: str):
    return await _lookup(request, "v_categoryStatistics", category_id)


register_view_routes(router, VIEWS)
register_command_routes(router, COMMANDS)
