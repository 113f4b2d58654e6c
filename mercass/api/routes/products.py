"""
Product resources: products, stock, relations, images and comments.

Numeric fields are coerced with safe defaults before they reach the
store; flags accept the usual form spellings (`"true"`, `"on"`, `1`).
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from mercass.api.dependencies import get_executor, get_file_store, read_body, read_files
from mercass.api.procedure_routes import CommandRoute, ViewRoute, register_command_routes, register_view_routes
from mercass.database.core.commands import Procedure
from mercass.database.core.params import Param, signature, try_parse_int
from mercass.exceptions import InvalidRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _int(name: str, source=None) -> Param:
    return Param(name, source, kind="int", default=0)


def _float(name: str) -> Param:
    return Param(name, kind="float", default=0.0)


def _flag(name: str) -> Param:
    return Param(name, kind="bool", default=False)


_PRODUCT_ID = _int("productId")
_BY_ID = _int("productId", "Id")
_IMAGE_BY_ID = _int("productImgId", "Id")
_STOCK = (_PRODUCT_ID, _int("productCount"), _int("warningCount"), _int("criticalCount"), _int("meansStock"))

VIEWS = [
    ViewRoute("/api/products", "v_allProducts"),
    ViewRoute("/api/activeProducts", "v_activeProducts"),
    ViewRoute("/api/inactiveProducts", "v_inactiveProducts"),
    ViewRoute("/api/populerProducts", "v_populerProducts"),
    ViewRoute("/api/allProductImg", "v_allProductImg"),
    ViewRoute("/api/activeProductImg", "v_activeProductImg"),
    ViewRoute("/api/inactiveProductImg", "v_inactiveProductImg"),
    ViewRoute("/api/allProductComments", "v_allProductComments"),
    ViewRoute("/api/allProductDetailComments", "v_allProductDetailComments"),
    ViewRoute("/api/inactiveProductComments", "v_inactiveProductComments"),
    ViewRoute("/api/activeProductComments", "v_activeProductComments"),
]

COMMANDS = [
    CommandRoute("/api/createProduct", signature(
        "sp_createProduct",
        "title", _int("categoryId"), _int("baseCopyID"), _int("productOrder"),
        "productDesc", "productText", "unit", _float("realPrice"), _float("meansPrice"),
        _flag("isShowMainPage"), _flag("isShowMostPopuler"), _flag("isSearchImportant"), _flag("isPublish"),
    )),
    CommandRoute("/api/changeProductCategory", signature("sp_changeProductCategory", _PRODUCT_ID, _int("categoryId"))),
    CommandRoute("/api/changeProductDesc", signature("sp_changeProductDesc", _PRODUCT_ID, "productDesc")),
    CommandRoute("/api/changeProductOrder", signature("sp_changeProductOrder", _PRODUCT_ID, _int("productOrder"))),
    CommandRoute("/api/changeProductPrice", signature(
        "sp_changeProductPrice", _PRODUCT_ID, _float("realPrice"), _float("meansPrice"),
    )),
    CommandRoute("/api/changeProductPublish", signature(
        "sp_changeProductPublish", _PRODUCT_ID, _flag("isPublish"), "publishDate",
    )),
    CommandRoute("/api/changeProductSearchImportant", signature(
        "sp_changeProductSearchImportant", _PRODUCT_ID, _flag("isSearchImportant"),
    )),
    CommandRoute("/api/changeProductShowMainPage", signature(
        "sp_changeProductShowMainPage", _PRODUCT_ID, _flag("isShowMainPage"),
    )),
    CommandRoute("/api/changeProductShowMostPopuler", signature(
        "sp_changeProductShowMostPopuler", _PRODUCT_ID, _flag("isShowMostPopuler"),
    )),
    CommandRoute("/api/changeProductStock", signature("sp_changeProductStock", *_STOCK)),
    CommandRoute("/api/changeProductText", signature("sp_changeProductText", _PRODUCT_ID, "productText")),
    CommandRoute("/api/changeProductTitle", signature("sp_changeProductTitle", _PRODUCT_ID, "title")),
    CommandRoute("/api/createProductStock", signature("sp_createProductStock", *_STOCK)),
    CommandRoute("/api/deleteProductRelaited", signature("sp_deleteProductRelaited", _int("productRelaitedId"))),
    CommandRoute("/api/addProductRelaited", signature("sp_addProductRelaited", _PRODUCT_ID, _int("relProductId"))),
    CommandRoute("/api/deleteProduct", signature("sp_deleteProducts", _BY_ID)),
    CommandRoute("/api/productAccept", signature(
        "sp_productAccept", _int("productId", ("Id", "UserId")),
    ), response="accepted"),
    CommandRoute("/api/activateProduct", signature("sp_activateProduct", _BY_ID)),
    CommandRoute("/api/deactivateProduct", signature("sp_deactivateProduct", _BY_ID)),
    CommandRoute("/api/deleteProductImg", signature("sp_deleteProductImg", _IMAGE_BY_ID)),
    CommandRoute("/api/deactivateProductImg", signature("sp_deactivateProductImg", _IMAGE_BY_ID)),
    CommandRoute("/api/activateProductImg", signature("sp_activateProductImg", _IMAGE_BY_ID)),
    CommandRoute("/api/updateProductImgOrder", signature(
        "sp_updateProductImgOrder", _IMAGE_BY_ID, _int("newProductImgOrder"),
    )),
]


@router.post("/api/createProductImg")
async def create_product_img(request: Request, body: Dict[str, Any] = Depends(read_body),
                             files: List[UploadFile] = Depends(read_files)):
    """
    Attach an image to a product.

    Request Body
    ------------
    multipart {productId, productImg, imgUserDesc, imgOrder, file[]}
        `productImg` starting with `http` is stored as is; otherwise the
        first uploaded file is saved under `productImg/<productId>/`.

    Raises
    ------
    InvalidRequest
        If neither an image URL nor a file is given.
    """
    product_id = try_parse_int(body.get("productId"), 0)
    image = body.get("productImg") or ""
    if image.startswith("http"):
        url = image
    elif files:
        url = await get_file_store(request).save(f"productImg/{product_id}", files[0])
    else:
        raise InvalidRequest("Ürün resmi bulunamadı")
    result = await get_executor(request).run(Procedure("sp_createProductImg", {
        "productId": product_id,
        "imgUrl": url,
        "imgUserDesc": body.get("imgUserDesc"),
        "imgOrder": try_parse_int(body.get("imgOrder"), 0),
    }))
    logger.info("Image %s added to product %s", url, product_id)
    return result.to_dict()


register_view_routes(router, VIEWS)
register_command_routes(router, COMMANDS)
