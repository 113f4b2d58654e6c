"""
Server-rendered pages.

Each page runs its named queries, then hands the results to
:func:`mercass.api.rendering.render` under the names the templates use.
Path values are always bound as query parameters.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from mercass.api.dependencies import (
    PAGE_PUBLIC,
    PAGE_SESSION,
    get_executor,
    get_file_store,
    mark_page,
    read_body,
    read_files,
    require_session,
    with_menu,
    with_user_categories,
)
from mercass.api.rendering import render
from mercass.database.core.commands import Procedure, Statement, ViewQuery
from mercass.database.daos.chat_dao import ChatDao

logger = logging.getLogger(__name__)

router = APIRouter()

SELLER_PRODUCTS = (
    "SELECT * FROM v_sellerProductDetail "
    "WHERE SellerId = (SELECT Id FROM v_allSellers WHERE userId = ?)"
)
SELLER_PRODUCT_LIST = (
    "SELECT * FROM v_allSellerProductsList "
    "WHERE SellerId = (SELECT Id FROM v_allSellers WHERE userId = ?)"
)
FORUM_WITH_DETAILS = (
    "SELECT frm.*, frmImg.imgUrl, frmCmt.commentText FROM v_forum AS frm "
    "LEFT JOIN v_forumImages AS frmImg ON frm.Id = frmImg.forumId "
    "LEFT JOIN v_forumComment AS frmCmt ON frm.Id = frmCmt.forumId"
)

# Pages that only render their template with the common envelope
STATIC_SESSION_PAGES = ("aboutUs", "careers", "affiliates", "blog", "contactUs", "newArrivals", "accessories")
STATIC_PUBLIC_PAGES = (
    "men", "women", "shopAll", "customerServices", "findStore", "legalAndPrivacy", "giftCard",
    "resetPassword", "userAgreement", "cookiePolicy", "sellerApplicationForm", "buyerApplicationForm",
)


@router.get("/", dependencies=PAGE_SESSION)
async def index(request: Request):
    data = await get_executor(request).run_many({
        "ASliders": ViewQuery("v_activeSliders"),
        "AReferences": ViewQuery("v_activeReferences"),
        "PopularProduct": ViewQuery("v_populerProducts"),
        "AllSellerPopulerProduct": ViewQuery("v_allSellerPopulerProducts"),
    })
    return render(request, "index", data)


@router.get("/productDetail/{product_id}", dependencies=PAGE_SESSION)
async def product_detail(request: Request, product_id: str):
    data = await get_executor(request).run_many({
        "productDetailDescription": ViewQuery("v_ProductsDetail", {"Id": product_id}),
        "productDetailImgSlider": ViewQuery("v_activeProductImg", {"productId": product_id}),
        "relProduct": ViewQuery("v_productsRelaited", {"RelProduct": product_id}),
        "productProperties": ViewQuery("ProductProperties", {"productId": product_id}),
    })
    return render(request, "productDetail", data)


@router.get("/shop", dependencies=PAGE_SESSION)
async def shop(request: Request):
    data = await get_executor(request).run_many({
        "allCategories": ViewQuery("v_allCategories"),
        "activeProduct": ViewQuery("v_activeProducts"),
    })
    return render(request, "shop", data)


@router.get("/categorysub/{code}", dependencies=PAGE_SESSION)
async def category_sub(request: Request, code: str):
    data = await get_executor(request).run_many({
        "allCategories": ViewQuery("v_allCategories", {"categoryLevel": 1}),
        "activeProduct": ViewQuery("v_activeProducts", {"categoryCode": code}),
    })
    return render(request, "shop", data)


@router.get("/category/{code}", dependencies=PAGE_SESSION)
async def category(request: Request, code: str):
    data = await get_executor(request).run_many({
        "allCategories": ViewQuery("v_allCategories", {"parentCategoryCode": code}),
        "activeProduct": ViewQuery("v_activeProducts", {"categoryCode": code}),
    })
    return render(request, "shop", data)


@router.post("/search", dependencies=PAGE_SESSION)
async def search(request: Request, body: Dict[str, Any] = Depends(read_body),
                 files: List[UploadFile] = Depends(read_files)):
    """Full-text product search; an attached image is kept under `aramaResimleri/`."""
    if files:
        url = await get_file_store(request).save("aramaResimleri", files[0])
        logger.info("Search image stored at %s", url)
    criteria = body.get("search") or body.get("search_mobile")
    result = await get_executor(request).run(Procedure("sp_Search", {"criteria": criteria}))
    return render(request, "search", {"SearchResult": result.recordset})


@router.get("/priceList", dependencies=PAGE_PUBLIC)
async def price_list(request: Request):
    data = await get_executor(request).run_many({
        "activeSubscribe": ViewQuery("v_activeSubscribe", order_by=("SubsGroup", "SubsGroupScreenOrder")),
        "SubsItem": ViewQuery("v_allSubscribeItem"),
        "subGroup": ViewQuery("v_SubscribeGroup", order_by=("SubsGroup ASC",)),
    })
    return render(request, "priceList", data)


@router.get("/forum", dependencies=PAGE_SESSION)
async def forum(request: Request, user: Dict[str, Any] = Depends(with_user_categories)):
    """Forum feed, limited to the categories the user follows when there are any."""
    forum_query = ViewQuery("v_forum")
    if user.get("userCategories"):
        forum_query = ViewQuery("v_forum", {"categoryId": [row["categoryId"] for row in user["userCategories"]]})
    data = await get_executor(request).run_many({
        "DraftData": Procedure("sp_getDraftFormPost", {"UserId": user["UsersId"]}, positional=True),
        "allCategories": ViewQuery("v_allCategories"),
        "forumImages": ViewQuery("v_forumImages"),
        "forum": forum_query,
        "forumComment": ViewQuery("v_forumComment"),
        "allForumData": Statement(FORUM_WITH_DETAILS),
    }, batch=True)
    return render(request, "forum", data)


@router.get("/chat", dependencies=PAGE_SESSION)
async def chat(request: Request):
    rows = await ChatDao(get_executor(request)).chat_list(request.state.user_id)
    return render(request, "chat", rows)


@router.get("/chat/{product_id}", dependencies=PAGE_SESSION)
async def chat_about_product(request: Request, product_id: str):
    """Open (or reuse) the chat about a product, then show the chat list."""
    dao = ChatDao(get_executor(request))
    await dao.new_chat(request.state.user_id, product_id)
    rows = await dao.chat_list(request.state.user_id)
    return render(request, "chat", rows)


async def _seller_detail(request: Request, seller_user_id):
    data = await get_executor(request).run_many({
        "sellerDetail": Statement(SELLER_PRODUCTS, (seller_user_id,)),
        "sellerDetailInfo": Procedure("sp_getSellerDetailInfo", {"UserId": seller_user_id}, positional=True),
        "sellerProductList": Statement(SELLER_PRODUCT_LIST, (seller_user_id,)),
    }, batch=True)
    return render(request, "sellerDetail", data)


@router.get("/sellerDetail", dependencies=PAGE_SESSION)
async def seller_detail(request: Request):
    return await _seller_detail(request, request.state.user_id)


@router.get("/sellerDetail/{seller_user_id}", dependencies=PAGE_SESSION)
async def seller_detail_of(request: Request, seller_user_id: str):
    return await _seller_detail(request, seller_user_id)


@router.get("/sellerDetailDemo", dependencies=[Depends(mark_page), Depends(require_session), Depends(with_menu)])
async def seller_detail_demo(request: Request):
    result = await get_executor(request).run(ViewQuery("v_AllSellers", {"userId": request.state.user_id}))
    return render(request, "sellerDetailDemo", result.recordset)


@router.get("/shopCategories", dependencies=PAGE_SESSION)
async def shop_categories(request: Request):
    result = await get_executor(request).run(ViewQuery("v_allCategories"))
    return render(request, "shopCategories", result.recordset)


@router.get("/payment", dependencies=PAGE_PUBLIC)
async def payment(request: Request):
    return render(request, "payment")


@router.get("/myAccount", dependencies=PAGE_SESSION)
async def my_account(request: Request):
    return render(request, "myAccount", {})


def _static_page(view: str):
    async def page(request: Request):
        return render(request, view, {})

    page.__name__ = f"page_{view}"
    return page


for _view in STATIC_SESSION_PAGES:
    router.add_api_route(f"/{_view}", _static_page(_view), methods=["GET"], dependencies=PAGE_SESSION)
for _view in STATIC_PUBLIC_PAGES:
    router.add_api_route(f"/{_view}", _static_page(_view), methods=["GET"], dependencies=PAGE_PUBLIC)
