"""Seller resources."""

from fastapi import APIRouter

from mercass.api.procedure_routes import CommandRoute, ViewRoute, register_command_routes, register_view_routes
from mercass.database.core.params import Param, signature

router = APIRouter()

# Older clients send every link id in `ProductId`
_CATEGORY = Param("CategoryId", ("CategoryId", "ProductId"))
_BADGE = Param("BadgesId", ("BadgesId", "ProductId"))

VIEWS = [
    ViewRoute("/api/sellerProductDetails", "v_sellerProductDetail"),
]

COMMANDS = [
    CommandRoute("/api/changeSellerBanner", signature("sp_changeSellerBanner", "sellerId", "banner")),
    CommandRoute("/api/changeSellerInfo", signature("sp_changeSellerInfo", "sellerId", "sellerInfo")),
    CommandRoute("/api/changeSellerLogo", signature("sp_changeSellerLogo", "sellerId", "logo")),
    CommandRoute("/api/changeSellerName", signature("sp_changeSellerName", "sellerId", "sellerName")),
    CommandRoute("/api/changeSellerScore", signature("sp_changeSellerScore", "sellerId", "score")),
    CommandRoute("/api/changeSellerStatus", signature("sp_changeSellerStatus", "sellerId", "status")),
    CommandRoute("/api/changeSellerSubdomain", signature("sp_changeSellerSubdomain", "sellerId", "subdomain")),
    CommandRoute("/api/createSeller", signature("sp_createSeller", "UserId", "sellerName", "sellerInfo", "subdomain")),
    CommandRoute("/api/deactivateSeller", signature("sp_deactivateSeller", "sellerId")),
    CommandRoute("/api/addSellerProduct", signature("sp_addSellerProduct", "SellerId", "ProductId")),
    CommandRoute("/api/addSellerCategory", signature("sp_addSellerCategory", "SellerId", _CATEGORY)),
    CommandRoute("/api/addSellerBadges", signature("sp_addSellerBadges", "SellerId", _BADGE)),
    CommandRoute("/api/deleteSellerProduct", signature("sp_deleteSellerProduct", "SellerId", "ProductId")),
    CommandRoute("/api/deleteSellerCategory", signature("sp_deleteSellerCategory", "SellerId", _CATEGORY)),
    CommandRoute("/api/deleteSellerBadges", signature("sp_deleteSellerBadges", "SellerId", _BADGE)),
]

register_view_routes(router, VIEWS)
register_command_routes(router, COMMANDS)
