import io

import pytest
from fastapi import APIRouter

from mercass.api.procedure_routes import CommandRoute, register_command_routes
from mercass.api.routes import ROUTERS
from mercass.database.core.params import signature


def test_product_creation_coerces_form_values(client, executor):
    client.post("/api/createProduct", data={
        "title": "Kupa", "categoryId": "3", "realPrice": "12,50", "meansPrice": "", "isPublish": "on",
        "isShowMainPage": "false",
    })

    params = executor.last("sp_createProduct").params
    assert params["categoryId"] == 3
    assert params["baseCopyID"] == 0
    assert params["realPrice"] == 12.5
    assert params["meansPrice"] == 0.0
    assert params["isPublish"] is True
    assert params["isShowMainPage"] is False


def test_product_accept_falls_back_to_the_user_id_field(client, executor):
    executor.respond("sp_productAccept", rows_affected=[1])

    response = client.post("/api/productAccept", json={"UserId": "14"})

    assert response.json() == {"Status": "OK", "Message": "Güncelleme Yapıldı"}
    assert executor.last("sp_productAccept").params == {"productId": 14}


def test_product_image_from_url(client, executor):
    client.post("/api/createProductImg", json={"productId": 5, "productImg": "https://img.test/k.png", "imgOrder": "2"})

    assert executor.last("sp_createProductImg").params == {
        "productId": 5, "imgUrl": "https://img.test/k.png", "imgUserDesc": None, "imgOrder": 2,
    }


def test_product_image_upload(client, executor):
    client.post(
        "/api/createProductImg",
        data={"productId": "5", "imgUserDesc": "ön"},
        files={"file": ("k.png", io.BytesIO(b"png"), "image/png")},
    )

    assert executor.last("sp_createProductImg").params["imgUrl"] == "http://cdn.test/uploads/productImg/5/k.png"


def test_product_image_requires_a_source(client, executor):
    response = client.post("/api/createProductImg", json={"productId": 5})

    assert response.status_code == 400
    assert executor.commands == []


def test_active_comments_have_their_own_route(client, executor):
    executor.respond("v_activeProductComments", [{"Id": 1, "comment": "Güzel"}])

    assert client.get("/api/activeProductComments").json() == [{"Id": 1, "comment": "Güzel"}]


def test_seller_category_accepts_the_legacy_field(client, executor):
    client.post("/api/addSellerCategory", json={"SellerId": 2, "ProductId": 9})

    assert executor.last("sp_addSellerCategory").params == {"SellerId": 2, "CategoryId": 9}


def test_slider_order(client, executor):
    client.post("/api/updateSliderOrder", json={"Id": "6", "newPageOrder": "1"})

    assert executor.last("sp_updateSliderOrder").params == {"sliderId": 6, "newPageOrder": 1}


def test_every_router_is_registered(app):
    paths = set(app.openapi()["paths"])

    for router in ROUTERS:
        assert {getattr(route, "path", None) for route in router.routes} <= paths


def test_session_parameters_need_a_guarded_route():
    route = CommandRoute("/api/x", signature("sp_x", "userId"), session_params=("userId",))

    with pytest.raises(ValueError):
        register_command_routes(APIRouter(), [route])


def test_unknown_response_shape_is_rejected_at_registration():
    route = CommandRoute("/api/x", signature("sp_x", "Id"), response="first")

    with pytest.raises(KeyError):
        register_command_routes(APIRouter(), [route])
