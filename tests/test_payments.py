import asyncio
from datetime import datetime

import pytest

from mercass.exceptions import PaymentError
from mercass.payments.iyzico import PaymentGateway, build_payment_request, generate_basket_id

ITEM = {"Id": 3, "subName": "Altın", "remainingDay": 30, "firtsDate": "2024-03-05", "endDate": "2024-04-04",
        "price": 199.9}
CARD = {"cardHolderName": "Ada Yılmaz", "cardNumber": "5528790000000008", "expireMonth": "12",
        "expireYear": "2030", "cvc": "123"}
BILLING = {"contactName": "Ada Yılmaz", "city": "İstanbul", "country": "Türkiye", "address": "Kadıköy"}


def test_basket_id_layout():
    assert generate_basket_id(42, datetime(2024, 3, 5, 9, 7, 2)) == "53202497200000000042"


def test_payment_request_fields():
    request = build_payment_request(ITEM, CARD, {"id": "42", "name": "Ada"}, BILLING,
                                    now=datetime(2024, 3, 5, 9, 7, 2))

    assert request["price"] == request["paidPrice"] == "199.9"
    assert request["basketId"] == "53202497200000000042"
    assert request["paymentCard"]["cvc"] == "123"
    assert request["buyer"]["id"] == "42"
    assert request["buyer"]["email"] is None
    assert request["basketItems"] == [{
        "id": "3",
        "name": "Altın",
        "category1": "30 günAltın",
        "category2": "2024-03-05-2024-04-04",
        "itemType": "VIRTUAL",
        "price": "199.9",
    }]


def test_gateway_transport_failure(settings, monkeypatch):
    gateway = PaymentGateway(settings)

    def refuse(request):
        raise OSError("connection refused")

    monkeypatch.setattr(gateway, "_create", refuse)

    with pytest.raises(PaymentError):
        asyncio.run(gateway.create_payment({}))


def test_gateway_rejection(settings, monkeypatch):
    gateway = PaymentGateway(settings)
    monkeypatch.setattr(gateway, "_create", lambda request: {
        "status": "failure", "errorCode": "12", "errorMessage": "Kart numarası geçersiz",
    })

    with pytest.raises(PaymentError) as info:
        asyncio.run(gateway.create_payment({}))

    assert info.value.code == "12"
    assert info.value.status_code == 400


def test_payment_route_fills_the_buyer_from_the_session(signed_in, payment_gateway):
    response = signed_in.post("/api/payment", json={
        "item": ITEM, "card": CARD, "buyer": {"name": "Ada"}, "billing": BILLING,
    })

    assert response.status_code == 200
    assert response.json() == {"status": "success", "paymentId": "1001"}
    sent = payment_gateway.requests[0]
    assert sent["buyer"]["id"] == "7"
    assert sent["buyer"]["ip"] == "testclient"
    assert sent["basketId"].endswith("0000000007")


def test_payment_route_rejects_incomplete_items(signed_in, payment_gateway):
    response = signed_in.post("/api/payment", json={
        "item": {"Id": 3}, "card": CARD, "buyer": {}, "billing": BILLING,
    })

    assert response.status_code == 400
    assert response.json()["ErrKind"] == "validation"
    assert payment_gateway.requests == []


def test_payment_requires_a_session(client, payment_gateway):
    response = client.post("/api/payment", json={"item": ITEM, "card": CARD, "buyer": {}, "billing": BILLING})

    assert response.status_code == 303
    assert payment_gateway.requests == []


def test_newsletter_rejects_bad_addresses(client, executor):
    response = client.post("/addNewSubs", json={"email": "not-an-address"})

    assert response.status_code == 400
    assert response.json()["ErrMessage"] == "Geçersiz e-posta adresi"
    assert executor.commands == []
