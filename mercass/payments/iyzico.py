"""Payment request construction around the iyzipay SDK."""

import http.client
import json
import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

import iyzipay
from fastapi.concurrency import run_in_threadpool

from mercass.database.config.config import Settings
from mercass.exceptions import PaymentError

logger = logging.getLogger(__name__)

LOCALE_TR = "tr"
CURRENCY_TRY = "TRY"
PAYMENT_CHANNEL_WEB = "WEB"
PAYMENT_GROUP_SUBSCRIPTION = "SUBSCRIPTION"
BASKET_ITEM_VIRTUAL = "VIRTUAL"


def basket_item(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Basket item for one user subscription row."""
    return {
        "id": str(row["Id"]),
        "name": row["subName"],
        "category1": f"{row['remainingDay']} gün{row['subName']}",
        "category2": f"{row['firtsDate']}-{row['endDate']}",
        "itemType": BASKET_ITEM_VIRTUAL,
        "price": str(row["price"]),
    }


def card_info(card: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "cardHolderName": card["cardHolderName"],
        "cardNumber": card["cardNumber"],
        "expireMonth": card["expireMonth"],
        "expireYear": card["expireYear"],
        "cvc": card["cvc"],
        "registerCard": "1",
    }


def buyer_info(buyer: Mapping[str, Any]) -> Dict[str, Any]:
    keys = ("id", "name", "surname", "gsmNumber", "email", "identityNumber",
            "registrationDate", "registrationAddress", "ip", "city", "country")
    return {key: buyer.get(key) for key in keys}


def billing_address(bill: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: bill.get(key) for key in ("contactName", "city", "country", "address")}


def generate_basket_id(user_id, now: Optional[datetime] = None) -> str:
    """Date and time fields without padding, nine zeros, then the user id."""
    now = now or datetime.now()
    return f"{now.day}{now.month}{now.year}{now.hour}{now.minute}{now.second}000000000{user_id}"


def build_payment_request(item: Mapping[str, Any], card: Mapping[str, Any], buyer: Mapping[str, Any],
                          bill: Mapping[str, Any], conversation_id: str = "123456789",
                          now: Optional[datetime] = None) -> Dict[str, Any]:
    basket = basket_item(item)
    return {
        "locale": LOCALE_TR,
        "conversationId": conversation_id,
        "price": basket["price"],
        "paidPrice": basket["price"],
        "currency": CURRENCY_TRY,
        "installment": "1",
        "basketId": generate_basket_id(buyer.get("id"), now),
        "paymentChannel": PAYMENT_CHANNEL_WEB,
        "paymentGroup": PAYMENT_GROUP_SUBSCRIPTION,
        "paymentCard": card_info(card),
        "buyer": buyer_info(buyer),
        "billingAddress": billing_address(bill),
        "basketItems": [basket],
    }


class PaymentGateway:
    def __init__(self, settings: Settings):
        self.options = {
            "api_key": settings.IYZICO_API_KEY,
            "secret_key": settings.IYZICO_SECRET_KEY,
            "base_url": settings.IYZICO_BASE_URL,
        }

    def _create(self, request: Dict[str, Any]) -> Dict[str, Any]:
        response = iyzipay.Payment().create(request, self.options)
        return json.loads(response.read().decode("utf-8"))

    async def create_payment(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Send a payment request to iyzico.

        Raises
        ------
        PaymentError
            If the provider cannot be reached or rejects the payment.
        """
        try:
            result = await run_in_threadpool(self._create, request)
        except (OSError, http.client.HTTPException, ValueError) as e:
            logger.error("iyzico payment call failed: %s", e)
            raise PaymentError(f"Ödeme servisine ulaşılamadı: {e}") from e
        if result.get("status") != "success":
            logger.info("iyzico rejected payment", extra={"extra": {"errorCode": result.get("errorCode")}})
            raise PaymentError(result.get("errorMessage") or "Ödeme alınamadı",
                               code=result.get("errorCode"), status_code=400)
        return result
