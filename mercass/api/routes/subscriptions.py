"""Subscription plans, newsletter sign-up and subscription payment."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from mercass.api.dependencies import SESSION, get_executor, read_body
from mercass.api.models import PaymentOrder
from mercass.api.procedure_routes import CommandRoute, ViewRoute, register_command_routes, register_view_routes
from mercass.database.core.commands import Procedure
from mercass.database.core.params import signature
from mercass.exceptions import InvalidRequest
from mercass.payments.iyzico import build_payment_request
from mercass.utils.helpers import valid_email

logger = logging.getLogger(__name__)

router = APIRouter()

VIEWS = [
    ViewRoute("/api/activeSubscribe", "v_activeSubscribe"),
]

COMMANDS = [
    CommandRoute("/api/subs", signature("sp_addSubs", "userId", "subId")),
]


@router.post("/addNewSubs")
async def add_newsletter_subscriber(request: Request, body: Dict[str, Any] = Depends(read_body)):
    """
    Add an address to the newsletter list.

    Raises
    ------
    InvalidRequest 400
        If `email` is not an email address.
    """
    email = body.get("email")
    if not valid_email(email):
        raise InvalidRequest("Geçersiz e-posta adresi")
    result = await get_executor(request).run(Procedure("sp_addNewsSubs", {"Email": email.strip()}))
    return result.first()


@router.post("/api/payment", dependencies=SESSION)
async def create_payment(request: Request, order: PaymentOrder):
    """
    Charge a subscription through iyzico.

    Request Body
    ------------
    PaymentOrder {item, card, buyer, billing, conversationId?}

    Returns
    -------
    dict
        iyzico's decoded payment response.

    Raises
    ------
    InvalidRequest 400
        If the subscription row lacks a field the basket needs.
    PaymentError
        If iyzico cannot be reached or rejects the payment.
    """
    buyer = dict(order.buyer)
    buyer.setdefault("id", str(request.state.user_id))
    buyer.setdefault("ip", request.client.host if request.client else "")
    try:
        payment = build_payment_request(
            order.item, order.card.model_dump(), buyer, order.billing.model_dump(),
            conversation_id=order.conversationId or "123456789",
        )
    except KeyError as e:
        raise InvalidRequest(f"Abonelik bilgisi eksik: {e.args[0]}") from e
    logger.info("Payment requested", extra={"extra": {"basketId": payment["basketId"]}})
    return await request.app.state.payment_gateway.create_payment(payment)


register_view_routes(router, VIEWS)
register_command_routes(router, COMMANDS)
