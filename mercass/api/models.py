"""Request bodies validated by pydantic."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class PaymentCard(BaseModel):
    cardHolderName: str
    cardNumber: str
    expireMonth: str
    expireYear: str
    cvc: str


class BillingAddress(BaseModel):
    contactName: str
    city: str
    country: str
    address: str


class PaymentOrder(BaseModel):
    """
    Body of `/api/payment`.

    `item` is a subscription row as listed by `v_activeSubscribe`
    (`Id`, `subName`, `remainingDay`, `firtsDate`, `endDate`, `price`);
    `buyer` follows iyzico's buyer fields.
    """

    item: Dict[str, Any]
    card: PaymentCard
    buyer: Dict[str, Any]
    billing: BillingAddress
    conversationId: Optional[str] = None
