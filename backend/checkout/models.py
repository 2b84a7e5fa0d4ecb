# module backend.checkout.models
"""Schémas pydantic du panier soumis au checkout (camelCase côté client)."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from backend.pricing.sizes import FrameSize, FrameType, parse_frame_size, parse_frame_type


class _ClientModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class Location(_ClientModel):
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


# Bornes du panier: au-delà, la ligne est refusée avant tout appel Stripe
MAX_UNIT_PRICE = 100_000
MAX_QUANTITY = 1_000


class CartItem(_ClientModel):
    id: str
    product_id: str = Field(alias="productId", min_length=1)
    name: str
    price: float = Field(gt=0, le=MAX_UNIT_PRICE, allow_inf_nan=False)
    quantity: int = Field(gt=0, le=MAX_QUANTITY)
    frame_size: FrameSize = Field(alias="frameSize")
    frame_type: FrameType = Field(alias="frameType")
    engraving_text: Optional[str] = Field(default=None, alias="engravingText")
    location: Optional[Location] = None

    @field_validator("frame_size", mode="before")
    @classmethod
    def _frame_size(cls, v: Any) -> FrameSize:
        if isinstance(v, FrameSize):
            return v
        return parse_frame_size(str(v or ""))

    @field_validator("frame_type", mode="before")
    @classmethod
    def _frame_type(cls, v: Any) -> FrameType:
        if isinstance(v, FrameType):
            return v
        return parse_frame_type(str(v or ""))

    def to_line(self) -> Dict[str, Any]:
        """Ligne normalisée transmise à l'écriture des articles."""
        return {
            "line_id": self.id,
            "product_id": self.product_id,
            "name": self.name,
            "unit_price": self.price,
            "quantity": self.quantity,
            "frame_size": self.frame_size.value,
            "frame_type": self.frame_type.value,
            "engraving_text": self.engraving_text or None,
        }


class ShippingInfo(_ClientModel):
    full_name: str = Field(alias="fullName", min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    postal_code: str = Field(alias="postalCode", min_length=1)
    country: str = Field(min_length=1)


class CheckoutRequest(_ClientModel):
    items: List[CartItem] = Field(min_length=1)
    shipping_info: ShippingInfo = Field(alias="shippingInfo")
    payment_intent_id: str = Field(alias="paymentIntentId", min_length=1)

    def first_location(self) -> Optional[Location]:
        return next((it.location for it in self.items if it.location), None)


@dataclass(frozen=True)
class Totals:
    subtotal: float
    shipping: float
    total: float


@dataclass(frozen=True)
class OrderConfirmation:
    order_id: str
    total: float
    items_expected: int
    items_persisted: int
    duplicate: bool = False
    status: str = "success"

    def to_response(self) -> Dict[str, Any]:
        message = "Order already processed" if self.duplicate else "Order created successfully"
        return {"id": self.order_id, "status": self.status, "message": message, "total": self.total}
