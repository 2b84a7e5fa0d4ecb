# module backend.orders.models
"""Statuts de commande/paiement et schéma de mise à jour (PATCH admin)."""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


# Transitions qui déclenchent l'e-mail de suivi d'expédition
SHIPPING_NOTIFY_STATUSES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}


class OrderUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = Field(default=None, alias="paymentStatus")
    shipping_address: Optional[str] = Field(default=None, alias="shippingAddress")
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = Field(default=None, alias="postalCode")

    def to_row(self) -> Dict[str, Any]:
        """Colonnes à mettre à jour (champs fournis uniquement, enums sérialisés)."""
        return self.model_dump(exclude_none=True, mode="json")
