"""
Module 'notifications': e-mails transactionnels best-effort (Resend).
"""

from .service import send_order_confirmation, send_shipping_update

__all__ = [
    "send_order_confirmation",
    "send_shipping_update",
]
