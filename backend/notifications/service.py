"""
Notifications transactionnelles best-effort (confirmation de commande, suivi d'expédition).
Aucune exception ne sort de ce module: chaque envoi retourne
{"success": True, "data": ...} ou {"success": False, "error": "..."}.
"""
from typing import Any, Dict, Mapping, Sequence
import logging

from . import email_client
from . import templates

logger = logging.getLogger(__name__)

def _deliver(kind: str, order: Mapping[str, Any], render) -> Dict[str, Any]:
    to = (order or {}).get("customer_email")
    try:
        if not to:
            raise ValueError("customer_email manquant")
        subject, html, text = render()
        data = email_client.send_email(to=to, subject=subject, html=html, text=text)
        logger.info("notifications.%s sent order_id=%s to=%s", kind, order.get("id"), to)
        return {"success": True, "data": data}
    except Exception as e:
        logger.warning("notifications.%s failed order_id=%s error=%s", kind, (order or {}).get("id"), e)
        return {"success": False, "error": str(e)}

def send_order_confirmation(order: Mapping[str, Any], items: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Confirmation de commande avec les articles effectivement enregistrés."""
    return _deliver("order_confirmation", order, lambda: templates.render_order_confirmation(order, items))

def send_shipping_update(order: Mapping[str, Any], status: str) -> Dict[str, Any]:
    """E-mail de suivi (SHIPPED / DELIVERED) envoyé à l'adresse du client de la commande."""
    return _deliver("shipping_update", order, lambda: templates.render_shipping_update(order, status))
