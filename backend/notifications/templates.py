"""
Rendu serveur minimal des e-mails transactionnels (sujet, HTML, texte).
La mise en forme riche est hors périmètre: on produit un HTML simple et échappé.
"""
from html import escape
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from backend import config
from backend.pricing.sizes import frame_size_label, frame_type_label

def _money(value: Any) -> str:
    try:
        return f"${float(value):.2f}"
    except (TypeError, ValueError):
        return "$0.00"

def _item_lines(items: Sequence[Mapping[str, Any]]) -> List[str]:
    lines = []
    for it in items:
        name = it.get("name") or it.get("product_id") or "Article"
        detail = f"{frame_size_label(it.get('frame_size') or '')}, {frame_type_label(it.get('frame_type') or '')}"
        line = f"{it.get('quantity')} x {name} ({detail}) - {_money(it.get('price'))}"
        if it.get("engraving_text"):
            line += f' - engraving: "{it.get("engraving_text")}"'
        lines.append(line)
    return lines

def render_order_confirmation(order: Mapping[str, Any], items: Sequence[Mapping[str, Any]]) -> Tuple[str, str, str]:
    """Retourne (subject, html, text) pour la confirmation de commande."""
    subject = f"Your {config.SHOP_NAME} Order Confirmation - #{order.get('id')}"
    address = ", ".join(
        str(order.get(k)) for k in ("shipping_address", "city", "postal_code", "country") if order.get(k)
    )
    item_lines = _item_lines(items)
    text = "\n".join([
        f"Hi {order.get('customer_name') or ''},",
        "",
        f"Thank you for your order #{order.get('id')}.",
        "",
        *item_lines,
        "",
        f"Total: {_money(order.get('total'))}",
        f"Shipping to: {address}",
    ])
    html = (
        f"<h1>Thank you for your order, {escape(str(order.get('customer_name') or ''))}!</h1>"
        f"<p>Order <strong>#{escape(str(order.get('id')))}</strong></p>"
        "<ul>" + "".join(f"<li>{escape(line)}</li>" for line in item_lines) + "</ul>"
        f"<p>Total: <strong>{_money(order.get('total'))}</strong></p>"
        f"<p>Shipping to: {escape(address)}</p>"
    )
    return subject, html, text

_SHIPPING_SUBJECTS: Dict[str, str] = {
    "SHIPPED": "Your {shop} Order Has Shipped!",
    "DELIVERED": "Your {shop} Order Has Been Delivered!",
}

def render_shipping_update(order: Mapping[str, Any], status: str) -> Tuple[str, str, str]:
    """Retourne (subject, html, text) pour le suivi d'expédition."""
    template = _SHIPPING_SUBJECTS.get(status, "Shipping Update for Your {shop} Order")
    subject = f"{template.format(shop=config.SHOP_NAME)} - #{order.get('id')}"
    text = (
        f"Hi {order.get('customer_name') or ''},\n\n"
        f"Your order #{order.get('id')} is now {status.lower()}."
    )
    html = (
        f"<p>Hi {escape(str(order.get('customer_name') or ''))},</p>"
        f"<p>Your order <strong>#{escape(str(order.get('id')))}</strong> is now {escape(status.lower())}.</p>"
    )
    return subject, html, text
