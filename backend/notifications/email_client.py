"""
Adaptateur e-mail: envoi via l'API HTTP de Resend (POST /emails).
"""
from typing import Any, Dict, List, Optional, Union
import logging

import httpx

from backend import config

logger = logging.getLogger(__name__)

class EmailNotConfigured(RuntimeError):
    pass

# module backend.notifications.email_client
def send_email(
    *,
    to: Union[str, List[str]],
    subject: str,
    html: str,
    text: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Envoie un e-mail et retourne la réponse JSON de Resend (ex: {"id": "..."}).
    - Lève EmailNotConfigured si RESEND_API_KEY est absent.
    - Lève httpx.HTTPError (réseau, timeout, statut >= 400).
    """
    if not config.RESEND_API_KEY:
        raise EmailNotConfigured("RESEND_API_KEY manquant")
    payload: Dict[str, Any] = {
        "from": config.EMAIL_FROM,
        "to": to,
        "subject": subject,
        "html": html,
        "reply_to": config.EMAIL_REPLY_TO,
    }
    if text:
        payload["text"] = text
    headers = {
        "Authorization": f"Bearer {config.RESEND_API_KEY}",
        "Content-Type": "application/json",
    }
    resp = httpx.post(config.RESEND_API_URL, json=payload, headers=headers, timeout=10)
    resp.raise_for_status()
    return resp.json()
