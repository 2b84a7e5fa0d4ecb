from fastapi import Request, HTTPException, Depends
from typing import Optional, Dict, Any
import logging

from backend import config
import backend.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

COOKIE_NAME = "sb_access"

def determine_role(email: Optional[str], metadata: Dict[str, Any] | None) -> str:
    """
    Rôle applicatif: "admin" si metadata.role == "admin" ou si l'e-mail figure dans ADMIN_EMAILS.
    """
    if str((metadata or {}).get("role", "")).lower() == "admin":
        return "admin"
    if email and email.lower() in {e.lower() for e in config.ADMIN_EMAILS}:
        return "admin"
    return "user"

def _token_from_request(request: Request) -> Optional[str]:
    # Hybride: priorité au Bearer, fallback cookie
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        if token:
            return token
    return request.cookies.get(COOKIE_NAME)

def get_current_user(request: Request) -> Dict[str, Any]:
    token = _token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Non authentifié")
    try:
        res = supabase_client.get_supabase().auth.get_user(token)
        user = getattr(res, "user", None)
    except Exception:
        logger.info("security.get_current_user invalid token")
        raise HTTPException(status_code=401, detail="Session expirée, veuillez vous connecter")
    if not user or not getattr(user, "id", None):
        raise HTTPException(status_code=401, detail="Session expirée, veuillez vous connecter")
    email = getattr(user, "email", None)
    metadata = getattr(user, "user_metadata", None) or {}
    return {
        "id": user.id,
        "email": email,
        "metadata": metadata,
        "role": determine_role(email, metadata),
    }

def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Accès interdit")
    return user
