"""
Erreurs terminales du checkout, rendues en JSON par le handler enregistré dans app_setup.exceptions.
- ValidationError (400): panier/coordonnées invalides, aucun effet de bord.
- PaymentRejected (400): paiement non confirmé ou passerelle en erreur, aucune écriture.
- PersistenceError (500): l'en-tête de commande n'a pas pu être écrit.
"""
from typing import Any, Dict, Optional


class CheckoutError(Exception):
    status_code = 500
    error = "Checkout failed"

    def __init__(self, message: str = "", *, details: Any = None):
        super().__init__(message or self.error)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.message:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(CheckoutError):
    status_code = 400
    error = "Invalid request data"


class PaymentRejected(CheckoutError):
    status_code = 400
    error = "Payment has not been completed"

    def __init__(self, message: str = "", *, reason: Optional[str] = None):
        super().__init__(message)
        self.reason = reason


class PersistenceError(CheckoutError):
    status_code = 500
    error = "Failed to create order in database"
