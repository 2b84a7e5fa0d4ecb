import pytest
import stripe
from unittest.mock import MagicMock

from backend import config
from backend.payments import service as payments_service
from backend.payments import stripe_client


def test_verify_payment_succeeded(fake_stripe):
    result = payments_service.verify_payment("pi_ok")
    assert result.succeeded is True
    assert result.raw_status == "succeeded"
    assert fake_stripe.retrieved == ["pi_ok"]

def test_verify_payment_requires_action(fake_stripe):
    fake_stripe.status = "requires_action"
    result = payments_service.verify_payment("pi_3ds")
    assert result.succeeded is False
    assert result.raw_status == "requires_action"

def test_verify_payment_connection_error(fake_stripe):
    fake_stripe.error = stripe.APIConnectionError("Read timed out")
    with pytest.raises(payments_service.PaymentVerificationFailed) as exc:
        payments_service.verify_payment("pi_slow")
    assert exc.value.kind == "unreachable"
    assert exc.value.payment_ref == "pi_slow"

def test_verify_payment_stripe_error(fake_stripe):
    fake_stripe.error = stripe.AuthenticationError("Invalid API Key provided")
    with pytest.raises(payments_service.PaymentVerificationFailed) as exc:
        payments_service.verify_payment("pi_x")
    assert exc.value.kind == "rejected"

def test_verify_payment_without_key(monkeypatch):
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "")
    retrieve = MagicMock()
    monkeypatch.setattr("backend.payments.stripe_client.retrieve_payment_intent", retrieve)
    with pytest.raises(payments_service.PaymentVerificationFailed) as exc:
        payments_service.verify_payment("pi_x")
    assert exc.value.kind == "rejected"
    retrieve.assert_not_called()

def test_create_payment_intent_converts_to_cents(monkeypatch):
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "sk_test_dummy")
    monkeypatch.setattr(config, "STRIPE_CURRENCY", "usd")
    create = MagicMock(return_value={"id": "pi_new", "client_secret": "pi_new_secret_abc"})
    monkeypatch.setattr("backend.payments.stripe_client.create_payment_intent", create)

    result = payments_service.create_payment_intent(67.99)

    assert result == {"clientSecret": "pi_new_secret_abc"}
    kwargs = create.call_args.kwargs
    assert kwargs["amount_cents"] == 6799
    assert kwargs["currency"] == "usd"
    assert kwargs["metadata"] == {"source": "maps_and_memories_website"}

def test_create_payment_intent_without_key(monkeypatch):
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "")
    with pytest.raises(payments_service.GatewayMisconfigured):
        payments_service.create_payment_intent(10)

def test_stripe_client_sets_key_and_timeout(monkeypatch):
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "sk_test_dummy")
    monkeypatch.setattr(config, "STRIPE_TIMEOUT_SECONDS", 4.0)
    monkeypatch.setattr(stripe, "api_key", None)
    monkeypatch.setattr(stripe, "default_http_client", None)
    retrieve = MagicMock(return_value={"id": "pi_1", "status": "succeeded"})
    monkeypatch.setattr(stripe.PaymentIntent, "retrieve", retrieve)

    intent = stripe_client.retrieve_payment_intent("pi_1")

    assert intent["status"] == "succeeded"
    retrieve.assert_called_once_with("pi_1")
    assert stripe.api_key == "sk_test_dummy"
    assert isinstance(stripe.default_http_client, stripe.RequestsClient)
