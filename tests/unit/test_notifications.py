import httpx
import pytest
from unittest.mock import MagicMock

from backend import config
from backend.notifications import service as notifications_service
from backend.notifications.email_client import send_email, EmailNotConfigured

ORDER = {
    "id": "ord-1",
    "customer_name": "Jane <Doe>",
    "customer_email": "jane@example.com",
    "shipping_address": "1 Main St",
    "city": "Springfield",
    "postal_code": "12345",
    "country": "US",
    "total": 67.99,
}
ITEMS = [{
    "name": "Paris Map",
    "quantity": 2,
    "price": 27.5,
    "frame_size": "SIZE_12X12",
    "frame_type": "PINE",
    "engraving_text": "Our first trip",
}]


def test_order_confirmation_content(sent_emails):
    result = notifications_service.send_order_confirmation(ORDER, ITEMS)
    assert result["success"] is True
    mail = sent_emails[0]
    assert mail["to"] == "jane@example.com"
    assert "#ord-1" in mail["subject"]
    assert '2 x Paris Map (12" x 12", Pine Wood) - $27.50' in mail["text"]
    assert "Total: $67.99" in mail["text"]
    assert "Jane &lt;Doe&gt;" in mail["html"]

def test_shipping_update_subject(sent_emails):
    result = notifications_service.send_shipping_update(ORDER, "SHIPPED")
    assert result["success"] is True
    assert sent_emails[0]["subject"].startswith("Your Maps & Memories Order Has Shipped!")
    assert "now shipped" in sent_emails[0]["text"]

def test_missing_recipient_is_reported():
    result = notifications_service.send_order_confirmation({"id": "ord-2"}, [])
    assert result["success"] is False
    assert "customer_email" in result["error"]

def test_transport_error_is_reported(monkeypatch):
    def _boom(**kwargs):
        raise httpx.ConnectError("connection refused")
    monkeypatch.setattr("backend.notifications.email_client.send_email", _boom)
    result = notifications_service.send_shipping_update(ORDER, "DELIVERED")
    assert result == {"success": False, "error": "connection refused"}

def test_send_email_posts_to_resend(monkeypatch):
    monkeypatch.setattr(config, "RESEND_API_KEY", "re_test")
    response = MagicMock()
    response.json.return_value = {"id": "email-123"}
    post = MagicMock(return_value=response)
    monkeypatch.setattr(httpx, "post", post)

    data = send_email(to="jane@example.com", subject="Hello", html="<p>Hi</p>", text="Hi")

    assert data == {"id": "email-123"}
    response.raise_for_status.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == config.RESEND_API_URL
    assert kwargs["headers"]["Authorization"] == "Bearer re_test"
    assert kwargs["json"]["from"] == config.EMAIL_FROM
    assert kwargs["json"]["reply_to"] == config.EMAIL_REPLY_TO
    assert kwargs["json"]["text"] == "Hi"

def test_send_email_requires_api_key(monkeypatch):
    monkeypatch.setattr(config, "RESEND_API_KEY", "")
    with pytest.raises(EmailNotConfigured):
        send_email(to="jane@example.com", subject="Hello", html="<p>Hi</p>")
