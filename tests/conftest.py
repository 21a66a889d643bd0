"""
Shared pytest fixtures.
"""
import os
from unittest.mock import MagicMock

import httpx
import pytest

os.environ.setdefault("STAGING_URL", "https://staging.example.com/webhook")
os.environ.setdefault("PRODUCTION_URL", "https://production.example.com/webhook")
os.environ.setdefault("SERVICE_ACCOUNT_JSON_KEY", '{"type": "service_account"}')

from config import Settings  # noqa: E402
from schemas.notification import SubscriptionPurchase  # noqa: E402

STAGING_URL = "https://staging.example.com/webhook"
PRODUCTION_URL = "https://production.example.com/webhook"

TEST_PAYLOAD = b'{"testNotification":{"version":"1.0"}}'
SUBSCRIPTION_PAYLOAD = (
    b'{"packageName":"com.app","subscriptionNotification":'
    b'{"subscriptionId":"sub1","purchaseToken":"tok1"}}'
)


class RecordingTransport(httpx.BaseTransport):
    """Records every outgoing request and answers with a fixed status."""

    def __init__(self, status_code=200):
        self.status_code = status_code
        self.requests = []

    def handle_request(self, request):
        request.read()
        self.requests.append(request)
        return httpx.Response(self.status_code, text="ok")


@pytest.fixture
def settings():
    return Settings(
        staging_url=STAGING_URL,
        production_url=PRODUCTION_URL,
        service_account_key='{"type": "service_account"}',
    )


@pytest.fixture
def transport():
    return RecordingTransport()


def make_client(purchase_type=None, error=None):
    """Play client mock returning a purchase with the given purchaseType."""
    client = MagicMock()
    if error is not None:
        client.verify_subscription.side_effect = error
    else:
        client.verify_subscription.return_value = SubscriptionPurchase(purchaseType=purchase_type)
    return client
