import base64
import logging
from typing import Callable, Optional

from pydantic import ValidationError

from config import Settings
from schemas.notification import DeveloperNotification, SubscriptionPurchase, WebhookMessage, WebhookRequest
from services.exceptions import (
    ForwardRequestError,
    ForwardSendError,
    InvalidNotificationShapeError,
    VerificationClientError,
    VerificationError,
)
from services.forward import forward_request
from services.verification import PlayStoreClient

logger = logging.getLogger(__name__)

# purchaseType value Google Play reports for license-tester purchases.
PURCHASE_TYPE_TEST = 0


def build_envelope(raw_payload: bytes) -> bytes:
    """
    Wraps the raw RTDN bytes as {"message": {"data": "<base64>"}} for the webhook service.
    A serialization failure is logged and an empty body is returned.
    """
    try:
        webhook = WebhookRequest(message=WebhookMessage(data=base64.b64encode(raw_payload).decode("ascii")))
        return webhook.model_dump_json().encode("utf-8")
    except (TypeError, ValueError) as e:
        logger.error("Error happens when serializing WebhookRequest object. Error: %s", e)
        return b""


def parse_notification(raw_payload: bytes) -> DeveloperNotification:
    """Decodes the RTDN. On failure the error is logged and an empty notification is returned."""
    try:
        return DeveloperNotification.model_validate_json(raw_payload)
    except ValidationError as e:
        logger.warning("Error happens when decoding data to DeveloperNotification object. Error: %s", e)
        return DeveloperNotification()


def is_test_purchase(purchase: SubscriptionPurchase) -> bool:
    return purchase.purchase_type == PURCHASE_TYPE_TEST


class NotificationRelay:
    """
    Forwards Google Play notifications to the staging or production webhook.

    Test notifications always go to staging. Subscription notifications are
    verified against the Play Developer API first and routed by purchaseType.
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: Callable[[str], Optional[PlayStoreClient]] = PlayStoreClient.from_service_account_key,
        transport=None,
    ):
        self.settings = settings
        self.client_factory = client_factory
        self.transport = transport

    def handle(self, raw_payload: bytes) -> None:
        logger.info("incoming message: %s", raw_payload.decode("utf-8", errors="replace"))

        forward_body = build_envelope(raw_payload)
        notification = parse_notification(raw_payload)

        if notification.test_notification is not None:
            self._redirect(self.settings.staging_url, forward_body)
            return

        sub_notification = notification.subscription_notification
        if sub_notification is None:
            logger.error("Notification carries neither testNotification nor subscriptionNotification")
            raise InvalidNotificationShapeError("Notification carries neither testNotification nor subscriptionNotification.")

        client = self._init_client()

        try:
            purchase = client.verify_subscription(
                notification.package_name,
                sub_notification.subscription_id,
                sub_notification.purchase_token,
            )
        except Exception as e:
            logger.error("Request failed when verify subscription: %s", e)
            raise VerificationError(f"Failed to verify subscription {sub_notification.subscription_id}: {e}") from e

        if is_test_purchase(purchase):
            self._redirect(self.settings.staging_url, forward_body)
        else:
            self._redirect(self.settings.production_url, forward_body)

    def _init_client(self) -> PlayStoreClient:
        try:
            client = self.client_factory(self.settings.service_account_key)
        except Exception as e:
            logger.error("Request failed when init playstore client: %s", e)
            raise VerificationClientError(f"Failed to initialize Google Play client: {e}") from e

        if client is None:
            logger.error("Request failed when init playstore client: no client returned")
            raise VerificationClientError("Failed to initialize Google Play client: no client returned.")
        return client

    def _redirect(self, url: str, body: bytes) -> None:
        try:
            forward_request(
                url,
                body,
                raise_for_status=self.settings.forward_raise_for_status,
                transport=self.transport,
            )
        except (ForwardRequestError, ForwardSendError) as e:
            logger.error("Redirect request failed: %s", e)
            raise
