from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SubscriptionNotification(BaseModel):
    """
    The subscriptionNotification part of a Google Play RTDN.
    """
    model_config = ConfigDict(populate_by_name=True)

    version: str = ""
    notification_type: int = Field(0, alias="notificationType")
    purchase_token: str = Field("", alias="purchaseToken")
    subscription_id: str = Field("", alias="subscriptionId")


class TestNotification(BaseModel):
    """Sent by the Play Console to check that the endpoint is reachable."""

    version: str = ""


class DeveloperNotification(BaseModel):
    """
    Real-Time Developer Notification (RTDN) as published by Google Play.

    Every field has a zero value so an undecodable payload still yields a
    usable (empty) notification.
    """
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    version: str = ""
    package_name: str = Field("", alias="packageName")
    event_time_millis: str = Field("", alias="eventTimeMillis")
    subscription_notification: Optional[SubscriptionNotification] = Field(None, alias="subscriptionNotification")
    test_notification: Optional[TestNotification] = Field(None, alias="testNotification")


class SubscriptionPurchase(BaseModel):
    """
    Response of purchases.subscriptions.get. Only purchaseType drives routing:
    0 is a license-tester (sandbox) purchase, anything else is production.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    purchase_type: Optional[int] = Field(None, alias="purchaseType")


class WebhookMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: str


class WebhookRequest(BaseModel):
    """
    Envelope POSTed to the downstream webhook service.
    `message.data` holds the base64 of the original RTDN bytes.
    """
    model_config = ConfigDict(frozen=True)

    message: WebhookMessage


class PubSubMessage(BaseModel):
    """
    The message part of a Pub/Sub push request.
    `data` is the base64-encoded JSON of a DeveloperNotification.
    """
    data: str
    message_id: Optional[str] = Field(None, alias="messageId")
    publish_time: Optional[str] = Field(None, alias="publishTime")


class PubSubPush(BaseModel):
    message: PubSubMessage
    subscription: Optional[str] = None
