import json
import logging
import os

from google.oauth2 import service_account
from googleapiclient.discovery import build

from schemas.notification import SubscriptionPurchase

logger = logging.getLogger(__name__)

# Scope for the Android Publisher API.
SCOPES = ['https://www.googleapis.com/auth/androidpublisher']


def load_credentials(service_account_key: str):
    """
    Builds service account credentials from either the key JSON itself or a
    path to the key file.
    """
    if not service_account_key:
        raise ValueError("Service account key is not configured. Set SERVICE_ACCOUNT_JSON_KEY.")

    if service_account_key.lstrip().startswith("{"):
        info = json.loads(service_account_key)
        return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)

    if not os.path.isfile(service_account_key):
        raise ValueError(f"Service account key file not found: {service_account_key}")

    return service_account.Credentials.from_service_account_file(service_account_key, scopes=SCOPES)


class PlayStoreClient:
    """Thin wrapper over the Google Play Developer API (androidpublisher v3)."""

    def __init__(self, service):
        self.service = service

    @classmethod
    def from_service_account_key(cls, service_account_key: str) -> "PlayStoreClient":
        credentials = load_credentials(service_account_key)
        service = build('androidpublisher', 'v3', credentials=credentials, cache_discovery=False)
        return cls(service)

    def verify_subscription(self, package_name: str, subscription_id: str, purchase_token: str) -> SubscriptionPurchase:
        purchase = self.service.purchases().subscriptions().get(
            packageName=package_name,
            subscriptionId=subscription_id,
            token=purchase_token
        ).execute()
        logger.debug("Subscription purchase for %s/%s: %s", package_name, subscription_id, purchase)
        return SubscriptionPurchase.model_validate(purchase)
