import base64
import binascii
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from dependencies import get_relay
from schemas.notification import PubSubPush
from services.exceptions import RelayError
from services.relay import NotificationRelay

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
)


@router.post("/pubsub", status_code=status.HTTP_204_NO_CONTENT)
def relay_pubsub_notification(
    payload: PubSubPush,
    relay: NotificationRelay = Depends(get_relay),
):
    """
    Receives a Google Play RTDN pushed by Cloud Pub/Sub and relays it.

    Pub/Sub treats any non-2xx answer as a failed delivery and redelivers,
    so relay errors are answered with 500.
    """
    try:
        raw_payload = base64.b64decode(payload.message.data, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning("Pub/Sub message %s has invalid base64 data: %s", payload.message.message_id, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="message.data is not valid base64."
        )

    try:
        relay.handle(raw_payload)
    except RelayError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return
