import logging
import time
from typing import Optional

import httpx

from services.exceptions import ForwardRequestError, ForwardSendError

logger = logging.getLogger(__name__)

# Connect covers both TCP connect and the TLS handshake in httpx.
FORWARD_TIMEOUT = httpx.Timeout(10.0, connect=5.0)
# Whole round trip, response body included.
FORWARD_DEADLINE = 10.0


def forward_request(
    destination_url: str,
    body: bytes,
    raise_for_status: bool = False,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Response:
    """
    POSTs `body` to `destination_url` as-is.

    Any completed round trip counts as success unless `raise_for_status` is
    set, in which case 4xx/5xx responses raise ForwardSendError. A round trip
    longer than FORWARD_DEADLINE raises ForwardSendError.
    """
    logger.info("Send json to %s\n%s", destination_url, body.decode("utf-8", errors="replace"))

    deadline = time.monotonic() + FORWARD_DEADLINE

    with httpx.Client(timeout=FORWARD_TIMEOUT, transport=transport) as client:
        try:
            request = client.build_request("POST", destination_url, content=body)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, TypeError, ValueError) as e:
            logger.error("Failed to create request. Error: %s", e)
            raise ForwardRequestError(f"Failed to create request to {destination_url}: {e}") from e

        try:
            response = client.send(request, stream=True)
            try:
                for _ in response.iter_raw():
                    if time.monotonic() > deadline:
                        raise ForwardSendError(f"Request to {destination_url} exceeded {FORWARD_DEADLINE}s")
            finally:
                response.close()
        except httpx.HTTPError as e:
            logger.error("Failed to send request. Error: %s", e)
            raise ForwardSendError(f"Failed to send request to {destination_url}: {e}") from e
        except ForwardSendError as e:
            logger.error("Failed to send request. Error: %s", e)
            raise

        if time.monotonic() > deadline:
            logger.error("Request to %s exceeded %ss", destination_url, FORWARD_DEADLINE)
            raise ForwardSendError(f"Request to {destination_url} exceeded {FORWARD_DEADLINE}s")

        logger.info("%r", response)

    if raise_for_status and response.is_error:
        raise ForwardSendError(f"{destination_url} answered {response.status_code} {response.reason_phrase}")

    return response
