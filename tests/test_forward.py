"""
Tests for forward_request.
"""
import time

import httpx
import pytest

from services.exceptions import ForwardRequestError, ForwardSendError
from services.forward import FORWARD_TIMEOUT, forward_request
from tests.conftest import STAGING_URL, RecordingTransport


class TrickleStream(httpx.SyncByteStream):
    """Response body that arrives one byte at a time."""

    def __init__(self, chunks, delay):
        self.chunks = chunks
        self.delay = delay

    def __iter__(self):
        for _ in range(self.chunks):
            time.sleep(self.delay)
            yield b"x"


class TestForwardRequest:

    def test_posts_body_verbatim(self, transport):
        body = b'{"message":{"data":"e30="}}'

        response = forward_request(STAGING_URL, body, transport=transport)

        assert response.status_code == 200
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.content == body
        assert "content-type" not in request.headers

    def test_error_status_is_not_raised_by_default(self):
        response = forward_request(STAGING_URL, b"{}", transport=RecordingTransport(status_code=404))
        assert response.status_code == 404

    def test_error_status_raised_when_requested(self):
        with pytest.raises(ForwardSendError):
            forward_request(STAGING_URL, b"{}", raise_for_status=True, transport=RecordingTransport(status_code=503))

    def test_timeout_is_send_error(self):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ForwardSendError):
            forward_request(STAGING_URL, b"{}", transport=httpx.MockTransport(slow))

    def test_malformed_url_is_request_error(self, transport):
        with pytest.raises(ForwardRequestError):
            forward_request("https://example.com:notaport/", b"{}", transport=transport)

    def test_timeouts(self):
        assert FORWARD_TIMEOUT.connect == 5.0
        assert FORWARD_TIMEOUT.read == 10.0

    def test_trickling_body_hits_deadline(self, monkeypatch):
        monkeypatch.setattr("services.forward.FORWARD_DEADLINE", 0.2)
        transport = httpx.MockTransport(lambda request: httpx.Response(200, stream=TrickleStream(chunks=40, delay=0.05)))

        started = time.monotonic()
        with pytest.raises(ForwardSendError):
            forward_request(STAGING_URL, b"{}", transport=transport)

        assert time.monotonic() - started < 1.0

    def test_slow_response_hits_deadline(self, monkeypatch):
        monkeypatch.setattr("services.forward.FORWARD_DEADLINE", 0.1)

        def slow(request):
            time.sleep(0.2)
            return httpx.Response(200)

        with pytest.raises(ForwardSendError):
            forward_request(STAGING_URL, b"{}", transport=httpx.MockTransport(slow))

    def test_fast_body_within_deadline(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, stream=TrickleStream(chunks=3, delay=0)))
        assert forward_request(STAGING_URL, b"{}", transport=transport).status_code == 200
