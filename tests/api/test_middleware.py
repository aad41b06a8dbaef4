"""Request ID context, sanitization and security headers."""

import logging

from httpx import AsyncClient

from menuhub.middleware.request_id import sanitize_request_id
from menuhub.shared.context import (
    RequestIDLogFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)


class TestSanitizeRequestId:
    def test_well_formed_id_kept(self) -> None:
        assert sanitize_request_id("abc-123_X") == "abc-123_X"

    def test_unsafe_or_missing_id_replaced(self) -> None:
        for raw in (None, "", "has space", "x" * 65, "<script>"):
            generated = sanitize_request_id(raw)
            assert generated != raw
            assert len(generated) == 32


def test_log_filter_adds_request_id() -> None:
    record = logging.LogRecord("menuhub", logging.INFO, __file__, 1, "msg", None, None)
    token = set_request_id("req-1")
    try:
        assert RequestIDLogFilter().filter(record)
        assert record.request_id == "req-1"
    finally:
        reset_request_id(token)
    assert get_request_id() == "-"


async def test_request_id_echoed(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "trace-me-42"})
    assert response.headers["x-request-id"] == "trace-me-42"


async def test_request_id_generated(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert len(response.headers["x-request-id"]) == 32


async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["referrer-policy"] == "no-referrer"
    assert "default-src 'none'" in response.headers["content-security-policy"]
