"""Tests for the HTTP gateway and its error normalization."""

import json

import httpx
import pytest

from portal.integrations.gateway import PortalAPIError


class TestSuccessfulRequests:
    """Decoding of successful responses."""

    @pytest.mark.asyncio
    async def test_json_body_is_returned(self, make_gateway):
        gateway = make_gateway(lambda request: httpx.Response(200, json={"id": "a1"}))

        assert await gateway.request("/api/assessments/a1") == {"id": "a1"}

    @pytest.mark.asyncio
    async def test_empty_body_is_empty_dict(self, make_gateway):
        gateway = make_gateway(lambda request: httpx.Response(204))

        assert await gateway.request("/api/interviews/i1", "DELETE") == {}

    @pytest.mark.asyncio
    async def test_bearer_token_and_json_body_are_sent(self, make_gateway, session):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            seen["content_type"] = request.headers.get("Content-Type")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True})

        session.token = "abc"
        gateway = make_gateway(handler)
        await gateway.request("/login", "POST", {"email": "a@b.c"})

        assert seen["auth"] == "Bearer abc"
        assert seen["content_type"] == "application/json"
        assert seen["body"] == {"email": "a@b.c"}

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self, make_gateway):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=[])

        await make_gateway(handler).request("/api/assessments")

        assert seen["auth"] is None


class TestFailures:
    """Every failure mode surfaces as PortalAPIError."""

    @pytest.mark.asyncio
    async def test_error_field_is_used(self, make_gateway):
        gateway = make_gateway(lambda request: httpx.Response(400, json={"error": "Already booked"}))

        with pytest.raises(PortalAPIError) as exc_info:
            await gateway.request("/api/interviews/i1/book", "POST", {})

        assert exc_info.value.message == "Already booked"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_message_field_is_fallback(self, make_gateway):
        gateway = make_gateway(lambda request: httpx.Response(403, json={"message": "Forbidden"}))

        with pytest.raises(PortalAPIError, match="Forbidden"):
            await gateway.request("/api/assessments/my")

    @pytest.mark.asyncio
    async def test_status_fallback_when_body_is_empty(self, make_gateway):
        gateway = make_gateway(lambda request: httpx.Response(500))

        with pytest.raises(PortalAPIError) as exc_info:
            await gateway.request("/api/assessments")

        assert exc_info.value.message == "Request failed with status 500"

    @pytest.mark.asyncio
    async def test_invalid_json(self, make_gateway):
        gateway = make_gateway(
            lambda request: httpx.Response(
                200, content=b"{not json", headers={"content-type": "application/json"}
            )
        )

        with pytest.raises(PortalAPIError) as exc_info:
            await gateway.request("/api/assessments")

        assert exc_info.value.message == "Invalid JSON response from server"

    @pytest.mark.asyncio
    async def test_non_json_text(self, make_gateway):
        gateway = make_gateway(
            lambda request: httpx.Response(
                502, text="<html>Bad Gateway</html>", headers={"content-type": "text/html"}
            )
        )

        with pytest.raises(PortalAPIError) as exc_info:
            await gateway.request("/api/assessments")

        assert exc_info.value.message == "Server returned non-JSON response"
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_transport_error(self, make_gateway):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(PortalAPIError) as exc_info:
            await make_gateway(handler).request("/api/assessments")

        assert exc_info.value.message == "Connection refused"
        assert exc_info.value.status_code is None
