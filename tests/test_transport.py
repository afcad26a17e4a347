"""HttpxTransport against respx-mocked endpoints."""
import json

import httpx
import pytest
import respx

from janis_request import HTTPClientError, HttpxTransport
from janis_request.core.errors import SerializationError

BASE_URL = "https://picking.janisdev.in/api"


@pytest.fixture
async def transport():
    async with HttpxTransport(timeout=5.0) as t:
        yield t


class TestHttpxTransport:
    @respx.mock(base_url=BASE_URL)
    async def test_get_returns_parsed_json(self, transport, respx_mock):
        respx_mock.get("/session").respond(
            200, json=[{"id": "1"}], headers={"x-janis-total": "20"}
        )
        response = await transport.execute({"method": "get", "url": f"{BASE_URL}/session"})
        assert response.status == 200
        assert response.status_text == "OK"
        assert response.data == [{"id": "1"}]
        assert response.headers["x-janis-total"] == "20"

    @respx.mock(base_url=BASE_URL)
    async def test_headers_are_stringified(self, transport, respx_mock):
        respx_mock.get("/session").respond(200, json={})
        await transport.execute({
            "method": "GET",
            "url": f"{BASE_URL}/session",
            "headers": {"x-janis-page": 1, "x-janis-totals": True, "janis-client": "c"},
        })
        request = respx_mock.calls[0].request
        assert request.headers["x-janis-page"] == "1"
        assert request.headers["x-janis-totals"] == "true"
        assert request.headers["janis-client"] == "c"

    @respx.mock(base_url=BASE_URL)
    async def test_post_sends_json_body(self, transport, respx_mock):
        respx_mock.post("/session").respond(201, json={"id": "1"})
        response = await transport.execute({
            "method": "POST",
            "url": f"{BASE_URL}/session",
            "data": {"name": "test"},
        })
        assert json.loads(respx_mock.calls[0].request.content) == {"name": "test"}
        assert response.status == 201

    @respx.mock(base_url=BASE_URL)
    async def test_params_option_is_forwarded(self, transport, respx_mock):
        respx_mock.get("/session").respond(200, json={})
        await transport.execute({
            "method": "GET",
            "url": f"{BASE_URL}/session",
            "params": {"lang": "es"},
            "unknownOption": True,
        })
        assert "lang=es" in str(respx_mock.calls[0].request.url)

    @respx.mock(base_url=BASE_URL)
    async def test_non_json_body_is_text(self, transport, respx_mock):
        respx_mock.get("/file").respond(200, text="plain text", headers={"content-type": "text/plain"})
        response = await transport.execute({"method": "GET", "url": f"{BASE_URL}/file"})
        assert response.data == "plain text"

    @respx.mock(base_url=BASE_URL)
    async def test_empty_body_is_none(self, transport, respx_mock):
        respx_mock.delete("/session/1").respond(204)
        response = await transport.execute({"method": "DELETE", "url": f"{BASE_URL}/session/1"})
        assert response.data is None

    @respx.mock(base_url=BASE_URL)
    async def test_http_error_carries_response(self, transport, respx_mock):
        respx_mock.get("/session").respond(403, json={"message": "unauthorized token"})
        with pytest.raises(HTTPClientError, match="status code 403") as exc_info:
            await transport.execute({"method": "GET", "url": f"{BASE_URL}/session"})
        response = exc_info.value.response
        assert response.status == 403
        assert response.status_text == "Forbidden"
        assert response.data == {"message": "unauthorized token"}

    @respx.mock(base_url=BASE_URL)
    async def test_timeout_means_request_sent_without_response(self, transport, respx_mock):
        respx_mock.get("/session").mock(side_effect=httpx.ConnectTimeout("Connection timed out"))
        with pytest.raises(HTTPClientError, match="Connection timed out") as exc_info:
            await transport.execute({"method": "GET", "url": f"{BASE_URL}/session"})
        assert exc_info.value.response is None
        assert exc_info.value.request_sent is True

    @respx.mock(base_url=BASE_URL)
    async def test_non_ascii_headers_are_sent_as_utf8(self, transport, respx_mock):
        respx_mock.get("/session").respond(200, json={})
        await transport.execute({
            "method": "GET",
            "url": f"{BASE_URL}/session",
            "headers": {"janis-app-name": "Almacén", "janis-app-device-name": "Moto gñ"},
        })
        request = respx_mock.calls[0].request
        assert dict(request.headers.raw)[b"janis-app-device-name"] == "Moto gñ".encode("utf-8")
        assert request.headers["janis-app-device-name"] == "Moto gñ"
        assert request.headers["janis-app-name"] == "Almacén"

    async def test_unencodable_header(self, transport):
        with pytest.raises(SerializationError, match="headers could not be encoded"):
            await transport.execute({
                "method": "GET",
                "url": f"{BASE_URL}/session",
                "headers": {"x-broken": "\ud800"},
            })

    async def test_unencodable_body(self, transport):
        with pytest.raises(SerializationError):
            await transport.execute({
                "method": "POST",
                "url": f"{BASE_URL}/session",
                "data": {"when": object()},
            })

    async def test_context_manager_closes_client(self):
        async with HttpxTransport() as t:
            assert not t._http.is_closed
        assert t._http.is_closed
