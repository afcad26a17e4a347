"""Default transport over async httpx."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from janis_request.config import settings
from janis_request.core.capabilities import Transport
from janis_request.core.errors import HTTPClientError, SerializationError
from janis_request.schemas.request import TransportResponse

logger = logging.getLogger(__name__)

# Extra config keys forwarded to ``AsyncClient.build_request`` / ``send``
_BUILD_OPTIONS = ("params", "cookies", "timeout", "extensions")
_SEND_OPTIONS = ("auth", "follow_redirects")


def _header_value(value: Any) -> bytes:
    # httpx encodes str header values as ASCII only
    if isinstance(value, bool):
        value = "true" if value else "false"
    return str(value).encode("utf-8")


def _parse_body(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


class HttpxTransport(Transport):
    """Transport over a shared ``httpx.AsyncClient``.

    4xx/5xx answers are raised as ``HTTPClientError`` with the parsed
    response attached, network failures with ``request_sent=True``.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        # Caller must close via ``aclose()`` unless it passed its own client
        self._http = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.request_timeout,
            follow_redirects=True,
        )

    async def execute(self, config: Dict[str, Any]) -> TransportResponse:
        options = dict(config)
        method = str(options.pop("method", "GET")).upper()
        url = options.pop("url")
        headers = options.pop("headers", None) or {}
        data = options.pop("data", None)

        build_kwargs = {key: options.pop(key) for key in _BUILD_OPTIONS if key in options}
        send_kwargs = {key: options.pop(key) for key in _SEND_OPTIONS if key in options}
        if options:
            logger.debug(f"Ignoring unsupported transport options: {sorted(options)}")

        try:
            request_headers = {key: _header_value(value) for key, value in headers.items()}
        except UnicodeEncodeError as exc:
            raise SerializationError(f"Request headers could not be encoded: {exc}") from exc

        try:
            request = self._http.build_request(
                method,
                url,
                headers=request_headers,
                json=data,
                **build_kwargs,
            )
        except httpx.InvalidURL as exc:
            raise HTTPClientError(str(exc)) from exc
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Request body could not be encoded: {exc}") from exc

        try:
            resp = await self._http.send(request, **send_kwargs)
        except httpx.RequestError as exc:
            raise HTTPClientError(str(exc) or type(exc).__name__, request_sent=True) from exc

        logger.debug(f"{method} {url} -> {resp.status_code}")

        response = TransportResponse(
            status=resp.status_code,
            headers=dict(resp.headers),
            data=_parse_body(resp),
            status_text=resp.reason_phrase,
        )
        if resp.is_error:
            raise HTTPClientError(
                f"Request failed with status code {resp.status_code}",
                response=response,
            )
        return response

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
