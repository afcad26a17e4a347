"""
Janis request facade.

``Request`` validates call parameters, refreshes credentials, builds the
Janis URL and headers and dispatches through the injected transport.
Every failure, whatever its origin, is raised as ``RequestFailure``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from janis_request.config import settings
from janis_request.core.capabilities import (
    Analytics,
    CredentialSource,
    DeviceInfoSource,
    ErrorReporter,
    LoggingReporter,
    StaticDeviceInfo,
    Transport,
)
from janis_request.core.errors import RequestFailure, ValidationError
from janis_request.schemas.request import CallParameters, Pagination, ResponseEnvelope
from janis_request.services.credentials import refresh_headers
from janis_request.services.dispatcher import RequestContext, make_request
from janis_request.services.headers import filter_valid_headers
from janis_request.services.query_params import parse_query_params
from janis_request.services.transport import HttpxTransport
from janis_request.services.url_builder import build_url, join_path
from janis_request.utils import is_object, is_string

logger = logging.getLogger(__name__)


def _call_parameters(**kwargs: Any) -> CallParameters:
    """Build ``CallParameters``; ``None`` means "use the default"."""
    return CallParameters(**{key: value for key, value in kwargs.items() if value is not None})


def _text(value: Any) -> str:
    return value if is_string(value) else ""


class Request:
    """Requests to Janis services.

    Example::

        request = Request("janisdev", credentials=oauth, device_info=device)
        session = await request.get(service="picking", namespace="session", id="123")
        sessions = await request.list(
            service="picking",
            namespace="session",
            headers={"page": 3},
            query_params={"filters": {"status": "active"}, "sort": {"sortBy": "createdAt"}},
        )
        print(sessions.result, sessions.is_last_page, sessions.total)
    """

    def __init__(
        self,
        janis_env: Optional[str] = None,
        *,
        credentials: CredentialSource,
        device_info: Optional[DeviceInfoSource] = None,
        transport: Optional[Transport] = None,
        reporter: Optional[ErrorReporter] = None,
        analytics: Optional[Analytics] = None,
    ):
        self._janis_env = janis_env or settings.env
        if not self._janis_env:
            logger.warning("No Janis environment configured (set JANIS_ENV)")
        self.credentials = credentials
        self.device_info = device_info or StaticDeviceInfo()
        # Only a transport created here is closed by aclose()
        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport()
        self.reporter = reporter or LoggingReporter()
        self.analytics = analytics

    @property
    def janis_env(self) -> str:
        return self._janis_env

    # -- public API --

    async def get(
        self,
        *,
        service: Optional[str] = None,
        namespace: Optional[str] = None,
        id: Optional[str] = None,
        endpoint: Optional[str] = None,
        headers: Optional[dict[str, Any]] = None,
        path_params: Optional[list[Union[str, int]]] = None,
        action: Optional[str] = None,
        query_params: Optional[dict[str, Any]] = None,
        extra_config: Optional[dict[str, Any]] = None,
    ) -> ResponseEnvelope:
        """GET an entity (or entities) from a Janis service.

        With ``endpoint`` the request goes straight to that URL with only the
        caller's headers and no credential lookup, which allows fetching
        arbitrary external resources.
        """
        params = _call_parameters(
            service=service,
            namespace=namespace,
            id=id,
            endpoint=endpoint,
            headers=headers,
            path_params=path_params,
            action=action,
            query_params=query_params,
            extra_config=extra_config,
        )
        if params.endpoint and is_string(params.endpoint):
            return await self._get_by_endpoint(params)
        return await self.prepare_and_make_request("GET", "GET", params)

    async def list(
        self,
        *,
        service: Optional[str] = None,
        namespace: Optional[str] = None,
        headers: Optional[dict[str, Any]] = None,
        query_params: Optional[dict[str, Any]] = None,
        path_params: Optional[list[Union[str, int]]] = None,
        action: Optional[str] = None,
        extra_config: Optional[dict[str, Any]] = None,
    ) -> ResponseEnvelope:
        """GET a page of entities.

        ``headers`` may carry ``page``, ``pageSize``, ``getTotals`` and
        ``getOnlyTotals``; missing ones come from ``Pagination()``.
        """
        given = headers if is_object(headers) else {}
        params = _call_parameters(
            service=service,
            namespace=namespace,
            headers={
                **Pagination().as_headers(),
                **{key: value for key, value in given.items() if value is not None},
            },
            query_params=query_params,
            path_params=path_params,
            action=action,
            extra_config=extra_config,
        )
        return await self.prepare_and_make_request("LIST", "GET", params)

    async def post(
        self,
        *,
        service: Optional[str] = None,
        namespace: Optional[str] = None,
        endpoint: Optional[str] = None,
        id: Optional[str] = None,
        body: Optional[Union[dict[str, Any], list[Any]]] = None,
        path_params: Optional[list[Union[str, int]]] = None,
        action: Optional[str] = None,
        headers: Optional[dict[str, Any]] = None,
        query_params: Optional[dict[str, Any]] = None,
        extra_config: Optional[dict[str, Any]] = None,
    ) -> ResponseEnvelope:
        params = _call_parameters(
            service=service,
            namespace=namespace,
            endpoint=endpoint,
            id=id,
            body=body,
            path_params=path_params,
            action=action,
            headers=headers,
            query_params=query_params,
            extra_config=extra_config,
        )
        return await self.prepare_and_make_request("POST", "POST", params)

    async def put(
        self,
        *,
        service: Optional[str] = None,
        namespace: Optional[str] = None,
        endpoint: Optional[str] = None,
        id: Optional[str] = None,
        body: Optional[Union[dict[str, Any], list[Any]]] = None,
        path_params: Optional[list[Union[str, int]]] = None,
        action: Optional[str] = None,
        headers: Optional[dict[str, Any]] = None,
        query_params: Optional[dict[str, Any]] = None,
        extra_config: Optional[dict[str, Any]] = None,
    ) -> ResponseEnvelope:
        params = _call_parameters(
            service=service,
            namespace=namespace,
            endpoint=endpoint,
            id=id,
            body=body,
            path_params=path_params,
            action=action,
            headers=headers,
            query_params=query_params,
            extra_config=extra_config,
        )
        return await self.prepare_and_make_request("PUT", "PUT", params)

    async def patch(
        self,
        *,
        service: Optional[str] = None,
        namespace: Optional[str] = None,
        endpoint: Optional[str] = None,
        id: Optional[str] = None,
        body: Optional[Union[dict[str, Any], list[Any]]] = None,
        path_params: Optional[list[Union[str, int]]] = None,
        action: Optional[str] = None,
        headers: Optional[dict[str, Any]] = None,
        query_params: Optional[dict[str, Any]] = None,
        extra_config: Optional[dict[str, Any]] = None,
    ) -> ResponseEnvelope:
        params = _call_parameters(
            service=service,
            namespace=namespace,
            endpoint=endpoint,
            id=id,
            body=body,
            path_params=path_params,
            action=action,
            headers=headers,
            query_params=query_params,
            extra_config=extra_config,
        )
        return await self.prepare_and_make_request("PATCH", "PATCH", params)


    # -- orchestration --

    async def prepare_and_make_request(
        self, method: str, http_verb: str, params: CallParameters
    ) -> ResponseEnvelope:
        """Validate, refresh credentials, build URL + headers and dispatch.

        Args:
            method: Logical method tag used in logs and error reports
                (``GET``, ``LIST``, ``POST``...).
            http_verb: HTTP method actually sent.
            params: The call description.

        Raises:
            RequestFailure: on any failure, carrying the ``ErrorEnvelope``.
        """
        try:
            has_endpoint = bool(params.endpoint) and is_string(params.endpoint)
            if not has_endpoint:
                self._validate(params)

            headers = await refresh_headers(params.headers, self.credentials, self.device_info)

            url = params.endpoint if has_endpoint else build_url(
                service=params.service,
                environment=self.janis_env,
                namespace=params.namespace,
                path_params=join_path(params.path_params),
                id=params.id,
                action=params.action,
                query_params=parse_query_params(params.query_params),
            )

            return await make_request(
                http_verb=http_verb,
                url=url,
                data=params.body,
                headers=headers,
                extended_config=params.extra_config,
                context=self._context(method, params),
                transport=self.transport,
                reporter=self.reporter,
                analytics=self.analytics,
            )
        except Exception as exc:
            raise self._failure(method, params, exc) from exc

    async def _get_by_endpoint(self, params: CallParameters) -> ResponseEnvelope:
        self.reporter.log(f"get: {params.endpoint}")
        try:
            return await make_request(
                http_verb="GET",
                url=params.endpoint,
                headers=filter_valid_headers(params.headers),
                extended_config=params.extra_config,
                context=RequestContext(method="GET"),
                transport=self.transport,
                reporter=self.reporter,
                analytics=self.analytics,
            )
        except Exception as exc:
            raise self._failure("GET", params, exc) from exc

    @staticmethod
    def _validate(params: CallParameters) -> None:
        if not params.namespace or not is_string(params.namespace):
            raise ValidationError("namespace is not valid")
        if not params.service or not is_string(params.service):
            raise ValidationError("service is not valid")
        if not is_string(params.id):
            raise ValidationError("id is not valid")

    @staticmethod
    def _context(method: str, params: CallParameters) -> RequestContext:
        return RequestContext(
            method=method,
            service=_text(params.service),
            namespace=_text(params.namespace),
            id=_text(params.id),
        )

    def _failure(self, method: str, params: CallParameters, exc: Exception) -> RequestFailure:
        failure = RequestFailure.from_error(exc)
        reason = getattr(exc, "message", None) or str(exc)
        self.reporter.record_error(
            exc,
            f"Error at {method}: service: {_text(params.service)} "
            f"namespace: {_text(params.namespace)} reason: {reason}",
        )
        logger.debug(f"{method} failed: {failure.envelope.model_dump()}")
        return failure

    # -- lifecycle --

    async def aclose(self) -> None:
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> "Request":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
