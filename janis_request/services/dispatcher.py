"""Executes a prepared request and normalizes the outcome."""
import logging
import math
from dataclasses import dataclass
from time import monotonic
from typing import Any, Optional, Union

from janis_request.config import settings
from janis_request.core.capabilities import Analytics, ErrorReporter, Transport
from janis_request.core.errors import (
    HTTPClientError,
    JanisRequestError,
    TransportError,
    UpstreamError,
)
from janis_request.schemas.request import ResponseEnvelope, TransportResponse
from janis_request.services.headers import APP_PACKAGE_NAME, APP_VERSION, PAGE_SIZE_HEADER
from janis_request.utils import is_array, is_number, is_object, is_string

logger = logging.getLogger(__name__)

TOTAL_HEADER = "x-janis-total"
MEASUREMENT_ACTION = "measurement_requests"


@dataclass
class RequestContext:
    """Who is calling what; only used for logs and error reports."""
    method: str
    service: str = ""
    namespace: str = ""
    id: str = ""

    def describe_failure(self, url: str) -> str:
        id_part = f"id: {self.id}" if self.id else ""
        return (
            f"Error at {self.method}: service: {self.service} "
            f"namespace: {self.namespace} {id_part} URL:{url}"
        )


def parse_total(value: Any) -> Optional[Union[int, float]]:
    """Numeric value of ``x-janis-total``.

    ``None`` when missing, unparseable, infinite or zero. A real zero total
    is therefore indistinguishable from an absent header.
    """
    if value is None:
        return None
    try:
        total = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(total) or not total:
        return None
    return int(total) if total.is_integer() else total


def _normalize(response: TransportResponse, request_headers: Any) -> ResponseEnvelope:
    response_headers = dict(response.headers or {})
    total = parse_total(response_headers.pop(TOTAL_HEADER, None))

    page_size = request_headers.get(PAGE_SIZE_HEADER) if is_object(request_headers) else None
    is_last_page = bool(
        is_array(response.data) and is_number(page_size) and len(response.data) < page_size
    )

    return ResponseEnvelope(
        result=response.data,
        headers=response_headers,
        status_code=response.status,
        status_text=response.status_text if is_string(response.status_text) and response.status_text else None,
        is_last_page=is_last_page,
        total=total,
    )


def _to_pipeline_error(exc: Exception) -> JanisRequestError:
    if isinstance(exc, JanisRequestError):
        return exc
    if not isinstance(exc, HTTPClientError):
        return TransportError(str(exc), result={"message": str(exc)})

    response = exc.response
    if response is None:
        # Sent without an answer, or failed while being set up
        return TransportError(exc.message, result={"message": exc.message})

    body = response.data
    message = exc.message
    if is_object(body):
        body_message = body.get("message")
        if is_string(body_message) and body_message:
            message = body_message
        result = body
    elif body is None:
        result = {}
    else:
        if is_string(body) and body:
            message = body
        result = {"message": message}

    return UpstreamError(
        message,
        status_code=response.status,
        status_text=response.status_text,
        result=result,
    )


class _Measurement:
    """Request timing reported to analytics for production/QA app builds."""

    def __init__(self, analytics: Optional[Analytics], url: str, headers: Any):
        headers = headers if is_object(headers) else {}
        self.analytics = analytics
        self.enabled = analytics is not None and headers.get(APP_PACKAGE_NAME) in settings.analytics_packages
        self.app_version = headers.get(APP_VERSION)
        self.base_endpoint, _, query = url.partition("?")
        self.params_endpoint = query[:100]
        self.started_at = monotonic()

    def _send(self, params: dict[str, Any]) -> None:
        elapsed = monotonic() - self.started_at
        try:
            self.analytics.send_action(
                MEASUREMENT_ACTION,
                None,
                {
                    "response_time": int(elapsed * 1000),
                    "params_endpoint": self.params_endpoint,
                    "base_endpoint": self.base_endpoint,
                    "app_version": self.app_version,
                    **params,
                },
            )
        except Exception as e:
            logger.warning(f"Failed to send request measurement: {e}")

    def success(self, response: TransportResponse) -> None:
        if self.enabled:
            self._send({
                "data_size": (response.headers or {}).get("content-length") or "0",
                "status_code": response.status,
            })

    def failure(self, exc: Exception) -> None:
        if self.enabled:
            response = getattr(exc, "response", None)
            self._send({
                "data_size": "0",
                "error_message": str(exc),
                "status_code": response.status if response is not None else None,
            })


async def make_request(
    *,
    http_verb: str,
    url: str,
    context: RequestContext,
    transport: Transport,
    reporter: ErrorReporter,
    data: Any = None,
    headers: Any = None,
    extended_config: Any = None,
    analytics: Optional[Analytics] = None,
) -> ResponseEnvelope:
    """Run one HTTP exchange through ``transport``.

    Raises:
        UpstreamError: the service answered with 4xx/5xx.
        TransportError: no answer, or the request could not be set up.
        SerializationError: the body could not be encoded.
    """
    config: dict[str, Any] = {
        **(extended_config if is_object(extended_config) else {}),
        "method": http_verb,
        "url": url,
    }
    if is_object(headers) and headers:
        config["headers"] = headers
    if (is_object(data) or is_array(data)) and data:
        config["data"] = data

    reporter.log(f"{context.method}/ service:{context.service} - namespace:{context.namespace}")
    reporter.log(f"URL {context.method}: {url}")

    measurement = _Measurement(analytics, url, headers)
    try:
        response = await transport.execute(config)
    except Exception as exc:
        measurement.failure(exc)
        error = _to_pipeline_error(exc)
        reporter.record_error(error, context.describe_failure(url))
        if error is exc:
            raise
        raise error from exc

    measurement.success(response)
    return _normalize(response, headers)
