"""Request building for Janis services.

Key entry points:
  - Request                      - get / list / post / put / patch facade
  - services.query_params        - filters + sort -> query string
  - services.url_builder         - Janis service URLs
  - services.headers             - device, auth and pagination headers
"""
from janis_request.core.capabilities import (
    Analytics,
    CredentialSource,
    DeviceInfoSource,
    ErrorReporter,
    LoggingReporter,
    StaticDeviceInfo,
    Transport,
)
from janis_request.core.errors import HTTPClientError, RequestFailure
from janis_request.request import Request
from janis_request.schemas.request import (
    CallParameters,
    ErrorEnvelope,
    Pagination,
    ResponseEnvelope,
    TransportResponse,
)
from janis_request.services.transport import HttpxTransport

__all__ = [
    "Analytics",
    "CallParameters",
    "CredentialSource",
    "DeviceInfoSource",
    "ErrorEnvelope",
    "ErrorReporter",
    "HTTPClientError",
    "HttpxTransport",
    "LoggingReporter",
    "Pagination",
    "Request",
    "RequestFailure",
    "ResponseEnvelope",
    "StaticDeviceInfo",
    "Transport",
    "TransportResponse",
]
