from janis_request.schemas.request import (
    CallParameters,
    Credentials,
    ErrorEnvelope,
    Pagination,
    ResponseEnvelope,
    TransportResponse,
)

__all__ = [
    "CallParameters",
    "Credentials",
    "ErrorEnvelope",
    "Pagination",
    "ResponseEnvelope",
    "TransportResponse",
]
