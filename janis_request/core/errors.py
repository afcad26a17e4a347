"""Exception taxonomy for the request pipeline.

Internal stages raise ``JanisRequestError`` subclasses. ``Request`` catches
all of them and re-raises a single ``RequestFailure`` carrying an
``ErrorEnvelope``, which is the only failure shape callers see.
"""
from typing import Any, Optional

from janis_request.schemas.request import ErrorEnvelope, TransportResponse


class JanisRequestError(Exception):
    """Base error for every pipeline stage."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
        result: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status_text = status_text
        self.result = result

    def to_envelope(self) -> ErrorEnvelope:
        result = self.result if isinstance(self.result, dict) else {"message": self.message}
        return ErrorEnvelope(
            result=result,
            status_code=self.status_code,
            status_text=self.status_text,
        )


class ValidationError(JanisRequestError):
    """Bad or missing namespace, service or id. Raised before any I/O."""


class CredentialError(JanisRequestError):
    """The credential source could not produce a user record or access token."""


class TransportError(JanisRequestError):
    """Network-level failure: no response was received."""


class UpstreamError(JanisRequestError):
    """The service answered with a non-2xx status."""


class SerializationError(JanisRequestError):
    """The request could not be encoded before sending."""


class HTTPClientError(Exception):
    """Failure contract for ``Transport.execute``.

    ``response`` is set when the server answered; ``request_sent`` is True when
    the request went out but no answer came back.
    """

    def __init__(
        self,
        message: str,
        response: Optional[TransportResponse] = None,
        request_sent: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.response = response
        self.request_sent = request_sent


class RequestFailure(Exception):
    """Raised by ``Request`` for every failed call."""

    def __init__(self, envelope: ErrorEnvelope):
        super().__init__(envelope.message)
        self.envelope = envelope

    @property
    def result(self) -> dict[str, Any]:
        return self.envelope.result

    @property
    def status_code(self) -> Optional[int]:
        return self.envelope.status_code

    @property
    def status_text(self) -> Optional[str]:
        return self.envelope.status_text

    @property
    def message(self) -> str:
        return self.envelope.message

    @classmethod
    def from_error(cls, error: BaseException) -> "RequestFailure":
        if isinstance(error, JanisRequestError):
            return cls(error.to_envelope())
        return cls(ErrorEnvelope(result={"message": str(error)}))
