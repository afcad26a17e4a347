"""Per-call parameter structs and the normalized response/error envelopes."""
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from janis_request.config import settings


@dataclass
class CallParameters:
    """Declarative description of one Janis call.

    Values are not type-checked here; ``Request`` validates the identity
    fields and every serializer degrades gracefully on bad input.
    """
    service: str = ""
    namespace: str = ""
    id: str = ""
    endpoint: str = ""
    path_params: list[Union[str, int]] = field(default_factory=list)
    action: str = ""
    query_params: dict[str, Any] = field(default_factory=dict)
    body: Optional[Union[dict[str, Any], list[Any]]] = None
    headers: dict[str, Any] = field(default_factory=dict)
    extra_config: dict[str, Any] = field(default_factory=dict)


@dataclass
class Pagination:
    """Page defaults for list calls, rendered as the caller header keys."""
    page: int = field(default_factory=lambda: settings.default_page)
    page_size: int = field(default_factory=lambda: settings.default_page_size)
    get_totals: bool = False
    get_only_totals: bool = False

    def as_headers(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "getTotals": self.get_totals,
            "getOnlyTotals": self.get_only_totals,
        }



@dataclass
class Credentials:
    access_token: str
    client: Optional[str] = None


@dataclass
class TransportResponse:
    """What a transport hands back for any completed HTTP exchange."""
    status: int
    headers: dict[str, str]
    data: Any = None
    status_text: str = ""


class ResponseEnvelope(BaseModel):
    result: Any = None
    headers: dict[str, Any] = Field(default_factory=dict)
    status_code: Optional[int] = None
    status_text: Optional[str] = None
    is_last_page: bool = False
    total: Optional[Union[int, float]] = None


class ErrorEnvelope(BaseModel):
    result: dict[str, Any] = Field(default_factory=dict)
    status_code: Optional[int] = None
    status_text: Optional[str] = None

    @property
    def message(self) -> str:
        message = self.result.get("message")
        return message if isinstance(message, str) else ""
