"""Interfaces for the collaborators injected into ``Request``."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from janis_request.schemas.request import TransportResponse

logger = logging.getLogger(__name__)


class CredentialSource(ABC):
    """Identity provider for the signed-in user."""

    @abstractmethod
    async def get_user_record(self) -> Mapping[str, Any]:
        """Return the user info record. The client code lives under ``tcode``."""
        ...

    @abstractmethod
    async def get_access_token(self) -> str:
        ...


class DeviceInfoSource(ABC):
    """Static app and device metadata, read once per call."""

    @abstractmethod
    def get_application_name(self) -> str: ...

    @abstractmethod
    def get_build_number(self) -> str: ...

    @abstractmethod
    def get_version(self) -> str: ...

    @abstractmethod
    def get_bundle_id(self) -> str: ...

    @abstractmethod
    def get_system_name(self) -> str: ...

    @abstractmethod
    def get_system_version(self) -> str: ...

    @abstractmethod
    def get_unique_id(self) -> str: ...

    @abstractmethod
    def get_model(self) -> str: ...


class Transport(ABC):
    """Performs one HTTP exchange.

    ``config`` carries ``method``, ``url`` and optionally ``headers``, ``data``
    and any transport-specific options such as ``timeout`` or ``params``.
    Failures must be raised as ``HTTPClientError``.
    """

    @abstractmethod
    async def execute(self, config: dict[str, Any]) -> TransportResponse:
        ...


class ErrorReporter(ABC):
    """Crash/telemetry sink. Both calls are fire-and-forget."""

    @abstractmethod
    def log(self, message: str) -> None: ...

    @abstractmethod
    def record_error(self, error: BaseException, context: str) -> None: ...


class Analytics(ABC):

    @abstractmethod
    def send_action(
        self, name: str, screen: Optional[str], params: dict[str, Any]
    ) -> None: ...


@dataclass
class StaticDeviceInfo(DeviceInfoSource):
    """Device info from fixed values; every field defaults to empty."""
    application_name: str = ""
    build_number: str = ""
    version: str = ""
    bundle_id: str = ""
    system_name: str = ""
    system_version: str = ""
    unique_id: str = ""
    model: str = ""

    def get_application_name(self) -> str:
        return self.application_name

    def get_build_number(self) -> str:
        return self.build_number

    def get_version(self) -> str:
        return self.version

    def get_bundle_id(self) -> str:
        return self.bundle_id

    def get_system_name(self) -> str:
        return self.system_name

    def get_system_version(self) -> str:
        return self.system_version

    def get_unique_id(self) -> str:
        return self.unique_id

    def get_model(self) -> str:
        return self.model


class LoggingReporter(ErrorReporter):
    """Reporter backed by the ``logging`` module."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self._logger = log or logger

    def log(self, message: str) -> None:
        self._logger.info(message)

    def record_error(self, error: BaseException, context: str) -> None:
        self._logger.error(f"{context} | {error}", exc_info=error)
