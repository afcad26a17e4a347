"""Test configuration and fixtures."""
from typing import Any, Optional

import pytest

from janis_request import (
    Analytics,
    CredentialSource,
    ErrorReporter,
    Request,
    StaticDeviceInfo,
    Transport,
    TransportResponse,
)

# ---------------------------------------------------------------------------
# Constants (shared with tests)
# ---------------------------------------------------------------------------
JANIS_ENV = "janislocal"
TEST_CLIENT = "exampleClient"
TEST_TOKEN = "exampleAccessToken"
PICKING_URL = f"https://picking.{JANIS_ENV}.in/api"


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class FakeCredentials(CredentialSource):
    def __init__(
        self,
        user_record: Any = None,
        access_token: Any = TEST_TOKEN,
        user_error: Optional[Exception] = None,
        token_error: Optional[Exception] = None,
    ):
        self.user_record = {"tcode": TEST_CLIENT} if user_record is None else user_record
        self.access_token = access_token
        self.user_error = user_error
        self.token_error = token_error
        self.calls = 0

    async def get_user_record(self):
        self.calls += 1
        if self.user_error:
            raise self.user_error
        return self.user_record

    async def get_access_token(self):
        if self.token_error:
            raise self.token_error
        return self.access_token


class RecordingReporter(ErrorReporter):
    def __init__(self):
        self.messages: list[str] = []
        self.errors: list[tuple[BaseException, str]] = []

    def log(self, message: str) -> None:
        self.messages.append(message)

    def record_error(self, error: BaseException, context: str) -> None:
        self.errors.append((error, context))


class RecordingAnalytics(Analytics):
    def __init__(self):
        self.actions: list[tuple[str, Optional[str], dict]] = []

    def send_action(self, name, screen, params) -> None:
        self.actions.append((name, screen, params))


class FakeTransport(Transport):
    """Returns a canned response (or raises a canned error) and keeps configs."""

    def __init__(self, response: Optional[TransportResponse] = None, error: Optional[Exception] = None):
        self.response = response or TransportResponse(status=200, headers={}, data={})
        self.error = error
        self.configs: list[dict] = []

    async def execute(self, config):
        self.configs.append(config)
        if self.error:
            raise self.error
        return self.response


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def credentials():
    return FakeCredentials()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def device_info():
    return StaticDeviceInfo(
        application_name="MyApp",
        build_number="1",
        version="1.0.0",
        bundle_id="janis.beta.app",
        system_name="iOS",
        system_version="14.5",
        unique_id="123456789",
        model="iPhone 12",
    )


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
async def api(credentials, reporter):
    """Request wired to the default httpx transport (mock it with respx)."""
    async with Request(JANIS_ENV, credentials=credentials, reporter=reporter) as request:
        yield request
