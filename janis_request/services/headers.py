"""Header composition for Janis requests.

Layers, later ones winning on key collision::

    base -> user-agent -> device headers -> custom headers -> auth/pagination

Device and custom headers only survive with non-empty string values. The
auth/pagination layer is the only one allowed to carry numbers and booleans.
"""
from typing import Any

from janis_request.core.capabilities import DeviceInfoSource
from janis_request.utils import is_boolean, is_number, is_object, is_string

APP_NAME = "janis-app-name"
APP_BUILD = "janis-app-build"
APP_VERSION = "janis-app-version"
APP_PACKAGE_NAME = "janis-app-package-name"
DEVICE_OS_NAME = "janis-app-device-os-name"
DEVICE_OS_VERSION = "janis-app-device-os-version"
DEVICE_ID = "janis-app-device-id"
DEVICE_NAME = "janis-app-device-name"

# Order matters: it is the user-agent field order
DEVICE_HEADER_KEYS: tuple[str, ...] = (
    APP_PACKAGE_NAME,
    APP_VERSION,
    APP_NAME,
    APP_BUILD,
    DEVICE_OS_NAME,
    DEVICE_OS_VERSION,
    DEVICE_ID,
    DEVICE_NAME,
)

PAGE_HEADER = "x-janis-page"
PAGE_SIZE_HEADER = "x-janis-page-size"
TOTALS_HEADER = "x-janis-totals"
ONLY_TOTALS_HEADER = "x-janis-only-totals"
CLIENT_HEADER = "janis-client"
SECRET_HEADER = "janis-api-secret"

BASE_HEADERS: dict[str, str] = {
    "content-type": "application/json",
    "janis-api-key": "Bearer",
}


def get_device_data(device_info: DeviceInfoSource) -> dict[str, str]:
    """Read the eight device fields, using ``""`` for anything missing."""
    return {
        APP_NAME: device_info.get_application_name() or "",
        APP_BUILD: device_info.get_build_number() or "",
        APP_VERSION: device_info.get_version() or "",
        APP_PACKAGE_NAME: device_info.get_bundle_id() or "",
        DEVICE_OS_NAME: device_info.get_system_name() or "",
        DEVICE_OS_VERSION: device_info.get_system_version() or "",
        DEVICE_ID: device_info.get_unique_id() or "",
        DEVICE_NAME: device_info.get_model() or "",
    }


def filter_valid_headers(headers: Any) -> dict[str, str]:
    if not is_object(headers) or not headers:
        return {}
    return {key: value for key, value in headers.items() if value and is_string(value)}


def format_user_agent(device_data: Any) -> dict[str, str]:
    """Build ``{"user-agent": ...}`` from device data.

    Empty when no device field is usable; otherwise missing fields are
    replaced with ``unknown <key>``.
    """
    if not is_object(device_data) or not device_data:
        return {}

    def valid(key: str) -> bool:
        value = device_data.get(key)
        return bool(value) and is_string(value)

    if not any(valid(key) for key in DEVICE_HEADER_KEYS):
        return {}

    parts = [device_data[key] if valid(key) else f"unknown {key}" for key in DEVICE_HEADER_KEYS]
    return {
        "user-agent": (
            f"{parts[0]}/{parts[1]} ({parts[2]}; {parts[3]}) "
            f"{parts[4]}/{parts[5]} ({parts[6]}; {parts[7]})"
        )
    }


def get_headers(
    params: Any = None,
    device_headers: Any = None,
    custom_headers: Any = None,
) -> dict[str, Any]:
    """Merge every header layer for a Janis request.

    Args:
        params: ``client``, ``accessToken``, ``page``, ``pageSize``,
            ``getTotals`` and ``getOnlyTotals``. Each is added only when it
            has the right type and is truthy.
        device_headers: Output of ``get_device_data``.
        custom_headers: Caller headers.
    """
    valid_custom_headers = filter_valid_headers(custom_headers)
    valid_device_headers = filter_valid_headers(device_headers)

    headers: dict[str, Any] = {
        **BASE_HEADERS,
        **format_user_agent(valid_device_headers),
        **valid_device_headers,
        **valid_custom_headers,
    }

    if not is_object(params):
        return headers

    client = params.get("client")
    access_token = params.get("accessToken")
    page = params.get("page")
    page_size = params.get("pageSize")
    get_totals = params.get("getTotals")
    get_only_totals = params.get("getOnlyTotals")

    if is_string(client) and client:
        headers[CLIENT_HEADER] = client
    if is_string(access_token) and access_token:
        headers[SECRET_HEADER] = access_token
    if is_number(page) and page:
        headers[PAGE_HEADER] = page
    if is_number(page_size) and page_size:
        headers[PAGE_SIZE_HEADER] = page_size
    if is_boolean(get_totals) and get_totals:
        headers[TOTALS_HEADER] = True
    if is_boolean(get_only_totals) and get_only_totals:
        headers[ONLY_TOTALS_HEADER] = True

    return headers


def update_headers(
    params: Any,
    custom_headers: Any,
    device_info: DeviceInfoSource,
) -> dict[str, Any]:
    """Compose headers using the device info read for this call."""
    return get_headers(params, get_device_data(device_info), custom_headers)
