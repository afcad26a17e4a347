"""Fresh credentials and auth headers for every Janis call."""
import logging
from collections.abc import Mapping
from typing import Any

from janis_request.core.capabilities import CredentialSource, DeviceInfoSource
from janis_request.core.errors import CredentialError
from janis_request.schemas.request import Credentials
from janis_request.services.headers import update_headers
from janis_request.utils import is_object, is_string

logger = logging.getLogger(__name__)

# Caller header keys that drive pagination instead of being sent verbatim
PAGINATION_KEYS: tuple[str, ...] = ("page", "pageSize", "getTotals", "getOnlyTotals")

# User info field holding the Janis client code
CLIENT_CODE_FIELD = "tcode"


async def get_token_and_client(source: CredentialSource) -> Credentials:
    """Fetch the user record, then the access token. Never cached."""
    try:
        user_info = await source.get_user_record()
    except Exception as exc:
        raise CredentialError(str(exc) or "error getting userInfo") from exc
    if not isinstance(user_info, Mapping):
        raise CredentialError("error getting userInfo")

    try:
        access_token = await source.get_access_token()
    except Exception as exc:
        raise CredentialError(str(exc) or "error getting accessToken") from exc
    if not access_token or not is_string(access_token):
        raise CredentialError("error getting accessToken")

    client = user_info.get(CLIENT_CODE_FIELD)
    return Credentials(
        access_token=access_token,
        client=client if is_string(client) else None,
    )


def split_pagination(raw_headers: Any) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split caller headers into (pagination params, custom headers)."""
    if not is_object(raw_headers):
        return {}, {}
    pagination = {key: raw_headers[key] for key in PAGINATION_KEYS if key in raw_headers}
    custom = {key: value for key, value in raw_headers.items() if key not in PAGINATION_KEYS}
    return pagination, custom


async def refresh_headers(
    raw_headers: Any,
    source: CredentialSource,
    device_info: DeviceInfoSource,
) -> dict[str, Any]:
    pagination, custom_headers = split_pagination(raw_headers)
    credentials = await get_token_and_client(source)
    logger.debug(f"Credentials refreshed for client {credentials.client}")
    return update_headers(
        {
            "client": credentials.client,
            "accessToken": credentials.access_token,
            **pagination,
        },
        custom_headers,
        device_info,
    )
