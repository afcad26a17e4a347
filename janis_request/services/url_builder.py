"""Janis service URLs: https://{service}.{environment}.in/api/{namespace}/..."""
from typing import Any

from janis_request.utils import is_array, is_string


def join_path(segments: Any) -> str:
    """Join path segments with ``/``.

    Only non-empty string segments are kept:
    ``['sprint', 3, '1234', 'movement']`` -> ``'sprint/1234/movement'``.
    """
    if not is_array(segments) or not segments:
        return ""
    return "/".join(segment for segment in segments if is_string(segment) and segment)


def get_api_service(service: Any, environment: Any) -> str:
    if not service or not is_string(service):
        return ""
    if not environment or not is_string(environment):
        return ""
    return f"https://{service}.{environment}.in/api"


def build_url(
    service: Any = "",
    environment: Any = "",
    namespace: Any = "",
    path_params: Any = "",
    id: Any = "",
    action: Any = "",
    query_params: Any = "",
) -> str:
    """Compose the absolute URL for a Janis call, or ``""`` on missing identity."""
    api_service = get_api_service(service, environment)
    if not api_service or not namespace or not is_string(namespace):
        return ""

    url = f"{api_service}/{namespace}"
    for segment in (path_params, id, action):
        if segment and is_string(segment):
            url += f"/{segment}"
    if query_params and is_string(query_params):
        url += query_params
    return url
