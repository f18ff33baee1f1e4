"""
Translate a RestRequest into wire-level pieces (URL, headers, body).
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote, urlencode, urljoin, urlparse

from ..parameters import validate_header_parameter
from ..types import Parameter, ParameterType, Serializer

logger = logging.getLogger("rest_client.request_builder")


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def expand_resource(resource: str, parameters: Iterable[Parameter]) -> str:
    """Replace {name} placeholders with URL-encoded UrlSegment values."""
    for parameter in parameters:
        if parameter.kind != ParameterType.URL_SEGMENT:
            continue
        placeholder = "{" + parameter.name + "}"
        resource = resource.replace(placeholder, quote(_format_value(parameter.value), safe=""))
    return resource


def build_url(
    base_url: Optional[str],
    path: str,
    query: Optional[List[Tuple[str, str]]] = None,
) -> str:
    """Build full URL from base and path."""
    if not base_url or urlparse(path).scheme:
        url = path
    elif path.startswith("/"):
        # Preserve the base path and append the new path
        parsed = urlparse(base_url)
        base_path = parsed.path.rstrip("/")
        url = f"{parsed.scheme}://{parsed.netloc}{base_path}{path}"
    elif path:
        # urljoin replaces the last segment if base doesn't end with /
        if not base_url.endswith("/"):
            base_url = base_url + "/"
        url = urljoin(base_url, path)
    else:
        url = base_url

    if query:
        query_str = urlencode(query)
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}{query_str}"

    return url


def build_request_url(base_url: Optional[str], resource: str, parameters: List[Parameter]) -> str:
    """Resolve resource, URL segments and query parameters against base_url."""
    path = expand_resource(resource, parameters)
    query = [
        (parameter.name, _format_value(parameter.value))
        for parameter in parameters
        if parameter.kind == ParameterType.QUERY_STRING
    ]
    return build_url(base_url, path, query)


def build_headers(
    request_parameters: Iterable[Parameter],
    default_parameters: Iterable[Parameter],
) -> List[Tuple[str, str]]:
    """Request headers in order, with header defaults overriding by name.

    Repeated request headers are all kept. A default replaces every request
    header of the same name (case-insensitive) at the position of the first
    one; defaults with no request counterpart follow. Among defaults the
    last value for a name wins.
    """
    defaults: Dict[str, Tuple[str, str]] = {}
    for parameter in _header_parameters(default_parameters):
        defaults[parameter.name.lower()] = (parameter.name, _format_value(parameter.value))

    headers: List[Tuple[str, str]] = []
    overridden = set()
    for parameter in _header_parameters(request_parameters):
        key = parameter.name.lower()
        if key not in defaults:
            headers.append((parameter.name, _format_value(parameter.value)))
        elif key not in overridden:
            headers.append(defaults[key])
            overridden.add(key)
    headers.extend(value for key, value in defaults.items() if key not in overridden)
    return headers


def _header_parameters(parameters: Iterable[Parameter]) -> Iterable[Parameter]:
    for parameter in parameters:
        if parameter.kind != ParameterType.HTTP_HEADER:
            continue
        if parameter.validate_on_add:
            validate_header_parameter(parameter)
        yield parameter


def build_body(
    parameters: Iterable[Parameter],
    serializer: Serializer,
) -> Tuple[Optional[bytes], Optional[str]]:
    """Return (content, content_type) for the single body parameter, if any."""
    bodies = [parameter for parameter in parameters if parameter.kind == ParameterType.REQUEST_BODY]
    if not bodies:
        return None, None
    if len(bodies) > 1:
        raise ValueError(f"Only one request body parameter is supported, got {len(bodies)}")

    body = bodies[0]
    content_type = body.name or None
    value = body.value
    if isinstance(value, bytes):
        return value, content_type
    if isinstance(value, str):
        return value.encode("utf-8"), content_type
    logger.debug(f"build_body: serializing {type(value).__name__} as {content_type}")
    return serializer.serialize(value).encode("utf-8"), content_type
