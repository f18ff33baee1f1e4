"""
Authenticator protocol used by the execution engine.

An authenticator can act at three points of an execution:

1. before the wire message exists, on the RestRequest
   (``pre_authenticate_request``), e.g. to add a header parameter;
2. once the wire message is built, on the httpx.Request
   (``pre_authenticate_message``), e.g. to sign the final body;
3. after an unsuccessful response (``handle_challenge``), to update its
   state so the request can be sent again.

Every hook is guarded by a ``can_*`` check; the defaults decline, so a
subclass only overrides the stages it takes part in.
"""
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from ..core.base_client import RestClient
    from ..core.request import RestRequest


class Authenticator:
    """Base authenticator; declines every stage."""

    def can_pre_authenticate_request(
        self, client: "RestClient", request: "RestRequest", credentials: Any
    ) -> bool:
        return False

    async def pre_authenticate_request(
        self, client: "RestClient", request: "RestRequest", credentials: Any
    ) -> None:
        return None

    def can_pre_authenticate_message(
        self, http_client: httpx.AsyncClient, message: httpx.Request, credentials: Any
    ) -> bool:
        return False

    async def pre_authenticate_message(
        self, http_client: httpx.AsyncClient, message: httpx.Request, credentials: Any
    ) -> None:
        return None

    def can_handle_challenge(
        self,
        http_client: httpx.AsyncClient,
        message: httpx.Request,
        credentials: Any,
        response: httpx.Response,
    ) -> bool:
        return False

    async def handle_challenge(
        self,
        http_client: httpx.AsyncClient,
        message: httpx.Request,
        credentials: Any,
        response: httpx.Response,
    ) -> None:
        return None
