"""
Request execution engine.

One call to ``execute_request`` runs this state machine:

    merge defaults
      -> request pre-authentication
      -> build message (+ message pre-authentication)
      -> send
      -> challenge check --handled--> back to request pre-authentication
                         --otherwise--> return response / raise

Resource rules: a message whose send did not complete is released; a
response that is not handed back (retry or failure) is released; the
returned response is still open and belongs to the caller.
"""
import asyncio
import logging
from typing import TYPE_CHECKING, Any, Optional

import httpx

from ..config import ClientConfig, resolve_name_comparer
from ..console import print_request, print_response
from ..errors import (
    AuthenticationError,
    RequestCancelledError,
    RestClientError,
    TransportError,
    UnsuccessfulStatusError,
)
from ..parameters import merge_default_parameters
from .cancellation import CancellationToken
from .request import RestRequest
from .request_builder import build_body

if TYPE_CHECKING:
    from .base_client import RestClient

logger = logging.getLogger("rest_client.executor")


def _check(authenticator: Any, name: str, *args: Any) -> bool:
    try:
        return bool(getattr(authenticator, name)(*args))
    except RestClientError:
        raise
    except Exception as exc:
        raise AuthenticationError(f"{type(authenticator).__name__}.{name} failed: {exc}") from exc


async def _invoke(authenticator: Any, name: str, *args: Any) -> None:
    try:
        await getattr(authenticator, name)(*args)
    except RestClientError:
        raise
    except Exception as exc:
        raise AuthenticationError(f"{type(authenticator).__name__}.{name} failed: {exc}") from exc


def _challenge_retry_allowed(config: ClientConfig, retries: int) -> bool:
    return config.max_challenge_retries is None or retries < config.max_challenge_retries


async def send_message(
    http_client: httpx.AsyncClient,
    message: httpx.Request,
    cancel_token: Optional[CancellationToken] = None,
) -> httpx.Response:
    """Send and return the open (streamed) response.

    When the token fires before the response arrives the send is abandoned
    and RequestCancelledError is raised.
    """
    if cancel_token is None:
        return await http_client.send(message, stream=True)
    if cancel_token.is_cancelled:
        raise RequestCancelledError("Request was cancelled before it was sent")

    send_task = asyncio.ensure_future(http_client.send(message, stream=True))
    cancel_task = asyncio.ensure_future(cancel_token.wait())
    try:
        await asyncio.wait({send_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        cancel_task.cancel()
        if not send_task.done():
            send_task.cancel()

    if send_task.done() and not send_task.cancelled():
        return send_task.result()

    # Let the abandoned send unwind; a response that slipped through is closed
    await asyncio.wait({send_task})
    if not send_task.cancelled() and send_task.exception() is None:
        await send_task.result().aclose()
    logger.debug(f"send_message: cancelled {message.method} {message.url}")
    raise RequestCancelledError(f"Request was cancelled: {message.method} {message.url}")


async def execute_request(
    client: "RestClient",
    request: RestRequest,
    cancel_token: Optional[CancellationToken] = None,
) -> httpx.Response:
    """Execute ``request`` and return the open transport response."""
    config = client.config
    factory = client.http_client_factory

    comparer = resolve_name_comparer(config, request)
    merge_default_parameters(request.parameters, client.default_parameters, comparer)
    logger.debug(
        f"execute_request: {request.method} {request.resource!r}, "
        f"parameters={len(request.parameters)}, base_url={config.base_url}"
    )

    challenge_retries = 0
    while True:
        authenticator = client.authenticator
        credentials = config.credentials

        if authenticator is not None and _check(
            authenticator, "can_pre_authenticate_request", client, request, credentials
        ):
            await _invoke(authenticator, "pre_authenticate_request", client, request, credentials)

        http_client = client.get_http_client(request)
        content, content_type = build_body(request.parameters, client.serializer)
        message = factory.create_message(http_client, client, request, content, content_type)
        logger.debug(f"execute_request: message built {message.method} {message.url}")

        try:
            if authenticator is not None and _check(
                authenticator, "can_pre_authenticate_message", http_client, message, credentials
            ):
                await _invoke(authenticator, "pre_authenticate_message", http_client, message, credentials)
            if config.trace:
                print_request(message)
            response = await send_message(http_client, message, cancel_token)
        except httpx.RequestError as exc:
            await factory.release_message(message)
            raise TransportError(f"{message.method} {message.url} failed: {exc}") from exc
        except BaseException:
            await factory.release_message(message)
            raise

        logger.debug(f"execute_request: received {response.status_code} for {message.method} {message.url}")
        retry = False
        try:
            if config.trace:
                print_response(response)
            if not response.is_success:
                if authenticator is not None and _check(
                    authenticator, "can_handle_challenge", http_client, message, credentials, response
                ):
                    if _challenge_retry_allowed(config, challenge_retries):
                        await _invoke(
                            authenticator, "handle_challenge", http_client, message, credentials, response
                        )
                        challenge_retries += 1
                        retry = True
                    else:
                        logger.warning(
                            f"execute_request: challenge retry limit ({config.max_challenge_retries}) "
                            f"reached for {message.method} {message.url}"
                        )
                if not retry and not config.ignore_response_status_code:
                    await response.aread()
                    raise UnsuccessfulStatusError(
                        response.status_code,
                        response.reason_phrase or "",
                        response.content,
                        response,
                    )
        except httpx.RequestError as exc:
            await factory.release_response(response)
            raise TransportError(f"{message.method} {message.url} failed: {exc}") from exc
        except BaseException:
            await factory.release_response(response)
            raise

        if not retry:
            return response

        logger.info(
            f"execute_request: challenge {response.status_code} handled, "
            f"retry {challenge_retries} for {message.method} {message.url}"
        )
        await factory.release_response(response)
