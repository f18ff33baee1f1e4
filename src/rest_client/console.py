"""
Rich console tracing of wire messages.
"""
import json
from typing import Any, Dict

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

console = Console(stderr=True)

_MASKED_HEADERS = ("authorization", "x-api-key", "proxy-authorization", "cookie")


def mask_auth_header(value: str, visible_chars: int = 15) -> str:
    """Keep the scheme and a short prefix of a credential header value."""
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def mask_headers_for_logging(headers: Any) -> Dict[str, str]:
    """Mask credential headers for safe logging."""
    masked = dict(headers)
    for key in masked:
        if key.lower() in _MASKED_HEADERS:
            masked[key] = mask_auth_header(masked[key])
    return masked


def format_body(body: Any) -> str:
    """Format body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    return str(body)


def print_request(message: httpx.Request) -> None:
    console.print(Panel(f"[bold cyan]{message.method}[/bold cyan] {message.url}", title="[bold blue]Request[/bold blue]"))
    console.print("[bold]Headers:[/bold]", mask_headers_for_logging(message.headers))
    try:
        content = message.content
    except httpx.RequestNotRead:
        content = None
    if content:
        console.print(
            Panel(Syntax(format_body(content), "json", theme="monokai"), title="[bold]Request Body[/bold]")
        )


def print_response(response: httpx.Response) -> None:
    status_color = "green" if response.is_success else "red"
    console.print(
        Panel(
            f"[bold {status_color}]{response.status_code}[/bold {status_color}] {response.reason_phrase or ''}",
            title=f"[bold blue]Response[/bold blue] ({response.request.url})",
        )
    )
    console.print("[bold]Headers:[/bold]", mask_headers_for_logging(response.headers))


def print_response_body(data: Any, url: str) -> None:
    if data:
        console.print(
            Panel(Syntax(format_body(data), "json", theme="monokai"), title=f"[bold]Response Body[/bold] (URL: {url})")
        )
