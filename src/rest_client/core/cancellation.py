"""
Caller-side cancellation signal.
"""
import asyncio


class CancellationToken:
    """Cancels an in-flight send when ``cancel()`` is called.

    Must be used from the event loop the request runs on.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()
