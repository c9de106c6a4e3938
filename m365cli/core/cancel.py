"""Cancellation support for command invocations."""

import logging
from asyncio import CancelledError
from collections.abc import Callable

logger = logging.getLogger(__name__)


class CancellationToken:
    """Token for cooperative cancellation of a command invocation.

    Every suspension point of the resource layer (page fetches, identifier
    lookups) checks the token before issuing its request, so a long
    pagination run stops at the next page boundary.

    Example:
        token = CancellationToken()

        async def fetch_pages():
            while url:
                token.raise_if_cancelled()
                ...

        # From a signal handler or another task:
        token.cancel()
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation and notify callbacks."""
        if self._cancelled:
            return
        self._cancelled = True
        for callback in self._callbacks:
            self._invoke(callback)

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Register a callback to be called when cancelled.

        If already cancelled, callback is invoked immediately.
        """
        self._callbacks.append(callback)
        if self._cancelled:
            self._invoke(callback)

    def raise_if_cancelled(self) -> None:
        """Raise CancelledError if cancellation was requested.

        Raises:
            asyncio.CancelledError: If cancel() was called.
        """
        if self._cancelled:
            raise CancelledError("Operation cancelled")

    @staticmethod
    def _invoke(callback: Callable[[], None]) -> None:
        # A failing callback must not prevent cancellation
        try:
            callback()
        except Exception:
            logger.warning("Cancellation callback failed", exc_info=True)
