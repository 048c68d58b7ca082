"""Cooperative cancellation for provider queries.

A ``CancellationManager`` owns exactly one live token at a time. Every
provider query is handed the token that is current when the query is
issued. ``cancel()`` revokes that token and installs a fresh one, so work
issued afterwards is unaffected while in-flight queries are told to stop.
Honoring the revoked token is up to the provider.

Example:
    manager = CancellationManager()

    async def provide(..., token):
        for item in items:
            token.raise_if_cancelled()
            yield item

    # Host collapses the view:
    manager.cancel()
"""

import asyncio
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class CancelledError(Exception):
    """Raised by a provider that abandons work because its token was revoked."""

    def __init__(self, message: str = "Operation cancelled"):
        super().__init__(message)


class CancellationToken:
    """Read-only view of a cancellation request."""

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: List[Callable[[], None]] = []
        self._event: Optional[asyncio.Event] = None

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        """Raise CancelledError if cancellation was requested.

        Raises:
            CancelledError: If the owning source was cancelled
        """
        if self._cancelled:
            raise CancelledError()

    def on_cancellation_requested(self, callback: Callable[[], None]) -> None:
        """Register a callback to be called when cancelled.

        If already cancelled, callback is invoked immediately.
        """
        if self._cancelled:
            self._invoke(callback)
            return
        self._callbacks.append(callback)

    async def wait(self) -> None:
        """Wait until cancellation is requested."""
        if self._cancelled:
            return
        if self._event is None:
            self._event = asyncio.Event()
        await self._event.wait()

    def _cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            self._invoke(callback)
        if self._event is not None:
            self._event.set()

    def _clear_callbacks(self) -> None:
        self._callbacks = []

    @staticmethod
    def _invoke(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:
            # A failing listener must not stop the others from being told
            logger.exception("Cancellation callback failed")

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"


class CancellationTokenSource:
    """Owns a token and is the only thing allowed to revoke it."""

    def __init__(self) -> None:
        self._token = CancellationToken()
        self._disposed = False

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def disposed(self) -> bool:
        return self._disposed

    def cancel(self) -> None:
        """Revoke the token. Safe to call more than once."""
        self._token._cancel()

    def dispose(self) -> None:
        """Release registered listeners. The token keeps its cancelled state."""
        self._disposed = True
        self._token._clear_callbacks()


class CancellationManager:
    """Holds the single current cancellation source for one document view."""

    def __init__(self) -> None:
        self._source = CancellationTokenSource()
        self.generation = 0

    @property
    def token(self) -> CancellationToken:
        """The live token new queries should carry."""
        return self._source.token

    def cancel(self) -> None:
        """Revoke the current token and replace it with a fresh one.

        Does not wait for in-flight work to stop.
        """
        source = self._source
        self._source = CancellationTokenSource()
        self.generation += 1
        source.cancel()
        source.dispose()
        logger.debug("Cancelled variable queries (generation %d)", self.generation)
