"""Tests for cooperative cancellation tokens and the per-view manager."""

import asyncio
import pytest

from vartreelib.aio.core import (
    CancelledError,
    CancellationManager,
    CancellationToken,
    CancellationTokenSource,
)


class TestCancellationTokenSource:
    """Token source lifecycle: live -> revoked, never back."""

    def test_new_token_is_live(self):
        source = CancellationTokenSource()
        assert not source.token.is_cancellation_requested
        source.token.raise_if_cancelled()  # No error

    def test_cancel_revokes_token(self):
        source = CancellationTokenSource()
        source.cancel()

        assert source.token.is_cancellation_requested
        with pytest.raises(CancelledError):
            source.token.raise_if_cancelled()

    def test_cancel_is_idempotent(self):
        source = CancellationTokenSource()
        calls = []
        source.token.on_cancellation_requested(lambda: calls.append(1))

        source.cancel()
        source.cancel()

        assert calls == [1]

    def test_callbacks_run_on_cancel(self):
        source = CancellationTokenSource()
        calls = []
        source.token.on_cancellation_requested(lambda: calls.append('a'))
        source.token.on_cancellation_requested(lambda: calls.append('b'))

        assert calls == []
        source.cancel()
        assert calls == ['a', 'b']

    def test_callback_registered_after_cancel_runs_immediately(self):
        source = CancellationTokenSource()
        source.cancel()
        calls = []

        source.token.on_cancellation_requested(lambda: calls.append(1))

        assert calls == [1]

    def test_failing_callback_does_not_block_others(self):
        source = CancellationTokenSource()
        calls = []

        def broken():
            raise ValueError("listener bug")

        source.token.on_cancellation_requested(broken)
        source.token.on_cancellation_requested(lambda: calls.append(1))
        source.cancel()

        assert calls == [1]
        assert source.token.is_cancellation_requested

    def test_dispose_drops_listeners(self):
        source = CancellationTokenSource()
        calls = []
        source.token.on_cancellation_requested(lambda: calls.append(1))

        source.dispose()
        source.cancel()

        assert source.disposed
        assert calls == []
        assert source.token.is_cancellation_requested

    @pytest.mark.asyncio
    async def test_wait_resolves_on_cancel(self):
        source = CancellationTokenSource()
        waiter = asyncio.create_task(source.token.wait())
        await asyncio.sleep(0)
        assert not waiter.done()

        source.cancel()

        await asyncio.wait_for(waiter, timeout=1)

    @pytest.mark.asyncio
    async def test_wait_on_cancelled_token_returns(self):
        source = CancellationTokenSource()
        source.cancel()
        await asyncio.wait_for(source.token.wait(), timeout=1)


class TestCancellationManager:
    """The manager always exposes exactly one live token."""

    def test_starts_with_live_token(self):
        manager = CancellationManager()
        assert isinstance(manager.token, CancellationToken)
        assert not manager.token.is_cancellation_requested

    def test_cancel_replaces_token(self):
        manager = CancellationManager()
        old = manager.token

        manager.cancel()

        assert old.is_cancellation_requested
        assert manager.token is not old
        assert not manager.token.is_cancellation_requested
        assert manager.generation == 1

    def test_revoked_tokens_are_never_reused(self):
        manager = CancellationManager()
        seen = []
        for _ in range(5):
            seen.append(manager.token)
            manager.cancel()

        assert len({id(token) for token in seen}) == 5
        assert all(token.is_cancellation_requested for token in seen)
        assert not manager.token.is_cancellation_requested

    def test_listener_sees_fresh_token(self):
        manager = CancellationManager()
        observed = []
        manager.token.on_cancellation_requested(
            lambda: observed.append(manager.token.is_cancellation_requested)
        )

        manager.cancel()

        # By the time listeners run, the replacement is already installed
        assert observed == [False]

    def test_managers_are_independent(self):
        first = CancellationManager()
        second = CancellationManager()

        first.cancel()

        assert not second.token.is_cancellation_requested
        assert second.generation == 0
