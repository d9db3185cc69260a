"""Unit tests for cancellation tokens."""

import asyncio
import threading
from datetime import UTC, datetime, timedelta

import pytest

from accounts_client import Context, ContextCanceledError, DeadlineExceededError


class TestContextState:
    def test_background_is_never_done(self):
        ctx = Context.background()
        assert ctx.done() is False
        assert ctx.err() is None
        assert ctx.deadline is None
        assert ctx.remaining() is None

    def test_cancel(self):
        ctx = Context()
        ctx.cancel()
        ctx.cancel()  # idempotent
        assert ctx.canceled is True
        err = ctx.err()
        assert isinstance(err, ContextCanceledError)
        assert str(err) == "context canceled"

    def test_expired_deadline(self):
        ctx = Context().with_deadline(datetime.now(UTC) - timedelta(minutes=10))
        err = ctx.err("GET x")
        assert isinstance(err, DeadlineExceededError)
        assert isinstance(err, TimeoutError)
        assert str(err) == "GET x: context deadline exceeded"

    def test_future_deadline(self):
        ctx = Context().with_timeout(60)
        assert ctx.done() is False
        assert 0 < ctx.remaining() <= 60

    def test_raise_if_done(self):
        ctx = Context()
        ctx.cancel()
        with pytest.raises(ContextCanceledError, match="canceled"):
            ctx.raise_if_done()


class TestDerivedContexts:
    def test_child_canceled_with_parent(self):
        parent = Context()
        child = parent.with_cancel()
        grandchild = child.with_timeout(60)
        parent.cancel()
        assert child.canceled is True
        assert grandchild.canceled is True

    def test_child_cancel_leaves_parent(self):
        parent = Context()
        child = parent.with_cancel()
        child.cancel()
        assert parent.canceled is False

    def test_child_of_canceled_parent(self):
        parent = Context()
        parent.cancel()
        assert parent.with_cancel().canceled is True

    def test_child_deadline_capped_by_parent(self):
        parent = Context().with_timeout(1)
        child = parent.with_timeout(3600)
        assert child.deadline == parent.deadline

    def test_child_may_shorten_deadline(self):
        parent = Context().with_timeout(3600)
        child = parent.with_timeout(1)
        assert child.deadline < parent.deadline


@pytest.mark.asyncio
class TestGuard:
    async def test_body_runs(self):
        ran = False
        async with Context().guard("op"):
            ran = True
        assert ran

    async def test_canceled_fails_fast(self):
        ctx = Context()
        ctx.cancel()
        ran = False
        with pytest.raises(ContextCanceledError, match="op: context canceled"):
            async with ctx.guard("op"):
                ran = True
        assert ran is False

    async def test_expired_fails_fast(self):
        ctx = Context().with_timeout(-1)
        with pytest.raises(DeadlineExceededError, match="deadline exceeded"):
            async with ctx.guard("op"):
                pass

    async def test_cancel_interrupts_body(self):
        ctx = Context()
        asyncio.get_running_loop().call_later(0.01, ctx.cancel)
        with pytest.raises(ContextCanceledError):
            async with ctx.guard("op"):
                await asyncio.sleep(3600)
        assert asyncio.current_task().cancelling() == 0

    async def test_cancel_from_another_thread(self):
        ctx = Context()
        timer = threading.Timer(0.01, ctx.cancel)
        timer.start()
        try:
            with pytest.raises(ContextCanceledError):
                async with ctx.guard("op"):
                    await asyncio.sleep(3600)
        finally:
            timer.join()

    async def test_parent_cancel_interrupts_child_guard(self):
        parent = Context()
        child = parent.with_cancel()
        asyncio.get_running_loop().call_later(0.01, parent.cancel)
        with pytest.raises(ContextCanceledError):
            async with child.guard("op"):
                await asyncio.sleep(3600)

    async def test_deadline_interrupts_body(self):
        ctx = Context().with_timeout(0.01)
        with pytest.raises(DeadlineExceededError, match="op: context deadline exceeded"):
            async with ctx.guard("op"):
                await asyncio.sleep(3600)
        assert asyncio.current_task().cancelling() == 0

    async def test_outside_cancellation_propagates(self):
        ctx = Context()

        async def _guarded():
            async with ctx.guard("op"):
                await asyncio.sleep(3600)

        task = asyncio.create_task(_guarded())
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    async def test_cancel_after_body_is_harmless(self):
        ctx = Context()
        async with ctx.guard("op"):
            pass
        ctx.cancel()
        await asyncio.sleep(0.01)
        assert asyncio.current_task().cancelling() == 0

    async def test_body_errors_propagate(self):
        with pytest.raises(ValueError, match="boom"):
            async with Context().guard("op"):
                raise ValueError("boom")
