"""Cancellation tokens for account API operations.

A :class:`Context` is handed to every client operation. Canceling it, or
letting its deadline pass, aborts the operation with
:class:`~accounts_client.exceptions.ContextCanceledError` or
:class:`~accounts_client.exceptions.DeadlineExceededError`.

Usage::

    ctx = Context().with_timeout(5)
    account = await client.get_account(ctx, account_id)
"""

from __future__ import annotations

import asyncio
import threading
import time
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta

from accounts_client.exceptions import ContextCanceledError, ContextError, DeadlineExceededError


class _Waiter:
    """An asyncio task currently running under a context."""

    __slots__ = ("loop", "task", "active", "cancel_requested")

    def __init__(self, loop: asyncio.AbstractEventLoop, task: asyncio.Task) -> None:
        self.loop = loop
        self.task = task
        self.active = True
        self.cancel_requested = False


class Context:
    """Explicit cancellation plus an optional deadline.

    Derived contexts are canceled together with their parent and never outlive
    its deadline. ``cancel()`` may be called from any thread.
    """

    def __init__(self, *, deadline: datetime | None = None, parent: Context | None = None) -> None:
        self._lock = threading.Lock()
        self._canceled = False
        self._waiters: set[_Waiter] = set()
        self._children: weakref.WeakSet[Context] = weakref.WeakSet()

        deadline_ts = deadline.timestamp() if deadline is not None else None
        if parent is not None and parent._deadline is not None:
            if deadline_ts is None or parent._deadline < deadline_ts:
                deadline_ts = parent._deadline
        self._deadline = deadline_ts

        if parent is not None:
            parent._adopt(self)

    @classmethod
    def background(cls) -> Context:
        """Return a context that is never canceled and has no deadline."""
        return cls()

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def with_cancel(self) -> Context:
        return Context(parent=self)

    def with_deadline(self, deadline: datetime) -> Context:
        return Context(deadline=deadline, parent=self)

    def with_timeout(self, seconds: float) -> Context:
        return self.with_deadline(datetime.now(UTC) + timedelta(seconds=seconds))

    def _adopt(self, child: Context) -> None:
        with self._lock:
            if not self._canceled:
                self._children.add(child)
                return
        child.cancel()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def deadline(self) -> datetime | None:
        if self._deadline is None:
            return None
        return datetime.fromtimestamp(self._deadline, UTC)

    @property
    def canceled(self) -> bool:
        return self._canceled

    def remaining(self) -> float | None:
        """Seconds left until the deadline, or ``None`` without one."""
        if self._deadline is None:
            return None
        return self._deadline - time.time()

    def err(self, operation: str = "") -> ContextError | None:
        """Return the error describing why the context is done, if it is."""
        if self._canceled:
            return ContextCanceledError(operation)
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            return DeadlineExceededError(operation)
        return None

    def done(self) -> bool:
        return self.err() is not None

    def raise_if_done(self, operation: str = "") -> None:
        error = self.err(operation)
        if error is not None:
            raise error

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        """Cancel this context, its children and every task running under them."""
        with self._lock:
            if self._canceled:
                return
            self._canceled = True
            waiters = list(self._waiters)
            children = list(self._children)
            self._children.clear()

        for waiter in waiters:
            try:
                waiter.loop.call_soon_threadsafe(_cancel_waiter, waiter)
            except RuntimeError:
                # Loop already closed; nothing left to interrupt.
                pass
        for child in children:
            child.cancel()

    def _attach(self, waiter: _Waiter) -> bool:
        with self._lock:
            if self._canceled:
                return False
            self._waiters.add(waiter)
            return True

    def _detach(self, waiter: _Waiter) -> None:
        waiter.active = False
        with self._lock:
            self._waiters.discard(waiter)

    @asynccontextmanager
    async def guard(self, operation: str = "") -> AsyncIterator[None]:
        """Run the enclosed block under this context.

        Raises immediately if the context is already done. Otherwise the block
        is interrupted when the context is canceled or its deadline passes.
        """
        self.raise_if_done(operation)

        task = asyncio.current_task()
        if task is None:
            raise RuntimeError("Context.guard() must be used inside an asyncio task")
        waiter = _Waiter(asyncio.get_running_loop(), task)
        if not self._attach(waiter):
            raise ContextCanceledError(operation)

        timeout = asyncio.timeout(self.remaining())
        try:
            async with timeout:
                yield
        except TimeoutError:
            if timeout.expired():
                raise DeadlineExceededError(operation) from None
            raise
        except asyncio.CancelledError:
            if waiter.cancel_requested and task.uncancel() == 0:
                raise ContextCanceledError(operation) from None
            raise
        finally:
            self._detach(waiter)

    def __repr__(self) -> str:
        state = "canceled" if self._canceled else "active"
        return f"<Context {state} deadline={self.deadline}>"


def _cancel_waiter(waiter: _Waiter) -> None:
    # Runs on the waiter's loop, so ``active`` cannot change underneath us.
    if waiter.active and not waiter.task.done():
        waiter.cancel_requested = True
        waiter.task.cancel()
