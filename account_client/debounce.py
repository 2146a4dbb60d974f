"""Debounced username uniqueness checking for the account form."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_SECONDS = 0.4


class CancellableTimer:
    """One-shot timer on the running event loop; restarting replaces the pending fire."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._done: Optional[asyncio.Future] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._done = loop.create_future()
        self._handle = loop.call_later(self.delay, self._fire)

    restart = start

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._resolve(False)

    async def wait(self) -> bool:
        """Wait for the current countdown; True if it fired, False if cancelled."""

        if self._done is None:
            return False
        return await self._done

    def _fire(self) -> None:
        self._handle = None
        try:
            self.callback()
        finally:
            self._resolve(True)

    def _resolve(self, fired: bool) -> None:
        if self._done is not None and not self._done.done():
            self._done.set_result(fired)


class UsernameCheckController:
    """Tracks the username draft and its last known uniqueness.

    Every input restarts the settle timer; only a timer that fires issues a
    query. Each query is tagged with a sequence number and its result is
    dropped once a newer input or query has superseded it. Failed checks
    count as "not unique".
    """

    def __init__(
        self,
        check: Callable[[str], Awaitable[bool]],
        settle_seconds: float = DEFAULT_SETTLE_SECONDS,
        initial_value: str = "",
    ) -> None:
        self._check = check
        self._timer = CancellableTimer(settle_seconds, self._issue_query)
        self._latest_seq = 0
        self._in_flight: Set[asyncio.Task] = set()
        self.value = initial_value
        self.is_unique = True
        self.checked_value: Optional[str] = None
        self.latest_query: Optional[asyncio.Task] = None

    def reset(self, value: str, is_unique: bool = True) -> None:
        """Adopt a server-provided value without issuing a query."""

        self._timer.cancel()
        self._latest_seq += 1
        self.value = value
        self.is_unique = is_unique
        self.checked_value = value

    def on_input(self, value: str) -> None:
        self.value = value
        # Any query already in flight now answers for an older draft.
        self._latest_seq += 1
        if not value.strip():
            self._timer.cancel()
            self.is_unique = False
            self.checked_value = value
            return
        self._timer.restart()

    def _issue_query(self) -> None:
        self._latest_seq += 1
        task = asyncio.get_running_loop().create_task(
            self._run_query(self._latest_seq, self.value)
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        self.latest_query = task

    async def _run_query(self, seq: int, value: str) -> None:
        try:
            unique = await self._check(value)
        except Exception as exc:
            logger.warning("Username check for %r failed: %s", value, exc)
            unique = False

        if seq != self._latest_seq:
            logger.debug("Discarding stale username check for %r", value)
            return
        self.is_unique = unique
        self.checked_value = value

    async def wait_settled(self) -> bool:
        return await self._timer.wait()

    async def wait_idle(self) -> None:
        """Wait until no countdown is pending and no query is in flight."""

        while self._timer.pending or self._in_flight:
            if self._timer.pending:
                await self._timer.wait()
            if self._in_flight:
                await asyncio.gather(*list(self._in_flight))

    def close(self) -> None:
        self._timer.cancel()
        for task in list(self._in_flight):
            task.cancel()


__all__ = ["CancellableTimer", "DEFAULT_SETTLE_SECONDS", "UsernameCheckController"]
