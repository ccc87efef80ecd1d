from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..attendance.document import AttendanceDocument
from ..core.constants import AUTOSAVE_DELAY_SECONDS
from ..core.enums import SyncState
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

Saver = Callable[[dict], Awaitable[None]]


class SyncController:
    """Trailing-edge debounced auto-save of one AttendanceDocument.

    Every change (re)starts a timer; when it fires the document snapshot is
    handed to `saver`. Failures are reported through `on_failure` and leave
    the controller in FAILED; nothing is retried until the next change or an
    explicit `save_now()`.

    Document mutations should happen on the event loop thread. A change made
    while no loop is running is still tracked (state PENDING) but no timer is
    armed; `save_now()` or `flush()` picks it up.
    """

    def __init__(
        self,
        saver: Saver,
        *,
        delay: float = AUTOSAVE_DELAY_SECONDS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        on_success: Optional[Callable[[], None]] = None,
        on_failure: Optional[Callable[[Exception], None]] = None,
    ):
        self._saver = saver
        self._delay = float(delay)
        self._loop = loop
        self._on_success = on_success
        self._on_failure = on_failure

        self._document: Optional[AttendanceDocument] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._tasks: set[asyncio.Task] = set()
        self._revision = 0
        self._saved_revision = 0
        self._state = SyncState.IDLE
        self.last_error: Optional[Exception] = None

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    def bind(self, document: AttendanceDocument) -> None:
        """Track `document`; a previously bound document is released."""
        self.close()
        if self._unsubscribe:
            self._unsubscribe()
        self._document = document
        self._unsubscribe = document.subscribe(lambda _doc: self.notify_change())
        self._saved_revision = self._revision
        self._state = SyncState.IDLE

    def _running_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def notify_change(self) -> None:
        self._revision += 1
        self._state = SyncState.PENDING
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        loop = self._running_loop()
        if loop is None:
            logger.debug("Change recorded outside the event loop; waiting for an explicit save")
            return
        self._timer = loop.call_later(self._delay, self._fire)

    def _fire(self) -> None:
        self._timer = None
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._save(self._snapshot(), self._revision))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _snapshot(self) -> dict:
        if self._document is None:
            raise RuntimeError("SyncController has no bound document")
        return self._document.to_dict()

    async def _save(self, snapshot: dict, revision: int) -> bool:
        try:
            await self._saver(snapshot)
        except DomainError as e:
            if revision <= self._saved_revision:
                # A newer snapshot already reached the server.
                logger.info("Ignoring failure of superseded save (revision %d): %s", revision, e)
                return False
            logger.warning("Save failed: %s", e)
            self.last_error = e
            if self._timer is None:
                self._state = SyncState.FAILED
            if self._on_failure:
                self._on_failure(e)
            return False

        self._saved_revision = max(self._saved_revision, revision)
        self.last_error = None
        if self._timer is None and self._saved_revision == self._revision:
            self._state = SyncState.IDLE
        if self._on_success:
            self._on_success()
        return True

    async def save_now(self) -> bool:
        """Explicit save: skips the timer and runs immediately.

        Not deduplicated against an in-flight auto-save; whichever succeeds
        last decides the stored copy, and a failure of an older snapshot is
        ignored once a newer one has been saved.
        """
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return await self._save(self._snapshot(), self._revision)

    async def flush(self) -> bool:
        """Save now if a change is still waiting, then wait for in-flight saves."""
        ok = True
        unsent = self._state == SyncState.PENDING and not self._tasks
        if self._timer is not None or unsent:
            ok = await self.save_now()
        await self.wait_idle()
        return ok and self._state != SyncState.FAILED

    async def wait_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
