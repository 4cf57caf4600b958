import asyncio
from typing import Optional

from .base import FetchResult

class ResultSlot:
    """
    Single-assignment cell shared between a background fetch task and
    whoever later asks for its outcome.

    Backed by an asyncio.Future: the first write wins, later writes are
    refused, and readers never change the stored value.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._future: asyncio.Future = (loop or asyncio.get_running_loop()).create_future()

    @property
    def filled(self) -> bool:
        return self._future.done()

    def set(self, result: FetchResult) -> bool:
        """Store the result. Returns False if the slot already holds one."""
        if self._future.done():
            return False
        self._future.set_result(result)
        return True

    def peek(self) -> Optional[FetchResult]:
        if not self._future.done():
            return None
        return self._future.result()

    async def wait(self, timeout: Optional[float] = None) -> FetchResult:
        # shield so a timed-out waiter does not cancel the shared future
        return await asyncio.wait_for(asyncio.shield(self._future), timeout)
