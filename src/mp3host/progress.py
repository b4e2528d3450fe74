"""Simulated progress for requests that report none.

The GitHub contents API gives no upload progress, so the value shown while
a request is in flight is cosmetic: it creeps up by a random step on every
tick and stays below CAP until the caller reports the real outcome.
"""

import asyncio
import contextlib
import logging
import random
from collections.abc import Callable

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]

CAP = 85.0
MAX_STEP = 15.0
DONE = 100.0


class SimulatedProgress:
    """Monotonic fake progress ticker driven by an asyncio task."""

    def __init__(
        self,
        callback: ProgressCallback | None = None,
        interval: float = 0.2,
        rng: random.Random | None = None,
    ) -> None:
        self._callback = callback
        self._interval = interval
        self._rng = rng or random.Random()
        self._task: asyncio.Task | None = None
        self.value = 0.0

    def _set(self, value: float) -> None:
        self.value = value
        if self._callback is None:
            return
        try:
            self._callback(value)
        except Exception as e:
            # Progress is cosmetic
            logger.warning(f"Progress callback failed, no longer reporting: {e}")
            self._callback = None

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self._set(min(self.value + self._rng.random() * MAX_STEP, CAP))

    def start(self) -> None:
        """Reset to zero and start ticking on the running loop."""
        self._set(0.0)
        self._task = asyncio.create_task(self._tick())

    async def _stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await self._task
        self._task = None

    async def complete(self) -> None:
        """Stop ticking and jump to 100."""
        await self._stop()
        self._set(DONE)

    async def fail(self) -> None:
        """Stop ticking and drop back to 0."""
        await self._stop()
        self._set(0.0)
