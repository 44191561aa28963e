import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Sequence

import anyio

from practice_api.event import Chunk

logger = logging.getLogger(__name__)

ChunkSink = Callable[[Chunk], Awaitable[None]]
WordSink = Callable[[str], Awaitable[None]]


class SessionState(str, Enum):
    IDLE = "idle"
    EMITTING = "emitting"
    FINISHED = "finished"
    CANCELLED = "cancelled"


class StreamSession:
    """
    Drives one streaming response: one token per tick, raced against cancellation.

    A session lives exactly as long as its request. The token sequence is only
    read, so any number of sessions may share it. ``FINISHED`` and
    ``CANCELLED`` are terminal and only ``FINISHED`` emits the finish chunk.
    """

    def __init__(
        self,
        tokens: Sequence[str],
        interval: float,
        cancelled: Optional[anyio.Event] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be greater than 0")
        self.tokens = tokens
        self.interval = interval
        self.index = 0
        self.state = SessionState.IDLE
        self._cancelled = cancelled
        self._deadline = 0.0

    @property
    def cancelled(self) -> anyio.Event:
        # Created lazily: anyio events need a running event loop.
        if self._cancelled is None:
            self._cancelled = anyio.Event()
        return self._cancelled

    def cancel(self) -> None:
        self.cancelled.set()

    def _start(self) -> None:
        if self.state is not SessionState.IDLE:
            raise RuntimeError(f"stream session is already {self.state.value}")
        self.state = SessionState.EMITTING
        self._deadline = anyio.current_time()

    async def _tick(self) -> bool:
        """Wait for the next tick. Return False if cancellation fired first."""
        if not self.cancelled.is_set():
            # A missed deadline is not replayed: ticks never bunch up behind a slow sink.
            self._deadline = max(self._deadline + self.interval, anyio.current_time())
            with anyio.CancelScope(deadline=self._deadline):
                await self.cancelled.wait()
            if not self.cancelled.is_set():
                return True

        self.state = SessionState.CANCELLED
        logger.debug("session cancelled after %d tokens", self.index)
        return False

    async def run(self, sink: ChunkSink) -> SessionState:
        """Emit every token, then the finish chunk, unless cancelled first."""
        self._start()
        while await self._tick():
            if self.index < len(self.tokens):
                await sink(Chunk.token(self.tokens[self.index]))
                self.index += 1
                continue

            await sink(Chunk.final())
            self.state = SessionState.FINISHED
            logger.debug("session finished after %d tokens", self.index)
            break
        return self.state

    async def run_forever(self, sink: WordSink) -> SessionState:
        """Cycle through the tokens until cancelled. There is no finish chunk."""
        self._start()
        while await self._tick():
            if not self.tokens:
                continue
            await sink(self.tokens[self.index])
            self.index = (self.index + 1) % len(self.tokens)
        return self.state
