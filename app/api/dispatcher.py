import asyncio
import logging
from typing import AsyncGenerator, Optional

from ..core.domain.entities.message import OutboundMessage
from ..core.domain.entities.query import Query
from ..core.use_cases.chat_interaction import ChatInteractionUseCase

logger = logging.getLogger(__name__)

_DONE = object()


class QueryDispatcher:
    """
    Hands a query to the pipeline and delivers its messages to one conversation.

    The pipeline runs in its own task and fills a queue; the transport side
    drains the queue with a fixed delay between messages. Cancelling the
    dispatcher (or starting a new query) abandons the running task, and
    nothing it produces afterwards is delivered.
    """

    def __init__(self, chat_use_case: ChatInteractionUseCase, message_delay_ms: int = 0):
        self.chat_use_case = chat_use_case
        self.message_delay = max(0, message_delay_ms) / 1000
        self._task: Optional[asyncio.Task] = None

    async def stream(self, query: Query) -> AsyncGenerator[OutboundMessage, None]:
        self.cancel()

        queue: asyncio.Queue = asyncio.Queue()
        task = asyncio.create_task(self._produce(query, queue))
        # Runs even when the task is cancelled before its first step
        task.add_done_callback(lambda _: queue.put_nowait(_DONE))
        self._task = task

        delivered = 0
        try:
            while True:
                message = await queue.get()
                if message is _DONE or self._task is not task:
                    break

                if delivered and self.message_delay:
                    await asyncio.sleep(self.message_delay)
                    if self._task is not task:
                        break

                yield message
                delivered += 1
        finally:
            if not task.done():
                task.cancel()
            if self._task is task:
                self._task = None

    def cancel(self) -> None:
        """Abandon the running query, if any"""
        task, self._task = self._task, None
        if task is not None and not task.done():
            logger.debug("Cancelling in-flight query")
            task.cancel()

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _produce(self, query: Query, queue: asyncio.Queue) -> None:
        try:
            async for message in self.chat_use_case.handle(query):
                await queue.put(message)
        except asyncio.CancelledError:
            logger.info(f"[{query.session_id}] Query cancelled before completion")
            raise
        except Exception as e:
            logger.exception(f"[{query.session_id}] Pipeline task failed: {e}")
