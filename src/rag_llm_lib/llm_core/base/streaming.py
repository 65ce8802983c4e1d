"""A single-pass channel of text fragments produced by a streaming provider call."""

from __future__ import annotations

import asyncio
import weakref
from contextlib import aclosing
from types import TracebackType
from typing import AsyncGenerator, List, Optional, Type

from ..logger import get_logger
from .models import ChatResult

logger = get_logger(__name__)


class _StreamEnd:
    pass


class _StreamFailure:
    def __init__(self, error: BaseException) -> None:
        self.error = error


_END = _StreamEnd()


def _cancel_producer(task: asyncio.Task) -> None:
    if not task.done() and not task.get_loop().is_closed():
        task.cancel()


class ChatStream:
    """
    Text fragments of a streamed answer, consumed with ``async for``.

    A producer task reads the provider stream and pushes non-empty fragments into a
    bounded queue; iteration pulls from it in delivery order. The stream is
    forward-only and cannot be restarted.

    Once iteration is exhausted, :attr:`result` holds the final ``ChatResult``
    whose content is the concatenation of every fragment handed out.

    Closing the stream early (``aclose()`` or leaving an ``async with`` block)
    cancels the producer, which closes the underlying network stream. A stream that
    is dropped without being closed cancels its producer when it is garbage collected.

    Usage::

        async with router.chat_stream("Hi", config) as stream:
            async for fragment in stream:
                print(fragment, end="")
        print(stream.result.content)
    """

    def __init__(self, source: AsyncGenerator[str, None], max_buffered: int = 64) -> None:
        """Wrap a provider's fragment generator.

        Args:
            source: Async generator yielding text fragments. Nothing runs until iteration starts.
            max_buffered: Maximum fragments held between producer and consumer.
        """
        self._source = source
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=max_buffered)
        self._task: Optional[asyncio.Task] = None
        self._fragments: List[str] = []
        self._result: Optional[ChatResult] = None
        self._closed = False

    def __aiter__(self) -> "ChatStream":
        return self

    async def __anext__(self) -> str:
        if self._closed:
            raise StopAsyncIteration

        if self._task is None:
            # producer is cancelled once this stream is garbage collected
            self._task = asyncio.create_task(self._produce(self._source, self._queue))
            weakref.finalize(self, _cancel_producer, self._task)

        item = await self._queue.get()

        if isinstance(item, _StreamEnd):
            self._closed = True
            self._result = ChatResult(content="".join(self._fragments))
            raise StopAsyncIteration

        if isinstance(item, _StreamFailure):
            self._closed = True
            raise item.error

        self._fragments.append(item)
        return item

    @staticmethod
    async def _produce(source: AsyncGenerator[str, None], queue: asyncio.Queue) -> None:
        try:
            async with aclosing(source) as fragments:
                async for fragment in fragments:
                    if fragment:
                        await queue.put(fragment)
        except Exception as e:
            logger.error(f"Streaming failed: {e}")
            await queue.put(_StreamFailure(e))
            return
        await queue.put(_END)

    @property
    def result(self) -> ChatResult:
        """The final result. Only available after the stream was fully consumed.

        Raises:
            RuntimeError: If the stream has not been exhausted.
        """
        if self._result is None:
            raise RuntimeError("ChatStream has not been fully consumed.")
        return self._result

    @property
    def text(self) -> str:
        """Concatenation of the fragments handed out so far."""
        return "".join(self._fragments)

    async def collect(self) -> ChatResult:
        """Consume the remaining fragments and return the final result."""
        async for _ in self:
            pass
        return self.result

    async def aclose(self) -> None:
        """Stop consuming and release the underlying network stream."""
        if self._closed and self._task is None:
            return
        self._closed = True

        if self._task is None:
            await self._source.aclose()
            return

        if not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.debug("Stream producer cancelled.")

    async def __aenter__(self) -> "ChatStream":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
