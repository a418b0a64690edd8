"""In-process request/reply adapter for local runs and tests."""

import asyncio
from typing import Awaitable, Callable, Optional, Union
from uuid import uuid4

import structlog

from fraudquery.core.domain.errors import TransportError
from fraudquery.core.ports.outbound.messaging import (
    CORRELATION_ID_HEADER,
    IRequestReplyPort,
    ReplyMessage,
)

logger = structlog.get_logger(__name__)

# Responder returns reply bytes (or a full ReplyMessage), or None to stay silent.
Responder = Callable[
    [bytes, dict[str, str]],
    Awaitable[Union[bytes, ReplyMessage, None]],
]


class InMemoryRequestReplyAdapter(IRequestReplyPort):
    """
    In-memory implementation of the request/reply port.

    Requests are dispatched to responders registered per topic.
    Pending requests are tracked by correlation id; a reply is only
    delivered to the waiter registered under the same id.
    """

    def __init__(self) -> None:
        self._connected = False
        self._responders: dict[str, Responder] = {}
        self._pending_requests: dict[str, asyncio.Future[ReplyMessage]] = {}
        self._tasks: set[asyncio.Task[None]] = set()

    def register_responder(self, topic: str, responder: Responder) -> None:
        """Register the responder serving a topic."""
        self._responders[topic] = responder
        logger.info("memory_responder_registered", topic=topic)

    def unregister_responder(self, topic: str) -> bool:
        """Remove a topic responder."""
        return self._responders.pop(topic, None) is not None

    @property
    def pending_count(self) -> int:
        """Number of requests still waiting for a reply."""
        return len(self._pending_requests)

    async def connect(self) -> None:
        self._connected = True
        logger.info("memory_bus_connected")

    async def disconnect(self) -> None:
        if not self._connected:
            return

        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()

        for future in self._pending_requests.values():
            if not future.done():
                future.set_exception(TransportError("Bus disconnected"))
        self._pending_requests.clear()

        self._connected = False
        logger.info("memory_bus_disconnected")

    async def is_connected(self) -> bool:
        return self._connected

    async def request(
        self,
        topic: str,
        payload: bytes,
        headers: Optional[dict[str, str]] = None,
        timeout: float = 1.0,
    ) -> Optional[ReplyMessage]:
        """Dispatch request to the topic responder and wait for its reply."""
        if not self._connected:
            raise TransportError("Not connected")

        headers = dict(headers or {})
        correlation_id = headers.setdefault(CORRELATION_ID_HEADER, str(uuid4()))

        responder = self._responders.get(topic)
        if responder is None:
            logger.debug("memory_no_responders", topic=topic)
            return None

        future: asyncio.Future[ReplyMessage] = asyncio.get_running_loop().create_future()
        self._pending_requests[correlation_id] = future

        task = asyncio.create_task(
            self._dispatch(topic, responder, payload, headers, correlation_id)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        try:
            return await asyncio.wait_for(future, timeout=timeout)
        except asyncio.TimeoutError:
            logger.debug("memory_request_timeout", topic=topic, timeout=timeout)
            return None
        finally:
            self._pending_requests.pop(correlation_id, None)

    def deliver_reply(self, reply: ReplyMessage) -> bool:
        """
        Resolve the pending request matching the reply's correlation id.

        Returns:
            True if a waiter received the reply, False if it was discarded
        """
        correlation_id = reply.correlation_id
        future = self._pending_requests.get(correlation_id or "")
        if future is None or future.done():
            logger.debug("memory_reply_discarded", correlation_id=correlation_id)
            return False
        future.set_result(reply)
        return True

    async def _dispatch(
        self,
        topic: str,
        responder: Responder,
        payload: bytes,
        headers: dict[str, str],
        correlation_id: str,
    ) -> None:
        """Run the responder and route its answer back to the waiter."""
        try:
            answer = await responder(payload, headers)
        except Exception as e:
            logger.error("memory_responder_error", topic=topic, error=str(e))
            future = self._pending_requests.get(correlation_id)
            if future is not None and not future.done():
                future.set_exception(TransportError(f"Responder on '{topic}' failed: {e}"))
            return

        if answer is None:
            return
        if isinstance(answer, bytes):
            answer = ReplyMessage(
                data=answer,
                subject=topic,
                headers={CORRELATION_ID_HEADER: correlation_id},
            )
        self.deliver_reply(answer)
