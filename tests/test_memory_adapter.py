import asyncio

import pytest

from fraudquery.core.adapters.memory_adapter import InMemoryRequestReplyAdapter
from fraudquery.core.domain.errors import TransportError
from fraudquery.core.ports.outbound.messaging import CORRELATION_ID_HEADER, ReplyMessage


@pytest.mark.asyncio
async def test_memory_request_reply() -> None:
    async with InMemoryRequestReplyAdapter() as bus:

        async def upper(payload: bytes, headers: dict[str, str]) -> bytes:
            return payload.upper()

        bus.register_responder("echo", upper)
        reply = await bus.request("echo", b"ping", headers={CORRELATION_ID_HEADER: "c-1"})

    assert reply.data == b"PING"
    assert reply.correlation_id == "c-1"


@pytest.mark.asyncio
async def test_memory_timeout_releases_waiter() -> None:
    async with InMemoryRequestReplyAdapter() as bus:

        async def slow(payload: bytes, headers: dict[str, str]) -> bytes:
            await asyncio.sleep(1)
            return b"late"

        bus.register_responder("slow", slow)
        reply = await bus.request("slow", b"x", timeout=0.01)

        assert reply is None
        assert bus.pending_count == 0


@pytest.mark.asyncio
async def test_memory_mismatched_reply_is_discarded() -> None:
    async with InMemoryRequestReplyAdapter() as bus:

        async def misrouted(payload: bytes, headers: dict[str, str]) -> ReplyMessage:
            return ReplyMessage(data=b"x", headers={CORRELATION_ID_HEADER: "not-mine"})

        bus.register_responder("t", misrouted)
        reply = await bus.request("t", b"x", headers={CORRELATION_ID_HEADER: "mine"}, timeout=0.05)

    assert reply is None


@pytest.mark.asyncio
async def test_memory_responder_failure_is_transport_error() -> None:
    async with InMemoryRequestReplyAdapter() as bus:

        async def broken(payload: bytes, headers: dict[str, str]) -> bytes:
            raise RuntimeError("boom")

        bus.register_responder("t", broken)
        with pytest.raises(TransportError, match="boom"):
            await bus.request("t", b"x")


@pytest.mark.asyncio
async def test_memory_request_requires_connection() -> None:
    bus = InMemoryRequestReplyAdapter()

    with pytest.raises(TransportError):
        await bus.request("t", b"x")


@pytest.mark.asyncio
async def test_memory_unregister_responder() -> None:
    async with InMemoryRequestReplyAdapter() as bus:

        async def echo(payload: bytes, headers: dict[str, str]) -> bytes:
            return payload

        bus.register_responder("t", echo)
        assert bus.unregister_responder("t")
        assert not bus.unregister_responder("t")
        assert await bus.request("t", b"x") is None
