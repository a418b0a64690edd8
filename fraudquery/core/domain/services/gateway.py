"""Fraud query gateway - bridges a synchronous query onto NATS request/reply."""

import time
from typing import Any, Optional

import structlog

from fraudquery.core.domain.errors import NoReplyError
from fraudquery.core.domain.models import QueryOutcome, QueryResponse, QueryResult
from fraudquery.core.domain.services.envelope import (
    RequestEnvelopeBuilder,
    new_correlation_id,
)
from fraudquery.core.domain.services.response_mapper import map_error
from fraudquery.core.ports.inbound.fraud_query import IFraudQueryPort
from fraudquery.core.ports.outbound.messaging import IRequestReplyPort, ReplyMessage
from fraudquery.core.ports.outbound.serializer import ISerializerPort

logger = structlog.get_logger(__name__)

DEFAULT_TOPIC = "fraud.query"
DEFAULT_TIMEOUT = 1.0


def has_text(value: Optional[str]) -> bool:
    """True if value contains at least one non-whitespace character."""
    return value is not None and bool(value.strip())


class FraudQueryGateway(IFraudQueryPort):
    """
    Fraud query gateway service.

    Every call publishes one request on the configured topic and waits
    up to ``timeout`` seconds for one reply. The bus adapter is shared
    by all concurrent calls; its lifecycle is owned by the caller.

    Usage:
        gateway = FraudQueryGateway(bus, JsonSerializer(), timeout=1.0)
        result = await gateway.query("4111...", "5 minutes", "card")
    """

    def __init__(
        self,
        bus: IRequestReplyPort,
        serializer: ISerializerPort,
        topic: str = DEFAULT_TOPIC,
        timeout: float = DEFAULT_TIMEOUT,
        envelope_builder: Optional[RequestEnvelopeBuilder] = None,
    ):
        """
        Initialize gateway.

        Args:
            bus: Request/reply messaging adapter
            serializer: Payload codec
            topic: Topic requests are published on
            timeout: Bounded wait for a reply, in seconds
            envelope_builder: Optional custom envelope builder
        """
        self._bus = bus
        self._serializer = serializer
        self._topic = topic
        self._timeout = timeout
        self._builder = envelope_builder or RequestEnvelopeBuilder(serializer)

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def timeout(self) -> float:
        return self._timeout

    async def query(
        self,
        key: Optional[str],
        timeframe: Optional[str],
        subject: Optional[str],
    ) -> QueryResult:
        """Look up fraud indicators for a key."""
        if not has_text(key) or not has_text(subject):
            logger.warning(
                "fraud_query_rejected",
                reason="key and subject are required",
            )
            return QueryResult(outcome=QueryOutcome.BAD_REQUEST)

        correlation_id = new_correlation_id()
        log = logger.bind(correlation_id=correlation_id, topic=self._topic)

        try:
            response = await self._exchange(key, timeframe, subject, correlation_id, log)
        except Exception as e:
            log.error("fraud_query_failed", key=key, error=str(e), exc_info=True)
            return QueryResult(
                outcome=QueryOutcome.UPSTREAM_FAILURE,
                response=map_error(e),
            )

        log.info(
            "fraud_query_response_received",
            responder_correlation_id=response.correlation_id,
            records=len(response.records),
        )
        return QueryResult(outcome=QueryOutcome.OK, response=response)

    async def _exchange(
        self,
        key: str,
        timeframe: Optional[str],
        subject: str,
        correlation_id: str,
        log: Any,
    ) -> QueryResponse:
        """Build, publish, wait and decode. Raises on every failure."""
        envelope = self._builder.build(key, timeframe, subject, correlation_id)

        started = time.perf_counter()
        reply = await self._bus.request(
            self._topic,
            envelope.payload,
            headers=envelope.headers,
            timeout=self._timeout,
        )
        elapsed_ms = (time.perf_counter() - started) * 1000
        log.info("nats_reply_time", round_trip_ms=round(elapsed_ms, 3))

        if reply is None or not self._is_own_reply(reply, correlation_id, log):
            raise NoReplyError(key)

        return self._serializer.deserialize(reply.data, QueryResponse)

    def _is_own_reply(
        self,
        reply: ReplyMessage,
        correlation_id: str,
        log: Any,
    ) -> bool:
        """Replies without a correlation header are trusted; mismatches are dropped."""
        reply_id = reply.correlation_id
        if reply_id is None or reply_id == correlation_id:
            return True
        log.warning("nats_reply_correlation_mismatch", reply_correlation_id=reply_id)
        return False
