"""Outbound request envelope construction."""

import time
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from fraudquery.core.domain.models import QueryRequest
from fraudquery.core.domain.services.duration import DurationParser
from fraudquery.core.ports.outbound.messaging import (
    CLIENT_PUBLISH_TS_HEADER,
    CORRELATION_ID_HEADER,
)
from fraudquery.core.ports.outbound.serializer import ISerializerPort


def new_correlation_id() -> str:
    """Generate a fresh correlation identifier."""
    return str(uuid4())


def now_millis() -> int:
    """Current wall-clock time in milliseconds since epoch."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class RequestEnvelope:
    """Serialized request plus transport metadata for one publish."""

    request: QueryRequest
    payload: bytes
    correlation_id: str
    client_publish_ts_ms: int

    @property
    def headers(self) -> dict[str, str]:
        return {
            CORRELATION_ID_HEADER: self.correlation_id,
            CLIENT_PUBLISH_TS_HEADER: str(self.client_publish_ts_ms),
        }


class RequestEnvelopeBuilder:
    """Builds and serializes fraud query requests."""

    def __init__(
        self,
        serializer: ISerializerPort,
        duration_parser: Optional[DurationParser] = None,
    ):
        self._serializer = serializer
        self._parse = duration_parser or DurationParser()

    def build(
        self,
        key: str,
        timeframe: Optional[str],
        subject: str,
        correlation_id: Optional[str] = None,
    ) -> RequestEnvelope:
        """
        Build a request envelope.

        The publish timestamp is taken after serialization, right
        before the envelope is handed to the bus.

        Raises:
            FormatError: If the timeframe cannot be parsed
        """
        request = QueryRequest(
            key=key,
            timeframe=self._parse(timeframe),
            subject=subject,
        )
        payload = self._serializer.serialize(request)
        return RequestEnvelope(
            request=request,
            payload=payload,
            correlation_id=correlation_id or new_correlation_id(),
            client_publish_ts_ms=now_millis(),
        )
