"""
fraudquery - fraud indicator lookups over NATS request/reply.

A query (key, timeframe, subject) is published on a NATS topic and the
single reply is returned as a QueryResponse. Every failure is mapped to
one canonical error response.
"""

__version__ = "0.1.0"

from fraudquery.core.adapters.memory_adapter import InMemoryRequestReplyAdapter
from fraudquery.core.adapters.nats_adapter import NatsRequestReplyAdapter
from fraudquery.core.adapters.serializer_adapter import JsonSerializer
from fraudquery.core.domain.errors import (
    DeserializationError,
    FormatError,
    FraudQueryError,
    NoReplyError,
    TransportError,
)
from fraudquery.core.domain.models import (
    Indicator,
    QueryOutcome,
    QueryRequest,
    QueryResponse,
    QueryResult,
)
from fraudquery.core.domain.services.duration import parse_duration_to_millis
from fraudquery.core.domain.services.gateway import FraudQueryGateway
from fraudquery.core.domain.services.response_mapper import map_error
from fraudquery.server import FraudQueryServer
from fraudquery.settings import GatewaySettings

__all__ = [
    # Main
    "FraudQueryServer",
    "FraudQueryGateway",
    "GatewaySettings",
    # Models
    "Indicator",
    "QueryOutcome",
    "QueryRequest",
    "QueryResponse",
    "QueryResult",
    # Services
    "parse_duration_to_millis",
    "map_error",
    # Adapters
    "JsonSerializer",
    "NatsRequestReplyAdapter",
    "InMemoryRequestReplyAdapter",
    # Errors
    "FraudQueryError",
    "FormatError",
    "NoReplyError",
    "DeserializationError",
    "TransportError",
]
