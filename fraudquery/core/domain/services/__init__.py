"""Domain services."""

from fraudquery.core.domain.services.duration import DurationParser, parse_duration_to_millis
from fraudquery.core.domain.services.envelope import RequestEnvelope, RequestEnvelopeBuilder
from fraudquery.core.domain.services.gateway import FraudQueryGateway
from fraudquery.core.domain.services.response_mapper import map_error

__all__ = [
    "DurationParser",
    "parse_duration_to_millis",
    "RequestEnvelope",
    "RequestEnvelopeBuilder",
    "FraudQueryGateway",
    "map_error",
]
