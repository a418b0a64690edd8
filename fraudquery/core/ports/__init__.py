"""Port interfaces for hexagonal architecture."""

from fraudquery.core.ports.inbound.fraud_query import IFraudQueryPort
from fraudquery.core.ports.outbound.config import IConfigRepository
from fraudquery.core.ports.outbound.messaging import IRequestReplyPort
from fraudquery.core.ports.outbound.serializer import ISerializerPort

__all__ = [
    "IFraudQueryPort",
    "IConfigRepository",
    "IRequestReplyPort",
    "ISerializerPort",
]
