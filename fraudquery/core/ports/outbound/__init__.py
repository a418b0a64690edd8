"""Outbound ports - interfaces for external system connections."""

from fraudquery.core.ports.outbound.config import IConfigRepository, RepositoryKind
from fraudquery.core.ports.outbound.messaging import (
    CLIENT_PUBLISH_TS_HEADER,
    CORRELATION_ID_HEADER,
    IRequestReplyPort,
    ReplyMessage,
)
from fraudquery.core.ports.outbound.serializer import ISerializerPort

__all__ = [
    "IConfigRepository",
    "RepositoryKind",
    "IRequestReplyPort",
    "ReplyMessage",
    "CORRELATION_ID_HEADER",
    "CLIENT_PUBLISH_TS_HEADER",
    "ISerializerPort",
]
