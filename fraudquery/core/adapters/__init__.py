"""Adapters - concrete implementations of ports."""

from fraudquery.core.adapters.config_adapter import (
    EnvConfigRepository,
    FileConfigRepository,
    create_config_repository,
)
from fraudquery.core.adapters.http_adapter import FraudQueryHttpAdapter
from fraudquery.core.adapters.memory_adapter import InMemoryRequestReplyAdapter
from fraudquery.core.adapters.nats_adapter import NatsRequestReplyAdapter
from fraudquery.core.adapters.serializer_adapter import JsonSerializer

__all__ = [
    # Messaging
    "NatsRequestReplyAdapter",
    "InMemoryRequestReplyAdapter",
    # Serialization
    "JsonSerializer",
    # HTTP
    "FraudQueryHttpAdapter",
    # Configuration
    "FileConfigRepository",
    "EnvConfigRepository",
    "create_config_repository",
]
