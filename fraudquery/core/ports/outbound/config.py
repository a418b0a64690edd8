"""Key-value configuration source outbound port."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class RepositoryKind(str, Enum):
    """Available configuration repository strategies."""

    FILE = "file"
    ENV = "env"


class IConfigRepository(ABC):
    """
    Outbound port for a key-value configuration source.

    Keys are dotted names such as ``nats.host`` or ``fraud.query.timeout``.
    """

    @abstractmethod
    def load(self) -> None:
        """Load (or reload) properties from the underlying source."""
        pass

    @abstractmethod
    def get_property(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a property value.

        Args:
            name: Dotted property name
            default: Value returned when the property is not set

        Returns:
            Property value as text, or default
        """
        pass
