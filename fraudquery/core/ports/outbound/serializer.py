"""Serializer outbound port interface."""

from abc import ABC, abstractmethod
from typing import TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class ISerializerPort(ABC):
    """Encodes domain models to bytes and back."""

    @abstractmethod
    def serialize(self, obj: BaseModel) -> bytes:
        """
        Encode a model to a byte payload.

        Args:
            obj: Model to encode

        Returns:
            Opaque payload bytes
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes, model: type[ModelT]) -> ModelT:
        """
        Decode a byte payload into a model.

        Args:
            data: Payload bytes
            model: Expected model class

        Returns:
            Decoded model instance

        Raises:
            DeserializationError: If the payload does not decode to the model
        """
        pass
