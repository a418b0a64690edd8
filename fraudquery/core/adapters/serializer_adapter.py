"""JSON payload serializer built on pydantic."""

from pydantic import BaseModel, ValidationError

from fraudquery.core.domain.errors import DeserializationError
from fraudquery.core.ports.outbound.serializer import ISerializerPort, ModelT


class JsonSerializer(ISerializerPort):
    """
    Encodes models as UTF-8 JSON using field aliases (``correlationId``).

    Decoding accepts both alias and field names.
    """

    def serialize(self, obj: BaseModel) -> bytes:
        """Serialize model to bytes."""
        return obj.model_dump_json(by_alias=True).encode("utf-8")

    def deserialize(self, data: bytes, model: type[ModelT]) -> ModelT:
        """Deserialize bytes to model."""
        if not data:
            raise DeserializationError(f"Empty payload for {model.__name__}")
        try:
            return model.model_validate_json(data)
        except ValidationError as e:
            raise DeserializationError(
                f"Cannot deserialize {model.__name__}: {e.error_count()} validation error(s): "
                + "; ".join(err["msg"] for err in e.errors())
            ) from e
        except ValueError as e:
            raise DeserializationError(f"Cannot deserialize {model.__name__}: {e}") from e
