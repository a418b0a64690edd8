import pytest

from fraudquery.core.adapters.serializer_adapter import JsonSerializer
from fraudquery.core.domain.errors import DeserializationError
from fraudquery.core.domain.models import Indicator, QueryRequest, QueryResponse


def test_request_round_trip() -> None:
    serializer = JsonSerializer()
    request = QueryRequest(key="4111", timeframe=300_000, subject="card")

    decoded = serializer.deserialize(serializer.serialize(request), QueryRequest)

    assert decoded == request


def test_response_uses_correlation_id_alias() -> None:
    serializer = JsonSerializer()
    response = QueryResponse(
        key="4111",
        timeframe=1000,
        correlation_id="corr-1",
        records={"declined": Indicator(count=3, amount=42.5)},
    )

    data = serializer.serialize(response)

    assert b'"correlationId":"corr-1"' in data
    assert serializer.deserialize(data, QueryResponse) == response


def test_deserialize_invalid_json() -> None:
    with pytest.raises(DeserializationError, match="Cannot deserialize QueryResponse"):
        JsonSerializer().deserialize(b"\x00not json", QueryResponse)


def test_deserialize_wrong_shape() -> None:
    with pytest.raises(DeserializationError, match="Cannot deserialize QueryResponse"):
        JsonSerializer().deserialize(b'{"timeframe": "soon"}', QueryResponse)


def test_deserialize_empty_payload() -> None:
    with pytest.raises(DeserializationError, match="Empty payload"):
        JsonSerializer().deserialize(b"", QueryResponse)
