import pytest
from aiohttp.test_utils import TestClient, TestServer

from fraudquery.core.adapters.http_adapter import FraudQueryHttpAdapter
from fraudquery.core.adapters.memory_adapter import InMemoryRequestReplyAdapter
from fraudquery.core.domain.models import Indicator, QueryOutcome, QueryResponse, QueryResult
from fraudquery.core.domain.services.response_mapper import map_error


class _FakeGateway:
    def __init__(self, result: QueryResult) -> None:
        self.result = result
        self.calls: list[tuple] = []

    async def query(self, key, timeframe, subject) -> QueryResult:
        self.calls.append((key, timeframe, subject))
        return self.result


def _client(adapter: FraudQueryHttpAdapter) -> TestClient:
    return TestClient(TestServer(adapter.create_app()))


@pytest.mark.asyncio
async def test_http_query_success() -> None:
    response = QueryResponse(
        key="4111",
        timeframe=300_000,
        correlation_id="corr-1",
        records={"declined": Indicator(count=1, amount=9.99)},
    )
    gateway = _FakeGateway(QueryResult(outcome=QueryOutcome.OK, response=response))

    async with _client(FraudQueryHttpAdapter(gateway)) as client:
        resp = await client.get(
            "/api/fraud/query",
            params={"key": "4111", "timeframe": "5 minutes", "subject": "card"},
        )
        body = await resp.json()

    assert resp.status == 200
    assert gateway.calls == [("4111", "5 minutes", "card")]
    assert body == {
        "key": "4111",
        "timeframe": 300_000,
        "correlationId": "corr-1",
        "records": {"declined": {"count": 1, "amount": 9.99}},
    }


@pytest.mark.asyncio
async def test_http_query_bad_request_has_empty_body() -> None:
    gateway = _FakeGateway(QueryResult(outcome=QueryOutcome.BAD_REQUEST))

    async with _client(FraudQueryHttpAdapter(gateway)) as client:
        resp = await client.get(
            "/api/fraud/query",
            params={"key": "", "timeframe": "5 minutes", "subject": "card"},
        )
        text = await resp.text()

    assert resp.status == 400
    assert text == ""


@pytest.mark.asyncio
async def test_http_query_missing_param_is_bad_request() -> None:
    gateway = _FakeGateway(QueryResult(outcome=QueryOutcome.OK))

    async with _client(FraudQueryHttpAdapter(gateway)) as client:
        resp = await client.get("/api/fraud/query", params={"key": "k", "subject": "s"})

    assert resp.status == 400
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_http_query_upstream_failure_is_502() -> None:
    gateway = _FakeGateway(
        QueryResult(
            outcome=QueryOutcome.UPSTREAM_FAILURE,
            response=map_error(RuntimeError("The key 'k' was not found.")),
        )
    )

    async with _client(FraudQueryHttpAdapter(gateway)) as client:
        resp = await client.get(
            "/api/fraud/query",
            params={"key": "k", "timeframe": "", "subject": "s"},
        )
        body = await resp.json()

    assert resp.status == 502
    assert body["key"] == "ERROR"
    assert body["timeframe"] == 0
    assert body["records"] == {
        "error: The key 'k' was not found.": {"count": 0, "amount": 0.0}
    }


@pytest.mark.asyncio
async def test_http_health_reports_bus_state() -> None:
    bus = InMemoryRequestReplyAdapter()
    adapter = FraudQueryHttpAdapter(_FakeGateway(QueryResult(outcome=QueryOutcome.OK)), bus=bus)

    async with _client(adapter) as client:
        down = await client.get("/api/fraud/health")
        await bus.connect()
        up = await client.get("/api/fraud/health")
        up_body = await up.json()

    assert down.status == 503
    assert up.status == 200
    assert up_body["nats_connected"] is True
