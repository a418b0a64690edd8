"""Domain models for the fraud query gateway."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ERROR_KEY = "ERROR"
ERROR_RECORD_PREFIX = "error: "


class QueryOutcome(str, Enum):
    """Outcome of a gateway query."""

    OK = "ok"
    BAD_REQUEST = "bad_request"
    UPSTREAM_FAILURE = "upstream_failure"

    @property
    def http_status(self) -> int:
        """HTTP status code for this outcome."""
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    QueryOutcome.OK: 200,
    QueryOutcome.BAD_REQUEST: 400,
    QueryOutcome.UPSTREAM_FAILURE: 502,
}


class Indicator(BaseModel):
    """Aggregated fraud indicator: occurrence count and amount."""

    count: int = Field(default=0, ge=0)
    amount: float = 0.0


class QueryRequest(BaseModel):
    """Request published on the fraud query topic."""

    key: str
    timeframe: int = Field(ge=0)
    subject: str

    model_config = ConfigDict(frozen=True)


class QueryResponse(BaseModel):
    """Response returned by the fraud query responder, or synthesized on error."""

    key: str
    timeframe: int = 0
    correlation_id: Optional[str] = Field(default=None, alias="correlationId")
    records: dict[str, Indicator] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)


class QueryResult(BaseModel):
    """Gateway result: an outcome plus an optional response body."""

    outcome: QueryOutcome
    response: Optional[QueryResponse] = None

    @property
    def http_status(self) -> int:
        return self.outcome.http_status
