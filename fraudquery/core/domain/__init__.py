"""Domain layer - models, errors and services."""

from fraudquery.core.domain.models import (
    Indicator,
    QueryOutcome,
    QueryRequest,
    QueryResponse,
    QueryResult,
)

__all__ = [
    "Indicator",
    "QueryOutcome",
    "QueryRequest",
    "QueryResponse",
    "QueryResult",
]
