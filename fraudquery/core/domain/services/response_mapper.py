"""Failure to canonical error response mapping."""

from fraudquery.core.domain.models import (
    ERROR_KEY,
    ERROR_RECORD_PREFIX,
    Indicator,
    QueryResponse,
)


def describe_error(cause: BaseException) -> str:
    """Message of an exception, or its class name when it has none."""
    message = str(cause)
    return message if message else type(cause).__name__


def map_error(cause: BaseException) -> QueryResponse:
    """
    Build the canonical error response for any failure.

    The response carries the "ERROR" key, a zero timeframe and a
    single zero-valued record named "error: <message>".
    """
    try:
        message = describe_error(cause)
    except Exception:
        # __str__ of a foreign exception may itself fail
        message = type(cause).__name__
    return QueryResponse(
        key=ERROR_KEY,
        timeframe=0,
        records={f"{ERROR_RECORD_PREFIX}{message}": Indicator(count=0, amount=0.0)},
    )
