"""Fraud query inbound port interface."""

from abc import ABC, abstractmethod
from typing import Optional

from fraudquery.core.domain.models import QueryResult


class IFraudQueryPort(ABC):
    """
    Inbound port for fraud indicator lookups.

    Implementations never raise: every failure is reported through
    the returned QueryResult.
    """

    @abstractmethod
    async def query(
        self,
        key: Optional[str],
        timeframe: Optional[str],
        subject: Optional[str],
    ) -> QueryResult:
        """
        Look up fraud indicators for a key.

        Args:
            key: Lookup key
            timeframe: Human timeframe such as "5 minutes"
            subject: Routing/context discriminator

        Returns:
            Query result with outcome and response body
        """
        pass
