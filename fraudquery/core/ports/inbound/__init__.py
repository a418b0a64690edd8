"""Inbound ports - interfaces the outside world calls into."""

from fraudquery.core.ports.inbound.fraud_query import IFraudQueryPort

__all__ = ["IFraudQueryPort"]
