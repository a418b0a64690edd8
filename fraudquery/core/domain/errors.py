"""Exception hierarchy for the fraud query gateway."""


class FraudQueryError(Exception):
    """Base class for gateway errors."""


class FormatError(FraudQueryError, ValueError):
    """Timeframe expression could not be normalized."""


class InvalidFormatError(FormatError):
    """Timeframe is not a '<number> <unit>' pair."""


class InvalidNumberError(FormatError):
    """Timeframe count is not an integer."""


class UnknownUnitError(FormatError):
    """Timeframe unit is not recognized."""


class NegativeDurationError(FormatError):
    """Timeframe count is negative."""


class DurationOverflowError(FormatError):
    """Timeframe does not fit in a signed 64-bit millisecond count."""


class NoReplyError(FraudQueryError):
    """No reply arrived within the bounded wait."""

    def __init__(self, key: str):
        super().__init__(f"The key '{key}' was not found.")
        self.key = key


class DeserializationError(FraudQueryError):
    """Reply payload could not be decoded."""


class TransportError(FraudQueryError):
    """Message bus failure other than a missing reply."""


class ConfigurationError(FraudQueryError):
    """Invalid or unsupported configuration."""
