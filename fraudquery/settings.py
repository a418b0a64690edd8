"""Gateway settings resolved from a configuration repository."""

import re
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from fraudquery.core.domain.errors import ConfigurationError
from fraudquery.core.ports.outbound.config import IConfigRepository

_TIMEOUT = re.compile(
    r"(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?"
)
_TIMEOUT_MS = re.compile(r"(?P<millis>\d+)MS")


def parse_timeout(text: str) -> float:
    """
    Parse a timeout such as "5s", "1m30s", "1h" or "500ms" into seconds.

    Raises:
        ConfigurationError: If the value is malformed or not positive
    """
    value = text.strip().upper()
    if value.startswith("PT"):
        value = value[2:]

    match = _TIMEOUT_MS.fullmatch(value)
    if match:
        seconds = int(match["millis"]) / 1000
    else:
        match = _TIMEOUT.fullmatch(value)
        if not value or not match:
            raise ConfigurationError(f"Invalid timeout: {text!r}")
        seconds = (
            int(match["hours"] or 0) * 3600
            + int(match["minutes"] or 0) * 60
            + float(match["seconds"] or 0)
        )

    if seconds <= 0:
        raise ConfigurationError(f"Timeout must be positive: {text!r}")
    return seconds


class GatewaySettings(BaseModel):
    """Runtime settings for the fraud query gateway."""

    nats_url: str = "nats://localhost:4222"
    topic: str = "fraud.query"
    timeout: float = Field(default=1.0, gt=0)
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    log_level: str = "INFO"
    log_format: str = "console"

    @field_validator("topic")
    @classmethod
    def _topic_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("topic must not be blank")
        return v.strip()

    @classmethod
    def from_repository(cls, repository: IConfigRepository) -> "GatewaySettings":
        """
        Resolve settings from a loaded configuration repository.

        Properties:
            nats.url, or nats.host + nats.port
            fraud.query.topic
            fraud.query.timeout
            http.host, http.port
            log.level, log.format
        """
        get = repository.get_property

        nats_url = get("nats.url")
        if not nats_url:
            host = get("nats.host", "localhost")
            port = _int_property("nats.port", get("nats.port", "4222"))
            nats_url = f"nats://{host}:{port}"

        try:
            return cls(
                nats_url=nats_url,
                topic=get("fraud.query.topic", "fraud.query"),
                timeout=parse_timeout(get("fraud.query.timeout", "1s")),
                http_host=get("http.host", "0.0.0.0"),
                http_port=_int_property("http.port", get("http.port", "8080")),
                log_level=get("log.level", "INFO").upper(),
                log_format=get("log.format", "console").lower(),
            )
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(f"Invalid gateway settings: {problems}") from None


def _int_property(name: str, value: Optional[str]) -> int:
    try:
        return int(value or "")
    except ValueError:
        raise ConfigurationError(f"Property '{name}' must be an integer, got {value!r}") from None
