"""NATS request/reply adapter implementation."""

from typing import Any, Optional

import nats
import structlog
from nats.errors import Error as NatsError
from nats.errors import NoRespondersError
from nats.errors import TimeoutError as NatsTimeoutError

from fraudquery.core.domain.errors import TransportError
from fraudquery.core.ports.outbound.messaging import IRequestReplyPort, ReplyMessage

logger = structlog.get_logger(__name__)


class NatsRequestReplyAdapter(IRequestReplyPort):
    """
    NATS-based request/reply adapter.

    One client connection is shared by every concurrent request.
    nats-py multiplexes replies over a single inbox subscription and
    routes each reply to its request by a per-request token, so a
    reply can never be delivered to another caller.
    """

    def __init__(
        self,
        servers: list[str] | None = None,
        name: str = "fraudquery-gateway",
        reconnect_time_wait: float = 2,
        max_reconnect_attempts: int = 10,
    ):
        """
        Initialize NATS adapter.

        Args:
            servers: List of NATS server URLs (e.g., ["nats://localhost:4222"])
            name: Client connection name reported to the server
            reconnect_time_wait: Seconds between reconnect attempts
            max_reconnect_attempts: Reconnect attempts before giving up
        """
        self._servers = servers or ["nats://localhost:4222"]
        self._name = name
        self._reconnect_time_wait = reconnect_time_wait
        self._max_reconnect_attempts = max_reconnect_attempts
        self._nc: Any = None  # nats.aio.client.Client
        self._connected = False

    @property
    def servers(self) -> list[str]:
        return list(self._servers)

    async def connect(self) -> None:
        """Establish NATS connection."""
        if self._connected:
            return

        logger.info("nats_connecting", servers=self._servers)

        try:
            self._nc = await nats.connect(
                servers=self._servers,
                name=self._name,
                reconnect_time_wait=self._reconnect_time_wait,
                max_reconnect_attempts=self._max_reconnect_attempts,
                error_cb=self._error_callback,
                disconnected_cb=self._disconnected_callback,
                reconnected_cb=self._reconnected_callback,
            )
        except Exception as e:
            logger.error("nats_connection_failed", servers=self._servers, error=str(e))
            raise TransportError(f"Cannot connect to NATS at {self._servers}: {e}") from e

        self._connected = True
        logger.info("nats_connected", servers=self._servers)

    async def disconnect(self) -> None:
        """Drain pending requests and close the connection."""
        if not self._connected:
            return

        if self._nc:
            try:
                await self._nc.drain()
            except NatsError as e:
                logger.warning("nats_drain_failed", error=str(e))
            self._nc = None

        self._connected = False
        logger.info("nats_disconnected")

    async def is_connected(self) -> bool:
        """Check if connected."""
        return self._connected and self._nc is not None and self._nc.is_connected

    async def request(
        self,
        topic: str,
        payload: bytes,
        headers: Optional[dict[str, str]] = None,
        timeout: float = 1.0,
    ) -> Optional[ReplyMessage]:
        """Send request and wait for one reply using NATS request-reply."""
        if not self._connected or self._nc is None:
            raise TransportError("Not connected to NATS")

        try:
            msg = await self._nc.request(
                topic,
                payload,
                timeout=timeout,
                headers=headers,
            )
        except NatsTimeoutError:
            logger.debug("nats_request_timeout", topic=topic, timeout=timeout)
            return None
        except NoRespondersError:
            logger.debug("nats_no_responders", topic=topic)
            return None
        except NatsError as e:
            raise TransportError(f"NATS request on '{topic}' failed: {e}") from e

        return ReplyMessage(
            data=msg.data or b"",
            subject=msg.subject,
            headers=dict(msg.headers or {}),
        )

    async def _error_callback(self, e: Exception) -> None:
        """Handle NATS errors."""
        logger.error("nats_error", error=str(e))

    async def _disconnected_callback(self) -> None:
        """Handle NATS disconnection."""
        logger.warning("nats_disconnected_event")

    async def _reconnected_callback(self) -> None:
        """Handle NATS reconnection."""
        logger.info("nats_reconnected_event")
