"""Request/reply messaging outbound port interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

CORRELATION_ID_HEADER = "x-correlation-id"
CLIENT_PUBLISH_TS_HEADER = "x-client-publish-ts-ms"


@dataclass
class ReplyMessage:
    """Single reply received for a request."""

    data: bytes
    subject: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def correlation_id(self) -> Optional[str]:
        return self.headers.get(CORRELATION_ID_HEADER)


class IRequestReplyPort(ABC):
    """
    Outbound port for the message bus request/reply channel.

    Implementations must be safe for many concurrent requests over
    one shared connection, and must match each reply to its request.
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish connection to messaging system.
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Disconnect from messaging system.
        """
        pass

    @abstractmethod
    async def is_connected(self) -> bool:
        """
        Check if connected to messaging system.

        Returns:
            True if connected, False otherwise
        """
        pass

    @abstractmethod
    async def request(
        self,
        topic: str,
        payload: bytes,
        headers: Optional[dict[str, str]] = None,
        timeout: float = 1.0,
    ) -> Optional[ReplyMessage]:
        """
        Publish a request and wait for exactly one reply.

        Args:
            topic: Topic to publish to
            payload: Serialized request
            headers: Transport headers to attach
            timeout: Maximum wait in seconds

        Returns:
            The reply, or None if nothing arrived within the timeout

        Raises:
            TransportError: On any other bus failure
        """
        pass

    async def __aenter__(self) -> "IRequestReplyPort":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.disconnect()
