"""Fraud query server - main entry point for running the gateway."""

import asyncio
import signal
from typing import Optional

import structlog

from fraudquery.core.adapters.http_adapter import FraudQueryHttpAdapter
from fraudquery.core.adapters.nats_adapter import NatsRequestReplyAdapter
from fraudquery.core.adapters.serializer_adapter import JsonSerializer
from fraudquery.core.domain.services.gateway import FraudQueryGateway
from fraudquery.core.ports.outbound.messaging import IRequestReplyPort
from fraudquery.settings import GatewaySettings

logger = structlog.get_logger(__name__)


class FraudQueryServer:
    """
    Runs the gateway: one shared NATS connection plus the HTTP API.

    The NATS connection is opened once in start() and drained in stop().

    Usage:
        server = FraudQueryServer(GatewaySettings(nats_url="nats://nats:4222"))
        await server.run_forever()
    """

    def __init__(
        self,
        settings: Optional[GatewaySettings] = None,
        bus: Optional[IRequestReplyPort] = None,
    ):
        """
        Initialize server.

        Args:
            settings: Gateway settings (defaults if omitted)
            bus: Messaging adapter; a NATS adapter is created if omitted
        """
        self._settings = settings or GatewaySettings()
        self._bus = bus or NatsRequestReplyAdapter(servers=[self._settings.nats_url])
        self._gateway = FraudQueryGateway(
            bus=self._bus,
            serializer=JsonSerializer(),
            topic=self._settings.topic,
            timeout=self._settings.timeout,
        )
        self._http = FraudQueryHttpAdapter(
            gateway=self._gateway,
            bus=self._bus,
            host=self._settings.http_host,
            port=self._settings.http_port,
        )
        self._running = False
        self._shutdown_event = asyncio.Event()

    @property
    def settings(self) -> GatewaySettings:
        return self._settings

    @property
    def gateway(self) -> FraudQueryGateway:
        return self._gateway

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Connect to NATS and start serving HTTP."""
        if self._running:
            return

        logger.info(
            "fraudquery_starting",
            nats_url=self._settings.nats_url,
            topic=self._settings.topic,
            timeout=self._settings.timeout,
        )

        await self._bus.connect()
        if not await self._bus.is_connected():
            logger.warning("nats_not_connected_at_startup", nats_url=self._settings.nats_url)

        try:
            await self._http.start()
        except Exception:
            await self._bus.disconnect()
            raise

        self._running = True
        logger.info("fraudquery_started", base_url=self._http.base_url)

    async def stop(self) -> None:
        """Stop HTTP and release the NATS connection."""
        if not self._running:
            return

        logger.info("fraudquery_stopping")
        try:
            await self._http.stop()
        finally:
            await self._bus.disconnect()
            self._running = False
            self._shutdown_event.set()

        logger.info("fraudquery_stopped")

    async def run_forever(self) -> None:
        """Run the server until shutdown signal."""
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(
                sig,
                lambda: asyncio.create_task(self._handle_shutdown()),
            )

        await self.start()
        await self._shutdown_event.wait()

    async def _handle_shutdown(self) -> None:
        """Handle shutdown signal."""
        logger.info("shutdown_signal_received")
        await self.stop()

    async def __aenter__(self) -> "FraudQueryServer":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()
