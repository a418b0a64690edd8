"""aiohttp REST adapter exposing the fraud query gateway."""

from datetime import datetime
from typing import Any, Optional

import structlog
from aiohttp import web

from fraudquery.core.ports.inbound.fraud_query import IFraudQueryPort
from fraudquery.core.ports.outbound.messaging import IRequestReplyPort

logger = structlog.get_logger(__name__)

REQUIRED_PARAMS = ("key", "timeframe", "subject")


class FraudQueryHttpAdapter:
    """
    HTTP API for fraud queries.

    Endpoints:
    - GET {base_path}/query?key=..&timeframe=..&subject=..
    - GET {base_path}/health
    """

    def __init__(
        self,
        gateway: IFraudQueryPort,
        bus: Optional[IRequestReplyPort] = None,
        host: str = "0.0.0.0",
        port: int = 8080,
        base_path: str = "/api/fraud",
    ):
        """
        Initialize HTTP adapter.

        Args:
            gateway: Fraud query inbound port
            bus: Messaging adapter, reported by the health endpoint
            host: HTTP server host
            port: HTTP server port
            base_path: Base path for API endpoints
        """
        self._gateway = gateway
        self._bus = bus
        self._host = host
        self._port = port
        self._base_path = base_path.rstrip("/")

        self._app: Optional[web.Application] = None
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None

    @property
    def base_url(self) -> str:
        return f"http://{self._host}:{self._port}{self._base_path}"

    @property
    def is_running(self) -> bool:
        return self._site is not None

    def create_app(self) -> web.Application:
        """Create the aiohttp application with routes."""
        app = web.Application()
        app.router.add_get(f"{self._base_path}/query", self._handle_query)
        app.router.add_get(f"{self._base_path}/health", self._handle_health)
        return app

    async def start(self) -> None:
        """Start HTTP server."""
        if self._site is not None:
            return

        self._app = self.create_app()
        self._runner = web.AppRunner(self._app)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self._host, self._port)
        await self._site.start()

        logger.info("http_started", host=self._host, port=self._port, base_url=self.base_url)

    async def stop(self) -> None:
        """Stop HTTP server."""
        if self._site:
            await self._site.stop()
        if self._runner:
            await self._runner.cleanup()

        self._app = None
        self._runner = None
        self._site = None
        logger.info("http_stopped")

    async def _handle_query(self, request: web.Request) -> web.Response:
        """Handle fraud query request."""
        params = request.query
        missing = [name for name in REQUIRED_PARAMS if name not in params]
        if missing:
            logger.warning("http_query_missing_params", missing=missing)
            return web.Response(status=400)

        result = await self._gateway.query(
            params["key"],
            params["timeframe"],
            params["subject"],
        )
        if result.response is None:
            return web.Response(status=result.http_status)

        return web.json_response(
            result.response.model_dump(mode="json", by_alias=True),
            status=result.http_status,
        )

    async def _handle_health(self, request: web.Request) -> web.Response:
        """Handle health check request."""
        connected = self._bus is not None and await self._bus.is_connected()
        body: dict[str, Any] = {
            "status": "healthy" if connected else "unhealthy",
            "nats_connected": connected,
            "timestamp": datetime.now().isoformat(),
        }
        return web.json_response(body, status=200 if connected else 503)
