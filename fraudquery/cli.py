"""fraudquery CLI - run the gateway or issue one-off queries."""

import asyncio
import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from fraudquery import __version__
from fraudquery.core.adapters.config_adapter import (
    DEFAULT_CONFIG_FILE,
    bootstrap_config_repository,
)
from fraudquery.core.adapters.nats_adapter import NatsRequestReplyAdapter
from fraudquery.core.adapters.serializer_adapter import JsonSerializer
from fraudquery.core.domain.errors import FormatError, FraudQueryError
from fraudquery.core.domain.models import QueryResult
from fraudquery.core.domain.services.duration import parse_duration_to_millis
from fraudquery.core.domain.services.gateway import FraudQueryGateway
from fraudquery.core.ports.outbound.config import RepositoryKind
from fraudquery.logging_config import configure_logging
from fraudquery.settings import GatewaySettings

console = Console()


def _load_settings(config: str, repository: Optional[str]) -> GatewaySettings:
    try:
        repo = bootstrap_config_repository(config, kind=repository)
        return GatewaySettings.from_repository(repo)
    except FraudQueryError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="fraudquery")
@click.option("--config", "-c", default=DEFAULT_CONFIG_FILE, show_default=True, help="Config file")
@click.option(
    "--repository",
    "-r",
    type=click.Choice([k.value for k in RepositoryKind]),
    default=None,
    help="Config repository (default: app.config.repository from the config file)",
)
@click.pass_context
def main(ctx: click.Context, config: str, repository: Optional[str]) -> None:
    """Fraud query gateway over NATS request/reply."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["repository"] = repository


@main.command()
@click.option("--host", "-h", default=None, help="HTTP host (overrides http.host)")
@click.option("--port", "-p", default=None, type=int, help="HTTP port (overrides http.port)")
@click.option("--nats", default=None, help="NATS server URL (overrides nats.url)")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int], nats: Optional[str]) -> None:
    """Start the HTTP gateway."""
    from fraudquery.server import FraudQueryServer

    settings = _load_settings(ctx.obj["config"], ctx.obj["repository"])
    overrides = {
        name: value
        for name, value in (("http_host", host), ("http_port", port), ("nats_url", nats))
        if value is not None
    }
    settings = settings.model_copy(update=overrides)
    configure_logging(settings.log_level, settings.log_format)

    console.print("[bold green]Starting fraud query gateway[/bold green]")
    console.print(f"  HTTP: {settings.http_host}:{settings.http_port}")
    console.print(f"  NATS: {settings.nats_url}")
    console.print(f"  Topic: {settings.topic} (timeout {settings.timeout}s)")

    server = FraudQueryServer(settings)
    try:
        asyncio.run(server.run_forever())
    except KeyboardInterrupt:
        console.print("\n[yellow]Shutting down...[/yellow]")
    except FraudQueryError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.argument("key")
@click.option("--timeframe", "-t", default="", help='Timeframe such as "5 minutes"')
@click.option("--subject", "-s", required=True, help="Query subject")
@click.option("--nats", default=None, help="NATS server URL (overrides nats.url)")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@click.pass_context
def query(
    ctx: click.Context,
    key: str,
    timeframe: str,
    subject: str,
    nats: Optional[str],
    as_json: bool,
) -> None:
    """Send one fraud query and print the response."""
    settings = _load_settings(ctx.obj["config"], ctx.obj["repository"])
    if nats:
        settings = settings.model_copy(update={"nats_url": nats})
    configure_logging("WARNING", settings.log_format)

    async def run() -> QueryResult:
        async with NatsRequestReplyAdapter(servers=[settings.nats_url]) as bus:
            gateway = FraudQueryGateway(
                bus,
                JsonSerializer(),
                topic=settings.topic,
                timeout=settings.timeout,
            )
            return await gateway.query(key, timeframe, subject)

    try:
        result = asyncio.run(run())
    except FraudQueryError as e:
        raise click.ClickException(str(e)) from e

    _print_result(result, as_json)
    if result.http_status != 200:
        ctx.exit(1)


@main.command("parse-timeframe")
@click.argument("expression", nargs=-1)
def parse_timeframe(expression: tuple[str, ...]) -> None:
    """Show the milliseconds a timeframe expression normalizes to."""
    text = " ".join(expression)
    try:
        millis = parse_duration_to_millis(text)
    except FormatError as e:
        raise click.ClickException(str(e)) from e
    console.print(f"{text!r} = [bold]{millis}[/bold] ms")


def _print_result(result: QueryResult, as_json: bool) -> None:
    if result.response is None:
        console.print(f"[red]{result.outcome.value}[/red] (HTTP {result.http_status})")
        return

    body = result.response.model_dump(mode="json", by_alias=True)
    if as_json:
        click.echo(json.dumps(body, indent=2))
        return

    color = "green" if result.http_status == 200 else "red"
    console.print(
        f"[{color}]{result.outcome.value}[/{color}] (HTTP {result.http_status}) "
        f"key={body['key']} timeframe={body['timeframe']} "
        f"correlationId={body['correlationId']}"
    )

    table = Table(title="Indicators")
    table.add_column("Indicator", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Amount", justify="right")
    for name, indicator in sorted(result.response.records.items()):
        table.add_row(name, str(indicator.count), f"{indicator.amount:.2f}")
    console.print(table)


if __name__ == "__main__":
    main()
