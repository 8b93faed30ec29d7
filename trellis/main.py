"""trellis entry point: serves Trello webhooks until signalled."""

from __future__ import annotations

import asyncio
import signal
import sys

import click

from trellis.config import Settings, load_settings
from trellis.service import create_service
from trellis.utils.logging import get_logger, setup_logging
from trellis.webhooks.server import WebhookServer

log = get_logger(__name__)


async def run(settings: Settings) -> None:
    service = create_service(settings)
    server = WebhookServer(settings.webhooks, service)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        stop_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    await server.start()

    try:
        if sys.platform == "win32":
            while not stop_event.is_set():
                await asyncio.sleep(1)
        else:
            await stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await server.stop()
        await service.close()


@click.command()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--port", type=int, default=None, help="Override the webhook server port")
def cli(config_path: str | None, log_level: str | None, port: int | None) -> None:
    """Receive Trello webhooks and dispatch them as events."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    if port is not None:
        settings.webhooks.port = port
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    asyncio.run(run(settings))


if __name__ == "__main__":
    cli()
