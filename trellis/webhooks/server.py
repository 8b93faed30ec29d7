"""Webhook HTTP server using aiohttp."""

from __future__ import annotations

import json
from dataclasses import replace

from aiohttp import web

from trellis.config import WebhooksConfig
from trellis.exceptions import InvalidArgumentError, TrelloAPIError
from trellis.service import TrelloService
from trellis.utils.logging import get_logger
from trellis.webhooks.handlers import is_trello_webhook
from trellis.webhooks.models import WebhookRequest

log = get_logger(__name__)


async def to_webhook_request(request: web.Request) -> WebhookRequest:
    """Read an aiohttp request into a ``WebhookRequest``.

    The body is only parsed for requests that look like Trello webhooks.
    Raises ``web.HTTPBadRequest`` when such a body is not a JSON object.
    """
    envelope = WebhookRequest(
        method=request.method,
        headers=dict(request.headers),
        query=dict(request.query),
    )
    if not is_trello_webhook(envelope):
        return envelope

    body = await request.read()
    if not body:
        return envelope
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise web.HTTPBadRequest(text="Invalid JSON")
    if not isinstance(payload, dict):
        raise web.HTTPBadRequest(text="Invalid JSON")

    return replace(envelope, payload=payload)


class WebhookServer:
    """Receives Trello webhooks and hands them to the service."""

    def __init__(self, config: WebhooksConfig, service: TrelloService) -> None:
        self._config = config
        self._service = service
        self._runner: web.AppRunner | None = None

    @property
    def path(self) -> str:
        path = self._config.path
        return path if path.startswith("/") else f"/{path}"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        app = self._build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._config.bind, self._config.port)
        await site.start()
        log.info(
            "webhook_server_started",
            bind=self._config.bind,
            port=self._config.port,
            path=self.path,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    def _build_app(self) -> web.Application:
        app = web.Application()
        # add_get also registers HEAD, which Trello uses to verify the callback URL
        app.router.add_get(self.path, self._handle_verification)
        app.router.add_post(self.path, self._handle_webhook)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_verification(self, request: web.Request) -> web.Response:
        return web.Response(status=200, text="OK")

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        webhook_request = await to_webhook_request(request)

        try:
            await self._service.handle_webhook(webhook_request)
        except InvalidArgumentError as e:
            log.warning("webhook_rejected", reason=str(e))
            return web.Response(status=400, text=str(e))
        except TrelloAPIError as e:
            log.warning("webhook_resource_error", status=e.status_code, url=e.url)
            return web.Response(status=502, text="Upstream error")

        return web.Response(status=200, text="OK")
