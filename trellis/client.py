"""Async Trello REST client."""

from __future__ import annotations

from typing import Any, Protocol
from urllib.parse import quote

import httpx

from trellis.config import TrelloConfig
from trellis.exceptions import ResourceNotFound, TrelloAPIError
from trellis.models import Board, Card, Member
from trellis.utils.logging import get_logger

log = get_logger(__name__)


class ResourceAccessor(Protocol):
    """What the webhook dispatcher needs from an API client."""

    async def get_card(self, card_id: str) -> Card: ...

    async def get_member(self, member_id: str) -> Member: ...


class TrelloClient:
    """Fetches cards, members and boards by id.

    Failures are not retried: 404 raises ``ResourceNotFound``, any other
    error status raises ``TrelloAPIError`` and transport errors from httpx
    propagate as-is.
    """

    def __init__(
        self,
        config: TrelloConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        params: dict[str, str] = {}
        if config.api_key:
            params["key"] = config.api_key
        if config.token:
            params["token"] = config.token
        self._client = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            params=params,
            timeout=config.timeout,
            transport=transport,
        )

    async def get_card(self, card_id: str) -> Card:
        return Card.from_api(await self._get(f"/cards/{quote(card_id, safe='')}"))

    async def get_member(self, member_id: str) -> Member:
        return Member.from_api(await self._get(f"/members/{quote(member_id, safe='')}"))

    async def get_board(self, board_id: str) -> Board:
        return Board.from_api(await self._get(f"/boards/{quote(board_id, safe='')}"))

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> TrelloClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def _get(self, path: str) -> dict[str, Any]:
        resp = await self._client.get(path)
        if resp.status_code == 404:
            raise ResourceNotFound(f"Not found: {path}", 404, path)
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            log.warning("trello_api_error", path=path, status=resp.status_code)
            raise TrelloAPIError(
                f"Trello API returned {resp.status_code} for {path}",
                resp.status_code,
                path,
            ) from e
        return resp.json()
