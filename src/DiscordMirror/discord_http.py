# src/DiscordMirror/discord_http.py

from __future__ import annotations

from typing import Any

import httpx
import orjson
import structlog

from DiscordMirror.config import Settings
from DiscordMirror.remote import JSONObject, RemoteAPIError

log = structlog.get_logger()


class HttpDiscordClient:
    """Bot-authenticated client for the Discord REST API (v10).

    Raises RemoteAPIError for non-2xx responses and transport failures; the
    status is carried so the fetcher can tell "gone" from "try again".
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = settings.discord_api_base_url.rstrip("/")
        headers = {"User-Agent": "DiscordBot (discord-mirror, 0.1.0)"}
        if settings.discord_bot_token is not None:
            headers["Authorization"] = f"Bot {settings.discord_bot_token.get_secret_value()}"
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            headers=headers,
            timeout=settings.discord_api_timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpDiscordClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        try:
            resp = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            log.warning("discord.http.transport_error", path=path, error=str(exc))
            raise RemoteAPIError(f"GET {path} failed: {exc}") from exc
        if resp.status_code >= 400:
            message = _error_message(resp)
            log.info("discord.http.error", path=path, status=resp.status_code, message=message)
            raise RemoteAPIError(message, status=resp.status_code)
        try:
            return orjson.loads(resp.content)
        except orjson.JSONDecodeError as exc:
            raise RemoteAPIError(
                f"GET {path} returned invalid JSON", status=resp.status_code
            ) from exc

    async def get_user(self, user_id: int) -> JSONObject:
        return await self._get(f"/users/{user_id}")

    async def get_guild(self, guild_id: int) -> JSONObject:
        return await self._get(f"/guilds/{guild_id}", params={"with_counts": "true"})

    async def get_channel(self, channel_id: int) -> JSONObject:
        return await self._get(f"/channels/{channel_id}")

    async def get_webhook(self, webhook_id: int) -> JSONObject:
        return await self._get(f"/webhooks/{webhook_id}")

    async def get_sticker(self, sticker_id: int) -> JSONObject:
        return await self._get(f"/stickers/{sticker_id}")

    async def list_guild_roles(self, guild_id: int) -> list[JSONObject]:
        return await self._get(f"/guilds/{guild_id}/roles")

    async def get_guild_member(self, guild_id: int, user_id: int) -> JSONObject:
        return await self._get(f"/guilds/{guild_id}/members/{user_id}")

    async def get_channel_message(self, channel_id: int, message_id: int) -> JSONObject:
        return await self._get(f"/channels/{channel_id}/messages/{message_id}")

    async def get_invite(self, code: str) -> JSONObject:
        return await self._get(f"/invites/{code}", params={"with_counts": "true"})

    async def get_auto_moderation_rule(self, guild_id: int, rule_id: int) -> JSONObject:
        return await self._get(f"/guilds/{guild_id}/auto-moderation/rules/{rule_id}")


def _error_message(resp: httpx.Response) -> str:
    try:
        body = orjson.loads(resp.content)
    except orjson.JSONDecodeError:
        return f"HTTP {resp.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return f"HTTP {resp.status_code}: {body['message']}"
    return f"HTTP {resp.status_code}"
