import httpx
import pytest

from DiscordMirror.config import Settings
from DiscordMirror.discord_http import HttpDiscordClient
from DiscordMirror.remote import RemoteAPIError


def _settings(**overrides):
    base = {
        "discord_bot_token": "tok",
        "discord_api_base_url": "https://discord.test/api/v10/",
    }
    base.update(overrides)
    return Settings(**base)


def _client(handler, **overrides):
    return HttpDiscordClient(_settings(**overrides), transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_user_sends_bot_auth():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["ua"] = request.headers.get("user-agent")
        return httpx.Response(200, json={"id": "42", "username": "ada"})

    async with _client(handler) as client:
        body = await client.get_user(42)

    assert body == {"id": "42", "username": "ada"}
    assert seen["url"] == "https://discord.test/api/v10/users/42"
    assert seen["auth"] == "Bot tok"
    assert seen["ua"].startswith("DiscordBot (")


@pytest.mark.asyncio
async def test_guild_and_invite_request_counts():
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append((request.url.path, request.url.params.get("with_counts")))
        return httpx.Response(200, json={})

    async with _client(handler) as client:
        await client.get_guild(1)
        await client.get_invite("abc")
        await client.get_guild_member(1, 2)
        await client.get_auto_moderation_rule(1, 3)

    assert paths == [
        ("/api/v10/guilds/1", "true"),
        ("/api/v10/invites/abc", "true"),
        ("/api/v10/guilds/1/members/2", None),
        ("/api/v10/guilds/1/auto-moderation/rules/3", None),
    ]


@pytest.mark.asyncio
async def test_error_status_carries_platform_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Unknown User", "code": 10013})

    async with _client(handler) as client:
        with pytest.raises(RemoteAPIError) as ei:
            await client.get_user(1)

    assert ei.value.status == 404
    assert str(ei.value) == "HTTP 404: Unknown User"


@pytest.mark.asyncio
async def test_error_status_without_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, content=b"<html>bad gateway</html>")

    async with _client(handler) as client:
        with pytest.raises(RemoteAPIError) as ei:
            await client.get_channel(1)

    assert ei.value.status == 502
    assert str(ei.value) == "HTTP 502"


@pytest.mark.asyncio
async def test_transport_failure_has_no_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(RemoteAPIError) as ei:
            await client.get_webhook(1)

    assert ei.value.status is None


@pytest.mark.asyncio
async def test_invalid_json_body_is_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"not json")

    async with _client(handler) as client:
        with pytest.raises(RemoteAPIError, match="invalid JSON"):
            await client.get_sticker(1)


@pytest.mark.asyncio
async def test_no_token_sends_no_auth_header():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json=[])

    async with _client(handler, discord_bot_token=None) as client:
        assert await client.list_guild_roles(1) == []

    assert seen["auth"] is None
