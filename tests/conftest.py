# tests/conftest.py

import gc
import os
from collections.abc import AsyncIterator
from typing import Any

import pytest
import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

# Point the app at a process-local in-memory DB before any app module creates an engine.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

# TOML/.env may carry another URL, so override the module-level constant too.
import DiscordMirror.db as _db  # noqa: E402

_db.DATABASE_URL = os.environ["DATABASE_URL"]
_db._engine = None
_db._sessionmaker = None
_db._schema_initialized = False

# Import models so all ORM tables are registered on Base.metadata before create_all
from DiscordMirror import models as _models  # noqa: F401,E402
from DiscordMirror.db import Base, get_engine, get_sessionmaker  # noqa: E402
from DiscordMirror.metrics import reset_counters  # noqa: E402
from DiscordMirror.pipeline import IngestionPipeline  # noqa: E402
from DiscordMirror.remote import RemoteAPIError, RemoteFetcher  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
async def _app_engine_lifecycle() -> AsyncIterator[None]:
    """Create tables on the app engine and dispose it after the test session."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield None
    finally:
        await engine.dispose()
    gc.collect()


@pytest.fixture(autouse=True)
async def _reset_db_per_test() -> AsyncIterator[None]:
    # Recreate the schema each test; upserts leave committed rows behind
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    reset_counters()
    yield None


@pytest.fixture
async def db() -> AsyncIterator[AsyncSession]:
    sm = get_sessionmaker()
    async with sm() as s:
        try:
            yield s
        finally:
            await s.rollback()
            await s.close()


class FakeDiscordClient:
    """In-memory DiscordRESTClient that records every call it receives.

    Objects are registered per endpoint; unknown ids raise a 404 like the API.
    ``fail_with`` makes every call raise the given status instead.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.users: dict[int, dict] = {}
        self.guilds: dict[int, dict] = {}
        self.channels: dict[int, dict] = {}
        self.webhooks: dict[int, dict] = {}
        self.stickers: dict[int, dict] = {}
        self.roles: dict[int, list[dict]] = {}
        self.members: dict[tuple[int, int], dict] = {}
        self.messages: dict[tuple[int, int], dict] = {}
        self.invites: dict[str, dict] = {}
        self.automod_rules: dict[tuple[int, int], dict] = {}
        self.fail_with: int | None = None

    def _lookup(self, name: str, table: dict, key: Any, *args: Any) -> Any:
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise RemoteAPIError(f"HTTP {self.fail_with}", status=self.fail_with)
        if key not in table:
            raise RemoteAPIError("HTTP 404: Unknown", status=404)
        return table[key]

    async def get_user(self, user_id):
        return self._lookup("get_user", self.users, user_id, user_id)

    async def get_guild(self, guild_id):
        return self._lookup("get_guild", self.guilds, guild_id, guild_id)

    async def get_channel(self, channel_id):
        return self._lookup("get_channel", self.channels, channel_id, channel_id)

    async def get_webhook(self, webhook_id):
        return self._lookup("get_webhook", self.webhooks, webhook_id, webhook_id)

    async def get_sticker(self, sticker_id):
        return self._lookup("get_sticker", self.stickers, sticker_id, sticker_id)

    async def list_guild_roles(self, guild_id):
        return self._lookup("list_guild_roles", self.roles, guild_id, guild_id)

    async def get_guild_member(self, guild_id, user_id):
        return self._lookup(
            "get_guild_member", self.members, (guild_id, user_id), guild_id, user_id
        )

    async def get_channel_message(self, channel_id, message_id):
        return self._lookup(
            "get_channel_message", self.messages, (channel_id, message_id), channel_id, message_id
        )

    async def get_invite(self, code):
        return self._lookup("get_invite", self.invites, code, code)

    async def get_auto_moderation_rule(self, guild_id, rule_id):
        return self._lookup(
            "get_auto_moderation_rule", self.automod_rules, (guild_id, rule_id), guild_id, rule_id
        )


@pytest.fixture
def discord_client() -> FakeDiscordClient:
    return FakeDiscordClient()


@pytest.fixture
def pipeline(discord_client) -> IngestionPipeline:
    return IngestionPipeline(fetcher=RemoteFetcher(discord_client))


class _Rows:
    """Reads committed rows through a fresh session."""

    async def count(self, model) -> int:
        sm = get_sessionmaker()
        async with sm() as s:
            q = await s.execute(sa.select(sa.func.count()).select_from(model))
            return q.scalar_one()

    async def all(self, model) -> list:
        sm = get_sessionmaker()
        async with sm() as s:
            return list((await s.execute(sa.select(model).order_by(model.id))).scalars())


@pytest.fixture
def rows() -> _Rows:
    return _Rows()
