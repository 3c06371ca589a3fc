import pytest

from DiscordMirror.capabilities import default_registry
from DiscordMirror.store import find_by_natural_key, upsert


@pytest.mark.asyncio
async def test_upsert_overwrites_only_supplied_columns(db):
    schema = default_registry().require("guild")

    first = await upsert(db, schema, {"discord_id": 1, "name": "G", "icon": "i1"})
    again = await upsert(db, schema, {"discord_id": 1, "name": "G2"})

    assert again.id == first.id
    assert again.name == "G2"
    assert again.icon == "i1"
    assert again.updated_at is not None


@pytest.mark.asyncio
async def test_upsert_writes_supplied_none(db):
    schema = default_registry().require("guild")

    await upsert(db, schema, {"discord_id": 1, "name": "G", "icon": "i1"})
    cleared = await upsert(db, schema, {"discord_id": 1, "icon": None})

    assert cleared.icon is None
    assert cleared.name == "G"


@pytest.mark.asyncio
async def test_find_by_compound_natural_key(db):
    schema = default_registry().require("member")
    await upsert(db, schema, {"guild_id": 1, "user_id": 2, "nick": "n"})

    found = await find_by_natural_key(db, schema, {"guild_id": 1, "user_id": 2})
    missing = await find_by_natural_key(db, schema, {"guild_id": 1, "user_id": 3})

    assert found.nick == "n"
    assert missing is None
