import pytest

from DiscordMirror.errors import FetchError, FetchFailure, InvalidPayloadShape
from DiscordMirror.identities import CodeIdentity, CompoundIdentity, PairIdentity, SimpleIdentity
from DiscordMirror.kinds import PUSH_ONLY_KINDS, EntityKind
from DiscordMirror.metrics import get_counter
from DiscordMirror.payloads import InvitePayload, MessagePayload, RolePayload, UserPayload
from DiscordMirror.remote import RemoteFetcher


@pytest.fixture
def fetcher(discord_client):
    return RemoteFetcher(discord_client)


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", sorted(PUSH_ONLY_KINDS, key=lambda k: k.value))
async def test_push_only_kinds_never_call_the_api(fetcher, discord_client, kind):
    res = await fetcher.fetch(kind, SimpleIdentity(1))
    assert not res.ok
    assert res.error.reason is FetchFailure.unsupported_kind
    assert discord_client.calls == []


@pytest.mark.asyncio
async def test_emoji_needs_guild_context(fetcher, discord_client):
    res = await fetcher.fetch(EntityKind.emoji, SimpleIdentity(1))
    assert isinstance(res.error, FetchError)
    assert res.error.reason is FetchFailure.requires_additional_context
    assert res.error.fields == ("guild_id", "emoji_id")
    assert discord_client.calls == []


@pytest.mark.asyncio
async def test_wrong_identity_shape_names_required_fields(fetcher, discord_client):
    res = await fetcher.fetch(EntityKind.role, SimpleIdentity(9))
    assert res.error.reason is FetchFailure.requires_additional_context
    assert res.error.fields == ("guild_id", "role_id")
    assert "guild_id, role_id" in res.error.message
    assert discord_client.calls == []


@pytest.mark.asyncio
async def test_user_fetch_returns_typed_payload(fetcher, discord_client):
    discord_client.users[42] = {"id": "42", "username": "ada", "avatar": None}
    res = await fetcher.fetch(EntityKind.user, SimpleIdentity(42))
    assert res.ok
    assert res.value == UserPayload(id=42, username="ada", avatar=None)
    assert "avatar" in res.value.model_fields_set
    assert discord_client.calls == [("get_user", (42,))]


@pytest.mark.asyncio
async def test_missing_entity_is_not_found(fetcher):
    res = await fetcher.fetch(EntityKind.guild, SimpleIdentity(404))
    assert res.error.reason is FetchFailure.not_found
    assert not res.error.retryable
    assert get_counter("fetch.failure") == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, reason",
    [
        (401, FetchFailure.not_found),
        (403, FetchFailure.not_found),
        (429, FetchFailure.transient_unavailable),
        (503, FetchFailure.transient_unavailable),
    ],
)
async def test_http_status_mapping(fetcher, discord_client, status, reason):
    discord_client.fail_with = status
    res = await fetcher.fetch(EntityKind.channel, SimpleIdentity(1))
    assert res.error.reason is reason
    assert res.error.retryable is (reason is FetchFailure.transient_unavailable)


@pytest.mark.asyncio
async def test_timeout_is_transient(fetcher, discord_client):
    async def _slow(user_id):
        raise TimeoutError("read timed out")

    discord_client.get_user = _slow
    res = await fetcher.fetch(EntityKind.user, SimpleIdentity(1))
    assert res.error.reason is FetchFailure.transient_unavailable


@pytest.mark.asyncio
async def test_role_is_found_in_guild_role_list(fetcher, discord_client):
    discord_client.roles[1] = [
        {"id": "5", "name": "@everyone", "permissions": "0"},
        {"id": "6", "name": "mods", "permissions": "8"},
    ]
    res = await fetcher.fetch(EntityKind.role, CompoundIdentity(1, 6))
    assert res.ok
    assert res.value == RolePayload(id=6, name="mods", permissions="8", guild_id=1)
    assert discord_client.calls == [("list_guild_roles", (1,))]


@pytest.mark.asyncio
async def test_role_missing_from_list_is_not_found(fetcher, discord_client):
    discord_client.roles[1] = [{"id": "5", "name": "@everyone"}]
    res = await fetcher.fetch(EntityKind.role, CompoundIdentity(1, 6))
    assert res.error.reason is FetchFailure.not_found


@pytest.mark.asyncio
async def test_message_fetch_folds_in_channel(fetcher, discord_client):
    discord_client.messages[(3, 4)] = {"id": "4", "content": "hi"}
    res = await fetcher.fetch(EntityKind.message, PairIdentity(3, 4))
    assert isinstance(res.value, MessagePayload)
    assert res.value.channel_id == 3
    assert discord_client.calls == [("get_channel_message", (3, 4))]


@pytest.mark.asyncio
async def test_member_and_automod_fold_in_guild(fetcher, discord_client):
    discord_client.members[(1, 2)] = {"user": {"id": "2", "username": "u"}, "nick": "n"}
    discord_client.automod_rules[(1, 9)] = {"id": "9", "name": "no spam"}

    member = await fetcher.fetch(EntityKind.member, CompoundIdentity(1, 2))
    rule = await fetcher.fetch(EntityKind.auto_moderation_rule, CompoundIdentity(1, 9))

    assert member.value.guild_id == 1
    assert member.value.user.id == 2
    assert rule.value.guild_id == 1


@pytest.mark.asyncio
async def test_invite_fetch_by_code(fetcher, discord_client):
    discord_client.invites["abc"] = {"code": "abc", "guild": {"id": "1", "name": "G"}}
    res = await fetcher.fetch(EntityKind.invite, CodeIdentity("abc"))
    assert isinstance(res.value, InvitePayload)
    assert res.value.guild.name == "G"


@pytest.mark.asyncio
async def test_unexpected_remote_shape_is_invalid_payload(fetcher, discord_client):
    discord_client.stickers[1] = {"id": "1"}
    res = await fetcher.fetch(EntityKind.sticker, SimpleIdentity(1))
    assert isinstance(res.error, InvalidPayloadShape)
    assert "name" in res.error.detail
