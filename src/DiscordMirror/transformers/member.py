from __future__ import annotations

from DiscordMirror.errors import InvalidPayloadShape
from DiscordMirror.payloads import MemberPayload
from DiscordMirror.result import Err, Ok, Result
from DiscordMirror.staging import StagedMutation

from .base import TransformContext


def transform_member(payload: MemberPayload, ctx: TransformContext) -> Result[StagedMutation]:
    """A member is a (guild, user) pair; either half may come from the identity."""
    guild_id = payload.guild_id or ctx.container_id
    user_id = payload.user.id if payload.user is not None else payload.user_id
    user_id = user_id or ctx.item_id
    if guild_id is None or user_id is None:
        return Err(
            InvalidPayloadShape(
                ctx.schema.kind,
                expected="MemberPayload with guild_id and user (or a guild_id/user_id identity)",
                detail=f"guild_id={guild_id!r} user_id={user_id!r}",
            )
        )

    m = ctx.new_mutation()
    m.set_relationship_if_declared("guild", guild_id)
    m.set_relationship_if_declared("user", user_id, payload.user)
    m.set_from("nick", payload)
    m.set_from("avatar", payload)
    m.set_from("roles", payload)
    m.set_from("flags", payload)
    m.set_from("deaf", payload)
    m.set_from("mute", payload)
    m.set_from("pending", payload)
    m.set_timestamp_from("joined_at", payload)
    m.set_timestamp_from("premium_since", payload)
    m.set_timestamp_from("communication_disabled_until", payload)
    return Ok(m)
