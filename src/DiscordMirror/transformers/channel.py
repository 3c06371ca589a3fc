from __future__ import annotations

from DiscordMirror.payloads import ChannelPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.transcoders import canonicalize_permission_overwrites

from .base import TransformContext


def transform_channel(payload: ChannelPayload, ctx: TransformContext) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("discord_id", payload, "id")
    m.set_from("name", payload)
    m.set_from("type", payload)
    m.set_from("position", payload)
    m.set_from("topic", payload)
    m.set_from("nsfw", payload)
    m.set_from("parent_id", payload)
    m.set_if_present(
        "permission_overwrites",
        canonicalize_permission_overwrites(payload.permission_overwrites),
    )
    m.set_relationship_if_declared("guild", payload.guild_id)
    return Ok(m)
