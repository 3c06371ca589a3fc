from __future__ import annotations

from DiscordMirror.payloads import GuildPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation

from .base import TransformContext


def transform_guild(payload: GuildPayload, ctx: TransformContext) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("discord_id", payload, "id")
    m.set_from("name", payload)
    m.set_from("description", payload)
    m.set_from("icon", payload)
    m.set_from("owner_id", payload)
    # Fetched guilds only carry the approximate count
    m.set_if_present("member_count", payload.member_count or payload.approximate_member_count)
    return Ok(m)
