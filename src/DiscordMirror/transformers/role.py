from __future__ import annotations

from DiscordMirror.payloads import RolePayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation

from .base import TransformContext


def transform_role(payload: RolePayload, ctx: TransformContext) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("discord_id", payload, "id")
    m.set_from("name", payload)
    m.set_from("color", payload)
    # Permission bitsets overflow 64 bits; keep them as decimal strings
    m.set_if_present(
        "permissions", str(payload.permissions) if payload.permissions is not None else None
    )
    m.set_from("hoist", payload)
    m.set_from("icon", payload)
    m.set_from("unicode_emoji", payload)
    m.set_from("position", payload)
    m.set_from("managed", payload)
    m.set_from("mentionable", payload)
    m.set_from("tags", payload)
    m.set_relationship_if_declared("guild", payload.guild_id or ctx.container_id)
    return Ok(m)
