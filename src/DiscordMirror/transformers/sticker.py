from __future__ import annotations

from DiscordMirror.payloads import StickerPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation

from .base import TransformContext


def transform_sticker(payload: StickerPayload, ctx: TransformContext) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("discord_id", payload, "id")
    m.set_from("name", payload)
    m.set_from("pack_id", payload)
    m.set_from("description", payload)
    m.set_from("tags", payload)
    m.set_from("type", payload)
    m.set_from("format_type", payload)
    m.set_from("available", payload)
    m.set_from("sort_value", payload)
    m.set_from("guild_id", payload)
    if payload.user is not None:
        m.set_relationship_if_declared("user", payload.user.id, payload.user)
    return Ok(m)
