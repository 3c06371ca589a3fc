from __future__ import annotations

from DiscordMirror.payloads import EmojiPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.transcoders import emoji_key

from .base import TransformContext


def transform_emoji(payload: EmojiPayload, ctx: TransformContext) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_if_present("emoji_key", emoji_key(payload.id, payload.name))
    m.set_from("discord_id", payload, "id")
    m.set_from("name", payload)
    m.set_if_present("custom", payload.id is not None)
    m.set_if_present("animated", bool(payload.animated))
    m.set_from("available", payload)
    m.set_from("require_colons", payload)
    m.set_from("managed", payload)
    m.set_from("roles", payload)
    m.set_from("guild_id", payload)
    if payload.user is not None:
        m.set_relationship_if_declared("user", payload.user.id, payload.user)
    return Ok(m)
