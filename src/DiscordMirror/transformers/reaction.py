from __future__ import annotations

from DiscordMirror.payloads import ReactionPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.transcoders import emoji_key

from .base import TransformContext


def transform_reaction(payload: ReactionPayload, ctx: TransformContext) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("user_id", payload)
    m.set_from("message_id", payload)
    m.set_from("channel_id", payload)
    m.set_from("guild_id", payload)
    if payload.emoji is not None:
        m.set_if_present("emoji_key", emoji_key(payload.emoji.id, payload.emoji.name))
        m.set_if_present("emoji_id", payload.emoji.id)
        m.set_if_present("emoji_name", payload.emoji.name)
        m.set_if_present("emoji_animated", bool(payload.emoji.animated))
    m.set_if_present("count", 1)
    m.set_if_present("me", False)
    return Ok(m)
