from __future__ import annotations

from DiscordMirror.payloads import WebhookPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.transcoders import extract_nested_id

from .base import TransformContext


def transform_webhook(payload: WebhookPayload, ctx: TransformContext) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("discord_id", payload, "id")
    m.set_from("type", payload)
    m.set_from("name", payload)
    m.set_from("avatar", payload)
    m.set_from("token", payload)
    m.set_from("channel_id", payload)
    m.set_from("guild_id", payload)
    m.set_if_present("source_guild_id", extract_nested_id(payload.source_guild))
    m.set_if_present("source_channel_id", extract_nested_id(payload.source_channel))
    m.set_if_present("user_id", extract_nested_id(payload.user))
    m.set_from("application_id", payload)
    m.set_from("url", payload)
    return Ok(m)
