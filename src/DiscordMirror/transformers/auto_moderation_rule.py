from __future__ import annotations

from DiscordMirror.payloads import AutoModerationRulePayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation

from .base import TransformContext


def transform_auto_moderation_rule(
    payload: AutoModerationRulePayload, ctx: TransformContext
) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("discord_id", payload, "id")
    m.set_from("name", payload)
    m.set_from("creator_id", payload)
    m.set_from("event_type", payload)
    m.set_from("trigger_type", payload)
    m.set_from("trigger_metadata", payload)
    m.set_from("actions", payload)
    m.set_from("enabled", payload)
    m.set_from("exempt_roles", payload)
    m.set_from("exempt_channels", payload)
    m.set_relationship_if_declared("guild", ctx.container_id or payload.guild_id)
    return Ok(m)
