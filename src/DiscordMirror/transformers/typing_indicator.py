from __future__ import annotations

from DiscordMirror.payloads import TypingIndicatorPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.transcoders import parse_timestamp

from .base import TransformContext


def transform_typing_indicator(
    payload: TypingIndicatorPayload, ctx: TransformContext
) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("user_id", payload)
    m.set_from("channel_id", payload)
    m.set_from("guild_id", payload)
    m.set_if_present("timestamp", parse_timestamp(payload.timestamp) or ctx.clock())
    if payload.member is not None:
        m.set_if_present("member", payload.member.model_dump(mode="json", exclude_none=True))
    return Ok(m)
