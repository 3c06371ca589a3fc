from __future__ import annotations

from DiscordMirror.payloads import VoiceStatePayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation

from .base import TransformContext


def transform_voice_state(
    payload: VoiceStatePayload, ctx: TransformContext
) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("user_id", payload)
    m.set_from("guild_id", payload)
    m.set_from("channel_id", payload)
    m.set_from("session_id", payload)
    m.set_from("deaf", payload)
    m.set_from("mute", payload)
    m.set_from("self_deaf", payload)
    m.set_from("self_mute", payload)
    m.set_from("self_stream", payload)
    m.set_from("self_video", payload)
    m.set_from("suppress", payload)
    m.set_timestamp_from("request_to_speak_timestamp", payload)
    return Ok(m)
