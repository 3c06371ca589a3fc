from __future__ import annotations

from DiscordMirror.payloads import ThreadMemberPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation

from .base import TransformContext


def transform_thread_member(
    payload: ThreadMemberPayload, ctx: TransformContext
) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    # The platform names the thread id plain "id" on thread member objects
    m.set_if_present("thread_id", payload.id or ctx.container_id)
    m.set_from("user_id", payload)
    m.set_from("guild_id", payload)
    m.set_from("flags", payload)
    m.set_timestamp_from("join_timestamp", payload)
    return Ok(m)
