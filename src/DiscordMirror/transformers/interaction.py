from __future__ import annotations

from datetime import timedelta

from DiscordMirror.payloads import ChannelPayload, InteractionPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation

from .base import TransformContext

# Interaction tokens stay valid for follow-ups this long
TOKEN_LIFETIME = timedelta(minutes=15)


def transform_interaction(
    payload: InteractionPayload, ctx: TransformContext
) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("discord_id", payload, "id")
    m.set_from("application_id", payload)
    m.set_from("type", payload)
    m.set_from("token", payload)
    m.set_from("version", payload)
    m.set_from("locale", payload)
    m.set_from("guild_locale", payload)
    if payload.data is not None:
        m.set_if_present("custom_id", payload.data.custom_id)
        m.set_if_present("data", payload.data.model_dump(mode="json", exclude_none=True))
    m.set_if_present("expires_at", ctx.clock() + TOKEN_LIFETIME)

    m.set_relationship_if_declared("guild", payload.guild_id)

    channel_id = payload.channel.id if payload.channel is not None else payload.channel_id
    channel_fragment = None
    if payload.channel is not None and payload.channel.type is not None:
        channel_fragment = ChannelPayload(
            id=payload.channel.id,
            name=payload.channel.name,
            type=payload.channel.type,
            guild_id=payload.guild_id,
        )
    m.set_relationship_if_declared("channel", channel_id, channel_fragment)

    # Guild interactions carry the user inside member; DMs carry it at top level
    user = payload.user
    if user is None and payload.member is not None:
        user = payload.member.user
    if user is not None:
        m.set_relationship_if_declared("user", user.id, user)
    return Ok(m)
