from __future__ import annotations

from DiscordMirror.payloads import ChannelPayload, GuildPayload, InvitePayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.transcoders import extract_nested_id

from .base import TransformContext


def transform_invite(payload: InvitePayload, ctx: TransformContext) -> Result[StagedMutation]:
    """Invites arrive either with nested guild/channel objects or flat ids."""
    m = ctx.new_mutation()
    m.set_from("code", payload)

    guild_id = payload.guild.id if payload.guild is not None else payload.guild_id
    guild_fragment = None
    if payload.guild is not None and payload.guild.name:
        guild_fragment = GuildPayload(
            id=payload.guild.id,
            name=payload.guild.name,
            description=payload.guild.description,
            icon=payload.guild.icon,
        )
    m.set_relationship_if_declared("guild", guild_id, guild_fragment)

    channel_id = payload.channel.id if payload.channel is not None else payload.channel_id
    channel_fragment = None
    if payload.channel is not None and payload.channel.type is not None:
        channel_fragment = ChannelPayload(
            id=payload.channel.id,
            name=payload.channel.name,
            type=payload.channel.type,
            guild_id=guild_id,
        )
    m.set_relationship_if_declared("channel", channel_id, channel_fragment)

    m.set_if_present("inviter_id", extract_nested_id(payload.inviter))
    m.set_if_present("target_user_id", extract_nested_id(payload.target_user))
    m.set_from("target_type", payload)
    m.set_from("approximate_presence_count", payload)
    m.set_from("approximate_member_count", payload)
    m.set_from("uses", payload)
    m.set_from("max_uses", payload)
    m.set_from("max_age", payload)
    m.set_from("temporary", payload)
    m.set_timestamp_from("created_at", payload)
    m.set_timestamp_from("expires_at", payload)
    m.set_from("stage_instance", payload)
    m.set_from("guild_scheduled_event", payload)
    return Ok(m)
