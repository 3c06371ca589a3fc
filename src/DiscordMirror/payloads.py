# payloads.py

"""Typed inbound payloads, one model per entity kind.

Snowflakes arrive as JSON strings and are coerced to ``int``. Unknown keys are
ignored so new platform fields never break validation. Timestamps stay raw
(``RawTimestamp``) and are parsed by the transformers, which tolerate junk.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from DiscordMirror.kinds import EntityKind

RawTimestamp = Union[datetime, int, str, None]


class Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    KIND: ClassVar[EntityKind]


class NestedRef(BaseModel):
    """A nested object of which only the id matters, e.g. ``source_guild``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | None = None


class UserPayload(Payload):
    KIND = EntityKind.user

    id: int
    username: str | None = None
    discriminator: str | None = None
    global_name: str | None = None
    avatar: str | None = None
    bot: bool | None = None


class GuildPayload(Payload):
    KIND = EntityKind.guild

    id: int
    name: str | None = None
    description: str | None = None
    icon: str | None = None
    owner_id: int | None = None
    member_count: int | None = None
    approximate_member_count: int | None = None


class PermissionOverwrite(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    type: int | None = None
    allow: int | str | None = None
    deny: int | str | None = None


class ChannelPayload(Payload):
    KIND = EntityKind.channel

    id: int
    name: str | None = None
    type: int | None = None
    guild_id: int | None = None
    position: int | None = None
    topic: str | None = None
    nsfw: bool | None = None
    parent_id: int | None = None
    permission_overwrites: list[PermissionOverwrite] | PermissionOverwrite | None = None


class MessageAuthor(BaseModel):
    """Message author as sent by the platform.

    Webhook and system messages can carry authors whose id is not a user
    snowflake, so the id is kept loose here and checked by the transformer.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | str | None = None
    username: str | None = None
    discriminator: str | None = None
    global_name: str | None = None
    avatar: str | None = None
    bot: bool | None = None


class AttachmentPayload(Payload):
    KIND = EntityKind.attachment

    id: int
    filename: str | None = None
    description: str | None = None
    content_type: str | None = None
    size: int | None = None
    url: str | None = None
    proxy_url: str | None = None
    height: int | None = None
    width: int | None = None
    message_id: int | None = None


class MessagePayload(Payload):
    KIND = EntityKind.message

    id: int
    channel_id: int | None = None
    guild_id: int | None = None
    author: MessageAuthor | None = None
    content: str | None = None
    timestamp: RawTimestamp = None
    edited_timestamp: RawTimestamp = None
    tts: bool | None = None
    mention_everyone: bool | None = None
    pinned: bool | None = None
    embeds: list[dict[str, Any]] | None = None
    attachments: list[AttachmentPayload] = Field(default_factory=list)


class MemberPayload(Payload):
    KIND = EntityKind.member

    user: UserPayload | None = None
    user_id: int | None = None
    guild_id: int | None = None
    nick: str | None = None
    avatar: str | None = None
    roles: list[int] | None = None
    joined_at: RawTimestamp = None
    premium_since: RawTimestamp = None
    communication_disabled_until: RawTimestamp = None
    deaf: bool | None = None
    mute: bool | None = None
    pending: bool | None = None
    flags: int | None = None


class RolePayload(Payload):
    KIND = EntityKind.role

    id: int
    guild_id: int | None = None
    name: str | None = None
    color: int | None = None
    hoist: bool | None = None
    icon: str | None = None
    unicode_emoji: str | None = None
    position: int | None = None
    permissions: int | str | None = None
    managed: bool | None = None
    mentionable: bool | None = None
    tags: dict[str, Any] | None = None


class EmojiPayload(Payload):
    KIND = EntityKind.emoji

    id: int | None = None
    name: str | None = None
    guild_id: int | None = None
    animated: bool | None = None
    available: bool | None = None
    require_colons: bool | None = None
    managed: bool | None = None
    roles: list[int] | None = None
    user: UserPayload | None = None


class StickerPayload(Payload):
    KIND = EntityKind.sticker

    id: int
    name: str
    pack_id: int | None = None
    description: str | None = None
    tags: str | None = None
    type: int | None = None
    format_type: int | None = None
    available: bool | None = None
    guild_id: int | None = None
    sort_value: int | None = None
    user: UserPayload | None = None


class WebhookPayload(Payload):
    KIND = EntityKind.webhook

    id: int
    type: int | None = None
    name: str | None = None
    avatar: str | None = None
    token: str | None = None
    channel_id: int | None = None
    guild_id: int | None = None
    application_id: int | None = None
    url: str | None = None
    user: NestedRef | None = None
    source_guild: NestedRef | None = None
    source_channel: NestedRef | None = None


class InviteGuild(BaseModel):
    """Partial guild embedded in an invite."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    name: str | None = None
    description: str | None = None
    icon: str | None = None


class InviteChannel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    name: str | None = None
    type: int | None = None


class InvitePayload(Payload):
    KIND = EntityKind.invite

    code: str
    guild: InviteGuild | None = None
    guild_id: int | None = None
    channel: InviteChannel | None = None
    channel_id: int | None = None
    inviter: NestedRef | None = None
    target_user: NestedRef | None = None
    target_type: int | None = None
    approximate_presence_count: int | None = None
    approximate_member_count: int | None = None
    uses: int | None = None
    max_uses: int | None = None
    max_age: int | None = None
    temporary: bool | None = None
    created_at: RawTimestamp = None
    expires_at: RawTimestamp = None
    stage_instance: dict[str, Any] | None = None
    guild_scheduled_event: dict[str, Any] | None = None


class VoiceStatePayload(Payload):
    KIND = EntityKind.voice_state

    user_id: int
    guild_id: int | None = None
    channel_id: int | None = None
    session_id: str | None = None
    deaf: bool | None = None
    mute: bool | None = None
    self_deaf: bool | None = None
    self_mute: bool | None = None
    self_stream: bool | None = None
    self_video: bool | None = None
    suppress: bool | None = None
    request_to_speak_timestamp: RawTimestamp = None


class TypingIndicatorPayload(Payload):
    KIND = EntityKind.typing_indicator

    user_id: int
    channel_id: int
    guild_id: int | None = None
    timestamp: RawTimestamp = None
    member: MemberPayload | None = None


class ReactionEmoji(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | None = None
    name: str | None = None
    animated: bool | None = None


class ReactionPayload(Payload):
    KIND = EntityKind.reaction

    user_id: int
    message_id: int
    channel_id: int | None = None
    guild_id: int | None = None
    emoji: ReactionEmoji | None = None


class InteractionData(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: int | None = None
    name: str | None = None
    type: int | None = None
    custom_id: str | None = None
    component_type: int | None = None


class InteractionMember(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    user: UserPayload | None = None
    nick: str | None = None


class InteractionPayload(Payload):
    KIND = EntityKind.interaction

    id: int
    application_id: int | None = None
    type: int | None = None
    token: str | None = None
    data: InteractionData | None = None
    guild_id: int | None = None
    channel_id: int | None = None
    channel: InviteChannel | None = None
    user: UserPayload | None = None
    member: InteractionMember | None = None
    version: int | None = None
    locale: str | None = None
    guild_locale: str | None = None


class ThreadMemberPayload(Payload):
    KIND = EntityKind.thread_member

    id: int | None = None
    user_id: int | None = None
    guild_id: int | None = None
    flags: int | None = None
    join_timestamp: RawTimestamp = None


class AutoModerationRulePayload(Payload):
    KIND = EntityKind.auto_moderation_rule

    id: int
    guild_id: int | None = None
    name: str | None = None
    creator_id: int | None = None
    event_type: int | None = None
    trigger_type: int | None = None
    trigger_metadata: dict[str, Any] | None = None
    actions: list[dict[str, Any]] | None = None
    enabled: bool | None = None
    exempt_roles: list[int] | None = None
    exempt_channels: list[int] | None = None


PAYLOAD_TYPES: dict[EntityKind, type[Payload]] = {
    model.KIND: model
    for model in (
        GuildPayload,
        UserPayload,
        ChannelPayload,
        MessagePayload,
        RolePayload,
        MemberPayload,
        EmojiPayload,
        StickerPayload,
        WebhookPayload,
        InvitePayload,
        VoiceStatePayload,
        TypingIndicatorPayload,
        ReactionPayload,
        AttachmentPayload,
        InteractionPayload,
        ThreadMemberPayload,
        AutoModerationRulePayload,
    )
}


def describe_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in exc.errors()
    )
