# models.py

"""Default local tables for the 17 entity kinds.

Relation columns (``guild_id``, ``channel_id``, ``author_id`` ...) hold the
platform snowflake of the referenced record, not its surrogate ``id``.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from DiscordMirror.db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Timestamps:
    inserted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


class Guild(_Timestamps, Base):
    __tablename__ = "discord_guilds"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    member_count: Mapped[int | None] = mapped_column(Integer, nullable=True)


class User(_Timestamps, Base):
    __tablename__ = "discord_users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    discord_username: Mapped[str] = mapped_column(String(64))
    discord_avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    discord_global_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)


class Channel(_Timestamps, Base):
    __tablename__ = "discord_channels"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    type: Mapped[int] = mapped_column(Integer)
    position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    topic: Mapped[str | None] = mapped_column(Text, nullable=True)
    nsfw: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    parent_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    permission_overwrites: Mapped[list | None] = mapped_column(JSON, nullable=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)


class Message(_Timestamps, Base):
    __tablename__ = "discord_messages"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    content: Mapped[str] = mapped_column(Text, default="")
    embeds: Mapped[list | None] = mapped_column(JSON, nullable=True)
    timestamp: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    edited_timestamp: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    tts: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    mention_everyone: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    pinned: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    channel_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    author_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)


class Role(_Timestamps, Base):
    __tablename__ = "discord_roles"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    name: Mapped[str] = mapped_column(String(100))
    color: Mapped[int | None] = mapped_column(Integer, nullable=True)
    permissions: Mapped[str | None] = mapped_column(String(32), nullable=True)
    hoist: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(255), nullable=True)
    unicode_emoji: Mapped[str | None] = mapped_column(String(64), nullable=True)
    position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    managed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    mentionable: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    tags: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)


class GuildMember(_Timestamps, Base):
    __tablename__ = "discord_guild_members"
    __table_args__ = (UniqueConstraint("guild_id", "user_id", name="uq_member_guild_user"),)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    guild_id: Mapped[int] = mapped_column(BigInteger, index=True)
    user_id: Mapped[int] = mapped_column(BigInteger, index=True)
    nick: Mapped[str | None] = mapped_column(String(64), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    roles: Mapped[list | None] = mapped_column(JSON, nullable=True)
    flags: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deaf: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    mute: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    pending: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    joined_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    premium_since: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    communication_disabled_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class Emoji(_Timestamps, Base):
    __tablename__ = "discord_emojis"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Custom emoji id, or the unicode name for built-in emoji
    emoji_key: Mapped[str] = mapped_column(String(100), unique=True)
    discord_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    custom: Mapped[bool] = mapped_column(Boolean, default=False)
    animated: Mapped[bool] = mapped_column(Boolean, default=False)
    available: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    require_colons: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    managed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    roles: Mapped[list | None] = mapped_column(JSON, nullable=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    user_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)


class Sticker(_Timestamps, Base):
    __tablename__ = "discord_stickers"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    name: Mapped[str] = mapped_column(String(100))
    pack_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[str | None] = mapped_column(String(200), nullable=True)
    type: Mapped[int | None] = mapped_column(Integer, nullable=True)
    format_type: Mapped[int | None] = mapped_column(Integer, nullable=True)
    available: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    sort_value: Mapped[int | None] = mapped_column(Integer, nullable=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    user_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)


class Webhook(_Timestamps, Base):
    __tablename__ = "discord_webhooks"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    type: Mapped[int | None] = mapped_column(Integer, nullable=True)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    token: Mapped[str | None] = mapped_column(String(255), nullable=True)
    channel_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    source_guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    source_channel_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    user_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    application_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    url: Mapped[str | None] = mapped_column(String(512), nullable=True)


class Invite(_Timestamps, Base):
    __tablename__ = "discord_invites"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(32), unique=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    channel_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    inviter_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    target_user_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    target_type: Mapped[int | None] = mapped_column(Integer, nullable=True)
    approximate_presence_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    approximate_member_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    uses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_uses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    temporary: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    stage_instance: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    guild_scheduled_event: Mapped[dict | None] = mapped_column(JSON, nullable=True)


class VoiceState(_Timestamps, Base):
    __tablename__ = "discord_voice_states"
    __table_args__ = (UniqueConstraint("user_id", "guild_id", name="uq_voice_state_user_guild"),)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, index=True)
    guild_id: Mapped[int] = mapped_column(BigInteger, index=True)
    channel_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    session_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    deaf: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    mute: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    self_deaf: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    self_mute: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    self_stream: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    self_video: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    suppress: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    request_to_speak_timestamp: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class TypingIndicator(_Timestamps, Base):
    __tablename__ = "discord_typing_indicators"
    __table_args__ = (UniqueConstraint("user_id", "channel_id", name="uq_typing_user_channel"),)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, index=True)
    channel_id: Mapped[int] = mapped_column(BigInteger, index=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    member: Mapped[dict | None] = mapped_column(JSON, nullable=True)


class MessageReaction(_Timestamps, Base):
    __tablename__ = "discord_message_reactions"
    __table_args__ = (
        UniqueConstraint("user_id", "message_id", "emoji_key", name="uq_reaction_user_message_emoji"),
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, index=True)
    message_id: Mapped[int] = mapped_column(BigInteger, index=True)
    emoji_key: Mapped[str] = mapped_column(String(100))
    channel_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    emoji_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    emoji_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    emoji_animated: Mapped[bool] = mapped_column(Boolean, default=False)
    count: Mapped[int] = mapped_column(Integer, default=1)
    me: Mapped[bool] = mapped_column(Boolean, default=False)


class MessageAttachment(_Timestamps, Base):
    __tablename__ = "discord_message_attachments"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    message_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    filename: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_type: Mapped[str | None] = mapped_column(String(128), nullable=True)
    size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    proxy_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    width: Mapped[int | None] = mapped_column(Integer, nullable=True)


class Interaction(_Timestamps, Base):
    __tablename__ = "discord_interactions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    application_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    type: Mapped[int | None] = mapped_column(Integer, nullable=True)
    token: Mapped[str | None] = mapped_column(Text, nullable=True)
    custom_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    version: Mapped[int | None] = mapped_column(Integer, nullable=True)
    locale: Mapped[str | None] = mapped_column(String(16), nullable=True)
    guild_locale: Mapped[str | None] = mapped_column(String(16), nullable=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    channel_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    user_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class ThreadMember(_Timestamps, Base):
    __tablename__ = "discord_thread_members"
    __table_args__ = (UniqueConstraint("thread_id", "user_id", name="uq_thread_member"),)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    thread_id: Mapped[int] = mapped_column(BigInteger, index=True)
    user_id: Mapped[int] = mapped_column(BigInteger, index=True)
    guild_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    flags: Mapped[int | None] = mapped_column(Integer, nullable=True)
    join_timestamp: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class AutoModerationRule(_Timestamps, Base):
    __tablename__ = "discord_auto_moderation_rules"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    guild_id: Mapped[int] = mapped_column(BigInteger, index=True)
    name: Mapped[str] = mapped_column(String(100))
    creator_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    event_type: Mapped[int | None] = mapped_column(Integer, nullable=True)
    trigger_type: Mapped[int | None] = mapped_column(Integer, nullable=True)
    trigger_metadata: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    actions: Mapped[list | None] = mapped_column(JSON, nullable=True)
    enabled: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    exempt_roles: Mapped[list | None] = mapped_column(JSON, nullable=True)
    exempt_channels: Mapped[list | None] = mapped_column(JSON, nullable=True)
