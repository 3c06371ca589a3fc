"""create discord entity tables

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0a1b2c3d4e5f"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("inserted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _pk() -> sa.Column:
    return sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True)


def _index(table: str, *cols: str) -> None:
    op.create_index(f"ix_{table}_{'_'.join(cols)}", table, list(cols))


def upgrade() -> None:
    op.create_table(
        "discord_guilds",
        _pk(),
        sa.Column("discord_id", sa.BigInteger(), nullable=False, unique=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=255), nullable=True),
        sa.Column("owner_id", sa.BigInteger(), nullable=True),
        sa.Column("member_count", sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "discord_users",
        _pk(),
        sa.Column("discord_id", sa.BigInteger(), nullable=False, unique=True),
        sa.Column("discord_username", sa.String(length=64), nullable=False),
        sa.Column("discord_avatar", sa.String(length=255), nullable=True),
        sa.Column("discord_global_name", sa.String(length=64), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "discord_channels",
        _pk(),
        sa.Column("discord_id", sa.BigInteger(), nullable=False, unique=True),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("topic", sa.Text(), nullable=True),
        sa.Column("nsfw", sa.Boolean(), nullable=True),
        sa.Column("parent_id", sa.BigInteger(), nullable=True),
        sa.Column("permission_overwrites", sa.JSON(), nullable=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        *_timestamps(),
    )
    _index("discord_channels", "guild_id")

    op.create_table(
        "discord_messages",
        _pk(),
        sa.Column("discord_id", sa.BigInteger(), nullable=False, unique=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("embeds", sa.JSON(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=True),
        sa.Column("edited_timestamp", sa.DateTime(timezone=True), nullable=True),
        sa.Column("tts", sa.Boolean(), nullable=True),
        sa.Column("mention_everyone", sa.Boolean(), nullable=True),
        sa.Column("pinned", sa.Boolean(), nullable=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        sa.Column("channel_id", sa.BigInteger(), nullable=True),
        sa.Column("author_id", sa.BigInteger(), nullable=True),
        *_timestamps(),
    )
    for col in ("guild_id", "channel_id", "author_id"):
        _index("discord_messages", col)

    op.create_table(
        "discord_roles",
        _pk(),
        sa.Column("discord_id", sa.BigInteger(), nullable=False, unique=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("color", sa.Integer(), nullable=True),
        sa.Column("permissions", sa.String(length=32), nullable=True),
        sa.Column("hoist", sa.Boolean(), nullable=True),
        sa.Column("icon", sa.String(length=255), nullable=True),
        sa.Column("unicode_emoji", sa.String(length=64), nullable=True),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("managed", sa.Boolean(), nullable=True),
        sa.Column("mentionable", sa.Boolean(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        *_timestamps(),
    )
    _index("discord_roles", "guild_id")

    op.create_table(
        "discord_guild_members",
        _pk(),
        sa.Column("guild_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("nick", sa.String(length=64), nullable=True),
        sa.Column("avatar", sa.String(length=255), nullable=True),
        sa.Column("roles", sa.JSON(), nullable=True),
        sa.Column("flags", sa.Integer(), nullable=True),
        sa.Column("deaf", sa.Boolean(), nullable=True),
        sa.Column("mute", sa.Boolean(), nullable=True),
        sa.Column("pending", sa.Boolean(), nullable=True),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("premium_since", sa.DateTime(timezone=True), nullable=True),
        sa.Column("communication_disabled_until", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("guild_id", "user_id", name="uq_member_guild_user"),
    )
    _index("discord_guild_members", "guild_id")
    _index("discord_guild_members", "user_id")

    op.create_table(
        "discord_emojis",
        _pk(),
        sa.Column("emoji_key", sa.String(length=100), nullable=False, unique=True),
        sa.Column("discord_id", sa.BigInteger(), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("custom", sa.Boolean(), nullable=False),
        sa.Column("animated", sa.Boolean(), nullable=False),
        sa.Column("available", sa.Boolean(), nullable=True),
        sa.Column("require_colons", sa.Boolean(), nullable=True),
        sa.Column("managed", sa.Boolean(), nullable=True),
        sa.Column("roles", sa.JSON(), nullable=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        sa.Column("user_id", sa.BigInteger(), nullable=True),
        *_timestamps(),
    )
    _index("discord_emojis", "guild_id")

    op.create_table(
        "discord_stickers",
        _pk(),
        sa.Column("discord_id", sa.BigInteger(), nullable=False, unique=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("pack_id", sa.BigInteger(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("tags", sa.String(length=200), nullable=True),
        sa.Column("type", sa.Integer(), nullable=True),
        sa.Column("format_type", sa.Integer(), nullable=True),
        sa.Column("available", sa.Boolean(), nullable=True),
        sa.Column("sort_value", sa.Integer(), nullable=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        sa.Column("user_id", sa.BigInteger(), nullable=True),
        *_timestamps(),
    )
    _index("discord_stickers", "guild_id")

    op.create_table(
        "discord_webhooks",
        _pk(),
        sa.Column("discord_id", sa.BigInteger(), nullable=False, unique=True),
        sa.Column("type", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("avatar", sa.String(length=255), nullable=True),
        sa.Column("token", sa.String(length=255), nullable=True),
        sa.Column("channel_id", sa.BigInteger(), nullable=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        sa.Column("source_guild_id", sa.BigInteger(), nullable=True),
        sa.Column("source_channel_id", sa.BigInteger(), nullable=True),
        sa.Column("user_id", sa.BigInteger(), nullable=True),
        sa.Column("application_id", sa.BigInteger(), nullable=True),
        sa.Column("url", sa.String(length=512), nullable=True),
        *_timestamps(),
    )
    _index("discord_webhooks", "channel_id")
    _index("discord_webhooks", "guild_id")

    op.create_table(
        "discord_invites",
        _pk(),
        sa.Column("code", sa.String(length=32), nullable=False, unique=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        sa.Column("channel_id", sa.BigInteger(), nullable=True),
        sa.Column("inviter_id", sa.BigInteger(), nullable=True),
        sa.Column("target_user_id", sa.BigInteger(), nullable=True),
        sa.Column("target_type", sa.Integer(), nullable=True),
        sa.Column("approximate_presence_count", sa.Integer(), nullable=True),
        sa.Column("approximate_member_count", sa.Integer(), nullable=True),
        sa.Column("uses", sa.Integer(), nullable=True),
        sa.Column("max_uses", sa.Integer(), nullable=True),
        sa.Column("max_age", sa.Integer(), nullable=True),
        sa.Column("temporary", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("stage_instance", sa.JSON(), nullable=True),
        sa.Column("guild_scheduled_event", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    _index("discord_invites", "guild_id")
    _index("discord_invites", "channel_id")

    op.create_table(
        "discord_voice_states",
        _pk(),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("guild_id", sa.BigInteger(), nullable=False),
        sa.Column("channel_id", sa.BigInteger(), nullable=True),
        sa.Column("session_id", sa.String(length=64), nullable=True),
        sa.Column("deaf", sa.Boolean(), nullable=True),
        sa.Column("mute", sa.Boolean(), nullable=True),
        sa.Column("self_deaf", sa.Boolean(), nullable=True),
        sa.Column("self_mute", sa.Boolean(), nullable=True),
        sa.Column("self_stream", sa.Boolean(), nullable=True),
        sa.Column("self_video", sa.Boolean(), nullable=True),
        sa.Column("suppress", sa.Boolean(), nullable=True),
        sa.Column("request_to_speak_timestamp", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "guild_id", name="uq_voice_state_user_guild"),
    )
    _index("discord_voice_states", "user_id")
    _index("discord_voice_states", "guild_id")

    op.create_table(
        "discord_typing_indicators",
        _pk(),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("channel_id", sa.BigInteger(), nullable=False),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("member", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "channel_id", name="uq_typing_user_channel"),
    )
    _index("discord_typing_indicators", "user_id")
    _index("discord_typing_indicators", "channel_id")

    op.create_table(
        "discord_message_reactions",
        _pk(),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("message_id", sa.BigInteger(), nullable=False),
        sa.Column("emoji_key", sa.String(length=100), nullable=False),
        sa.Column("channel_id", sa.BigInteger(), nullable=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        sa.Column("emoji_id", sa.BigInteger(), nullable=True),
        sa.Column("emoji_name", sa.String(length=100), nullable=True),
        sa.Column("emoji_animated", sa.Boolean(), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False),
        sa.Column("me", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "user_id", "message_id", "emoji_key", name="uq_reaction_user_message_emoji"
        ),
    )
    _index("discord_message_reactions", "user_id")
    _index("discord_message_reactions", "message_id")

    op.create_table(
        "discord_message_attachments",
        _pk(),
        sa.Column("discord_id", sa.BigInteger(), nullable=False, unique=True),
        sa.Column("message_id", sa.BigInteger(), nullable=True),
        sa.Column("filename", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content_type", sa.String(length=128), nullable=True),
        sa.Column("size", sa.BigInteger(), nullable=True),
        sa.Column("url", sa.String(length=1024), nullable=True),
        sa.Column("proxy_url", sa.String(length=1024), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.Column("width", sa.Integer(), nullable=True),
        *_timestamps(),
    )
    _index("discord_message_attachments", "message_id")

    op.create_table(
        "discord_interactions",
        _pk(),
        sa.Column("discord_id", sa.BigInteger(), nullable=False, unique=True),
        sa.Column("application_id", sa.BigInteger(), nullable=True),
        sa.Column("type", sa.Integer(), nullable=True),
        sa.Column("token", sa.Text(), nullable=True),
        sa.Column("custom_id", sa.String(length=100), nullable=True),
        sa.Column("data", sa.JSON(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=True),
        sa.Column("locale", sa.String(length=16), nullable=True),
        sa.Column("guild_locale", sa.String(length=16), nullable=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        sa.Column("channel_id", sa.BigInteger(), nullable=True),
        sa.Column("user_id", sa.BigInteger(), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    for col in ("guild_id", "channel_id", "user_id"):
        _index("discord_interactions", col)

    op.create_table(
        "discord_thread_members",
        _pk(),
        sa.Column("thread_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("guild_id", sa.BigInteger(), nullable=True),
        sa.Column("flags", sa.Integer(), nullable=True),
        sa.Column("join_timestamp", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("thread_id", "user_id", name="uq_thread_member"),
    )
    _index("discord_thread_members", "thread_id")
    _index("discord_thread_members", "user_id")

    op.create_table(
        "discord_auto_moderation_rules",
        _pk(),
        sa.Column("discord_id", sa.BigInteger(), nullable=False, unique=True),
        sa.Column("guild_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("creator_id", sa.BigInteger(), nullable=True),
        sa.Column("event_type", sa.Integer(), nullable=True),
        sa.Column("trigger_type", sa.Integer(), nullable=True),
        sa.Column("trigger_metadata", sa.JSON(), nullable=True),
        sa.Column("actions", sa.JSON(), nullable=True),
        sa.Column("enabled", sa.Boolean(), nullable=True),
        sa.Column("exempt_roles", sa.JSON(), nullable=True),
        sa.Column("exempt_channels", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    _index("discord_auto_moderation_rules", "guild_id")


_TABLES = (
    "discord_auto_moderation_rules",
    "discord_thread_members",
    "discord_interactions",
    "discord_message_attachments",
    "discord_message_reactions",
    "discord_typing_indicators",
    "discord_voice_states",
    "discord_invites",
    "discord_webhooks",
    "discord_stickers",
    "discord_emojis",
    "discord_guild_members",
    "discord_roles",
    "discord_messages",
    "discord_channels",
    "discord_users",
    "discord_guilds",
)


def downgrade() -> None:
    # Dropping a table drops its indexes with it
    for table in _TABLES:
        op.drop_table(table)
