"""Per-kind transformers: typed payload in, staged mutation out.

Transformers are synchronous and do no I/O. Relationship edges they stage are
resolved afterwards by the resolver.
"""

from __future__ import annotations

from DiscordMirror.kinds import EntityKind

from .attachment import transform_attachment
from .auto_moderation_rule import transform_auto_moderation_rule
from .base import TransformContext, Transformer
from .channel import transform_channel
from .emoji import transform_emoji
from .guild import transform_guild
from .interaction import transform_interaction
from .invite import transform_invite
from .member import transform_member
from .message import transform_message
from .reaction import transform_reaction
from .role import transform_role
from .sticker import transform_sticker
from .thread_member import transform_thread_member
from .typing_indicator import transform_typing_indicator
from .user import transform_user
from .voice_state import transform_voice_state
from .webhook import transform_webhook

TRANSFORMERS: dict[EntityKind, Transformer] = {
    EntityKind.guild: transform_guild,
    EntityKind.user: transform_user,
    EntityKind.channel: transform_channel,
    EntityKind.message: transform_message,
    EntityKind.role: transform_role,
    EntityKind.member: transform_member,
    EntityKind.emoji: transform_emoji,
    EntityKind.sticker: transform_sticker,
    EntityKind.webhook: transform_webhook,
    EntityKind.invite: transform_invite,
    EntityKind.voice_state: transform_voice_state,
    EntityKind.typing_indicator: transform_typing_indicator,
    EntityKind.reaction: transform_reaction,
    EntityKind.attachment: transform_attachment,
    EntityKind.interaction: transform_interaction,
    EntityKind.thread_member: transform_thread_member,
    EntityKind.auto_moderation_rule: transform_auto_moderation_rule,
}

__all__ = ["TRANSFORMERS", "TransformContext", "Transformer"]
