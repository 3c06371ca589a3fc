# kinds.py

from __future__ import annotations

import enum


class EntityKind(str, enum.Enum):
    guild = "guild"
    user = "user"
    channel = "channel"
    message = "message"
    role = "role"
    member = "member"
    emoji = "emoji"
    sticker = "sticker"
    webhook = "webhook"
    invite = "invite"
    voice_state = "voice_state"
    typing_indicator = "typing_indicator"
    reaction = "reaction"
    attachment = "attachment"
    interaction = "interaction"
    thread_member = "thread_member"
    auto_moderation_rule = "auto_moderation_rule"


# Kinds that only ever arrive inline with a gateway event; the REST API has no
# fetch-by-id endpoint for them.
PUSH_ONLY_KINDS: frozenset[EntityKind] = frozenset(
    {
        EntityKind.voice_state,
        EntityKind.typing_indicator,
        EntityKind.reaction,
        EntityKind.attachment,
        EntityKind.interaction,
        EntityKind.thread_member,
    }
)
