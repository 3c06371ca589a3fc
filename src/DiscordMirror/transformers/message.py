from __future__ import annotations

from DiscordMirror.payloads import MessageAuthor, MessagePayload, UserPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.transcoders import coerce_snowflake

from .base import TransformContext


def _author_fragment(author: MessageAuthor, author_id: int) -> UserPayload | None:
    # Only a full user object can seed a user record; partial authors get fetched
    if not author.username:
        return None
    return UserPayload(
        id=author_id,
        username=author.username,
        discriminator=author.discriminator,
        global_name=author.global_name,
        avatar=author.avatar,
        bot=author.bot,
    )


def transform_message(payload: MessagePayload, ctx: TransformContext) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("discord_id", payload, "id")
    m.set_if_present("content", payload.content if payload.content is not None else "")
    m.set_from("embeds", payload)
    m.set_timestamp_from("timestamp", payload)
    m.set_timestamp_from("edited_timestamp", payload)
    m.set_from("tts", payload)
    m.set_from("mention_everyone", payload)
    m.set_from("pinned", payload)

    m.set_relationship_if_declared("guild", payload.guild_id)
    m.set_relationship_if_declared("channel", payload.channel_id or ctx.container_id)
    if payload.author is not None:
        # Webhook and system authors may carry ids that are not user snowflakes
        author_id = coerce_snowflake(payload.author.id)
        if author_id is not None:
            m.set_relationship_if_declared(
                "author", author_id, _author_fragment(payload.author, author_id)
            )
    return Ok(m)
