from __future__ import annotations

from DiscordMirror.payloads import UserPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.transcoders import synthesize_placeholder_email

from .base import TransformContext


def transform_user(payload: UserPayload, ctx: TransformContext) -> Result[StagedMutation]:
    """Platform users have no email; every record gets a stable placeholder."""
    m = ctx.new_mutation()
    m.set_from("discord_id", payload, "id")
    m.set_from("discord_username", payload, "username")
    m.set_from("discord_avatar", payload, "avatar")
    m.set_from("discord_global_name", payload, "global_name")
    m.set_if_present("email", synthesize_placeholder_email(payload.id, ctx.email_domain))
    return Ok(m)
