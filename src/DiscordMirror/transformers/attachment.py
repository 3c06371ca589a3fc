from __future__ import annotations

from DiscordMirror.payloads import AttachmentPayload
from DiscordMirror.result import Ok, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.transcoders import infer_content_type

from .base import TransformContext


def transform_attachment(
    payload: AttachmentPayload, ctx: TransformContext
) -> Result[StagedMutation]:
    m = ctx.new_mutation()
    m.set_from("discord_id", payload, "id")
    m.set_from("message_id", payload)
    m.set_from("filename", payload)
    m.set_from("description", payload)
    m.set_if_present("content_type", payload.content_type or infer_content_type(payload.filename))
    m.set_from("size", payload)
    m.set_from("url", payload)
    m.set_from("proxy_url", payload)
    m.set_from("height", payload)
    m.set_from("width", payload)
    return Ok(m)
