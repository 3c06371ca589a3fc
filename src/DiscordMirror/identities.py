"""Identity shapes used to fetch an entity from the remote API."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from DiscordMirror.kinds import EntityKind
from DiscordMirror.transcoders import coerce_snowflake


@dataclass(frozen=True)
class SimpleIdentity:
    id: int


@dataclass(frozen=True)
class CompoundIdentity:
    """An item scoped to a container, e.g. a role inside a guild."""

    context_id: int
    item_id: int


@dataclass(frozen=True)
class PairIdentity:
    channel_id: int
    message_id: int


@dataclass(frozen=True)
class CodeIdentity:
    code: str


Identity = Union[SimpleIdentity, CompoundIdentity, PairIdentity, CodeIdentity]

# Field names callers use when handing over raw identities, per kind.
IDENTITY_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.guild: ("guild_id",),
    EntityKind.user: ("user_id",),
    EntityKind.channel: ("channel_id",),
    EntityKind.webhook: ("webhook_id",),
    EntityKind.sticker: ("sticker_id",),
    EntityKind.role: ("guild_id", "role_id"),
    EntityKind.member: ("guild_id", "user_id"),
    EntityKind.auto_moderation_rule: ("guild_id", "rule_id"),
    EntityKind.emoji: ("guild_id", "emoji_id"),
    EntityKind.message: ("channel_id", "message_id"),
    EntityKind.invite: ("code",),
}

IDENTITY_SHAPES: dict[EntityKind, type] = {
    EntityKind.guild: SimpleIdentity,
    EntityKind.user: SimpleIdentity,
    EntityKind.channel: SimpleIdentity,
    EntityKind.webhook: SimpleIdentity,
    EntityKind.sticker: SimpleIdentity,
    EntityKind.role: CompoundIdentity,
    EntityKind.member: CompoundIdentity,
    EntityKind.auto_moderation_rule: CompoundIdentity,
    EntityKind.message: PairIdentity,
    EntityKind.invite: CodeIdentity,
}


def coerce_identity(kind: EntityKind, raw: Any) -> Any:
    """Turn a caller-supplied identity into the typed shape for ``kind``.

    Accepts the typed dataclasses, bare snowflakes (int or numeric string),
    mappings keyed by the names in IDENTITY_FIELDS, and 2-tuples. Anything that
    cannot be coerced is returned unchanged so the fetcher can report which
    fields are missing.
    """
    shape = IDENTITY_SHAPES.get(kind)
    if shape is None or isinstance(raw, shape):
        return raw
    fields = IDENTITY_FIELDS[kind]

    if shape is CodeIdentity:
        if isinstance(raw, str) and raw:
            return CodeIdentity(raw)
        if isinstance(raw, Mapping) and isinstance(raw.get("code"), str):
            return CodeIdentity(raw["code"])
        return raw

    if shape is SimpleIdentity:
        if isinstance(raw, Mapping):
            raw = raw.get(fields[0], raw.get("id"))
        snowflake = coerce_snowflake(raw)
        return SimpleIdentity(snowflake) if snowflake is not None else raw

    if isinstance(raw, Mapping):
        parts = [coerce_snowflake(raw.get(f)) for f in fields]
    elif isinstance(raw, Sequence) and not isinstance(raw, str) and len(raw) == 2:
        parts = [coerce_snowflake(v) for v in raw]
    else:
        return raw
    if any(p is None for p in parts):
        return raw
    return shape(*parts)
