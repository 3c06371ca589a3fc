# capabilities.py

"""Load-time descriptors of what each target table can hold.

A host application may map any kind onto its own SQLAlchemy model. The
descriptor is computed once from the mapped columns so transformers can ask
"does this table have a ``topic`` column?" without reflecting per write.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

import sqlalchemy as sa

from DiscordMirror import models
from DiscordMirror.errors import ConfigurationError
from DiscordMirror.kinds import EntityKind


@dataclass(frozen=True)
class Relation:
    """A single-valued reference stored as the target's platform id."""

    name: str
    column: str
    target: EntityKind


@dataclass(frozen=True, eq=False)
class EntitySchema:
    kind: EntityKind
    model: type
    fields: frozenset[str]
    natural_key: tuple[str, ...]
    relations: Mapping[str, Relation] = field(default_factory=dict)

    @classmethod
    def from_model(
        cls,
        kind: EntityKind,
        model: type,
        *,
        natural_key: Iterable[str],
        relations: Iterable[Relation] = (),
    ) -> EntitySchema:
        columns = frozenset(attr.key for attr in sa.inspect(model).column_attrs)
        key = tuple(natural_key)
        missing = [k for k in key if k not in columns]
        if missing:
            raise ConfigurationError(
                f"{model.__name__} lacks natural key column(s) {missing} for kind {kind.value}"
            )
        declared = {r.name: r for r in relations if r.column in columns}
        return cls(
            kind=kind,
            model=model,
            fields=columns,
            natural_key=key,
            relations=MappingProxyType(declared),
        )

    def declares(self, field_name: str) -> bool:
        return field_name in self.fields

    def relation(self, name: str) -> Relation | None:
        return self.relations.get(name)

    def key_values(self, values: Mapping[str, Any]) -> dict[str, Any] | None:
        """Project ``values`` onto the natural key; None if any part is missing."""
        out = {k: values.get(k) for k in self.natural_key}
        if any(v is None for v in out.values()):
            return None
        return out


def _guild() -> Relation:
    return Relation("guild", "guild_id", EntityKind.guild)


def _channel() -> Relation:
    return Relation("channel", "channel_id", EntityKind.channel)


def _user(name: str = "user", column: str = "user_id") -> Relation:
    return Relation(name, column, EntityKind.user)


DEFAULT_MODELS: dict[EntityKind, tuple[type, tuple[str, ...], tuple[Relation, ...]]] = {
    EntityKind.guild: (models.Guild, ("discord_id",), ()),
    EntityKind.user: (models.User, ("discord_id",), ()),
    EntityKind.channel: (models.Channel, ("discord_id",), (_guild(),)),
    EntityKind.message: (
        models.Message,
        ("discord_id",),
        (_guild(), _channel(), _user("author", "author_id")),
    ),
    EntityKind.role: (models.Role, ("discord_id",), (_guild(),)),
    EntityKind.member: (models.GuildMember, ("guild_id", "user_id"), (_guild(), _user())),
    EntityKind.emoji: (models.Emoji, ("emoji_key",), (_user(),)),
    EntityKind.sticker: (models.Sticker, ("discord_id",), (_user(),)),
    EntityKind.webhook: (models.Webhook, ("discord_id",), ()),
    EntityKind.invite: (models.Invite, ("code",), (_guild(), _channel())),
    EntityKind.voice_state: (models.VoiceState, ("user_id", "guild_id"), ()),
    EntityKind.typing_indicator: (models.TypingIndicator, ("user_id", "channel_id"), ()),
    EntityKind.reaction: (models.MessageReaction, ("user_id", "message_id", "emoji_key"), ()),
    EntityKind.attachment: (models.MessageAttachment, ("discord_id",), ()),
    EntityKind.interaction: (
        models.Interaction,
        ("discord_id",),
        (_guild(), _channel(), _user()),
    ),
    EntityKind.thread_member: (models.ThreadMember, ("thread_id", "user_id"), ()),
    EntityKind.auto_moderation_rule: (models.AutoModerationRule, ("discord_id",), (_guild(),)),
}


class SchemaRegistry:
    """Kind -> EntitySchema lookup used by the pipeline."""

    def __init__(self, schemas: Iterable[EntitySchema] = ()) -> None:
        self._schemas: dict[EntityKind, EntitySchema] = {s.kind: s for s in schemas}

    def with_schema(self, schema: EntitySchema) -> SchemaRegistry:
        """Return a copy with ``schema`` replacing the entry for its kind."""
        merged = dict(self._schemas)
        merged[schema.kind] = schema
        return SchemaRegistry(merged.values())

    def require(self, kind: EntityKind | str) -> EntitySchema:
        try:
            kind = EntityKind(kind)
        except ValueError:
            raise ConfigurationError(f"unknown entity kind: {kind!r}") from None
        schema = self._schemas.get(kind)
        if schema is None:
            raise ConfigurationError(f"no schema registered for kind {kind.value}")
        return schema

    def kinds(self) -> frozenset[EntityKind]:
        return frozenset(self._schemas)

    def validate_relations(self) -> None:
        """Every relation target must be registered and keyed by ``discord_id``."""
        for schema in self._schemas.values():
            for rel in schema.relations.values():
                target = self.require(rel.target)
                if target.natural_key != ("discord_id",):
                    raise ConfigurationError(
                        f"{schema.kind.value}.{rel.name} targets {rel.target.value}, "
                        "which is not keyed by discord_id"
                    )


def default_registry() -> SchemaRegistry:
    return SchemaRegistry(
        EntitySchema.from_model(kind, model, natural_key=key, relations=rels)
        for kind, (model, key, rels) in DEFAULT_MODELS.items()
    )


def without_fields(schema: EntitySchema, *names: str) -> EntitySchema:
    """Copy of ``schema`` that no longer declares ``names`` (fields or relations)."""
    return replace(
        schema,
        fields=schema.fields - set(names),
        relations=MappingProxyType(
            {k: r for k, r in schema.relations.items() if k not in names and r.column not in names}
        ),
    )
