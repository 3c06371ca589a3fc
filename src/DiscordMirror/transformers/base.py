"""Shared context handed to every per-kind transformer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from DiscordMirror.capabilities import EntitySchema
from DiscordMirror.identities import CompoundIdentity, PairIdentity
from DiscordMirror.result import Result
from DiscordMirror.staging import StagedMutation


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TransformContext:
    schema: EntitySchema
    # Identity the caller supplied alongside (or instead of) the payload
    identity: Any = None
    email_domain: str = "discord.local"
    clock: Callable[[], datetime] = field(default=_utcnow)

    def new_mutation(self) -> StagedMutation:
        return StagedMutation(self.schema)

    @property
    def container_id(self) -> int | None:
        """Guild (or channel) id implied by a compound identity, if any."""
        if isinstance(self.identity, CompoundIdentity):
            return self.identity.context_id
        if isinstance(self.identity, PairIdentity):
            return self.identity.channel_id
        return None

    @property
    def item_id(self) -> int | None:
        if isinstance(self.identity, CompoundIdentity):
            return self.identity.item_id
        if isinstance(self.identity, PairIdentity):
            return self.identity.message_id
        return None


class Transformer(Protocol):
    def __call__(self, payload: Any, ctx: TransformContext) -> Result[StagedMutation]: ...


