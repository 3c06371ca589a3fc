# resolver.py

"""Relationship resolution for staged mutations.

Each edge a transformer staged is resolved to an existing local record or,
when absent, to a nested staged ingestion of the target (from an inline
fragment if one came with the payload, else by fetching it). Nothing is
written here; auto-created targets become dependencies of the owner and are
committed with it.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from DiscordMirror.capabilities import SchemaRegistry
from DiscordMirror.errors import IngestError, RelationshipResolutionError
from DiscordMirror.identities import SimpleIdentity
from DiscordMirror.kinds import EntityKind
from DiscordMirror.metrics import inc_counter
from DiscordMirror.payloads import Payload
from DiscordMirror.result import Err, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.store import SessionFactory, find_by_natural_key

log = structlog.get_logger()


@dataclass
class StagingSession:
    """Per-ingestion state: targets already staged, keyed by (kind, platform id)."""

    staged: dict[tuple[EntityKind, int], StagedMutation] = field(default_factory=dict)


StageFn = Callable[
    [EntityKind, "Payload | None", Any, StagingSession], Awaitable[Result[StagedMutation]]
]


class RelationshipResolver:
    def __init__(
        self,
        registry: SchemaRegistry,
        stage: StageFn,
        *,
        session_factory: SessionFactory,
    ) -> None:
        self._registry = registry
        self._stage = stage
        self._session_factory = session_factory

    async def resolve(
        self, mutation: StagedMutation, session: StagingSession
    ) -> IngestError | None:
        """Resolve every edge of ``mutation``; the first failure aborts."""
        for edge in mutation.edges:
            target_kind = edge.relation.target
            cache_key = (target_kind, edge.foreign_id)

            pending = session.staged.get(cache_key)
            if pending is not None:
                if pending is not mutation:
                    mutation.dependencies.append(pending)
                continue

            target_schema = self._registry.require(target_kind)
            async with self._session_factory() as s:
                existing = await find_by_natural_key(
                    s, target_schema, {"discord_id": edge.foreign_id}
                )
            if existing is not None:
                continue

            log.info(
                "resolver.autocreate",
                owner=mutation.kind.value,
                relation=edge.relation.name,
                target=target_kind.value,
                foreign_id=edge.foreign_id,
                from_fragment=edge.fragment is not None,
            )
            res = await self._stage(
                target_kind,
                edge.fragment,
                SimpleIdentity(edge.foreign_id),
                session,
            )
            if isinstance(res, Err):
                return RelationshipResolutionError(
                    mutation.kind,
                    relation=edge.relation.name,
                    foreign_id=edge.foreign_id,
                    cause=res.error,
                )
            inc_counter("resolver.autocreate")
            mutation.dependencies.append(res.value)
        return None
