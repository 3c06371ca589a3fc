# pipeline.py

"""Single entry point the event and command layers call to ingest an entity.

    pipeline = IngestionPipeline(fetcher=RemoteFetcher(client))
    res = await pipeline.ingest("user", payload={"id": "42", "username": "ada"})
    if res.ok:
        record = res.value

Source resolution per call: a payload wins, an identity is fetched, and
neither yields MissingSource. All remote I/O and local lookups finish before
the single write transaction opens.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import ValidationError

from DiscordMirror.capabilities import EntitySchema, SchemaRegistry, default_registry
from DiscordMirror.config import Settings
from DiscordMirror.db import session_scope
from DiscordMirror.discord_http import HttpDiscordClient
from DiscordMirror.errors import ConfigurationError, InvalidPayloadShape, MissingSource
from DiscordMirror.identities import coerce_identity
from DiscordMirror.kinds import EntityKind
from DiscordMirror.metrics import inc_counter
from DiscordMirror.payloads import PAYLOAD_TYPES, Payload, describe_validation_error
from DiscordMirror.remote import RemoteFetcher
from DiscordMirror.resolver import RelationshipResolver, StagingSession
from DiscordMirror.result import Err, Ok, Result
from DiscordMirror.staging import StagedMutation
from DiscordMirror.store import SessionFactory, commit_mutation
from DiscordMirror.transformers import TRANSFORMERS, TransformContext

log = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IngestionPipeline:
    def __init__(
        self,
        *,
        fetcher: RemoteFetcher,
        registry: SchemaRegistry | None = None,
        email_domain: str = "discord.local",
        session_factory: SessionFactory = session_scope,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._fetcher = fetcher
        self._http: HttpDiscordClient | None = None
        self._registry = registry if registry is not None else default_registry()
        self._email_domain = email_domain
        self._session_factory = session_factory
        self._clock = clock
        missing = set(TRANSFORMERS) - self._registry.kinds()
        if missing:
            raise ConfigurationError(
                f"no schema registered for kinds: {sorted(k.value for k in missing)}"
            )
        self._registry.validate_relations()
        self._resolver = RelationshipResolver(
            self._registry, self._stage_nested, session_factory=session_factory
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> IngestionPipeline:
        """Build a pipeline over a live HTTP client that it owns and closes."""
        client = HttpDiscordClient(settings)
        pipeline = cls(
            fetcher=RemoteFetcher(client), email_domain=settings.email_domain, **kwargs
        )
        pipeline._http = client
        return pipeline

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.close()
            self._http = None

    async def __aenter__(self) -> IngestionPipeline:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def bind(self, kind: EntityKind | str) -> EntityIngestor:
        """Validate ``kind`` now and return an ingestor fixed to it."""
        schema = self._registry.require(kind)
        return EntityIngestor(self, schema.kind)

    async def ingest(
        self,
        kind: EntityKind | str,
        *,
        payload: Payload | Mapping[str, Any] | None = None,
        identity: Any = None,
    ) -> Result[Any]:
        """Stage then persist one entity plus any auto-created dependencies."""
        schema = self._registry.require(kind)
        res = await self.stage(schema.kind, payload=payload, identity=identity)
        if isinstance(res, Ok):
            res = await commit_mutation(res.value, session_factory=self._session_factory)

        if isinstance(res, Err):
            inc_counter(f"ingest.error.{schema.kind.value}")
            log.warning(
                "ingest.failed",
                kind=schema.kind.value,
                error_type=type(res.error).__name__,
                error=res.error.message,
            )
        else:
            inc_counter(f"ingest.ok.{schema.kind.value}")
            log.info("ingest.ok", kind=schema.kind.value, record_id=getattr(res.value, "id", None))
        return res

    async def stage(
        self,
        kind: EntityKind | str,
        *,
        payload: Payload | Mapping[str, Any] | None = None,
        identity: Any = None,
        session: StagingSession | None = None,
    ) -> Result[StagedMutation]:
        """Resolve the source, transform and resolve relationships; no writes."""
        schema = self._registry.require(kind)
        session = session if session is not None else StagingSession()
        if identity is not None:
            identity = coerce_identity(schema.kind, identity)

        if payload is not None:
            typed = _validate_payload(schema.kind, payload)
            if isinstance(typed, Err):
                return typed
            payload = typed.value
        elif identity is not None:
            fetched = await self._fetcher.fetch(schema.kind, identity)
            if isinstance(fetched, Err):
                return fetched
            payload = fetched.value
        else:
            return Err(MissingSource(schema.kind))

        res = self._transform(schema, payload, identity)
        if isinstance(res, Err):
            return res
        mutation = res.value

        platform_id = mutation.fields.get("discord_id")
        if schema.natural_key == ("discord_id",) and platform_id is not None:
            session.staged.setdefault((schema.kind, platform_id), mutation)

        error = await self._resolver.resolve(mutation, session)
        if error is not None:
            return Err(error)
        return Ok(mutation)

    async def _stage_nested(
        self,
        kind: EntityKind,
        fragment: Payload | None,
        identity: Any,
        session: StagingSession,
    ) -> Result[StagedMutation]:
        return await self.stage(kind, payload=fragment, identity=identity, session=session)

    def _transform(
        self, schema: EntitySchema, payload: Payload, identity: Any
    ) -> Result[StagedMutation]:
        ctx = TransformContext(
            schema=schema,
            identity=identity,
            email_domain=self._email_domain,
            clock=self._clock,
        )
        res = TRANSFORMERS[schema.kind](payload, ctx)
        if isinstance(res, Err):
            return res
        if res.value.natural_key is None:
            missing = [k for k in schema.natural_key if res.value.fields.get(k) is None]
            return Err(
                InvalidPayloadShape(
                    schema.kind,
                    expected=type(payload).__name__,
                    detail=f"missing natural key field(s): {', '.join(missing)}",
                )
            )
        return res


@dataclass(frozen=True)
class EntityIngestor:
    """An ingestion entry point bound to one kind at wiring time."""

    pipeline: IngestionPipeline
    kind: EntityKind

    async def __call__(
        self, *, payload: Payload | Mapping[str, Any] | None = None, identity: Any = None
    ) -> Result[Any]:
        return await self.pipeline.ingest(self.kind, payload=payload, identity=identity)


def _validate_payload(kind: EntityKind, payload: Any) -> Result[Payload]:
    model = PAYLOAD_TYPES[kind]
    if isinstance(payload, model):
        return Ok(payload)
    if isinstance(payload, Payload) or not isinstance(payload, Mapping):
        return Err(
            InvalidPayloadShape(
                kind, expected=model.__name__, detail=f"got {type(payload).__name__}"
            )
        )
    try:
        return Ok(model.model_validate(dict(payload)))
    except ValidationError as exc:
        return Err(
            InvalidPayloadShape(
                kind, expected=model.__name__, detail=describe_validation_error(exc)
            )
        )
