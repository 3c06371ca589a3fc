# remote.py

"""Fetch-by-identity against the remote API.

``RemoteFetcher`` knows which identity shape each kind needs and which kinds
cannot be fetched at all; the actual HTTP calls go through a
``DiscordRESTClient`` so tests can hand in a fake.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol, cast

import structlog
from pydantic import ValidationError

from DiscordMirror.errors import FetchError, FetchFailure, InvalidPayloadShape
from DiscordMirror.identities import (
    IDENTITY_FIELDS,
    IDENTITY_SHAPES,
    CodeIdentity,
    CompoundIdentity,
    PairIdentity,
    SimpleIdentity,
)
from DiscordMirror.kinds import PUSH_ONLY_KINDS, EntityKind
from DiscordMirror.metrics import inc_counter, observe_histogram
from DiscordMirror.payloads import PAYLOAD_TYPES, Payload, describe_validation_error
from DiscordMirror.result import Err, Ok, Result

JSONObject = Mapping[str, Any]

# Statuses meaning the entity is gone or hidden from us; retrying will not help
_NOT_FOUND_STATUSES = frozenset({401, 403, 404})


class RemoteAPIError(Exception):
    """Raised by REST clients; ``status`` is None for transport failures."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class DiscordRESTClient(Protocol):
    async def get_user(self, user_id: int) -> JSONObject: ...

    async def get_guild(self, guild_id: int) -> JSONObject: ...

    async def get_channel(self, channel_id: int) -> JSONObject: ...

    async def get_webhook(self, webhook_id: int) -> JSONObject: ...

    async def get_sticker(self, sticker_id: int) -> JSONObject: ...

    async def list_guild_roles(self, guild_id: int) -> list[JSONObject]: ...

    async def get_guild_member(self, guild_id: int, user_id: int) -> JSONObject: ...

    async def get_channel_message(self, channel_id: int, message_id: int) -> JSONObject: ...

    async def get_invite(self, code: str) -> JSONObject: ...

    async def get_auto_moderation_rule(self, guild_id: int, rule_id: int) -> JSONObject: ...


class RemoteFetcher:
    """Resolves (kind, identity) into a typed payload via the REST client."""

    def __init__(self, client: DiscordRESTClient) -> None:
        self._client = client
        self._log = structlog.get_logger()

    async def fetch(self, kind: EntityKind, identity: Any) -> Result[Payload]:
        if kind in PUSH_ONLY_KINDS:
            return Err(FetchError(kind, identity, FetchFailure.unsupported_kind))
        if kind is EntityKind.emoji:
            # Emoji lookups need the owning guild, which a bare emoji id lacks
            return Err(
                FetchError(
                    kind,
                    identity,
                    FetchFailure.requires_additional_context,
                    fields=IDENTITY_FIELDS[kind],
                )
            )
        shape = IDENTITY_SHAPES.get(kind)
        if shape is None:
            return Err(FetchError(kind, identity, FetchFailure.unsupported_kind))
        if not isinstance(identity, shape):
            return Err(
                FetchError(
                    kind,
                    identity,
                    FetchFailure.requires_additional_context,
                    fields=IDENTITY_FIELDS[kind],
                )
            )

        try:
            raw, extra = await self._call(kind, identity)
        except RemoteAPIError as exc:
            reason = (
                FetchFailure.not_found
                if exc.status in _NOT_FOUND_STATUSES
                else FetchFailure.transient_unavailable
            )
            return Err(FetchError(kind, identity, reason, detail=str(exc)))
        except TimeoutError as exc:
            return Err(
                FetchError(kind, identity, FetchFailure.transient_unavailable, detail=str(exc))
            )
        if raw is None:
            return Err(FetchError(kind, identity, FetchFailure.not_found))

        model = PAYLOAD_TYPES[kind]
        data = dict(raw)
        for key, value in extra.items():
            if data.get(key) is None:
                data[key] = value
        try:
            return Ok(model.model_validate(data))
        except ValidationError as exc:
            return Err(
                InvalidPayloadShape(
                    kind, expected=model.__name__, detail=describe_validation_error(exc)
                )
            )

    async def _call(self, kind: EntityKind, identity: Any) -> tuple[JSONObject | None, dict]:
        """Dispatch to the client; returns the raw object plus context fields to fold in."""
        c = self._client
        if isinstance(identity, SimpleIdentity):
            getters: dict[EntityKind, Callable[[int], Awaitable[JSONObject]]] = {
                EntityKind.user: c.get_user,
                EntityKind.guild: c.get_guild,
                EntityKind.channel: c.get_channel,
                EntityKind.webhook: c.get_webhook,
                EntityKind.sticker: c.get_sticker,
            }
            return await self._timed(kind, getters[kind](identity.id)), {}
        if isinstance(identity, PairIdentity):
            raw = await self._timed(
                kind, c.get_channel_message(identity.channel_id, identity.message_id)
            )
            return raw, {"channel_id": identity.channel_id}
        if isinstance(identity, CodeIdentity):
            return await self._timed(kind, c.get_invite(identity.code)), {}

        identity = cast(CompoundIdentity, identity)
        extra = {"guild_id": identity.context_id}
        if kind is EntityKind.role:
            roles = await self._timed(kind, c.list_guild_roles(identity.context_id))
            found = next((r for r in roles if str(r.get("id")) == str(identity.item_id)), None)
            if found is None:
                self._log.info(
                    "fetch.role.missing", guild_id=identity.context_id, role_id=identity.item_id
                )
            return found, extra
        if kind is EntityKind.member:
            raw = await self._timed(
                kind, c.get_guild_member(identity.context_id, identity.item_id)
            )
            return raw, extra
        raw = await self._timed(
            kind, c.get_auto_moderation_rule(identity.context_id, identity.item_id)
        )
        return raw, extra

    async def _timed(self, kind: EntityKind, call: Awaitable[Any]) -> Any:
        start = time.monotonic()
        inc_counter("fetch.call")
        try:
            result = await call
        except Exception as exc:
            dur_ms = int((time.monotonic() - start) * 1000)
            self._log.warning(
                "fetch.error",
                kind=kind.value,
                duration_ms=dur_ms,
                status=getattr(exc, "status", None),
                error=str(exc),
            )
            inc_counter("fetch.failure")
            raise
        dur_ms = int((time.monotonic() - start) * 1000)
        self._log.info("fetch.call", kind=kind.value, duration_ms=dur_ms)
        observe_histogram("fetch.ms", dur_ms)
        return result

