"""Error values returned by the ingestion pipeline.

Per-call failures are values, not exceptions: every pipeline operation returns
``Ok`` or ``Err(<IngestError>)``. Only wiring mistakes (``ConfigurationError``)
and infrastructure faults (a database that is down) are raised.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from DiscordMirror.kinds import EntityKind


class ConfigurationError(RuntimeError):
    """Raised when the pipeline is wired with an unknown kind or a bad schema."""


class FetchFailure(str, enum.Enum):
    not_found = "not_found"
    requires_additional_context = "requires_additional_context"
    unsupported_kind = "unsupported_kind"
    transient_unavailable = "transient_unavailable"


@dataclass(frozen=True)
class IngestError:
    kind: EntityKind

    @property
    def message(self) -> str:
        return f"{self.kind.value}: ingestion failed"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class MissingSource(IngestError):
    """Neither a payload nor an identity was supplied."""

    @property
    def message(self) -> str:
        return f"{self.kind.value}: no payload or identity provided"


@dataclass(frozen=True)
class InvalidPayloadShape(IngestError):
    expected: str
    detail: str = ""

    @property
    def message(self) -> str:
        msg = f"{self.kind.value}: invalid payload, expected {self.expected}"
        return f"{msg} ({self.detail})" if self.detail else msg


@dataclass(frozen=True)
class FetchError(IngestError):
    identity: Any
    reason: FetchFailure
    fields: tuple[str, ...] = ()
    detail: str = ""

    @property
    def retryable(self) -> bool:
        return self.reason is FetchFailure.transient_unavailable

    @property
    def message(self) -> str:
        msg = f"{self.kind.value} {self.identity!r}: fetch failed ({self.reason.value})"
        if self.fields:
            msg += f", needs {', '.join(self.fields)}"
        if self.detail:
            msg += f": {self.detail}"
        return msg


@dataclass(frozen=True)
class RelationshipResolutionError(IngestError):
    relation: str
    foreign_id: Any
    cause: IngestError

    @property
    def chain(self) -> list[tuple[EntityKind, Any]]:
        """(kind, platform id) of every nested ingestion that failed, outermost first."""
        out: list[tuple[EntityKind, Any]] = []
        err: IngestError = self
        while isinstance(err, RelationshipResolutionError):
            out.append((err.cause.kind, err.foreign_id))
            err = err.cause
        return out

    @property
    def root_cause(self) -> IngestError:
        err: IngestError = self.cause
        while isinstance(err, RelationshipResolutionError):
            err = err.cause
        return err

    @property
    def message(self) -> str:
        return (
            f"{self.kind.value}: could not resolve {self.relation} "
            f"{self.foreign_id!r}: {self.cause.message}"
        )


@dataclass(frozen=True)
class FieldValidationError(IngestError):
    errors: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"{self.kind.value}: {'; '.join(self.errors)}"
