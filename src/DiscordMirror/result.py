"""Ok/Err values returned by every ingestion operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from DiscordMirror.errors import IngestError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: IngestError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
